from fastapi import APIRouter, Depends, Response, status

from todo_service.repositories import LabelRepository
from todo_service.schemas.label import Label, CreateLabel, UpdateLabel
from .dependencies import EntityId, get_label_repository


router = APIRouter(prefix="/labels", tags=["labels"])


@router.post("", response_model=Label, status_code=status.HTTP_201_CREATED)
async def create_label(payload: CreateLabel, repo: LabelRepository = Depends(get_label_repository)) -> Label:
    return await repo.create(payload)


@router.get("", response_model=list[Label])
async def list_labels(repo: LabelRepository = Depends(get_label_repository)) -> list[Label]:
    return await repo.all()


# Declared before "/{label_id}" so "user" is never parsed as an id.
@router.get("/user/{user_id}", response_model=list[Label])
async def list_labels_by_user(user_id: EntityId, repo: LabelRepository = Depends(get_label_repository)) -> list[Label]:
    return await repo.find_by_user(user_id)


@router.get("/{label_id}", response_model=Label)
async def get_label(label_id: EntityId, repo: LabelRepository = Depends(get_label_repository)) -> Label:
    return await repo.find(label_id)


@router.patch("/{label_id}", response_model=Label)
async def update_label(
    label_id: EntityId,
    payload: UpdateLabel,
    repo: LabelRepository = Depends(get_label_repository),
) -> Label:
    return await repo.update(label_id, payload)


@router.delete("/{label_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_label(label_id: EntityId, repo: LabelRepository = Depends(get_label_repository)) -> Response:
    await repo.delete(label_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
