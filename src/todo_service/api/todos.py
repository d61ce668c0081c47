from fastapi import APIRouter, Depends, Response, status

from todo_service.repositories import TodoRepository
from todo_service.schemas.todo import Todo, CreateTodo, UpdateTodo
from .dependencies import EntityId, get_todo_repository


router = APIRouter(prefix="/todos", tags=["todos"])


@router.post("", response_model=Todo, status_code=status.HTTP_201_CREATED)
async def create_todo(payload: CreateTodo, repo: TodoRepository = Depends(get_todo_repository)) -> Todo:
    return await repo.create(payload)


@router.get("", response_model=list[Todo])
async def list_todos(repo: TodoRepository = Depends(get_todo_repository)) -> list[Todo]:
    return await repo.all()


@router.get("/{todo_id}", response_model=Todo)
async def get_todo(todo_id: EntityId, repo: TodoRepository = Depends(get_todo_repository)) -> Todo:
    return await repo.find(todo_id)


@router.patch("/{todo_id}", response_model=Todo)
async def update_todo(
    todo_id: EntityId,
    payload: UpdateTodo,
    repo: TodoRepository = Depends(get_todo_repository),
) -> Todo:
    return await repo.update(todo_id, payload)


@router.delete("/{todo_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_todo(todo_id: EntityId, repo: TodoRepository = Depends(get_todo_repository)) -> Response:
    await repo.delete(todo_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
