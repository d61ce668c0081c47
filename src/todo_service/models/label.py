from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from todo_service.database.base import Base


class LabelRecord(Base):
    """
    SQLAlchemy model for a label.

    `name` carries a UNIQUE constraint so concurrent creates that both pass the
    application-level probe are still rejected by the store.
    """
    __tablename__ = "labels"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Must be unique and non-null
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)

    # Owning user. The users table lives outside this service, hence no ForeignKey.
    user_id: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)

    def __repr__(self) -> str:
        return f"<LabelRecord(id={self.id!r}, name={self.name!r})>"
