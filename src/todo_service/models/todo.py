from sqlalchemy import Boolean, Integer, String, false
from sqlalchemy.orm import Mapped, mapped_column

from todo_service.database.base import Base


class TodoRecord(Base):
    """
    SQLAlchemy model for a todo item.

    Label associations sent with a create command are not stored in this table.
    """
    __tablename__ = "todos"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    text: Mapped[str] = mapped_column(String(100), nullable=False)

    completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default=false())

    def __repr__(self) -> str:
        return f"<TodoRecord(id={self.id!r}, text={self.text!r}, completed={self.completed!r})>"
