from .todos import router as todos_router
from .labels import router as labels_router
from .error_handlers import register_exception_handlers

__all__ = ["todos_router", "labels_router", "register_exception_handlers"]
