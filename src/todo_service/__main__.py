import uvicorn

from todo_service.config.settings import get_settings
from todo_service.core.logging import setup_logging
from todo_service.main import build_app


def main() -> None:
    settings = get_settings()
    setup_logging(settings)
    # log_config=None keeps uvicorn from replacing the dictConfig applied above.
    uvicorn.run(build_app(settings), host=settings.HOST, port=settings.PORT, log_config=None)


if __name__ == "__main__":
    main()
