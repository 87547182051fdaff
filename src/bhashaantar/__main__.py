import uvicorn

from .logging_utils import setup_logging_from_settings
from .settings import settings


def main() -> None:
    setup_logging_from_settings(settings.server)
    uvicorn.run(
        "bhashaantar.app:app",
        host=settings.server.host,
        port=settings.server.port,
        log_level=settings.server.log_level.lower(),
        reload=False,
    )


if __name__ == "__main__":
    main()
