import uvicorn

from .config import settings
from .logging_config import setup_logging


def main():
    setup_logging()
    uvicorn.run(
        "contactscout.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
