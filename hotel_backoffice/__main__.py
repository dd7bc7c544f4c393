"""Run the API with uvicorn: ``python -m hotel_backoffice``."""

import uvicorn

from hotel_backoffice.config.settings import settings


def main() -> None:
    uvicorn.run(
        "hotel_backoffice.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.is_development(),
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
