import logging

import uvicorn

from custom_handler.config import get_settings
from custom_handler.main import app

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()
    logger.info("Python custom handler listening on port: %s", settings.FUNCTIONS_CUSTOMHANDLER_PORT)
    uvicorn.run(
        app,
        host=settings.HOST,
        port=settings.FUNCTIONS_CUSTOMHANDLER_PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
