"""Run the REMI backend: ``python -m app``."""

import logging
import sys

import uvicorn
from pydantic import ValidationError

from app.core.config import get_settings
from app.core.logging import configure_logging

logger = logging.getLogger("app")


def main() -> None:
    try:
        settings = get_settings()
    except ValidationError as e:
        configure_logging()
        missing = ", ".join(str(err["loc"][0]).upper() for err in e.errors())
        logger.error("Missing or invalid configuration: %s", missing)
        sys.exit(1)

    configure_logging(settings.log_level)
    uvicorn.run("app.main:app", host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
