"""Logging setup shared by the API process and Celery workers."""

import logging

from wifisim.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = None) -> None:
    """Configure root logging once per process."""
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format=LOG_FORMAT,
    )
