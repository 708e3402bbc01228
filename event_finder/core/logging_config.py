import logging
from typing import Optional

from event_finder.core import config

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """Install the log format once and set the root level, LOG_LEVEL by default."""
    logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger().setLevel((level or config.LOG_LEVEL).upper())
