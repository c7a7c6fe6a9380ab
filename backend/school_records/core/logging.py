"""Logging setup for the application."""
import logging

from school_records.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Configure root logging once at startup."""
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format=LOG_FORMAT,
    )
    # reportlab and aiohttp are chatty at DEBUG
    logging.getLogger("reportlab").setLevel(logging.WARNING)
    logging.getLogger("aiohttp").setLevel(logging.WARNING)
