import logging
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Libraries that log every query or multipart chunk at INFO
QUIET_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "multipart", "python_multipart")


def _resolve_level(level: int | str | None) -> int:
    if level is None:
        from skillconnect.config import settings

        level = settings.log_level
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.INFO)
    return level


def setup_logging(level: int | str | None = None) -> None:
    """Send all records to stdout in one format; safe to call more than once."""
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(_resolve_level(level))
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
