import logging
import os
from typing import Optional

LOG_LEVEL_ENV = "HEARTH_LOG_LEVEL"
LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s: %(message)s"


def resolve_level(default_level: int = logging.INFO, name: Optional[str] = None) -> int:
    """Level named by `name` (or HEARTH_LOG_LEVEL); unknown names keep the default."""
    name = os.getenv(LOG_LEVEL_ENV) if name is None else name
    if not name:
        return default_level

    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else default_level


def configure_logging(default_level: int = logging.INFO, stream=None) -> logging.Logger:
    """
    Attach one stream handler to the `hearth` logger and set its level.
    Calling it again only updates the level.
    """
    logger = logging.getLogger("hearth")
    logger.setLevel(resolve_level(default_level))

    if not any(getattr(handler, "_hearth", False) for handler in logger.handlers):
        handler = logging.StreamHandler(stream)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._hearth = True
        logger.addHandler(handler)

    return logger
