"""Root logger setup for the Rentbook server.

Records go to stdout and to ``settings.log_file``, at ``settings.log_level``.
"""

import logging
import sys
from pathlib import Path

from rentbook.config import Settings, get_settings

LOG_FORMAT = "[%(asctime)s] %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

logger = logging.getLogger(__name__)


def resolve_level(level_name: str) -> int:
    """Numeric level for a name such as "debug" or "WARNING"; unknown names give INFO."""
    level = logging.getLevelName(level_name.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def setup_server_logging(settings: Settings | None = None) -> int:
    """Replace the root logger's handlers with stdout and file handlers.

    Args:
        settings: Source of log_level and log_file (default: get_settings())

    Returns:
        The level that was applied
    """
    settings = settings or get_settings()
    level = resolve_level(settings.log_level)

    log_path = Path(settings.log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    for handler in (logging.StreamHandler(sys.stdout), logging.FileHandler(log_path)):
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    logger.debug("Logging to %s at %s", log_path, logging.getLevelName(level))
    return level


__all__ = ["resolve_level", "setup_server_logging"]
