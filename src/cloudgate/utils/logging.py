"""Logging configuration.

The terminal belongs to the interactive interface, so log records are
written to a file instead of a stream handler.
"""

import logging
from pathlib import Path
from typing import Final

from cloudgate.config.settings import Settings

LOG_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Chatty third-party loggers that drown out application records at DEBUG.
_NOISY_LOGGERS: Final[tuple[str, ...]] = ("botocore", "boto3", "urllib3", "asyncio")


def setup_logging(settings: Settings, log_file: Path | None = None) -> Path:
    """Configure the root logger to write to the configured log file.

    Existing root handlers are replaced so that nothing is printed to the
    terminal while the interface owns it.

    Args:
        settings: Application settings providing ``log_level`` and ``log_file``.
        log_file: Optional override of ``settings.log_file``. Defaults to None.

    Returns:
        The path of the log file in use.

    Example:
        >>> path = setup_logging(get_settings())
        >>> logging.getLogger("cloudgate").info("started")
    """
    path = (log_file or settings.log_file).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
        existing.close()
    root.addHandler(handler)
    root.setLevel(settings.log_level)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(logging.WARNING, root.level))

    return path
