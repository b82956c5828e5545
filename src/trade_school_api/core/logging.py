"""Loguru logging configuration for the API server and the CLI.

Every record goes to stderr in a readable one-line format.  Records bound
with ``json_output=True`` (``logger.bind(json_output=True)``) are also
emitted as serialized JSON for log shippers.  When ``log_dir`` is set, the
readable stream is mirrored to a daily-rotated file.
"""

import sys
from pathlib import Path

from loguru import logger

LOG_FILE_NAME = "trade-school-api.log"

_LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<8} | {name}:{function}:{line} | {message}"


def _wants_json(record: dict) -> bool:
    return bool(record["extra"].get("json_output", False))


def setup_logging(log_level: str = "INFO", log_dir: str | None = None) -> None:
    """(Re)configure the Loguru sinks; safe to call more than once.

    Args:
        log_level: Minimum level name, case-insensitive.
        log_dir: Directory for ``trade-school-api.log``; created if needed.

    Raises:
        ValueError: If ``log_level`` is not a known Loguru level.
    """
    level = log_level.strip().upper()
    logger.level(level)  # raises ValueError for unknown names

    logger.remove()
    logger.add(sys.stderr, level=level, format=_LOG_FORMAT)
    logger.add(sys.stderr, level=level, serialize=True, filter=_wants_json)

    if not log_dir:
        return
    directory = Path(log_dir)
    directory.mkdir(parents=True, exist_ok=True)
    logger.add(
        directory / LOG_FILE_NAME,
        level=level,
        format=_LOG_FORMAT,
        rotation="00:00",
        retention="7 days",
    )
    logger.debug(f"File logging enabled at {directory / LOG_FILE_NAME}")
