"""Logger configuration for planguard.

Validators log with keyword context (week_number, violation_count, ...),
which loguru stores in record["extra"]. The console sink shows the message
only; the file sink keeps the context, as text or as JSON lines.
"""

import sys
from pathlib import Path

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)


def _format_file_record(record: dict) -> str:
    """Text file format with the record's context appended as key=value pairs."""
    line = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"
    if record["extra"]:
        context = " ".join(f"{key}={value!r}" for key, value in sorted(record["extra"].items()))
        # Escape braces so loguru does not treat context values as fields
        line += " | " + context.replace("{", "{{").replace("}", "}}")
    return line + "\n{exception}"


def setup_logger(
    level: str = "INFO",
    log_file: str | None = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
    serialize: bool = False,
) -> None:
    """Replace loguru's sinks with a console sink and an optional file sink.

    Entry points call this once; library modules only emit records.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file. If None, only console logging.
        rotation: Log rotation size (e.g., "10 MB", "1 day")
        retention: Log retention period (e.g., "7 days", "1 month")
        serialize: Write the file sink as JSON lines (one record per line)
    """
    logger.remove()
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level, colorize=True)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        logger.add(
            log_path,
            format="{message}" if serialize else _format_file_record,
            serialize=serialize,
            level=level,
            rotation=rotation,
            retention=retention,
            encoding="utf-8",
        )

    logger.debug("Logger initialized", level=level, log_file=log_file, serialize=serialize)
