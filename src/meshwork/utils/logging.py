"""
Logging configuration for Meshwork.

Console output goes through Rich unless plain output is requested; an optional file handler
writes plain, parseable lines.
"""

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any

from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from meshwork.config.loader import Config


class FileFormatter(logging.Formatter):
    """Formatter for file logs - clean and parseable."""

    def __init__(self) -> None:
        super().__init__(fmt="%(asctime)s [%(levelname)-8s] %(name)s: %(message)s", datefmt="%Y-%m-%d %H:%M:%S")


LEVEL_MAP = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def _parse_level(level: str | int) -> int:
    """Parse logging level from string or int, defaulting to INFO."""
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        return LEVEL_MAP.get(level.upper(), logging.INFO)
    return logging.INFO


def setup_logging(
    level: str | int = logging.INFO,
    log_file: str | Path | None = None,
    file_mode: str = "a",
    console: Console | None = None,
    console_enabled: bool = True,
    use_rich: bool = True,
) -> logging.Logger:
    """
    Setup logging configuration for Meshwork.

    Args:
        level: Logging level as string (DEBUG, INFO, etc.) or int (default: INFO)
        log_file: Optional file path to write logs to (default: None, console only)
        file_mode: 'a' to append to log_file, 'w' to overwrite
        console: Optional Rich Console for the console handler (default: stderr)
        console_enabled: Whether to log to the console at all
        use_rich: Use RichHandler instead of a plain stream handler

    Returns:
        The "meshwork" logger
    """
    logger = logging.getLogger("meshwork")

    # Replace handlers installed by an earlier call
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    level_int = _parse_level(level)
    logger.setLevel(level_int)

    if console_enabled:
        handler: logging.Handler
        if use_rich:
            handler = RichHandler(
                console=console or Console(stderr=True),
                level=level_int,
                show_path=False,
                markup=False,
                rich_tracebacks=True,
                log_time_format="[%X]",
            )
        else:
            handler = logging.StreamHandler(sys.stderr)
            handler.setFormatter(logging.Formatter("%(levelname)s: %(asctime)s - %(message)s", "%Y-%m-%d %H:%M:%S"))
            handler.setLevel(level_int)
        logger.addHandler(handler)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode=file_mode)
        # File captures everything the logger lets through
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(FileFormatter())
        logger.addHandler(file_handler)

    return logger


def setup_logging_from_config(config: "Config | dict[str, Any]", project_dir: Path | None = None) -> logging.Logger:
    """
    Setup logging from the ``logging`` section of the tool configuration.

    Recognised keys: level, file, file_mode, console_enabled, console_type (rich/plain).
    Relative log file paths are resolved against project_dir.
    """
    logging_config = config.get("logging") or {}

    log_file = logging_config.get("file")
    if log_file and project_dir:
        log_file = Path(log_file)
        if not log_file.is_absolute():
            log_file = project_dir / log_file

    return setup_logging(
        level=logging_config.get("level", logging.INFO),
        log_file=log_file,
        file_mode=logging_config.get("file_mode", "a"),
        console_enabled=logging_config.get("console_enabled", True),
        use_rich=logging_config.get("console_type", "rich") == "rich",
    )


def get_logger(name: str = "meshwork") -> logging.Logger:
    """
    Get a logger in the meshwork namespace.

    Loggers carry no handlers of their own and propagate to "meshwork", so
    library use stays silent until setup_logging() is called.
    """
    logger = logging.getLogger(name)
    logger.propagate = True
    return logger
