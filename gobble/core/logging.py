"""
Rich-based logging system
"""
import logging
from typing import Optional
from pathlib import Path

from rich.logging import RichHandler
from rich.console import Console
from rich.traceback import install as install_traceback


# Global console instances; both follow sys.stdout / sys.stderr at write time
_stdout_console = Console()
_stderr_console = Console(stderr=True)

install_traceback(show_locals=True, width=120)

FILE_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# HTTP stack loggers that only matter when debugging a fetch
_CHATTY_LOGGERS = ("urllib3", "requests")


def setup_logging(level: str = "INFO", log_file: Optional[Path] = None) -> None:
    """
    Route log records to stderr, and to log_file when given.

    Nothing is ever logged to stdout, which may carry the fetched body.

    Args:
        level: Logging level name; unknown names fall back to INFO
        log_file: Optional log file, created with its parent directory
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()
    root_logger.addHandler(RichHandler(
        console=_stderr_console,
        level=log_level,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    ))

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(log_level)
        file_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT))
        root_logger.addHandler(file_handler)

    # Connection-pool chatter is shown only at DEBUG
    http_level = logging.DEBUG if log_level <= logging.DEBUG else logging.WARNING
    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(http_level)


def get_logger(name: str) -> logging.Logger:
    """Get logger instance (usually for __name__)"""
    return logging.getLogger(name)


def get_stdout_console() -> Console:
    """Get stdout console for user-facing output"""
    return _stdout_console


def get_stderr_console() -> Console:
    """Get stderr console for errors and logs"""
    return _stderr_console
