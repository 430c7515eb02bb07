"""
Single-line progress reporting
"""
from typing import Optional

from rich.console import Console

from ...core.constants import (
    PROGRESS_BAR_WIDTH,
    PROGRESS_BAR_FIELD,
    UNKNOWN_LENGTH_MARKER,
)
from .models import TransferResult


def format_size(size_bytes: float) -> str:
    """
    Format bytes to human-readable size string.

    Returns:
        Formatted string like "100 B", "1.5 MB", etc.
    """
    if size_bytes < 1024:
        return f"{int(size_bytes)} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.1f} KB"
    elif size_bytes < 1024 * 1024 * 1024:
        return f"{size_bytes / (1024 * 1024):.1f} MB"
    else:
        return f"{size_bytes / (1024 * 1024 * 1024):.1f} GB"


def percentage(transferred: int, total: int) -> Optional[float]:
    """
    Percentage complete, or None when the total is unknown.

    Args:
        transferred: Bytes transferred so far
        total: Declared total, negative when unknown

    Returns:
        Value in [0, 100] or None
    """
    if total <= 0:
        # An empty body is complete as soon as it is seen
        return 100.0 if total == 0 else None
    return min(max(transferred / total * 100, 0.0), 100.0)


def progress_bar(percent: float) -> str:
    """Textual bar whose length grows by one segment per 4 percent"""
    filled = min(int(percent / 4), PROGRESS_BAR_WIDTH)
    return "-" * (filled + 1) + ">"


def status_string(transferred: int, total: int) -> str:
    """
    Render the status line for the given counters.

    Args:
        transferred: Bytes transferred so far
        total: Declared total, -1 when unknown

    Returns:
        Status line without a line terminator
    """
    percent = percentage(transferred, total)
    if percent is None:
        return f"progress: {transferred:10d} Bytes    {UNKNOWN_LENGTH_MARKER}"
    bar = progress_bar(percent)
    return f"progress: {transferred:10d} Bytes    {bar:<{PROGRESS_BAR_FIELD}}  {percent:2.1f}%"


class ProgressReporter:
    """Renders transfer progress on one carriage-return-overwritten line"""

    def __init__(self, console: Console, enabled: bool = True):
        self.console = console
        self.enabled = enabled
        self.updates = 0

    def update(self, transferred: int, total: int) -> None:
        """Overwrite the current status line"""
        if not self.enabled:
            return
        self.updates += 1
        # Written raw: rich strips carriage returns from printed text
        stream = self.console.file
        stream.write(status_string(transferred, total) + "\r")
        stream.flush()

    def finish(self, result: TransferResult) -> None:
        """Terminate the status line with the final summary"""
        if not self.enabled:
            return
        line = status_string(result.bytes_transferred, result.total_bytes)
        self._print(f"Finished: {line}")
        self._print(
            f"{format_size(result.bytes_transferred)} written to {result.target} "
            f"in {result.duration:.2f}s ({format_size(result.average_speed)}/s)"
        )

    def _print(self, text: str) -> None:
        self.console.print(
            text,
            markup=False,
            highlight=False,
            soft_wrap=True,
        )
