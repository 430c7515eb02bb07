"""
Destination sinks for fetched content

Two variants share one write capability: a file created on disk and an
already-open binary stream (standard output).
"""
import sys
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, BinaryIO

from ...core.logging import get_logger

logger = get_logger(__name__)


class Destination(ABC):
    """Writable byte sink"""

    @abstractmethod
    def write(self, data) -> int:
        """Write data and return the number of bytes actually accepted"""

    @abstractmethod
    def close(self) -> None:
        """Release the sink"""

    @property
    @abstractmethod
    def name(self) -> str:
        """Display name"""

    def __enter__(self) -> "Destination":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


class FileDestination(Destination):
    """File-backed destination"""

    def __init__(self, path: Path, exclusive: bool = False):
        """
        Create the destination file.

        The file is opened unbuffered so that the count returned by
        ``write`` is what the OS accepted.

        Args:
            path: File to create
            exclusive: Fail if the file appears between resolution and creation

        Raises:
            FileExistsError: exclusive creation lost a race
            OSError: file could not be created
        """
        self.path = path
        mode = "xb" if exclusive else "wb"
        self._file = open(path, mode, buffering=0)
        logger.debug(f"Opened {path} (mode {mode})")

    def write(self, data) -> int:
        written = self._file.write(data)
        # FileIO.write returns None when a non-blocking write would block
        return written or 0

    def close(self) -> None:
        if not self._file.closed:
            self._file.close()

    @property
    def name(self) -> str:
        return str(self.path)


class StreamDestination(Destination):
    """Stream-backed destination; the stream is flushed but never closed"""

    def __init__(self, stream: Optional[BinaryIO] = None):
        self._stream = stream if stream is not None else sys.stdout.buffer

    def write(self, data) -> int:
        written = self._stream.write(data)
        return len(data) if written is None else written

    def close(self) -> None:
        self._stream.flush()

    @property
    def name(self) -> str:
        return "<stdout>"
