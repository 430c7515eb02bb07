"""
Streaming copy engine
"""
from typing import Optional, Callable, BinaryIO

import requests
import urllib3

from ...core.constants import CHUNK_SIZE, UNKNOWN_LENGTH
from ...core.exceptions import (
    DestinationWriteError,
    ShortWriteError,
    StreamError,
)
from ...core.logging import get_logger
from .destination import Destination
from .models import TransferSession

logger = get_logger(__name__)

# Errors a response body may raise mid-read
READ_ERRORS = (
    OSError,
    requests.exceptions.RequestException,
    urllib3.exceptions.HTTPError,
)


def read_full(source: BinaryIO, buffer: memoryview) -> int:
    """
    Fill buffer from source until it is full or the stream ends.

    Args:
        source: Readable byte stream
        buffer: Writable view to fill

    Returns:
        Number of bytes placed in buffer; less than its length only at end of stream

    Raises:
        StreamError: If the read fails for any reason other than end of stream
    """
    size = len(buffer)
    filled = 0
    while filled < size:
        try:
            data = source.read(size - filled)
        except READ_ERRORS as e:
            raise StreamError(f"read failed after {filled} bytes of chunk: {e}") from e
        if not data:
            break
        n = len(data)
        buffer[filled:filled + n] = data
        filled += n
    return filled


class TransferEngine:
    """Copies a byte stream into a destination in fixed-size chunks"""

    def __init__(
        self,
        chunk_size: int = CHUNK_SIZE,
        progress_callback: Optional[Callable[[int, int], None]] = None,
    ):
        """
        Initialize transfer engine.

        Args:
            chunk_size: Bytes per read/write iteration
            progress_callback: Called with (transferred_bytes, total_bytes) after each full chunk
        """
        if chunk_size <= 0:
            raise ValueError(f"chunk size must be positive, got {chunk_size}")
        self.chunk_size = chunk_size
        self.progress_callback = progress_callback

    def copy(
        self,
        source: BinaryIO,
        destination: Destination,
        total: int = UNKNOWN_LENGTH,
    ) -> int:
        """
        Stream all of source into destination.

        A partial chunk marks the end of the stream: its bytes are written
        and the loop stops. Bytes already written stay in place when an
        error aborts the copy.

        Args:
            source: Readable byte stream (response body)
            destination: Destination sink
            total: Declared total size, -1 when unknown

        Returns:
            Total bytes written

        Raises:
            StreamError: Read failure
            ShortWriteError: Destination accepted fewer bytes than were read
            DestinationWriteError: Destination write raised
        """
        session = TransferSession(source=source, destination=destination, total=total)
        buffer = bytearray(self.chunk_size)
        view = memoryview(buffer)

        while True:
            n = read_full(session.source, view)
            if n:
                self._write_chunk(session, view[:n])

            if n < self.chunk_size:
                break

            self._report(session)

        logger.debug(f"Copied {session.transferred} bytes to {destination.name}")
        return session.transferred

    def _write_chunk(self, session: TransferSession, chunk: memoryview) -> None:
        """Write one chunk and check that all of it was accepted"""
        try:
            written = session.destination.write(chunk)
        except OSError as e:
            raise DestinationWriteError(
                f"write to {session.destination.name} failed: {e}"
            ) from e

        if written != len(chunk):
            raise ShortWriteError(len(chunk), written)

        session.transferred += written

    def _report(self, session: TransferSession) -> None:
        if self.progress_callback:
            self.progress_callback(session.transferred, session.total)
