"""
Unified exception definitions
"""


class GobbleError(Exception):
    """Base exception class"""
    pass


class UsageError(GobbleError):
    """Missing or invalid command line usage"""
    pass


class ConfigError(GobbleError):
    """Configuration error"""
    pass


class TransportError(GobbleError):
    """DNS, connection, TLS or HTTP error"""
    pass


class DestinationExistsError(GobbleError):
    """Resolved output file already exists"""

    def __init__(self, path):
        super().__init__(f"destination already exists: {path}")
        self.path = path


class TransferError(GobbleError):
    """Transfer error"""
    pass


class StreamError(TransferError):
    """Read error other than a clean end of stream"""
    pass


class ShortWriteError(TransferError):
    """Bytes written differ from bytes read for a chunk"""

    def __init__(self, read: int, written: int):
        super().__init__(f"{read} bytes read but {written} bytes written")
        self.read = read
        self.written = written


class DestinationWriteError(TransferError):
    """Destination write failure"""
    pass
