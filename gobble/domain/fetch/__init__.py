"""
Fetch domain module
"""
from .models import (
    FetchConfig,
    OutputTarget,
    TransferSession,
    TransferResult,
)
from .destination import Destination, FileDestination, StreamDestination
from .resolver import normalize_url, derive_filename, resolve_target, open_destination
from .engine import TransferEngine, read_full
from .progress import ProgressReporter, status_string, percentage
from .service import FetchService, declared_length

__all__ = [
    "FetchConfig",
    "OutputTarget",
    "TransferSession",
    "TransferResult",
    "Destination",
    "FileDestination",
    "StreamDestination",
    "normalize_url",
    "derive_filename",
    "resolve_target",
    "open_destination",
    "TransferEngine",
    "read_full",
    "ProgressReporter",
    "status_string",
    "percentage",
    "FetchService",
    "declared_length",
]
