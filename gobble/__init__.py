"""
gobble - retrieve a single resource over HTTP, a la wget

Provides:
- Target resolution (URL normalization, output file naming, collision check)
- Chunked streaming copy with short-write detection
- Single-line progress reporting
"""

__version__ = "0.1"

from .core.exceptions import (
    GobbleError,
    UsageError,
    ConfigError,
    TransportError,
    DestinationExistsError,
    TransferError,
    StreamError,
    ShortWriteError,
    DestinationWriteError,
)
from .domain.fetch import (
    FetchConfig,
    OutputTarget,
    TransferResult,
    FetchService,
    TransferEngine,
    ProgressReporter,
    normalize_url,
    derive_filename,
    resolve_target,
)

__all__ = [
    "__version__",
    # Errors
    "GobbleError",
    "UsageError",
    "ConfigError",
    "TransportError",
    "DestinationExistsError",
    "TransferError",
    "StreamError",
    "ShortWriteError",
    "DestinationWriteError",
    # Fetch
    "FetchConfig",
    "OutputTarget",
    "TransferResult",
    "FetchService",
    "TransferEngine",
    "ProgressReporter",
    "normalize_url",
    "derive_filename",
    "resolve_target",
]
