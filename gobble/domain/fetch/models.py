"""
Fetch data models
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Dict, Any, BinaryIO

from ...core.constants import CHUNK_SIZE, UNKNOWN_LENGTH
from .destination import Destination


@dataclass
class FetchConfig:
    """Fetch configuration, built once at startup"""
    url: str = ""
    output_name: Optional[str] = None
    to_stdout: bool = False

    # Transfer control
    chunk_size: int = CHUNK_SIZE
    exclusive: bool = False

    # HTTP client
    user_agent: Optional[str] = None
    timeout: Optional[float] = None  # None waits forever

    # Display
    quiet: bool = False

    @property
    def show_progress(self) -> bool:
        """Progress is never rendered when the body goes to stdout"""
        return not (self.to_stdout or self.quiet)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "url": self.url,
            "output_name": self.output_name,
            "to_stdout": self.to_stdout,
            "chunk_size": self.chunk_size,
            "exclusive": self.exclusive,
            "user_agent": self.user_agent,
            "timeout": self.timeout,
            "quiet": self.quiet,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FetchConfig":
        """Create from dictionary, ignoring unknown keys"""
        valid_fields = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        return cls(**valid_fields)


@dataclass(frozen=True)
class OutputTarget:
    """Where the body goes; decided once before the transfer starts"""
    path: Optional[Path] = None
    to_stdout: bool = False
    exclusive: bool = False

    def __str__(self) -> str:
        if self.to_stdout:
            return "<stdout>"
        return str(self.path)


@dataclass
class TransferSession:
    """State of a single body copy, owned by the transfer engine"""
    source: BinaryIO
    destination: Destination
    total: int = UNKNOWN_LENGTH
    transferred: int = 0


@dataclass
class TransferResult:
    """Transfer result"""
    bytes_transferred: int
    total_bytes: int
    duration: float
    target: Optional[OutputTarget] = field(default=None, compare=False)

    @property
    def average_speed(self) -> float:
        """Average speed in bytes/s"""
        if self.duration <= 0:
            return 0.0
        return self.bytes_transferred / self.duration
