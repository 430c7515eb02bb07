"""
Fetch service - main business logic
"""
import time
from typing import Optional, Callable

import requests

from ... import __version__
from ...core.constants import UNKNOWN_LENGTH
from ...core.exceptions import TransportError
from ...core.logging import get_logger
from .engine import TransferEngine
from .models import FetchConfig, TransferResult
from .progress import ProgressReporter
from .resolver import normalize_url, resolve_target, open_destination

logger = get_logger(__name__)


def declared_length(response: requests.Response) -> int:
    """Content-Length of a response, -1 when absent or malformed"""
    value = response.headers.get("Content-Length")
    if value is None:
        return UNKNOWN_LENGTH
    try:
        length = int(value)
    except ValueError:
        logger.warning(f"Ignoring malformed Content-Length: {value!r}")
        return UNKNOWN_LENGTH
    return length if length >= 0 else UNKNOWN_LENGTH


class FetchService:
    """
    Fetch service - pure business logic.

    Retrieves one resource over HTTP and streams it to a file or stdout.
    Every failure is raised to the caller; nothing here exits the process.
    """

    def __init__(self, session: Optional[requests.Session] = None):
        """
        Initialize fetch service.

        Args:
            session: HTTP session (optional, creates default if None)
        """
        self.session = session or requests.Session()

    def open(self, url: str, config: FetchConfig) -> requests.Response:
        """
        Issue the GET and wait for the response headers.

        Args:
            url: Normalized URL
            config: Fetch configuration

        Returns:
            Streaming response; the caller must close it

        Raises:
            TransportError: Connection, TLS, DNS or HTTP status failure
        """
        # Identity encoding keeps response.raw byte-identical to the resource
        headers = {
            "User-Agent": config.user_agent or f"gobble/{__version__}",
            "Accept-Encoding": "identity",
        }
        try:
            response = self.session.get(
                url,
                headers=headers,
                stream=True,
                timeout=config.timeout,
            )
        except requests.exceptions.RequestException as e:
            raise TransportError(f"GET {url} failed: {e}") from e

        try:
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            response.close()
            raise TransportError(str(e)) from e

        logger.debug(f"GET {url} -> {response.status_code}")
        return response

    def fetch(
        self,
        config: FetchConfig,
        on_connect: Optional[Callable[[str, requests.Response], None]] = None,
        reporter: Optional[ProgressReporter] = None,
    ) -> TransferResult:
        """
        Fetch config.url into the resolved target.

        The target is resolved before any network traffic so that an
        existing output file fails the run without a request.

        Args:
            config: Fetch configuration
            on_connect: Called with (url, response) once headers arrive
            reporter: Progress reporter (optional)

        Returns:
            TransferResult

        Raises:
            GobbleError: Any resolution, transport or transfer failure
        """
        url = normalize_url(config.url)
        target = resolve_target(config, url)

        with self.open(url, config) as response:
            if on_connect:
                on_connect(url, response)

            total = declared_length(response)
            engine = TransferEngine(
                chunk_size=config.chunk_size,
                progress_callback=reporter.update if reporter else None,
            )

            started = time.monotonic()
            with open_destination(target) as destination:
                transferred = engine.copy(response.raw, destination, total)
            duration = time.monotonic() - started

        result = TransferResult(
            bytes_transferred=transferred,
            total_bytes=total,
            duration=duration,
            target=target,
        )
        logger.debug(f"Fetched {transferred} bytes from {url} to {target}")

        if reporter:
            reporter.finish(result)
        return result

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "FetchService":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
