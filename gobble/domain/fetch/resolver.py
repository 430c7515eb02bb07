"""
Target resolution: URL normalization and output file selection
"""
import re
from pathlib import Path, PurePosixPath
from typing import Optional
from urllib.parse import urlparse, unquote

from ...core.constants import DEFAULT_SCHEME, FALLBACK_FILENAME
from ...core.exceptions import DestinationExistsError, DestinationWriteError, UsageError
from ...core.logging import get_logger
from .destination import Destination, FileDestination, StreamDestination
from .models import FetchConfig, OutputTarget

logger = get_logger(__name__)

_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*://")


def normalize_url(target: str) -> str:
    """
    Ensure the target carries a scheme prefix.

    Only the prefix is checked; the rest of the string is passed through.

    Args:
        target: URL or bare host as typed by the user

    Returns:
        URL with a scheme
    """
    target = target.strip()
    if not target:
        raise UsageError("no target URL given")
    if _SCHEME_RE.match(target):
        return target
    return f"{DEFAULT_SCHEME}://{target}"


def derive_filename(url: str) -> str:
    """
    Derive an output file name from the last path segment of a URL.

    Args:
        url: Normalized URL

    Returns:
        File name, or ``index.html`` when the path is empty or the root
    """
    path = unquote(urlparse(url).path)
    if not path or path.endswith("/"):
        return FALLBACK_FILENAME

    name = PurePosixPath(path).name
    if name in ("", ".", ".."):
        return FALLBACK_FILENAME
    return name


def resolve_target(config: FetchConfig, url: Optional[str] = None) -> OutputTarget:
    """
    Decide where the fetched body goes.

    The existence check and the later creation are separate steps, so
    another process may still create the file in between unless
    ``config.exclusive`` is set.

    Args:
        config: Fetch configuration
        url: Normalized URL (defaults to ``normalize_url(config.url)``)

    Returns:
        OutputTarget

    Raises:
        DestinationExistsError: If the resolved file already exists
    """
    if config.to_stdout:
        return OutputTarget(to_stdout=True)

    if config.output_name:
        name = config.output_name
    else:
        name = derive_filename(url or normalize_url(config.url))

    path = Path(name)
    if path.exists():
        raise DestinationExistsError(path)

    logger.debug(f"Resolved output file: {path}")
    return OutputTarget(path=path, exclusive=config.exclusive)


def open_destination(target: OutputTarget) -> Destination:
    """
    Create the sink for a resolved target.

    Raises:
        DestinationExistsError: Exclusive creation found the file present
    """
    if target.to_stdout:
        return StreamDestination()

    try:
        return FileDestination(target.path, exclusive=target.exclusive)
    except FileExistsError as e:
        raise DestinationExistsError(target.path) from e
    except OSError as e:
        raise DestinationWriteError(f"cannot create {target.path}: {e}") from e
