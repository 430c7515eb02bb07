"""
Banner and connection diagnostics
"""
import socket
from typing import List, Tuple
from urllib.parse import urlparse

import requests
from rich.console import Console
from rich.markup import escape

from ... import __version__
from ...core.logging import get_logger
from ...domain.fetch import declared_length

logger = get_logger(__name__)

_HTTP_VERSIONS = {9: "HTTP/0.9", 10: "HTTP/1.0", 11: "HTTP/1.1", 20: "HTTP/2"}


def lookup_host(host: str) -> Tuple[str, List[str]]:
    """
    Resolve canonical name and addresses of a host.

    Lookup failures are not fatal; the host itself and an empty address
    list are returned instead.
    """
    try:
        canonical, _aliases, _ = socket.gethostbyname_ex(host)
    except OSError as e:
        logger.debug(f"Canonical name lookup for {host} failed: {e}")
        canonical = host

    try:
        infos = socket.getaddrinfo(canonical, None, proto=socket.IPPROTO_TCP)
    except OSError as e:
        logger.debug(f"Address lookup for {canonical} failed: {e}")
        return canonical, []

    addresses = []
    for info in infos:
        address = info[4][0]
        if address not in addresses:
            addresses.append(address)
    return canonical, addresses


def protocol_name(response: requests.Response) -> str:
    version = getattr(response.raw, "version", None)
    return _HTTP_VERSIONS.get(version, "HTTP")


def print_banner(console: Console) -> None:
    console.print(
        f"********* This is gobble version {__version__} ***************",
        markup=False,
        highlight=False,
    )


def print_info(console: Console, url: str, response: requests.Response) -> None:
    """Print a brief informative header about the connection"""
    print_banner(console)

    host = urlparse(url).hostname
    if host:
        canonical, addresses = lookup_host(host)
        console.print(
            f"[cyan]Connecting to[/cyan] {escape(canonical)}   " + escape(f"[{', '.join(addresses)}]"),
            highlight=False,
        )

    encoding = response.headers.get("Transfer-Encoding", "")
    console.print(
        f"Status {response.status_code} {response.reason}   "
        f"Protocol {protocol_name(response)}  TransferEncoding [{encoding}]",
        markup=False,
        highlight=False,
    )
    console.print(f"Content Length: {declared_length(response)} bytes", highlight=False)
    console.print()
