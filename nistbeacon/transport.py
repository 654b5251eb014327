"""
nistbeacon.transport
====================

The HTTP capability the fetcher depends on, and its `httpx` implementation.

The fetcher needs exactly one operation::

    def get(self, url: str) -> Response

returning the status, headers and full body, or raising `TransportError` when
no response could be obtained. TLS, proxies and timeouts are properties of
the transport, configured by whoever builds it.

Typical usage
-------------
    import httpx
    from nistbeacon.transport import HttpxTransport, set_default_transport

    # Route every module-level lookup through a proxy:
    set_default_transport(HttpxTransport(client=httpx.Client(proxy="http://proxy:3128")))

Prefer passing a transport to `BeaconClient(transport=...)`. Replacing the
process-wide default is not synchronized with fetches already in flight on
other threads.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Mapping, Optional, Protocol, runtime_checkable

import httpx

from .constants import DEFAULT_TIMEOUT_S, USER_AGENT
from .errors import TransportError

__all__ = [
    "Response",
    "Transport",
    "HttpxTransport",
    "default_transport",
    "set_default_transport",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Response:
    status: int
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes = b""

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


@runtime_checkable
class Transport(Protocol):
    """Minimal HTTP GET capability."""

    def get(self, url: str) -> Response:  # pragma: no cover - protocol
        """Fetch *url*; raise TransportError if no response was obtained."""
        ...


class HttpxTransport:
    """
    Transport backed by an :class:`httpx.Client`.

    Args:
        client: Optional pre-configured client (proxies, TLS, mounts, mock
            transports). When omitted, one is created and owned by this object.
        timeout: Timeout in seconds for an owned client.
        user_agent: User-Agent header for an owned client.
    """

    def __init__(
        self,
        *,
        client: Optional[httpx.Client] = None,
        timeout: float = DEFAULT_TIMEOUT_S,
        user_agent: str = USER_AGENT,
    ) -> None:
        if timeout <= 0:
            raise ValueError("timeout must be positive")
        self._own_client = client is None
        self._client = client or httpx.Client(
            timeout=timeout,
            headers={"User-Agent": user_agent, "Accept": "application/xml, text/xml"},
            follow_redirects=True,
        )

    # --- context management

    def close(self) -> None:
        if self._own_client:
            self._client.close()

    def __enter__(self) -> "HttpxTransport":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # --- capability

    def get(self, url: str) -> Response:
        logger.debug("GET %s", url)
        try:
            r = self._client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise TransportError(url, f"couldn't get the record from the API: {e}") from e
        return Response(status=r.status_code, headers=dict(r.headers), body=r.content)


_default: Optional[Transport] = None


def default_transport() -> Transport:
    """Return the process-wide transport, creating an HttpxTransport on first use."""
    global _default
    if _default is None:
        _default = HttpxTransport()
    return _default


def set_default_transport(transport: Optional[Transport]) -> None:
    """
    Replace the process-wide transport used by the module-level lookups.

    Pass None to go back to a fresh default on next use. The previous
    transport is not closed.
    """
    global _default
    if transport is not None and not isinstance(transport, Transport):
        raise TypeError("transport must provide get(url) -> Response")
    _default = transport
