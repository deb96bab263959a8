"""
HTTP transport for the Veritas client.

The core only needs "send a request, get status, headers and body back".
RequestsTransport provides that over a requests.Session and enforces a
connection-establishment timeout only; reads are not bounded.
"""

from abc import ABC, abstractmethod
from typing import Dict, NamedTuple, Optional

import requests

from .constants import DEFAULT_CONNECT_TIMEOUT
from .exceptions import TransportError


class RawResponse(NamedTuple):
    """Undecoded HTTP reply."""
    status_code: int
    reason: str
    headers: Dict[str, str]
    body: bytes


class Transport(ABC):
    """Anything that can execute one HTTP round trip."""

    @abstractmethod
    def send(self, method: str, url: str, headers: Dict[str, str], body: bytes) -> RawResponse:
        """
        Execute a request.

        Raises:
            TransportError: On connection, DNS or timeout failure
        """
        raise NotImplementedError

    def close(self):
        """Release any held resources."""
        pass


class RequestsTransport(Transport):
    """Transport backed by requests.Session."""

    def __init__(self, connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
                 session: Optional[requests.Session] = None):
        self.connect_timeout = connect_timeout
        self.session = session or requests.Session()

    def send(self, method: str, url: str, headers: Dict[str, str], body: bytes) -> RawResponse:
        kwargs = {
            'headers': headers,
            # (connect, read): only connection establishment is bounded
            'timeout': (self.connect_timeout, None),
        }
        if body:
            kwargs['data'] = body

        try:
            response = self.session.request(method, url, **kwargs)
        except requests.RequestException as e:
            raise TransportError(f"HTTP request failed: {e}") from e

        return RawResponse(
            status_code=response.status_code,
            reason=response.reason or "",
            headers=dict(response.headers),
            body=response.content or b"",
        )

    def close(self):
        """Close HTTP session."""
        if self.session:
            self.session.close()
