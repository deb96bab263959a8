"""
Veritas Client Library

A Python client for the Veritas key/value and counter service. Requests
are signed with the account's secure token and responses are decoded
into typed results, with mutation counts cross-checked so partially
applied bulk writes are reported as unsuccessful.

Example usage:
    from veritas_client import VeritasClient

    client = VeritasClient(1, 1, "your-secure-token")
    client.select("mydb")
    response = client.get_single("users", "user-1", "name")
    if response.success:
        print(response.data_value())
"""

from .client import ClientConfig, VeritasClient
from .exceptions import (
    VeritasClientError,
    ConfigurationError,
    EncodingError,
    TransportError,
    DecodeError,
    ResponseAccessError
)
from .constants import (
    API_VERSION,
    API_ENDPOINT,
    REGION_ANY,
    LOG_ERROR,
    LOG_WARN,
    LOG_DEBUG,
    LOG_TRACE,
    HEADER_AUTH,
    HEADER_ROUTE,
    DEFAULT_CONFIG,
    ValueKind,
    ResponseShape
)
from .payload import KeySubkeys, KeyValues, RequestEnvelope
from .request import PendingRequest
from .response import Response, decode_response
from .signer import sign_request
from .transport import RawResponse, RequestsTransport, Transport

__version__ = "1.0.0"
__all__ = [
    "VeritasClient",
    "ClientConfig",
    "VeritasClientError",
    "ConfigurationError",
    "EncodingError",
    "TransportError",
    "DecodeError",
    "ResponseAccessError",
    "API_VERSION",
    "API_ENDPOINT",
    "REGION_ANY",
    "LOG_ERROR",
    "LOG_WARN",
    "LOG_DEBUG",
    "LOG_TRACE",
    "HEADER_AUTH",
    "HEADER_ROUTE",
    "DEFAULT_CONFIG",
    "ValueKind",
    "ResponseShape",
    "KeySubkeys",
    "KeyValues",
    "RequestEnvelope",
    "PendingRequest",
    "Response",
    "decode_response",
    "sign_request",
    "RawResponse",
    "RequestsTransport",
    "Transport"
]
