"""
Request construction for the Veritas API.

Turns a logical operation into a PendingRequest: HTTP method, endpoint,
optional JSON body, and the metadata the decoder needs to interpret the
reply (value kind, response shape, expected mutation count).
"""

from dataclasses import dataclass
from typing import Mapping, Sequence
from urllib.parse import quote

from .constants import API_VERSION, ResponseShape, ValueKind
from .exceptions import EncodingError
from .payload import RequestEnvelope, encode_envelope, encode_path_segment, envelope_from_subkeys

# Endpoint roots per value kind
_SINGLE_ROOT = {ValueKind.DATA: "data", ValueKind.COUNT: "count"}
_MULTI_ROOT = {ValueKind.DATA: "data-multi", ValueKind.COUNT: "count-multi"}

_MUTATION_METHODS = ("PUT", "DELETE")


@dataclass
class PendingRequest:
    """A single request ready to be signed and sent."""
    method: str
    endpoint: str
    value_kind: ValueKind
    response_shape: ResponseShape
    body: str = ""
    mutations: int = 0
    version: str = API_VERSION

    def __post_init__(self):
        self.method = self.method.upper()

    @property
    def path(self) -> str:
        """Canonical path, also the URL component covered by the signature."""
        return f"/{self.version}/{self.endpoint}"


def _path_part(name: str, value: str) -> str:
    # Encoded segments are what the signature covers
    if not value:
        raise EncodingError(f"{name} cannot be empty")
    return quote(str(value), safe="")


def build_fetch_single(value_kind: ValueKind, db: str, table: str, key: str, subkey: str,
                       version: str = API_VERSION) -> PendingRequest:
    """GET {data|count}/{db}/{table}/{key}/{subkey}."""
    parts = "/".join([
        _path_part("database", db),
        _path_part("table", table),
        _path_part("key", key),
        _path_part("subkey", subkey),
    ])
    return PendingRequest(
        method="GET",
        endpoint=f"{_SINGLE_ROOT[value_kind]}/{parts}",
        value_kind=value_kind,
        response_shape=ResponseShape.FETCH_SINGLE,
        version=version,
    )


def build_fetch_multi(value_kind: ValueKind, db: str, table: str, keymap: Mapping[str, Sequence[str]],
                      version: str = API_VERSION) -> PendingRequest:
    """GET {data|count}-multi/{url-encoded envelope}."""
    envelope = envelope_from_subkeys(db, table, keymap)
    encoded = encode_path_segment(encode_envelope(envelope))
    return PendingRequest(
        method="GET",
        endpoint=f"{_MULTI_ROOT[value_kind]}/{encoded}",
        value_kind=value_kind,
        response_shape=ResponseShape.FETCH_MULTI,
        version=version,
    )


def build_mutation(method: str, value_kind: ValueKind, envelope: RequestEnvelope,
                   version: str = API_VERSION) -> PendingRequest:
    """
    PUT or DELETE {data|count} with the envelope as JSON body.

    The expected mutation count is the number of distinct top-level keys.
    """
    method = method.upper()
    if method not in _MUTATION_METHODS:
        raise ValueError(f"Unsupported mutation method: {method}")
    return PendingRequest(
        method=method,
        endpoint=_SINGLE_ROOT[value_kind],
        value_kind=value_kind,
        response_shape=ResponseShape.MUTATION,
        body=encode_envelope(envelope),
        mutations=envelope.key_count,
        version=version,
    )
