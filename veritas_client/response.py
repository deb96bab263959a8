"""
Response decoding for the Veritas API.

decode_response() turns a raw body into a typed, immutable Response using
the metadata of the request that produced it. It never raises for bad
data: empty or malformed bodies yield success=False, and a write whose
reported mutation count differs from the expected one is downgraded to
success=False so partial application is visible to the caller.
"""

import json
import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Optional, Tuple, Union

from .constants import LOG_WARN, MUTATION_COUNT_UNKNOWN, ResponseShape, ValueKind
from .exceptions import DecodeError, ResponseAccessError
from .request import PendingRequest

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Response:
    """Decoded reply to one request."""
    success: bool
    response_shape: ResponseShape
    value_kind: ValueKind
    raw_body: str
    request: PendingRequest
    data: Optional[Dict[str, Any]] = None
    error: Optional[Exception] = None
    str_value: str = ""
    int_value: int = 0
    data_map: Dict[str, Dict[str, str]] = field(default_factory=dict)
    count_map: Dict[str, Dict[str, int]] = field(default_factory=dict)
    mutation_count: int = MUTATION_COUNT_UNKNOWN

    def _require(self, shape: ResponseShape, kind: ValueKind, accessor: str):
        if self.response_shape != shape or self.value_kind != kind:
            raise ResponseAccessError(
                f"{accessor}() requires a {shape.name}/{kind.name} response, "
                f"got {self.response_shape.name}/{self.value_kind.name}"
            )

    def data_value(self) -> str:
        """Value of a single data fetch."""
        self._require(ResponseShape.FETCH_SINGLE, ValueKind.DATA, "data_value")
        return self.str_value

    def count_value(self) -> int:
        """Value of a single counter fetch."""
        self._require(ResponseShape.FETCH_SINGLE, ValueKind.COUNT, "count_value")
        return self.int_value

    def data_map_values(self) -> Dict[str, Dict[str, str]]:
        """key -> subkey -> value for a multi data fetch."""
        self._require(ResponseShape.FETCH_MULTI, ValueKind.DATA, "data_map_values")
        return self.data_map

    def count_map_values(self) -> Dict[str, Dict[str, int]]:
        """key -> subkey -> count for a multi counter fetch."""
        self._require(ResponseShape.FETCH_MULTI, ValueKind.COUNT, "count_map_values")
        return self.count_map


def parse_int(value: Any) -> Optional[int]:
    """
    Interpret a JSON scalar as a 64-bit integer, truncating floats.

    Accepts ints, floats with integral meaning (e.g. 5.0) and numeric
    strings. Returns None when the value is not numeric.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            value = float(value)
        except ValueError:
            return None
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return None
        return int(value)
    return None


def _as_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value)


def _pairs(data: Dict[str, Any]) -> Iterator[Tuple[str, str, Any]]:
    """Yield (key, subkey, value) in document order, skipping non-object keys."""
    for key, subkeys in data.items():
        if not isinstance(subkeys, dict):
            continue
        for subkey, value in subkeys.items():
            yield key, subkey, value


def _decode_single(data: Dict[str, Any], kind: ValueKind, log_level: int) -> Dict[str, Any]:
    # The server returns exactly one key/subkey pair for a single fetch;
    # any extra pairs break that contract and only the first is used.
    pairs = list(_pairs(data))
    if len(pairs) > 1 and log_level >= LOG_WARN:
        logger.warning("Single fetch returned %d values, using the first", len(pairs))

    if kind == ValueKind.DATA:
        if pairs:
            return {'str_value': _as_text(pairs[0][2])}
        return {}

    for _, _, value in pairs:
        number = parse_int(value)
        if number is not None:
            return {'int_value': number}
    return {}


def _decode_multi(data: Optional[Dict[str, Any]], kind: ValueKind) -> Dict[str, Any]:
    result: Dict[str, Dict[str, Any]] = {}
    for key, subkeys in (data or {}).items():
        entry = result.setdefault(key, {})
        if not isinstance(subkeys, dict):
            continue
        for subkey, value in subkeys.items():
            if kind == ValueKind.DATA:
                entry[subkey] = _as_text(value)
            else:
                number = parse_int(value)
                entry[subkey] = 0 if number is None else number

    if kind == ValueKind.DATA:
        return {'data_map': result}
    return {'count_map': result}


def _decode_mutation(data: Optional[Dict[str, Any]], request: PendingRequest, success: bool,
                     log_level: int) -> Dict[str, Any]:
    data = data or {}

    mutation_count = parse_int(data.get("mutations"))
    if mutation_count is None:
        mutation_count = MUTATION_COUNT_UNKNOWN

    if success and mutation_count != request.mutations:
        if log_level >= LOG_WARN:
            logger.warning(
                "Response mutations (%d) does not match request mutations (%d)",
                mutation_count, request.mutations,
            )
        success = False

    # Acknowledgement (async) or execution (sync) flag has the final word
    for flag in ("acknowledged", "executed"):
        if data.get(flag) is None:
            continue
        if isinstance(data[flag], bool):
            success = data[flag]
        else:
            if log_level >= LOG_WARN:
                logger.warning("Non-boolean '%s' flag in response: %r", flag, data[flag])
            success = False
        break

    return {'success': success, 'mutation_count': mutation_count}


def decode_response(request: PendingRequest, raw_body: Union[str, bytes], log_level: int = LOG_WARN) -> Response:
    """
    Decode a raw response body for the given request.

    Args:
        request: The request the body answers
        raw_body: Response body as received
        log_level: Client log level gating warnings

    Returns:
        Response; inspect success before using values
    """
    if isinstance(raw_body, bytes):
        raw_body = raw_body.decode('utf-8', errors='replace')

    base = {
        'response_shape': request.response_shape,
        'value_kind': request.value_kind,
        'raw_body': raw_body,
        'request': request,
    }

    if not raw_body:
        if log_level >= LOG_WARN:
            logger.warning("Empty response body, unable to parse into response")
        return Response(success=False, **base)

    try:
        document = json.loads(raw_body)
    except ValueError as e:
        return Response(success=False, error=DecodeError(f"Invalid JSON in response: {e}"), **base)
    if not isinstance(document, dict):
        error = DecodeError(f"Expected a JSON object, got {type(document).__name__}")
        return Response(success=False, error=error, **base)

    fields: Dict[str, Any] = {'success': document.get("status") == "OK"}
    data = document.get("data")
    if data is not None and not isinstance(data, dict):
        if log_level >= LOG_WARN:
            logger.warning("Ignoring non-object 'data' in response: %r", data)
        data = None

    shape = request.response_shape
    if shape == ResponseShape.FETCH_SINGLE:
        fields.update(_decode_single(data or {}, request.value_kind, log_level))
    elif shape == ResponseShape.FETCH_MULTI:
        fields.update(_decode_multi(data, request.value_kind))
    elif shape == ResponseShape.MUTATION:
        fields.update(_decode_mutation(data, request, fields['success'], log_level))

    return Response(data=document, **base, **fields)
