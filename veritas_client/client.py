"""
Veritas client library.

This module provides the public operation surface for the Veritas
key/value and counter service: single and bulk get/put/delete for data
values and counters, each signed with the account's secure token.
"""

import logging
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

from .constants import (
    API_ENDPOINT,
    API_VERSION,
    CONTENT_TYPE_JSON,
    DEFAULT_CONFIG,
    DEFAULT_CONNECT_TIMEOUT,
    HEADER_AUTH,
    HEADER_CONTENT_TYPE,
    HEADER_ROUTE,
    LOG_ERROR,
    LOG_TRACE,
    LOG_WARN,
    REGION_ANY,
    ValueKind,
)
from .exceptions import ConfigurationError, EncodingError
from .payload import KeyValues, RequestEnvelope, envelope_from_subkeys, envelope_from_values
from .request import PendingRequest, build_fetch_multi, build_fetch_single, build_mutation
from .response import Response, decode_response
from .signer import sign_request
from .transport import RequestsTransport, Transport

logger = logging.getLogger(__name__)


@dataclass
class ClientConfig:
    """Client configuration."""

    # Account credentials (all mandatory)
    customer_id: int
    application_id: int
    secret_token: str

    # API location
    version: str = API_VERSION
    endpoint: str = API_ENDPOINT
    region: str = REGION_ANY

    # Default database for all operations, set with VeritasClient.select()
    database: str = ""

    log_level: int = LOG_WARN
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT

    @property
    def route(self) -> str:
        """Value of the routing header: region/application/customer."""
        return f"{self.region}/{self.application_id}/{self.customer_id}"


def _valid_log_level(level) -> bool:
    return isinstance(level, int) and not isinstance(level, bool) and LOG_ERROR <= level <= LOG_TRACE


class VeritasClient:
    """
    Client for the Veritas data service.

    Every operation is one blocking round trip and returns a Response whose
    success flag must be checked. Configuration setters are not safe to call
    while other threads have requests in flight.
    """

    def __init__(self, customer_id: int, application_id: int, secret_token: str,
                 transport: Optional[Transport] = None, **config):
        """
        Initialize Veritas client.

        Args:
            customer_id: Customer identifier
            application_id: Application identifier
            secret_token: Secure token shared with the service
            transport: HTTP transport; defaults to a requests-backed one
            **config: Configuration options (version, endpoint, region,
                database, log_level, connect_timeout)
        """
        unknown = set(config) - set(DEFAULT_CONFIG)
        if unknown:
            raise ConfigurationError(f"Unknown configuration options: {', '.join(sorted(unknown))}")

        # Merge default config with user overrides
        self.config = ClientConfig(
            customer_id=customer_id,
            application_id=application_id,
            secret_token=secret_token,
            **{**DEFAULT_CONFIG, **config},
        )

        self._validate_config()

        self.transport = transport or RequestsTransport(connect_timeout=self.config.connect_timeout)

    def _validate_config(self):
        """Validate client configuration."""
        if not self.config.secret_token:
            raise ConfigurationError("secret_token cannot be empty")

        for name in ("customer_id", "application_id"):
            value = getattr(self.config, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise ConfigurationError(f"{name} must be an integer")

        if not self.config.version:
            raise ConfigurationError("version cannot be empty")

        if not self.config.endpoint:
            raise ConfigurationError("endpoint cannot be empty")

        if self.config.connect_timeout <= 0:
            raise ConfigurationError("connect_timeout must be positive")

        if not _valid_log_level(self.config.log_level):
            raise ConfigurationError(f"log_level must be between {LOG_ERROR} and {LOG_TRACE}")

    # Configuration setters

    def select(self, db: str):
        """Select the default database."""
        self.config.database = db

    def set_version(self, version: str):
        if not version:
            raise ConfigurationError("version cannot be empty")
        self.config.version = version

    def set_endpoint(self, endpoint: str):
        if not endpoint:
            raise ConfigurationError("endpoint cannot be empty")
        self.config.endpoint = endpoint

    def set_region(self, region: str):
        self.config.region = region

    def set_log_level(self, level: int) -> bool:
        """Update the log level; out-of-range values are ignored."""
        if not _valid_log_level(level):
            logger.warning("Invalid log level, ignoring update")
            return False
        self.config.log_level = level
        return True

    def print_debug(self):
        """
        Log a one-line summary of the client identity.

        Emitted at INFO on the "veritas_client.client" logger; the library
        installs no handlers, so nothing is shown unless the application
        configures logging at INFO or below.
        """
        logger.info(
            "Veritas client (customer: %d) (app: %d) (database: %s)",
            self.config.customer_id, self.config.application_id, self.config.database,
        )

    def _database(self) -> str:
        if not self.config.database:
            raise ConfigurationError("No database selected, call select() first")
        return self.config.database

    def _execute(self, request: PendingRequest) -> Response:
        """
        Sign and send a request, then decode the reply.

        Raises:
            TransportError: If the HTTP round trip fails
        """
        trace = self.config.log_level >= LOG_TRACE
        url = self.config.endpoint.rstrip('/') + request.path
        body = request.body.encode('utf-8')

        headers = {
            HEADER_AUTH: sign_request(request.method, request.path, self.config.secret_token, body),
            HEADER_ROUTE: self.config.route,
        }
        if body:
            headers[HEADER_CONTENT_TYPE] = CONTENT_TYPE_JSON

        if trace:
            logger.debug("Requesting %s %s", request.method, url)
            if body:
                logger.debug("Request Body: %s", request.body)

        raw = self.transport.send(request.method, url, headers, body)

        if trace:
            logger.debug("Response Status: %d %s", raw.status_code, raw.reason)
            logger.debug("Response Headers: %s", raw.headers)
            logger.debug("Response Body: %s", raw.body.decode('utf-8', errors='replace'))

        return decode_response(request, raw.body, self.config.log_level)

    def _mutate(self, method: str, kind: ValueKind, envelope: RequestEnvelope) -> Response:
        return self._execute(build_mutation(method, kind, envelope, version=self.config.version))

    # Data values

    def get_single(self, table: str, key: str, subkey: str) -> Response:
        """Fetch one data value; read it with Response.data_value()."""
        request = build_fetch_single(ValueKind.DATA, self._database(), table, key, subkey,
                                     version=self.config.version)
        return self._execute(request)

    def put_single(self, table: str, key: str, subkey: str, value: str) -> Response:
        """Store one data value."""
        envelope = RequestEnvelope(self._database(), table, [KeyValues(key, {subkey: value})])
        return self._mutate("PUT", ValueKind.DATA, envelope)

    def get_multi(self, table: str, keymap: Mapping[str, Sequence[str]]) -> Response:
        """Fetch {key: [subkeys]}; read with Response.data_map_values()."""
        request = build_fetch_multi(ValueKind.DATA, self._database(), table, keymap,
                                    version=self.config.version)
        return self._execute(request)

    def put_multi(self, table: str, keymap: Mapping[str, Mapping[str, str]]) -> Response:
        """Store {key: {subkey: value}}; success requires every key to be written."""
        return self._mutate("PUT", ValueKind.DATA, envelope_from_values(self._database(), table, keymap))

    def delete_multi(self, table: str, keymap: Mapping[str, Sequence[str]]) -> Response:
        """Delete the listed subkeys of each key."""
        return self._mutate("DELETE", ValueKind.DATA, envelope_from_subkeys(self._database(), table, keymap))

    # Counters

    def get_single_count(self, table: str, key: str, subkey: str) -> Response:
        """Fetch one counter; read it with Response.count_value()."""
        request = build_fetch_single(ValueKind.COUNT, self._database(), table, key, subkey,
                                     version=self.config.version)
        return self._execute(request)

    def increment_single_count(self, table: str, key: str, subkey: str, value: int) -> Response:
        """Add value (may be negative) to one counter."""
        _check_delta(key, subkey, value)
        envelope = RequestEnvelope(self._database(), table, [KeyValues(key, {subkey: value})])
        return self._mutate("PUT", ValueKind.COUNT, envelope)

    def get_multi_count(self, table: str, keymap: Mapping[str, Sequence[str]]) -> Response:
        """Fetch counters {key: [subkeys]}; read with Response.count_map_values()."""
        request = build_fetch_multi(ValueKind.COUNT, self._database(), table, keymap,
                                    version=self.config.version)
        return self._execute(request)

    def put_multi_count(self, table: str, keymap: Mapping[str, Mapping[str, int]]) -> Response:
        """Apply counter deltas {key: {subkey: delta}}."""
        for key, deltas in keymap.items():
            for subkey, value in deltas.items():
                _check_delta(key, subkey, value)
        return self._mutate("PUT", ValueKind.COUNT, envelope_from_values(self._database(), table, keymap))

    def delete_multi_count(self, table: str, keymap: Mapping[str, Sequence[str]]) -> Response:
        """Delete the listed counters of each key."""
        return self._mutate("DELETE", ValueKind.COUNT, envelope_from_subkeys(self._database(), table, keymap))

    def close(self):
        """Close the underlying transport."""
        if self.transport:
            self.transport.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()


def _check_delta(key: str, subkey: str, value):
    if not isinstance(value, int) or isinstance(value, bool):
        raise EncodingError(f"Counter delta for {key}/{subkey} must be an integer, got {type(value).__name__}")
