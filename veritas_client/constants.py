"""
Constants for the Veritas client library.
Compatible with the Veritas HTTP API (v1).
"""

from enum import IntEnum

# API defaults
API_VERSION = "v1"
API_ENDPOINT = "http://api.flxveritas.com"

# Regions
REGION_ANY = "any"

# Log levels (higher is more verbose)
LOG_ERROR = 0
LOG_WARN = 1
LOG_DEBUG = 2
LOG_TRACE = 3

# HTTP Headers
HEADER_AUTH = "X-Auth"
HEADER_ROUTE = "X-Veritas-Route"
HEADER_CONTENT_TYPE = "Content-Type"
CONTENT_TYPE_JSON = "application/json"

# Connection establishment bound, in seconds
DEFAULT_CONNECT_TIMEOUT = 10

# Default configuration values
DEFAULT_CONFIG = {
    'version': API_VERSION,
    'endpoint': API_ENDPOINT,
    'region': REGION_ANY,
    'database': "",
    'log_level': LOG_WARN,
    'connect_timeout': DEFAULT_CONNECT_TIMEOUT,
}

# Sentinel for a mutation response without a readable count
MUTATION_COUNT_UNKNOWN = -1


class ValueKind(IntEnum):
    """Whether an operation targets plain data or a numeric counter."""
    DATA = 1
    COUNT = 2


class ResponseShape(IntEnum):
    """What a call expects back from the server."""
    FETCH_SINGLE = 1
    FETCH_MULTI = 2
    MUTATION = 3
