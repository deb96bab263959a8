"""
Custom exceptions for the Veritas client library.
"""


class VeritasClientError(Exception):
    """Base exception for Veritas client errors."""
    pass


class ConfigurationError(VeritasClientError):
    """Raised when client configuration is invalid."""
    pass


class EncodingError(VeritasClientError):
    """Raised when a request envelope cannot be built or serialized."""
    pass


class TransportError(VeritasClientError):
    """Raised when the HTTP round trip fails (connect, DNS, timeout)."""
    pass


class DecodeError(VeritasClientError):
    """Attached to a Response whose body is not a JSON object. Never raised by the decoder."""
    pass


class ResponseAccessError(TypeError):
    """
    Raised when a typed accessor is used on a response of another shape or kind.

    This is a programming error in the caller, not a data error, and is
    intentionally not a VeritasClientError.
    """
    pass
