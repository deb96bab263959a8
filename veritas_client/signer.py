"""
Request signing for the Veritas API.

The X-Auth header is SHA-512 over, in this exact order:

    METHOD + path + secret + len(body) + sha1(body).hexdigest()

The server recomputes the same digest, so the order must not change.
The path is the one sent on the wire, so single-fetch segments are
signed in their percent-encoded form (e.g. "/v1/data/db/t/a%20b/s").
This is not HMAC: the secret is part of the hashed stream.
"""

import hashlib
from typing import Union


def _to_bytes(body: Union[str, bytes]) -> bytes:
    if isinstance(body, bytes):
        return body
    return body.encode('utf-8')


def content_fingerprint(body: Union[str, bytes]) -> str:
    """SHA-1 hex digest of the body. Identifies content only, no security role."""
    return hashlib.sha1(_to_bytes(body)).hexdigest()


def sign_request(method: str, path: str, secret: str, body: Union[str, bytes] = b"") -> str:
    """
    Generate the hex signature for a request.

    Args:
        method: HTTP method (uppercased before hashing)
        path: Canonical path, e.g. "/v1/data"
        secret: Shared secure token
        body: Request body, empty for GET

    Returns:
        Hex-encoded SHA-512 digest
    """
    body_bytes = _to_bytes(body)

    hasher = hashlib.sha512()
    hasher.update(method.upper().encode('utf-8'))
    hasher.update(path.encode('utf-8'))
    hasher.update(secret.encode('utf-8'))
    hasher.update(str(len(body_bytes)).encode('utf-8'))
    hasher.update(content_fingerprint(body_bytes).encode('utf-8'))
    return hasher.hexdigest()
