"""
Unit tests for request signing.
"""

import hashlib

import pytest

from veritas_client.signer import content_fingerprint, sign_request


# Recorded against the reference server implementation
GOLDEN_ASDF = (
    "b17f4169e26d7ac3a8457af62c4c8824ad88ef0c49f4eb666c936157405f44a9"
    "9d1a2ffef0f5e4f5f3a6350d8fba98c720deb0be60600c138d5055fe66f1b72c"
)
GOLDEN_V1_ASDF = (
    "2b785a9dea927ed55230594580ddb0b32f6c9169463b5061588adb3cd93dcc53"
    "6a4b25a046c4f80f38dbce1e53d32734168d3f7c6fa5d3e5a64a1a9a79143e1c"
)


class TestSigner:
    """Test signature generation."""

    def test_golden_signature(self):
        """Test signature matches the recorded value."""
        assert sign_request("GET", "/asdf", "test", "body-here") == GOLDEN_ASDF

    def test_golden_signature_versioned_path(self):
        """Test signature over a versioned path matches the recorded value."""
        assert sign_request("GET", "/v1/asdf", "test", "body-here") == GOLDEN_V1_ASDF

    def test_signature_format(self):
        """Test signature is a SHA-512 hex string."""
        signature = sign_request("PUT", "/v1/data", "secret", '{"a":1}')

        assert isinstance(signature, str)
        assert len(signature) == 128
        int(signature, 16)  # Should not raise

    def test_signature_construction(self):
        """Test signature is sha512(method + path + secret + length + sha1(body))."""
        body = '{"default_db":"db"}'
        message = "PUT" + "/v1/data" + "secret" + str(len(body)) + hashlib.sha1(body.encode()).hexdigest()
        expected = hashlib.sha512(message.encode()).hexdigest()

        assert sign_request("PUT", "/v1/data", "secret", body) == expected

    def test_deterministic(self):
        """Test identical inputs give identical signatures."""
        first = sign_request("DELETE", "/v1/count", "secret", "payload")
        second = sign_request("DELETE", "/v1/count", "secret", "payload")

        assert first == second

    def test_str_and_bytes_body_agree(self):
        """Test body may be passed as str or bytes."""
        assert sign_request("PUT", "/v1/data", "s", "é") == sign_request("PUT", "/v1/data", "s", "é".encode('utf-8'))

    def test_method_is_uppercased(self):
        """Test lowercase methods are normalized."""
        assert sign_request("get", "/v1/x", "s", "") == sign_request("GET", "/v1/x", "s", "")

    def test_length_counts_bytes(self):
        """Test body length is the UTF-8 byte length, not character count."""
        body = "ü"
        message = "PUT/v1/datas" + "2" + hashlib.sha1(body.encode('utf-8')).hexdigest()

        assert sign_request("PUT", "/v1/data", "s", body) == hashlib.sha512(message.encode()).hexdigest()

    @pytest.mark.parametrize("changed", [
        ("PUT", "/asdf", "test", "body-here"),
        ("GET", "/asdg", "test", "body-here"),
        ("GET", "/asdf", "tesT", "body-here"),
        ("GET", "/asdf", "test", "body-herE"),
        ("GET", "/asdf", "test", ""),
    ])
    def test_any_input_change_changes_signature(self, changed):
        """Test changing any single input changes the signature."""
        assert sign_request(*changed) != GOLDEN_ASDF

    def test_empty_body(self):
        """Test GET requests sign the empty body."""
        message = "GET/v1/data/db/t/k/ssecret0" + hashlib.sha1(b"").hexdigest()

        assert sign_request("GET", "/v1/data/db/t/k/s", "secret") == hashlib.sha512(message.encode()).hexdigest()

    def test_content_fingerprint(self):
        """Test fingerprint is the SHA-1 hex digest of the body."""
        assert content_fingerprint("body-here") == hashlib.sha1(b"body-here").hexdigest()
