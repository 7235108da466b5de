#!/usr/bin/env python3
"""
Unit Tests for the base64url codec
"""

import base64
import os
import sys

import pytest

# Add the project root to the Python path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from thumbor_url.core.errors import DecodeError
from thumbor_url.utils import base64url


class TestBase64URL:
    """Test cases for base64url encoding and decoding."""

    def test_uses_url_safe_alphabet(self):
        data = b"\xfb\xff\xbf"
        assert base64.b64encode(data) == b"+/+/"
        assert base64url.encode(data) == "-_-_"

    def test_padding_is_trimmed_by_default(self):
        assert base64url.encode(b"a") == "YQ"
        assert base64url.encode(b"ab") == "YWI"
        assert base64url.encode(b"abc") == "YWJj"

    def test_padding_can_be_kept(self):
        assert base64url.encode(b"a", padding=True) == "YQ=="
        assert base64url.encode(b"ab", padding=True) == "YWI="

    def test_sha1_digest_length(self):
        """A 20-byte digest encodes to 27 characters without padding."""
        assert len(base64url.encode(bytes(20))) == 27
        assert len(base64url.encode(bytes(20), padding=True)) == 28

    def test_round_trip(self):
        samples = [b"", b"\x00", b"\xff" * 7, bytes(range(256)), os.urandom(48)]
        for data in samples:
            assert base64url.decode(base64url.encode(data)) == data
            assert base64url.decode(base64url.encode(data, padding=True)) == data

    def test_empty(self):
        assert base64url.encode(b"") == ""
        assert base64url.decode("") == b""

    @pytest.mark.parametrize("value", [
        "YQ+=",      # standard alphabet character
        "YW/j",      # standard alphabet character
        "YW j",      # whitespace
        "Y=Q=",      # padding in the middle
        "YQ===",     # too much padding
        "YWI==",     # wrong amount of padding
        "YQ=",       # padded length not a multiple of four
        "YWJjZ",     # impossible unpadded length
        "QQ=\n",     # trailing newline after padding
        "YWI\n",     # trailing newline
        "QR",        # non-zero unused bits
        "YWJ",       # non-zero unused bits
    ])
    def test_malformed_input(self, value):
        with pytest.raises(DecodeError) as exc_info:
            base64url.decode(value)
        assert exc_info.value.error_code == "decode_error"
