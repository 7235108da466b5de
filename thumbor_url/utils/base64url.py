"""
URL-safe Base64
RFC 4648 base64url encoding for signature segments
"""

import base64
import binascii
import re

from thumbor_url.core.errors import DecodeError

_BASE64URL_PATTERN = re.compile(r"[A-Za-z0-9_-]*(={0,2})")


def encode(data: bytes, padding: bool = False) -> str:
    """Encode bytes with the URL-safe alphabet.

    Args:
        data: Raw bytes to encode
        padding: Keep trailing "=" characters

    Returns:
        Encoded string, unpadded unless requested
    """
    encoded = base64.urlsafe_b64encode(bytes(data))
    if not padding:
        encoded = encoded.rstrip(b"=")
    return encoded.decode("ascii")


def decode(value: str) -> bytes:
    """Decode a base64url string, with or without padding.

    Raises:
        DecodeError: If the value has invalid characters, bad padding
            or a form no encoder can produce
    """
    match = _BASE64URL_PATTERN.fullmatch(value)
    if match is None:
        raise DecodeError(value, "invalid character")

    pad = match.group(1)
    body_length = len(value) - len(pad)
    if body_length % 4 == 1:
        raise DecodeError(value, "invalid length")
    if pad and len(pad) != (-body_length) % 4:
        raise DecodeError(value, "wrong padding")

    body = value[:body_length]
    try:
        result = base64.b64decode(body + "=" * ((-body_length) % 4), altchars=b"-_", validate=True)
    except binascii.Error as e:
        raise DecodeError(value, "malformed input", original_exception=e)

    # Unused trailing bits must be zero
    if encode(result) != body:
        raise DecodeError(value, "non-canonical encoding")
    return result
