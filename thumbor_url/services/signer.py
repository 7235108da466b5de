import hashlib
import hmac
from typing import NamedTuple, Union

from Cryptodome.Cipher import AES

from thumbor_url.core.errors import CryptoInitializationError, MissingSecurityKeyError
from thumbor_url.core.logging import get_logger
from thumbor_url.schemas.options import EncryptionMode

logger = get_logger("signer")

SecurityKey = Union[str, bytes]

AES_BLOCK_SIZE = 16
AES_KEY_SIZE = 16
AES_PAD_BYTE = b"{"


class SignedPayload(NamedTuple):
    """Raw authentication bytes and the URL suffix they cover."""
    signature: bytes
    suffix: str


def _key_bytes(security_key: SecurityKey) -> bytearray:
    if isinstance(security_key, str):
        return bytearray(security_key.encode("utf-8"))
    return bytearray(security_key)


def _zero(buffer: bytearray) -> None:
    buffer[:] = bytes(len(buffer))


def pad_security_key(key: bytes) -> bytearray:
    """Repeat the key until it is exactly one AES-128 key long.

    Longer keys are cut to the first 16 bytes.
    """
    if not key:
        raise CryptoInitializationError("Cannot derive an AES-128 key from an empty security key")
    repeats = -(-AES_KEY_SIZE // len(key))
    return bytearray((bytes(key) * repeats)[:AES_KEY_SIZE])


def pad_plaintext(plaintext: bytes) -> bytearray:
    """Right-pad with "{" up to the next block boundary.

    This is not PKCS7: the pad carries no length, and an already aligned
    input still gets a full block of padding.
    """
    needed = AES_BLOCK_SIZE - len(plaintext) % AES_BLOCK_SIZE
    return bytearray(plaintext + AES_PAD_BYTE * needed)


def image_hash(image_url: str) -> str:
    """Lowercase hex MD5 of the image URL."""
    return hashlib.md5(image_url.encode("utf-8"), usedforsecurity=False).hexdigest()


def hmac_sign_input(image_url: str, options_path: str) -> str:
    return f"{options_path}/{image_url}".strip("/")


def hmac_sha1_signature(sign_input: str, security_key: SecurityKey) -> bytes:
    """HMAC-SHA1 digest of the sign input keyed by the raw security key."""
    key = _key_bytes(security_key)
    try:
        return hmac.new(key, sign_input.encode("utf-8"), hashlib.sha1).digest()
    finally:
        _zero(key)


def aes128_signature(image_url: str, options_path: str, security_key: SecurityKey) -> bytes:
    """Encrypt the options path and image hash with AES-128 in ECB mode.

    Args:
        image_url: Query-stripped image URL
        options_path: Serialized options path
        security_key: Shared secret, padded to 16 bytes by repetition

    Returns:
        Ciphertext, as long as the padded plaintext

    Raises:
        CryptoInitializationError: If the key or plaintext cannot be used
            by the cipher
    """
    raw_key = _key_bytes(security_key)
    key = bytearray()
    plaintext = pad_plaintext(f"{options_path}/{image_hash(image_url)}".encode("utf-8"))
    try:
        key = pad_security_key(raw_key)
        cipher = AES.new(key, AES.MODE_ECB)
        return cipher.encrypt(plaintext)
    except ValueError as e:
        raise CryptoInitializationError(
            "AES-128 cipher setup failed",
            context={"key_length": len(key), "plaintext_length": len(plaintext)},
            original_exception=e
        )
    finally:
        _zero(raw_key)
        _zero(key)
        _zero(plaintext)


class Signer:
    """Computes the authentication bytes and suffix for a secure URL."""

    def sign(self,
             image_url: str,
             options_path: str,
             security_key: SecurityKey,
             encryption: EncryptionMode = EncryptionMode.HMAC_SHA1) -> SignedPayload:
        """Sign an image URL and options path with the selected scheme.

        Args:
            image_url: Image URL with its query already removed
            options_path: Serialized options path, possibly empty
            security_key: Shared secret
            encryption: Signing scheme

        Returns:
            The signature bytes and the suffix for the final URL

        Raises:
            MissingSecurityKeyError: If the security key is empty
        """
        if not security_key:
            raise MissingSecurityKeyError(context={"encryption": encryption.value})

        logger.debug(f"Signing with {encryption.value}")

        if encryption == EncryptionMode.AES128:
            signature = aes128_signature(image_url, options_path, security_key)
            return SignedPayload(signature, image_url)

        sign_input = hmac_sign_input(image_url, options_path)
        return SignedPayload(hmac_sha1_signature(sign_input, security_key), sign_input)
