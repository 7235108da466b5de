"""
Secure URL Builder
Builds signed Thumbor URLs and memoizes them per endpoint
"""

import re
from typing import Optional
from urllib.parse import urlsplit, urlunsplit

from thumbor_url.core.config import Settings, settings as default_settings
from thumbor_url.core.errors import MissingSecurityKeyError, ThumborURLError, get_error_response
from thumbor_url.core.logging import get_logger
from thumbor_url.schemas.options import EncryptionMode, TransformOptions
from thumbor_url.services.cache import URLCache
from thumbor_url.services.serializer import url_options_path
from thumbor_url.services.signer import SecurityKey, Signer
from thumbor_url.utils import base64url

logger = get_logger("url_builder")

_QUERY_OR_FRAGMENT = re.compile(r"[?#]")


def strip_query(image_url: str) -> str:
    """Remove the query string (and any fragment) from an image URL."""
    return _QUERY_OR_FRAGMENT.split(image_url, maxsplit=1)[0]


def resolve_path(base_url: str, path: str) -> str:
    """Resolve an absolute path against the proxy base URL.

    The path replaces any path of the base URL. urljoin is not used because
    it collapses the empty segment in the embedded "http://".
    """
    parts = urlsplit(base_url)
    return urlunsplit((parts.scheme, parts.netloc, path, "", ""))


def build_secure_url(image_url: str,
                     options: TransformOptions,
                     base_url: str,
                     security_key: SecurityKey,
                     signer: Optional[Signer] = None,
                     signature_padding: bool = False) -> str:
    """Build a signed Thumbor URL.

    Args:
        image_url: Absolute URL of the original image
        options: Transformation options
        base_url: Base URL of the Thumbor server
        security_key: Shared secret
        signer: Signer to use, a default Signer when omitted
        signature_padding: Keep "=" padding on the signature segment

    Returns:
        URL of the form {base}/{signature}/{suffix}

    Raises:
        MissingSecurityKeyError: If the security key is empty
        CryptoInitializationError: If AES-128 signing cannot be set up
    """
    if not security_key:
        raise MissingSecurityKeyError(context={"image_url": image_url})

    signer = signer or Signer()
    image_url_string = strip_query(image_url)
    options_path = url_options_path(options)

    try:
        payload = signer.sign(image_url_string, options_path, security_key, options.encryption)
    except ThumborURLError as e:
        logger.error(f"Failed to sign {image_url_string}: {get_error_response(e)}")
        raise

    encoded = base64url.encode(payload.signature, padding=signature_padding)
    return resolve_path(base_url, f"/{encoded}/{payload.suffix}")


def default_options(config: Optional[Settings] = None) -> TransformOptions:
    """Create options that use the configured encryption mode."""
    config = config or default_settings
    return TransformOptions(encryption=EncryptionMode(config.thumbor_encryption))


class EndpointConfiguration:
    """A Thumbor server plus the cache of URLs built for it."""

    def __init__(self,
                 base_url: str,
                 security_key: Optional[SecurityKey] = None,
                 signer: Optional[Signer] = None,
                 cache_enabled: bool = True,
                 signature_padding: bool = False):
        self.base_url = base_url
        self.global_security_key = security_key
        self.signer = signer or Signer()
        self.signature_padding = signature_padding
        self.cache = URLCache(enabled=cache_enabled)

    @classmethod
    def from_settings(cls, config: Optional[Settings] = None, signer: Optional[Signer] = None) -> "EndpointConfiguration":
        """Create an endpoint from application settings."""
        config = config or default_settings
        return cls(
            base_url=config.thumbor_base_url,
            security_key=config.global_security_key,
            signer=signer,
            cache_enabled=config.cache_enabled,
            signature_padding=config.thumbor_signature_padding,
        )

    def secure_url(self,
                   image_url: str,
                   options: TransformOptions,
                   security_key: Optional[SecurityKey] = None) -> str:
        """Get the secure URL for an image, building it on a cache miss.

        Args:
            image_url: Absolute URL of the original image
            options: Transformation options
            security_key: Key to sign with instead of the global key

        Returns:
            The secure URL

        Raises:
            MissingSecurityKeyError: If no key is given and no global key
                is configured
        """
        if security_key is None:
            security_key = self.global_security_key
            if not security_key:
                raise MissingSecurityKeyError(context={"base_url": self.base_url})

        # Entries are only valid for the global key
        if security_key != self.global_security_key:
            return self._build(image_url, options, security_key)

        cache_key = URLCache.make_key(image_url, url_options_path(options), options.encryption)
        cached_url = self.cache.get(cache_key)
        if cached_url is not None:
            logger.debug(f"Cache hit for {cache_key}")
            return cached_url

        logger.debug(f"Cache miss for {cache_key}")
        secure_url = self._build(image_url, options, security_key)
        self.cache.set(cache_key, secure_url)
        return secure_url

    def _build(self, image_url: str, options: TransformOptions, security_key: SecurityKey) -> str:
        return build_secure_url(
            image_url,
            options,
            self.base_url,
            security_key,
            signer=self.signer,
            signature_padding=self.signature_padding,
        )
