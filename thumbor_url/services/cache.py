import threading
from typing import Dict, Any, Optional

from thumbor_url.schemas.options import EncryptionMode


class URLCache:
    """Cache of built secure URLs.

    Entries never expire and are never evicted; a secure URL is a pure
    function of its key, so a stored value stays valid for as long as the
    security key does. Racing misses may both compute and store the same
    value.
    """

    def __init__(self, enabled: bool = True):
        self._cache: Dict[str, str] = {}
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0
        self._enabled = enabled

    @staticmethod
    def make_key(image_url: str, options_path: str, encryption: EncryptionMode = EncryptionMode.HMAC_SHA1) -> str:
        """Build the cache key for an image URL and options path.

        AES-128 URLs for the same image and options differ from HMAC ones,
        so their keys carry the mode.
        """
        # Deliberately differs from the plain "{image_url}-{options_path}"
        # form for AES-128, which would otherwise share HMAC entries
        if encryption == EncryptionMode.AES128:
            return f"{image_url}-{options_path}-{encryption.value}"
        return f"{image_url}-{options_path}"

    def get(self, key: str) -> Optional[str]:
        """Get a cached secure URL if available.

        Args:
            key: Cache key from make_key()

        Returns:
            The cached URL or None if not cached
        """
        with self._lock:
            if not self._enabled:
                self._misses += 1
                return None

            url = self._cache.get(key)
            if url is None:
                self._misses += 1
                return None

            self._hits += 1
            return url

    def set(self, key: str, url: str) -> None:
        """Cache a secure URL."""
        if not self._enabled:
            return

        with self._lock:
            self._cache[key] = url

    def clear(self) -> int:
        """Drop every entry.

        Returns:
            Number of removed entries
        """
        with self._lock:
            count = len(self._cache)
            self._cache.clear()
        return count

    def get_stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        with self._lock:
            total = self._hits + self._misses
            return {
                "enabled": self._enabled,
                "size": len(self._cache),
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": self._hits / total if total else 0.0,
            }

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)
