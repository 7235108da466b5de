import os

from pydantic import BaseModel, ConfigDict, Field, field_validator
from dotenv import load_dotenv

from thumbor_url.core.errors import ConfigurationError

# Load environment variables from .env file if it exists
load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "t")


class Settings(BaseModel):
    """Application settings."""
    model_config = ConfigDict(validate_default=True)

    # Thumbor endpoint configuration
    thumbor_base_url: str = Field(
        default_factory=lambda: os.getenv("THUMBOR_BASE_URL", "http://localhost:8888")
    )
    thumbor_security_key: str = Field(
        default_factory=lambda: os.getenv("THUMBOR_SECURITY_KEY", ""),
        repr=False
    )

    # Signing scheme for options created through default_options()
    thumbor_encryption: str = Field(
        default_factory=lambda: os.getenv("THUMBOR_ENCRYPTION", "hmac-sha1").lower()
    )

    # Keep the "=" padding on the signature segment
    thumbor_signature_padding: bool = Field(
        default_factory=lambda: _env_flag("THUMBOR_SIGNATURE_PADDING", "false")
    )

    # Cache Configuration
    cache_enabled: bool = Field(
        default_factory=lambda: _env_flag("CACHE_ENABLED", "true")
    )

    @field_validator("thumbor_encryption")
    @classmethod
    def validate_encryption(cls, v):
        """Validate the encryption mode name."""
        v = v.lower()
        valid_modes = ["hmac-sha1", "aes128"]
        if v not in valid_modes:
            raise ConfigurationError(
                f"Unsupported encryption mode: {v}. Must be one of: {', '.join(valid_modes)}",
                field="thumbor_encryption"
            )
        return v

    @property
    def global_security_key(self):
        """The configured security key, or None when unset."""
        return self.thumbor_security_key or None


# Create global settings instance
settings = Settings()
