import traceback
from typing import Dict, Any, Optional


# Context keys that may carry key material and must never be reported
SENSITIVE_CONTEXT_KEYS = ("password", "token", "secret", "key", "security_key")


class ThumborURLError(Exception):
    """Base exception class for thumbor-url.

    This provides a standardized way to handle errors with detailed context.
    """
    def __init__(self,
                 message: str,
                 error_code: str = "internal_error",
                 context: Optional[Dict[str, Any]] = None,
                 original_exception: Optional[Exception] = None):
        self.message = message
        self.error_code = error_code
        self.context = context or {}
        self.original_exception = original_exception
        self.traceback = traceback.format_exc() if original_exception else None

        # Add original exception details to context if available
        if original_exception:
            self.context.update({
                "original_error_type": type(original_exception).__name__,
                "original_error": str(original_exception)
            })

        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the error to a dictionary for reporting."""
        result = {
            "error": True,
            "error_code": self.error_code,
            "message": self.message,
        }

        # Include non-sensitive context information
        safe_context = {}
        for key, value in self.context.items():
            if key not in SENSITIVE_CONTEXT_KEYS and value is not None:
                safe_context[key] = value

        if safe_context:
            result["details"] = safe_context

        return result


class ConfigurationError(ThumborURLError):
    """Error for a missing security key or an invalid settings value."""
    def __init__(self, message: str, field: Optional[str] = None, context: Optional[Dict[str, Any]] = None):
        if field:
            context = context or {}
            context["field"] = field
            message = f"Invalid configuration for '{field}': {message}"

        super().__init__(
            message=message,
            error_code="configuration_error",
            context=context
        )


class MissingSecurityKeyError(ConfigurationError):
    """Error when a secure URL is requested but no security key is available."""
    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(
            message="A security key is required to build secure URLs. "
                    "Pass one explicitly or configure a global security key.",
            context=context
        )


class CryptoInitializationError(ThumborURLError):
    """Error when the cipher context or key schedule cannot be set up.

    Key and plaintext are always produced internally, so this signals a
    broken contract (empty key, wrong key length, unaligned input) and is
    never worth retrying.
    """
    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None, original_exception: Optional[Exception] = None):
        super().__init__(
            message=message,
            error_code="crypto_initialization_error",
            context=context,
            original_exception=original_exception
        )


class DecodeError(ThumborURLError):
    """Error for malformed base64url input."""
    def __init__(self, value: str, reason: str, original_exception: Optional[Exception] = None):
        super().__init__(
            message=f"Cannot decode base64url value: {reason}",
            error_code="decode_error",
            context={"length": len(value), "reason": reason},
            original_exception=original_exception
        )


def get_error_response(error: Exception) -> Dict[str, Any]:
    """Convert any exception to a standardized error dictionary.

    Args:
        error: The exception to convert

    Returns:
        A dictionary with error details suitable for structured logs
    """
    if isinstance(error, ThumborURLError):
        return error.to_dict()

    # Convert standard exceptions to our format
    return ThumborURLError(
        message=str(error),
        error_code="internal_error",
        original_exception=error
    ).to_dict()
