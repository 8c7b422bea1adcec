"""Error models for upstream providers and the recommendation API.

All errors carry an HTTP status code, a human-readable message and a details
dictionary. The error handler middleware renders them as
``{"error": message, "details": details["error"]}``.
"""
from typing import Any, Dict, Optional


class ProviderError(Exception):
    """Provider error with details."""

    def __init__(
        self,
        code: int,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize provider error.

        Args:
            code: HTTP status code
            message: Error message
            details: Optional error details
        """
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)


class UpstreamFetchError(ProviderError):
    """Upstream service unreachable, timed out or answered with a non-2xx status."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(code=500, message=message, details=details)


class CatalogParseError(ProviderError):
    """Catalog response body does not have the expected shape."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(code=500, message=message, details=details)


class SchemaViolationError(ProviderError):
    """Generative response does not parse into the expected structure."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(code=500, message=message, details=details)


class ValidationError(ProviderError):
    """Validation error."""

    def __init__(self, message: str, field: str) -> None:
        """Initialize validation error.

        Args:
            message: Error message
            field: Field that failed validation
        """
        super().__init__(
            code=400,
            message=message,
            details={"field": field},
        )
        self.field = field
