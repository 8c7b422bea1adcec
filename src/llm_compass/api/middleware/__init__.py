"""HTTP middleware."""
from .error_handler import ErrorHandlerMiddleware, ErrorResponse
from .request_id import RequestIDMiddleware

__all__ = ["ErrorHandlerMiddleware", "ErrorResponse", "RequestIDMiddleware"]
