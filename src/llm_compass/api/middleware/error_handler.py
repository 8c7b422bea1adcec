"""Error handling middleware."""
from typing import Any, Dict, Optional

from fastapi.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from llm_compass.core.config import Settings
from llm_compass.core.logger import LoggerService
from llm_compass.providers.models import ProviderError

INTERNAL_ERROR_MESSAGE = "Internal server error"


class ErrorResponse:
    """Error body of the public API."""

    @staticmethod
    def create(message: str, details: Optional[Any] = None) -> Dict[str, Any]:
        """Create error response.

        Args:
            message: Error message
            details: Optional human-readable detail

        Returns:
            ``{"error": message}`` plus ``details`` when given
        """
        body: Dict[str, Any] = {"error": message}
        if details is not None:
            body["details"] = str(details)
        return body


class ErrorHandlerMiddleware:
    """Render exceptions escaping the routes as JSON errors.

    Response format:
    {
        "error": string,
        "details"?: string
    }

    ``ProviderError`` keeps its status code and exposes ``details["error"]``;
    any other exception becomes a 500. Client errors (4xx) are logged as
    warnings, everything else as errors. When the response has already
    started the exception is re-raised untouched.
    """

    def __init__(
        self,
        app: ASGIApp,
        logger: LoggerService,
        settings: Settings,
    ) -> None:
        """Initialize middleware.

        Args:
            app: ASGI application
            logger: Logger service
            settings: Application settings
        """
        self.app = app
        self.logger = logger.get_logger(__name__)
        self.settings = settings

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def tracking_send(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, receive, tracking_send)
            return
        except Exception as e:
            if response_started:
                raise
            response = self._render(scope, e)

        await response(scope, receive, send)

    def _render(self, scope: Scope, exc: Exception) -> JSONResponse:
        log_fields = {
            "request_id": scope.get("state", {}).get("request_id"),
            "path": scope["path"],
            "method": scope["method"],
        }

        if isinstance(exc, ProviderError):
            log = self.logger.warning if exc.code < 500 else self.logger.error
            log(
                "Request failed with provider error",
                extra={
                    **log_fields,
                    "error_code": exc.code,
                    "error_message": exc.message,
                    "error_details": exc.details,
                    "error_type": type(exc).__name__,
                },
            )
            return JSONResponse(
                status_code=exc.code,
                content=ErrorResponse.create(exc.message, exc.details.get("error")),
            )

        self.logger.error(
            "Unexpected error",
            extra={
                **log_fields,
                "error_type": type(exc).__name__,
                "error_message": str(exc),
            },
            exc_info=exc,
        )
        return JSONResponse(
            status_code=500,
            content=ErrorResponse.create(INTERNAL_ERROR_MESSAGE, str(exc)),
        )
