"""Request ID propagation and access logging."""
import time
from typing import Any, Dict, Optional
from uuid import uuid4

from starlette.datastructures import Headers
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from llm_compass.core.config import Settings
from llm_compass.core.logger import LoggerService

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIDMiddleware:
    """Tags every HTTP exchange with a request ID.

    The ID comes from the incoming ``X-Request-ID`` header or is generated,
    is stored in ``request.state.request_id`` for routes and handlers, and is
    echoed on the response. One access log line is written per request;
    requests slower than ``SLOW_REQUEST_THRESHOLD`` seconds are logged as
    warnings.
    """

    def __init__(
        self,
        app: ASGIApp,
        logger: LoggerService,
        settings: Settings,
    ) -> None:
        self.app = app
        self.logger = logger.get_logger(__name__)
        self.slow_threshold = settings.SLOW_REQUEST_THRESHOLD

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request_id = Headers(scope=scope).get(REQUEST_ID_HEADER) or str(uuid4())
        scope.setdefault("state", {})["request_id"] = request_id

        log_fields: Dict[str, Any] = {
            "request_id": request_id,
            "method": scope["method"],
            "path": scope["path"],
        }
        client = scope.get("client")
        self.logger.debug(
            "Incoming request",
            extra={**log_fields, "client": client[0] if client else None},
        )

        status_code: Optional[int] = None

        async def send_with_request_id(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
                headers = list(message.get("headers", []))
                headers.append((REQUEST_ID_HEADER.encode(), request_id.encode()))
                message["headers"] = headers
            await send(message)

        start_time = time.perf_counter()
        try:
            await self.app(scope, receive, send_with_request_id)
        except Exception as e:
            self.logger.error(
                "Request failed",
                extra={
                    **log_fields,
                    "error": str(e),
                    "error_type": type(e).__name__,
                    "duration_ms": self._elapsed_ms(start_time),
                },
                exc_info=True,
            )
            raise

        duration_ms = self._elapsed_ms(start_time)
        log_fields.update(status_code=status_code, duration_ms=duration_ms)
        if duration_ms > self.slow_threshold * 1000:
            self.logger.warning("Slow request", extra=log_fields)
        else:
            self.logger.info("Request completed", extra=log_fields)

    @staticmethod
    def _elapsed_ms(start_time: float) -> float:
        return round((time.perf_counter() - start_time) * 1000, 2)
