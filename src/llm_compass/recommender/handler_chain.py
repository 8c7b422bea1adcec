"""Request handler chain implementation."""
import time
from typing import List

from llm_compass.core.logger import LoggerService
from .handlers.base import RequestHandler
from .models import RecommendationContext


class RequestHandlerChain:
    """Chain of recommendation pipeline handlers."""

    def __init__(self, handlers: List[RequestHandler], logger: LoggerService) -> None:
        """Initialize handler chain.

        Args:
            handlers: List of request handlers
            logger: Logger service for chain operations

        Raises:
            ValueError: If logger is not provided
        """
        if not logger:
            raise ValueError("Logger service is required")

        self.handlers = handlers
        self.logger = logger.get_logger(__name__)

        self.logger.debug(
            "Initialized RequestHandlerChain",
            extra={
                "handler_count": len(handlers),
                "handler_types": [h.__class__.__name__ for h in handlers],
            },
        )

    async def handleRequest(self, context: RecommendationContext) -> None:
        """Run the context through every applicable handler in order.

        Args:
            context: Recommendation context

        Raises:
            ProviderError: If request handling fails
        """
        self.logger.info(
            "Starting request handling chain",
            extra={
                "request_id": context.request_id,
                "handler_count": len(self.handlers),
            },
        )

        for idx, handler in enumerate(self.handlers, 1):
            handler_name = handler.__class__.__name__

            if not handler.canHandle(context):
                self.logger.debug(
                    "Handler skipped - cannot handle request",
                    extra={"request_id": context.request_id, "handler": handler_name},
                )
                continue

            self.logger.debug(
                "Executing handler",
                extra={
                    "request_id": context.request_id,
                    "handler": handler_name,
                    "position": idx,
                    "total": len(self.handlers),
                },
            )
            start_time = time.perf_counter()
            try:
                await handler.handleRequest(context)
            except Exception as e:
                self.logger.error(
                    "Handler failed",
                    extra={
                        "request_id": context.request_id,
                        "handler": handler_name,
                        "error": str(e),
                        "error_type": type(e).__name__,
                    },
                )
                raise

            elapsed_ms = round((time.perf_counter() - start_time) * 1000, 2)
            if handler.stage:
                context.timings_ms[handler.stage] = elapsed_ms
            self.logger.info(
                "Handler completed",
                extra={
                    "request_id": context.request_id,
                    "handler": handler_name,
                    "stage": handler.stage,
                    "duration_ms": elapsed_ms,
                },
            )

        self.logger.info(
            "Completed request handling chain",
            extra={
                "request_id": context.request_id,
                "timings_ms": context.timings_ms,
                "has_recommendations": bool(context.recommendations),
            },
        )
