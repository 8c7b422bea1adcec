"""Liveness endpoint."""
from typing import Dict

from fastapi import Request

from .base import BaseRouter
from llm_compass.core.logger import LoggerService

HEALTH_MESSAGE = "LLM Compass backend is running"
HEALTH_BODY = {"status": "ok", "message": HEALTH_MESSAGE}


class HealthRouter(BaseRouter):
    """``GET /health``. Never touches the catalog or the generative API."""

    def __init__(self, logger: LoggerService, prefix: str = ""):
        super().__init__(logger=logger, prefix=prefix, tags=["health"])

    def _setup_routes(self) -> None:
        self.router.add_api_route(
            "/health",
            self.health_check,
            methods=["GET"],
            response_model=Dict[str, str],
            summary="Health Check",
            description="Liveness probe. Answers without calling upstream services.",
            operation_id="get_health_status",
            responses={
                200: {
                    "description": "Service is running",
                    "content": {"application/json": {"example": HEALTH_BODY}},
                }
            },
        )

    async def health_check(self, request: Request) -> Dict[str, str]:
        self.logger.debug(
            "Health check requested", extra={"request_id": self.request_id(request)}
        )
        return dict(HEALTH_BODY)
