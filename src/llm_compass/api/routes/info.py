"""API info router implementation."""
from fastapi import Request

from .base import BaseRouter
from llm_compass.core.config import Settings
from llm_compass.core.logger import LoggerService
from llm_compass.recommender.models import ApiInfoResponse


class InfoRouter(BaseRouter):
    """Root endpoint describing the API."""

    def __init__(self, logger: LoggerService, settings: Settings):
        """Initialize router.

        Args:
            logger: Logger service instance
            settings: Settings instance
        """
        self.settings = settings
        super().__init__(logger=logger, tags=["info"])

    def _setup_routes(self) -> None:
        """Setup router endpoints."""
        self.router.add_api_route(
            "/",
            self.get_info,
            methods=["GET"],
            response_model=ApiInfoResponse,
            summary="API Info",
            description="Returns the service name, version and endpoint list.",
            operation_id="get_api_info",
        )

    def _build_info(self) -> ApiInfoResponse:
        prefix = self.settings.API_PREFIX
        return ApiInfoResponse(
            message="LLM Compass Backend API",
            version=self.settings.VERSION,
            endpoints={
                "health": {"path": f"{prefix}/health", "method": "GET"},
                "recommend": {
                    "path": f"{prefix}/recommend",
                    "method": "POST",
                    "body": "{ useCase: string, count?: number, includeModels?: boolean }",
                },
                "models": {"path": f"{prefix}/models", "method": "GET"},
                "refreshModels": {"path": f"{prefix}/models/refresh", "method": "POST"},
            },
        )

    async def get_info(self, request: Request) -> ApiInfoResponse:
        """Get API info endpoint."""
        self.logger.debug(
            "API info requested",
            extra={"request_id": self.request_id(request)},
        )
        return self._build_info()
