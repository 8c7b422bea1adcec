"""Recommendation router implementation."""
from fastapi import Request

from ..docs import (
    RECOMMEND_DESCRIPTION,
    RECOMMEND_OPERATION_ID,
    RECOMMEND_RESPONSES,
    RECOMMEND_SUMMARY,
    RECOMMEND_TAGS,
)
from .base import BaseRouter
from llm_compass.core.logger import LoggerService
from llm_compass.providers.models import ProviderError, ValidationError
from llm_compass.recommender.models import RecommendRequest, RecommendResponse
from llm_compass.recommender.service import RecommendationService

RECOMMEND_FAILED_MESSAGE = "Failed to generate recommendations"


class RecommendRouter(BaseRouter):
    """Recommendation router implementation."""

    def __init__(
        self,
        logger: LoggerService,
        recommendation_service: RecommendationService,
        prefix: str = "",
    ) -> None:
        """Initialize router.

        Args:
            logger: Logger service instance
            recommendation_service: Recommendation pipeline service
            prefix: URL prefix for all routes

        Raises:
            ValueError: If any required dependency is missing
        """
        if not recommendation_service:
            raise ValueError("Recommendation service is required")

        self.recommendation_service = recommendation_service
        super().__init__(logger=logger, prefix=prefix, tags=RECOMMEND_TAGS)

    def _setup_routes(self) -> None:
        """Setup router endpoints."""
        self.router.add_api_route(
            "/recommend",
            self.recommend,
            methods=["POST"],
            response_model=RecommendResponse,
            responses=RECOMMEND_RESPONSES,
            summary=RECOMMEND_SUMMARY,
            description=RECOMMEND_DESCRIPTION,
            operation_id=RECOMMEND_OPERATION_ID,
        )

    async def recommend(
        self,
        recommend_request: RecommendRequest,
        fastapi_request: Request,
    ) -> RecommendResponse:
        """Recommend models for a use case.

        Args:
            recommend_request: Validated request body
            fastapi_request: FastAPI request object

        Returns:
            Recommendations with pipeline metadata

        Raises:
            ValidationError: If the use case or count is invalid
            ProviderError: If any downstream stage fails
        """
        request_id = self.request_id(fastapi_request)
        try:
            return await self.recommendation_service.recommend(
                use_case=recommend_request.useCase,
                count=recommend_request.count,
                include_models=recommend_request.includeModels,
                request_id=request_id,
            )
        except ValidationError:
            raise
        except ProviderError as e:
            raise ProviderError(
                code=500,
                message=RECOMMEND_FAILED_MESSAGE,
                details={"error": e.message},
            ) from e
