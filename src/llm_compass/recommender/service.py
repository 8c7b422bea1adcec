"""Recommendation service implementation."""
import time
import uuid
from typing import Optional

from llm_compass.core.config import Settings
from llm_compass.core.logger import LoggerService
from llm_compass.providers.models import ProviderError, ValidationError
from .handler_chain_factory import HandlerChainFactory
from .models import (
    PipelineTiming,
    Recommendation,
    RecommendationContext,
    RecommendationMetadata,
    RecommendResponse,
)


class RecommendationService:
    """Runs the three-stage recommendation pipeline for one use case."""

    def __init__(
        self,
        handler_chain_factory: HandlerChainFactory,
        logger: LoggerService,
        settings: Settings,
    ) -> None:
        """Initialize service.

        Args:
            handler_chain_factory: Factory for pipeline handler chains
            logger: Logger service
            settings: Application settings

        Raises:
            ValueError: If any required dependency is missing
        """
        self.logger = logger.get_logger(__name__)
        if not handler_chain_factory:
            self.logger.error("Handler chain factory not provided")
            raise ValueError("Handler chain factory is required")

        self.handler_chain_factory = handler_chain_factory
        self.settings = settings

    def validate(self, use_case: Optional[str], count: Optional[int]) -> int:
        """Check request input before any downstream work.

        Returns:
            Effective recommendation count

        Raises:
            ValidationError: If the use case is missing or the count is out of range
        """
        if use_case is None or not use_case.strip():
            raise ValidationError("Invalid request: useCase is required", "useCase")

        if count is None:
            return self.settings.DEFAULT_RECOMMENDATIONS
        if isinstance(count, bool) or not 1 <= count <= self.settings.MAX_RECOMMENDATIONS:
            raise ValidationError(
                f"Invalid request: count must be between 1 and "
                f"{self.settings.MAX_RECOMMENDATIONS}",
                "count",
            )
        return count

    async def recommend(
        self,
        use_case: Optional[str],
        count: Optional[int] = None,
        include_models: bool = False,
        request_id: Optional[str] = None,
    ) -> RecommendResponse:
        """Recommend models for a use case.

        Args:
            use_case: Free-text use-case description
            count: Number of recommendations, defaults to DEFAULT_RECOMMENDATIONS
            include_models: Attach full catalog records to recommendations
            request_id: Request identifier for tracing

        Returns:
            Recommendations plus pipeline metadata

        Raises:
            ValidationError: If the input is invalid
            ProviderError: If the catalog or the ranking call fails
        """
        effective_count = self.validate(use_case, count)
        assert use_case is not None
        context = RecommendationContext(
            request_id=request_id or str(uuid.uuid4()),
            use_case=use_case.strip(),
            count=effective_count,
            include_models=include_models,
        )

        self.logger.info(
            "Starting recommendation request",
            extra={
                "request_id": context.request_id,
                "use_case": context.use_case[:50],
                "count": context.count,
            },
        )

        start_time = time.perf_counter()
        try:
            await self.handler_chain_factory.create().handleRequest(context)
        except ProviderError as e:
            self.logger.error(
                "Provider error handling recommendation request",
                extra={
                    "request_id": context.request_id,
                    "error": e.message,
                    "details": e.details,
                },
            )
            raise
        except Exception as e:
            self.logger.error(
                "Failed to handle recommendation request",
                extra={"request_id": context.request_id, "error": str(e)},
                exc_info=True,
            )
            raise ProviderError(
                code=500,
                message="Failed to handle recommendation request",
                details={"error": str(e)},
            ) from e
        total_ms = round((time.perf_counter() - start_time) * 1000, 2)

        response = self._build_response(context, total_ms)
        self.logger.info(
            "Recommendation request completed",
            extra={
                "request_id": context.request_id,
                "recommendations": len(response.recommendations),
                "relax_level": response.metadata.relaxLevel,
                "total_ms": total_ms,
            },
        )
        return response

    def _build_response(
        self, context: RecommendationContext, total_ms: float
    ) -> RecommendResponse:
        if (
            context.catalog is None
            or context.constraints is None
            or context.filter_result is None
            or context.recommendations is None
        ):
            raise ProviderError(
                code=500,
                message="Recommendation pipeline did not complete",
                details={"error": "missing stage output in context"},
            )

        recommendations = list(context.recommendations)
        if not context.include_models:
            recommendations = [
                rec.model_copy(update={"model": None}) for rec in recommendations
            ]
        timings = context.timings_ms
        return RecommendResponse(
            recommendations=recommendations,
            metadata=RecommendationMetadata(
                totalModels=len(context.catalog.models),
                constraints=context.constraints,
                afterFiltering=context.filter_result.after_filtering,
                relaxLevel=context.filter_result.relax_level,
                candidatesRanked=len(context.ranked_candidates),
                timing=PipelineTiming(
                    stage1_ms=timings.get("stage1", 0.0),
                    stage2_ms=timings.get("stage2", 0.0),
                    stage3_ms=timings.get("stage3", 0.0),
                    total_ms=total_ms,
                ),
            ),
        )
