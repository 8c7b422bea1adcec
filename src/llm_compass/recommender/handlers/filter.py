"""Deterministic filtering handler (stage 2)."""
from llm_compass.core.logger import LoggerService
from ..filter import CandidateFilter
from ..models import RecommendationContext
from .base import RequestHandler


class CandidateFilterHandler(RequestHandler):
    """Reduce the catalog to candidates matching the constraints."""

    stage = "stage2"

    def __init__(self, candidate_filter: CandidateFilter, logger: LoggerService) -> None:
        """Initialize handler.

        Args:
            candidate_filter: Relaxing candidate filter
            logger: Logger service instance
        """
        self.candidate_filter = candidate_filter
        self.logger = logger.get_logger(__name__)

    def canHandle(self, context: RecommendationContext) -> bool:
        return bool(
            context.catalog is not None
            and context.constraints is not None
            and context.filter_result is None
        )

    async def handleRequest(self, context: RecommendationContext) -> None:
        assert context.catalog is not None and context.constraints is not None
        context.filter_result = self.candidate_filter.filter(
            context.catalog.models, context.constraints
        )
        self.logger.info(
            "Candidates filtered",
            extra={
                "request_id": context.request_id,
                "total_models": len(context.catalog.models),
                "after_filtering": context.filter_result.after_filtering,
                "relax_level": context.filter_result.relax_level,
            },
        )
