"""Generative ranking handler (stage 3)."""
from typing import Sequence

from llm_compass.core.logger import LoggerService
from llm_compass.providers.models import ProviderError
from ..models import RecommendationContext
from ..ranking import CandidateRanker, order_by_provider_priority
from .base import RequestHandler


class RankingHandler(RequestHandler):
    """Order, bound and rank the filtered candidates."""

    stage = "stage3"

    def __init__(
        self,
        ranker: CandidateRanker,
        logger: LoggerService,
        provider_priority: Sequence[str],
        max_candidates: int = 50,
    ) -> None:
        """Initialize handler.

        Args:
            ranker: Generative candidate ranker
            logger: Logger service instance
            provider_priority: Provider prefixes in preference order
            max_candidates: Upper bound of candidates sent to the ranker
        """
        self.ranker = ranker
        self.logger = logger.get_logger(__name__)
        self.provider_priority = list(provider_priority)
        self.max_candidates = max_candidates

    def canHandle(self, context: RecommendationContext) -> bool:
        return context.filter_result is not None and context.recommendations is None

    async def handleRequest(self, context: RecommendationContext) -> None:
        assert context.filter_result is not None
        candidates = context.filter_result.candidates
        if not candidates:
            raise ProviderError(
                code=500,
                message="Model catalog is empty",
                details={"error": "no models available for ranking"},
            )

        ordered = order_by_provider_priority(candidates, self.provider_priority)
        context.ranked_candidates = ordered[: self.max_candidates]
        if len(ordered) > self.max_candidates:
            self.logger.debug(
                "Candidate list truncated",
                extra={
                    "request_id": context.request_id,
                    "dropped": len(ordered) - self.max_candidates,
                },
            )

        context.recommendations = await self.ranker.rank(
            context.use_case,
            context.ranked_candidates,
            context.count,
            context.constraints,
        )
