"""Constraint extraction handler (stage 1)."""
from llm_compass.core.logger import LoggerService
from ..extraction import ConstraintExtractor
from ..models import RecommendationContext
from .base import RequestHandler


class ConstraintExtractionHandler(RequestHandler):
    """Derive structured constraints from the use case."""

    stage = "stage1"

    def __init__(self, extractor: ConstraintExtractor, logger: LoggerService) -> None:
        """Initialize handler.

        Args:
            extractor: Configured extraction strategy
            logger: Logger service instance
        """
        self.extractor = extractor
        self.logger = logger.get_logger(__name__)

    def canHandle(self, context: RecommendationContext) -> bool:
        return context.constraints is None

    async def handleRequest(self, context: RecommendationContext) -> None:
        context.constraints = await self.extractor.extract(context.use_case)
        self.logger.info(
            "Constraints ready",
            extra={
                "request_id": context.request_id,
                "strategy": self.extractor.name,
                "constraints": context.constraints.model_dump(mode="json"),
            },
        )
