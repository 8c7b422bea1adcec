"""Handler chain factory for recommendations."""
from llm_compass.core.config import Settings
from llm_compass.core.logger import LoggerService
from .catalog_cache import CatalogCache
from .extraction import ConstraintExtractor
from .filter import CandidateFilter
from .handler_chain import RequestHandlerChain
from .handlers import (
    CandidateFilterHandler,
    CatalogLoadHandler,
    ConstraintExtractionHandler,
    RankingHandler,
    RequestHandler,
)
from .ranking import CandidateRanker


class HandlerChainFactory:
    """Factory for creating recommendation handler chains.

    Handlers run in a fixed order:
    1. Catalog loading - Read the catalog through the cache
    2. Constraint extraction - Turn the use case into constraints
    3. Filtering - Apply constraints with progressive relaxation
    4. Ranking - Order, bound and rank the candidates
    """

    def __init__(
        self,
        logger: LoggerService,
        settings: Settings,
        catalog_cache: CatalogCache,
        extractor: ConstraintExtractor,
        candidate_filter: CandidateFilter,
        ranker: CandidateRanker,
    ) -> None:
        """Initialize factory.

        Args:
            logger: Logger service
            settings: Application settings
            catalog_cache: Catalog cache
            extractor: Configured extraction strategy
            candidate_filter: Relaxing candidate filter
            ranker: Generative candidate ranker

        Raises:
            ValueError: If any required service is missing
        """
        if not logger:
            raise ValueError("Logger service is required")
        if not settings:
            raise ValueError("Settings is required")
        self.logger = logger.get_logger(__name__)
        self.instance_logger = logger
        self.settings = settings
        self.catalog_cache = catalog_cache
        self.extractor = extractor
        self.candidate_filter = candidate_filter
        self.ranker = ranker

        self.logger.debug(
            "Initialized HandlerChainFactory",
            extra={"extraction_strategy": extractor.name},
        )

    def create(self) -> RequestHandlerChain:
        """Create the recommendation handler chain.

        Returns:
            Configured handler chain instance
        """
        handlers: list[RequestHandler] = [
            CatalogLoadHandler(
                catalog_cache=self.catalog_cache,
                logger=self.instance_logger,
            ),
            ConstraintExtractionHandler(
                extractor=self.extractor,
                logger=self.instance_logger,
            ),
            CandidateFilterHandler(
                candidate_filter=self.candidate_filter,
                logger=self.instance_logger,
            ),
            RankingHandler(
                ranker=self.ranker,
                logger=self.instance_logger,
                provider_priority=self.settings.PROVIDER_PRIORITY,
                max_candidates=self.settings.MAX_RANK_CANDIDATES,
            ),
        ]

        chain = RequestHandlerChain(handlers, logger=self.instance_logger)
        self.logger.debug(
            "Handler chain created",
            extra={
                "total_handlers": len(handlers),
                "handler_types": [h.__class__.__name__ for h in handlers],
            },
        )
        return chain
