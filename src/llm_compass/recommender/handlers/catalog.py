"""Catalog loading handler."""
from llm_compass.core.logger import LoggerService
from ..catalog_cache import CatalogCache
from ..models import RecommendationContext
from .base import RequestHandler


class CatalogLoadHandler(RequestHandler):
    """Attach the current catalog snapshot to the context."""

    stage = "catalog"

    def __init__(self, catalog_cache: CatalogCache, logger: LoggerService) -> None:
        self.catalog_cache = catalog_cache
        self.logger = logger.get_logger(__name__)

    def canHandle(self, context: RecommendationContext) -> bool:
        return context.catalog is None

    async def handleRequest(self, context: RecommendationContext) -> None:
        context.catalog = await self.catalog_cache.get()
        self.logger.debug(
            "Catalog attached to context",
            extra={
                "request_id": context.request_id,
                "model_count": len(context.catalog.models),
            },
        )
