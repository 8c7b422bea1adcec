"""Models router implementation."""
from fastapi import Request

from .base import BaseRouter
from ..docs import ERROR_RESPONSES
from llm_compass.core.logger import LoggerService
from llm_compass.providers.models import ProviderError
from llm_compass.recommender.catalog_cache import CatalogCache
from llm_compass.recommender.models import ModelsRefreshResponse, ModelsResponse

FETCH_FAILED_MESSAGE = "Failed to fetch models"


class ModelsRouter(BaseRouter):
    """Catalog endpoints backed by the catalog cache."""

    def __init__(
        self,
        logger: LoggerService,
        catalog_cache: CatalogCache,
        prefix: str = "",
    ) -> None:
        """Initialize router.

        Args:
            logger: Logger service instance
            catalog_cache: Catalog cache
            prefix: URL prefix for all routes
        """
        self.catalog_cache = catalog_cache
        super().__init__(logger=logger, prefix=prefix, tags=["models"])

    def _setup_routes(self) -> None:
        """Setup router endpoints."""
        self.router.add_api_route(
            "/models",
            self.get_models,
            methods=["GET"],
            response_model=ModelsResponse,
            operation_id="get_models",
            responses={500: ERROR_RESPONSES[500]},
            summary="Get Models",
            description=(
                "Get the normalized OpenRouter catalog. The catalog is cached "
                "server-side and refreshed when older than CATALOG_CACHE_TTL."
            ),
        )
        self.router.add_api_route(
            "/models/refresh",
            self.refresh_models,
            methods=["POST"],
            response_model=ModelsRefreshResponse,
            operation_id="refresh_models",
            responses={500: ERROR_RESPONSES[500]},
            summary="Refresh Models",
            description="Invalidate the catalog cache and fetch the catalog again.",
        )

    async def get_models(self, fastapi_request: Request) -> ModelsResponse:
        """Get all catalog models.

        Args:
            fastapi_request: FastAPI request object

        Returns:
            Catalog models wrapped in data field

        Raises:
            ProviderError: If the catalog cannot be fetched
        """
        self.logger.debug(
            "Getting catalog models",
            extra={"request_id": self.request_id(fastapi_request)},
        )
        try:
            catalog = await self.catalog_cache.get()
        except ProviderError as e:
            raise ProviderError(
                code=500,
                message=FETCH_FAILED_MESSAGE,
                details={"error": e.message},
            ) from e
        return ModelsResponse(data=list(catalog.models))

    async def refresh_models(self, fastapi_request: Request) -> ModelsRefreshResponse:
        """Invalidate the cache and refetch the catalog.

        Args:
            fastapi_request: FastAPI request object

        Returns:
            Size and timestamp of the refreshed catalog

        Raises:
            ProviderError: If the catalog cannot be fetched
        """
        request_id = self.request_id(fastapi_request)
        self.logger.info("Catalog refresh requested", extra={"request_id": request_id})

        await self.catalog_cache.invalidate()
        try:
            catalog = await self.catalog_cache.get()
        except ProviderError as e:
            raise ProviderError(
                code=500,
                message=FETCH_FAILED_MESSAGE,
                details={"error": e.message},
            ) from e
        return ModelsRefreshResponse(
            model_count=len(catalog.models),
            fetched_at=catalog.fetched_at,
        )
