"""OpenRouter catalog provider implementation."""
import time
import uuid
from typing import Dict, List

from httpx import AsyncClient, HTTPError, HTTPStatusError

from llm_compass.core.logger import LoggerService
from ..base import CatalogProvider
from ..models import CatalogParseError, Model, ProviderConfig, UpstreamFetchError
from .model_mapper import OpenRouterModelMapper


class OpenRouterCatalogProvider(CatalogProvider):
    """Fetches and normalizes the OpenRouter model catalog."""

    def __init__(
        self,
        logger: LoggerService,
        provider: ProviderConfig,
        model_mapper: OpenRouterModelMapper,
    ) -> None:
        """Initialize OpenRouter catalog provider.

        Args:
            logger: Logger service instance
            provider: Provider config with the catalog URL as base_url
            model_mapper: Catalog mapper instance
        """
        super().__init__(provider=provider)
        self.logger = logger.get_logger(__name__)
        self.model_mapper = model_mapper
        self._client = AsyncClient(
            timeout=self._provider.timeout,
            verify=self._provider.verify_ssl,
        )
        self.logger.info(
            "Initialized OpenRouterCatalogProvider",
            extra={
                "provider_id": self._provider.provider_id,
                "catalog_url": self._provider.base_url,
                "timeout": self._provider.timeout,
            },
        )

    def _get_request_headers(self) -> Dict[str, str]:
        """Get headers for the catalog request."""
        headers: Dict[str, str] = {"Accept": "application/json"}
        if self._provider.credentials:
            headers["Authorization"] = f"Bearer {self._provider.credentials}"
        return headers

    async def fetch(self) -> List[Model]:
        """Fetch the full normalized catalog.

        Returns:
            List of catalog models

        Raises:
            UpstreamFetchError: If the upstream call does not succeed
            CatalogParseError: If the response body has an unexpected shape
        """
        request_id = str(uuid.uuid4())
        start_time = time.perf_counter()
        self.logger.info(
            "Fetching model catalog",
            extra={"request_id": request_id, "catalog_url": self._provider.base_url},
        )

        try:
            response = await self._client.get(
                self._provider.base_url,
                headers=self._get_request_headers(),
            )
            response.raise_for_status()
        except HTTPStatusError as e:
            self.logger.error(
                "Catalog request returned error status",
                extra={
                    "request_id": request_id,
                    "status_code": e.response.status_code,
                    "response_text": e.response.text[:500],
                },
            )
            raise UpstreamFetchError(
                message=f"Catalog API returned {e.response.status_code}",
                details={
                    "error": str(e),
                    "status_code": e.response.status_code,
                },
            ) from e
        except HTTPError as e:
            self.logger.error(
                "HTTP error while fetching catalog",
                extra={
                    "request_id": request_id,
                    "error": str(e),
                    "error_type": type(e).__name__,
                },
            )
            raise UpstreamFetchError(
                message=f"Failed to fetch catalog: {type(e).__name__}",
                details={"error": str(e) or type(e).__name__},
            ) from e

        try:
            payload = response.json()
        except ValueError as e:
            self.logger.error(
                "Catalog response is not JSON",
                extra={"request_id": request_id, "error": str(e)},
            )
            raise CatalogParseError(
                message="Catalog response is not valid JSON",
                details={"error": str(e)},
            ) from e

        models = self.model_mapper.map_models(payload)
        self.logger.info(
            "Fetched model catalog",
            extra={
                "request_id": request_id,
                "model_count": len(models),
                "duration_ms": round((time.perf_counter() - start_time) * 1000, 2),
            },
        )
        return models

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()
