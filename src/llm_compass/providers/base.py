"""Base provider interfaces."""
from abc import ABC, abstractmethod
from typing import Any, Dict, List

from .models import Model, ProviderConfig


class CatalogProvider(ABC):
    """Source of the model catalog.

    Implementations are responsible for:
    - Fetching the raw catalog from the upstream service
    - Normalizing raw records into ``Model`` instances
    - Translating transport failures into provider errors
    """

    def __init__(self, provider: ProviderConfig) -> None:
        """Initialize provider.

        Args:
            provider: Provider configuration
        """
        self._provider = provider

    @abstractmethod
    async def fetch(self) -> List[Model]:
        """Fetch the full normalized catalog.

        Returns:
            List of catalog models

        Raises:
            UpstreamFetchError: If the upstream call does not succeed
            CatalogParseError: If the response body has an unexpected shape
        """
        raise NotImplementedError

    @abstractmethod
    async def close(self) -> None:
        """Close provider and release network resources."""
        raise NotImplementedError


class GenerativeProvider(ABC):
    """Generative model backend returning structured JSON.

    Used both for constraint extraction and for candidate ranking, so the
    backend can be swapped or stubbed without touching pipeline logic.
    """

    def __init__(self, provider: ProviderConfig) -> None:
        """Initialize provider.

        Args:
            provider: Provider configuration
        """
        self._provider = provider

    @abstractmethod
    async def generate_json(
        self,
        model: str,
        prompt: str,
        schema: Dict[str, Any],
        timeout: float,
    ) -> Any:
        """Run one generation constrained to a JSON response schema.

        Args:
            model: Generative model identifier
            prompt: Full prompt text
            schema: Response schema the output must follow
            timeout: Request timeout in seconds

        Returns:
            Decoded JSON value produced by the model

        Raises:
            UpstreamFetchError: If the call fails or times out
            SchemaViolationError: If the output is not valid JSON
        """
        raise NotImplementedError

    @abstractmethod
    async def close(self) -> None:
        """Close provider and release network resources."""
        raise NotImplementedError
