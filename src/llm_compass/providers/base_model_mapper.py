"""Base mapper for catalog normalization."""
from typing import Any, Dict, List

from llm_compass.core.logger import LoggerService
from .models import Model


class BaseModelMapper:
    """Base mapper class turning raw catalog payloads into ``Model`` records."""

    def __init__(self, logger: LoggerService) -> None:
        """Initialize mapper.

        Args:
            logger: Logger service instance
        """
        self.logger = logger.get_logger(__name__)

    def map_models(self, payload: Dict[str, Any]) -> List[Model]:
        """Map a raw catalog response to normalized models.

        Args:
            payload: Decoded catalog response body

        Returns:
            List of normalized models

        Raises:
            CatalogParseError: If the payload has an unexpected shape
        """
        raise NotImplementedError("Subclasses must implement map_models")
