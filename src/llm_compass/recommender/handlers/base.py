"""Base class for recommendation pipeline handlers."""
from abc import ABC, abstractmethod
from typing import Optional

from ..models import RecommendationContext


class RequestHandler(ABC):
    """Base class for pipeline handlers.

    Handlers mutate the shared ``RecommendationContext``. A handler with a
    ``stage`` name has its elapsed time recorded under that name.
    """

    stage: Optional[str] = None

    @abstractmethod
    def canHandle(self, context: RecommendationContext) -> bool:
        """Check if handler can process the request.

        Args:
            context: Recommendation context

        Returns:
            bool: True if handler can process the request
        """
        raise NotImplementedError

    @abstractmethod
    async def handleRequest(self, context: RecommendationContext) -> None:
        """Handle request.

        Args:
            context: Recommendation context

        Raises:
            ProviderError: If request handling fails
        """
        raise NotImplementedError
