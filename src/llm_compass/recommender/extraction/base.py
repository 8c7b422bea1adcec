"""Base class for constraint extractors."""
from abc import ABC, abstractmethod

from ..models import ExtractedConstraints


class ConstraintExtractor(ABC):
    """Turns a free-text use case into ``ExtractedConstraints``."""

    name: str = "base"

    @abstractmethod
    async def extract(self, use_case: str) -> ExtractedConstraints:
        """Extract constraints from a use-case description.

        Implementations never raise: on failure they return a usable,
        possibly default, constraint set.

        Args:
            use_case: Free-text use-case description

        Returns:
            Extracted constraints
        """
        raise NotImplementedError
