"""Common router plumbing."""
from abc import ABC, abstractmethod
from typing import List, Optional

from fastapi import APIRouter, Request

from llm_compass.core.logger import LoggerService


class BaseRouter(ABC):
    """Owns an ``APIRouter`` and a module logger for one endpoint group."""

    def __init__(
        self,
        logger: LoggerService,
        prefix: str = "",
        tags: Optional[List[str]] = None,
    ):
        """Initialize router.

        Args:
            logger: Logger service instance
            prefix: API prefix prepended to every path
            tags: OpenAPI tags for documentation
        """
        if not logger:
            raise ValueError("Logger service is required")

        self.logger = logger.get_logger(type(self).__module__)
        self.router = APIRouter(prefix=prefix, tags=tags or [])
        self._setup_routes()

    @abstractmethod
    def _setup_routes(self) -> None:
        """Register the group's endpoints on ``self.router``."""

    @staticmethod
    def request_id(request: Request) -> Optional[str]:
        """Request ID assigned by ``RequestIDMiddleware``, if any."""
        return getattr(request.state, "request_id", None)
