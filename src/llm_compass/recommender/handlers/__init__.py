"""Recommendation pipeline handlers."""
from .base import RequestHandler
from .catalog import CatalogLoadHandler
from .extract import ConstraintExtractionHandler
from .filter import CandidateFilterHandler
from .rank import RankingHandler

__all__ = [
    "CandidateFilterHandler",
    "CatalogLoadHandler",
    "ConstraintExtractionHandler",
    "RankingHandler",
    "RequestHandler",
]
