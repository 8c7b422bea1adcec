"""Model recommendation pipeline."""
from .catalog_cache import CatalogCache
from .filter import CandidateFilter
from .handler_chain import RequestHandlerChain
from .handler_chain_factory import HandlerChainFactory
from .ranking import CandidateRanker, order_by_provider_priority
from .service import RecommendationService

__all__ = [
    "CandidateFilter",
    "CandidateRanker",
    "CatalogCache",
    "HandlerChainFactory",
    "RecommendationService",
    "RequestHandlerChain",
    "order_by_provider_priority",
]
