"""Dependency injection container."""
from typing import Optional

from dependency_injector import containers, providers
from redis.asyncio import Redis

from llm_compass.core.cache import RedisClient
from llm_compass.core.config import Settings
from llm_compass.core.logger import LoggerService
from llm_compass.providers.gemini import GeminiMapper, GeminiProvider
from llm_compass.providers.models import ProviderConfig
from llm_compass.providers.openrouter import (
    OpenRouterCatalogProvider,
    OpenRouterModelMapper,
)
from llm_compass.recommender.catalog_cache import CatalogCache
from llm_compass.recommender.extraction import (
    GenerativeConstraintExtractor,
    HeuristicConstraintExtractor,
)
from llm_compass.recommender.filter import CandidateFilter
from llm_compass.recommender.handler_chain_factory import HandlerChainFactory
from llm_compass.recommender.ranking import CandidateRanker
from llm_compass.recommender.service import RecommendationService


def create_redis(settings: Settings) -> Redis:
    """Create Redis connection.

    Args:
        settings: Application settings.

    Returns:
        Redis: Redis connection.
    """
    return Redis.from_url(
        str(settings.REDIS_URL),
        encoding="utf-8",
        decode_responses=True,
    )


def get_redis_connection(settings: Settings) -> Optional[Redis]:
    """Return Redis connection or None when ENABLE_CACHE is False (no connect)."""
    if not settings.ENABLE_CACHE:
        return None
    return create_redis(settings)


def create_catalog_provider_config(settings: Settings) -> ProviderConfig:
    """Connection settings for the OpenRouter catalog."""
    return ProviderConfig(
        provider_id="openrouter",
        name="OpenRouter",
        credentials=settings.OPENROUTER_API_KEY,
        base_url=settings.OPENROUTER_CATALOG_URL,
        timeout=settings.CATALOG_TIMEOUT,
        verify_ssl=not settings.DISABLE_SSL_VERIFICATION,
    )


def create_gemini_provider_config(settings: Settings) -> ProviderConfig:
    """Connection settings for the Gemini API."""
    return ProviderConfig(
        provider_id="gemini",
        name="Google Gemini",
        credentials=settings.GEMINI_API_KEY,
        base_url=settings.GEMINI_BASE_URL,
        timeout=max(settings.EXTRACTION_TIMEOUT, settings.RANKING_TIMEOUT),
        verify_ssl=not settings.DISABLE_SSL_VERIFICATION,
    )


def get_extraction_strategy(settings: Settings) -> str:
    return settings.EXTRACTION_STRATEGY


class Container(containers.DeclarativeContainer):
    """Main application container."""

    wiring_config = containers.WiringConfiguration()

    # Settings
    settings = providers.Singleton(Settings)

    # Core services
    logger = providers.Singleton(LoggerService, settings_instance=settings)

    # Redis connection (None when ENABLE_CACHE=False; RedisClient then runs in stub mode)
    redis_connection = providers.Singleton(
        get_redis_connection,
        settings=settings,
    )
    redis_client = providers.Singleton(
        RedisClient,
        redis=redis_connection,
        logger=logger,
        settings=settings,
    )

    # Catalog
    catalog_provider_config = providers.Singleton(
        create_catalog_provider_config, settings=settings
    )
    catalog_model_mapper = providers.Singleton(OpenRouterModelMapper, logger=logger)
    catalog_provider = providers.Singleton(
        OpenRouterCatalogProvider,
        logger=logger,
        provider=catalog_provider_config,
        model_mapper=catalog_model_mapper,
    )
    catalog_cache = providers.Singleton(
        CatalogCache,
        catalog_provider=catalog_provider,
        cache=redis_client,
        logger=logger,
        settings=settings,
    )

    # Generative backend
    gemini_provider_config = providers.Singleton(
        create_gemini_provider_config, settings=settings
    )
    gemini_mapper = providers.Singleton(GeminiMapper)
    generative_provider = providers.Singleton(
        GeminiProvider,
        logger=logger,
        provider=gemini_provider_config,
        mapper=gemini_mapper,
    )

    # Pipeline stages
    extractor = providers.Selector(
        providers.Callable(get_extraction_strategy, settings=settings),
        generative=providers.Singleton(
            GenerativeConstraintExtractor,
            generative_provider=generative_provider,
            logger=logger,
            model=settings.provided.EXTRACTION_MODEL,
            timeout=settings.provided.EXTRACTION_TIMEOUT,
        ),
        heuristic=providers.Singleton(HeuristicConstraintExtractor, logger=logger),
    )
    candidate_filter = providers.Singleton(
        CandidateFilter,
        logger=logger,
        min_candidates=settings.provided.MIN_CANDIDATES,
    )
    ranker = providers.Singleton(
        CandidateRanker,
        generative_provider=generative_provider,
        logger=logger,
        model=settings.provided.RANKING_MODEL,
        timeout=settings.provided.RANKING_TIMEOUT,
    )

    # Handler chain factory
    handler_chain_factory = providers.Singleton(
        HandlerChainFactory,
        logger=logger,
        settings=settings,
        catalog_cache=catalog_cache,
        extractor=extractor,
        candidate_filter=candidate_filter,
        ranker=ranker,
    )

    # Recommendation service
    recommendation_service = providers.Singleton(
        RecommendationService,
        handler_chain_factory=handler_chain_factory,
        logger=logger,
        settings=settings,
    )


container = Container()
