"""FastAPI dependency injection setup."""
from typing import Dict, Optional

from dependency_injector import providers
from fastapi import FastAPI

from .dependencies import container

# app.state attribute -> container provider it is resolved from
STATE_PROVIDERS: Dict[str, providers.Provider] = {
    "logger": container.logger,
    "settings": container.settings,
    "redis_client": container.redis_client,
    "catalog_provider": container.catalog_provider,
    "generative_provider": container.generative_provider,
    "catalog_cache": container.catalog_cache,
    "recommendation_service": container.recommendation_service,
}


def setup_di(app: FastAPI) -> None:
    """Resolve application services from the container onto ``app.state``.

    Every singleton is built eagerly so configuration problems (for example a
    missing Gemini API key) fail at startup rather than on the first request.

    Args:
        app: FastAPI application instance

    Raises:
        RuntimeError: If any service cannot be constructed
    """
    logger = container.logger().get_logger(__name__)
    logger.info("Starting dependency injection configuration")

    for attribute, provider in STATE_PROVIDERS.items():
        try:
            setattr(app.state, attribute, provider())
        except Exception as e:
            logger.error(
                "Failed to build dependency",
                extra={
                    "dependency": attribute,
                    "error": str(e),
                    "error_type": type(e).__name__,
                },
            )
            cleanup_di()
            raise RuntimeError(
                f"Dependency injection configuration failed: {attribute}"
            ) from e
        logger.debug("Registered dependency", extra={"dependency": attribute})

    logger.info(
        "Dependency injection configuration completed successfully",
        extra={"extraction_strategy": app.state.settings.EXTRACTION_STRATEGY},
    )


def cleanup_di(app: Optional[FastAPI] = None) -> None:
    """Reset every singleton so the next application gets fresh instances.

    Safe to call multiple times.
    """
    logger = container.logger().get_logger(__name__)
    container.shutdown_resources()
    container.reset_singletons()

    if app:
        for attribute in STATE_PROVIDERS:
            setattr(app.state, attribute, None)

    logger.info("Dependency injection cleanup completed")
