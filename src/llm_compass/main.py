"""LLM Compass FastAPI application entry point."""
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI
from redis.exceptions import RedisError

from .app import LLMCompassApp
from .core.config import settings
from .di.setup import cleanup_di, setup_di


@asynccontextmanager
async def lifespan(app: LLMCompassApp) -> AsyncGenerator[None, None]:
    """Manage application lifespan.

    Pings Redis on startup and closes upstream HTTP clients and Redis on
    shutdown.

    Args:
        app: FastAPI application instance

    Yields:
        None
    """
    app_logger = app.state.logger.get_logger(__name__)
    app_logger.info("Application configured successfully")

    # Initialize Redis (no-op when ENABLE_CACHE=False)
    if app.state.settings.ENABLE_CACHE:
        try:
            await app.state.redis_client.ping()
            app_logger.info("Redis client initialized successfully")
        except RedisError as e:
            app_logger.error(
                "Failed to connect to Redis",
                extra={"error": str(e)},
            )
    else:
        app_logger.info("Redis disabled (ENABLE_CACHE=False), catalog cache is in-process only")

    try:
        yield
    finally:
        app_logger.info("Shutting down application")

        await app.state.catalog_provider.close()
        await app.state.generative_provider.close()
        app_logger.info("Upstream HTTP clients closed")

        await app.state.redis_client.close()
        app_logger.info("Redis client closed")

        cleanup_di(app)


def init_app() -> FastAPI:
    """Initialize FastAPI application."""
    app = LLMCompassApp(lifespan=lifespan)

    setup_di(app)
    app.configure()

    return app


def get_app() -> FastAPI:
    """Factory function to create the FastAPI app."""
    return init_app()


def run() -> None:
    """Run the server with uvicorn."""
    uvicorn.run(
        "llm_compass.main:get_app",
        factory=True,
        host=settings.HOST,
        port=int(settings.PORT),
        reload=settings.DEBUG,
    )


if __name__ == "__main__":
    run()
