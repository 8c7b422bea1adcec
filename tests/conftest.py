"""Shared fixtures."""
import pytest

from llm_compass.core.cache import RedisClient
from llm_compass.core.config import Settings
from llm_compass.core.logger import LoggerService


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        GEMINI_API_KEY="test-key",
        LOG_FORMAT="text",
        LOG_LEVEL="WARNING",
        ENABLE_CACHE=False,
        EXTRACTION_STRATEGY="generative",
        API_PREFIX="",
    )


@pytest.fixture
def logger_service(settings: Settings) -> LoggerService:
    return LoggerService(settings)


@pytest.fixture
def redis_client(settings: Settings, logger_service: LoggerService) -> RedisClient:
    """Redis client in stub mode (no connection)."""
    return RedisClient(redis=None, logger=logger_service, settings=settings)
