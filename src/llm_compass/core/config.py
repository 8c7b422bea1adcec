"""Application settings."""
import json
from typing import Annotated, List, Union

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

# Well-known provider prefixes, most preferred first. Used to order candidates
# before they are truncated for ranking.
DEFAULT_PROVIDER_PRIORITY: List[str] = [
    "openai/",
    "anthropic/",
    "google/",
    "meta-llama/",
    "mistralai/",
    "deepseek/",
    "qwen/",
    "x-ai/",
    "cohere/",
    "microsoft/",
    "amazon/",
    "nvidia/",
    "moonshotai/",
    "z-ai/",
    "perplexity/",
]


def _parse_str_list(v: Union[str, List[str]]) -> List[str]:
    """Parse a list setting given as JSON, comma-separated string or list."""
    if isinstance(v, list):
        return [str(item) for item in v]
    if isinstance(v, str):
        if v.startswith("["):
            try:
                parsed = json.loads(v)
            except json.JSONDecodeError:
                raise ValueError(v)
            if isinstance(parsed, list):
                return [str(item) for item in parsed]
            raise ValueError(v)
        return [i.strip() for i in v.split(",") if i.strip()]
    raise ValueError(v)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        extra="ignore",
        env_file=".env",
        env_file_encoding="utf-8",
    )
    """Application settings."""

    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = False

    # Project
    PROJECT_NAME: str = "llm-compass"
    VERSION: str = "0.1.0"

    # Host
    HOST: str = "0.0.0.0"
    PORT: int = 3001
    API_PREFIX: str = ""

    # CORS
    BACKEND_CORS_ORIGINS: Annotated[List[str], NoDecode] = ["*"]

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> List[str]:
        """Validate CORS origins."""
        return _parse_str_list(v)

    # Cache
    CACHE_TTL: int = 60 * 60  # 1 hour
    CACHE_PREFIX: str = "cache"

    # Redis
    ENABLE_CACHE: bool = False  # Feature toggle: when False, the shared catalog layer is no-op
    REDIS_HOST: str = "localhost"
    REDIS_PORT: int = 6379
    REDIS_DB: int = 0
    REDIS_USER: str = ""
    REDIS_PREFIX: str = "llm-compass"
    REDIS_PASSWORD: str = ""

    @property
    def REDIS_URL(self) -> str:
        """Get Redis connection URL."""
        user_part = self.REDIS_USER or ""
        password_part = f":{self.REDIS_PASSWORD}" if self.REDIS_PASSWORD else ""

        credentials = ""
        if user_part or self.REDIS_PASSWORD:
            credentials = f"{user_part}{password_part}@"

        return f"redis://{credentials}{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"

    DISABLE_SSL_VERIFICATION: bool = (
        False  # Feature flag to disable SSL certificate verification
    )

    # Requests slower than this many seconds are logged as warnings
    SLOW_REQUEST_THRESHOLD: float = 1.0

    # Gemini Settings
    GEMINI_API_KEY: str = Field(
        "",
        validation_alias=AliasChoices("GEMINI_API_KEY", "GOOGLE_API_KEY"),
    )
    GEMINI_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta"
    EXTRACTION_MODEL: str = "gemini-2.5-flash-lite"  # cheap, low latency
    RANKING_MODEL: str = "gemini-2.5-flash"
    EXTRACTION_STRATEGY: str = "generative"  # Available strategies: generative, heuristic
    EXTRACTION_TIMEOUT: float = 10.0  # seconds
    RANKING_TIMEOUT: float = 60.0  # seconds

    @field_validator("EXTRACTION_STRATEGY")
    @classmethod
    def validate_extraction_strategy(cls, v: str) -> str:
        """Validate extraction strategy name."""
        normalized = v.strip().lower()
        if normalized not in ("generative", "heuristic"):
            raise ValueError(f"Unknown extraction strategy: {v}")
        return normalized

    # OpenRouter catalog Settings
    OPENROUTER_CATALOG_URL: str = "https://openrouter.ai/api/frontend/models"
    OPENROUTER_API_KEY: str = ""
    CATALOG_TIMEOUT: float = 30.0  # seconds
    CATALOG_CACHE_TTL: int = 6 * 60 * 60  # 6 hours

    # Recommendation pipeline
    MIN_CANDIDATES: int = 10
    MAX_RANK_CANDIDATES: int = 50
    DEFAULT_RECOMMENDATIONS: int = 3
    MAX_RECOMMENDATIONS: int = 10
    PROVIDER_PRIORITY: Annotated[List[str], NoDecode] = DEFAULT_PROVIDER_PRIORITY.copy()

    @field_validator("PROVIDER_PRIORITY", mode="before")
    @classmethod
    def parse_provider_priority(cls, v: Union[str, List[str]]) -> List[str]:
        """Parse provider priority from JSON string, comma-separated string or list."""
        return _parse_str_list(v)

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"  # Available formats: json, text, structured
    LOG_EXTRA_FIELDS: Annotated[List[str], NoDecode] = []  # Additional fields for logs
    LOG_QUIET_LOGGERS: Annotated[List[str], NoDecode] = ["httpx", "httpcore"]

    @field_validator("LOG_EXTRA_FIELDS", "LOG_QUIET_LOGGERS", mode="before")
    @classmethod
    def parse_log_lists(cls, v: Union[str, List[str]]) -> List[str]:
        """Parse logging lists from JSON string, comma-separated string or list."""
        return _parse_str_list(v)


settings = Settings()
