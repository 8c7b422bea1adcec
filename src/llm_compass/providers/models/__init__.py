"""Provider models package."""
from .errors import (
    CatalogParseError,
    ProviderError,
    SchemaViolationError,
    UpstreamFetchError,
    ValidationError,
)
from .model import (
    DEFAULT_MODALITY,
    CachedCatalog,
    Model,
    ModelArchitecture,
    ModelPricing,
    ModelTopProvider,
)
from .provider import ProviderConfig

__all__ = [
    "DEFAULT_MODALITY",
    "CachedCatalog",
    "CatalogParseError",
    "Model",
    "ModelArchitecture",
    "ModelPricing",
    "ModelTopProvider",
    "ProviderConfig",
    "ProviderError",
    "SchemaViolationError",
    "UpstreamFetchError",
    "ValidationError",
]
