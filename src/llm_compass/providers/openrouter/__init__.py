"""OpenRouter catalog provider."""
from .model_mapper import OpenRouterModelMapper
from .provider import OpenRouterCatalogProvider

__all__ = ["OpenRouterCatalogProvider", "OpenRouterModelMapper"]
