"""Upstream providers: model catalog and generative backends."""
from .base import CatalogProvider, GenerativeProvider

__all__ = ["CatalogProvider", "GenerativeProvider"]
