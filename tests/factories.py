"""Builders for catalog records used across tests."""
from typing import Any, Iterable, List, Optional
from unittest.mock import AsyncMock, MagicMock

from llm_compass.providers.base import CatalogProvider, GenerativeProvider
from llm_compass.providers.models import (
    Model,
    ModelArchitecture,
    ModelPricing,
    ModelTopProvider,
)


def make_model(
    model_id: str,
    name: Optional[str] = None,
    modality: str = "text->text",
    prompt: str = "0.000001",
    completion: str = "0.000002",
    image: str = "0",
    context_length: int = 8192,
    description: str = "",
    provider: Optional[str] = None,
) -> Model:
    return Model(
        id=model_id,
        name=name or model_id.split("/")[-1].replace("-", " ").title(),
        description=description,
        context_length=context_length,
        pricing=ModelPricing(prompt=prompt, completion=completion, image=image),
        architecture=ModelArchitecture(modality=modality),
        top_provider=ModelTopProvider(name=provider) if provider else None,
    )


def make_catalog(count: int, prefix: str = "vendor/text-model", **kwargs) -> List[Model]:
    """``count`` distinct text models sharing the given attributes."""
    return [make_model(f"{prefix}-{i}", **kwargs) for i in range(count)]


def ids(models: Iterable[Model]) -> List[str]:
    return [m.id for m in models]


def make_catalog_provider(models: List[Model]) -> MagicMock:
    provider = MagicMock(spec=CatalogProvider)
    provider.fetch = AsyncMock(return_value=list(models))
    provider.close = AsyncMock()
    return provider


def make_generative_provider(result: Any = None, side_effect: Any = None) -> MagicMock:
    provider = MagicMock(spec=GenerativeProvider)
    provider.generate_json = AsyncMock(return_value=result, side_effect=side_effect)
    provider.close = AsyncMock()
    return provider
