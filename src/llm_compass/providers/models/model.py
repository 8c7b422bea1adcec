"""Catalog model schemas."""
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_MODALITY = "text->text"
MODALITY_SEPARATOR = "->"


class ModelPricing(BaseModel):
    """Model pricing information.

    Prices are decimal strings to avoid floating-point precision loss.
    """

    model_config = ConfigDict(frozen=True)

    prompt: str = Field(
        "0",
        description="Cost per input token",
        json_schema_extra={"format": "decimal"},
    )
    completion: str = Field(
        "0",
        description="Cost per output token",
        json_schema_extra={"format": "decimal"},
    )
    request: str = Field(
        "0", description="Cost per request", json_schema_extra={"format": "decimal"}
    )
    image: str = Field(
        "0",
        description="Cost per image",
        json_schema_extra={"format": "decimal"},
    )


class ModelArchitecture(BaseModel):
    """Model architecture information."""

    model_config = ConfigDict(frozen=True)

    modality: str = Field(
        DEFAULT_MODALITY,
        description="Modality string, e.g. 'text+image->text'",
    )
    tokenizer: str = Field("unknown", description="Tokenizer or quantization tag")
    instruct_type: Optional[str] = Field(None, description="Instruction type")

    @field_validator("modality", mode="before")
    @classmethod
    def ensure_single_separator(cls, v: Optional[str]) -> str:
        """Keep exactly one '->' in the modality string."""
        if not v or not isinstance(v, str) or v.count(MODALITY_SEPARATOR) != 1:
            return DEFAULT_MODALITY
        return v


class ModelTopProvider(BaseModel):
    """Serving provider information."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Provider name")


class Model(BaseModel):
    """One catalog entry."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Model identifier, unique within the catalog")
    name: str = Field(..., description="Display name")
    description: str = Field("", description="Free-text description")
    context_length: int = Field(0, ge=0, description="Maximum context length in tokens")
    pricing: ModelPricing = Field(default_factory=ModelPricing)
    architecture: ModelArchitecture = Field(default_factory=ModelArchitecture)
    top_provider: Optional[ModelTopProvider] = Field(
        None, description="Provider serving the model"
    )

    @property
    def provider_name(self) -> Optional[str]:
        """Name of the serving provider, if known."""
        return self.top_provider.name if self.top_provider else None


class CachedCatalog(BaseModel):
    """Normalized catalog plus its fetch timestamp."""

    model_config = ConfigDict(frozen=True)

    models: Tuple[Model, ...] = Field(..., description="Normalized catalog")
    fetched_at: float = Field(..., description="UNIX timestamp of the fetch")
