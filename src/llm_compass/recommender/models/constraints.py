"""Structured constraints extracted from a use-case description."""
from enum import Enum
from typing import Any, FrozenSet, Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


class InputModality(str, Enum):
    """Input data types a model may accept."""

    TEXT = "text"
    IMAGE = "image"
    AUDIO = "audio"
    VIDEO = "video"
    FILE = "file"


class OutputModality(str, Enum):
    """Output data types a model may produce."""

    TEXT = "text"
    IMAGE = "image"
    EMBEDDINGS = "embeddings"


class SpeedPreference(str, Enum):
    """Latency/quality trade-off requested by the user."""

    FAST = "fast"
    BALANCED = "balanced"
    POWERFUL = "powerful"
    ANY = "any"


def _normalize_strings(value: Any) -> FrozenSet[str]:
    if value is None:
        return frozenset()
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, Iterable):
        raise ValueError("expected a list of strings")
    items = (str(item.value if isinstance(item, Enum) else item) for item in value)
    return frozenset(item.strip().lower() for item in items if item.strip())


class ExtractedConstraints(BaseModel):
    """Technical requirements derived from one use-case string.

    Instances are immutable. Sets are serialized as sorted lists so echoed
    metadata is stable.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    input_modalities: FrozenSet[InputModality] = Field(
        default_factory=frozenset, description="Required input modalities"
    )
    output_modalities: FrozenSet[OutputModality] = Field(
        default_factory=frozenset, description="Required output modalities"
    )
    min_context: int = Field(
        0, ge=0, description="Minimum context length in tokens, 0 = unconstrained"
    )
    max_price_per_million: Optional[float] = Field(
        None,
        ge=0,
        description="Maximum input price in $ per million tokens, None = unconstrained",
    )
    preferred_providers: FrozenSet[str] = Field(
        default_factory=frozenset, description="Preferred provider-id prefixes"
    )
    excluded_providers: FrozenSet[str] = Field(
        default_factory=frozenset, description="Excluded provider-id prefixes"
    )
    capability_keywords: FrozenSet[str] = Field(
        default_factory=frozenset,
        description="Keywords that should appear in name/description (soft)",
    )
    exclude_keywords: FrozenSet[str] = Field(
        default_factory=frozenset,
        description="Keywords that must not appear (hard)",
    )
    speed: SpeedPreference = Field(SpeedPreference.ANY, description="Speed preference")

    @field_validator(
        "input_modalities",
        "output_modalities",
        "preferred_providers",
        "excluded_providers",
        "capability_keywords",
        "exclude_keywords",
        mode="before",
    )
    @classmethod
    def normalize_string_sets(cls, v: Any) -> FrozenSet[str]:
        """Lower-case, strip and de-duplicate string collections."""
        return _normalize_strings(v)

    @field_validator("speed", mode="before")
    @classmethod
    def normalize_speed(cls, v: Any) -> Any:
        if v is None:
            return SpeedPreference.ANY
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("min_context", mode="before")
    @classmethod
    def normalize_min_context(cls, v: Any) -> Any:
        return 0 if v is None else v

    @field_serializer(
        "input_modalities",
        "output_modalities",
        "preferred_providers",
        "excluded_providers",
        "capability_keywords",
        "exclude_keywords",
    )
    def serialize_sets(self, value: FrozenSet[Any]) -> List[str]:
        return sorted(item.value if isinstance(item, Enum) else item for item in value)

    @classmethod
    def default(cls) -> "ExtractedConstraints":
        """Conservative constraints used when extraction fails."""
        return cls(
            input_modalities=frozenset({InputModality.TEXT}),
            output_modalities=frozenset({OutputModality.TEXT}),
            min_context=0,
            max_price_per_million=None,
            exclude_keywords=frozenset({"embedding", "base"}),
            speed=SpeedPreference.ANY,
        )
