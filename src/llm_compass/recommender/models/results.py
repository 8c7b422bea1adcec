"""Pipeline stage results."""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_serializer

from llm_compass.providers.models import Model


class FilterResult(BaseModel):
    """Candidates surviving the deterministic filter."""

    model_config = ConfigDict(frozen=True)

    candidates: List[Model] = Field(..., description="Models eligible for ranking")
    relax_level: int = Field(
        ..., ge=0, le=3, description="How far constraints had to be relaxed (0-3)"
    )
    after_filtering: int = Field(
        ..., ge=0, description="Candidate count at the chosen level"
    )
    level_counts: Dict[int, int] = Field(
        default_factory=dict, description="Candidate count at each evaluated level"
    )


class Recommendation(BaseModel):
    """One ranked recommendation."""

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    model_id: str = Field(..., description="Recommended model identifier")
    reason: str = Field(..., description="One-sentence justification")
    model: Optional[Model] = Field(None, description="Full catalog record, when requested")

    @model_serializer(mode="wrap")
    def omit_missing_model(self, handler: Any) -> Dict[str, Any]:
        data = handler(self)
        if data.get("model") is None:
            data.pop("model", None)
        return data
