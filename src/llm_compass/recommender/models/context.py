"""Context model for the recommendation pipeline."""
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from llm_compass.providers.models import CachedCatalog, Model
from .constraints import ExtractedConstraints
from .results import FilterResult, Recommendation


class RecommendationContext(BaseModel):
    """State of one recommendation request as it moves through the handlers."""

    request_id: str = Field(description="Request identifier for tracing")
    use_case: str = Field(description="Free-text use-case description")
    count: int = Field(description="Number of recommendations requested")
    include_models: bool = Field(
        False, description="Attach full catalog records to recommendations"
    )
    catalog: Optional[CachedCatalog] = Field(
        None, description="Catalog snapshot used for this request"
    )
    constraints: Optional[ExtractedConstraints] = Field(
        None, description="Stage 1 output"
    )
    filter_result: Optional[FilterResult] = Field(None, description="Stage 2 output")
    ranked_candidates: List[Model] = Field(
        default_factory=list,
        description="Candidates sent to the ranker after ordering and truncation",
    )
    recommendations: Optional[List[Recommendation]] = Field(
        None, description="Stage 3 output"
    )
    timings_ms: Dict[str, float] = Field(
        default_factory=dict, description="Elapsed milliseconds per stage"
    )
