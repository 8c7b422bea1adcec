"""Recommendation pipeline models."""
from .api import (
    ApiInfoResponse,
    ModelsRefreshResponse,
    ModelsResponse,
    PipelineTiming,
    RecommendationMetadata,
    RecommendRequest,
    RecommendResponse,
)
from .constraints import (
    ExtractedConstraints,
    InputModality,
    OutputModality,
    SpeedPreference,
)
from .context import RecommendationContext
from .results import FilterResult, Recommendation

__all__ = [
    "ApiInfoResponse",
    "ExtractedConstraints",
    "FilterResult",
    "InputModality",
    "ModelsRefreshResponse",
    "ModelsResponse",
    "OutputModality",
    "PipelineTiming",
    "Recommendation",
    "RecommendationContext",
    "RecommendationMetadata",
    "RecommendRequest",
    "RecommendResponse",
    "SpeedPreference",
]
