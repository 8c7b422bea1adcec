"""DTO models for the HTTP API."""
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt

from llm_compass.providers.models import Model
from .constraints import ExtractedConstraints
from .results import Recommendation


class RecommendRequest(BaseModel):
    """Body of ``POST /recommend``.

    ``useCase`` is optional at the schema level so a missing value is reported
    as a 400 by the route rather than as a generic validation error.
    """

    useCase: Optional[str] = Field(None, description="Free-text use-case description")
    count: Optional[StrictInt] = Field(None, description="Number of recommendations to return")
    includeModels: bool = Field(
        False, description="Attach full catalog records to each recommendation"
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "useCase": "Analyze images of receipts and extract amounts",
                "count": 3,
            }
        }
    )


class PipelineTiming(BaseModel):
    """Elapsed milliseconds per pipeline stage."""

    stage1_ms: float = Field(..., description="Constraint extraction")
    stage2_ms: float = Field(..., description="Catalog filtering")
    stage3_ms: float = Field(..., description="Candidate ranking")
    total_ms: float = Field(..., description="Whole request")


class RecommendationMetadata(BaseModel):
    """Pipeline metadata returned alongside recommendations."""

    totalModels: int = Field(..., description="Catalog size")
    constraints: ExtractedConstraints = Field(..., description="Extracted constraints")
    afterFiltering: int = Field(..., description="Candidates after filtering")
    relaxLevel: int = Field(..., description="Relaxation level used by the filter")
    candidatesRanked: int = Field(..., description="Candidates sent to the ranker")
    timing: PipelineTiming


class RecommendResponse(BaseModel):
    """Body of a successful ``POST /recommend`` response."""

    recommendations: List[Recommendation]
    metadata: RecommendationMetadata


class ModelsResponse(BaseModel):
    """Body of ``GET /models``."""

    data: List[Model] = Field(..., description="Normalized catalog")


class ModelsRefreshResponse(BaseModel):
    """Body of ``POST /models/refresh``."""

    status: Literal["refreshed"] = "refreshed"
    model_count: int = Field(..., description="Number of models after refresh")
    fetched_at: float = Field(..., description="UNIX timestamp of the fetch")

    model_config = ConfigDict(protected_namespaces=())


class ApiInfoResponse(BaseModel):
    """Body of ``GET /``."""

    message: str
    version: str
    endpoints: Dict[str, Dict[str, str]]
