"""Recommendation API documentation."""
from typing import Any, Dict

from .responses import ERROR_RESPONSES

RECOMMEND_SUMMARY = "Recommend Models"

RECOMMEND_DESCRIPTION = """
Recommends catalog models for a free-text use case.

The request runs a three-stage pipeline:
1. Constraint extraction turns the use case into technical requirements
   (modalities, context length, price, providers, keywords, speed)
2. A deterministic filter applies them to the OpenRouter catalog, relaxing
   requirements step by step when fewer than the minimum candidates remain
3. A generative model ranks the remaining candidates and explains each pick

`count` defaults to 3. Set `includeModels` to attach the full catalog record
to every recommendation. Pipeline metadata reports the relaxation level and
per-stage timings.
"""

RECOMMEND_OPERATION_ID = "recommend_models"

RECOMMEND_TAGS = ["recommend"]

RECOMMEND_RESPONSES: Dict[int | str, Dict[str, Any]] = {
    200: {
        "description": "Ranked recommendations with pipeline metadata",
        "content": {
            "application/json": {
                "example": {
                    "recommendations": [
                        {
                            "model_id": "google/gemini-2.5-flash",
                            "reason": "Accepts image input at a low prompt price, "
                            "well suited to reading receipts.",
                        }
                    ],
                    "metadata": {
                        "totalModels": 342,
                        "constraints": {
                            "input_modalities": ["image", "text"],
                            "output_modalities": ["text"],
                            "min_context": 0,
                            "max_price_per_million": None,
                            "preferred_providers": [],
                            "excluded_providers": [],
                            "capability_keywords": ["vision"],
                            "exclude_keywords": ["base", "embedding"],
                            "speed": "any",
                        },
                        "afterFiltering": 41,
                        "relaxLevel": 0,
                        "candidatesRanked": 41,
                        "timing": {
                            "stage1_ms": 812.4,
                            "stage2_ms": 1.7,
                            "stage3_ms": 4210.9,
                            "total_ms": 5027.3,
                        },
                    },
                }
            }
        },
    },
    **ERROR_RESPONSES,
}
