"""Candidate ordering, projection and generative ranking."""
import json
import time
from typing import Any, Dict, List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, ValidationError as PydanticValidationError

from llm_compass.core.logger import LoggerService
from llm_compass.providers.base import GenerativeProvider
from llm_compass.providers.models import Model, SchemaViolationError
from .modality import model_modalities
from .models import ExtractedConstraints, Recommendation
from .prompts import RANKING_SCHEMA, build_ranking_prompt

DESCRIPTION_LIMIT = 300
UNKNOWN_PROVIDER = "Unknown"


class _RankedItem(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    model_id: str
    reason: str


class _RankingOutput(BaseModel):
    recommendations: List[_RankedItem]


def order_by_provider_priority(
    models: Sequence[Model], priority: Sequence[str]
) -> List[Model]:
    """Stable-sort models by the first matching provider prefix.

    Models whose id matches no prefix keep their relative order after all
    matched ones.
    """
    prefixes = [p.lower() for p in priority]

    def rank(model: Model) -> int:
        model_id = model.id.lower()
        for index, prefix in enumerate(prefixes):
            if model_id.startswith(prefix):
                return index
        return len(prefixes)

    return sorted(models, key=rank)


def _positive_price(value: str) -> bool:
    try:
        return float(value) > 0
    except (TypeError, ValueError):
        return False


def project_candidate(model: Model) -> Dict[str, Any]:
    """Compact record of a model embedded in the ranking prompt."""
    inputs, outputs = model_modalities(model)
    price: Dict[str, str] = {
        "in": model.pricing.prompt,
        "out": model.pricing.completion,
    }
    if _positive_price(model.pricing.image):
        price["img"] = model.pricing.image
    return {
        "id": model.id,
        "name": model.name,
        "desc": (model.description or "")[:DESCRIPTION_LIMIT],
        "ctx": model.context_length,
        "price": price,
        "inputs": inputs,
        "outputs": outputs,
        "prov": model.provider_name or UNKNOWN_PROVIDER,
    }


class CandidateRanker:
    """Delegates the final choice among candidates to the ranking model.

    The model's answer is held to the contract: only ids from the candidate
    set, no duplicates, at most ``count`` entries, at least one entry.
    """

    def __init__(
        self,
        generative_provider: GenerativeProvider,
        logger: LoggerService,
        model: str,
        timeout: float,
    ):
        """Initialize ranker.

        Args:
            generative_provider: Backend used for the ranking call
            logger: Logger service instance
            model: Ranking model identifier
            timeout: Call timeout in seconds
        """
        self.generative_provider = generative_provider
        self.logger = logger.get_logger(__name__)
        self.model = model
        self.timeout = timeout

    async def rank(
        self,
        use_case: str,
        candidates: Sequence[Model],
        count: int,
        constraints: Optional[ExtractedConstraints] = None,
    ) -> List[Recommendation]:
        """Rank candidates for a use case.

        Args:
            use_case: Free-text use-case description
            candidates: Ordered, bounded candidate list
            count: Number of recommendations wanted
            constraints: Extracted constraints, used for the speed hint

        Returns:
            Between 1 and ``count`` recommendations

        Raises:
            UpstreamFetchError: If the ranking call fails
            SchemaViolationError: If the output breaks the response contract
        """
        start_time = time.perf_counter()
        candidates_json = json.dumps(
            [project_candidate(m) for m in candidates], separators=(",", ":")
        )
        speed = constraints.speed.value if constraints is not None else None
        prompt = build_ranking_prompt(use_case, count, candidates_json, speed)

        raw = await self.generative_provider.generate_json(
            self.model, prompt, RANKING_SCHEMA, self.timeout
        )
        try:
            output = _RankingOutput.model_validate(raw)
        except PydanticValidationError as e:
            self.logger.warning(
                "Ranking output does not match schema",
                extra={"error": str(e), "model": self.model},
            )
            raise SchemaViolationError(
                message="Ranking output does not match the expected schema",
                details={"error": str(e), "model": self.model},
            ) from e

        recommendations = self._enforce(output.recommendations, candidates, count)
        if not recommendations:
            raise SchemaViolationError(
                message="Ranking output contains no usable recommendations",
                details={
                    "error": "no recommended id matches a candidate",
                    "model": self.model,
                },
            )

        self.logger.info(
            "Candidates ranked",
            extra={
                "model": self.model,
                "candidates": len(candidates),
                "requested": count,
                "returned": len(recommendations),
                "duration_ms": round((time.perf_counter() - start_time) * 1000, 2),
            },
        )
        return recommendations

    def _enforce(
        self,
        items: List[_RankedItem],
        candidates: Sequence[Model],
        count: int,
    ) -> List[Recommendation]:
        by_id = {m.id: m for m in candidates}
        seen = set()
        recommendations: List[Recommendation] = []
        for item in items:
            model = by_id.get(item.model_id)
            if model is None:
                self.logger.warning(
                    "Dropping recommendation for unknown model",
                    extra={"model_id": item.model_id},
                )
                continue
            if item.model_id in seen:
                continue
            seen.add(item.model_id)
            recommendations.append(
                Recommendation(
                    model_id=item.model_id, reason=item.reason.strip(), model=model
                )
            )
            if len(recommendations) == count:
                break
        return recommendations
