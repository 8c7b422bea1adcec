"""Deterministic candidate filter with progressive relaxation."""
import math
import re
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from llm_compass.core.logger import LoggerService
from llm_compass.providers.models import Model
from .modality import model_modalities
from .models import ExtractedConstraints, FilterResult

STRICT = 0
MODALITY_AND_EXCLUSIONS = 1
NON_TEXT_MODALITY_AND_EXCLUSIONS = 2
FALLBACK = 3

TEXT = "text"

Check = Callable[[Model], bool]


def price_per_million(model: Model) -> Optional[float]:
    """Prompt price in $ per million tokens, or None when unparsable."""
    try:
        price = float(model.pricing.prompt) * 1_000_000
    except (TypeError, ValueError):
        return None
    return None if math.isnan(price) else price


def _word_pattern(keyword: str) -> "re.Pattern[str]":
    return re.compile(rf"\b{re.escape(keyword)}\b")


class CandidateFilter:
    """Applies ``ExtractedConstraints`` to a catalog.

    Levels are evaluated in order and the first one yielding at least
    ``min_candidates`` models wins:

    * 0: every check
    * 1: modality coverage plus exclusions
    * 2: non-text modality coverage plus exclusions
    * 3: every text-capable model, or the whole catalog when none are
    """

    def __init__(self, logger: LoggerService, min_candidates: int = 10):
        """Initialize filter.

        Args:
            logger: Logger service instance
            min_candidates: Candidate count a level must reach to be accepted
        """
        self.logger = logger.get_logger(__name__)
        self.min_candidates = min_candidates

    def filter(
        self,
        catalog: Sequence[Model],
        constraints: ExtractedConstraints,
        min_candidates: Optional[int] = None,
    ) -> FilterResult:
        """Filter the catalog, relaxing constraints until enough models remain.

        Args:
            catalog: Catalog models
            constraints: Extracted constraints
            min_candidates: Override of the configured threshold

        Returns:
            Candidates, chosen relaxation level and per-level counts
        """
        threshold = self.min_candidates if min_candidates is None else min_candidates
        level_counts: Dict[int, int] = {}

        for level in (STRICT, MODALITY_AND_EXCLUSIONS, NON_TEXT_MODALITY_AND_EXCLUSIONS):
            candidates = self.apply_level(catalog, constraints, level)
            level_counts[level] = len(candidates)
            if len(candidates) >= threshold:
                return self._result(candidates, level, level_counts)

        candidates = self.apply_level(catalog, constraints, FALLBACK)
        level_counts[FALLBACK] = len(candidates)
        return self._result(candidates, FALLBACK, level_counts)

    def apply_level(
        self,
        catalog: Sequence[Model],
        constraints: ExtractedConstraints,
        level: int,
    ) -> List[Model]:
        """Models passing every check active at ``level``, in catalog order."""
        if level >= FALLBACK:
            with_text = [m for m in catalog if TEXT in m.architecture.modality.lower()]
            return with_text or list(catalog)

        checks = self._checks(constraints, level)
        return [model for model in catalog if all(check(model) for check in checks)]

    def _result(
        self, candidates: List[Model], level: int, level_counts: Dict[int, int]
    ) -> FilterResult:
        self.logger.info(
            "Catalog filtered",
            extra={
                "relax_level": level,
                "after_filtering": len(candidates),
                "level_counts": level_counts,
            },
        )
        return FilterResult(
            candidates=candidates,
            relax_level=level,
            after_filtering=len(candidates),
            level_counts=level_counts,
        )

    def _checks(self, constraints: ExtractedConstraints, level: int) -> List[Check]:
        required_inputs = {m.value for m in constraints.input_modalities}
        required_outputs = {m.value for m in constraints.output_modalities}
        if level == NON_TEXT_MODALITY_AND_EXCLUSIONS:
            required_inputs.discard(TEXT)
            required_outputs.discard(TEXT)

        checks: List[Check] = []
        if required_inputs or required_outputs:
            checks.append(self._covers_modalities(required_inputs, required_outputs))
        if constraints.excluded_providers:
            checks.append(self._not_excluded_provider(constraints.excluded_providers))
        if constraints.exclude_keywords:
            checks.append(self._no_exclude_keyword(constraints.exclude_keywords))

        if level == STRICT:
            if constraints.min_context:
                min_context = constraints.min_context
                checks.append(lambda m: m.context_length >= min_context)
            if constraints.max_price_per_million is not None:
                checks.append(self._within_price(constraints.max_price_per_million))
            if constraints.preferred_providers:
                prefixes = tuple(p.lower() for p in constraints.preferred_providers)
                checks.append(lambda m: m.id.lower().startswith(prefixes))
            if constraints.capability_keywords:
                checks.append(self._has_capability(constraints.capability_keywords))
        return checks

    @staticmethod
    def _covers_modalities(inputs: Iterable[str], outputs: Iterable[str]) -> Check:
        required_inputs = set(inputs)
        required_outputs = set(outputs)

        def check(model: Model) -> bool:
            model_inputs, model_outputs = model_modalities(model)
            return required_inputs.issubset(model_inputs) and required_outputs.issubset(
                model_outputs
            )

        return check

    @staticmethod
    def _not_excluded_provider(excluded: Iterable[str]) -> Check:
        prefixes = tuple(p.lower() for p in excluded)
        return lambda m: not m.id.lower().startswith(prefixes)

    @staticmethod
    def _no_exclude_keyword(keywords: Iterable[str]) -> Check:
        patterns = [_word_pattern(kw.lower()) for kw in keywords]

        def check(model: Model) -> bool:
            haystack = f"{model.id} {model.name}".lower()
            return not any(pattern.search(haystack) for pattern in patterns)

        return check

    @staticmethod
    def _within_price(max_price: float) -> Check:
        def check(model: Model) -> bool:
            price = price_per_million(model)
            return price is not None and price <= max_price

        return check

    @staticmethod
    def _has_capability(keywords: Iterable[str]) -> Check:
        needles = [kw.lower() for kw in keywords]

        def check(model: Model) -> bool:
            haystack = f"{model.id} {model.name} {model.description}".lower()
            return any(needle in haystack for needle in needles)

        return check
