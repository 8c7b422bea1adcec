"""Rule-based constraint extraction."""
import re
from typing import Dict, Iterable, List, Pattern, Set

from llm_compass.core.logger import LoggerService
from ..models import ExtractedConstraints, SpeedPreference
from .base import ConstraintExtractor

INPUT_KEYWORDS: Dict[str, List[str]] = {
    "image": [
        "image", "photo", "picture", "vision", "ocr", "screenshot",
        "diagram", "chart", "visual", "look at", "describe this",
    ],
    "audio": [
        "audio", "transcribe", "speech", "voice", "listen", "recording",
        "podcast", "meeting",
    ],
    "video": ["video", "youtube", "watch", "movie", "clip"],
    "file": [
        "pdf", "csv", "excel", "document", "file", "upload", "codebase",
        "repository",
    ],
}

OUTPUT_KEYWORDS: Dict[str, List[str]] = {
    "image": [
        "generate image", "create image", "draw", "illustration",
        "create logo", "make a picture",
    ],
    "embeddings": ["embedding", "vector", "rag", "semantic search", "similarity"],
}

LONG_CONTEXT_KEYWORDS = [
    "book", "novel", "entire codebase", "full repository", "long document",
    "legal document", "thesis",
]
MEDIUM_CONTEXT_KEYWORDS = ["article", "report", "essay", "paper", "chapter"]
LONG_CONTEXT = 128000
MEDIUM_CONTEXT = 32000

CHEAP_KEYWORDS = ["cheap", "free", "budget", "low cost", "affordable", "inexpensive"]
CHEAP_MAX_PRICE = 1.0

FAST_KEYWORDS = ["fast", "quick", "real-time", "realtime", "low latency", "instant"]
POWERFUL_KEYWORDS = [
    "powerful", "best quality", "most capable", "complex reasoning",
    "state of the art", "highest quality",
]

PROVIDER_KEYWORDS: Dict[str, str] = {
    "openai": "openai/",
    "gpt": "openai/",
    "chatgpt": "openai/",
    "claude": "anthropic/",
    "anthropic": "anthropic/",
    "gemini": "google/",
    "llama": "meta-llama/",
    "mistral": "mistralai/",
    "deepseek": "deepseek/",
    "qwen": "qwen/",
    "grok": "x-ai/",
}


def _compile(keywords: Iterable[str]) -> List[Pattern[str]]:
    # Whole words, tolerating a plural suffix
    return [re.compile(rf"\b{re.escape(kw)}(?:s|es)?\b") for kw in keywords]


def _mentions(text: str, patterns: List[Pattern[str]]) -> bool:
    return any(pattern.search(text) for pattern in patterns)


class HeuristicConstraintExtractor(ConstraintExtractor):
    """Keyword-table extractor. No I/O, never fails."""

    name = "heuristic"

    def __init__(self, logger: LoggerService):
        self.logger = logger.get_logger(__name__)
        self._inputs = {k: _compile(v) for k, v in INPUT_KEYWORDS.items()}
        self._outputs = {k: _compile(v) for k, v in OUTPUT_KEYWORDS.items()}
        self._long = _compile(LONG_CONTEXT_KEYWORDS)
        self._medium = _compile(MEDIUM_CONTEXT_KEYWORDS)
        self._cheap = _compile(CHEAP_KEYWORDS)
        self._fast = _compile(FAST_KEYWORDS)
        self._powerful = _compile(POWERFUL_KEYWORDS)
        self._providers = {
            kw: (prefix, _compile([kw])) for kw, prefix in PROVIDER_KEYWORDS.items()
        }

    def extract_sync(self, use_case: str) -> ExtractedConstraints:
        """Synchronous extraction used by ``extract``."""
        text = (use_case or "").lower()

        inputs: Set[str] = {
            modality
            for modality, patterns in self._inputs.items()
            if _mentions(text, patterns)
        }
        if inputs:
            inputs.add("text")

        outputs: Set[str] = {
            modality
            for modality, patterns in self._outputs.items()
            if _mentions(text, patterns)
        }

        min_context = 0
        if _mentions(text, self._long):
            min_context = LONG_CONTEXT
        elif _mentions(text, self._medium):
            min_context = MEDIUM_CONTEXT

        max_price = CHEAP_MAX_PRICE if _mentions(text, self._cheap) else None

        wants_fast = _mentions(text, self._fast)
        wants_powerful = _mentions(text, self._powerful)
        if wants_fast and wants_powerful:
            speed = SpeedPreference.BALANCED
        elif wants_fast:
            speed = SpeedPreference.FAST
        elif wants_powerful:
            speed = SpeedPreference.POWERFUL
        else:
            speed = SpeedPreference.ANY

        preferred = {
            prefix
            for prefix, patterns in self._providers.values()
            if _mentions(text, patterns)
        }

        exclude = {"base"}
        if "embeddings" not in outputs:
            exclude.add("embedding")

        constraints = ExtractedConstraints(
            input_modalities=inputs,
            output_modalities=outputs,
            min_context=min_context,
            max_price_per_million=max_price,
            preferred_providers=preferred,
            exclude_keywords=exclude,
            speed=speed,
        )
        self.logger.debug(
            "Heuristic constraints extracted",
            extra={"constraints": constraints.model_dump(mode="json")},
        )
        return constraints

    async def extract(self, use_case: str) -> ExtractedConstraints:
        return self.extract_sync(use_case)
