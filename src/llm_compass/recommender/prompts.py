"""Prompt templates and response schemas for the generative stages."""
from string import Template
from typing import Any, Dict, Optional

EXTRACTION_PROMPT = Template(
    """You convert a user's description of an AI task into technical model requirements.

Return a JSON object with these fields:
- input_modalities: input types the model MUST accept. Allowed: text, image, audio, video, file.
  Always include "text" unless the task clearly has no text input.
- output_modalities: output types the model MUST produce. Allowed: text, image, embeddings.
- min_context: minimum context window in tokens. 0 when nothing suggests long inputs.
  Use 32000 for articles, reports or papers and 128000 for books, whole codebases or long legal documents.
- max_price_per_million: maximum input price in USD per million tokens, or null when price is not mentioned.
  Use 1 for "cheap", "budget" or "free".
- preferred_providers: provider id prefixes the user asked for, e.g. "openai/", "anthropic/", "google/".
- excluded_providers: provider id prefixes the user wants to avoid.
- capability_keywords: at most 3 short words that a suitable model's name or description should contain, e.g. "code", "vision", "reasoning".
- exclude_keywords: words that must NOT appear in a suitable model's id or name.
  Include "embedding" unless the user needs embeddings. Include "base" unless the user wants a base (non-instruct) model.
- speed: one of fast, balanced, powerful, any.

Only state requirements the description actually implies. When unsure, leave a field empty.

Examples:

Use case: "Analyze images of receipts and extract amounts"
{"input_modalities": ["text", "image"], "output_modalities": ["text"], "min_context": 0, "max_price_per_million": null, "preferred_providers": [], "excluded_providers": [], "capability_keywords": ["vision"], "exclude_keywords": ["embedding", "base"], "speed": "any"}

Use case: "cheap chatbot for customer support, needs to answer fast"
{"input_modalities": ["text"], "output_modalities": ["text"], "min_context": 0, "max_price_per_million": 1, "preferred_providers": [], "excluded_providers": [], "capability_keywords": [], "exclude_keywords": ["embedding", "base"], "speed": "fast"}

Use case: "Summarize an entire novel with Claude or GPT"
{"input_modalities": ["text"], "output_modalities": ["text"], "min_context": 128000, "max_price_per_million": null, "preferred_providers": ["anthropic/", "openai/"], "excluded_providers": [], "capability_keywords": [], "exclude_keywords": ["embedding", "base"], "speed": "any"}

Use case: "Build semantic search over support tickets"
{"input_modalities": ["text"], "output_modalities": ["embeddings"], "min_context": 0, "max_price_per_million": null, "preferred_providers": [], "excluded_providers": [], "capability_keywords": ["embedding"], "exclude_keywords": ["base"], "speed": "any"}

Use case: "$use_case"
"""
)

EXTRACTION_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "input_modalities": {
            "type": "ARRAY",
            "items": {
                "type": "STRING",
                "enum": ["text", "image", "audio", "video", "file"],
            },
        },
        "output_modalities": {
            "type": "ARRAY",
            "items": {"type": "STRING", "enum": ["text", "image", "embeddings"]},
        },
        "min_context": {"type": "INTEGER"},
        "max_price_per_million": {"type": "NUMBER", "nullable": True},
        "preferred_providers": {"type": "ARRAY", "items": {"type": "STRING"}},
        "excluded_providers": {"type": "ARRAY", "items": {"type": "STRING"}},
        "capability_keywords": {"type": "ARRAY", "items": {"type": "STRING"}},
        "exclude_keywords": {"type": "ARRAY", "items": {"type": "STRING"}},
        "speed": {
            "type": "STRING",
            "enum": ["fast", "balanced", "powerful", "any"],
        },
    },
    "required": [
        "input_modalities",
        "output_modalities",
        "min_context",
        "max_price_per_million",
        "preferred_providers",
        "excluded_providers",
        "capability_keywords",
        "exclude_keywords",
        "speed",
    ],
}

RANKING_PROMPT = Template(
    """You are an expert AI model selector. Recommend the top $count models from the provided JSON list for this use case: "$use_case".

Data Key:
- id: Model ID
- name: Display name
- desc: Description
- ctx: Context Length
- price: { in: Input cost per token, out: Output cost per token, img: Image cost }
- inputs: Supported Input types (text, image, audio, video, file)
- outputs: Supported Output types (text, image, embeddings)
- prov: Provider

Consider the user's need for specific modalities (e.g., if they need to analyze video or generate embeddings) alongside cost and context.
$speed_hint
Select exactly $count different models. Use only ids that appear in the list. For each, give one concise sentence explaining the fit, mentioning relevant modalities or pricing.

Output JSON only.

CANDIDATE MODELS:
$candidates
"""
)

SPEED_HINTS: Dict[str, str] = {
    "fast": "The user prefers fast, low-latency models over the most capable ones.",
    "balanced": "The user wants a balance between speed and capability.",
    "powerful": "The user prefers the most capable models even if they are slower or more expensive.",
}

RANKING_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "recommendations": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "model_id": {
                        "type": "STRING",
                        "description": "The unique ID of the recommended model.",
                    },
                    "reason": {
                        "type": "STRING",
                        "description": "A concise sentence explaining the fit, "
                        "mentioning specific relevant modalities or pricing.",
                    },
                },
                "required": ["model_id", "reason"],
            },
        }
    },
    "required": ["recommendations"],
}


def build_extraction_prompt(use_case: str) -> str:
    """Render the extraction prompt for a use case."""
    return EXTRACTION_PROMPT.safe_substitute(use_case=use_case.replace('"', "'"))


def build_ranking_prompt(
    use_case: str,
    count: int,
    candidates_json: str,
    speed: Optional[str] = None,
) -> str:
    """Render the ranking prompt.

    Args:
        use_case: Original use-case description
        count: Number of models to select
        candidates_json: JSON array of projected candidates
        speed: Optional speed preference value
    """
    return RANKING_PROMPT.safe_substitute(
        count=count,
        use_case=use_case.replace('"', "'"),
        speed_hint=SPEED_HINTS.get(speed or "", ""),
        candidates=candidates_json,
    )
