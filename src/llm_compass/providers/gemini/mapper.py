"""Gemini request/response mapper."""
from typing import Any, Dict

from ..models import SchemaViolationError


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


class GeminiMapper:
    """Maps prompts to ``generateContent`` payloads and responses back to text."""

    def __init__(self, temperature: float = 0.2) -> None:
        self.temperature = temperature

    def map_request(self, prompt: str, schema: Dict[str, Any]) -> Dict[str, Any]:
        """Build a JSON-mode ``generateContent`` request body.

        Args:
            prompt: Full prompt text
            schema: Response schema in Gemini's OpenAPI subset

        Returns:
            Request body
        """
        return {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": self.temperature,
                "responseMimeType": "application/json",
                "responseSchema": schema,
            },
        }

    def map_response_text(self, data: Any) -> str:
        """Extract the generated text from a ``generateContent`` response.

        Args:
            data: Decoded response body

        Returns:
            Concatenated text of the first candidate

        Raises:
            SchemaViolationError: If the response has no usable candidate
        """
        if not isinstance(data, dict):
            raise SchemaViolationError(
                message="Unexpected generative response shape",
                details={"error": "response body is not an object"},
            )

        candidates = data.get("candidates")
        if not isinstance(candidates, list) or not candidates:
            block_reason = _as_dict(data.get("promptFeedback")).get("blockReason")
            raise SchemaViolationError(
                message="Generative response has no candidates",
                details={"error": f"no candidates (block reason: {block_reason})"},
            )

        candidate = _as_dict(candidates[0])
        parts = _as_dict(candidate.get("content")).get("parts")
        if not isinstance(parts, list):
            parts = []
        text = "".join(
            part["text"]
            for part in parts
            if isinstance(part, dict) and isinstance(part.get("text"), str)
        ).strip()
        if not text:
            raise SchemaViolationError(
                message="Generative response has no text",
                details={"error": f"empty text (finish reason: {candidate.get('finishReason')})"},
            )
        return text
