"""Gemini generative provider implementation."""
import json
import time
import uuid
from typing import Any, Dict

from httpx import AsyncClient, HTTPError, HTTPStatusError, TimeoutException

from llm_compass.core.logger import LoggerService
from ..base import GenerativeProvider
from ..models import ProviderConfig, SchemaViolationError, UpstreamFetchError
from .mapper import GeminiMapper


class GeminiProvider(GenerativeProvider):
    """Gemini ``generateContent`` REST API provider."""

    def __init__(
        self,
        logger: LoggerService,
        provider: ProviderConfig,
        mapper: GeminiMapper,
    ) -> None:
        """Initialize Gemini provider.

        Args:
            logger: Logger service instance
            provider: Provider config, credentials hold the API key
            mapper: Request/response mapper

        Raises:
            ValueError: If no API key is configured
        """
        if not provider.credentials:
            raise ValueError("GEMINI_API_KEY or GOOGLE_API_KEY must be set")

        super().__init__(provider=provider)
        self.logger = logger.get_logger(__name__)
        self.mapper = mapper
        self._client = AsyncClient(
            timeout=self._provider.timeout,
            verify=self._provider.verify_ssl,
        )
        self.logger.info(
            "Initialized GeminiProvider",
            extra={
                "provider_id": self._provider.provider_id,
                "base_url": self._provider.base_url,
            },
        )

    def _get_request_headers(self) -> Dict[str, str]:
        """Get headers for API request."""
        return {
            "Content-Type": "application/json",
            "x-goog-api-key": self._provider.credentials,
        }

    async def generate_json(
        self,
        model: str,
        prompt: str,
        schema: Dict[str, Any],
        timeout: float,
    ) -> Any:
        """Run one JSON-mode generation.

        Args:
            model: Gemini model identifier
            prompt: Full prompt text
            schema: Response schema
            timeout: Request timeout in seconds

        Returns:
            Decoded JSON value produced by the model

        Raises:
            UpstreamFetchError: If the call fails or times out
            SchemaViolationError: If the output is not valid JSON
        """
        request_id = str(uuid.uuid4())
        url = f"{self._provider.base_url.rstrip('/')}/models/{model}:generateContent"
        start_time = time.perf_counter()

        self.logger.debug(
            "Sending generation request",
            extra={
                "request_id": request_id,
                "model": model,
                "prompt_chars": len(prompt),
                "timeout": timeout,
            },
        )

        try:
            response = await self._client.post(
                url,
                headers=self._get_request_headers(),
                json=self.mapper.map_request(prompt, schema),
                timeout=timeout,
            )
            response.raise_for_status()
            data = response.json()
        except TimeoutException as e:
            self.logger.warning(
                "Generation request timed out",
                extra={"request_id": request_id, "model": model, "timeout": timeout},
            )
            raise UpstreamFetchError(
                message=f"Generative API timed out after {timeout}s",
                details={"error": str(e) or "timeout", "model": model},
            ) from e
        except HTTPStatusError as e:
            self.logger.error(
                "Generative API returned error status",
                extra={
                    "request_id": request_id,
                    "model": model,
                    "status_code": e.response.status_code,
                    "response_text": e.response.text[:500],
                },
            )
            raise UpstreamFetchError(
                message=f"Generative API returned {e.response.status_code}",
                details={"error": str(e), "model": model},
            ) from e
        except HTTPError as e:
            self.logger.error(
                "HTTP error while calling generative API",
                extra={
                    "request_id": request_id,
                    "model": model,
                    "error": str(e),
                    "error_type": type(e).__name__,
                },
            )
            raise UpstreamFetchError(
                message=f"Generative API request failed: {type(e).__name__}",
                details={"error": str(e) or type(e).__name__, "model": model},
            ) from e
        except ValueError as e:
            raise UpstreamFetchError(
                message="Generative API response is not JSON",
                details={"error": str(e), "model": model},
            ) from e

        text = self.mapper.map_response_text(data)
        try:
            result = json.loads(text)
        except json.JSONDecodeError as e:
            self.logger.warning(
                "Generated text is not valid JSON",
                extra={"request_id": request_id, "model": model, "text": text[:500]},
            )
            raise SchemaViolationError(
                message="Generated output is not valid JSON",
                details={"error": str(e), "model": model},
            ) from e

        self.logger.info(
            "Generation completed",
            extra={
                "request_id": request_id,
                "model": model,
                "duration_ms": round((time.perf_counter() - start_time) * 1000, 2),
            },
        )
        return result

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()
