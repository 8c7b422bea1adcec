"""Constraint extraction via a generative model."""
import time

from pydantic import ValidationError as PydanticValidationError

from llm_compass.core.logger import LoggerService
from llm_compass.providers.base import GenerativeProvider
from llm_compass.providers.models import ProviderError
from ..models import ExtractedConstraints
from ..prompts import EXTRACTION_SCHEMA, build_extraction_prompt
from .base import ConstraintExtractor


class GenerativeConstraintExtractor(ConstraintExtractor):
    """Asks the extraction model for constraints as schema-constrained JSON.

    Any failure (timeout, upstream error, non-JSON output, schema violation)
    is logged and answered with ``ExtractedConstraints.default()``.
    """

    name = "generative"

    def __init__(
        self,
        generative_provider: GenerativeProvider,
        logger: LoggerService,
        model: str,
        timeout: float,
    ):
        """Initialize extractor.

        Args:
            generative_provider: Backend used for the extraction call
            logger: Logger service instance
            model: Extraction model identifier
            timeout: Call timeout in seconds
        """
        self.generative_provider = generative_provider
        self.logger = logger.get_logger(__name__)
        self.model = model
        self.timeout = timeout

    async def extract(self, use_case: str) -> ExtractedConstraints:
        start_time = time.perf_counter()
        try:
            raw = await self.generative_provider.generate_json(
                self.model,
                build_extraction_prompt(use_case),
                EXTRACTION_SCHEMA,
                self.timeout,
            )
            constraints = ExtractedConstraints.model_validate(raw)
        except ProviderError as e:
            self.logger.warning(
                "Constraint extraction failed, using default constraints",
                extra={
                    "error": e.message,
                    "error_type": type(e).__name__,
                    "model": self.model,
                },
            )
            return ExtractedConstraints.default()
        except PydanticValidationError as e:
            self.logger.warning(
                "Extracted constraints do not match schema, using default constraints",
                extra={"error": str(e), "model": self.model},
            )
            return ExtractedConstraints.default()
        except Exception as e:
            self.logger.error(
                "Unexpected constraint extraction error, using default constraints",
                extra={
                    "error": str(e),
                    "error_type": type(e).__name__,
                    "model": self.model,
                },
                exc_info=True,
            )
            return ExtractedConstraints.default()

        self.logger.info(
            "Constraints extracted",
            extra={
                "model": self.model,
                "duration_ms": round((time.perf_counter() - start_time) * 1000, 2),
                "constraints": constraints.model_dump(mode="json"),
            },
        )
        return constraints
