"""OpenRouter catalog mapper."""
from typing import Any, Dict, List, Optional

from ..base_model_mapper import BaseModelMapper
from ..models import (
    CatalogParseError,
    Model,
    ModelArchitecture,
    ModelPricing,
    ModelTopProvider,
)

PRICING_FIELDS = ("prompt", "completion", "request", "image")


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _modality_list(value: Any) -> List[str]:
    """Normalize a raw modality list, defaulting to text."""
    if not isinstance(value, list):
        return ["text"]
    items = [str(item).strip().lower() for item in value if str(item).strip()]
    return items or ["text"]


class OpenRouterModelMapper(BaseModelMapper):
    """Mapper for OpenRouter catalog responses.

    Accepts both the frontend catalog shape (``slug``, ``endpoint.pricing``,
    top-level modality lists) and the public v1 shape (``id``, ``pricing``,
    ``architecture``).
    """

    def map_models(self, payload: Dict[str, Any]) -> List[Model]:
        """Map an OpenRouter catalog response to normalized models.

        Args:
            payload: Decoded catalog response body

        Returns:
            List of normalized models

        Raises:
            CatalogParseError: If the payload has no ``data`` list
        """
        if not isinstance(payload, dict) or not isinstance(payload.get("data"), list):
            raise CatalogParseError(
                message="Unexpected catalog response shape",
                details={"error": "response body has no 'data' list"},
            )

        models = []
        skipped = 0
        for raw in payload["data"]:
            try:
                model = self.map_model(raw) if isinstance(raw, dict) else None
            except (TypeError, ValueError) as e:
                # pydantic.ValidationError is a ValueError
                self.logger.warning(
                    "Skipped malformed catalog record",
                    extra={
                        "model_id": raw.get("slug") or raw.get("id"),
                        "error": str(e),
                    },
                )
                model = None
            if model is None:
                skipped += 1
                continue
            models.append(model)

        if skipped:
            self.logger.debug(
                "Skipped unusable catalog records",
                extra={"skipped": skipped, "mapped": len(models)},
            )
        return models

    def map_model(self, raw: Dict[str, Any]) -> Optional[Model]:
        """Normalize one raw catalog record.

        Args:
            raw: Raw catalog record

        Returns:
            Normalized model, or None when the record has no identifier
        """
        model_id = raw.get("slug") or raw.get("id")
        if not model_id:
            return None

        endpoint = _as_dict(raw.get("endpoint"))
        architecture = _as_dict(raw.get("architecture"))

        raw_pricing = _as_dict(endpoint.get("pricing")) or _as_dict(raw.get("pricing"))
        pricing = ModelPricing(
            **{
                field: str(raw_pricing[field])
                if raw_pricing.get(field) not in (None, "")
                else "0"
                for field in PRICING_FIELDS
            }
        )

        provider_name = endpoint.get("provider_name")

        return Model(
            id=str(model_id),
            name=str(raw.get("name") or model_id),
            description=str(raw.get("description") or ""),
            context_length=int(raw.get("context_length") or 0),
            pricing=pricing,
            architecture=ModelArchitecture(
                modality=self._modality_string(raw, architecture),
                tokenizer=str(
                    endpoint.get("quantization")
                    or architecture.get("tokenizer")
                    or "unknown"
                ),
                instruct_type=raw.get("instruct_type")
                or architecture.get("instruct_type"),
            ),
            top_provider=ModelTopProvider(name=str(provider_name))
            if provider_name
            else None,
        )

    @staticmethod
    def _modality_string(raw: Dict[str, Any], architecture: Dict[str, Any]) -> str:
        """Build the '<inputs>-><outputs>' string for a record."""
        inputs = raw.get("input_modalities", architecture.get("input_modalities"))
        outputs = raw.get("output_modalities", architecture.get("output_modalities"))

        # Public catalog records may only carry the pre-built string
        declared = architecture.get("modality")
        if inputs is None and outputs is None and isinstance(declared, str):
            if declared.count("->") == 1:
                return declared.lower()

        return f"{'+'.join(_modality_list(inputs))}->{'+'.join(_modality_list(outputs))}"
