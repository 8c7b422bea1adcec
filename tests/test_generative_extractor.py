"""Tests for generative constraint extraction."""
import pytest

from llm_compass.providers.models import SchemaViolationError, UpstreamFetchError
from llm_compass.recommender.extraction import GenerativeConstraintExtractor
from llm_compass.recommender.models import (
    ExtractedConstraints,
    InputModality,
    SpeedPreference,
)
from llm_compass.recommender.prompts import EXTRACTION_SCHEMA
from factories import make_generative_provider

RECEIPTS = "Analyze images of receipts and extract amounts"


def make_extractor(logger_service, provider):
    return GenerativeConstraintExtractor(
        generative_provider=provider,
        logger=logger_service,
        model="gemini-2.5-flash-lite",
        timeout=10.0,
    )


@pytest.mark.asyncio
async def test_valid_output_becomes_constraints(logger_service):
    provider = make_generative_provider(
        {
            "input_modalities": ["text", "image"],
            "output_modalities": ["text"],
            "min_context": 0,
            "max_price_per_million": None,
            "preferred_providers": [],
            "excluded_providers": [],
            "capability_keywords": ["Vision"],
            "exclude_keywords": ["embedding", "base"],
            "speed": "any",
        }
    )
    extractor = make_extractor(logger_service, provider)

    constraints = await extractor.extract(RECEIPTS)

    assert constraints.input_modalities == {InputModality.TEXT, InputModality.IMAGE}
    assert constraints.capability_keywords == {"vision"}
    assert constraints.speed == SpeedPreference.ANY

    model, prompt, schema, timeout = provider.generate_json.await_args.args
    assert model == "gemini-2.5-flash-lite"
    assert RECEIPTS in prompt
    assert schema is EXTRACTION_SCHEMA
    assert timeout == 10.0


@pytest.mark.asyncio
async def test_timeout_falls_back_to_default(logger_service):
    provider = make_generative_provider(
        side_effect=UpstreamFetchError("Generative API timed out after 10.0s")
    )
    constraints = await make_extractor(logger_service, provider).extract(RECEIPTS)

    assert constraints == ExtractedConstraints.default()


@pytest.mark.asyncio
async def test_unexpected_client_error_falls_back_to_default(logger_service):
    provider = make_generative_provider(side_effect=RuntimeError("client closed"))
    constraints = await make_extractor(logger_service, provider).extract(RECEIPTS)

    assert constraints == ExtractedConstraints.default()
    provider.generate_json.assert_awaited_once()


@pytest.mark.asyncio
async def test_non_json_output_falls_back_to_default(logger_service):
    provider = make_generative_provider(
        side_effect=SchemaViolationError("Generated output is not valid JSON")
    )
    constraints = await make_extractor(logger_service, provider).extract(RECEIPTS)

    assert constraints == ExtractedConstraints.default()


@pytest.mark.parametrize(
    "output",
    [
        ["not", "an", "object"],
        {"input_modalities": ["smell"]},
        {"min_context": -5},
        {"speed": "ludicrous"},
    ],
)
@pytest.mark.asyncio
async def test_schema_violation_falls_back_to_default(logger_service, output):
    provider = make_generative_provider(output)
    constraints = await make_extractor(logger_service, provider).extract(RECEIPTS)

    assert constraints == ExtractedConstraints.default()


def test_default_constraints():
    default = ExtractedConstraints.default()

    assert default.input_modalities == {InputModality.TEXT}
    assert default.min_context == 0
    assert default.max_price_per_million is None
    assert default.exclude_keywords == {"embedding", "base"}
    assert default.speed == SpeedPreference.ANY


def test_constraints_serialize_sets_as_sorted_lists():
    dumped = ExtractedConstraints(
        input_modalities=["text", "image"], exclude_keywords=["base", "embedding"]
    ).model_dump(mode="json")

    assert dumped["input_modalities"] == ["image", "text"]
    assert dumped["exclude_keywords"] == ["base", "embedding"]
    assert dumped["speed"] == "any"
