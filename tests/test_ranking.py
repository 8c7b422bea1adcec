"""Tests for candidate ordering, projection and ranking."""
import json

import pytest

from llm_compass.providers.models import SchemaViolationError, UpstreamFetchError
from llm_compass.recommender.models import ExtractedConstraints
from llm_compass.recommender.prompts import RANKING_SCHEMA, SPEED_HINTS
from llm_compass.recommender.ranking import (
    CandidateRanker,
    order_by_provider_priority,
    project_candidate,
)
from factories import ids, make_generative_provider, make_model

CANDIDATES = [
    make_model("vendor/a"),
    make_model("vendor/b"),
    make_model("vendor/c"),
]


def make_ranker(logger_service, provider):
    return CandidateRanker(
        generative_provider=provider,
        logger=logger_service,
        model="gemini-2.5-flash",
        timeout=60.0,
    )


def ranking_output(*model_ids):
    return {
        "recommendations": [
            {"model_id": model_id, "reason": f" Good fit: {model_id}. "}
            for model_id in model_ids
        ]
    }


def test_order_by_provider_priority_is_stable():
    models = [
        make_model("mistralai/small"),
        make_model("vendor/x"),
        make_model("openai/gpt-4o-mini"),
        make_model("vendor/y"),
        make_model("anthropic/claude"),
        make_model("OpenAI/gpt-4o"),
    ]

    ordered = order_by_provider_priority(models, ["openai/", "anthropic/", "mistralai/"])

    assert ids(ordered) == [
        "openai/gpt-4o-mini",
        "OpenAI/gpt-4o",
        "anthropic/claude",
        "mistralai/small",
        "vendor/x",
        "vendor/y",
    ]


def test_project_candidate():
    model = make_model(
        "vendor/vision",
        name="Vision",
        modality="text+image->text",
        prompt="0.000001",
        completion="0.000002",
        image="0.0048",
        context_length=128000,
        description="x" * 500,
        provider="Vendor Cloud",
    )

    assert project_candidate(model) == {
        "id": "vendor/vision",
        "name": "Vision",
        "desc": "x" * 300,
        "ctx": 128000,
        "price": {"in": "0.000001", "out": "0.000002", "img": "0.0048"},
        "inputs": ["text", "image"],
        "outputs": ["text"],
        "prov": "Vendor Cloud",
    }


def test_project_candidate_omits_free_image_price_and_unknown_provider():
    projected = project_candidate(make_model("vendor/plain", image="0"))

    assert "img" not in projected["price"]
    assert projected["prov"] == "Unknown"


@pytest.mark.asyncio
async def test_rank_returns_recommendations(logger_service):
    provider = make_generative_provider(ranking_output("vendor/b", "vendor/a"))
    ranker = make_ranker(logger_service, provider)

    recommendations = await ranker.rank("summarize emails", CANDIDATES, 2)

    assert [r.model_id for r in recommendations] == ["vendor/b", "vendor/a"]
    assert recommendations[0].reason == "Good fit: vendor/b."
    assert recommendations[0].model == CANDIDATES[1]

    model, prompt, schema, timeout = provider.generate_json.await_args.args
    assert model == "gemini-2.5-flash"
    assert schema is RANKING_SCHEMA
    assert timeout == 60.0
    assert "summarize emails" in prompt
    assert "top 2 models" in prompt
    assert json.dumps(project_candidate(CANDIDATES[0]), separators=(",", ":")) in prompt


@pytest.mark.asyncio
async def test_rank_enforces_contract(logger_service):
    provider = make_generative_provider(
        ranking_output("vendor/c", "vendor/hallucinated", "vendor/c", "vendor/a", "vendor/b")
    )
    ranker = make_ranker(logger_service, provider)

    recommendations = await ranker.rank("chat", CANDIDATES, 2)

    assert [r.model_id for r in recommendations] == ["vendor/c", "vendor/a"]


@pytest.mark.asyncio
async def test_rank_accepts_fewer_than_requested(logger_service):
    provider = make_generative_provider(ranking_output("vendor/a"))

    recommendations = await make_ranker(logger_service, provider).rank(
        "chat", CANDIDATES, 3
    )

    assert [r.model_id for r in recommendations] == ["vendor/a"]


@pytest.mark.parametrize(
    "output",
    [
        {"recommendations": "vendor/a"},
        {"recommendations": [{"model_id": "vendor/a"}]},
        {"picks": []},
        ["vendor/a"],
    ],
)
@pytest.mark.asyncio
async def test_malformed_output_is_schema_violation(logger_service, output):
    ranker = make_ranker(logger_service, make_generative_provider(output))

    with pytest.raises(SchemaViolationError):
        await ranker.rank("chat", CANDIDATES, 2)


@pytest.mark.asyncio
async def test_no_usable_recommendation_is_schema_violation(logger_service):
    provider = make_generative_provider(ranking_output("vendor/x", "vendor/y"))

    with pytest.raises(SchemaViolationError):
        await make_ranker(logger_service, provider).rank("chat", CANDIDATES, 2)

    provider = make_generative_provider({"recommendations": []})
    with pytest.raises(SchemaViolationError):
        await make_ranker(logger_service, provider).rank("chat", CANDIDATES, 2)


@pytest.mark.asyncio
async def test_upstream_failure_propagates(logger_service):
    provider = make_generative_provider(side_effect=UpstreamFetchError("timed out"))

    with pytest.raises(UpstreamFetchError):
        await make_ranker(logger_service, provider).rank("chat", CANDIDATES, 2)


@pytest.mark.asyncio
async def test_speed_preference_adds_hint(logger_service):
    provider = make_generative_provider(ranking_output("vendor/a"))
    ranker = make_ranker(logger_service, provider)

    await ranker.rank("chat", CANDIDATES, 1, ExtractedConstraints(speed="fast"))
    assert SPEED_HINTS["fast"] in provider.generate_json.await_args.args[1]

    await ranker.rank("chat", CANDIDATES, 1, ExtractedConstraints())
    prompt = provider.generate_json.await_args.args[1]
    assert not any(hint in prompt for hint in SPEED_HINTS.values())
