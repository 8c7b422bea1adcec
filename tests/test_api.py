"""HTTP tests for the FastAPI application."""
import pytest
from dependency_injector import providers
from fastapi.testclient import TestClient

from llm_compass.api.middleware.request_id import REQUEST_ID_HEADER
from llm_compass.di import container
from llm_compass.main import init_app
from llm_compass.providers.models import UpstreamFetchError
from llm_compass.recommender.prompts import EXTRACTION_SCHEMA
from factories import (
    make_catalog,
    make_catalog_provider,
    make_generative_provider,
    make_model,
)

CATALOG = make_catalog(15) + [
    make_model("openai/gpt-4o", modality="text+image->text"),
    make_model("anthropic/claude-sonnet", modality="text+image->text"),
]

EXTRACTION = {
    "input_modalities": ["text"],
    "output_modalities": ["text"],
    "min_context": 0,
    "max_price_per_million": None,
    "preferred_providers": [],
    "excluded_providers": [],
    "capability_keywords": [],
    "exclude_keywords": ["embedding", "base"],
    "speed": "any",
}

RANKING = {
    "recommendations": [
        {"model_id": "openai/gpt-4o", "reason": "Strong general model."},
        {"model_id": "anthropic/claude-sonnet", "reason": "Good at writing."},
    ]
}


class FakeGemini:
    """Answers extraction and ranking calls by schema."""

    def __init__(self):
        self.extraction = EXTRACTION
        self.ranking = RANKING

    def __call__(self, model, prompt, schema, timeout):
        result = self.extraction if schema is EXTRACTION_SCHEMA else self.ranking
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def gemini():
    return FakeGemini()


@pytest.fixture
def catalog_provider():
    return make_catalog_provider(CATALOG)


@pytest.fixture
def client(settings, catalog_provider, gemini):
    container.settings.override(providers.Object(settings))
    container.catalog_provider.override(providers.Object(catalog_provider))
    container.generative_provider.override(
        providers.Object(make_generative_provider(side_effect=gemini))
    )
    container.reset_singletons()
    try:
        with TestClient(init_app()) as test_client:
            yield test_client
    finally:
        container.reset_override()
        container.reset_singletons()


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "message": "LLM Compass backend is running"}


def test_info(client):
    body = client.get("/").json()

    assert body["message"] == "LLM Compass Backend API"
    assert body["endpoints"]["recommend"] == {
        "path": "/recommend",
        "method": "POST",
        "body": "{ useCase: string, count?: number, includeModels?: boolean }",
    }


def test_request_id_header(client):
    response = client.get("/health", headers={REQUEST_ID_HEADER: "abc-123"})
    assert response.headers[REQUEST_ID_HEADER] == "abc-123"

    generated = client.get("/health").headers[REQUEST_ID_HEADER]
    assert generated and generated != "abc-123"


def test_models(client, catalog_provider):
    response = client.get("/models")

    assert response.status_code == 200
    data = response.json()["data"]
    assert [m["id"] for m in data] == [m.id for m in CATALOG]
    assert data[0]["pricing"]["prompt"] == "0.000001"

    client.get("/models")
    assert catalog_provider.fetch.await_count == 1


def test_models_refresh_refetches(client, catalog_provider):
    client.get("/models")

    response = client.post("/models/refresh")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "refreshed"
    assert body["model_count"] == len(CATALOG)
    assert isinstance(body["fetched_at"], float)
    assert catalog_provider.fetch.await_count == 2


def test_models_upstream_failure(client, catalog_provider):
    catalog_provider.fetch.side_effect = UpstreamFetchError("Catalog request timed out")

    response = client.get("/models")

    assert response.status_code == 500
    assert response.json() == {
        "error": "Failed to fetch models",
        "details": "Catalog request timed out",
    }


def test_recommend(client):
    response = client.post(
        "/recommend", json={"useCase": "Help me write blog posts", "count": 2}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["recommendations"] == [
        {"model_id": "openai/gpt-4o", "reason": "Strong general model."},
        {"model_id": "anthropic/claude-sonnet", "reason": "Good at writing."},
    ]
    metadata = body["metadata"]
    assert metadata["totalModels"] == len(CATALOG)
    assert metadata["afterFiltering"] == len(CATALOG)
    assert metadata["relaxLevel"] == 0
    assert metadata["candidatesRanked"] == len(CATALOG)
    assert metadata["constraints"]["exclude_keywords"] == ["base", "embedding"]
    assert set(metadata["timing"]) == {"stage1_ms", "stage2_ms", "stage3_ms", "total_ms"}


def test_recommend_include_models(client):
    body = client.post(
        "/recommend",
        json={"useCase": "Help me write blog posts", "count": 1, "includeModels": True},
    ).json()

    assert len(body["recommendations"]) == 1
    assert body["recommendations"][0]["model"]["id"] == "openai/gpt-4o"


def test_recommend_survives_extraction_failure(client, gemini):
    gemini.extraction = UpstreamFetchError("Generative API timed out after 10.0s")

    response = client.post("/recommend", json={"useCase": "Help me write blog posts"})

    assert response.status_code == 200
    assert response.json()["metadata"]["constraints"]["input_modalities"] == ["text"]


@pytest.mark.parametrize(
    "payload, error",
    [
        ({}, "Invalid request: useCase is required"),
        ({"useCase": "   "}, "Invalid request: useCase is required"),
        ({"useCase": "chat", "count": 0}, "Invalid request: count must be between 1 and 10"),
        ({"useCase": "chat", "count": 11}, "Invalid request: count must be between 1 and 10"),
    ],
)
def test_recommend_invalid_input(client, catalog_provider, payload, error):
    response = client.post("/recommend", json=payload)

    assert response.status_code == 400
    assert response.json() == {"error": error}
    catalog_provider.fetch.assert_not_awaited()


def test_recommend_malformed_body(client):
    response = client.post(
        "/recommend",
        content="not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid request"

    response = client.post("/recommend", json={"useCase": "chat", "count": "many"})
    assert response.status_code == 400
    assert response.json()["details"].startswith("count:")


@pytest.mark.parametrize("count", [True, 2.5, "3"])
def test_recommend_count_must_be_integer(client, catalog_provider, count):
    response = client.post("/recommend", json={"useCase": "chat", "count": count})

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid request"
    assert response.json()["details"].startswith("count:")
    catalog_provider.fetch.assert_not_awaited()


def test_recommend_ranking_failure(client, gemini):
    gemini.ranking = UpstreamFetchError("Generative API timed out after 60.0s")

    response = client.post("/recommend", json={"useCase": "chat"})

    assert response.status_code == 500
    assert response.json() == {
        "error": "Failed to generate recommendations",
        "details": "Generative API timed out after 60.0s",
    }


def test_recommend_empty_catalog(client, catalog_provider):
    catalog_provider.fetch.return_value = []

    response = client.post("/recommend", json={"useCase": "chat"})

    assert response.status_code == 500
    assert response.json() == {
        "error": "Failed to generate recommendations",
        "details": "Model catalog is empty",
    }


ORIGIN = "http://localhost:3000"


def test_error_responses_carry_cors_headers(client, gemini):
    response = client.post("/recommend", json={}, headers={"Origin": ORIGIN})

    assert response.status_code == 400
    assert response.headers["access-control-allow-origin"] in (ORIGIN, "*")

    gemini.ranking = UpstreamFetchError("Generative API timed out after 60.0s")
    response = client.post(
        "/recommend", json={"useCase": "chat"}, headers={"Origin": ORIGIN}
    )

    assert response.status_code == 500
    assert response.headers["access-control-allow-origin"] in (ORIGIN, "*")
    assert REQUEST_ID_HEADER in response.headers


def test_unknown_route(client):
    response = client.get("/nope")

    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}


def test_missing_gemini_key_fails_at_startup(settings, catalog_provider):
    container.settings.override(
        providers.Object(settings.model_copy(update={"GEMINI_API_KEY": ""}))
    )
    container.catalog_provider.override(providers.Object(catalog_provider))
    container.reset_singletons()
    try:
        with pytest.raises(RuntimeError, match="generative_provider"):
            init_app()
    finally:
        container.reset_override()
        container.reset_singletons()
