"""Tests for the OpenRouter catalog provider."""
import httpx
import pytest

from llm_compass.providers.models import (
    CatalogParseError,
    ProviderConfig,
    UpstreamFetchError,
)
from llm_compass.providers.openrouter import (
    OpenRouterCatalogProvider,
    OpenRouterModelMapper,
)

CATALOG_URL = "https://openrouter.test/api/frontend/models"


def make_provider(logger_service, handler, credentials=""):
    provider = OpenRouterCatalogProvider(
        logger=logger_service,
        provider=ProviderConfig(
            provider_id="openrouter",
            name="OpenRouter",
            credentials=credentials,
            base_url=CATALOG_URL,
        ),
        model_mapper=OpenRouterModelMapper(logger_service),
    )
    provider._client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return provider


@pytest.mark.asyncio
async def test_fetch_returns_normalized_models(logger_service):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(
            200,
            json={
                "data": [
                    {"slug": "openai/gpt-4o-mini", "name": "GPT-4o mini"},
                    {"slug": "google/gemini-2.5-flash", "name": "Gemini 2.5 Flash"},
                ]
            },
        )

    provider = make_provider(logger_service, handler)
    models = await provider.fetch()
    await provider.close()

    assert [m.id for m in models] == ["openai/gpt-4o-mini", "google/gemini-2.5-flash"]
    assert seen["url"] == CATALOG_URL
    assert seen["auth"] is None


@pytest.mark.asyncio
async def test_fetch_sends_bearer_token_when_configured(logger_service):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(200, json={"data": []})

    provider = make_provider(logger_service, handler, credentials="or-key")
    assert await provider.fetch() == []
    assert seen["auth"] == "Bearer or-key"


@pytest.mark.asyncio
async def test_error_status_raises_upstream_fetch_error(logger_service):
    provider = make_provider(
        logger_service, lambda request: httpx.Response(503, text="unavailable")
    )
    with pytest.raises(UpstreamFetchError) as exc_info:
        await provider.fetch()
    assert exc_info.value.code == 500
    assert exc_info.value.details["status_code"] == 503


@pytest.mark.asyncio
async def test_transport_error_raises_upstream_fetch_error(logger_service):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    provider = make_provider(logger_service, handler)
    with pytest.raises(UpstreamFetchError):
        await provider.fetch()


@pytest.mark.asyncio
async def test_non_json_body_raises_catalog_parse_error(logger_service):
    provider = make_provider(
        logger_service, lambda request: httpx.Response(200, text="<html></html>")
    )
    with pytest.raises(CatalogParseError):
        await provider.fetch()


@pytest.mark.asyncio
async def test_unexpected_shape_raises_catalog_parse_error(logger_service):
    provider = make_provider(
        logger_service, lambda request: httpx.Response(200, json={"models": []})
    )
    with pytest.raises(CatalogParseError):
        await provider.fetch()
