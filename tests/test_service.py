"""Tests for the recommendation pipeline service."""
import pytest

from llm_compass.providers.models import (
    ProviderError,
    SchemaViolationError,
    UpstreamFetchError,
    ValidationError,
)
from llm_compass.recommender.catalog_cache import CatalogCache
from llm_compass.recommender.extraction import HeuristicConstraintExtractor
from llm_compass.recommender.filter import CandidateFilter
from llm_compass.recommender.handler_chain_factory import HandlerChainFactory
from llm_compass.recommender.models import InputModality
from llm_compass.recommender.ranking import CandidateRanker
from llm_compass.recommender.service import RecommendationService
from factories import (
    make_catalog,
    make_catalog_provider,
    make_generative_provider,
    make_model,
)

VISION = make_catalog(12, prefix="vendor/vision", modality="text+image->text")
CATALOG = make_catalog(20) + VISION + [make_model("openai/gpt-4o", modality="text+image->text")]


def ranking_output(*model_ids):
    return {
        "recommendations": [
            {"model_id": model_id, "reason": "Fits the task."} for model_id in model_ids
        ]
    }


def build_service(settings, logger_service, redis_client, catalog, generative):
    catalog_cache = CatalogCache(
        catalog_provider=make_catalog_provider(catalog),
        cache=redis_client,
        logger=logger_service,
        settings=settings,
    )
    factory = HandlerChainFactory(
        logger=logger_service,
        settings=settings,
        catalog_cache=catalog_cache,
        extractor=HeuristicConstraintExtractor(logger_service),
        candidate_filter=CandidateFilter(logger_service, settings.MIN_CANDIDATES),
        ranker=CandidateRanker(
            generative_provider=generative,
            logger=logger_service,
            model=settings.RANKING_MODEL,
            timeout=settings.RANKING_TIMEOUT,
        ),
    )
    return RecommendationService(factory, logger_service, settings)


@pytest.fixture
def generative():
    return make_generative_provider(ranking_output("openai/gpt-4o", "vendor/vision-3"))


@pytest.fixture
def service(settings, logger_service, redis_client, generative):
    return build_service(settings, logger_service, redis_client, CATALOG, generative)


@pytest.mark.asyncio
async def test_recommend_runs_pipeline(service, generative):
    response = await service.recommend(
        "Analyze images of receipts and extract amounts", count=2, request_id="req-1"
    )

    assert [r.model_id for r in response.recommendations] == [
        "openai/gpt-4o",
        "vendor/vision-3",
    ]
    assert all(r.model is None for r in response.recommendations)

    metadata = response.metadata
    assert metadata.totalModels == len(CATALOG)
    assert metadata.constraints.input_modalities == {
        InputModality.TEXT,
        InputModality.IMAGE,
    }
    assert metadata.relaxLevel == 0
    assert metadata.afterFiltering == 13
    assert metadata.candidatesRanked == 13
    timing = metadata.timing
    assert min(timing.stage1_ms, timing.stage2_ms, timing.stage3_ms) >= 0
    assert timing.total_ms >= timing.stage3_ms

    # Priority providers are sent to the ranker first
    prompt = generative.generate_json.await_args.args[1]
    assert prompt.index("openai/gpt-4o") < prompt.index("vendor/vision-0")


@pytest.mark.asyncio
async def test_recommend_serializes_without_model_field(service):
    response = await service.recommend("Analyze photos", count=2)
    body = response.model_dump(mode="json")

    assert body["recommendations"][0] == {
        "model_id": "openai/gpt-4o",
        "reason": "Fits the task.",
    }
    assert body["metadata"]["constraints"]["input_modalities"] == ["image", "text"]


@pytest.mark.asyncio
async def test_include_models_attaches_catalog_record(service):
    response = await service.recommend("Analyze photos", count=2, include_models=True)

    assert response.recommendations[0].model == CATALOG[-1]
    body = response.model_dump(mode="json")
    assert body["recommendations"][0]["model"]["id"] == "openai/gpt-4o"


@pytest.mark.asyncio
async def test_default_count(settings, logger_service, redis_client):
    generative = make_generative_provider(
        ranking_output(*(m.id for m in CATALOG[:5]))
    )
    service = build_service(settings, logger_service, redis_client, CATALOG, generative)

    response = await service.recommend("write poems")

    assert len(response.recommendations) == settings.DEFAULT_RECOMMENDATIONS


@pytest.mark.parametrize("use_case", [None, "", "   "])
@pytest.mark.asyncio
async def test_missing_use_case(service, generative, use_case):
    with pytest.raises(ValidationError) as exc_info:
        await service.recommend(use_case)

    assert exc_info.value.code == 400
    assert exc_info.value.message == "Invalid request: useCase is required"
    generative.generate_json.assert_not_awaited()


@pytest.mark.parametrize("count", [0, -1, 11, True])
@pytest.mark.asyncio
async def test_count_out_of_range(service, count):
    with pytest.raises(ValidationError) as exc_info:
        await service.recommend("chat", count=count)

    assert exc_info.value.field == "count"


@pytest.mark.asyncio
async def test_empty_catalog(settings, logger_service, redis_client, generative):
    service = build_service(settings, logger_service, redis_client, [], generative)

    with pytest.raises(ProviderError) as exc_info:
        await service.recommend("chat")

    assert not isinstance(exc_info.value, UpstreamFetchError)
    assert exc_info.value.code == 500
    assert exc_info.value.message == "Model catalog is empty"
    generative.generate_json.assert_not_awaited()


@pytest.mark.asyncio
async def test_ranking_failure_propagates(settings, logger_service, redis_client):
    generative = make_generative_provider(ranking_output("vendor/nope"))
    service = build_service(settings, logger_service, redis_client, CATALOG, generative)

    with pytest.raises(SchemaViolationError):
        await service.recommend("chat")


@pytest.mark.asyncio
async def test_unexpected_error_is_wrapped(settings, logger_service, redis_client):
    generative = make_generative_provider(side_effect=RuntimeError("boom"))
    service = build_service(settings, logger_service, redis_client, CATALOG, generative)

    with pytest.raises(ProviderError) as exc_info:
        await service.recommend("chat")

    assert exc_info.value.code == 500
    assert exc_info.value.message == "Failed to handle recommendation request"
    assert exc_info.value.details == {"error": "boom"}


def test_service_requires_factory(settings, logger_service):
    with pytest.raises(ValueError):
        RecommendationService(None, logger_service, settings)
