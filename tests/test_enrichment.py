import asyncio
from types import SimpleNamespace

import pytest

from scoring import config
from scoring.engine import ScoringEngine
from scoring.enrichment import (
    NarrativeEnricher,
    NullEnricher,
    OpenAINarrativeEnricher,
    build_enricher,
    enrich_with_timeout,
)
from scoring.errors import EnrichmentTimeoutError
from scoring.models import ProductInput

from conftest import FIXED_TIME

PRODUCT = {"name": "Gel douche", "category": "cosmetics", "ingredients": ["Aqua", "Sodium Lauryl Sulfate", "Limonene"]}


class FixedEnricher(NarrativeEnricher):
    def __init__(self, text):
        self.text = text
        self.calls = []

    async def enrich(self, product, summary):
        self.calls.append((product, summary))
        return self.text


class SlowEnricher(NarrativeEnricher):
    def __init__(self):
        self.cancelled = False

    async def enrich(self, product, summary):
        try:
            await asyncio.sleep(10)
        except asyncio.CancelledError:
            self.cancelled = True
            raise
        return "too late"


class FailingEnricher(NarrativeEnricher):
    async def enrich(self, product, summary):
        raise RuntimeError("service unavailable")


def _engine(registry, enricher, timeout=None):
    return ScoringEngine(registry=registry, enricher=enricher, clock=lambda: FIXED_TIME,
                         enrichment_timeout=timeout)


@pytest.mark.asyncio
async def test_narrative_is_appended(registry):
    enricher = FixedEnricher("Formule irritante pour les peaux sensibles.")
    engine = _engine(registry, enricher)

    plain = engine.analyze(PRODUCT)
    enriched = await engine.analyze_async(PRODUCT)

    assert len(enricher.calls) == 1
    assert enriched.insights[-1] == "Formule irritante pour les peaux sensibles."
    assert enriched.meta.enrichment_available is True
    assert enriched.score == plain.score
    assert enriched.confidence == plain.confidence

    _, summary = enricher.calls[0]
    assert summary["score"] == plain.score
    assert summary["grade"] == plain.grade


@pytest.mark.asyncio
async def test_timeout_degrades_to_rule_based_result(registry):
    enricher = SlowEnricher()
    engine = _engine(registry, enricher, timeout=0.05)

    plain = engine.analyze(PRODUCT)
    result = await engine.analyze_async(PRODUCT)

    assert enricher.cancelled is True
    assert result.meta.enrichment_available is False
    assert result.insights == plain.insights
    assert result.confidence == plain.confidence


@pytest.mark.asyncio
async def test_client_error_degrades_to_rule_based_result(registry):
    engine = _engine(registry, FailingEnricher())
    plain = engine.analyze(PRODUCT)
    result = await engine.analyze_async(PRODUCT)
    assert result.meta.enrichment_available is False
    assert result.to_json() == plain.to_json()


@pytest.mark.asyncio
async def test_empty_narrative_is_not_enrichment(registry):
    result = await _engine(registry, FixedEnricher(None)).analyze_async(PRODUCT)
    assert result.meta.enrichment_available is False


@pytest.mark.asyncio
async def test_blank_narrative_is_not_enrichment(registry):
    plain = _engine(registry, NullEnricher()).analyze(PRODUCT)
    result = await _engine(registry, FixedEnricher("   \n ")).analyze_async(PRODUCT)
    assert result.meta.enrichment_available is False
    assert result.insights == plain.insights


@pytest.mark.asyncio
async def test_zero_timeout_is_kept(registry):
    engine = _engine(registry, SlowEnricher(), timeout=0)
    assert engine.enrichment_timeout == 0
    result = await engine.analyze_async(PRODUCT)
    assert result.meta.enrichment_available is False


def test_default_timeout_comes_from_config(registry):
    assert _engine(registry, NullEnricher()).enrichment_timeout == config.ENRICHMENT_TIMEOUT


@pytest.mark.asyncio
async def test_null_enricher(registry):
    assert NullEnricher().available is False
    assert await NullEnricher().enrich(ProductInput.parse(PRODUCT), {}) is None
    result = await _engine(registry, NullEnricher()).analyze_async(PRODUCT)
    assert result.meta.enrichment_available is False


@pytest.mark.asyncio
async def test_enrich_with_timeout_raises_internal_error():
    with pytest.raises(EnrichmentTimeoutError):
        await enrich_with_timeout(SlowEnricher(), ProductInput.parse(PRODUCT), {}, timeout=0.01)


@pytest.mark.asyncio
async def test_caller_cancellation_reaches_enricher(registry):
    enricher = SlowEnricher()
    engine = _engine(registry, enricher, timeout=30)

    task = asyncio.ensure_future(engine.analyze_async(PRODUCT))
    await asyncio.sleep(0.05)
    task.cancel()

    with pytest.raises(asyncio.CancelledError):
        await task
    assert enricher.cancelled is True


@pytest.mark.asyncio
async def test_openai_enricher_uses_chat_completions():
    captured = {}

    async def create(**kwargs):
        captured.update(kwargs)
        message = SimpleNamespace(content="  Trois points clés.  ")
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])

    client = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))
    enricher = OpenAINarrativeEnricher(client=client, model="test-model")

    text = await enricher.enrich(ProductInput.parse(PRODUCT), {"score": 40, "grade": "C"})

    assert text == "Trois points clés."
    assert captured["model"] == "test-model"
    assert captured["messages"][0]["role"] == "system"
    assert "Gel douche" in captured["messages"][1]["content"]


def test_build_enricher_without_key_is_null():
    assert isinstance(build_enricher(api_key=""), NullEnricher)


def test_build_enricher_with_key():
    enricher = build_enricher(api_key="sk-test")
    assert isinstance(enricher, OpenAINarrativeEnricher)
    assert enricher.available is True
