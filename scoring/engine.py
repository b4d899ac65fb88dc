"""
Scoring engine

Composes the pipeline: Normalizer -> Detector -> one category classifier ->
Grader -> Insight generator. Every stage reads the same table snapshot,
taken once per analysis from the registry.
"""

import logging
import warnings
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Mapping, Optional, Union

from scoring import config, grading
from scoring.classifiers import classifier_for
from scoring.detection.detector import detect
from scoring.enrichment import NarrativeEnricher, NullEnricher, build_enricher, enrich_with_timeout
from scoring.errors import EnrichmentTimeoutError, UnknownIngredientWarning
from scoring.insights.generator import generate, suggest_alternatives
from scoring.models import ClassificationResult, ProductInput
from scoring.normalizer import normalize_product
from scoring.result import AnalysisMeta, AnalysisResult
from scoring.tables.loader import TableRegistry

logger = logging.getLogger(__name__)

ProductLike = Union[ProductInput, Mapping[str, Any]]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ScoringEngine:
    """
    Scores products for one table registry.

    analyze() is synchronous and pure apart from the timestamp.
    analyze_async() adds the single, bounded enrichment call.
    """

    def __init__(
        self,
        registry: Optional[TableRegistry] = None,
        enricher: Optional[NarrativeEnricher] = None,
        clock: Callable[[], datetime] = utc_now,
        enrichment_timeout: Optional[float] = None,
    ):
        self.registry = registry or TableRegistry()
        self.enricher = enricher or NullEnricher()
        self.clock = clock
        self.enrichment_timeout = (
            enrichment_timeout if enrichment_timeout is not None else config.ENRICHMENT_TIMEOUT
        )

    @classmethod
    def from_config(cls, enrich: bool = True) -> "ScoringEngine":
        """Engine with tables from config.TABLES_DIR and, when enrich is set, the configured enricher."""
        enricher = build_enricher() if enrich else NullEnricher()
        return cls(registry=TableRegistry(), enricher=enricher)

    def analyze(self, product: ProductLike) -> AnalysisResult:
        """Score one product without enrichment. Raises ValidationError on unusable input."""
        product, tables, classification, graded, count = self._score(product)
        return self._assemble(product, tables, classification, graded, count, narrative=None)

    async def analyze_async(self, product: ProductLike) -> AnalysisResult:
        """
        Score one product, then ask the enricher for a narrative.

        Enrichment failures never fail the analysis: the result is complete and
        meta.enrichment_available is False.
        """
        product, tables, classification, graded, count = self._score(product)

        narrative = None
        if self.enricher.available:
            summary = self._summary(classification, graded)
            try:
                narrative = await enrich_with_timeout(
                    self.enricher, product, summary, self.enrichment_timeout
                )
            except EnrichmentTimeoutError as e:
                logger.warning("Enrichment skipped for %s: %s", product.name, e)
            except Exception as e:
                logger.error("Enrichment failed for %s: %s", product.name, e)

        return self._assemble(product, tables, classification, graded, count, narrative=narrative)

    def _score(self, product: ProductLike):
        if not isinstance(product, ProductInput):
            product = ProductInput.parse(product)

        tables = self.registry.current
        tokens = normalize_product(product)

        report = detect(product.category, tokens, product.raw_text, tables, product.additive_tags)
        classification = classifier_for(product.category).classify(product, tokens, report, tables)

        if classification.unclassified:
            warnings.warn(
                UnknownIngredientWarning(
                    f"{len(classification.unclassified)} unclassified ingredient(s) in "
                    f"{product.name}: {', '.join(classification.unclassified)}"
                ),
                stacklevel=3,
            )

        graded = grading.aggregate(classification, product, len(tokens))
        logger.info(
            "Analysed %s (%s): score=%d grade=%s tables=%s",
            product.name, product.category.value, graded.score, graded.grade, tables.version,
        )
        return product, tables, classification, graded, len(tokens)

    @staticmethod
    def _summary(classification: ClassificationResult, graded: grading.GradedScore) -> Dict[str, Any]:
        return {
            "score": graded.score,
            "grade": graded.grade,
            "risk_label": graded.risk_label,
            "risk_tier": classification.risk_tier.value,
            "explanation": list(classification.explanation),
            "matched_markers": list(classification.matched_markers),
        }

    def _assemble(self, product, tables, classification, graded, count, narrative) -> AnalysisResult:
        alternatives = suggest_alternatives(product.name, tables.for_category(product.category).alternatives)
        insight_set = generate(classification, graded.score, narrative, alternatives)
        meta = AnalysisMeta(
            category=product.category,
            product_name=product.name,
            analyzer_version=config.ANALYZER_VERSION,
            tables_version=tables.version,
            timestamp=self.clock(),
            enrichment_available=bool(narrative and narrative.strip()),
            ingredient_count=count,
        )
        return AnalysisResult(
            score=graded.score,
            grade=graded.grade,
            risk_label=graded.risk_label,
            confidence=graded.confidence,
            breakdown=classification,
            insights=insight_set.insights,
            recommendations=insight_set.recommendations,
            warnings=insight_set.warnings,
            meta=meta,
        )
