"""
Detergent Environmental Classifier

Aquatic toxicity from weighted toxicant matches, biodegradable share of the
formula, declared eco-labels and the critical dilution volume.
"""

from typing import Iterable, List, Sequence, Tuple

from scoring import grading
from scoring.base_classifier import BaseClassifier
from scoring.detection.models import DetectionReport
from scoring.detergents import constants as C
from scoring.detergents.models import CriticalDilutionVolume, DetergentClassification, ToxicantFinding
from scoring.models import Category, IngredientToken, ProductInput
from scoring.tables.models import DetergentTables, ScoringTables
from scoring.utils import clamp, normalize_text, round_half_up


def toxicity_level(points: int) -> str:
    for bound, level in C.TOXICITY_LEVELS:
        if points <= bound:
            return level
    return C.TOP_TOXICITY_LEVEL


def find_toxicants(tokens: Sequence[IngredientToken], tables: DetergentTables) -> List[ToxicantFinding]:
    """Each toxicant entry counts at most once per ingredient, whichever alias matched."""
    findings = []
    for token in tokens:
        for toxicant in tables.toxicants:
            if any(k in token.normalized for k in toxicant.keywords):
                findings.append(ToxicantFinding(
                    ingredient=token.display,
                    toxicant=toxicant.name,
                    weight=toxicant.weight,
                    concern=toxicant.concern,
                    effect=toxicant.effect,
                ))
    return findings


def biodegradability(tokens: Sequence[IngredientToken], tables: DetergentTables) -> Tuple[int, int]:
    """(score 0-10, ratio in percent) of ingredients matching the biodegradable table."""
    if not tokens:
        return 0, 0
    matching = sum(
        1 for t in tokens
        if any(k in t.normalized for k in tables.biodegradable)
    )
    ratio = matching / len(tokens)
    return round_half_up(ratio * 10), round_half_up(ratio * 100)


def detect_eco_labels(name: str, certifications: Iterable[str], tables: DetergentTables) -> List[str]:
    text = normalize_text(" ".join([name or ""] + list(certifications)))
    return [
        label.name for label in tables.eco_labels
        if any(k in text for k in label.keywords)
    ]


def critical_dilution_volume(findings: Sequence[ToxicantFinding]) -> CriticalDilutionVolume:
    effects = {f.effect for f in findings if f.effect}
    value = float(C.CDV_BASE)
    for effect, multiplier in C.CDV_MULTIPLIERS.items():
        if effect in effects:
            value *= multiplier

    interpretation = C.CDV_TOP_BAND
    for bound, label in C.CDV_BANDS:
        if value <= bound:
            interpretation = label
            break
    return CriticalDilutionVolume(value=value, interpretation=interpretation)


def environmental_score(level: str, bio_score: int, label_count: int) -> int:
    score = C.ENVIRONMENTAL_BASE
    score += C.ENVIRONMENTAL_PENALTY[level]
    score += (bio_score - 5) * C.BIODEGRADABILITY_WEIGHT
    score += label_count * C.ECO_LABEL_BONUS
    return round_half_up(clamp(score))


def health_score(level: str) -> int:
    return round_half_up(clamp(C.HEALTH_BASE + C.HEALTH_PENALTY[level]))


class DetergentClassifier(BaseClassifier):
    category = Category.DETERGENTS

    def classify(
        self,
        product: ProductInput,
        tokens: Sequence[IngredientToken],
        report: DetectionReport,
        tables: ScoringTables,
    ) -> DetergentClassification:
        detergents = tables.detergents

        findings = find_toxicants(tokens, detergents)
        points = sum(f.weight for f in findings)
        level = toxicity_level(points)
        bio_score, bio_ratio = biodegradability(tokens, detergents)
        labels = detect_eco_labels(product.name, product.certifications, detergents)
        env = environmental_score(level, bio_score, len(labels))

        explanation = []
        if level != "LOW":
            explanation.append(f"Toxicité aquatique {level.lower()}")
        if bio_score < 5:
            explanation.append("Biodégradabilité limitée")
        else:
            explanation.append("Bonne biodégradabilité")
        if labels:
            explanation.append("Label(s) écologique(s): " + ", ".join(labels))

        keywords = detergents.marker_keywords()
        unclassified = tuple(
            t.display for t in tokens
            if not any(k in t.normalized for k in keywords)
        )

        return DetergentClassification(
            score=env,
            confidence=None,
            risk_tier=grading.risk_tier(env),
            explanation=tuple(explanation),
            matched_markers=report.matched_markers,
            unclassified=unclassified,
            aquatic_toxicity_level=level,
            toxicity_points=points,
            toxic_ingredients=tuple(findings),
            biodegradability_score=bio_score,
            biodegradable_ratio=bio_ratio,
            eco_labels=tuple(labels),
            environmental_score=env,
            health_score=health_score(level),
            critical_dilution_volume=critical_dilution_volume(findings),
        )
