"""
Score Aggregator & Grader

Maps a classifier's 0-100 score to a letter grade, a French risk label and a
risk tier using one set of break points, and settles the final confidence.
"""

from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from scoring.models import ClassificationResult, ProductInput, RiskTier
from scoring.utils import clamp, round_half_up

# (lower bound, grade, risk label, risk tier). Checked top-down.
BREAK_POINTS: List[Tuple[int, str, str, RiskTier]] = [
    (80, "A", "FAIBLE", RiskTier.LOW),
    (60, "B", "MODÉRÉ", RiskTier.MODERATE),
    (40, "C", "ÉLEVÉ", RiskTier.HIGH),
    (20, "D", "TRÈS ÉLEVÉ", RiskTier.VERY_HIGH),
]
FLOOR = ("E", "TRÈS ÉLEVÉ", RiskTier.VERY_HIGH)

# Confidence from data completeness, used when the classifier gives none
CONFIDENCE_BASE = 0.3
CONFIDENCE_MANY_INGREDIENTS = 0.2
MANY_INGREDIENTS = 10
CONFIDENCE_IDENTIFIED = 0.1
CONFIDENCE_KNOWN_BRAND = 0.1
CONFIDENCE_CAP = 0.95

UNKNOWN_BRANDS = {"", "unknown", "inconnu", "inconnue", "non spécifié", "n/a"}


class GradedScore(BaseModel):
    model_config = ConfigDict(frozen=True)

    score: int = Field(..., ge=0, le=100)
    grade: str
    risk_label: str
    confidence: float = Field(..., ge=0.0, le=1.0)


def _band(score: int):
    for bound, grade, label, tier in BREAK_POINTS:
        if score >= bound:
            return grade, label, tier
    return FLOOR


def grade_for(score: int) -> str:
    return _band(score)[0]


def risk_label(score: int) -> str:
    return _band(score)[1]


def risk_tier(score: int) -> RiskTier:
    return _band(score)[2]


def has_known_brand(brand: Optional[str]) -> bool:
    return brand is not None and brand.strip().lower() not in UNKNOWN_BRANDS


def derive_confidence(product: ProductInput, ingredient_count: int) -> float:
    confidence = CONFIDENCE_BASE
    if ingredient_count > MANY_INGREDIENTS:
        confidence += CONFIDENCE_MANY_INGREDIENTS
    if product.barcode or product.certifications:
        confidence += CONFIDENCE_IDENTIFIED
    if has_known_brand(product.brand):
        confidence += CONFIDENCE_KNOWN_BRAND
    return round(min(confidence, CONFIDENCE_CAP), 2)


def aggregate(classification: ClassificationResult, product: ProductInput, ingredient_count: int) -> GradedScore:
    """Grade a classification. Confidence is carried over from the classifier when it has one."""
    score = round_half_up(clamp(classification.score))

    if classification.confidence is not None:
        confidence = classification.confidence
    else:
        confidence = derive_confidence(product, ingredient_count)

    return GradedScore(
        score=score,
        grade=grade_for(score),
        risk_label=risk_label(score),
        confidence=clamp(confidence, 0.0, 1.0),
    )
