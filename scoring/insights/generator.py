"""
Insight & Recommendation Generator

Works out the condition flags of one classification, then emits the template
rows whose flag is set. Read-only with respect to score, grade and confidence.
"""

from typing import Dict, List, Optional, Sequence, Set

from scoring.cosmetics.models import CosmeticClassification
from scoring.detergents.models import DetergentClassification
from scoring.food.models import FoodClassification
from scoring.insights.models import InsightSet
from scoring.insights.templates import TEMPLATES
from scoring.models import ClassificationResult
from scoring.tables.models import AlternativesTable
from scoring.utils import normalize_text

SCORE_BRACKETS = [80, 60, 40, 0]
HIGH_LEVELS = ("HIGH", "VERY_HIGH")
MAX_ALTERNATIVES = 3
ALTERNATIVE_PREFIX = "🔄 Alternative: "


def score_bracket(score: int) -> int:
    for bracket in SCORE_BRACKETS:
        if score >= bracket:
            return bracket
    return 0


def _food_flags(c: FoodClassification, score: int) -> Set[str]:
    flags = {"food", f"food_nova_{c.nova_group}"}
    if c.nova_group >= 3:
        flags.add("food_nova_ge_3")
    if c.problematic_additives:
        flags.add("food_problematic_additives")
    if any(a.risk_tier == "high" for a in c.problematic_additives):
        flags.add("food_high_risk_additive")
    if any("hydrog" in m for m in c.matched_markers):
        flags.add("food_hydrogenated")
    for concern in c.nutrition.concerns:
        flags.add(f"food_concern_{concern.nutrient}")
    if score < 40:
        flags.add("food_score_lt_40")
    return flags


def _cosmetic_flags(c: CosmeticClassification, score: int) -> Set[str]:
    flags = {"cosmetics"}
    if c.disruptors:
        flags.add("cosmetics_disruptor")
    if c.endocrine_risk_level in HIGH_LEVELS:
        flags.add("cosmetics_endocrine_high")
    if c.allergens:
        flags.add("cosmetics_allergens")
    if c.naturalness_score >= 8:
        flags.add("cosmetics_natural_high")
    elif c.naturalness_score < 5:
        flags.add("cosmetics_natural_low")
    flags.add("cosmetics_score_ge_50" if score >= 50 else "cosmetics_score_lt_50")
    return flags


def _detergent_flags(c: DetergentClassification, score: int) -> Set[str]:
    flags = {"detergents"}
    if c.aquatic_toxicity_level in HIGH_LEVELS:
        flags.add("detergents_toxicity_high")
    if any(f.effect == "phosphate" for f in c.toxic_ingredients):
        flags.add("detergents_phosphates")
    if c.biodegradability_score <= 6:
        flags.add("detergents_bio_low")
    elif c.biodegradability_score >= 9:
        flags.add("detergents_bio_high")
    if c.eco_labels:
        flags.add("detergents_eco_label")
    flags.add("detergents_score_ge_50" if score >= 50 else "detergents_score_lt_50")
    return flags


def build_flags(classification: ClassificationResult, score: int) -> Set[str]:
    """Condition flags for one classification and its final score."""
    flags = {f"score_{score_bracket(score)}"}
    if score < 60:
        flags.add("score_lt_60")
    if score < 40:
        flags.add("score_lt_40")

    if isinstance(classification, FoodClassification):
        flags |= _food_flags(classification, score)
    elif isinstance(classification, CosmeticClassification):
        flags |= _cosmetic_flags(classification, score)
    elif isinstance(classification, DetergentClassification):
        flags |= _detergent_flags(classification, score)
    return flags


def suggest_alternatives(product_name: str, table: AlternativesTable) -> List[str]:
    """Alternatives for every keyword in the product name, or the generic ones when none matches."""
    name = normalize_text(product_name)
    found: List[str] = []
    for keyword, alternatives in table.keywords.items():
        if keyword not in name:
            continue
        for alternative in alternatives:
            if alternative not in found:
                found.append(alternative)
    if not found:
        found = list(table.generic)
    return found[:MAX_ALTERNATIVES]


def generate(
    classification: ClassificationResult,
    score: int,
    narrative: Optional[str] = None,
    alternatives: Sequence[str] = (),
) -> InsightSet:
    """
    Template messages for a classification.

    Args:
        classification: Category breakdown
        score: Final graded score
        narrative: Optional enrichment text, appended as the last insight
        alternatives: Suggested products, appended to the recommendations

    Returns:
        InsightSet with de-duplicated lists in template order
    """
    flags = build_flags(classification, score)

    lists: Dict[str, List[str]] = {"insight": [], "warning": [], "recommendation": []}
    for flag, kind, messages in TEMPLATES:
        if flag not in flags:
            continue
        target = lists[kind]
        for message in messages:
            if message not in target:
                target.append(message)

    for alternative in alternatives:
        message = ALTERNATIVE_PREFIX + alternative
        if message not in lists["recommendation"]:
            lists["recommendation"].append(message)

    if narrative and narrative.strip() and narrative.strip() not in lists["insight"]:
        lists["insight"].append(narrative.strip())

    return InsightSet(
        insights=tuple(lists["insight"]),
        warnings=tuple(lists["warning"]),
        recommendations=tuple(lists["recommendation"]),
    )
