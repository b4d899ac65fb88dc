"""
Food Transformation Classifier

NOVA-style processing group from tiered markers and additive count, plus
additive risk split, nutrition flags, Nutri-Score and allergen groups.
"""

import re
from typing import Dict, List, Mapping, Optional, Sequence

from scoring import grading
from scoring.base_classifier import BaseClassifier
from scoring.detection.detector import ADDITIVE_CODE_PATTERN
from scoring.detection.models import DetectionReport
from scoring.food import constants as C
from scoring.food.models import AdditiveAnalysis, FoodClassification, NutrientFlag, NutritionAnalysis
from scoring.food.nutri_score import compute_nutri_score
from scoring.models import Category, IngredientToken, ProductInput
from scoring.tables.models import FoodTables, ScoringTables
from scoring.utils import clamp, normalize_text, round_half_up


def nova_group(markers: Sequence[str], raw_additive_count: int, tables: FoodTables) -> int:
    """Maximum of every floor that fired, 1 when none did. Overrides only raise the group."""
    group = 1
    for marker in markers:
        group = max(group, tables.tier_of(marker))

    if raw_additive_count > C.NOVA_FORCE_4_ADDITIVES:
        group = 4
    elif raw_additive_count > C.NOVA_FLOOR_3_ADDITIVES:
        group = max(group, 3)

    return group


def analyze_additives(codes: Sequence[str], tables: FoodTables) -> AdditiveAnalysis:
    problematic = []
    acceptable = []
    unknown = []

    for code in codes:
        record = tables.additive(code)
        if record is None:
            unknown.append(code)
        elif record.risk_tier in ("medium", "high"):
            problematic.append(record)
        else:
            acceptable.append(record)

    if not problematic:
        risk_level = "low"
    elif len(problematic) == 1:
        risk_level = "moderate"
    else:
        risk_level = "high"

    return AdditiveAnalysis(
        total=len(codes),
        problematic=tuple(problematic),
        acceptable=tuple(acceptable),
        unknown=tuple(unknown),
        risk_level=risk_level,
    )


def canonical_nutrients(facts: Optional[Mapping[str, Optional[float]]]) -> Dict[str, float]:
    """Resolve client nutrient names (saturatedFat, saturated-fat, sucres...) to canonical keys."""
    nutrients: Dict[str, float] = {}
    for key, value in (facts or {}).items():
        if value is None:
            continue
        snake = re.sub(r'(?<=[a-z])(?=[A-Z])', '_', str(key))
        snake = re.sub(r'[\s\-]+', '_', snake.strip()).lower()
        canonical = C.NUTRIENT_LOOKUP.get(snake)
        if canonical and canonical not in nutrients:
            nutrients[canonical] = float(value)

    if "salt" not in nutrients and "sodium" in nutrients:
        nutrients["salt"] = nutrients["sodium"] * C.SODIUM_TO_SALT
    return nutrients


def calorie_level(nutrients: Mapping[str, float]) -> str:
    kcal = nutrients.get("energy_kcal")
    if kcal is None and nutrients.get("energy_kj") is not None:
        kcal = nutrients["energy_kj"] / C.KCAL_TO_KJ
    if kcal is None:
        return "unknown"
    if kcal < C.CALORIES_LOW:
        return "low"
    if kcal < C.CALORIES_MODERATE:
        return "moderate"
    return "high"


def analyze_nutrition(facts: Optional[Mapping[str, Optional[float]]]) -> NutritionAnalysis:
    nutrients = canonical_nutrients(facts)

    concerns = [
        NutrientFlag(nutrient=name, value=nutrients[key])
        for key, name, threshold in C.CONCERN_THRESHOLDS
        if nutrients.get(key, 0) > threshold
    ]
    positives = [
        NutrientFlag(nutrient=name, value=nutrients[key])
        for key, name, threshold in C.POSITIVE_THRESHOLDS
        if nutrients.get(key, 0) > threshold
    ]

    if len(concerns) >= 2:
        balance = "unbalanced"
    elif len(concerns) == 1:
        balance = "moderate"
    else:
        balance = "balanced"

    nutri = compute_nutri_score(nutrients)

    return NutritionAnalysis(
        concerns=tuple(concerns),
        positives=tuple(positives),
        nutri_score=nutri.grade if nutri else None,
        nutri_score_points=nutri.points if nutri else None,
        calorie_level=calorie_level(nutrients),
        balance=balance,
    )


def detect_allergens(text: str, tables: FoodTables) -> List[str]:
    norm_text = normalize_text(text)
    return sorted(
        group for group, keywords in tables.allergens.items()
        if any(keyword in norm_text for keyword in keywords)
    )


def health_score(group: int, nutrition: NutritionAnalysis, additives: AdditiveAnalysis) -> int:
    score = 100
    score -= (group - 1) * C.NOVA_STEP_PENALTY

    # Nutri-Score only counts when it could be computed
    if nutrition.nutri_score:
        score += C.NUTRI_SCORE_IMPACT[nutrition.nutri_score]

    score -= min(additives.problematic_count * C.ADDITIVE_PENALTY, C.ADDITIVE_PENALTY_CAP)
    score -= len(nutrition.concerns) * C.CONCERN_PENALTY
    score += len(nutrition.positives) * C.POSITIVE_BONUS

    return round_half_up(clamp(score))


class FoodClassifier(BaseClassifier):
    category = Category.FOOD

    def classify(
        self,
        product: ProductInput,
        tokens: Sequence[IngredientToken],
        report: DetectionReport,
        tables: ScoringTables,
    ) -> FoodClassification:
        food = tables.food
        full_text = product.raw_text or ", ".join(t.normalized for t in tokens)

        group = nova_group(report.matched_markers, report.raw_additive_count, food)
        additives = analyze_additives(report.additive_codes, food)
        nutrition = analyze_nutrition(product.nutrition_facts)
        allergens = detect_allergens(full_text, food)
        score = health_score(group, nutrition, additives)

        explanation = [C.NOVA_EXPLANATIONS[group]]
        if nutrition.nutri_score:
            explanation.append(f"Nutri-Score {nutrition.nutri_score}")
        if additives.problematic:
            explanation.append(
                f"Contient {additives.problematic_count} additif(s) controversé(s): "
                + ", ".join(f"{a.code} {a.name}" for a in additives.problematic)
            )

        return FoodClassification(
            score=score,
            confidence=C.CONFIDENCE_WITH_MARKERS if report.has_markers else C.CONFIDENCE_WITHOUT_MARKERS,
            risk_tier=grading.risk_tier(score),
            explanation=tuple(explanation),
            matched_markers=report.matched_markers,
            unclassified=tuple(self._unclassified(tokens, food)),
            nova_group=group,
            nova_label=C.NOVA_LABELS[group],
            additives=additives,
            problematic_additives=additives.problematic,
            nutrition=nutrition,
            allergens=tuple(allergens),
        )

    @staticmethod
    def _unclassified(tokens: Sequence[IngredientToken], food: FoodTables) -> List[str]:
        """Ingredients with no marker, allergen keyword or additive code."""
        keywords = food.marker_keywords() + tuple(k for words in food.allergens.values() for k in words)
        return [
            t.display for t in tokens
            if not ADDITIVE_CODE_PATTERN.search(t.normalized)
            and not any(k in t.normalized for k in keywords)
        ]
