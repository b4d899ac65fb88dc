"""
Cosmetic Hazard Classifier

Per-ingredient lookup against the endocrine disruptor, fragrance allergen and
irritant tables, then naturalness and skin compatibility on top.
"""

from typing import List, Optional, Sequence, Tuple

from scoring import grading
from scoring.base_classifier import BaseClassifier
from scoring.cosmetics import constants as C
from scoring.cosmetics.models import (
    CosmeticClassification,
    DisruptorFinding,
    IngredientAssessment,
    Suitability,
)
from scoring.detection.models import DetectionReport
from scoring.models import Category, IngredientToken, ProductInput
from scoring.tables.models import CosmeticTables, IngredientRisk, ScoringTables
from scoring.utils import clamp, longest_match, round_half_up

RISKY_TIERS = (IngredientRisk.MEDIUM, IngredientRisk.HIGH, IngredientRisk.VERY_HIGH)
SEVERE_TIERS = (IngredientRisk.HIGH, IngredientRisk.VERY_HIGH)


def ingredient_function(ingredient: str, tables: CosmeticTables) -> str:
    for function, keywords in C.INGREDIENT_FUNCTIONS:
        if any(k in ingredient for k in keywords):
            return function
    if longest_match(ingredient, tables.allergens):
        return "Parfum/Fragrance"
    if longest_match(ingredient, tables.natural_vocabulary):
        return "Émollient naturel"
    return C.UNKNOWN_FUNCTION


def assess_ingredient(
    token: IngredientToken, tables: CosmeticTables
) -> Tuple[IngredientAssessment, Optional[DisruptorFinding], str]:
    """
    Risk tier of one ingredient.

    The longest matching disruptor key wins, then the longest irritant
    keyword, then a fragrance allergen (MEDIUM). Anything else is LOW.
    Also returns the disruptor finding and allergen name, if any.
    """
    name = token.normalized
    finding = None

    disruptor_key = longest_match(name, [d.key for d in tables.endocrine_disruptors])
    allergen = longest_match(name, tables.allergens)

    if disruptor_key:
        record = tables.disruptor(disruptor_key)
        finding = DisruptorFinding(
            ingredient=token.display,
            key=record.key,
            evidence=record.evidence,
            health_effects=record.health_effects,
            regulatory_status=record.regulatory_status,
        )
        tier = record.risk_tier
        concerns = record.health_effects + ((record.regulatory_status,) if record.regulatory_status else ())
    else:
        irritants = {i.keyword: i for i in tables.irritants}
        irritant_key = longest_match(name, irritants)
        if irritant_key:
            tier = irritants[irritant_key].risk_tier
            concerns = (irritants[irritant_key].concern,) if irritants[irritant_key].concern else ()
        elif allergen:
            tier = IngredientRisk.MEDIUM
            concerns = tuple(C.ALLERGEN_CONCERNS)
        else:
            tier = IngredientRisk.LOW
            concerns = ()

    assessment = IngredientAssessment(
        ingredient=token.display,
        function=ingredient_function(name, tables),
        risk_tier=tier,
        concerns=concerns,
    )
    return assessment, finding, allergen


def naturalness(tokens: Sequence[IngredientToken], tables: CosmeticTables) -> Tuple[int, int, int]:
    """(score 0-10, natural count, synthetic count). Natural wins when both vocabularies match."""
    natural = 0
    synthetic = 0
    for token in tokens:
        if any(word in token.normalized for word in tables.natural_vocabulary):
            natural += 1
        elif any(word in token.normalized for word in tables.synthetic_vocabulary):
            synthetic += 1

    total = natural + synthetic
    if total == 0:
        return C.NEUTRAL_NATURALNESS, natural, synthetic
    return round_half_up(10 * natural / total), natural, synthetic


def skin_compatibility(assessments: Sequence[IngredientAssessment]) -> int:
    score = 10
    for a in assessments:
        score -= C.SKIN_PENALTY[a.risk_tier.value]
    return int(clamp(score, 0, 10))


def endocrine_risk_level(findings: Sequence[DisruptorFinding]) -> str:
    if not findings:
        return "NONE"
    strongest = max((f.evidence.value for f in findings), key=C.EVIDENCE_RANK.get)
    single, several = C.ENDOCRINE_LEVELS[strongest]
    return several if len(findings) >= 2 else single


def cosmetic_score(findings, allergens, skin: int, natural_score: int) -> int:
    score = 100
    for f in findings:
        score -= C.EVIDENCE_PENALTY[f.evidence.value]
    score -= len(allergens) * C.ALLERGEN_PENALTY
    score -= (10 - skin) * C.SKIN_COMPATIBILITY_WEIGHT
    score += (natural_score - 5) * C.NATURALNESS_WEIGHT
    return round_half_up(clamp(score))


def suitability(assessments: Sequence[IngredientAssessment], findings) -> Suitability:
    risky = [a for a in assessments if a.risk_tier in RISKY_TIERS]
    return Suitability(
        sensitive_skin=not any(a.risk_tier in SEVERE_TIERS for a in assessments),
        pregnancy=not findings,
        children=len(risky) <= C.CHILDREN_MAX_RISKY,
    )


class CosmeticClassifier(BaseClassifier):
    category = Category.COSMETICS

    def classify(
        self,
        product: ProductInput,
        tokens: Sequence[IngredientToken],
        report: DetectionReport,
        tables: ScoringTables,
    ) -> CosmeticClassification:
        cosmetics = tables.cosmetics

        assessments: List[IngredientAssessment] = []
        findings: List[DisruptorFinding] = []
        allergens = set()
        unclassified = []

        for token in tokens:
            assessment, finding, allergen = assess_ingredient(token, cosmetics)
            assessments.append(assessment)
            if finding:
                findings.append(finding)
            if allergen:
                allergens.add(allergen)
            if not (finding or allergen or assessment.concerns or self._in_vocabulary(token, cosmetics)):
                unclassified.append(token.display)

        natural_score, natural_count, synthetic_count = naturalness(tokens, cosmetics)
        skin = skin_compatibility(assessments)
        score = cosmetic_score(findings, allergens, skin, natural_score)

        explanation = []
        if findings:
            explanation.append(f"{len(findings)} perturbateur(s) endocrinien(s) détecté(s)")
        if allergens:
            explanation.append(f"{len(allergens)} allergène(s) obligatoire(s) présent(s)")
        if not explanation:
            explanation.append("Composition globalement acceptable")

        return CosmeticClassification(
            score=score,
            confidence=None,
            risk_tier=grading.risk_tier(score),
            explanation=tuple(explanation),
            matched_markers=report.matched_markers,
            unclassified=tuple(unclassified),
            endocrine_risk_level=endocrine_risk_level(findings),
            disruptors=tuple(findings),
            allergens=tuple(sorted(allergens)),
            naturalness_score=natural_score,
            natural_count=natural_count,
            synthetic_count=synthetic_count,
            skin_compatibility=skin,
            ingredient_risks=tuple(assessments),
            suitability=suitability(assessments, findings),
        )

    @staticmethod
    def _in_vocabulary(token: IngredientToken, tables: CosmeticTables) -> bool:
        words = tables.natural_vocabulary + tables.synthetic_vocabulary
        return any(word in token.normalized for word in words)
