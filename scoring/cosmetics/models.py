from typing import Literal, Tuple
from pydantic import BaseModel, ConfigDict, Field

from scoring.models import ClassificationResult
from scoring.tables.models import EvidenceLevel, IngredientRisk


class DisruptorFinding(BaseModel):
    """An ingredient matched against the endocrine disruptor table."""
    model_config = ConfigDict(frozen=True)

    ingredient: str
    key: str
    evidence: EvidenceLevel
    health_effects: Tuple[str, ...] = ()
    regulatory_status: str = ""


class IngredientAssessment(BaseModel):
    model_config = ConfigDict(frozen=True)

    ingredient: str
    function: str
    risk_tier: IngredientRisk
    concerns: Tuple[str, ...] = ()


class Suitability(BaseModel):
    """Who the product suits. False means avoid."""
    model_config = ConfigDict(frozen=True)

    sensitive_skin: bool = True
    pregnancy: bool = True
    children: bool = True


class CosmeticClassification(ClassificationResult):
    """Cosmetic breakdown: endocrine disruptors, allergens, naturalness, skin tolerance."""
    category: Literal["cosmetics"] = "cosmetics"
    endocrine_risk_level: Literal["NONE", "LOW", "MODERATE", "HIGH", "VERY_HIGH"] = "NONE"
    disruptors: Tuple[DisruptorFinding, ...] = ()
    allergens: Tuple[str, ...] = ()
    naturalness_score: int = Field(..., ge=0, le=10)
    natural_count: int = 0
    synthetic_count: int = 0
    skin_compatibility: int = Field(..., ge=0, le=10)
    ingredient_risks: Tuple[IngredientAssessment, ...] = ()
    suitability: Suitability = Suitability()
