from typing import Literal, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field

from scoring.models import ClassificationResult
from scoring.tables.models import AdditiveRecord


class NutrientFlag(BaseModel):
    """A nutrient above a concern or positive threshold."""
    model_config = ConfigDict(frozen=True)

    nutrient: str
    value: float


class NutritionAnalysis(BaseModel):
    model_config = ConfigDict(frozen=True)

    concerns: Tuple[NutrientFlag, ...] = ()
    positives: Tuple[NutrientFlag, ...] = ()
    nutri_score: Optional[Literal["A", "B", "C", "D", "E"]] = None
    nutri_score_points: Optional[int] = None
    calorie_level: Literal["unknown", "low", "moderate", "high"] = "unknown"
    balance: Literal["balanced", "moderate", "unbalanced"] = "balanced"


class AdditiveAnalysis(BaseModel):
    """Detected additive codes split against the additive table."""
    model_config = ConfigDict(frozen=True)

    total: int = 0
    problematic: Tuple[AdditiveRecord, ...] = ()
    acceptable: Tuple[AdditiveRecord, ...] = ()
    unknown: Tuple[str, ...] = ()
    risk_level: Literal["low", "moderate", "high"] = "low"

    @property
    def problematic_count(self) -> int:
        return len(self.problematic)


class FoodClassification(ClassificationResult):
    """Food breakdown: NOVA group, additives, nutrition and allergens."""
    category: Literal["food"] = "food"
    nova_group: int = Field(..., ge=1, le=4)
    nova_label: str
    additives: AdditiveAnalysis = AdditiveAnalysis()
    problematic_additives: Tuple[AdditiveRecord, ...] = ()
    nutrition: NutritionAnalysis = NutritionAnalysis()
    allergens: Tuple[str, ...] = ()
