from typing import Literal, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field

from scoring.models import ClassificationResult


class CriticalDilutionVolume(BaseModel):
    """Water needed to dilute the product's toxic load, in L/kg."""
    model_config = ConfigDict(frozen=True)

    value: float
    unit: str = "L/kg"
    interpretation: Literal["Acceptable", "Élevé", "Très élevé"]


class ToxicantFinding(BaseModel):
    model_config = ConfigDict(frozen=True)

    ingredient: str
    toxicant: str
    weight: int
    concern: str = ""
    effect: Optional[str] = None


class DetergentClassification(ClassificationResult):
    """Detergent breakdown: aquatic toxicity, biodegradability and eco-labels."""
    category: Literal["detergents"] = "detergents"
    aquatic_toxicity_level: Literal["LOW", "MODERATE", "HIGH", "VERY_HIGH"]
    toxicity_points: int = Field(0, ge=0)
    toxic_ingredients: Tuple[ToxicantFinding, ...] = ()
    biodegradability_score: int = Field(..., ge=0, le=10)
    biodegradable_ratio: int = Field(..., ge=0, le=100)
    eco_labels: Tuple[str, ...] = ()
    environmental_score: int = Field(..., ge=0, le=100)
    health_score: int = Field(..., ge=0, le=100)
    critical_dilution_volume: CriticalDilutionVolume
