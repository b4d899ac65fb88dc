from datetime import datetime
from typing import Annotated, Any, Dict, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from scoring.cosmetics.models import CosmeticClassification
from scoring.detergents.models import DetergentClassification
from scoring.food.models import FoodClassification
from scoring.models import Category

Breakdown = Annotated[
    Union[FoodClassification, CosmeticClassification, DetergentClassification],
    Field(discriminator="category"),
]


class AnalysisMeta(BaseModel):
    model_config = ConfigDict(frozen=True)

    category: Category
    product_name: str
    analyzer_version: str
    tables_version: str
    timestamp: datetime
    enrichment_available: bool = False
    ingredient_count: int = Field(0, ge=0)


class AnalysisResult(BaseModel):
    """Final, immutable outcome of one product analysis."""
    model_config = ConfigDict(frozen=True)

    score: int = Field(..., ge=0, le=100)
    grade: str
    risk_label: str
    confidence: float = Field(..., ge=0.0, le=1.0)
    breakdown: Breakdown
    insights: Tuple[str, ...] = ()
    recommendations: Tuple[str, ...] = ()
    warnings: Tuple[str, ...] = ()
    meta: AnalysisMeta

    def to_json(self) -> Dict[str, Any]:
        """JSON-safe dict (enums as values, timestamp as ISO 8601)."""
        return self.model_dump(mode="json")
