from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple

import pydantic
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from scoring.errors import ValidationError

DEFAULT_PRODUCT_NAME = "Produit inconnu"


class Category(str, Enum):
    FOOD = "food"
    COSMETICS = "cosmetics"
    DETERGENTS = "detergents"


class RiskTier(str, Enum):
    """Overall risk of a classification, read off the score break points."""
    LOW = "LOW"
    MODERATE = "MODERATE"
    HIGH = "HIGH"
    VERY_HIGH = "VERY_HIGH"


class ProductInput(BaseModel):
    """Structured product description handed over by the request layer."""
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    name: str = DEFAULT_PRODUCT_NAME
    brand: Optional[str] = None
    category: Category
    ingredients_text: Optional[str] = Field(
        None, validation_alias=AliasChoices("ingredients_text", "ingredientsText")
    )
    ingredients_list: Optional[Tuple[str, ...]] = Field(
        None, validation_alias=AliasChoices("ingredients_list", "ingredientsList")
    )
    certifications: Tuple[str, ...] = ()
    nutrition_facts: Optional[Dict[str, Optional[float]]] = Field(
        None, validation_alias=AliasChoices("nutrition_facts", "nutritionFacts")
    )
    barcode: Optional[str] = None
    additive_tags: Tuple[str, ...] = Field(
        (), validation_alias=AliasChoices("additive_tags", "additiveTags")
    )

    @model_validator(mode="before")
    @classmethod
    def fold_synonyms(cls, data: Any) -> Any:
        """Accept the field names older clients send (product_name, composition, inci...)."""
        if not isinstance(data, Mapping):
            return data
        data = dict(data)

        if not data.get("name"):
            data["name"] = data.get("product_name") or data.get("productName") or DEFAULT_PRODUCT_NAME

        has_text = data.get("ingredients_text") or data.get("ingredientsText")
        has_list = data.get("ingredients_list") or data.get("ingredientsList")
        if not has_text and not has_list:
            raw = data.get("ingredients") or data.get("composition") or data.get("inci")
            if isinstance(raw, str):
                data["ingredients_text"] = raw
            elif raw is not None:
                data["ingredients_list"] = raw
        return data

    @field_validator("name")
    @classmethod
    def default_blank_name(cls, v: str) -> str:
        return v.strip() or DEFAULT_PRODUCT_NAME

    @field_validator("certifications", "additive_tags", mode="before")
    @classmethod
    def coerce_sequence(cls, v):
        if v is None:
            return ()
        if isinstance(v, str):
            return (v,)
        return v

    @property
    def raw_text(self) -> str:
        """Full ingredient text as declared, used for phrase and additive scanning."""
        if self.ingredients_list:
            return ", ".join(self.ingredients_list)
        return self.ingredients_text or ""

    @classmethod
    def parse(cls, data: Mapping[str, Any]) -> "ProductInput":
        """Validate a raw mapping, reporting failures as scoring ValidationError."""
        try:
            return cls.model_validate(data)
        except pydantic.ValidationError as e:
            first = e.errors()[0]
            field = ".".join(str(part) for part in first.get("loc", ())) or "product"
            if field == "category":
                hint = "category must be one of: " + ", ".join(c.value for c in Category)
            else:
                hint = None
            raise ValidationError(field, first.get("msg", "invalid value"), hint) from e


class IngredientToken(BaseModel):
    model_config = ConfigDict(frozen=True)

    display: str
    normalized: str


class ClassificationResult(BaseModel):
    """Fields shared by every category breakdown."""
    model_config = ConfigDict(frozen=True)

    score: int = Field(..., ge=0, le=100)
    confidence: Optional[float] = Field(None, ge=0.0, le=1.0)
    risk_tier: RiskTier
    explanation: Tuple[str, ...] = ()
    matched_markers: Tuple[str, ...] = ()
    unclassified: Tuple[str, ...] = ()
