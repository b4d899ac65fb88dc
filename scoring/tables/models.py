from enum import Enum
from typing import Dict, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, field_validator


def canonical_additive_code(code: str) -> str:
    """'en:e320' -> 'E320'."""
    code = code.strip().upper()
    if code.startswith("EN:"):
        code = code[3:]
    return code


def _lower_all(values):
    return tuple(v.strip().lower() for v in values if v and v.strip())


class IngredientRisk(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    VERY_HIGH = "VERY_HIGH"


class EvidenceLevel(str, Enum):
    SUSPECTED = "SUSPECTED"
    PROBABLE = "PROBABLE"
    CONFIRMED = "CONFIRMED"


class AdditiveRecord(BaseModel):
    """A single additive table entry."""
    model_config = ConfigDict(frozen=True)

    code: str
    name: str
    risk_tier: Literal["low", "medium", "high"]
    concern: str = ""

    @field_validator("code")
    @classmethod
    def canonical_code(cls, v: str) -> str:
        return canonical_additive_code(v)


class AlternativesTable(BaseModel):
    """Product-name keyword -> healthier alternatives, with generic fallbacks."""
    model_config = ConfigDict(frozen=True)

    keywords: Dict[str, Tuple[str, ...]] = {}
    generic: Tuple[str, ...] = ()

    @field_validator("keywords", mode="before")
    @classmethod
    def lower_keys(cls, v):
        return {k.strip().lower(): tuple(alts) for k, alts in v.items() if k and k.strip()}


class FoodTables(BaseModel):
    model_config = ConfigDict(frozen=True)

    version: str
    nova_markers: Dict[int, Tuple[str, ...]]
    additives: Dict[str, AdditiveRecord]
    allergens: Dict[str, Tuple[str, ...]]
    alternatives: AlternativesTable = AlternativesTable()

    @field_validator("nova_markers", "allergens", mode="before")
    @classmethod
    def lower_keywords(cls, v):
        return {k: _lower_all(words) for k, words in v.items()}

    @field_validator("additives", mode="before")
    @classmethod
    def index_additives(cls, v):
        # File stores a list, lookups need code -> record
        if isinstance(v, dict):
            return v
        return {canonical_additive_code(item["code"]): item for item in v}

    def additive(self, code: str) -> Optional[AdditiveRecord]:
        return self.additives.get(canonical_additive_code(code))

    def marker_keywords(self) -> Tuple[str, ...]:
        return tuple(k for tier in sorted(self.nova_markers) for k in self.nova_markers[tier])

    def tier_of(self, marker: str) -> int:
        """Highest NOVA floor a marker belongs to, 1 when unknown."""
        tiers = [tier for tier, words in self.nova_markers.items() if marker in words]
        return max(tiers) if tiers else 1


class DisruptorRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    evidence: EvidenceLevel
    risk_tier: IngredientRisk
    health_effects: Tuple[str, ...] = ()
    regulatory_status: str = ""

    @field_validator("key")
    @classmethod
    def lower_key(cls, v: str) -> str:
        return v.strip().lower()


class IrritantRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    keyword: str
    risk_tier: IngredientRisk
    concern: str = ""

    @field_validator("keyword")
    @classmethod
    def lower_keyword(cls, v: str) -> str:
        return v.strip().lower()


class CosmeticTables(BaseModel):
    model_config = ConfigDict(frozen=True)

    version: str
    endocrine_disruptors: Tuple[DisruptorRecord, ...]
    allergens: Tuple[str, ...]
    irritants: Tuple[IrritantRecord, ...]
    natural_vocabulary: Tuple[str, ...]
    synthetic_vocabulary: Tuple[str, ...]
    alternatives: AlternativesTable = AlternativesTable()

    @field_validator("allergens", "natural_vocabulary", "synthetic_vocabulary", mode="before")
    @classmethod
    def lower_keywords(cls, v):
        return _lower_all(v)

    def disruptor(self, key: str) -> Optional[DisruptorRecord]:
        for record in self.endocrine_disruptors:
            if record.key == key:
                return record
        return None

    def marker_keywords(self) -> Tuple[str, ...]:
        return (
            tuple(d.key for d in self.endocrine_disruptors)
            + self.allergens
            + tuple(i.keyword for i in self.irritants)
        )


class ToxicantRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    keywords: Tuple[str, ...]
    weight: int
    concern: str = ""
    # Feeds the critical dilution volume multipliers
    effect: Optional[Literal["phosphate", "chlorine", "optical_brightener"]] = None

    @field_validator("keywords", mode="before")
    @classmethod
    def lower_keywords(cls, v):
        return _lower_all(v)


class EcoLabelRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    keywords: Tuple[str, ...]

    @field_validator("keywords", mode="before")
    @classmethod
    def lower_keywords(cls, v):
        return _lower_all(v)


class DetergentTables(BaseModel):
    model_config = ConfigDict(frozen=True)

    version: str
    toxicants: Tuple[ToxicantRecord, ...]
    biodegradable: Tuple[str, ...]
    eco_labels: Tuple[EcoLabelRecord, ...]
    alternatives: AlternativesTable = AlternativesTable()

    @field_validator("biodegradable", mode="before")
    @classmethod
    def lower_keywords(cls, v):
        return _lower_all(v)

    def marker_keywords(self) -> Tuple[str, ...]:
        return tuple(k for t in self.toxicants for k in t.keywords) + self.biodegradable


class ScoringTables(BaseModel):
    """One consistent snapshot of every lookup table."""
    model_config = ConfigDict(frozen=True)

    food: FoodTables
    cosmetics: CosmeticTables
    detergents: DetergentTables

    @property
    def version(self) -> str:
        return (
            f"food@{self.food.version}+cosmetics@{self.cosmetics.version}"
            f"+detergents@{self.detergents.version}"
        )

    def for_category(self, category: str):
        return getattr(self, getattr(category, "value", category))

    def marker_keywords(self, category: str) -> Tuple[str, ...]:
        return self.for_category(category).marker_keywords()
