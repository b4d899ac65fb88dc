"""
Nutri-Score (2017 general food algorithm)

Points are counted per 100 g: negative points for energy, sugars, saturated
fat and sodium, positive points for fruit/vegetables, fibre and protein.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

from scoring.food.constants import KCAL_TO_KJ, SODIUM_TO_SALT

# One point per threshold strictly exceeded
ENERGY_KJ_THRESHOLDS = [335, 670, 1005, 1340, 1675, 2010, 2345, 2680, 3015, 3350]
SUGARS_THRESHOLDS = [4.5, 9, 13.5, 18, 22.5, 27, 31, 36, 40, 45]
SATURATED_FAT_THRESHOLDS = [1, 2, 3, 4, 5, 6, 7, 8, 9, 10]
SODIUM_MG_THRESHOLDS = [90, 180, 270, 360, 450, 540, 630, 720, 810, 900]
FIBER_THRESHOLDS = [0.9, 1.9, 2.8, 3.7, 4.7]
PROTEIN_THRESHOLDS = [1.6, 3.2, 4.8, 6.4, 8.0]

# Protein is not counted once negative points reach this, unless fruit/veg scores the maximum
PROTEIN_CUTOFF = 11
FRUIT_VEG_MAX_POINTS = 5

# (upper bound of the final score, grade)
GRADE_BOUNDS = [(-1, "A"), (2, "B"), (10, "C"), (18, "D")]


@dataclass
class NutriScore:
    grade: str
    points: int
    negative_points: int
    positive_points: int


def _points(value: float, thresholds: List[float]) -> int:
    return sum(1 for t in thresholds if value > t)


def fruit_veg_points(percent: float) -> int:
    if percent > 80:
        return 5
    if percent > 60:
        return 2
    if percent > 40:
        return 1
    return 0


def grade_for_points(points: int) -> str:
    for bound, grade in GRADE_BOUNDS:
        if points <= bound:
            return grade
    return "E"


def compute_nutri_score(nutrients: Dict[str, float]) -> Optional[NutriScore]:
    """
    Compute the Nutri-Score from canonical nutrient values.

    Needs energy (kJ or kcal), sugars, saturated fat and salt or sodium.
    Returns None when any of them is missing.
    """
    energy_kj = nutrients.get("energy_kj")
    if energy_kj is None and nutrients.get("energy_kcal") is not None:
        energy_kj = nutrients["energy_kcal"] * KCAL_TO_KJ

    salt = nutrients.get("salt")
    if salt is None and nutrients.get("sodium") is not None:
        salt = nutrients["sodium"] * SODIUM_TO_SALT

    sugars = nutrients.get("sugars")
    saturated_fat = nutrients.get("saturated_fat")

    if energy_kj is None or salt is None or sugars is None or saturated_fat is None:
        return None

    sodium_mg = salt / SODIUM_TO_SALT * 1000

    negative = (
        _points(energy_kj, ENERGY_KJ_THRESHOLDS)
        + _points(sugars, SUGARS_THRESHOLDS)
        + _points(saturated_fat, SATURATED_FAT_THRESHOLDS)
        + _points(sodium_mg, SODIUM_MG_THRESHOLDS)
    )

    fv = fruit_veg_points(nutrients.get("fruits_vegetables") or 0)
    fiber = _points(nutrients.get("fiber") or 0, FIBER_THRESHOLDS)
    protein = _points(nutrients.get("protein") or 0, PROTEIN_THRESHOLDS)

    if negative >= PROTEIN_CUTOFF and fv < FRUIT_VEG_MAX_POINTS:
        positive = fv + fiber
    else:
        positive = fv + fiber + protein

    points = negative - positive
    return NutriScore(
        grade=grade_for_points(points),
        points=points,
        negative_points=negative,
        positive_points=positive,
    )
