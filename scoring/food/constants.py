from typing import Dict, List, Tuple

# Calibration constants: heuristic additive-count overrides, not taken from the
# NOVA reference classification. Review before changing scoring behaviour.
NOVA_FORCE_4_ADDITIVES = 5   # raw_additive_count > 5 forces group 4
NOVA_FLOOR_3_ADDITIVES = 2   # raw_additive_count > 2 gives at least group 3

NOVA_LABELS: Dict[int, str] = {
    1: "Aliments non transformés ou transformés minimalement",
    2: "Ingrédients culinaires transformés",
    3: "Aliments transformés",
    4: "Aliments ultra-transformés",
}

NOVA_EXPLANATIONS: Dict[int, str] = {
    1: "Aliment brut ou minimalement transformé, idéal pour la santé",
    2: "Ingrédient culinaire simple, à utiliser avec modération",
    3: "Aliment transformé, consommation occasionnelle recommandée",
    4: "Ultra-transformé avec nombreux additifs, à limiter fortement",
}

# Confidence of the NOVA group
CONFIDENCE_WITH_MARKERS = 0.9
CONFIDENCE_WITHOUT_MARKERS = 0.7

# g/100g. (canonical nutrient, display name, threshold)
CONCERN_THRESHOLDS: List[Tuple[str, str, float]] = [
    ("sugars", "sucres", 15.0),
    ("saturated_fat", "graisses saturées", 5.0),
    ("salt", "sel", 1.5),
]

POSITIVE_THRESHOLDS: List[Tuple[str, str, float]] = [
    ("fiber", "fibres", 3.0),
    ("protein", "protéines", 5.0),
]

# kcal/100g
CALORIES_LOW = 100
CALORIES_MODERATE = 250

KCAL_TO_KJ = 4.184
SODIUM_TO_SALT = 2.5

# Health score weights
NOVA_STEP_PENALTY = 10
ADDITIVE_PENALTY = 5
ADDITIVE_PENALTY_CAP = 20
CONCERN_PENALTY = 5
POSITIVE_BONUS = 2

NUTRI_SCORE_IMPACT: Dict[str, int] = {
    "A": 0, "B": -5, "C": -10, "D": -20, "E": -30,
}

# Nutrient names as they come from clients and OpenFoodFacts, after
# snake-casing and lower-casing, mapped to canonical keys
NUTRIENT_ALIASES: Dict[str, List[str]] = {
    "energy_kcal": ["energy", "energy_kcal", "energy_kcal_100g", "calories", "kcal", "energie", "énergie"],
    "energy_kj": ["energy_kj", "energy_100g", "energy_kj_100g", "kj", "energie_kj", "énergie_kj"],
    "sugars": ["sugars", "sugars_100g", "sugar", "sucres", "sucre"],
    "saturated_fat": [
        "saturated_fat", "saturated_fat_100g", "saturated_fats", "saturatedfat", "saturates",
        "graisses_saturées", "graisses_saturees", "acides_gras_saturés", "acides_gras_satures",
    ],
    "salt": ["salt", "salt_100g", "sel"],
    "sodium": ["sodium", "sodium_100g"],
    "fiber": ["fiber", "fiber_100g", "fibre", "fibers", "fibres"],
    "protein": ["protein", "proteins", "proteins_100g", "proteines", "protéines"],
    "fruits_vegetables": [
        "fruits_vegetables", "fruits_vegetables_nuts", "fruits_vegetables_nuts_estimate_from_ingredients_100g", "fruit_veg",
        "fruits_legumes", "fruits_légumes",
    ],
}


def _build_lookup(d: Dict[str, List[str]]) -> Dict[str, str]:
    return {alias: canonical for canonical, aliases in d.items() for alias in aliases}

NUTRIENT_LOOKUP = _build_lookup(NUTRIENT_ALIASES)
