from typing import Dict, List, Tuple

# Score penalty per disruptor, by evidence level
EVIDENCE_PENALTY: Dict[str, int] = {
    "CONFIRMED": 25,
    "PROBABLE": 15,
    "SUSPECTED": 8,
}

ALLERGEN_PENALTY = 5
SKIN_COMPATIBILITY_WEIGHT = 3
NATURALNESS_WEIGHT = 2

# Neutral naturalness when no ingredient matches either vocabulary
NEUTRAL_NATURALNESS = 5

# Skin compatibility points lost per ingredient, by individual risk tier
SKIN_PENALTY: Dict[str, int] = {
    "LOW": 0,
    "MEDIUM": 1,
    "HIGH": 2,
    "VERY_HIGH": 3,
}

# Endocrine risk level for the strongest evidence found: (single disruptor, two or more)
ENDOCRINE_LEVELS: Dict[str, Tuple[str, str]] = {
    "CONFIRMED": ("VERY_HIGH", "VERY_HIGH"),
    "PROBABLE": ("MODERATE", "HIGH"),
    "SUSPECTED": ("LOW", "MODERATE"),
}

EVIDENCE_RANK: Dict[str, int] = {"SUSPECTED": 1, "PROBABLE": 2, "CONFIRMED": 3}

ALLERGEN_CONCERNS = ["Réaction allergique possible", "Sensibilisation cutanée"]

# Children: fails above this many ingredients at MEDIUM or higher
CHILDREN_MAX_RISKY = 2

# First matching rule names the ingredient's role in the formula
INGREDIENT_FUNCTIONS: List[Tuple[str, List[str]]] = [
    ("Agent nettoyant (sulfate)", ["sulfate", "sulphate"]),
    ("Agent filmogène (silicone)", ["siloxane", "silicone", "dimethicone"]),
    ("Conservateur", ["paraben", "phenoxyethanol", "benzyl alcohol", "sorbate"]),
    ("Parfum/Fragrance", ["parfum", "fragrance"]),
    ("Émulsifiant", ["cetyl", "stearyl", "glycol", "polysorbate"]),
    ("Émollient naturel", ["oil", "butter"]),
]

UNKNOWN_FUNCTION = "Fonction non identifiée"
