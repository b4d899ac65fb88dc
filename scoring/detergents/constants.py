from typing import Dict, List, Tuple

# (upper bound of toxicity points, aquatic toxicity level)
TOXICITY_LEVELS: List[Tuple[int, str]] = [
    (0, "LOW"),
    (2, "MODERATE"),
    (5, "HIGH"),
]
TOP_TOXICITY_LEVEL = "VERY_HIGH"

ENVIRONMENTAL_BASE = 100
ENVIRONMENTAL_PENALTY: Dict[str, int] = {
    "LOW": 0,
    "MODERATE": -15,
    "HIGH": -35,
    "VERY_HIGH": -60,
}
BIODEGRADABILITY_WEIGHT = 4
ECO_LABEL_BONUS = 10

# Detergents have an indirect health impact, hence the smaller penalties
HEALTH_BASE = 85
HEALTH_PENALTY: Dict[str, int] = {
    "LOW": 0,
    "MODERATE": -5,
    "HIGH": -15,
    "VERY_HIGH": -25,
}

# Critical dilution volume, L/kg
CDV_BASE = 10000
CDV_MULTIPLIERS: Dict[str, float] = {
    "phosphate": 3.0,
    "chlorine": 2.5,
    "optical_brightener": 1.5,
}
# (upper bound, interpretation)
CDV_BANDS: List[Tuple[float, str]] = [
    (20000, "Acceptable"),
    (50000, "Élevé"),
]
CDV_TOP_BAND = "Très élevé"
