import logging
import re
from typing import Iterable, List, Sequence

from scoring.detection.models import DetectionReport
from scoring.models import Category, IngredientToken
from scoring.tables.models import ScoringTables, canonical_additive_code
from scoring.utils import normalize_text

logger = logging.getLogger(__name__)

# E-numbers as printed on labels or tagged by OpenFoodFacts (en:e322)
ADDITIVE_CODE_PATTERN = re.compile(r'\b(?:en:)?E\d{3,4}[a-z]?\b', re.IGNORECASE)
# Canonical form a supplied tag must have to count as an additive
CANONICAL_CODE_PATTERN = re.compile(r'E\d{3,4}[A-Z]?')


def find_additive_codes(text: str, additive_tags: Iterable[str] = ()) -> List[str]:
    """
    Collect additive codes in first-seen order, duplicates removed.

    Codes from the text come first, then any codes from additive_tags
    not already seen. Tags that are not E-numbers (en:none) are dropped.
    """
    codes: List[str] = []
    seen = set()

    candidates = [m.group(0) for m in ADDITIVE_CODE_PATTERN.finditer(text or "")]
    candidates.extend(additive_tags or ())

    for candidate in candidates:
        code = canonical_additive_code(candidate)
        if not CANONICAL_CODE_PATTERN.fullmatch(code) or code in seen:
            continue
        seen.add(code)
        codes.append(code)

    return codes


def match_markers(text: str, keywords: Iterable[str]) -> List[str]:
    """Substring match, not word boundary. Returns the sorted set of keywords found."""
    norm_text = normalize_text(text)
    return sorted({keyword for keyword in keywords if keyword and keyword in norm_text})


def detect(
    category: Category,
    tokens: Sequence[IngredientToken],
    raw_text: str,
    tables: ScoringTables,
    additive_tags: Iterable[str] = (),
) -> DetectionReport:
    """
    Scan a product's ingredients for category markers and additive codes.

    Args:
        category: Product category, selects the marker vocabulary
        tokens: Normalized ingredient tokens
        raw_text: Ingredient text as declared (multi-word markers can span tokens)
        tables: Table snapshot for this analysis
        additive_tags: Extra additive codes supplied with the product

    Returns:
        DetectionReport. Zero matches is a valid report.
    """
    # The joined tokens cover list input with no raw text
    full_text = raw_text or ", ".join(t.normalized for t in tokens)

    markers = match_markers(full_text, tables.marker_keywords(category))
    codes = find_additive_codes(full_text, additive_tags)

    logger.debug(
        "Detected %d markers and %d additive codes for %s",
        len(markers), len(codes), getattr(category, "value", category),
    )

    return DetectionReport(
        matched_markers=tuple(markers),
        additive_codes=tuple(codes),
        raw_additive_count=len(codes),
    )
