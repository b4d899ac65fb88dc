"""
Ingredient Normalizer

Turns raw ingredient input (delimited text or a list) into an ordered
sequence of tokens with a display copy and a lowercase matching copy.
"""

import re
from typing import Iterable, List, Optional, Tuple

from scoring.errors import ValidationError
from scoring.models import IngredientToken, ProductInput

# Commas are the primary separator, semicolons and line breaks secondary
SEPARATORS = re.compile(r'[,;\n\r]+')


def _clean(entry: str) -> str:
    return re.sub(r'\s+', ' ', entry).strip()


def split_ingredients(text: str) -> List[str]:
    """Split free text on the known separators, dropping empty entries."""
    if not text:
        return []
    return [part for part in (_clean(p) for p in SEPARATORS.split(text)) if part]


def normalize_ingredients(
    ingredients_text: Optional[str] = None,
    ingredients_list: Optional[Iterable[str]] = None,
) -> Tuple[IngredientToken, ...]:
    """
    Reconcile text or list input into canonical ingredient tokens.

    A non-empty list takes precedence over text. Raises ValidationError when
    nothing usable remains.
    """
    entries: List[str] = []
    if ingredients_list:
        entries = [_clean(str(item)) for item in ingredients_list if item is not None]
        entries = [e for e in entries if e]
    if not entries and ingredients_text:
        entries = split_ingredients(ingredients_text)

    if not entries:
        raise ValidationError(
            "ingredients",
            "no ingredient found after normalization",
            "ingredients required: provide ingredients_text or ingredients_list",
        )

    return tuple(IngredientToken(display=e, normalized=e.lower()) for e in entries)


def normalize_product(product: ProductInput) -> Tuple[IngredientToken, ...]:
    return normalize_ingredients(product.ingredients_text, product.ingredients_list)
