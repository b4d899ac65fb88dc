import pytest

from scoring.errors import ValidationError
from scoring.models import ProductInput
from scoring.normalizer import normalize_ingredients, normalize_product, split_ingredients


def test_split_on_commas_semicolons_and_newlines():
    assert split_ingredients("Eau, Sucre; Sel\nHuile d'olive") == ["Eau", "Sucre", "Sel", "Huile d'olive"]


def test_split_drops_empty_entries():
    assert split_ingredients(" , eau,, ;\n sel ,") == ["eau", "sel"]


def test_display_keeps_case_and_normalized_is_lowercase():
    tokens = normalize_ingredients(ingredients_text="Farine de BLÉ, Sel")
    assert [t.display for t in tokens] == ["Farine de BLÉ", "Sel"]
    assert [t.normalized for t in tokens] == ["farine de blé", "sel"]


def test_internal_whitespace_is_collapsed():
    tokens = normalize_ingredients(ingredients_list=["  sodium   lauryl\tsulfate "])
    assert tokens[0].display == "sodium lauryl sulfate"


def test_list_takes_precedence_over_text():
    tokens = normalize_ingredients(ingredients_text="sucre, sel", ingredients_list=["eau"])
    assert [t.normalized for t in tokens] == ["eau"]


def test_blank_list_falls_back_to_text():
    tokens = normalize_ingredients(ingredients_text="sucre, sel", ingredients_list=["  ", ""])
    assert [t.normalized for t in tokens] == ["sucre", "sel"]


@pytest.mark.parametrize("text,items", [
    (None, None),
    ("", []),
    (" ,; \n", None),
    (None, ["   "]),
])
def test_empty_input_raises_validation_error(text, items):
    with pytest.raises(ValidationError) as exc:
        normalize_ingredients(ingredients_text=text, ingredients_list=items)
    assert exc.value.field == "ingredients"
    assert "ingredients required" in exc.value.hint


def test_normalization_is_idempotent():
    first = normalize_ingredients(ingredients_text="Eau,  Sucre de CANNE ; Sel\nE330")
    second = normalize_ingredients(ingredients_list=[t.normalized for t in first])
    assert [t.normalized for t in second] == [t.normalized for t in first]
    assert [t.display for t in second] == [t.normalized for t in first]


def test_normalize_product_uses_synonym_fields():
    product = ProductInput.parse({"category": "cosmetics", "inci": "Aqua, Glycerin"})
    assert [t.normalized for t in normalize_product(product)] == ["aqua", "glycerin"]
