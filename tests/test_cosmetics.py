import pytest

from scoring.cosmetics.classifier import CosmeticClassifier
from scoring.detection.detector import detect
from scoring.models import ProductInput
from scoring.normalizer import normalize_product
from scoring.tables.models import IngredientRisk


def classify(tables, ingredients):
    product = ProductInput(category="cosmetics", ingredients_list=ingredients)
    tokens = normalize_product(product)
    report = detect(product.category, tokens, product.raw_text, tables)
    return CosmeticClassifier().classify(product, tokens, report, tables)


def test_triclosan_is_top_tier_and_costs_at_least_25_points(tables):
    clean = classify(tables, ["Aqua", "Glycerin"])
    with_triclosan = classify(tables, ["Aqua", "Glycerin", "Triclosan"])

    assert with_triclosan.endocrine_risk_level == "VERY_HIGH"
    assert clean.score - with_triclosan.score >= 25
    assert with_triclosan.disruptors[0].key == "triclosan"
    assert with_triclosan.disruptors[0].ingredient == "Triclosan"


def test_score_formula(tables):
    # 100 - 5 (one allergen) - (10 - 9) x 3 + (5 - 5) x 2
    result = classify(tables, ["Aqua", "Limonene"])
    assert result.score == 92
    assert result.allergens == ("limonene",)
    assert result.skin_compatibility == 9


def test_longest_allergen_wins_per_ingredient(tables):
    result = classify(tables, ["Isoeugenol"])
    assert result.allergens == ("isoeugenol",)


def test_longest_disruptor_key_wins_per_ingredient(tables):
    result = classify(tables, ["Methylparaben"])
    assert [d.key for d in result.disruptors] == ["methylparaben"]
    assert result.endocrine_risk_level == "LOW"


@pytest.mark.parametrize("ingredients,level", [
    (["aqua"], "NONE"),
    (["phenoxyethanol"], "LOW"),
    (["phenoxyethanol", "methylparaben"], "MODERATE"),
    (["bha"], "MODERATE"),
    (["bha", "oxybenzone"], "HIGH"),
    (["bht"], "VERY_HIGH"),
])
def test_endocrine_risk_levels(tables, ingredients, level):
    assert classify(tables, ingredients).endocrine_risk_level == level


@pytest.mark.parametrize("ingredients,score,natural,synthetic", [
    (["aqua"], 5, 0, 0),
    (["aloe barbadensis leaf juice"], 10, 1, 0),
    (["argania spinosa kernel oil", "sodium laureth sulfate"], 5, 1, 1),
    (["peg-40 hydrogenated castor oil"], 10, 1, 0),
    (["dimethicone", "propylene glycol", "shea butter"], 3, 1, 2),
])
def test_naturalness(tables, ingredients, score, natural, synthetic):
    result = classify(tables, ingredients)
    assert result.naturalness_score == score
    assert result.natural_count == natural
    assert result.synthetic_count == synthetic


@pytest.mark.parametrize("ingredient,tier,skin", [
    ("petrolatum", IngredientRisk.LOW, 10),
    ("dimethicone", IngredientRisk.MEDIUM, 9),
    ("sodium lauryl sulfate", IngredientRisk.HIGH, 8),
    ("triclosan", IngredientRisk.VERY_HIGH, 7),
])
def test_ingredient_tier_and_skin_compatibility(tables, ingredient, tier, skin):
    result = classify(tables, [ingredient])
    assert result.ingredient_risks[0].risk_tier == tier
    assert result.skin_compatibility == skin


def test_ingredient_function(tables):
    risks = classify(tables, ["Sodium Lauryl Sulfate", "Linalool", "Aqua"]).ingredient_risks
    assert [r.function for r in risks] == [
        "Agent nettoyant (sulfate)",
        "Parfum/Fragrance",
        "Fonction non identifiée",
    ]


def test_suitability(tables):
    sls = classify(tables, ["sodium lauryl sulfate"]).suitability
    assert sls.sensitive_skin is False
    assert sls.pregnancy is True

    assert classify(tables, ["phenoxyethanol"]).suitability.pregnancy is False

    fragrances = classify(tables, ["limonene", "linalool", "citral"]).suitability
    assert fragrances.children is False
    assert fragrances.sensitive_skin is True


def test_no_classifier_confidence(tables):
    assert classify(tables, ["aqua"]).confidence is None


def test_unclassified(tables):
    result = classify(tables, ["Aqua", "Glycerin", "Shea Butter", "Limonene"])
    assert result.unclassified == ("Aqua", "Glycerin")
