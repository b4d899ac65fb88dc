from scoring.insights.generator import build_flags, generate, score_bracket, suggest_alternatives
from scoring.tables.models import AlternativesTable


def test_score_brackets():
    assert score_bracket(95) == 80
    assert score_bracket(60) == 60
    assert score_bracket(41) == 40
    assert score_bracket(12) == 0


def test_culinary_food_insights_follow_template_order(engine):
    result = engine.analyze({"category": "food", "ingredients": ["eau", "farine de blé", "levure", "sel"]})
    assert result.insights == ("🍳 Ingrédient culinaire", "💡 Usage modéré", "🌟 Excellent !", "💚 Impact minimal")
    assert result.warnings == ()
    assert result.recommendations == (
        "💡 Variez les sources",
        "🔄 Alternative: Version bio sans additifs",
        "🔄 Alternative: Alternative maison",
        "🔄 Alternative: Option locale en circuit court",
    )


def test_ultra_processed_food(engine):
    result = engine.analyze({
        "category": "food",
        "ingredients_text": "sucre, huile de palme hydrogénée, E102, E129",
        "nutrition_facts": {"sugars": 45},
    })
    assert result.breakdown.nova_group == 4
    assert "⚠️ Ultra-transformé" in result.insights
    assert "❤️ Risque cardiovasculaire" in result.insights
    assert result.warnings == (
        "🚨 Additifs à risque élevé",
        "🚫 Acides gras trans",
        "🍬 Teneur élevée en sucres",
    )
    assert "⚡ Consommation occasionnelle" in result.recommendations


def test_low_score_adds_motivation(engine):
    result = engine.analyze({"category": "cosmetics", "ingredients": ["triclosan", "bht", "bha", "limonene"]})
    assert result.score < 60
    assert "💪 Chaque changement compte" in result.recommendations
    assert "🚨 Perturbateurs endocriniens" in result.warnings
    assert "🚫 Ingrédients controversés" in result.recommendations


def test_detergent_flags(engine):
    result = engine.analyze({"category": "detergents", "ingredients": ["phosphates", "sodium lauryl sulfate"]})
    flags = build_flags(result.breakdown, result.score)
    assert {"detergents_toxicity_high", "detergents_phosphates", "detergents_bio_low", "score_lt_60"} <= flags
    assert "🌊 Phosphates: risque d'eutrophisation" in result.warnings


def test_lists_are_deduplicated(engine):
    result = engine.analyze({"category": "detergents", "ingredients": ["phosphates"]})
    for messages in (result.insights, result.warnings, result.recommendations):
        assert len(messages) == len(set(messages))


def test_narrative_is_last_insight_and_score_untouched(engine):
    result = engine.analyze({"category": "cosmetics", "ingredients": ["aqua", "shea butter"]})
    enriched = generate(result.breakdown, result.score, narrative="  Une formule simple.  ")
    assert enriched.insights[-1] == "Une formule simple."
    assert enriched.insights[:-1] == result.insights
    assert result.breakdown.score == result.score


def test_alternatives_match_product_name_keywords(tables):
    assert suggest_alternatives("Chips saveur barbecue", tables.food.alternatives) == [
        "Chips de légumes maison", "Noix non salées", "Popcorn nature",
    ]
    assert suggest_alternatives("LESSIVE liquide", tables.detergents.alternatives)[0] == "Lessive au savon de Marseille"


def test_alternatives_fall_back_to_generic(tables):
    assert suggest_alternatives("Crackers", tables.food.alternatives) == list(tables.food.alternatives.generic)


def test_alternatives_are_capped_and_deduplicated():
    table = AlternativesTable(keywords={"Savon": ["a", "b"], "liquide": ["b", "c", "d"]})
    assert suggest_alternatives("savon liquide", table) == ["a", "b", "c"]
    assert suggest_alternatives("autre", table) == []


def test_engine_appends_alternatives_to_recommendations(engine):
    result = engine.analyze({"name": "Shampoing doux", "category": "cosmetics", "ingredients": ["aqua", "glycerin"]})
    assert result.recommendations[-3:] == (
        "🔄 Alternative: Shampoing solide bio",
        "🔄 Alternative: No-poo",
        "🔄 Alternative: Rhassoul",
    )
    assert result.insights == engine.analyze(
        {"name": "Autre", "category": "cosmetics", "ingredients": ["aqua", "glycerin"]}
    ).insights
