import json
import shutil

import pytest

from scoring import config
from scoring.errors import TableLoadError
from scoring.tables.loader import TableRegistry, load_tables
from scoring.tables.models import canonical_additive_code


@pytest.fixture
def tables_copy(tmp_path):
    target = tmp_path / "tables"
    shutil.copytree(config.TABLES_DIR, target)
    return target


def _set_version(directory, filename, version):
    path = directory / filename
    data = json.loads(path.read_text(encoding="utf-8"))
    data["version"] = version
    path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")


def test_shipped_tables_load(tables):
    assert tables.version.startswith("food@")
    assert "+cosmetics@" in tables.version
    assert "+detergents@" in tables.version


def test_additive_lookup_is_case_and_prefix_insensitive(tables):
    assert canonical_additive_code("en:e320") == "E320"
    record = tables.food.additive("en:e320")
    assert record is not None
    assert record.name == "BHA"
    assert record.risk_tier == "high"
    assert tables.food.additive("E999") is None


def test_nova_tier_of_marker(tables):
    assert tables.food.tier_of("maltodextrine") == 4
    assert tables.food.tier_of("conservateur") == 3
    assert tables.food.tier_of("vinaigre") == 2
    assert tables.food.tier_of("not a marker") == 1


def test_keywords_are_lowercased(tables):
    for record in tables.cosmetics.endocrine_disruptors:
        assert record.key == record.key.lower()
    for label in tables.detergents.eco_labels:
        assert all(k == k.lower() for k in label.keywords)


def test_reload_swaps_snapshot(tables_copy):
    registry = TableRegistry(directory=tables_copy)
    before = registry.current

    _set_version(tables_copy, "food.json", "2099.1")
    fresh = registry.reload()

    assert registry.current is fresh
    assert fresh.food.version == "2099.1"
    # Readers holding the old snapshot keep a consistent view
    assert before.food.version != "2099.1"


def test_failed_reload_keeps_previous_snapshot(tables_copy):
    registry = TableRegistry(directory=tables_copy)
    before = registry.current

    (tables_copy / "cosmetics.json").write_text("{not json", encoding="utf-8")
    with pytest.raises(TableLoadError):
        registry.reload()

    assert registry.current is before


def test_schema_violation_is_a_table_load_error(tables_copy):
    path = tables_copy / "detergents.json"
    data = json.loads(path.read_text(encoding="utf-8"))
    del data["toxicants"]
    path.write_text(json.dumps(data), encoding="utf-8")

    with pytest.raises(TableLoadError):
        load_tables(tables_copy)


def test_missing_directory(tmp_path):
    with pytest.raises(TableLoadError):
        load_tables(tmp_path / "nowhere")


def test_alternatives_are_loaded_per_category(tables):
    assert "chips" in tables.food.alternatives.keywords
    assert "crème" in tables.cosmetics.alternatives.keywords
    assert "liquide vaisselle" in tables.detergents.alternatives.keywords
    for category in ("food", "cosmetics", "detergents"):
        assert len(tables.for_category(category).alternatives.generic) == 3
