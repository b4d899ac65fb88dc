"""Shared fixtures: the shipped tables, a registry over them and an engine with a fixed clock."""

from datetime import datetime, timezone

import pytest

from scoring.engine import ScoringEngine
from scoring.enrichment import NullEnricher
from scoring.tables.loader import TableRegistry, load_tables

FIXED_TIME = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture(scope="session")
def tables():
    return load_tables()


@pytest.fixture
def registry(tables):
    return TableRegistry(tables=tables)


@pytest.fixture
def engine(registry):
    return ScoringEngine(registry=registry, enricher=NullEnricher(), clock=lambda: FIXED_TIME)
