"""
Static table loading

Tables live as versioned JSON files so they can be edited without touching
code. They are validated once into frozen models; a registry holds the current
snapshot and swaps it in one assignment on reload.
"""

import json
import logging
import threading
from pathlib import Path
from typing import Optional, Union

import pydantic

from scoring import config
from scoring.errors import TableLoadError
from scoring.tables.models import CosmeticTables, DetergentTables, FoodTables, ScoringTables

logger = logging.getLogger(__name__)

TABLE_FILES = {
    "food": ("food.json", FoodTables),
    "cosmetics": ("cosmetics.json", CosmeticTables),
    "detergents": ("detergents.json", DetergentTables),
}


def _load_file(path: Path, schema):
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise TableLoadError(path, str(e)) from e

    try:
        return schema.model_validate(data)
    except pydantic.ValidationError as e:
        raise TableLoadError(path, str(e)) from e


def load_tables(directory: Optional[Union[str, Path]] = None) -> ScoringTables:
    """Load and validate every table file from directory (defaults to config.TABLES_DIR)."""
    directory = Path(directory) if directory else Path(config.TABLES_DIR)

    loaded = {}
    for key, (filename, schema) in TABLE_FILES.items():
        loaded[key] = _load_file(directory / filename, schema)

    tables = ScoringTables(**loaded)
    logger.info("Loaded scoring tables %s from %s", tables.version, directory)
    return tables


class TableRegistry:
    """
    Holds the live table snapshot.

    Readers take `current` once per analysis and keep using that object, so a
    concurrent reload never exposes a half-replaced table set.
    """

    def __init__(self, tables: Optional[ScoringTables] = None, directory: Optional[Union[str, Path]] = None):
        self.directory = Path(directory) if directory else Path(config.TABLES_DIR)
        self._lock = threading.Lock()
        self._tables = tables if tables is not None else load_tables(self.directory)

    @property
    def current(self) -> ScoringTables:
        return self._tables

    def reload(self, directory: Optional[Union[str, Path]] = None) -> ScoringTables:
        """
        Re-read the table files and swap them in.

        On failure the previous snapshot stays active and the error is re-raised.
        """
        with self._lock:
            target = Path(directory) if directory else self.directory
            try:
                fresh = load_tables(target)
            except TableLoadError:
                logger.error("Table reload from %s failed, keeping %s", target, self._tables.version)
                raise
            previous = self._tables.version
            self._tables = fresh
            self.directory = target
            logger.info("Scoring tables reloaded: %s -> %s", previous, fresh.version)
            return fresh
