"""Core constants used across Tally modules.

This module centralizes defaults for snapshot normalization and pricing.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_DATA_ROOT = Path(".tally")
DATASET_FILE_NAME = "dataset.json"
SNAPSHOT_FILE_EXTENSION = ".json"
DEFAULT_RARITY = "COMMON"
SECRET_RARITY = "SECRET"
NO_MUTATION = "None"
DEFAULT_GENERATION = 0.0
DEFAULT_ENTITY_NAME = "Unknown"
DEFAULT_FALLBACK_PRICE = 10.0
PRICE_TABLE_EXTENSIONS = (".json", ".yaml", ".yml")
COMPACT_NUMBER_SUFFIXES = (
    (1e12, "T"),
    (1e9, "B"),
    (1e6, "M"),
    (1e3, "K"),
)
CURRENCY_SYMBOL = "R$"
DEFAULT_PRICE_TABLE = {
    "Los Candies": 15.0,
    "Los Puggies": 15.0,
    "Mieteteira Bicicleteira": 10.0,
    "Los 67": 10.0,
    "La Taco Combinasion": 10.0,
    "Spaghetti Tualetti": 10.0,
    "La Secret Combinasion": 15.0,
    "Ketupat Kepat": 10.0,
    "Nuclearo Dinossauro": 10.0,
    "Las Sis": 10.0,
    "Los Planitos": 10.0,
    "Tictac Sahur": 10.0,
    "Jolly Jolly Sahur": 10.0,
    "Tang Tang Keletang": 10.0,
}
