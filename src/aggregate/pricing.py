"""Entity price lookup and price table loading.

This module resolves entity prices by exact name with a fixed fallback.
Price tables load from JSON or YAML mapping files.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Mapping, cast

from core.constants import DEFAULT_FALLBACK_PRICE, DEFAULT_PRICE_TABLE, PRICE_TABLE_EXTENSIONS
from core.errors import TallyDependencyError, TallyPriceTableError
from core.logging_config import get_logger

PriceTable = Mapping[str, float]

_LOGGER = get_logger(__name__)


def price_of(
    entity_name: str,
    price_table: PriceTable,
    fallback: float = DEFAULT_FALLBACK_PRICE,
) -> float:
    """Return the price for an entity name.

    Args:
        entity_name: Exact entity display name.
        price_table: Mapping from entity name to price.
        fallback: Price used when the name is missing from the table.

    Returns:
        Table price, or ``fallback`` when absent.
    """
    price = price_table.get(entity_name)
    if price is None:
        return fallback
    return float(price)


def default_price_table() -> dict[str, float]:
    """Return a copy of the built-in price table."""
    return dict(DEFAULT_PRICE_TABLE)


def load_price_table(path: Path) -> dict[str, float]:
    """Load a price table from a JSON or YAML file.

    Args:
        path: Price table file path.

    Returns:
        Mapping from entity name to positive price.

    Raises:
        TallyPriceTableError: If the file is missing or its content is invalid.
        TallyDependencyError: If a YAML file is given and PyYAML is unavailable.
    """
    if not path.exists():
        raise TallyPriceTableError(
            f"Price table file does not exist at {path}. Provide a valid JSON or YAML file path."
        )
    suffix = path.suffix.lower()
    if suffix not in PRICE_TABLE_EXTENSIONS:
        raise TallyPriceTableError(
            f"Unsupported price table extension '{suffix}' for {path}. "
            f"Supported extensions: {PRICE_TABLE_EXTENSIONS}."
        )
    text = path.read_text(encoding="utf-8")
    if suffix == ".json":
        payload = _load_json_payload(path, text)
    else:
        payload = _load_yaml_payload(path, text)
    table = _validate_price_payload(path, payload)
    _LOGGER.info("price_table_loaded", path=str(path), entry_count=len(table))
    return table


def _load_json_payload(path: Path, text: str) -> object:
    try:
        return cast(object, json.loads(text))
    except json.JSONDecodeError as error:
        raise TallyPriceTableError(
            f"Failed to parse price table at {path}: {error.msg}. Fix JSON syntax and retry."
        ) from error


def _load_yaml_payload(path: Path, text: str) -> object:
    try:
        import yaml  # type: ignore[import-untyped]
    except ImportError as error:  # pragma: no cover - dependency failure
        raise TallyDependencyError(
            "YAML price tables require PyYAML. Install with 'pip install pyyaml'."
        ) from error
    try:
        return cast(object, yaml.safe_load(text))
    except yaml.YAMLError as error:
        raise TallyPriceTableError(
            f"Failed to parse YAML price table at {path}: {error}. Fix YAML syntax and retry."
        ) from error


def _validate_price_payload(path: Path, payload: object) -> dict[str, float]:
    """Check price table shape and values.

    Args:
        path: Source file for error context.
        payload: Decoded file content.

    Returns:
        Normalized price mapping.

    Raises:
        TallyPriceTableError: If the root is not a mapping or a price is invalid.
    """
    if not isinstance(payload, Mapping):
        raise TallyPriceTableError(
            f"Invalid price table at {path}: expected mapping of name to price, "
            f"got {type(payload).__name__}."
        )
    table: dict[str, float] = {}
    for name, raw_price in payload.items():
        if isinstance(raw_price, bool) or not isinstance(raw_price, (int, float)):
            raise TallyPriceTableError(
                f"Invalid price for '{name}' in {path}: expected number, got {raw_price!r}."
            )
        if raw_price <= 0:
            raise TallyPriceTableError(
                f"Invalid price for '{name}' in {path}: expected positive number, got {raw_price}."
            )
        table[str(name)] = float(raw_price)
    return table
