"""Unit tests for price lookup and price table loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from aggregate.pricing import default_price_table, load_price_table, price_of
from core.errors import TallyPriceTableError
from tests.fixture_paths import fixture_path


def test_price_of_returns_exact_match() -> None:
    """Known names should return their table price."""
    assert price_of("Los Candies", {"Los Candies": 15.0}) == 15.0


def test_price_of_falls_back_for_unknown_name() -> None:
    """Unknown names should use the fallback price."""
    assert price_of("Unknown Item", {"Los Candies": 15.0}) == 10.0


def test_price_of_is_case_sensitive() -> None:
    """Lookups should require an exact name match."""
    assert price_of("los candies", {"Los Candies": 15.0}, fallback=1.0) == 1.0


def test_default_price_table_contains_builtin_prices() -> None:
    """Built-in table should include the known premium entities."""
    table = default_price_table()

    assert table["La Secret Combinasion"] == 15.0


def test_load_price_table_reads_json() -> None:
    """JSON price tables should load as float mappings."""
    table = load_price_table(fixture_path("prices/prices.json"))

    assert table == {"Los Candies": 15.0, "Las Sis": 20.0}


def test_load_price_table_reads_yaml() -> None:
    """YAML price tables should load like JSON ones."""
    table = load_price_table(fixture_path("prices/prices.yaml"))

    assert table["Las Sis"] == 20.0


def test_load_price_table_rejects_non_positive_price() -> None:
    """Negative prices should be rejected."""
    with pytest.raises(TallyPriceTableError, match="positive"):
        load_price_table(fixture_path("prices/negative.yaml"))


def test_load_price_table_rejects_missing_file(tmp_path: Path) -> None:
    """Missing price table files should fail clearly."""
    with pytest.raises(TallyPriceTableError):
        load_price_table(tmp_path / "missing.json")


def test_load_price_table_rejects_non_mapping_root(tmp_path: Path) -> None:
    """A list root should not be accepted as a price table."""
    table_path = tmp_path / "prices.json"
    table_path.write_text("[1, 2]", encoding="utf-8")

    with pytest.raises(TallyPriceTableError, match="mapping"):
        load_price_table(table_path)
