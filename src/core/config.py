"""Runtime configuration model for Tally.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import DATASET_FILE_NAME, DEFAULT_DATA_ROOT, DEFAULT_FALLBACK_PRICE
from core.errors import TallyConfigError


@dataclass(frozen=True)
class TallyConfig:
    """Validated runtime configuration.

    Attributes:
        data_root: Local root directory for the stored dataset.
        price_table_path: Optional JSON or YAML price table file.
        fallback_price: Price applied to entities missing from the table.
    """

    data_root: Path
    price_table_path: Path | None
    fallback_price: float

    @property
    def dataset_path(self) -> Path:
        """Location of the persisted canonical dataset."""
        return self.data_root / DATASET_FILE_NAME

    @classmethod
    def from_env(cls) -> "TallyConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            TallyConfigError: If environment values are invalid.
        """
        data_root_value = os.getenv("TALLY_DATA_ROOT", str(DEFAULT_DATA_ROOT))
        price_table_value = os.getenv("TALLY_PRICE_TABLE")
        fallback_value = os.getenv("TALLY_FALLBACK_PRICE", str(DEFAULT_FALLBACK_PRICE))
        return cls(
            data_root=Path(data_root_value).expanduser().resolve(),
            price_table_path=_parse_optional_path(price_table_value),
            fallback_price=_parse_fallback_price(fallback_value),
        )


def _parse_optional_path(raw_value: str | None) -> Path | None:
    if not raw_value:
        return None
    return Path(raw_value).expanduser().resolve()


def _parse_fallback_price(raw_value: str) -> float:
    """Parse the fallback price environment value.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Parsed positive price.

    Raises:
        TallyConfigError: If value is not a positive number.
    """
    try:
        price = float(raw_value)
    except ValueError as error:
        raise TallyConfigError(
            "Invalid TALLY_FALLBACK_PRICE value: "
            f"expected number, got '{raw_value}'. "
            "Set TALLY_FALLBACK_PRICE to a positive numeric value."
        ) from error
    if price <= 0:
        raise TallyConfigError(
            f"Invalid TALLY_FALLBACK_PRICE value: expected positive number, got {price}. "
            "Set TALLY_FALLBACK_PRICE to a value greater than zero."
        )
    return price
