"""Unit tests for aggregate metrics."""

from __future__ import annotations

from aggregate.metrics import (
    global_metrics,
    owner_generation,
    owner_summaries,
    owner_value,
    rank_owners,
)
from core.types import Dataset, Entity, GlobalMetrics, Owner

_PRICES = {"Los Candies": 15.0}


def _sample_owner(owner_id: int = 1) -> Owner:
    return Owner(
        owner_id=owner_id,
        display_name="alpha",
        entities=(
            Entity(name="Los Candies", generation=5.0),
            Entity(name="Unknown Item", generation=3.0),
        ),
    )


def _owner_with_generation(owner_id: int, generation: float) -> Owner:
    return Owner(owner_id=owner_id, entities=(Entity(name="Las Sis", generation=generation),))


def test_owner_value_applies_fallback_price() -> None:
    """Unknown entity names should be priced at the fallback."""
    assert owner_value(_sample_owner(), _PRICES) == 25.0


def test_owner_generation_sums_rates() -> None:
    """Owner generation should sum entity rates."""
    assert owner_generation(_sample_owner()) == 8.0


def test_owner_metrics_are_zero_without_entities() -> None:
    """Empty entity lists should aggregate to zero."""
    owner = Owner(owner_id=1)

    assert (owner_value(owner, _PRICES), owner_generation(owner)) == (0.0, 0.0)


def test_owner_value_uses_custom_fallback() -> None:
    """A configured fallback price should replace the default."""
    assert owner_value(_sample_owner(), _PRICES, fallback=2.5) == 17.5


def test_global_metrics_sums_all_owners() -> None:
    """Global metrics should total counts, value, and generation."""
    dataset = Dataset(
        last_update="t",
        owners={1: _sample_owner(1), 2: _owner_with_generation(2, 4.0)},
    )

    metrics = global_metrics(dataset, _PRICES)

    assert metrics == GlobalMetrics(
        owner_count=2,
        entity_count=3,
        total_value=35.0,
        total_generation=12.0,
    )


def test_global_metrics_absent_dataset_is_zero() -> None:
    """Absent dataset should aggregate to zeros, never raise."""
    assert global_metrics(None, _PRICES) == GlobalMetrics(0, 0, 0.0, 0.0)


def test_rank_owners_orders_by_generation_descending() -> None:
    """Owners with higher generation should come first."""
    dataset = Dataset(
        last_update="t",
        owners={1: _owner_with_generation(1, 1.0), 2: _owner_with_generation(2, 9.0)},
    )

    assert [owner.owner_id for owner in rank_owners(dataset)] == [2, 1]


def test_rank_owners_is_stable_for_ties() -> None:
    """Equal-generation owners should keep dataset order."""
    dataset = Dataset(
        last_update="t",
        owners={
            5: _owner_with_generation(5, 2.0),
            3: _owner_with_generation(3, 7.0),
            9: _owner_with_generation(9, 2.0),
            1: _owner_with_generation(1, 2.0),
        },
    )

    assert [owner.owner_id for owner in rank_owners(dataset)] == [3, 5, 9, 1]


def test_rank_owners_absent_dataset_is_empty() -> None:
    """Ranking nothing should yield an empty list."""
    assert rank_owners(None) == []


def test_owner_summaries_follow_ranking() -> None:
    """Summaries should carry per-owner totals in ranking order."""
    dataset = Dataset(
        last_update="t",
        owners={1: _sample_owner(1), 2: _owner_with_generation(2, 40.0)},
    )

    summaries = owner_summaries(dataset, _PRICES)

    assert [summary.owner_id for summary in summaries] == [2, 1]
    assert summaries[1].value == 25.0 and summaries[1].entity_count == 2
