"""Owner and global aggregate metrics.

This module sums entity prices and generation rates per owner and
across a dataset. An absent dataset always aggregates to zeros.
"""

from __future__ import annotations

from core.constants import DEFAULT_FALLBACK_PRICE
from core.types import Dataset, GlobalMetrics, Owner, OwnerSummary
from aggregate.pricing import PriceTable, price_of


def owner_value(
    owner: Owner,
    price_table: PriceTable,
    fallback: float = DEFAULT_FALLBACK_PRICE,
) -> float:
    """Sum entity prices for one owner.

    Args:
        owner: Owner to price.
        price_table: Mapping from entity name to price.
        fallback: Price for entities missing from the table.

    Returns:
        Total owner value, 0 for an owner without entities.
    """
    return sum((price_of(entity.name, price_table, fallback) for entity in owner.entities), 0.0)


def owner_generation(owner: Owner) -> float:
    """Sum entity generation rates for one owner."""
    return sum((entity.generation for entity in owner.entities), 0.0)


def global_metrics(
    dataset: Dataset | None,
    price_table: PriceTable,
    fallback: float = DEFAULT_FALLBACK_PRICE,
) -> GlobalMetrics:
    """Compute totals across every owner.

    Args:
        dataset: Canonical dataset, or None when absent.
        price_table: Mapping from entity name to price.
        fallback: Price for entities missing from the table.

    Returns:
        Global metrics, all zero for an absent dataset.
    """
    if dataset is None:
        return GlobalMetrics()
    owners = list(dataset.owners.values())
    return GlobalMetrics(
        owner_count=len(owners),
        entity_count=sum(len(owner.entities) for owner in owners),
        total_value=sum((owner_value(owner, price_table, fallback) for owner in owners), 0.0),
        total_generation=sum((owner_generation(owner) for owner in owners), 0.0),
    )


def rank_owners(dataset: Dataset | None) -> list[Owner]:
    """Order owners by descending generation.

    Ties keep the dataset's owner order.
    """
    if dataset is None:
        return []
    return sorted(dataset.owners.values(), key=owner_generation, reverse=True)


def owner_summaries(
    dataset: Dataset | None,
    price_table: PriceTable,
    fallback: float = DEFAULT_FALLBACK_PRICE,
) -> list[OwnerSummary]:
    """Build ranked per-owner display rows.

    Args:
        dataset: Canonical dataset, or None when absent.
        price_table: Mapping from entity name to price.
        fallback: Price for entities missing from the table.

    Returns:
        Summaries in ranking order.
    """
    return [
        OwnerSummary(
            owner_id=owner.owner_id,
            display_name=owner.display_name,
            entity_count=len(owner.entities),
            value=owner_value(owner, price_table, fallback),
            generation=owner_generation(owner),
        )
        for owner in rank_owners(dataset)
    ]
