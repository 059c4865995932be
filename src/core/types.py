"""Shared typed models.

This module defines immutable data models used by the reconciler,
aggregator, store, and CLI layers to keep interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

from core.constants import DEFAULT_GENERATION, DEFAULT_RARITY, NO_MUTATION, SECRET_RARITY


@dataclass(frozen=True)
class Entity:
    """One collected in-game item instance.

    Attributes:
        name: Display identifier used for price lookups.
        base_name: Internal item name reported by the collector, empty when absent.
        rarity: Rarity tier label.
        generation: Non-negative generation rate contribution.
        mutation: Mutation label, ``"None"`` when unmutated.
        traits: Trait labels attached to the item.
        slot: Opaque slot label inside the plot.
        plot: Opaque plot label where the item was scanned.
        scanned_at: Opaque scan time label.
    """

    name: str
    base_name: str = ""
    rarity: str = DEFAULT_RARITY
    generation: float = DEFAULT_GENERATION
    mutation: str = NO_MUTATION
    traits: tuple[str, ...] = ()
    slot: str = ""
    plot: str = ""
    scanned_at: str = ""

    @property
    def has_mutation(self) -> bool:
        """Whether the entity carries a mutation other than the sentinel."""
        return self.mutation != NO_MUTATION

    @property
    def is_secret(self) -> bool:
        """Whether the entity belongs to the secret rarity tier."""
        return self.rarity.upper() == SECRET_RARITY


@dataclass(frozen=True)
class Owner:
    """One player account and its collected entities.

    Attributes:
        owner_id: Unique identity key.
        display_name: Informational player name.
        entities: Entities in scan order.
    """

    owner_id: int
    display_name: str = ""
    entities: tuple[Entity, ...] = ()


@dataclass(frozen=True)
class Dataset:
    """Canonical collection of known owners.

    Attributes:
        last_update: Timestamp label of the most recent merge.
        owners: Owners keyed by owner id, in insertion order.
    """

    last_update: str
    owners: Mapping[int, Owner] = field(default_factory=dict)


@dataclass(frozen=True)
class GlobalMetrics:
    """Totals computed across every owner of a dataset.

    Attributes:
        owner_count: Number of owners.
        entity_count: Number of entities across all owners.
        total_value: Sum of entity prices.
        total_generation: Sum of entity generation rates.
    """

    owner_count: int = 0
    entity_count: int = 0
    total_value: float = 0.0
    total_generation: float = 0.0


@dataclass(frozen=True)
class OwnerSummary:
    """Per-owner display row.

    Attributes:
        owner_id: Owner identity key.
        display_name: Informational player name.
        entity_count: Number of entities held.
        value: Sum of entity prices.
        generation: Sum of entity generation rates.
    """

    owner_id: int
    display_name: str
    entity_count: int
    value: float
    generation: float
