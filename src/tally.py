"""Public SDK surface for Tally.

This module provides a stable import path for library users.
It re-exports the client, the pure reconcile and aggregate functions,
and the typed models.
"""

from __future__ import annotations

from aggregate.metrics import (
    global_metrics,
    owner_generation,
    owner_summaries,
    owner_value,
    rank_owners,
)
from aggregate.pricing import load_price_table, price_of
from core.config import TallyConfig
from core.errors import MalformedSnapshotError, TallyError
from core.types import Dataset, Entity, GlobalMetrics, Owner, OwnerSummary
from reconcile.reconciler import clear, merge, merge_payload, remove_owner
from reconcile.snapshot_payload import dataset_to_payload, deserialize, parse_snapshot, serialize
from store.tally_sdk import TallyClient

__all__ = [
    "Dataset",
    "Entity",
    "GlobalMetrics",
    "MalformedSnapshotError",
    "Owner",
    "OwnerSummary",
    "TallyClient",
    "TallyConfig",
    "TallyError",
    "clear",
    "dataset_to_payload",
    "deserialize",
    "global_metrics",
    "load_price_table",
    "merge",
    "merge_payload",
    "owner_generation",
    "owner_summaries",
    "owner_value",
    "parse_snapshot",
    "price_of",
    "rank_owners",
    "remove_owner",
    "serialize",
]
