"""Canonical dataset reconciliation.

This module merges validated snapshots into the canonical dataset.
Every operation is pure: inputs are never mutated and an empty owner
set always collapses to the absent state (None).
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Mapping

from core.logging_config import get_logger
from core.types import Dataset, Owner
from reconcile.snapshot_payload import load_json_text, parse_snapshot

_LOGGER = get_logger(__name__)


def merge(
    current: Dataset | None,
    incoming: Dataset,
    now: datetime | None = None,
) -> Dataset | None:
    """Merge an incoming snapshot into the current dataset.

    An owner present in both datasets is replaced wholesale by the
    incoming record; entity lists are never combined. Current owners keep
    their positions and owners new to the dataset are appended in
    snapshot order.

    Args:
        current: Existing dataset, or None when nothing is stored.
        incoming: Validated snapshot dataset.
        now: Optional merge completion time, defaults to UTC now.

    Returns:
        New dataset, or None when both inputs hold no owners.
    """
    owners: dict[int, Owner] = dict(current.owners) if current is not None else {}
    replaced_count = 0
    for owner_id, owner in incoming.owners.items():
        if owner_id in owners:
            replaced_count += 1
        owners[owner_id] = owner
    if not owners:
        return None
    completed_at = now or datetime.now(timezone.utc)
    _LOGGER.info(
        "snapshot_merged",
        incoming_owners=len(incoming.owners),
        replaced_owners=replaced_count,
        owner_count=len(owners),
    )
    return Dataset(last_update=completed_at.isoformat(), owners=owners)


def merge_payload(
    current: Dataset | None,
    payload: Mapping[str, object] | str,
    now: datetime | None = None,
) -> Dataset | None:
    """Validate a raw snapshot payload and merge it.

    Args:
        current: Existing dataset, or None when nothing is stored.
        payload: Decoded JSON mapping or raw JSON text.
        now: Optional merge completion time.

    Returns:
        Merged dataset.

    Raises:
        MalformedSnapshotError: If the payload fails validation. No merge
            result is produced and ``current`` is left as it was.
    """
    decoded = load_json_text(payload) if isinstance(payload, str) else payload
    incoming = parse_snapshot(decoded)
    return merge(current, incoming, now=now)


def remove_owner(current: Dataset | None, owner_id: int) -> Dataset | None:
    """Remove one owner from the dataset.

    Unknown ids are a no-op and return ``current`` unchanged.

    Args:
        current: Existing dataset.
        owner_id: Owner identity key to remove.

    Returns:
        Dataset without the owner, or None if it was the last one.
    """
    if current is None or owner_id not in current.owners:
        _LOGGER.warning("owner_not_found", owner_id=owner_id)
        return current if current is not None and current.owners else None
    owners = {key: owner for key, owner in current.owners.items() if key != owner_id}
    _LOGGER.info("owner_removed", owner_id=owner_id, owner_count=len(owners))
    if not owners:
        return None
    return Dataset(last_update=current.last_update, owners=owners)


def clear() -> None:
    """Return the absent dataset state."""
    _LOGGER.info("dataset_cleared")
    return None
