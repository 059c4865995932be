"""Python SDK for dataset operations.

This module owns the dataset lifecycle: load at construction, save after
each successful merge or removal, delete on clear. Reconciliation and
aggregation stay in their pure modules.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from pathlib import Path
from typing import Sequence

from aggregate.metrics import global_metrics, owner_summaries
from aggregate.pricing import default_price_table, load_price_table
from core.config import TallyConfig
from core.errors import TallyStoreError
from core.types import Dataset, GlobalMetrics, OwnerSummary
from ingest.snapshot_reader import read_snapshot_payloads, read_snapshot_text
from reconcile.reconciler import clear, merge, remove_owner
from reconcile.snapshot_payload import parse_snapshot, serialize
from store.dataset_store import DatasetStore


class TallyClient:
    """Primary SDK entry point for import and reporting workflows."""

    def __init__(self, config: TallyConfig | None = None) -> None:
        """Create SDK client.

        Args:
            config: Optional runtime configuration.
        """
        self._config = config or TallyConfig.from_env()
        self._store = DatasetStore(self._config)
        self._dataset = self._store.load()
        self._price_table: dict[str, float] | None = None

    def dataset(self) -> Dataset | None:
        """Return the current canonical dataset."""
        return self._dataset

    @property
    def fallback_price(self) -> float:
        """Price applied to entities missing from the price table."""
        return self._config.fallback_price

    def price_table(self) -> dict[str, float]:
        """Return the configured price table, loading it on first use.

        Raises:
            TallyPriceTableError: If the configured file is invalid.
        """
        if self._price_table is None:
            if self._config.price_table_path is None:
                self._price_table = default_price_table()
            else:
                self._price_table = load_price_table(self._config.price_table_path)
        return self._price_table

    def import_snapshot(self, source: str, now: datetime | None = None) -> Dataset | None:
        """Merge every snapshot found at a file or directory path."""
        return self.import_snapshots([source], now=now)

    def import_snapshots(
        self,
        sources: Sequence[str],
        now: datetime | None = None,
    ) -> Dataset | None:
        """Merge every snapshot found at several file or directory paths.

        All sources are read and validated before any merge, so one malformed
        file leaves the stored dataset untouched.

        Args:
            sources: Snapshot file or directory paths, merged in order.
            now: Optional merge completion time.

        Returns:
            Updated dataset.

        Raises:
            TallyIngestError: If a source cannot be read.
            MalformedSnapshotError: If any snapshot fails validation.
        """
        snapshots = [
            parse_snapshot(payload)
            for source in sources
            for _, payload in read_snapshot_payloads(source)
        ]
        updated = self._dataset
        for snapshot in snapshots:
            updated = merge(updated, snapshot, now=now)
        self._commit(updated)
        return updated

    def import_text(self, text: str, now: datetime | None = None) -> Dataset | None:
        """Merge a pasted snapshot JSON string.

        Raises:
            TallyIngestError: If the text is blank.
            MalformedSnapshotError: If the snapshot fails validation.
        """
        snapshot = parse_snapshot(read_snapshot_text(text))
        updated = merge(self._dataset, snapshot, now=now)
        self._commit(updated)
        return updated

    def remove_owner(self, owner_id: int) -> Dataset | None:
        """Remove one owner; unknown ids leave the dataset unchanged."""
        updated = remove_owner(self._dataset, owner_id)
        self._commit(updated)
        return updated

    def clear(self) -> None:
        """Reset to the absent state and delete the stored file."""
        self._commit(clear())

    def export(self, output_path: str) -> Path:
        """Write the current dataset as a snapshot JSON file.

        Args:
            output_path: Destination file path.

        Returns:
            Resolved destination path.

        Raises:
            TallyStoreError: If there is nothing to export or writing fails.
        """
        if self._dataset is None:
            raise TallyStoreError(
                "No dataset to export. Import at least one snapshot before exporting."
            )
        destination = Path(output_path).expanduser().resolve()
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            destination.write_text(serialize(self._dataset) + "\n", encoding="utf-8")
        except OSError as error:
            raise TallyStoreError(
                f"Failed to export dataset to {destination}: {error}. "
                "Check that the destination is writable."
            ) from error
        return destination

    def metrics(self) -> GlobalMetrics:
        """Compute global totals for the current dataset."""
        return global_metrics(self._dataset, self.price_table(), self._config.fallback_price)

    def summaries(self) -> list[OwnerSummary]:
        """Compute ranked per-owner rows for the current dataset."""
        return owner_summaries(self._dataset, self.price_table(), self._config.fallback_price)

    def with_data_root(self, data_root: str) -> "TallyClient":
        """Clone the client with a different local data root.

        Args:
            data_root: New data root path.

        Returns:
            New SDK client instance.
        """
        resolved_root = Path(data_root).expanduser().resolve()
        return TallyClient(replace(self._config, data_root=resolved_root))

    def _commit(self, dataset: Dataset | None) -> None:
        self._store.save(dataset)
        self._dataset = dataset
