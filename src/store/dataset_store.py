"""Local persistence for the canonical dataset.

This module keeps the single current dataset in one JSON file under the
configured data root. It decides nothing about when to persist; callers
save after each successful mutation.
"""

from __future__ import annotations

from pathlib import Path

from core.config import TallyConfig
from core.errors import MalformedSnapshotError, TallyStoreError
from core.logging_config import get_logger
from core.types import Dataset
from reconcile.snapshot_payload import deserialize, serialize

_LOGGER = get_logger(__name__)


class DatasetStore:
    """File-backed store for the current dataset."""

    def __init__(self, config: TallyConfig) -> None:
        """Initialize store from config.

        Args:
            config: Runtime configuration.
        """
        self._path = config.dataset_path

    @property
    def path(self) -> Path:
        """Dataset file location."""
        return self._path

    def load(self) -> Dataset | None:
        """Load the stored dataset.

        Returns:
            Stored dataset, or None when nothing is stored.

        Raises:
            TallyStoreError: If the stored file is unreadable or invalid.
        """
        if not self._path.exists():
            return None
        try:
            text = self._path.read_text(encoding="utf-8")
        except OSError as error:
            raise TallyStoreError(
                f"Failed to read stored dataset at {self._path}: {error}. "
                "Check file permissions and retry."
            ) from error
        try:
            return deserialize(text)
        except MalformedSnapshotError as error:
            raise TallyStoreError(
                f"Stored dataset at {self._path} is invalid: {error}. "
                "Run 'tally clear' and re-import snapshots."
            ) from error

    def save(self, dataset: Dataset | None) -> None:
        """Persist a dataset, deleting the file for the absent state.

        Args:
            dataset: Dataset to store, or None to remove the stored file.

        Raises:
            TallyStoreError: If writing fails.
        """
        if dataset is None:
            self.clear()
            return
        temp_path = self._path.with_suffix(".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            temp_path.write_text(serialize(dataset) + "\n", encoding="utf-8")
            temp_path.replace(self._path)
        except OSError as error:
            raise TallyStoreError(
                f"Failed to write dataset to {self._path}: {error}. "
                "Check that the data root is writable."
            ) from error
        _LOGGER.info("dataset_saved", path=str(self._path), owner_count=len(dataset.owners))

    def clear(self) -> None:
        """Delete the stored dataset file if present."""
        if self._path.exists():
            self._path.unlink()
            _LOGGER.info("dataset_deleted", path=str(self._path))
