"""Snapshot source readers.

This module loads collector snapshot JSON from local files, directories,
or pasted text. Structural validation is left to the reconciler.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from core.constants import SNAPSHOT_FILE_EXTENSION
from core.errors import MalformedSnapshotError, TallyIngestError
from core.logging_config import get_logger

_LOGGER = get_logger(__name__)


def read_snapshot_payloads(source: str) -> list[tuple[str, Any]]:
    """Load snapshot payloads from a file or directory.

    Args:
        source: Path to a ``.json`` file or a directory of them.

    Returns:
        Ordered pairs of source path and decoded JSON payload.

    Raises:
        TallyIngestError: If the source is missing or holds no snapshots.
        MalformedSnapshotError: If a file is not valid JSON.
    """
    source_path = Path(source).expanduser()
    if not source_path.exists():
        raise TallyIngestError(
            f"Failed to read snapshot source at {source_path}: path does not exist. "
            "Provide an existing file or directory."
        )
    if source_path.is_file():
        return [(str(source_path), _read_snapshot_file(source_path))]
    file_paths = [
        path
        for path in sorted(source_path.rglob("*"))
        if path.is_file() and path.suffix.lower() == SNAPSHOT_FILE_EXTENSION
    ]
    if not file_paths:
        raise TallyIngestError(
            f"No snapshot files found under {source_path}. "
            f"Supported extension: {SNAPSHOT_FILE_EXTENSION}."
        )
    return [(str(path), _read_snapshot_file(path)) for path in file_paths]


def read_snapshot_text(text: str) -> Any:
    """Decode pasted snapshot JSON text.

    Raises:
        TallyIngestError: If the text is blank.
        MalformedSnapshotError: If the text is not valid JSON.
    """
    if not text.strip():
        raise TallyIngestError("Snapshot text is empty. Paste the collector JSON and retry.")
    return _decode(text, "<text>")


def _read_snapshot_file(file_path: Path) -> Any:
    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as error:
        raise TallyIngestError(
            f"Failed to read snapshot file {file_path}: {error}. Check file permissions."
        ) from error
    payload = _decode(text, str(file_path))
    _LOGGER.info("snapshot_read", source=str(file_path))
    return payload


def _decode(text: str, source: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as error:
        raise MalformedSnapshotError(
            f"Failed to parse snapshot JSON from {source} at line {error.lineno}: {error.msg}. "
            "Check that the full snapshot was copied."
        ) from error
