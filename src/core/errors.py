"""Tally exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each subsystem raises a specific error type for debuggability.
"""

from __future__ import annotations


class TallyError(Exception):
    """Base exception for all Tally failures."""


class TallyConfigError(TallyError):
    """Raised for invalid runtime configuration."""


class TallyIngestError(TallyError):
    """Raised when snapshot sources cannot be read."""


class MalformedSnapshotError(TallyIngestError):
    """Raised when a snapshot payload fails structural validation."""


class TallyStoreError(TallyError):
    """Raised for dataset persistence failures."""


class TallyPriceTableError(TallyError):
    """Raised for missing or invalid price table files."""


class TallyDependencyError(TallyError):
    """Raised when an optional runtime dependency is missing."""
