"""Snapshot reconciliation.

This module validates imported snapshot payloads and merges them
into the canonical dataset with last-writer-wins-per-owner semantics.
"""
