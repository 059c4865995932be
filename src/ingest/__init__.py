"""Snapshot ingestion.

This module reads collector snapshot JSON from local sources
and hands decoded payloads to the reconciler.
"""
