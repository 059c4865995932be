"""Derived metrics over the canonical dataset.

This module prices entities, sums generation rates, and ranks owners
for display.
"""
