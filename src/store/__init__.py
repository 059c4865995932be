"""Dataset persistence and SDK layer.

This module stores the canonical dataset between sessions and exposes
the client used by the CLI.
"""
