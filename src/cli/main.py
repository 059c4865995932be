"""Tally CLI entry points.
This module exposes import, removal, export, and reporting commands.
It maps argparse commands onto SDK calls.
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any, Sequence

from aggregate.formatting import format_currency, format_generation
from aggregate.metrics import owner_generation, owner_value, rank_owners
from core.config import TallyConfig
from core.errors import TallyError, TallyIngestError
from store.tally_sdk import TallyClient


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="tally", description="Tally snapshot CLI")
    parser.add_argument("--data-root", help="Override TALLY_DATA_ROOT for this command")
    parser.add_argument("--price-table", help="Override TALLY_PRICE_TABLE for this command")
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_import_command(subparsers)
    _add_remove_command(subparsers)
    subparsers.add_parser("clear", help="Delete every stored owner")
    _add_export_command(subparsers)
    subparsers.add_parser("show", help="List owners ranked by generation")
    subparsers.add_parser("summary", help="Print global totals")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the Tally CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        client = _build_client(args.data_root, args.price_table)
        if args.command == "import":
            return _run_import_command(client, args)
        if args.command == "remove":
            return _run_remove_command(client, args)
        if args.command == "clear":
            client.clear()
            print("cleared")
            return 0
        if args.command == "export":
            print(client.export(args.output))
            return 0
        if args.command == "show":
            return _run_show_command(client)
        if args.command == "summary":
            return _run_summary_command(client)
    except TallyError as error:
        print(f"error: {error}", file=sys.stderr)
        return 1
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_client(data_root: str | None, price_table: str | None) -> TallyClient:
    """Build SDK client with optional config overrides.

    Args:
        data_root: Optional data root override path.
        price_table: Optional price table override path.

    Returns:
        Configured SDK client.
    """
    config = TallyConfig.from_env()
    if data_root:
        config = replace(config, data_root=Path(data_root).expanduser().resolve())
    if price_table:
        config = replace(config, price_table_path=Path(price_table).expanduser().resolve())
    return TallyClient(config)


def _run_import_command(client: TallyClient, args: argparse.Namespace) -> int:
    """Handle import command.

    Args:
        client: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    if args.sources == ["-"]:
        dataset = client.import_text(sys.stdin.read())
    elif "-" in args.sources:
        raise TallyIngestError(
            "Standard input '-' cannot be combined with other sources. "
            "Import stdin on its own or save it to a file first."
        )
    else:
        dataset = client.import_snapshots(args.sources)
    owner_count = len(dataset.owners) if dataset is not None else 0
    print(f"owners={owner_count}")
    return 0


def _run_remove_command(client: TallyClient, args: argparse.Namespace) -> int:
    dataset = client.remove_owner(args.owner_id)
    owner_count = len(dataset.owners) if dataset is not None else 0
    print(f"owners={owner_count}")
    return 0


def _run_show_command(client: TallyClient) -> int:
    """Print ranked owners with their entities, marking secret ones with '*'."""
    dataset = client.dataset()
    if dataset is None:
        print("No stored owners. Import a snapshot to begin.")
        return 0
    price_table = client.price_table()
    for owner in rank_owners(dataset):
        value = owner_value(owner, price_table, client.fallback_price)
        print(
            f"{owner.owner_id}\t{owner.display_name or '-'}\t"
            f"{len(owner.entities)}\t{format_currency(value)}\t"
            f"{format_generation(owner_generation(owner))}"
        )
        for entity in owner.entities:
            mutation = f"\t[{entity.mutation}]" if entity.has_mutation else ""
            generation = format_generation(entity.generation)
            marker = "*" if entity.is_secret else " "
            print(f" {marker}{entity.rarity}\t{entity.name}\t{generation}{mutation}")
    print(f"last_update={dataset.last_update}")
    return 0


def _run_summary_command(client: TallyClient) -> int:
    """Print global totals."""
    metrics = client.metrics()
    print(f"owners={metrics.owner_count}")
    print(f"entities={metrics.entity_count}")
    print(f"total_value={format_currency(metrics.total_value)}")
    print(f"total_generation={format_generation(metrics.total_generation)}")
    return 0


def _add_import_command(subparsers: Any) -> None:
    """Register import subcommand."""
    parser = subparsers.add_parser("import", help="Merge snapshot JSON into the stored dataset")
    parser.add_argument(
        "sources",
        nargs="+",
        help="Snapshot .json files or directories merged in order, or '-' for stdin",
    )


def _add_remove_command(subparsers: Any) -> None:
    """Register remove subcommand."""
    parser = subparsers.add_parser("remove", help="Remove one owner by id")
    parser.add_argument("owner_id", type=int, help="Owner user id")


def _add_export_command(subparsers: Any) -> None:
    """Register export subcommand."""
    parser = subparsers.add_parser("export", help="Write the stored dataset as snapshot JSON")
    parser.add_argument("output", help="Destination .json file")
