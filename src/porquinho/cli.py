# Porquinho - Personal finance ledger for the command line
# Copyright (c) 2025 Porquinho contributors
# Licensed under the MIT License. See LICENSE file for details.

"""
Command-Line Interface (CLI) for Porquinho.

The CLI is intentionally thin: it resolves the configuration and the data
directory, picks the file of the current month, and delegates to the store,
the status aggregator and the view helpers.

Commands
--------
    porquinho take <amount> <description...>
        Record money taken out today (a debit).

    porquinho put <amount> <description...>
        Record money put in today (a credit).

    porquinho status [current|all]
        ``current`` (default): summary and operations of the current month.
        ``all``: one summary row per recorded month plus a totals row.

Global options
--------------
    --config PATH     TOML configuration file (see ``config.py``).
    --data-dir PATH   Directory holding the monthly files, overriding config.
    --version         Print the installed version and exit.

Errors raised while running a command are printed as ``Error: <message>``
on stderr and the process exits with ``EXIT_FAILURE``.
"""

import argparse
import sys
from datetime import date, datetime
from decimal import Decimal, DecimalException
from typing import Optional

from . import __version__
from .config import AppConfig, ensure_data_dir, load_app_config
from .entry import Entry, EntryType, InvalidDecimal, parse_amount
from .status import aggregate
from .store import append_entry, load_all_months, load_month, month_key
from .views import render_status, render_summaries

EXIT_FAILURE = 127


def _today() -> date:
    """Return today's date as a date object (isolated for easier testing)."""
    return datetime.today().date()


def _amount(value: str) -> Decimal:
    """argparse type for amounts, validated like the amount of an entry line."""
    try:
        return parse_amount(value)
    except InvalidDecimal as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _build_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser for the CLI."""
    ap = argparse.ArgumentParser(
        prog="porquinho",
        description=(
            "Porquinho - personal finance ledger. Records income and expenses "
            "in one file per month and reports totals."
        ),
    )

    ap.add_argument(
        "--version",
        action="store_true",
        help="Show the installed version of porquinho and exit.",
    )
    ap.add_argument(
        "--config",
        dest="config_path",
        help=(
            "Path to a TOML configuration file. If omitted, porquinho.toml in "
            "the user configuration directory is used when it exists."
        ),
    )
    ap.add_argument(
        "--data-dir",
        dest="data_dir",
        help="Directory holding the monthly files (overrides the configuration).",
    )

    subparsers = ap.add_subparsers(dest="command")

    for name, help_text in (
        ("take", "Record an expense (money taken out) dated today."),
        ("put", "Record an income (money put in) dated today."),
    ):
        sp = subparsers.add_parser(name, help=help_text, description=help_text)
        sp.add_argument("amount", type=_amount, help="Amount, e.g. 12.50")
        sp.add_argument(
            "description",
            nargs="+",
            help="Free text description of the operation.",
        )

    status_parser = subparsers.add_parser(
        "status", help="Show totals for the current month or all months."
    )
    status_parser.add_argument(
        "target",
        nargs="?",
        choices=["current", "all"],
        default="current",
        help="'current' (default): detailed current month; 'all': every month.",
    )

    return ap


def _handle_record(args: argparse.Namespace, config: AppConfig, kind: EntryType) -> None:
    """Handle 'take' and 'put': append an entry to the current month."""
    today = _today()
    entry = Entry(
        day=today.day,
        kind=kind,
        amount=args.amount,
        description=" ".join(args.description),
    )

    store = load_month(config.data_dir, month_key(today))
    append_entry(store, entry)


def _handle_status(args: argparse.Namespace, config: AppConfig) -> None:
    """Handle 'status': print the current month or a summary of all months."""
    if args.target == "all":
        statuses = [aggregate(s) for s in load_all_months(config.data_dir)]
        if not statuses:
            print("No months recorded yet.")
            return
        print(render_summaries(statuses, decimals=config.decimals))
        return

    store = load_month(config.data_dir, month_key(_today()))
    print(render_status(aggregate(store), complete=True, decimals=config.decimals))


def run(args: argparse.Namespace) -> None:
    """Execute a parsed command. Errors propagate to the caller."""
    config = load_app_config(args.config_path, args.data_dir)
    ensure_data_dir(config.data_dir)

    if args.command == "take":
        _handle_record(args, config, EntryType.DEBIT)
    elif args.command == "put":
        _handle_record(args, config, EntryType.CREDIT)
    elif args.command == "status":
        _handle_status(args, config)


def main(argv: Optional[list[str]] = None) -> None:
    """Entry point for the Porquinho CLI."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    # --version: short-circuit and exit early.
    if args.version:
        print(f"porquinho version {__version__}")
        return

    if not args.command:
        parser.print_help()
        return

    try:
        run(args)
    except (ValueError, OSError, DecimalException) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(EXIT_FAILURE)


if __name__ == "__main__":
    main()
