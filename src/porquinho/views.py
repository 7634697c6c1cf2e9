# Porquinho - Personal finance ledger for the command line
# Copyright (c) 2025 Porquinho contributors
# Licensed under the MIT License. See LICENSE file for details.

"""
View utilities for Porquinho.

This module turns aggregated statuses into pandas DataFrames ready to be
printed as console tables:

- summary:    one row per month with columns Month, Incoming, Outgoing and
              Balance (Balance = Incoming - Outgoing),
- operations: every entry of a month, sorted by (day, kind), with columns
              day, op, amount and description,
- summaries:  one summary row per month followed by a `` total`` row.

Amounts are kept as ``Decimal`` until they are formatted, so the tables show
exactly the recorded values rounded to the requested number of decimals.
"""

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal, localcontext

import pandas as pd

from .entry import exact_difference, exact_sum
from .status import Status

SUMMARY_COLUMNS = ["Month", "Incoming", "Outgoing", "Balance"]
OPERATIONS_COLUMNS = ["day", "op", "amount", "description"]

TOTAL_LABEL = " total"


def format_amount(amount: Decimal, decimals: int = 2) -> str:
    """
    Format a decimal amount with a fixed number of decimals.

    The precision is raised to fit every integer digit of the amount, so
    large values are never rejected by ``quantize``.
    """
    exponent = Decimal(10) ** -decimals
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, amount.adjusted() + decimals + 2)
        return str(amount.quantize(exponent, rounding=ROUND_HALF_UP))


def _summary_row(
    month: str, put: Decimal, take: Decimal, decimals: int
) -> dict[str, str]:
    return {
        "Month": month,
        "Incoming": format_amount(put, decimals),
        "Outgoing": format_amount(take, decimals),
        "Balance": format_amount(exact_difference(put, take), decimals),
    }


def status_summary_frame(status: Status, decimals: int = 2) -> pd.DataFrame:
    """Return the one-row summary table of a month."""
    row = _summary_row(status.month, status.put_total, status.take_total, decimals)
    return pd.DataFrame([row], columns=SUMMARY_COLUMNS)


def operations_frame(status: Status, decimals: int = 2) -> pd.DataFrame:
    """Return all operations of a month sorted by day, debits first."""
    operations = sorted(
        status.all_operations, key=lambda e: (e.day, e.kind.sort_order)
    )
    rows = [
        {
            "day": e.day,
            "op": e.kind.key,
            "amount": format_amount(e.amount, decimals),
            "description": e.description,
        }
        for e in operations
    ]
    return pd.DataFrame(rows, columns=OPERATIONS_COLUMNS)


def summaries_frame(statuses: Iterable[Status], decimals: int = 2) -> pd.DataFrame:
    """
    Return one summary row per month followed by a totals row.

    The totals are summed from the exact per-month values, not from the
    formatted strings.
    """
    statuses = list(statuses)
    rows = [
        _summary_row(s.month, s.put_total, s.take_total, decimals) for s in statuses
    ]

    all_put = exact_sum(s.put_total for s in statuses)
    all_take = exact_sum(s.take_total for s in statuses)
    rows.append(_summary_row(TOTAL_LABEL, all_put, all_take, decimals))
    return pd.DataFrame(rows, columns=SUMMARY_COLUMNS)


def render_status(status: Status, complete: bool = True, decimals: int = 2) -> str:
    """
    Render the status of a month as text.

    With ``complete=True`` the summary table is followed by the operations
    table (or a short notice when the month has no operations).
    """
    parts = [status_summary_frame(status, decimals).to_string(index=False)]

    if complete:
        if status.all_operations:
            parts.append(operations_frame(status, decimals).to_string(index=False))
        else:
            parts.append(f"No operations recorded for {status.month}.")

    return "\n\n".join(parts)


def render_summaries(statuses: Iterable[Status], decimals: int = 2) -> str:
    return summaries_frame(statuses, decimals).to_string(index=False)
