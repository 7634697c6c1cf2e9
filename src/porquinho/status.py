# Porquinho - Personal finance ledger for the command line
# Copyright (c) 2025 Porquinho contributors
# Licensed under the MIT License. See LICENSE file for details.

"""
Status aggregation for a monthly store.

``aggregate()`` parses every entry line of a store and computes:

- the total taken out (sum of debit amounts),
- the total put in (sum of credit amounts),
- the list of all operations in file order (take lines, then put lines),
- the take and put operations, partitioned by their parsed direction.

Totals are exact ``Decimal`` sums, computed with as many digits as the
amounts need. Parsing is all-or-nothing: one bad line aborts the whole
aggregation.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from .entry import (
    Entry,
    EntryType,
    ParseError,
    exact_difference,
    exact_sum,
    parse_entry,
)
from .store import MonthlyStore


class InvalidEntryLine(ValueError):
    """Raised when a stored line cannot be parsed as an entry."""

    def __init__(
        self, month: str, key: str, index: int, line: str, cause: ParseError
    ) -> None:
        self.month = month
        self.key = key
        self.index = index
        self.line = line
        self.cause = cause
        super().__init__(f"{month}: {key}[{index}] {line!r}: {cause}")


@dataclass(frozen=True)
class Status:
    """Aggregated view of one month."""

    # Total amount spent.
    take_total: Decimal
    # Total amount received.
    put_total: Decimal
    all_operations: tuple[Entry, ...]
    put_operations: tuple[Entry, ...]
    take_operations: tuple[Entry, ...]
    # Month of this status, in format MM-YYYY.
    month: str
    target: Optional[int] = None

    @property
    def balance(self) -> Decimal:
        return exact_difference(self.put_total, self.take_total)


def _parse_lines(store: MonthlyStore, kind: EntryType) -> list[Entry]:
    entries = []
    for index, line in enumerate(store.lines(kind)):
        try:
            entries.append(parse_entry(line))
        except ParseError as exc:
            raise InvalidEntryLine(store.month, kind.key, index, line, exc) from exc
    return entries


def _total(entries: list[Entry]) -> Decimal:
    return exact_sum(e.amount for e in entries)


def aggregate(store: MonthlyStore) -> Status:
    """Parse all entry lines of ``store`` and compute its status."""
    all_operations = _parse_lines(store, EntryType.DEBIT) + _parse_lines(
        store, EntryType.CREDIT
    )

    take_operations = [e for e in all_operations if e.kind is EntryType.DEBIT]
    put_operations = [e for e in all_operations if e.kind is EntryType.CREDIT]

    return Status(
        take_total=_total(take_operations),
        put_total=_total(put_operations),
        all_operations=tuple(all_operations),
        put_operations=tuple(put_operations),
        take_operations=tuple(take_operations),
        month=store.month,
        target=store.target,
    )
