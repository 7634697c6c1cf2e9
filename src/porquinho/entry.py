# Porquinho - Personal finance ledger for the command line
# Copyright (c) 2025 Porquinho contributors
# Licensed under the MIT License. See LICENSE file for details.

"""
Entry lines for Porquinho.

Every operation recorded in a monthly file is stored as a single line of
text with the following layout:

    <day> <symbol> <amount> <description>

- ``day``:         day of the month (unsigned integer),
- ``symbol``:      ``+`` for a credit (money put in), ``-`` for a debit
                   (money taken out),
- ``amount``:      non-negative decimal amount, parsed exactly with
                   ``decimal.Decimal`` so that sums never accumulate
                   floating-point rounding errors,
- ``description``: free text, the remainder of the line (may contain spaces).

Examples
--------
    22 + 5.00 Salary
    12 - 6.000 Rent

The parser reads the line strictly from left to right. Each failure mode is
reported through its own ``ParseError`` subclass carrying the offending
fragment of the line.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal, localcontext
from enum import Enum
import re

# Largest day number accepted by the parser (unsigned byte).
MAX_DAY = 255

_DAY_RE = re.compile(r"\+?[0-9]+")
# Plain ASCII decimal with an optional exponent; no sign other than '+'.
_AMOUNT_RE = re.compile(r"\+?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


class EntryType(Enum):
    """Direction of an entry: money taken out (debit) or put in (credit)."""

    DEBIT = ("take", "-")
    CREDIT = ("put", "+")

    @property
    def key(self) -> str:
        """Name of the list holding this kind of entry in a monthly file."""
        return self.value[0]

    @property
    def symbol(self) -> str:
        return self.value[1]

    @property
    def sort_order(self) -> int:
        # Debits are listed before credits on the same day.
        return 0 if self is EntryType.DEBIT else 1

    @classmethod
    def from_symbol(cls, symbol: str) -> "EntryType":
        for kind in cls:
            if kind.symbol == symbol:
                return kind
        raise InvalidEntryType(symbol)


# ---------------------------------------------------------------------------
# Parse errors
# ---------------------------------------------------------------------------


class ParseError(ValueError):
    """Base class for errors raised while parsing an entry line."""

    template = "{fragment!r}"

    def __init__(self, fragment: str) -> None:
        self.fragment = fragment
        super().__init__(self.template.format(fragment=fragment))

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other) and self.fragment == other.fragment

    def __hash__(self) -> int:
        return hash((type(self), self.fragment))


class InvalidEntryType(ParseError):
    template = "'{fragment}' is not a valid transaction type descriptor"


class InvalidDay(ParseError):
    template = "'{fragment}' is not a valid month day"


class InvalidDecimal(ParseError):
    template = "'{fragment}' could not be parsed as a decimal"


class NoDescription(ParseError):
    template = "Expected description after '{fragment}'"


class MalformedEntry(ParseError):
    template = "Malformed entry: '{fragment}'"


# ---------------------------------------------------------------------------
# Amounts
# ---------------------------------------------------------------------------


def parse_amount(token: str) -> Decimal:
    """
    Parse an amount token into an exact, non-negative Decimal.

    Only ASCII digits are accepted, with an optional fraction, exponent and
    leading ``+``. ``Decimal()`` alone would also take NaN, Infinity,
    underscores, negative numbers and non-ASCII digits.

    Raises:
        InvalidDecimal: if the token is not such an amount.
    """
    if not _AMOUNT_RE.fullmatch(token):
        raise InvalidDecimal(token)
    return Decimal(token)


def _exact_context_precision(*amounts: Decimal) -> int:
    # Digits spanned from the highest leading digit (plus a carry) down to
    # the lowest exponent of the operands.
    top = max(a.adjusted() for a in amounts) + 2
    bottom = min(a.as_tuple().exponent for a in amounts)
    return max(top - bottom, 1)


def exact_sum(amounts: Iterable[Decimal]) -> Decimal:
    """Sum decimals without rounding, whatever their number of digits."""
    total = Decimal(0)
    for amount in amounts:
        with localcontext() as ctx:
            ctx.prec = max(ctx.prec, _exact_context_precision(total, amount))
            total = total + amount
    return total


def exact_difference(a: Decimal, b: Decimal) -> Decimal:
    """Return ``a - b`` without rounding."""
    return exact_sum([a, b.copy_negate()])


# ---------------------------------------------------------------------------
# Entry value object
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Entry:
    """
    A single dated credit or debit.

    The constructor enforces what the line format can represent: a day in
    [0, 255], a finite non-negative Decimal amount and a non-empty
    description. Surrounding whitespace of the description is dropped.
    """

    day: int
    kind: EntryType
    amount: Decimal
    description: str

    def __post_init__(self) -> None:
        if isinstance(self.day, bool) or not isinstance(self.day, int):
            raise ValueError(f"Entry day must be an integer, got {self.day!r}.")
        if not 0 <= self.day <= MAX_DAY:
            raise ValueError(f"Entry day {self.day} is out of range [0, {MAX_DAY}].")
        if not isinstance(self.kind, EntryType):
            raise ValueError(f"Invalid entry kind {self.kind!r}.")
        if (
            not isinstance(self.amount, Decimal)
            or not self.amount.is_finite()
            or self.amount.is_signed()
        ):
            raise ValueError(
                f"Entry amount must be a finite, non-negative Decimal, "
                f"got {self.amount!r}."
            )
        if not isinstance(self.description, str) or not self.description.strip():
            raise ValueError("Entry description cannot be empty.")

        object.__setattr__(self, "description", self.description.strip())

    @classmethod
    def from_str(cls, line: str) -> "Entry":
        return parse_entry(line)

    def __str__(self) -> str:
        return serialize_entry(self)


def parse_entry(line: str) -> Entry:
    """
    Parse an entry line into an Entry.

    Raises
    ------
    MalformedEntry
        If the line does not contain at least one space.
    InvalidDay
        If the first token is not an unsigned integer in [0, 255] (an
        optional leading ``+`` is allowed).
    InvalidEntryType
        If the type symbol is neither ``+`` nor ``-``.
    NoDescription
        If nothing follows the amount token. This is checked before the
        amount itself, so ``"1 + oops"`` reports a missing description.
    InvalidDecimal
        If the amount token is not accepted by ``parse_amount``.
    """
    day, rest = _parse_day(line)
    kind, rest = _parse_entry_type(rest)
    amount, rest = _parse_decimal(rest)
    description = _parse_description(rest)

    return Entry(day=day, kind=kind, amount=amount, description=description)


def serialize_entry(entry: Entry) -> str:
    """Return the canonical line for an entry (inverse of ``parse_entry``)."""
    return f"{entry.day} {entry.kind.symbol} {entry.amount} {entry.description}"


def _parse_day(line: str) -> tuple[int, str]:
    first, sep, rest = line.strip().partition(" ")
    if not sep:
        raise MalformedEntry(line)

    if not _DAY_RE.fullmatch(first) or int(first) > MAX_DAY:
        raise InvalidDay(first)

    return int(first), rest


def _parse_entry_type(text: str) -> tuple[EntryType, str]:
    return EntryType.from_symbol(text[:1]), text[1:]


def _split_amount(text: str) -> tuple[str, str]:
    token, sep, rest = text.partition(" ")
    if not sep or not rest.strip():
        raise NoDescription(text)
    return token, rest


def _parse_decimal(text: str) -> tuple[Decimal, str]:
    text = text.lstrip()
    token, rest = _split_amount(text)
    return parse_amount(token), rest


def _parse_description(text: str) -> str:
    return text.strip()
