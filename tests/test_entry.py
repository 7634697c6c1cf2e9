from decimal import Decimal

import pytest

from porquinho.entry import (
    Entry,
    EntryType,
    InvalidDay,
    InvalidDecimal,
    InvalidEntryType,
    MalformedEntry,
    NoDescription,
    _parse_decimal,
    _parse_description,
    exact_difference,
    exact_sum,
    parse_amount,
    parse_entry,
    serialize_entry,
)


def test_parses_credit_entry() -> None:
    """A '+' line is parsed as a credit with its amount and description."""
    entry = parse_entry("22 + 5.00 Salary")

    assert entry == Entry(
        day=22,
        kind=EntryType.CREDIT,
        amount=Decimal("5.00"),
        description="Salary",
    )


def test_parses_debit_entry_with_trailing_newline() -> None:
    """A '-' line is a debit; 6.000 equals 6.00 and the newline is trimmed."""
    entry = parse_entry("12 - 6.000 Rent\n")

    assert entry.day == 12
    assert entry.kind is EntryType.DEBIT
    assert entry.amount == Decimal("6.00")
    assert entry.description == "Rent"


def test_description_keeps_inner_spaces() -> None:
    """Everything after the amount is the description."""
    entry = parse_entry("22 + 300.25 Another Payment")

    assert entry.description == "Another Payment"


def test_parses_valid_decimals() -> None:
    """The amount is read after leading whitespace; the rest is returned raw."""
    assert _parse_decimal(" 5.00 Test") == (Decimal("5.00"), "Test")
    assert _parse_decimal(" 5.00  Test") == (Decimal("5.00"), " Test")
    assert _parse_decimal("   3.1415926535 Pi") == (Decimal("3.1415926535"), "Pi")


@pytest.mark.parametrize(
    "token", ["NaN", "Hey", "Infinity", "-5", "1_000", "\uff15", "\u0663.5", "1.2.3"]
)
def test_errs_on_invalid_decimals(token: str) -> None:
    """Tokens that are not finite non-negative decimals are rejected."""
    with pytest.raises(InvalidDecimal) as exc_info:
        _parse_decimal(f"   {token} Pi")

    assert exc_info.value == InvalidDecimal(token)
    assert exc_info.value.fragment == token


def test_errs_on_missing_description() -> None:
    """A decimal with nothing (or only spaces) after it has no description."""
    with pytest.raises(NoDescription) as exc_info:
        _parse_decimal("3.1415926535")
    assert exc_info.value.fragment == "3.1415926535"

    with pytest.raises(NoDescription) as exc_info:
        _parse_decimal("   3.1415926535  ")
    assert exc_info.value.fragment == "3.1415926535  "


def test_missing_description_wins_over_invalid_decimal() -> None:
    """A bad amount without description is reported as a missing description."""
    with pytest.raises(NoDescription):
        parse_entry("3 + NaN")


def test_parses_descriptions() -> None:
    """Descriptions are trimmed on both sides."""
    for raw in ["  Petrobrás", "Petrobrás", "Petrobrás   ", " Petrobrás "]:
        assert _parse_description(raw) == "Petrobrás"


def test_errs_on_malformed_line() -> None:
    """A line without any space cannot be split into day and rest."""
    with pytest.raises(MalformedEntry) as exc_info:
        parse_entry("22")

    assert str(exc_info.value) == "Malformed entry: '22'"


@pytest.mark.parametrize("day", ["x", "-1", "256", "\u0663", "++3"])
def test_errs_on_invalid_day(day: str) -> None:
    """The day must be an unsigned integer that fits in a byte."""
    with pytest.raises(InvalidDay) as exc_info:
        parse_entry(f"{day} + 5.00 Salary")

    assert exc_info.value.fragment == day


def test_day_range_is_not_checked_against_calendar() -> None:
    """Days above 31 are accepted as long as they fit in a byte."""
    assert parse_entry("40 + 1 Odd").day == 40


def test_errs_on_invalid_entry_type() -> None:
    """Only '+' and '-' are valid type symbols."""
    with pytest.raises(InvalidEntryType) as exc_info:
        parse_entry("22 * 5.00 Salary")

    assert exc_info.value.fragment == "*"
    assert str(exc_info.value) == "'*' is not a valid transaction type descriptor"


def test_parse_errors_are_value_errors() -> None:
    """All parse errors can be caught as ValueError."""
    with pytest.raises(ValueError):
        parse_entry("not an entry")


def test_serialize_uses_symbols_and_single_spaces() -> None:
    """Serialization writes day, symbol, amount and description."""
    entry = Entry(13, EntryType.DEBIT, Decimal("10.25"), "Lunch at work")

    assert serialize_entry(entry) == "13 - 10.25 Lunch at work"
    assert str(entry) == "13 - 10.25 Lunch at work"


@pytest.mark.parametrize(
    "entry",
    [
        Entry(1, EntryType.CREDIT, Decimal("0"), "Nothing"),
        Entry(31, EntryType.DEBIT, Decimal("6.000"), "Rent"),
        Entry(7, EntryType.CREDIT, Decimal("1E+3"), "Bonus 2024 - Q1"),
        Entry(15, EntryType.DEBIT, Decimal("0.01"), "12 + 3 lookalike"),
    ],
)
def test_round_trip(entry: Entry) -> None:
    """Parsing a serialized entry gives back the same entry."""
    assert Entry.from_str(serialize_entry(entry)) == entry


def test_entry_type_keys_and_symbols() -> None:
    """Credits live under 'put' with '+', debits under 'take' with '-'."""
    assert (EntryType.CREDIT.key, EntryType.CREDIT.symbol) == ("put", "+")
    assert (EntryType.DEBIT.key, EntryType.DEBIT.symbol) == ("take", "-")
    assert EntryType.DEBIT.sort_order < EntryType.CREDIT.sort_order


def test_day_accepts_leading_plus() -> None:
    """An explicit '+' sign on the day is accepted, like an unsigned parse."""
    entry = parse_entry("+3 - 1.50 Bus")

    assert entry.day == 3
    assert serialize_entry(entry) == "3 - 1.50 Bus"


def test_parse_amount_accepts_plain_ascii_decimals() -> None:
    """Fractions, exponents and a leading '+' are valid amounts."""
    assert parse_amount("12") == Decimal(12)
    assert parse_amount(".5") == Decimal("0.5")
    assert parse_amount("+7.25") == Decimal("7.25")
    assert parse_amount("1e3") == Decimal(1000)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"description": "   "},
        {"description": ""},
        {"amount": Decimal("-5")},
        {"amount": Decimal("NaN")},
        {"amount": Decimal("Infinity")},
        {"amount": 5.0},
        {"day": 256},
        {"day": -1},
        {"kind": "+"},
    ],
)
def test_entry_rejects_values_the_line_format_cannot_hold(kwargs) -> None:
    """Entries that would serialize to an unparsable line are refused."""
    fields = {
        "day": 1,
        "kind": EntryType.DEBIT,
        "amount": Decimal("5"),
        "description": "Coffee",
    }
    fields.update(kwargs)

    with pytest.raises(ValueError):
        Entry(**fields)


def test_entry_description_is_trimmed() -> None:
    """Surrounding whitespace of a description is dropped, so it round-trips."""
    entry = Entry(2, EntryType.CREDIT, Decimal("1"), "  Gift  ")

    assert entry.description == "Gift"
    assert parse_entry(serialize_entry(entry)) == entry


def test_exact_sum_keeps_every_digit() -> None:
    """Sums are exact beyond the default 28 digits of precision."""
    amounts = [Decimal("1234567890123456789012345678.9"), Decimal("0.01")]

    assert exact_sum(amounts) == Decimal("1234567890123456789012345678.91")
    assert exact_sum([]) == Decimal(0)
    assert exact_difference(Decimal("0.01"), Decimal("1E+30")) == Decimal(
        "-999999999999999999999999999999.99"
    )
