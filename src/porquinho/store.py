# Porquinho - Personal finance ledger for the command line
# Copyright (c) 2025 Porquinho contributors
# Licensed under the MIT License. See LICENSE file for details.

"""
Monthly store for Porquinho.

Each calendar month lives in its own file named ``MM-YYYY`` inside the data
directory (for example ``10-2024`` for October 2024). The file is a small
TOML document:

    take = ["23 - 10.25 Lunch"]
    put = ["22 + 200.50 Payment"]
    target = 1000   # optional

- ``take``:   debit entry lines, in the order they were recorded,
- ``put``:    credit entry lines, in the order they were recorded,
- ``target``: optional integer.

Any other top-level key is preserved as-is when the file is rewritten.

This module is responsible for:
- building and parsing month keys,
- type-checking a decoded document before any entry line is parsed,
- loading a month (creating the file on first access),
- appending an entry and rewriting the whole file,
- listing the months available in the data directory.

Entry lines are *not* parsed here; see ``status.aggregate``.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any, Optional
import re

from .codec import TOML_CODEC, DocumentCodec
from .entry import Entry, EntryType, serialize_entry

_MONTH_KEY_RE = re.compile(r"(\d{2})-(\d{4})")

LIST_KEYS = (EntryType.DEBIT.key, EntryType.CREDIT.key)


class InvalidDocumentTypes(ValueError):
    """Raised when a monthly document has fields of the wrong type."""

    def __init__(self, path: Path, description: str) -> None:
        self.path = path
        self.description = description
        super().__init__(f"Invalid field types in {path}:\n{description}")


# ---------------------------------------------------------------------------
# Month keys
# ---------------------------------------------------------------------------


def month_key(day: date) -> str:
    """Return the ``MM-YYYY`` key of the month containing ``day``."""
    return f"{day.month:02}-{day.year}"


def parse_month_key(key: str) -> tuple[int, int]:
    """
    Parse a ``MM-YYYY`` key into ``(year, month)``.

    Raises:
        ValueError: if the key does not follow the format or the month is
            not in 1..12.
    """
    match = _MONTH_KEY_RE.fullmatch(key)
    if match is None:
        raise ValueError(f"Invalid month key {key!r}, expected MM-YYYY.")

    month, year = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month in key {key!r}.")

    return year, month


def _is_month_key(key: str) -> bool:
    try:
        parse_month_key(key)
    except ValueError:
        return False
    return True


# ---------------------------------------------------------------------------
# Type checking
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TypeCheckDiagnosis:
    """Outcome of the structural checks run on a decoded monthly document."""

    is_take_array: bool
    is_put_array: bool
    is_take_array_of_strings: bool
    is_put_array_of_strings: bool
    is_target_int_or_undefined: bool

    @property
    def errors(self) -> list[str]:
        messages = []
        for key, is_array, of_strings in (
            ("take", self.is_take_array, self.is_take_array_of_strings),
            ("put", self.is_put_array, self.is_put_array_of_strings),
        ):
            if not is_array:
                messages.append(f"- '{key}' is missing or is not an array")
            elif not of_strings:
                messages.append(f"- '{key}' must only contain strings")

        if not self.is_target_int_or_undefined:
            messages.append("- 'target' must be an integer")

        return messages

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    @property
    def description(self) -> str:
        return "\n".join(self.errors)


def type_check_document(document: Mapping[str, Any]) -> TypeCheckDiagnosis:
    """Check the types of the ``take``, ``put`` and ``target`` fields."""

    def _is_array(key: str) -> bool:
        return isinstance(document.get(key), list)

    def _is_array_of_strings(key: str) -> bool:
        return _is_array(key) and all(isinstance(v, str) for v in document[key])

    target = document.get("target")
    # bool is a subclass of int, but `target = true` is not a target.
    is_target_ok = target is None or (
        isinstance(target, int) and not isinstance(target, bool)
    )

    return TypeCheckDiagnosis(
        is_take_array=_is_array("take"),
        is_put_array=_is_array("put"),
        is_take_array_of_strings=_is_array_of_strings("take"),
        is_put_array_of_strings=_is_array_of_strings("put"),
        is_target_int_or_undefined=is_target_ok,
    )


def default_document() -> dict[str, Any]:
    """Document used for a month that has no entries yet."""
    return {"take": [], "put": []}


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class MonthlyStore:
    """Raw content of one month file."""

    path: Path
    take: tuple[str, ...] = ()
    put: tuple[str, ...] = ()
    target: Optional[int] = None
    extra: Mapping[str, Any] = field(default_factory=dict)

    @property
    def month(self) -> str:
        """Month key of this store (the file name, ``MM-YYYY``)."""
        return self.path.name

    def lines(self, kind: EntryType) -> tuple[str, ...]:
        return self.take if kind is EntryType.DEBIT else self.put

    def to_document(self) -> dict[str, Any]:
        document: dict[str, Any] = dict(self.extra)
        document["take"] = list(self.take)
        document["put"] = list(self.put)
        if self.target is not None:
            document["target"] = self.target
        return document

    @classmethod
    def from_document(cls, path: Path, document: Mapping[str, Any]) -> "MonthlyStore":
        extra = {
            k: v for k, v in document.items() if k not in (*LIST_KEYS, "target")
        }
        return cls(
            path=path,
            take=tuple(document["take"]),
            put=tuple(document["put"]),
            target=document.get("target"),
            extra=extra,
        )


def create_file_if_not_existent(path: Path) -> None:
    """Create an empty month file if it does not exist yet."""
    if path.exists():
        return

    print(f"Creating {path}.")
    with open(path, "x", encoding="utf-8"):
        pass


def _decode_or_default(text: str, codec: DocumentCodec) -> dict[str, Any]:
    if not text.strip():
        return default_document()
    return codec.decode(text)


def _validated_document(
    path: Path, text: str, codec: DocumentCodec
) -> dict[str, Any]:
    document = _decode_or_default(text, codec)

    diagnosis = type_check_document(document)
    if diagnosis.has_errors:
        raise InvalidDocumentTypes(path, diagnosis.description)

    return document


def load_store(path: Path, codec: DocumentCodec = TOML_CODEC) -> MonthlyStore:
    """
    Load a month file, creating it first if needed.

    A missing or blank file is an empty store. A non-blank file must decode
    to a document whose fields pass ``type_check_document``.

    Raises:
        DocumentDecodeError: if the file content cannot be decoded.
        InvalidDocumentTypes: if the decoded fields have the wrong types.
        OSError: if the file cannot be created or read.
    """
    path = Path(path)
    create_file_if_not_existent(path)

    text = path.read_text(encoding="utf-8")
    document = _validated_document(path, text, codec)

    return MonthlyStore.from_document(path, document)


def load_month(
    data_dir: Path, key: str, codec: DocumentCodec = TOML_CODEC
) -> MonthlyStore:
    """Load the store for month ``key`` (``MM-YYYY``) from ``data_dir``."""
    parse_month_key(key)
    return load_store(Path(data_dir) / key, codec)


def list_month_paths(data_dir: Path) -> list[Path]:
    """
    Return the month files of ``data_dir`` in chronological order.

    Only regular files named ``MM-YYYY`` are considered.
    """
    paths = [
        p for p in Path(data_dir).iterdir() if p.is_file() and _is_month_key(p.name)
    ]
    return sorted(paths, key=lambda p: parse_month_key(p.name))


def load_all_months(
    data_dir: Path, codec: DocumentCodec = TOML_CODEC
) -> list[MonthlyStore]:
    return [load_store(p, codec) for p in list_month_paths(data_dir)]


def append_entry(
    store: MonthlyStore, entry: Entry, codec: DocumentCodec = TOML_CODEC
) -> MonthlyStore:
    """
    Append an entry to a month file and rewrite the whole file.

    The file is re-read first so that the rewrite starts from its current
    content. The new line goes at the end of ``put`` for a credit and of
    ``take`` for a debit. The file is overwritten from offset 0 and then
    truncated to the written length.

    Returns the updated store; ``store`` itself is left unchanged.
    """
    path = store.path
    create_file_if_not_existent(path)

    with open(path, "r+", encoding="utf-8") as fh:
        document = _validated_document(path, fh.read(), codec)
        document[entry.kind.key].append(serialize_entry(entry))

        fh.seek(0)
        fh.write(codec.encode(document))
        fh.truncate()

    print(f"Updated {path}")

    return MonthlyStore.from_document(path, document)
