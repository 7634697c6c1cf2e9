# Porquinho - Personal finance ledger for the command line
# Copyright (c) 2025 Porquinho contributors
# Licensed under the MIT License. See LICENSE file for details.

"""
Document codecs for monthly files.

A monthly file is a small key-value document. The store only needs two
operations on it, ``decode(text) -> dict`` and ``encode(dict) -> text``,
so the entry-line grammar stays independent from the outer file format.

The default codec is TOML.
"""

from typing import Any, Protocol

try:
    import tomllib  # Python 3.11+
except ModuleNotFoundError:  # pragma: no cover - fallback for older Python
    import tomli as tomllib  # type: ignore[import]

import tomli_w


class DocumentDecodeError(ValueError):
    """Raised when the text of a monthly file cannot be decoded."""


class DocumentCodec(Protocol):
    def decode(self, text: str) -> dict[str, Any]: ...

    def encode(self, document: dict[str, Any]) -> str: ...


class TomlCodec:
    """Read and write monthly documents as TOML."""

    def decode(self, text: str) -> dict[str, Any]:
        try:
            data = tomllib.loads(text)
        except tomllib.TOMLDecodeError as exc:
            raise DocumentDecodeError(f"Invalid TOML document: {exc}") from exc
        return data

    def encode(self, document: dict[str, Any]) -> str:
        # tomli_w writes non-empty arrays one item per line.
        return tomli_w.dumps(document)


TOML_CODEC = TomlCodec()
