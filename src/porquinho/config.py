# Porquinho - Personal finance ledger for the command line
# Copyright (c) 2025 Porquinho contributors
# Licensed under the MIT License. See LICENSE file for details.

"""
Configuration helpers for Porquinho.

This module is responsible for:
- locating and loading the optional TOML configuration file,
- resolving the data directory holding the monthly files,
- creating that directory on first use,
- exposing a typed dataclass used by the rest of the application.

Expected sections in the TOML file (all optional)
-------------------------------------------------
[storage]
    data_dir = "path/to/data"   # relative to the config file

[display]
    decimals = 2                # decimals shown for amounts

When no configuration file exists, the platform's standard per-user data
directory is used (see ``platformdirs.user_data_path``).
"""

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

try:
    import tomllib  # Python 3.11+
except ModuleNotFoundError:  # pragma: no cover - fallback for older Python
    import tomli as tomllib  # type: ignore[import]

import platformdirs

APP_NAME = "porquinho"
CONFIG_FILE_NAME = "porquinho.toml"
DEFAULT_DECIMALS = 2


class DataDirError(OSError):
    """Raised when the data directory cannot be resolved or created."""


@dataclass(frozen=True)
class AppConfig:
    """
    Application-wide configuration for Porquinho.

    Attributes
    ----------
    data_dir :
        Directory containing one file per month.
    decimals :
        Number of decimals used when displaying amounts.
    config_file :
        Configuration file that was read, or None when defaults are used.
    """

    data_dir: Path
    decimals: int = DEFAULT_DECIMALS
    config_file: Optional[Path] = None


def default_config_path() -> Path:
    return platformdirs.user_config_path(APP_NAME) / CONFIG_FILE_NAME


def default_data_dir() -> Path:
    return platformdirs.user_data_path(APP_NAME)


def _load_toml(path: Path) -> dict[str, Any]:
    """
    Load a TOML file and return its content as a dictionary.

    Raises:
        FileNotFoundError: if the file does not exist.
        ValueError: if the TOML content cannot be parsed.
    """
    if not path.is_file():
        raise FileNotFoundError(f"Config file not found: {path}")

    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"Failed to parse TOML config file: {path}") from exc


def _section(raw: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    section = raw.get(name) or {}
    if not isinstance(section, Mapping):
        raise ValueError(f"Config section [{name}] must be a table.")
    return section


def _parse_decimals(display_section: Mapping[str, Any]) -> int:
    value = display_section.get("decimals", DEFAULT_DECIMALS)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(
            "Invalid value for 'display.decimals' in the configuration. "
            "Expected a non-negative integer."
        )
    return value


def load_app_config(
    config_path: Optional[str] = None,
    data_dir_override: Optional[str] = None,
) -> AppConfig:
    """
    Load the Porquinho configuration.

    Parameters
    ----------
    config_path :
        Explicit path to a TOML configuration file. It must exist. When
        omitted, ``porquinho.toml`` in the user config directory is read if
        present; otherwise defaults are used.
    data_dir_override :
        Data directory taking precedence over the configured one.

    Returns
    -------
    AppConfig
        Parsed configuration. The data directory is not created here; see
        ``ensure_data_dir``.
    """
    if config_path is not None:
        config_file: Optional[Path] = Path(config_path).expanduser().resolve()
        raw = _load_toml(config_file)
    else:
        candidate = default_config_path()
        if candidate.is_file():
            config_file = candidate
            raw = _load_toml(candidate)
        else:
            config_file = None
            raw = {}

    storage_section = _section(raw, "storage")
    display_section = _section(raw, "display")

    if data_dir_override:
        data_dir = Path(data_dir_override).expanduser().resolve()
    elif storage_section.get("data_dir"):
        base_dir = config_file.parent if config_file else Path.cwd()
        configured = Path(str(storage_section["data_dir"])).expanduser()
        data_dir = (base_dir / configured).resolve()
    else:
        data_dir = default_data_dir()

    return AppConfig(
        data_dir=data_dir,
        decimals=_parse_decimals(display_section),
        config_file=config_file,
    )


def ensure_data_dir(path: Path) -> Path:
    """Create the data directory (and parents) if it does not exist yet."""
    if path.is_dir():
        return path

    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise DataDirError(f"Could not create folder {path}: {exc}") from exc

    print(f"info: created folder {path}")
    return path
