# Porquinho - Personal finance ledger for the command line
# Copyright (c) 2025 Porquinho contributors
# Licensed under the MIT License. See LICENSE file for details.

"""
Porquinho
---------

A small personal finance ledger for the command line. Income and expenses
are recorded as dated entry lines in one TOML file per month, stored in the
platform's per-user data directory.

Main capabilities:
- record money taken out (``take``) or put in (``put``) for today,
- show the totals and operations of the current month,
- summarize every recorded month with overall totals.

The code is split between the entry-line grammar (entry), the monthly file
format (codec, store), aggregation (status), presentation (views),
configuration (config) and the command-line front-end (cli).

Version: 0.1.0

Usage:
    python -m porquinho.cli --help
"""

__all__ = ["entry", "codec", "store", "status", "views", "config", "cli"]

__version__ = "0.1.0"
