"""
go-cover-report: coverage summaries for Go cover profiles.

Reads a `go test -coverprofile` file, aggregates block and statement counts per
file and for the whole run, and orders the file list by a chosen metric.

Public API surface is intentionally small; prefer `generate_report` or the CLI.
"""

from __future__ import annotations

from .accumulate import Summary
from .errors import ConfigError, InvalidArgumentError, ParseError
from .report import Report, generate_report
from .sorting import SortKey, SortOrder

__all__ = [
    "ConfigError",
    "InvalidArgumentError",
    "ParseError",
    "Report",
    "SortKey",
    "SortOrder",
    "Summary",
    "__version__",
    "generate_report",
]

# Keep in sync with pyproject.toml.
__version__ = "0.1.0"
