from __future__ import annotations

import json
from dataclasses import asdict

from rich.console import Console
from rich.table import Table
from rich.text import Text

from .accumulate import Summary
from .errors import ConfigError
from .report import Report

_LOW_PCT = 50.0
_OK_PCT = 80.0


_CONSOLE_OPTIONS: dict[str, dict[str, bool]] = {
    "auto": {},
    # Keep the red/yellow/green percentages when the table is piped into CI logs.
    "always": {"force_terminal": True},
    "never": {"no_color": True},
}


def console_for_color_mode(color: str) -> Console:
    options = _CONSOLE_OPTIONS.get(color.strip().lower())
    if options is None:
        raise ConfigError(f"Invalid color mode: {color!r} (expected auto|always|never)")
    return Console(**options)


def _pct_style(pct: float) -> str:
    if pct < _LOW_PCT:
        return "red"
    if pct < _OK_PCT:
        return "yellow"
    return "green"


def _fmt_pct(pct: float) -> Text:
    return Text(f"{pct:6.2f}%", style=_pct_style(pct))


def _row(s: Summary) -> list[Text | str]:
    return [
        s.name,
        str(s.blocks),
        str(s.missing_blocks),
        _fmt_pct(s.block_coverage),
        str(s.stmts),
        str(s.missing_stmts),
        _fmt_pct(s.stmt_coverage),
    ]


def render_table(report: Report) -> Table:
    table = Table(show_footer=False, header_style="bold")
    table.add_column("File", no_wrap=True)
    for title in ("Blocks", "Miss", "Block Cover", "Stmts", "Miss", "Stmt Cover"):
        table.add_column(title, justify="right")

    for s in report.files:
        table.add_row(*_row(s))

    table.add_section()
    table.add_row(*_row(report.total), style="bold")
    return table


def print_text(report: Report, *, console: Console) -> None:
    if not report.files:
        console.print("No files matched filters.")
        return
    console.print(render_table(report))


def report_to_dict(report: Report) -> dict[str, object]:
    return {
        "total": asdict(report.total),
        "files": [asdict(s) for s in report.files],
    }


def format_json(report: Report) -> str:
    return json.dumps(report_to_dict(report), indent=2)


__all__ = [
    "console_for_color_mode",
    "format_json",
    "print_text",
    "render_table",
    "report_to_dict",
]
