from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from .config import ReportConfig, config_from_values, env_float, env_str
from .errors import ConfigError, ParseError
from .render import console_for_color_mode, format_json, print_text
from .report import Report, generate_report

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    pretty_exceptions_enable=True,
    help="Summarize Go coverage profiles per file and for the whole run.",
)


def _resolve_root(root: str | None) -> str:
    if root is not None:
        return root
    return env_str("GO_COVER_REPORT_ROOT") or ""


def _resolve_min_coverage(min_coverage: float | None) -> float | None:
    if min_coverage is not None:
        return min_coverage
    return env_float("GO_COVER_REPORT_MIN_COVERAGE")


def _emit(report: Report, cfg: ReportConfig) -> None:
    if cfg.output_format == "json":
        typer.echo(format_json(report))
        return
    print_text(report, console=console_for_color_mode(cfg.color))


@app.command()
def report(
    profile: Annotated[
        Path,
        typer.Argument(
            help="Coverage profile written by `go test -coverprofile`.",
            dir_okay=False,
        ),
    ],
    root: Annotated[
        str | None,
        typer.Option(
            "--root",
            help="Prefix stripped from file paths, usually the module path "
            "(env: GO_COVER_REPORT_ROOT).",
        ),
    ] = None,
    exclude: Annotated[
        list[str] | None,
        typer.Option(
            "--exclude",
            "-e",
            help="Exclude files whose name starts with this prefix (repeatable).",
        ),
    ] = None,
    sort: Annotated[
        str,
        typer.Option(
            "--sort",
            help="Sort column: filename, block, stmt, missing-blocks or missing-stmts.",
            envvar="GO_COVER_REPORT_SORT",
        ),
    ] = "filename",
    order: Annotated[
        str,
        typer.Option(
            "--order",
            help="Sort direction: asc or desc.",
            envvar="GO_COVER_REPORT_ORDER",
        ),
    ] = "asc",
    output_format: Annotated[
        str,
        typer.Option(
            "--format",
            help="Output format (text|json).",
        ),
    ] = "text",
    color: Annotated[
        str,
        typer.Option(
            "--color",
            help="Color output mode (auto|always|never).",
            envvar="GO_COVER_REPORT_COLOR",
            show_default=True,
        ),
    ] = "auto",
    min_coverage: Annotated[
        float | None,
        typer.Option(
            "--min-coverage",
            help="Fail (exit 1) when total statement coverage is below this percentage "
            "(env: GO_COVER_REPORT_MIN_COVERAGE).",
        ),
    ] = None,
) -> None:
    """
    Print a coverage summary for PROFILE.

    Exit codes: 0 ok, 1 coverage below --min-coverage, 2 bad arguments or profile.
    """
    try:
        cfg = config_from_values(
            profile=profile,
            root=_resolve_root(root),
            exclusions=exclude,
            sort_key=sort,
            sort_order=order,
            output_format=output_format,
            color=color,
            min_coverage=_resolve_min_coverage(min_coverage),
        )
        result = generate_report(
            cfg.profile,
            root=cfg.root,
            exclusions=cfg.exclusions,
            sort_key=cfg.sort_key,
            sort_order=cfg.sort_order,
        )
    except ConfigError as e:
        typer.secho(f"CONFIG ERROR: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2) from e
    except ParseError as e:
        typer.secho(f"PROFILE ERROR: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2) from e

    _emit(result, cfg)

    if cfg.min_coverage is not None and result.total.stmt_coverage < cfg.min_coverage:
        typer.secho(
            f"FAIL: total statement coverage {result.total.stmt_coverage:.2f}% "
            f"is below {cfg.min_coverage:.2f}%",
            fg=typer.colors.RED,
            err=True,
        )
        raise typer.Exit(code=1)
