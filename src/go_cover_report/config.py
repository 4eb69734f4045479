from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from .errors import ConfigError
from .sorting import SortKey, SortOrder

COLOR_MODES = ("auto", "always", "never")
OUTPUT_FORMATS = ("text", "json")


@dataclass(frozen=True, slots=True)
class ReportConfig:
    """
    Typed config used by the CLI.

    Notes:
    - `root` is a path prefix as written in the profile (usually the Go module
      path), not a filesystem directory.
    - `min_coverage` gates the total statement coverage; None disables the gate.
    """

    profile: Path
    root: str = ""
    exclusions: tuple[str, ...] = ()
    sort_key: SortKey = SortKey.FILENAME
    sort_order: SortOrder = SortOrder.ASC
    output_format: str = "text"
    color: str = "auto"
    min_coverage: float | None = None


def env_str(name: str) -> str | None:
    """
    Read a string env var.

    Returns None if unset or blank.
    """
    raw = os.environ.get(name)
    if raw is None:
        return None
    s = raw.strip()
    return s if s else None


def env_float(name: str) -> float | None:
    """
    Parse an optional float env var.

    Returns None if unset/empty.
    """
    raw = env_str(name)
    if raw is None:
        return None
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigError(f"Invalid float value for {name}: {raw!r}") from e


def validate_config(cfg: ReportConfig) -> None:
    """
    Validate report settings.

    - format and color must be known modes
    - the coverage gate must be a percentage
    - exclusion prefixes must be non-empty (an empty prefix would drop every file)
    """
    if cfg.output_format not in OUTPUT_FORMATS:
        raise ConfigError(
            f"Invalid --format value: {cfg.output_format!r} (expected one of: text, json)"
        )
    if cfg.color not in COLOR_MODES:
        raise ConfigError(
            f"Invalid --color value: {cfg.color!r} (expected one of: auto, always, never)"
        )
    if cfg.min_coverage is not None and not (0.0 <= cfg.min_coverage <= 100.0):
        raise ConfigError(f"min_coverage must be within [0, 100], got {cfg.min_coverage}.")
    for prefix in cfg.exclusions:
        if not prefix:
            raise ConfigError("Exclusion prefixes must be non-empty.")


def config_from_values(
    *,
    profile: Path,
    root: str | None = None,
    exclusions: tuple[str, ...] | list[str] | None = None,
    sort_key: SortKey | str = SortKey.FILENAME,
    sort_order: SortOrder | str = SortOrder.ASC,
    output_format: str = "text",
    color: str = "auto",
    min_coverage: float | None = None,
) -> ReportConfig:
    """Normalize raw CLI values into a validated `ReportConfig`."""
    cfg = ReportConfig(
        profile=profile,
        root=(root or "").strip().rstrip("/"),
        exclusions=tuple(exclusions or ()),
        sort_key=SortKey.parse(sort_key),
        sort_order=SortOrder.parse(sort_order),
        output_format=output_format.strip().lower(),
        color=color.strip().lower(),
        min_coverage=min_coverage,
    )
    validate_config(cfg)
    return cfg
