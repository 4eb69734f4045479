from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path

from .accumulate import TOTAL_NAME, Accumulator, Summary
from .profile import Profile, parse_profiles
from .sorting import SortKey, SortOrder, sort_summaries


@dataclass(frozen=True, slots=True)
class Report:
    """Global coverage plus the ordered per-file coverage."""

    total: Summary
    files: tuple[Summary, ...]


@dataclass(frozen=True, slots=True)
class AggregateResult:
    """
    Output of the aggregation stage, before sorting.

    `files` order is not meaningful; `build_report` decides the final order, so
    a caller can re-sort without re-parsing the profile.
    """

    total: Summary
    files: tuple[Summary, ...]


def display_name(file_name: str, root: str) -> str:
    """Strip one leading `root/` from a profile path (no-op when root is empty)."""
    if not root:
        return file_name
    return file_name.removeprefix(root + "/")


def is_excluded(name: str, exclusions: Sequence[str]) -> bool:
    # Plain string prefix: excluding "pkg/a" also drops "pkg/abc.go".
    return any(name.startswith(prefix) for prefix in exclusions)


def aggregate(
    profiles: Iterable[Profile],
    *,
    root: str = "",
    exclusions: Sequence[str] = (),
) -> AggregateResult:
    total = Accumulator(TOTAL_NAME)
    files: dict[str, Accumulator] = {}

    for profile in profiles:
        name = display_name(profile.file_name, root)
        if is_excluded(name, exclusions):
            continue

        acc = files.get(name)
        if acc is None:
            acc = files[name] = Accumulator(name)

        for block in profile.blocks:
            acc.add(block)
            total.add(block)

    return AggregateResult(
        total=total.finalize(),
        files=tuple(acc.finalize() for acc in files.values()),
    )


def build_report(
    result: AggregateResult,
    *,
    sort_key: SortKey | str = SortKey.FILENAME,
    sort_order: SortOrder | str = SortOrder.ASC,
) -> Report:
    files = sort_summaries(result.files, sort_key, sort_order)
    return Report(total=result.total, files=tuple(files))


def generate_report(
    profile_source: Path | str,
    *,
    root: str = "",
    exclusions: Sequence[str] = (),
    sort_key: SortKey | str = SortKey.FILENAME,
    sort_order: SortOrder | str = SortOrder.ASC,
) -> Report:
    """
    Build a coverage report from a Go cover profile file.

    - `root`: when non-empty, `root + "/"` is stripped from the front of every
      file path before exclusion checks and display.
    - `exclusions`: path prefixes; any file whose display name starts with one
      is left out of both the file list and the total.

    Raises:
    - ParseError: the profile cannot be read or parsed.
    - InvalidArgumentError: unknown sort key or order (checked once the profile
      has been aggregated, before anything is sorted).
    """
    profiles = parse_profiles(profile_source)
    result = aggregate(profiles, root=root, exclusions=exclusions)
    return build_report(result, sort_key=sort_key, sort_order=sort_order)


__all__ = [
    "AggregateResult",
    "Report",
    "aggregate",
    "build_report",
    "display_name",
    "generate_report",
    "is_excluded",
]
