from __future__ import annotations

import re
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Final

from .errors import ParseError

_MODE_PREFIX: Final[str] = "mode: "

# name.go:line.column,line.column numberOfStatements count
_BLOCK_RE: Final[re.Pattern[str]] = re.compile(
    r"^(.+):([0-9]+)\.([0-9]+),([0-9]+)\.([0-9]+) ([0-9]+) ([0-9]+)$"
)


@dataclass(frozen=True, slots=True)
class ProfileBlock:
    """A contiguous run of statements sharing one execution count."""

    start_line: int
    start_col: int
    end_line: int
    end_col: int
    num_stmt: int
    count: int

    @property
    def position(self) -> tuple[int, int, int, int]:
        return (self.start_line, self.start_col, self.end_line, self.end_col)


@dataclass(frozen=True, slots=True)
class Profile:
    """All blocks recorded for one source file."""

    file_name: str
    mode: str
    blocks: tuple[ProfileBlock, ...]


def parse_profiles(path: Path | str) -> list[Profile]:
    """Read and parse a Go cover profile file."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ParseError(f"cannot read coverage profile {str(path)!r}: {e}") from e
    return parse_profiles_text(text)


def parse_profiles_text(text: str) -> list[Profile]:
    """
    Parse the text of a Go cover profile.

    Expected format:
        mode: set
        example.com/pkg/a.go:3.14,5.2 3 1

    Notes:
    - `go test ./...` concatenates per-package profiles; repeated `mode:` lines
      after the first are skipped.
    - Blocks reported more than once for the same position are merged.
    - Profiles are returned sorted by file name.
    """
    mode: str | None = None
    by_file: dict[str, list[ProfileBlock]] = {}

    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line:
            continue

        if mode is None:
            if not line.startswith(_MODE_PREFIX) or not line[len(_MODE_PREFIX) :].strip():
                raise ParseError(f"bad mode line: {line!r}")
            mode = line[len(_MODE_PREFIX) :].strip()
            continue

        if line.startswith("mode:"):
            continue

        file_name, block = _parse_block_line(line, lineno)
        by_file.setdefault(file_name, []).append(block)

    if mode is None:
        raise ParseError("empty coverage profile (no mode line)")

    profiles = [
        Profile(file_name=name, mode=mode, blocks=_merge_blocks(name, blocks, mode))
        for name, blocks in by_file.items()
    ]
    profiles.sort(key=lambda p: p.file_name)
    return profiles


def _parse_block_line(line: str, lineno: int) -> tuple[str, ProfileBlock]:
    m = _BLOCK_RE.match(line)
    if not m:
        raise ParseError(f"line {lineno}: malformed block line: {line!r}")

    sl, sc, el, ec, num_stmt, count = (int(g) for g in m.groups()[1:])
    return m.group(1), ProfileBlock(
        start_line=sl,
        start_col=sc,
        end_line=el,
        end_col=ec,
        num_stmt=num_stmt,
        count=count,
    )


def _merge_blocks(
    file_name: str, blocks: list[ProfileBlock], mode: str
) -> tuple[ProfileBlock, ...]:
    ordered = sorted(blocks, key=lambda b: (b.start_line, b.start_col))

    out: list[ProfileBlock] = []
    for block in ordered:
        prev = out[-1] if out else None
        if prev is None or prev.position != block.position:
            out.append(block)
            continue

        if prev.num_stmt != block.num_stmt:
            raise ParseError(
                f"inconsistent NumStmt in {file_name}: changed from "
                f"{prev.num_stmt} to {block.num_stmt}"
            )
        if mode == "set":
            count = 1 if (prev.count > 0 or block.count > 0) else 0
        else:
            count = prev.count + block.count
        out[-1] = replace(prev, count=count)

    return tuple(out)


__all__ = [
    "Profile",
    "ProfileBlock",
    "parse_profiles",
    "parse_profiles_text",
]
