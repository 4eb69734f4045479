from __future__ import annotations

from dataclasses import dataclass

from .profile import ProfileBlock

TOTAL_NAME = "Total"


def _percent(covered: int, total: int) -> float:
    # Nothing to cover counts as fully covered.
    if total == 0:
        return 100.0
    return (covered / total) * 100.0


@dataclass(frozen=True, slots=True)
class Summary:
    """Coverage snapshot for one file, or for the whole run."""

    name: str
    blocks: int
    stmts: int
    missing_blocks: int
    missing_stmts: int
    block_coverage: float
    stmt_coverage: float

    @property
    def covered_blocks(self) -> int:
        return self.blocks - self.missing_blocks

    @property
    def covered_stmts(self) -> int:
        return self.stmts - self.missing_stmts


class Accumulator:
    """
    Running block/statement totals for one key (a file name or "Total").

    Not safe for concurrent `add` calls; each instance is owned by a single
    aggregation pass.
    """

    __slots__ = ("name", "blocks", "stmts", "covered_blocks", "covered_stmts")

    def __init__(self, name: str) -> None:
        self.name = name
        self.blocks = 0
        self.stmts = 0
        self.covered_blocks = 0
        self.covered_stmts = 0

    def add(self, block: ProfileBlock) -> None:
        self.blocks += 1
        self.stmts += block.num_stmt
        if block.count > 0:
            self.covered_blocks += 1
            self.covered_stmts += block.num_stmt

    def merge(self, other: Accumulator) -> None:
        """Fold another accumulator's counters into this one."""
        self.blocks += other.blocks
        self.stmts += other.stmts
        self.covered_blocks += other.covered_blocks
        self.covered_stmts += other.covered_stmts

    def finalize(self) -> Summary:
        return Summary(
            name=self.name,
            blocks=self.blocks,
            stmts=self.stmts,
            missing_blocks=self.blocks - self.covered_blocks,
            missing_stmts=self.stmts - self.covered_stmts,
            block_coverage=_percent(self.covered_blocks, self.blocks),
            stmt_coverage=_percent(self.covered_stmts, self.stmts),
        )


__all__ = [
    "TOTAL_NAME",
    "Accumulator",
    "Summary",
]
