from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

from .accumulate import Summary
from .errors import InvalidArgumentError


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"

    @classmethod
    def parse(cls, value: SortOrder | str) -> SortOrder:
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError as e:
            raise InvalidArgumentError(
                f"Invalid sort order {value!r} (expected one of: asc, desc)"
            ) from e


class SortKey(str, Enum):
    """
    Column a file listing can be ordered by.

    Each member compares a single `Summary` field:
    - filename:       name (lexicographic)
    - block:          block_coverage
    - stmt:           stmt_coverage
    - missing-blocks: missing_blocks
    - missing-stmts:  missing_stmts
    """

    FILENAME = "filename"
    BLOCK = "block"
    STMT = "stmt"
    MISSING_BLOCKS = "missing-blocks"
    MISSING_STMTS = "missing-stmts"

    @property
    def field(self) -> str:
        return _FIELDS[self]

    def value_of(self, summary: Summary) -> str | int | float:
        return getattr(summary, self.field)

    @classmethod
    def parse(cls, value: SortKey | str) -> SortKey:
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError as e:
            choices = ", ".join(k.value for k in cls)
            raise InvalidArgumentError(
                f"Invalid sort column {value!r} (expected one of: {choices})"
            ) from e


_FIELDS: dict[SortKey, str] = {
    SortKey.FILENAME: "name",
    SortKey.BLOCK: "block_coverage",
    SortKey.STMT: "stmt_coverage",
    SortKey.MISSING_BLOCKS: "missing_blocks",
    SortKey.MISSING_STMTS: "missing_stmts",
}


def sort_summaries(
    summaries: Iterable[Summary],
    key: SortKey | str,
    order: SortOrder | str,
) -> list[Summary]:
    """
    Return `summaries` ordered by `key` in `order`.

    Both arguments are validated before anything is sorted. `sorted` is stable
    in both directions (`reverse=True` does not reorder equal keys), so ties keep
    their input order whether ascending or descending.
    """
    sort_order = SortOrder.parse(order)
    sort_key = SortKey.parse(key)
    return sorted(
        summaries,
        key=sort_key.value_of,
        reverse=sort_order is SortOrder.DESC,
    )


__all__ = [
    "SortKey",
    "SortOrder",
    "sort_summaries",
]
