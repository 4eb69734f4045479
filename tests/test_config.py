from __future__ import annotations

from pathlib import Path

import pytest

from go_cover_report.config import config_from_values, env_float, env_str
from go_cover_report.errors import ConfigError, InvalidArgumentError
from go_cover_report.sorting import SortKey, SortOrder


def test_config_from_values_normalizes() -> None:
    cfg = config_from_values(
        profile=Path("cover.out"),
        root=" example.com/mod/ ",
        exclusions=["internal/"],
        sort_key="missing-blocks",
        sort_order="desc",
        output_format="JSON",
        color=" Never ",
    )
    assert cfg.root == "example.com/mod"
    assert cfg.exclusions == ("internal/",)
    assert cfg.sort_key is SortKey.MISSING_BLOCKS
    assert cfg.sort_order is SortOrder.DESC
    assert cfg.output_format == "json"
    assert cfg.color == "never"


@pytest.mark.parametrize(
    "overrides",
    [
        {"output_format": "html"},
        {"color": "sometimes"},
        {"min_coverage": 101.0},
        {"min_coverage": -1.0},
        {"exclusions": [""]},
    ],
)
def test_config_from_values_rejects_invalid(overrides: dict[str, object]) -> None:
    with pytest.raises(ConfigError):
        config_from_values(profile=Path("cover.out"), **overrides)


def test_invalid_sort_is_a_config_error() -> None:
    with pytest.raises(InvalidArgumentError):
        config_from_values(profile=Path("cover.out"), sort_key="bogus")
    with pytest.raises(ConfigError):
        config_from_values(profile=Path("cover.out"), sort_order="bogus")


def test_env_helpers(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("X", raising=False)
    assert env_str("X") is None
    assert env_float("X") is None

    monkeypatch.setenv("X", "  ")
    assert env_str("X") is None

    monkeypatch.setenv("X", " 72.5 ")
    assert env_str("X") == "72.5"
    assert env_float("X") == 72.5

    monkeypatch.setenv("X", "wat")
    with pytest.raises(ConfigError):
        env_float("X")
