"""Tests for tier resolution and tie-breaking."""

import pytest

from pr_size_labeler.config import ConfigError, SizeTier
from pr_size_labeler.sizing.tiers import (
    Dimension,
    TierNotConfiguredError,
    pick_winner,
    resolve_tier,
    tier_index,
)


@pytest.mark.parametrize(
    ("count", "expected"),
    [
        (0, "xs"),
        (1, "xs"),
        (10, "s"),
        (15, "m"),
        (105, "xl"),
    ],
)
def test_resolve_tier_by_files(tiers, count, expected):
    assert resolve_tier(tiers, count, Dimension.FILES).name == expected


@pytest.mark.parametrize(
    ("count", "expected"),
    [
        (5, "xs"),
        (35, "s"),
        (100, "m"),
        (1500, "xl"),
    ],
)
def test_resolve_tier_by_lines(tiers, count, expected):
    assert resolve_tier(tiers, count, Dimension.LINES).name == expected


def test_resolve_tier_zero_files_is_smallest():
    tiers = [
        SizeTier("xs", files=10, diff=1, labels=["size/xs"]),
        SizeTier("s", files=50, diff=10, labels=["size/s"]),
    ]

    assert resolve_tier(tiers, 0, Dimension.FILES).name == "xs"


def test_resolve_tier_empty_configuration():
    with pytest.raises(ConfigError):
        resolve_tier([], 3, Dimension.FILES)


def test_resolve_tier_uses_scan_order(tiers):
    """The first tier that fits wins, even if a later one would too."""
    for count in range(0, 120):
        tier = resolve_tier(tiers, count, Dimension.FILES)
        fitting = [i for i, t in enumerate(tiers) if t.files >= count]
        assert tiers.index(tier) == (fitting[0] if fitting else len(tiers) - 1)


def test_dimension_threshold():
    tier = SizeTier("m", files=20, diff=100, labels=["size/m"])

    assert Dimension.FILES.threshold(tier) == 20
    assert Dimension.LINES.threshold(tier) == 100


def test_tier_index(tiers):
    assert tier_index(tiers, "xs") == 0
    assert tier_index(tiers, "m") == 2
    assert tier_index(tiers, "xl") == 4


def test_tier_index_unknown_name(tiers):
    with pytest.raises(TierNotConfiguredError):
        tier_index(tiers, "xxl")


def test_pick_winner_line_tier_larger(tiers):
    assert pick_winner(tiers, tiers[1], tiers[2]).name == "m"


def test_pick_winner_file_tier_larger(tiers):
    assert pick_winner(tiers, tiers[4], tiers[0]).name == "xl"


def test_pick_winner_tie_prefers_file_tier():
    by_files = SizeTier("same", files=1, diff=1, labels=["a"])
    by_lines = SizeTier("same", files=1, diff=1, labels=["b"])

    assert pick_winner([by_files], by_files, by_lines) is by_files


def test_pick_winner_ranks_by_position_not_threshold():
    tiers = [
        SizeTier("big-first", files=100, diff=100, labels=["one"]),
        SizeTier("small-last", files=1, diff=1, labels=["two"]),
    ]

    assert pick_winner(tiers, tiers[0], tiers[1]).name == "small-last"


def test_pick_winner_unconfigured_tier(tiers):
    stray = SizeTier("xxl", files=5000, diff=5000, labels=["size/xxl"])

    with pytest.raises(TierNotConfiguredError):
        pick_winner(tiers, stray, tiers[1])
