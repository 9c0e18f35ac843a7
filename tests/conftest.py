"""Shared test fixtures and configuration."""

import pytest

from pr_size_labeler.config import Config, SizeTier


def make_tiers() -> list[SizeTier]:
    """Five tiers from xs to xl with one 'size/<name>' label each."""
    return [
        SizeTier("xs", files=1, diff=10, labels=["size/xs"]),
        SizeTier("s", files=10, diff=50, labels=["size/s"]),
        SizeTier("m", files=20, diff=100, labels=["size/m"]),
        SizeTier("l", files=50, diff=500, labels=["size/l"]),
        SizeTier("xl", files=100, diff=1000, labels=["size/xl"]),
    ]


@pytest.fixture
def tiers() -> list[SizeTier]:
    """Default tier table."""
    return make_tiers()


@pytest.fixture
def config() -> Config:
    """Default config excluding 'exclude.*' files."""
    return Config(exclude_files=["exclude.*"], label_configs=make_tiers())
