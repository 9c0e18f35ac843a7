"""Map file and line counts onto the configured size tiers."""

from enum import Enum

from pr_size_labeler.config import ConfigError, SizeTier


class TierNotConfiguredError(LookupError):
    """Raised when a tier is compared that is not part of the configured list."""


class Dimension(Enum):
    """Which count a tier threshold applies to."""

    FILES = "files"
    LINES = "diff"

    def threshold(self, tier: SizeTier) -> int:
        """Return the tier's inclusive upper bound for this dimension."""
        return getattr(tier, self.value)


def resolve_tier(tiers: list[SizeTier], count: int, dimension: Dimension) -> SizeTier:
    """Return the first tier whose threshold is at least ``count``.

    Counts above every threshold saturate at the last tier.

    Raises:
        ConfigError: If no tiers are configured.
    """
    if not tiers:
        raise ConfigError("Cannot resolve a size: no size tiers are configured")

    for tier in tiers:
        if count <= dimension.threshold(tier):
            return tier
    return tiers[-1]


def tier_index(tiers: list[SizeTier], name: str) -> int:
    """Position of the first tier called ``name``.

    Raises:
        TierNotConfiguredError: If no tier has that name.
    """
    for i, tier in enumerate(tiers):
        if tier.name == name:
            return i
    raise TierNotConfiguredError(f"Size tier '{name}' is not in the configuration")


def pick_winner(tiers: list[SizeTier], by_files: SizeTier, by_lines: SizeTier) -> SizeTier:
    """Pick the larger of two tiers by configured position.

    Rank is position in ``tiers``, not threshold size. On a tie the
    file-count tier wins.
    """
    if tier_index(tiers, by_files.name) >= tier_index(tiers, by_lines.name):
        return by_files
    return by_lines
