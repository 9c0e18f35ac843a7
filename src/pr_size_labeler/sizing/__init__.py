"""Sizing module: classify a PR's change set into a size tier."""

from collections.abc import Iterable
from dataclasses import dataclass

from pr_size_labeler.config import Config, SizeTier
from pr_size_labeler.sizing.aggregator import AggregatedCounts, ChangeRecord, aggregate
from pr_size_labeler.sizing.exclusions import (
    ExclusionPattern,
    InvalidPatternError,
    compile_patterns,
    glob_match,
    is_excluded,
)
from pr_size_labeler.sizing.reconciler import ReconciliationPlan, managed_labels, reconcile
from pr_size_labeler.sizing.tiers import (
    Dimension,
    TierNotConfiguredError,
    pick_winner,
    resolve_tier,
    tier_index,
)


@dataclass
class Classification:
    """Outcome of sizing one PR."""

    counts: AggregatedCounts
    by_files: SizeTier
    by_lines: SizeTier
    winner: SizeTier


def classify(changes: Iterable[ChangeRecord], config: Config) -> Classification:
    """Size a change set against the configured tiers."""
    counts = aggregate(changes, config.exclude_files, config.added_lines_only)
    by_files = resolve_tier(config.label_configs, counts.files, Dimension.FILES)
    by_lines = resolve_tier(config.label_configs, counts.lines, Dimension.LINES)
    return Classification(
        counts=counts,
        by_files=by_files,
        by_lines=by_lines,
        winner=pick_winner(config.label_configs, by_files, by_lines),
    )


__all__ = [
    "AggregatedCounts", "ChangeRecord", "aggregate",
    "ExclusionPattern", "InvalidPatternError", "compile_patterns", "glob_match", "is_excluded",
    "Dimension", "TierNotConfiguredError", "pick_winner", "resolve_tier", "tier_index",
    "ReconciliationPlan", "managed_labels", "reconcile",
    "Classification", "classify",
]
