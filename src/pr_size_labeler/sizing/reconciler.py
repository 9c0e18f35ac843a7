"""Work out the label changes that bring a PR in line with its size tier."""

from dataclasses import dataclass, field

from pr_size_labeler.config import SizeTier


@dataclass
class ReconciliationPlan:
    """Labels to add to and remove from a PR."""

    to_add: set[str] = field(default_factory=set)
    to_remove: set[str] = field(default_factory=set)

    @property
    def is_empty(self) -> bool:
        """True when the PR already carries exactly the right size labels."""
        return not self.to_add and not self.to_remove


def managed_labels(tiers: list[SizeTier]) -> set[str]:
    """All labels that belong to some configured tier."""
    return {label for tier in tiers for label in tier.labels}


def reconcile(
    tiers: list[SizeTier], winner: SizeTier, current_labels: set[str]
) -> ReconciliationPlan:
    """Compute the label changes that leave only the winner's size labels.

    Labels not owned by any tier are never touched. A label shared by the
    winner and another tier is kept.
    """
    target = set(winner.labels)
    managed = managed_labels(tiers)
    return ReconciliationPlan(
        to_add=target - current_labels,
        to_remove={label for label in current_labels if label in managed and label not in target},
    )
