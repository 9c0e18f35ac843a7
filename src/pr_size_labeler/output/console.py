"""Console output formatting."""

from pr_size_labeler.sizing import Classification, ReconciliationPlan


def _format_labels(labels: set[str]) -> str:
    return ", ".join(sorted(labels)) if labels else "none"


def format_labeling_output(
    repo: str,
    pr_number: int,
    classification: Classification,
    plan: ReconciliationPlan,
    dry_run: bool = False,
) -> str:
    """Format the sizing result and label changes for the CI log."""
    lines = []

    lines.append("=" * 60)
    lines.append(f"PR Size: {repo} #{pr_number}")
    lines.append("=" * 60)
    lines.append("")

    counts = classification.counts
    lines.append("## Size")
    lines.append(f"Files counted: {counts.files} -> {classification.by_files.name}")
    lines.append(f"Lines counted: {counts.lines} -> {classification.by_lines.name}")
    lines.append(f"Size: {classification.winner.name}")
    lines.append("")

    lines.append("## Labels")
    if plan.is_empty:
        lines.append("✓ Labels already up to date")
    else:
        prefix = "Would add" if dry_run else "Added"
        lines.append(f"{prefix}: {_format_labels(plan.to_add)}")
        prefix = "Would remove" if dry_run else "Removed"
        lines.append(f"{prefix}: {_format_labels(plan.to_remove)}")
    if dry_run:
        lines.append("")
        lines.append("Dry run - no labels were changed.")

    lines.append("=" * 60)
    return "\n".join(lines)


def print_results(
    repo: str,
    pr_number: int,
    classification: Classification,
    plan: ReconciliationPlan,
    dry_run: bool = False,
) -> None:
    """Print formatted labeling results to console."""
    print(format_labeling_output(repo, pr_number, classification, plan, dry_run))
