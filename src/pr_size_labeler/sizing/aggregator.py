"""Count the files and lines of a PR that contribute to its size."""

from collections.abc import Iterable
from dataclasses import dataclass

from pr_size_labeler.sizing.exclusions import compile_patterns, is_excluded

REMOVED_STATUS = "removed"


@dataclass(frozen=True)
class ChangeRecord:
    """One changed file in a pull request.

    ``changes`` is additions plus deletions, as reported by the platform.
    """

    path: str
    status: str
    additions: int
    changes: int


@dataclass(frozen=True)
class AggregatedCounts:
    """Files and lines that count toward the size of a PR."""

    files: int = 0
    lines: int = 0


def aggregate(
    changes: Iterable[ChangeRecord],
    exclude_patterns: list[str],
    added_lines_only: bool = False,
) -> AggregatedCounts:
    """Sum the counted files and lines of a change set.

    Excluded files count toward neither total. Malformed exclusion globs are
    reported once and ignored. With ``added_lines_only``, deleted files are
    skipped as well and only inserted lines are summed.
    """
    patterns = compile_patterns(exclude_patterns)
    files = 0
    lines = 0
    for change in changes:
        if added_lines_only and change.status == REMOVED_STATUS:
            continue
        if is_excluded(change.path, patterns):
            continue

        files += 1
        lines += change.additions if added_lines_only else change.changes

    return AggregatedCounts(files=files, lines=lines)
