"""Exclusion patterns for files that should not count toward PR size."""

import fnmatch
import posixpath
import sys
from collections.abc import Iterable
from dataclasses import dataclass

# Characters that fnmatch would read as syntax; an escaped one becomes a one-member class
_GLOB_SYNTAX = "*?[]\\"


class InvalidPatternError(ValueError):
    """Raised when an exclusion glob is malformed."""


def _literal(char: str) -> str:
    return f"[{char}]" if char in _GLOB_SYNTAX else char


def _translate_class(segment: str, start: int, pattern: str) -> tuple[str, int]:
    """Translate the character class opening at ``segment[start]``.

    Returns the fnmatch class and the index just past its closing ']'.
    """
    i = start + 1
    negated = i < len(segment) and segment[i] in "^!"
    if negated:
        i += 1

    members: list[str] = []
    while i < len(segment):
        char = segment[i]
        if char == "]" and members:
            break
        if char == "\\":
            i += 1
            if i == len(segment):
                raise InvalidPatternError(f"trailing backslash in {pattern!r}")
            char = segment[i]
        members.append(char)
        i += 1
    else:
        raise InvalidPatternError(f"unterminated character class in {pattern!r}")

    # fnmatch only reads ']' as a member in first position, and a leading '!' as negation
    if "]" in members:
        members = ["]"] + [m for m in members if m != "]"]
    if members == ["!"] and not negated:
        return "!", i + 1
    if not negated and members[0] == "!":
        members = members[1:] + ["!"]
    return "[" + ("!" if negated else "") + "".join(members) + "]", i + 1


def _translate_segment(segment: str, pattern: str) -> str:
    """Rewrite one path segment of a glob into fnmatch syntax.

    Supports ``\\`` escapes and both ``[^...]`` and ``[!...]`` negation.

    Raises:
        InvalidPatternError: If the segment is malformed.
    """
    out = []
    i = 0
    while i < len(segment):
        char = segment[i]
        if char == "\\":
            if i + 1 == len(segment):
                raise InvalidPatternError(f"trailing backslash in {pattern!r}")
            out.append(_literal(segment[i + 1]))
            i += 2
        elif char == "[":
            translated, i = _translate_class(segment, i, pattern)
            out.append(translated)
        else:
            out.append(char)
            i += 1
    return "".join(out)


@dataclass(frozen=True)
class ExclusionPattern:
    """A validated exclusion glob, split into fnmatch segments."""

    raw: str
    segments: tuple[str, ...]
    directory: str | None

    @classmethod
    def compile(cls, pattern: str) -> "ExclusionPattern":
        """Validate and translate a glob.

        Raises:
            InvalidPatternError: If the pattern is malformed.
        """
        segments = tuple(_translate_segment(part, pattern) for part in pattern.split("/"))
        directory = None
        if pattern.endswith("/*"):
            directory = posixpath.normpath(posixpath.dirname(pattern))
        return cls(raw=pattern, segments=segments, directory=directory)

    def _glob(self, path: str) -> bool:
        parts = path.split("/")
        if len(parts) != len(self.segments):
            return False
        return all(
            fnmatch.fnmatchcase(part, segment)
            for part, segment in zip(parts, self.segments)
        )

    def matches(self, path: str) -> bool:
        """Match the full path, then the file name, then the ``dir/*`` prefix rule.

        The prefix test is a plain string prefix, so ``/foo/*`` also
        matches ``/foobar/x``.
        """
        if self._glob(path) or self._glob(posixpath.basename(path)):
            return True
        return self.directory is not None and path.startswith(self.directory)


def glob_match(pattern: str, path: str) -> bool:
    """Match a path against a shell glob where wildcards never cross '/'.

    Raises:
        InvalidPatternError: If the pattern is malformed.
    """
    return ExclusionPattern.compile(pattern)._glob(path)


def _warn_invalid(error: InvalidPatternError) -> None:
    print(f"Warning: skipping invalid exclude pattern: {error}", file=sys.stderr)


def compile_patterns(patterns: Iterable[str]) -> list[ExclusionPattern]:
    """Compile exclusion globs, dropping malformed ones with a warning on stderr."""
    compiled = []
    for pattern in patterns:
        try:
            compiled.append(ExclusionPattern.compile(pattern))
        except InvalidPatternError as e:
            _warn_invalid(e)
    return compiled


def is_excluded(path: str, patterns: Iterable[str | ExclusionPattern]) -> bool:
    """Check whether a changed file is excluded from size accounting.

    Accepts raw globs or patterns already built by ``compile_patterns``.
    Malformed raw globs are reported on stderr and skipped.
    """
    for pattern in patterns:
        if isinstance(pattern, str):
            try:
                pattern = ExclusionPattern.compile(pattern)
            except InvalidPatternError as e:
                _warn_invalid(e)
                continue
        if pattern.matches(path):
            return True
    return False
