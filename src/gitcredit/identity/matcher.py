"""
Ignore glob matcher.

Compiles a set of glob patterns into a single regular expression that
matches a repository-relative path when any of the globs matches it.

Glob syntax:
- ``*`` matches any run of characters within one path segment
- ``**`` matches across directory boundaries
- ``?`` matches exactly one character other than ``/``
- ``[abc]`` / ``[!abc]`` character classes (never matching ``/``)
- ``{a,b}`` groups of alternatives
- ``\\`` escapes the following character

Examples:
    >>> matcher = IgnoreGlobMatcher(["secret/**", "*.md"])
    >>> matcher.matches("secret/key.txt")
    True
    >>> matcher.matches("docs/readme.md")
    False
"""

import re
from pathlib import PurePath
from typing import Iterable, List, Pattern, Tuple, Union

from gitcredit.identity.validation import ValidationError

PathLike = Union[str, PurePath]

_MATCH_NOTHING = re.compile(r"(?!)")


def glob_to_regex(glob: str) -> str:
    """Translate a single glob into an (unanchored) regular expression.

    Args:
        glob: Glob pattern

    Returns:
        Regular expression source equivalent to the glob

    Raises:
        ValidationError: If the glob is malformed
    """
    parts: List[str] = []
    group_depth = 0
    i = 0
    length = len(glob)

    while i < length:
        char = glob[i]

        if char == "*":
            if i + 1 < length and glob[i + 1] == "*":
                parts.append(".*")
                i += 2
                continue
            parts.append("[^/]*")
        elif char == "?":
            parts.append("[^/]")
        elif char == "[":
            end = glob.find("]", i + 1)
            if end == -1:
                raise ValidationError(f"Missing ']' in ignore glob: {glob}", glob)
            body = glob[i + 1:end]
            negate = body.startswith("!") or body.startswith("^")
            if negate:
                body = body[1:]
            if not body:
                raise ValidationError(f"Empty character class in ignore glob: {glob}", glob)
            body = "".join("\\" + c if c in "\\^[]" else c for c in body)
            if negate:
                parts.append(f"(?![/])[^{body}]")
            else:
                parts.append(f"(?![/])[{body}]")
            i = end
        elif char == "{":
            group_depth += 1
            parts.append("(?:")
        elif char == "}":
            if group_depth == 0:
                raise ValidationError(f"Unbalanced '}}' in ignore glob: {glob}", glob)
            group_depth -= 1
            parts.append(")")
        elif char == "," and group_depth > 0:
            parts.append("|")
        elif char == "\\":
            if i + 1 >= length:
                raise ValidationError(f"Dangling escape in ignore glob: {glob}", glob)
            i += 1
            parts.append(re.escape(glob[i]))
        else:
            parts.append(re.escape(char))
        i += 1

    if group_depth:
        raise ValidationError(f"Missing '}}' in ignore glob: {glob}", glob)

    return "".join(parts)


def normalize_path(path: PathLike) -> str:
    """Normalize a path to the forward-slash, repository-relative form globs see."""
    normalized = str(path).replace("\\", "/")
    while normalized.startswith("./"):
        normalized = normalized[2:]
    return normalized


class IgnoreGlobMatcher:
    """Predicate testing whether a path matches any of a set of globs.

    Instances are immutable once built; build a new matcher when the glob
    set changes.
    """

    def __init__(self, globs: Iterable[str] = ()) -> None:
        """Compile the glob set.

        Args:
            globs: Glob patterns; an empty set matches nothing

        Raises:
            ValidationError: If any glob is malformed
        """
        self._globs: Tuple[str, ...] = tuple(globs)
        self._pattern: Pattern[str] = self._compile(self._globs)

    @staticmethod
    def _compile(globs: Tuple[str, ...]) -> Pattern[str]:
        if not globs:
            return _MATCH_NOTHING
        alternatives = "|".join(f"(?:{glob_to_regex(glob)})" for glob in globs)
        return re.compile(f"(?:{alternatives})", re.DOTALL)

    @property
    def globs(self) -> Tuple[str, ...]:
        """Globs this matcher was compiled from."""
        return self._globs

    @property
    def pattern(self) -> str:
        """Source of the compiled regular expression."""
        return self._pattern.pattern

    def matches(self, path: PathLike) -> bool:
        """Check whether a path matches any glob.

        Args:
            path: Repository-relative file path

        Returns:
            True if at least one glob matches the whole path
        """
        return self._pattern.fullmatch(normalize_path(path)) is not None

    def __call__(self, path: PathLike) -> bool:
        return self.matches(path)

    def __repr__(self) -> str:
        return f"IgnoreGlobMatcher({list(self._globs)!r})"
