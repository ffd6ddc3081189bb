"""Minimal glob matching for relation file patterns.

Translation rules:
- ``**`` matches any sequence of characters, including ``/``.
- ``*`` matches any sequence of characters except ``/``.
- ``?`` matches exactly one character.

Literal characters are not regex-escaped, so ``.`` in a pattern matches
any character. The expression is matched from the start of the path but
is not anchored at the end: ``schema.graphql`` also matches
``schema.graphql.bak``.

Start anchoring is a trade-off against a plain regex search. A search
would let ``schema.graphql`` match ``src/schema.graphql``, but it would
also let ``*.graphql`` match nested paths, so the single-star rule could
not hold. Patterns meant to match anywhere need a leading ``**/``.
"""

import re
from functools import lru_cache

# Placeholder that cannot appear in a glob, used so the single-star rule
# does not rewrite the expansion of a double star.
_DOUBLE_STAR = "\x00"


def glob_to_regex(pattern: str) -> str:
    """Translate a glob pattern into a regular expression string."""
    return (
        pattern.replace("**", _DOUBLE_STAR)
        .replace("*", "[^/]*")
        .replace("?", ".")
        .replace(_DOUBLE_STAR, ".*")
    )


@lru_cache(maxsize=256)
def _compile(pattern: str) -> re.Pattern[str]:
    return re.compile(glob_to_regex(pattern))


def matches(file_path: str, pattern: str) -> bool:
    """
    Check whether a repository-relative file path matches a glob pattern.

    Args:
        file_path: Path relative to the repository root, ``/``-separated.
        pattern: Glob pattern.

    Returns:
        True if the translated pattern matches at the start of the path.
    """
    try:
        regex = _compile(pattern)
    except re.error:
        return False
    return regex.match(file_path) is not None


def matches_any(file_path: str, patterns: list[str] | None) -> bool:
    """Check a path against several patterns; ``None`` or empty never matches."""
    if not patterns:
        return False
    return any(matches(file_path, p) for p in patterns)
