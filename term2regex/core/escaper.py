"""Per-dialect escaping of regex-special characters.

WHY: Term text is literal. A term like "C++ compiler" or "IL-1(beta)"
contains characters that mean something in a regular expression; left
alone they would change what the generated pattern matches or make it
invalid.

HOW: Each dialect is a set of special characters. escape() walks the
word and prefixes every special character with a backslash. Everything
else, including non-ASCII, is copied unchanged.

RULES:
- escape() is total: defined for every character of every string
- Words without special characters come back unchanged
- Unknown dialect names raise ConfigurationError
"""

from __future__ import annotations

from typing import Dict, FrozenSet

from term2regex.core.errors import ConfigurationError

_BASE_SPECIALS = frozenset(".^$*+?{}[]\\|()")

# Special characters per target dialect.
DIALECTS: Dict[str, FrozenSet[str]] = {
    "python": _BASE_SPECIALS,
    "posix": _BASE_SPECIALS,
    # monq/jfa additionally treats ! ~ @ as operators
    "monq": _BASE_SPECIALS | frozenset("!~@"),
}


def specials_for(dialect: str) -> FrozenSet[str]:
    """Return the special character set of a dialect.

    Raises:
        ConfigurationError: If the dialect is not registered in DIALECTS.
    """
    try:
        return DIALECTS[dialect]
    except KeyError:
        raise ConfigurationError(
            "Unknown regex dialect '{}'. Available: {}".format(
                dialect, ", ".join(sorted(DIALECTS))
            )
        ) from None


def escape_char(ch: str, dialect: str = "python") -> str:
    """Escape a single character for the given dialect."""
    if ch in specials_for(dialect):
        return "\\" + ch
    return ch


def escape(word: str, dialect: str = "python") -> str:
    """Escape every regex-special character in word.

    Args:
        word: Literal text to escape.
        dialect: Target regex dialect name.

    Returns:
        The escaped text; identical to word when nothing needed escaping.
    """
    specials = specials_for(dialect)
    return "".join("\\" + ch if ch in specials else ch for ch in word)
