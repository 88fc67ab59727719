"""Exception types raised by the conversion core.

WHY: Callers need to tell a broken configuration (fix it, then retry)
apart from an internal inconsistency in the classifier (a bug).

RULES:
- ConfigurationError is raised at construction time, never from convert()
- ClassificationError is raised from convert() and carries the offset
"""

from __future__ import annotations


class ConfigurationError(ValueError):
    """Raised when a converter configuration is invalid.

    WHY: An invalid separator or trailing-context pattern, an unknown
    dialect, or a malformed config file means no converter can be built.
    The caller must fix the configuration; nothing is retried.

    RULES:
    - Message names the offending field and the underlying problem
    """


class ClassificationError(RuntimeError):
    """Raised when no classification rule matches at a scan offset.

    WHY: The rule set covers every character (separator or not), so this
    cannot happen with a valid configuration. If it does, silently
    skipping characters would produce a regex that rejects the term, so
    the conversion aborts instead.
    """

    def __init__(self, term: str, offset: int) -> None:
        self.term = term
        self.offset = offset
        super().__init__(
            "No classification rule matches {!r} at offset {}".format(term, offset)
        )
