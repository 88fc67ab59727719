"""Configuration and span dataclasses for the conversion pipeline.

WHY: The classifier, the converter, the CLI, and the HTTP service all
need to agree on what a configuration looks like and what a classified
span is. Plain dataclasses make that contract explicit.

HOW: Three types:
  WordKind: the four span classifications
  WordSpan: one classified slice of the input term
  ConverterConfig: the immutable settings a Converter is built from

RULES:
- ConverterConfig is frozen; use replace() to derive a modified copy
- stop_words is always a frozenset of literal, case-sensitive words
- WordSpan offsets index into the original term, not the output
"""

from __future__ import annotations

import dataclasses
import enum
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable


class WordKind(str, enum.Enum):
    """Classification of a span of the input term.

    RULES:
    - stopword: literal stop word, copied verbatim
    - ordinary: starts with an ASCII letter, escaped and transformed
    - funny: starts with anything else, escaped only
    - separator: a run matched by the split pattern, replaced
    """

    STOPWORD = "stopword"
    ORDINARY = "ordinary"
    FUNNY = "funny"
    SEPARATOR = "separator"


@dataclass(frozen=True)
class WordSpan:
    """One classified span of the input term.

    Attributes:
        text: The exact substring of the term.
        start: Offset of the first character in the term.
        kind: How the classifier decided to treat the span.
    """

    text: str
    start: int
    kind: WordKind

    @property
    def end(self) -> int:
        return self.start + len(self.text)


@dataclass(frozen=True)
class ConverterConfig:
    """Settings a Converter is built from.

    WHY: The separator syntax, the pattern emitted between words, the
    trailing context, and the stop word list differ between vocabularies
    and target regex engines. Keeping them in one immutable value lets a
    converter be built once at startup and shared.

    RULES:
    - word_split_pattern: Python regex matching one separator run in the
      input; must not match the empty string
    - word_sep_pattern: sub-pattern emitted between words, not escaped
    - trailing_context_pattern: appended once at the end; "" omits it
    - stop_words: literal words copied unchanged, matched case-sensitively
    - dialect: name of the target regex dialect (see core.escaper.DIALECTS)
    """

    word_split_pattern: str
    word_sep_pattern: str
    trailing_context_pattern: str = ""
    stop_words: FrozenSet[str] = field(default_factory=frozenset)
    dialect: str = "python"

    def __post_init__(self) -> None:
        # Accept any iterable of words, store a frozenset
        if not isinstance(self.stop_words, frozenset):
            object.__setattr__(self, "stop_words", frozenset(self.stop_words))
        if self.trailing_context_pattern is None:
            object.__setattr__(self, "trailing_context_pattern", "")

    def replace(self, **changes: Any) -> ConverterConfig:
        """Return a copy with the given fields replaced."""
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        """Plain-dict form, with stop words sorted for stable output."""
        return {
            "word_split_pattern": self.word_split_pattern,
            "word_sep_pattern": self.word_sep_pattern,
            "trailing_context_pattern": self.trailing_context_pattern,
            "stop_words": sorted(self.stop_words),
            "dialect": self.dialect,
        }


def parse_stop_words(words: Iterable[str] | str) -> FrozenSet[str]:
    """Normalize a stop word list given as an iterable or a comma-separated string.

    RULES:
    - Whitespace around each word is stripped
    - Empty entries are dropped
    """
    if isinstance(words, str):
        words = words.split(",")
    return frozenset(w.strip() for w in words if w and w.strip())
