"""Tokenizer and classifier with explicit priority resolution.

WHY: A term must be cut into words and separators, and each word needs a
kind before it can be rendered: stop words are copied, ordinary words are
transformed, funny words (digits, punctuation first) are only escaped.
Several rules can claim the same span ("of" is both a stop word and an
ordinary word), so the winner has to be decided by a fixed policy.

HOW: Four rules are tried at every scan offset. Each reports how many
characters it would consume. The longest claim wins; claims of equal
length are ranked by precedence. The scan then jumps past the winning
span and starts over.

RULES:
- Precedence on ties: stopword > ordinary > funny > separator
- A word extends up to the next separator match or the end of the term
- Stop words are literal and case-sensitive; a stop word shorter than the
  word it starts loses to the ordinary or funny claim
- The split pattern must never match the empty string
- No winning rule at an offset raises ClassificationError
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional, Pattern, Tuple

from term2regex.core.errors import ClassificationError
from term2regex.core.models import WordKind, WordSpan

_ASCII_LETTERS = frozenset("ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz")

# (term, offset, word_end) -> length of the claimed span, or None
Matcher = Callable[[str, int, int], Optional[int]]


@dataclass(frozen=True)
class Rule:
    """A classification rule.

    Attributes:
        kind: The kind assigned to spans this rule wins.
        precedence: Tie-break rank; lower wins.
        match: Returns the claimed length at an offset, or None.
    """

    kind: WordKind
    precedence: int
    match: Matcher


class Classifier:
    """Splits a term into classified spans.

    WHY: Keeps the priority policy in one place so the converter only
    has to render spans.

    HOW: Built from a compiled split pattern and a stop word set. The
    rule list is fixed at construction; spans() is a generator over the
    term and holds no state between calls.
    """

    def __init__(self, split_re: Pattern[str], stop_words: frozenset) -> None:
        self._split_re = split_re
        # Longest first so a shared prefix never hides a longer stop word
        self._stop_words: Tuple[str, ...] = tuple(
            sorted(stop_words, key=lambda w: (-len(w), w))
        )
        self.rules: List[Rule] = [
            Rule(WordKind.STOPWORD, 1, self._match_stopword),
            Rule(WordKind.ORDINARY, 2, self._match_ordinary),
            Rule(WordKind.FUNNY, 3, self._match_funny),
            Rule(WordKind.SEPARATOR, 4, self._match_separator),
        ]

    # ------------------------------------------------------------------
    # Rule matchers
    # ------------------------------------------------------------------

    def _match_stopword(self, term: str, pos: int, word_end: int) -> Optional[int]:
        for word in self._stop_words:
            if term.startswith(word, pos):
                return len(word)
        return None

    def _match_ordinary(self, term: str, pos: int, word_end: int) -> Optional[int]:
        if word_end > pos and term[pos] in _ASCII_LETTERS:
            return word_end - pos
        return None

    def _match_funny(self, term: str, pos: int, word_end: int) -> Optional[int]:
        if word_end > pos and term[pos] not in _ASCII_LETTERS:
            return word_end - pos
        return None

    def _match_separator(self, term: str, pos: int, word_end: int) -> Optional[int]:
        m = self._split_re.match(term, pos)
        if m and m.end() > pos:
            return m.end() - pos
        return None

    # ------------------------------------------------------------------
    # Scanning
    # ------------------------------------------------------------------

    def word_end(self, term: str, pos: int) -> int:
        """Offset where a word starting at pos ends.

        RULES:
        - The word stops before the first non-empty separator match
        - A separator match at pos itself yields pos (no word here)
        """
        for m in self._split_re.finditer(term, pos):
            if m.end() > m.start():
                return m.start()
        return len(term)

    def classify_at(self, term: str, pos: int) -> WordSpan:
        """Decide the span starting at pos.

        Raises:
            ClassificationError: If no rule claims any characters at pos.
        """
        end = self.word_end(term, pos)
        best: Optional[Tuple[int, int, WordKind]] = None
        for rule in self.rules:
            length = rule.match(term, pos, end)
            if not length:
                continue
            # Longer wins; equal length falls back to precedence
            if best is None or length > best[0] or (
                length == best[0] and rule.precedence < best[1]
            ):
                best = (length, rule.precedence, rule.kind)

        if best is None:
            raise ClassificationError(term, pos)

        length, _, kind = best
        return WordSpan(text=term[pos:pos + length], start=pos, kind=kind)

    def spans(self, term: str) -> Iterator[WordSpan]:
        """Yield the classified spans of term in scan order."""
        pos = 0
        while pos < len(term):
            span = self.classify_at(term, pos)
            yield span
            pos = span.end

