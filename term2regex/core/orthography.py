"""Orthographic rewrites applied to escaped ordinary words.

WHY: The same vocabulary term appears in text as "Anaemia", "anemia",
"anaemias". Three cheap rewrites cover most of that variation without
linguistic analysis: British/American "ae", sentence-initial
capitalization, and simple English plurals.

HOW: transform_word() runs the three rules in a fixed order on text that
has already been escaped:
  1. substitute_digraphs: "Xae" becomes "Xa?e"
  2. fold_first_letter: first letter becomes "[Aa]" if the word has lowercase
  3. pluralize: "y" becomes "(y|ies)", other letters get "s?"

RULES:
- Digraph substitution needs one character of left context
- Case folding only toggles ASCII letters
- Pluralization is decided on the length after rule 1, before rule 2
- Words ending in s/S or a non-letter get no plural suffix
"""

from __future__ import annotations

import re

# Any single character followed by "ae"; matches do not overlap.
_DIGRAPH_RE = re.compile(r"(.)ae", re.DOTALL)
_LOWERCASE_RE = re.compile(r"[a-z]")

_ASCII_LETTERS = frozenset("ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz")


def substitute_digraphs(text: str) -> str:
    """Replace every "ae" that has a preceding character with "a?e".

    A leading "ae" is left alone; "aeae" becomes "aea?e".
    """
    return _DIGRAPH_RE.sub(r"\1a?e", text)


def fold_first_letter(text: str) -> str:
    """Let the first letter match both cases.

    RULES:
    - Only applies when text contains at least one ASCII lowercase letter
    - Only applies when the first character is an ASCII letter
    - "anemia" becomes "[Aa]nemia"; "DNA" stays "DNA"
    """
    if not text or text[0] not in _ASCII_LETTERS:
        return text
    if not _LOWERCASE_RE.search(text):
        return text
    first = text[0]
    return "[{}{}]{}".format(first.upper(), first.lower(), text[1:])


def pluralize(text: str, base_length: int | None = None) -> str:
    """Append an optional plural ending.

    Args:
        text: The word so far (may already carry a case class).
        base_length: Length used for the "longer than one character"
            check; defaults to len(text).

    RULES:
    - Nothing happens for words of length <= 1
    - Trailing lowercase "y" becomes "(y|ies)"
    - Any other trailing letter except s/S gets "s?"
    """
    if base_length is None:
        base_length = len(text)
    if base_length <= 1:
        return text

    last = text[-1]
    if last == "y":
        return text[:-1] + "(y|ies)"
    if last not in ("s", "S") and last.isalpha():
        return text + "s?"
    return text


def transform_word(escaped: str) -> str:
    """Apply all three rewrites to an escaped ordinary word."""
    text = substitute_digraphs(escaped)
    length = len(text)
    text = fold_first_letter(text)
    return pluralize(text, base_length=length)
