"""Converter construction and output assembly.

WHY: This is the single entry point of the core. It validates a
configuration once, wires the classifier, escaper, and orthographic
transformer together, and renders terms into regular expressions.

HOW: build_converter() checks every pattern and the dialect, then
returns a Converter. Converter.convert() walks the classified spans,
renders each one into a per-call list of parts (stop word copied,
separator replaced, ordinary word escaped and transformed, funny word
escaped), appends the trailing context, and joins.

RULES:
- All configuration errors surface in build_converter(), never in convert()
- convert() is total over strings; "" yields the trailing context alone
- Each call owns its buffer, so one Converter serves any number of threads
- Output order mirrors span order exactly
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, List, Optional, Pattern

from term2regex.core.classifier import Classifier
from term2regex.core.errors import ConfigurationError
from term2regex.core.escaper import escape, specials_for
from term2regex.core.models import ConverterConfig, WordKind, WordSpan
from term2regex.core.orthography import transform_word

logger = logging.getLogger(__name__)


class Converter:
    """Turns multi-word terms into variant-tolerant regular expressions.

    WHY: Term-recognition pipelines need one pattern per vocabulary term
    that still matches capitalized, pluralized, and "ae"/"e" spellings.

    HOW: Holds an immutable config, the compiled split pattern, and a
    Classifier. Use build_converter() rather than calling this directly
    so the configuration gets validated.

    RULES:
    - Read-only after construction
    - convert() allocates a fresh buffer on every call
    """

    def __init__(self, config: ConverterConfig, split_re: Pattern[str]) -> None:
        self.config = config
        self._classifier = Classifier(split_re, config.stop_words)

    def spans(self, term: str) -> List[WordSpan]:
        """Return the classified spans of term in scan order."""
        return list(self._classifier.spans(term))

    def render(self, span: WordSpan) -> str:
        """Render one classified span into its output sub-pattern."""
        if span.kind is WordKind.SEPARATOR:
            return self.config.word_sep_pattern
        if span.kind is WordKind.STOPWORD:
            return span.text
        escaped = escape(span.text, self.config.dialect)
        if span.kind is WordKind.ORDINARY:
            return transform_word(escaped)
        return escaped

    def convert(self, term: str) -> str:
        """Convert a term into a regular expression.

        Args:
            term: The multi-word term, e.g. "anaemia of chronic disease".

        Returns:
            The regex string, with the trailing context appended once.

        Raises:
            ClassificationError: If the classifier finds no rule at some
                offset (an internal invariant violation).
        """
        parts: List[str] = []
        for span in self._classifier.spans(term):
            parts.append(self.render(span))
        if self.config.trailing_context_pattern:
            parts.append(self.config.trailing_context_pattern)
        return "".join(parts)

    def convert_many(self, terms: Iterable[str]) -> List[str]:
        """Convert each term, preserving order."""
        return [self.convert(term) for term in terms]

    def compile(self, term: str, flags: int = 0) -> Pattern[str]:
        """Convert term and compile the result with Python's re module.

        Raises:
            ConfigurationError: If the converter targets another dialect.
        """
        if self.config.dialect != "python":
            raise ConfigurationError(
                "compile() needs the 'python' dialect, converter uses '{}'".format(
                    self.config.dialect
                )
            )
        return re.compile(self.convert(term), flags)


def _compile_pattern(name: str, pattern: str) -> Pattern[str]:
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise ConfigurationError(
            "Invalid {} {!r}: {}".format(name, pattern, exc)
        ) from exc


def validate_config(config: ConverterConfig) -> Pattern[str]:
    """Check a configuration and return the compiled split pattern.

    RULES:
    - word_split_pattern must compile and must not match ""
    - word_sep_pattern and trailing_context_pattern must compile when the
      dialect is "python"; other dialects cannot be checked here
    - stop words must be strings with at least one non-space character
    - the dialect must be registered

    Raises:
        ConfigurationError: On the first problem found.
    """
    specials_for(config.dialect)

    if not isinstance(config.word_split_pattern, str) or not config.word_split_pattern:
        raise ConfigurationError("word_split_pattern must be a non-empty string")
    split_re = _compile_pattern("word_split_pattern", config.word_split_pattern)
    if split_re.match("") is not None:
        raise ConfigurationError(
            "word_split_pattern {!r} matches the empty string".format(
                config.word_split_pattern
            )
        )

    if not isinstance(config.word_sep_pattern, str):
        raise ConfigurationError("word_sep_pattern must be a string")
    if not isinstance(config.trailing_context_pattern, str):
        raise ConfigurationError("trailing_context_pattern must be a string")
    if config.dialect == "python":
        _compile_pattern("word_sep_pattern", config.word_sep_pattern)
        _compile_pattern("trailing_context_pattern", config.trailing_context_pattern)

    for word in config.stop_words:
        if not isinstance(word, str) or not word.strip():
            raise ConfigurationError(
                "stop words must be non-blank strings, got {!r}".format(word)
            )

    return split_re


def build_converter(config: Optional[ConverterConfig] = None) -> Converter:
    """Validate a configuration and build a Converter.

    Args:
        config: The settings to use; defaults to config.default_config().

    Raises:
        ConfigurationError: If the configuration is invalid.
    """
    if config is None:
        from term2regex.config import default_config
        config = default_config()

    split_re = validate_config(config)
    logger.debug(
        "Built converter: split=%r sep=%r trail=%r dialect=%s stop_words=%d",
        config.word_split_pattern,
        config.word_sep_pattern,
        config.trailing_context_pattern,
        config.dialect,
        len(config.stop_words),
    )
    return Converter(config, split_re)
