"""Term-to-regex converter for tolerant vocabulary matching.

WHY: Term-recognition pipelines match vocabulary terms ("anaemia of
chronic disease") in free text, where the same term shows up capitalized,
pluralized, or with American spelling. Listing every variant by hand
does not scale. This package turns one term into one regular expression
that matches the term and its obvious orthographic variants.

HOW: Five-stage pipeline inside a single left-to-right scan: tokenize the
term, classify each span (stop word, ordinary word, funny word,
separator), escape regex-special characters, apply orthographic rewrites
to ordinary words, and assemble the result. Build a Converter once from a
ConverterConfig, then call convert() as often as needed.

RULES:
- build_converter() is the entry point; there is no global converter
- A Converter is read-only after construction and safe to share
- The CLI, HTTP service, and HTTP client are thin layers over Converter
"""

from term2regex.core.converter import Converter, build_converter
from term2regex.core.errors import ClassificationError, ConfigurationError
from term2regex.core.models import ConverterConfig, WordKind, WordSpan

__version__ = "0.1.0"

__all__ = [
    "ClassificationError",
    "ConfigurationError",
    "Converter",
    "ConverterConfig",
    "WordKind",
    "WordSpan",
    "build_converter",
]
