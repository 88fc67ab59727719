"""Default converter settings, .env loading, and JSON config files.

WHY: Centralizes every configurable value so it is easy to find, update,
and override. The separator syntax, the stop word list, and the trailing
context are plain data, not buried in the conversion logic.

HOW: python-dotenv loads the .env file on import. Defaults are
module-level constants; default_config() combines them with environment
overrides. load_config_file() reads a JSON file, validates it against
config_schema.json with jsonschema, and layers it over the defaults.

RULES:
- RE_SPLIT_WORD: separators in input terms (space, tab, hyphen, underscore)
- RE_SEP_WORD: emitted between words (zero or more space, hyphen, underscore)
- RE_TRAIL_CONTEXT: one character that is not an ASCII letter or digit
- Environment overrides use the TERM2REGEX_ prefix
- Schema violations and unreadable JSON raise ConfigurationError
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, FrozenSet

import jsonschema
from dotenv import load_dotenv

from term2regex.core.errors import ConfigurationError
from term2regex.core.models import ConverterConfig, parse_stop_words

# Load .env from the project root (where the script is run from)
load_dotenv()

# ---------------------------------------------------------------------------
# Pattern defaults
# ---------------------------------------------------------------------------

RE_SPLIT_WORD = "[ \t\\-_]+"
"""Separator run in an input term. Note that newline is NOT included."""

RE_SEP_WORD = "[ \\-_]*"
"""Sub-pattern placed between the regexes generated for individual words."""

RE_TRAIL_CONTEXT = "[^A-Za-z0-9]"
"""Appended once to every generated regex."""

DEFAULT_DIALECT = "python"

# ---------------------------------------------------------------------------
# Stop words: copied unchanged, never escaped or pluralized
# ---------------------------------------------------------------------------

STOP_WORDS: FrozenSet[str] = frozenset({
    "ii", "iii", "iv", "vi",
    "it", "up", "of", "and", "the", "to", "or",
    "with", "due", "in", "other", "as", "by", "without",
})

SCHEMA_PATH = Path(__file__).resolve().parent / "config_schema.json"


def default_config() -> ConverterConfig:
    """Build the default configuration, honouring environment overrides.

    RULES:
    - TERM2REGEX_SPLIT_WORD overrides RE_SPLIT_WORD
    - TERM2REGEX_SEP_WORD overrides RE_SEP_WORD
    - TERM2REGEX_TRAIL_CONTEXT overrides RE_TRAIL_CONTEXT ("" disables it)
    - TERM2REGEX_STOP_WORDS is a comma-separated replacement list
    - TERM2REGEX_DIALECT overrides DEFAULT_DIALECT
    """
    stop_words = STOP_WORDS
    env_stop_words = os.getenv("TERM2REGEX_STOP_WORDS")
    if env_stop_words is not None:
        stop_words = parse_stop_words(env_stop_words)

    return ConverterConfig(
        word_split_pattern=os.getenv("TERM2REGEX_SPLIT_WORD", RE_SPLIT_WORD),
        word_sep_pattern=os.getenv("TERM2REGEX_SEP_WORD", RE_SEP_WORD),
        trailing_context_pattern=os.getenv("TERM2REGEX_TRAIL_CONTEXT", RE_TRAIL_CONTEXT),
        stop_words=stop_words,
        dialect=os.getenv("TERM2REGEX_DIALECT", DEFAULT_DIALECT),
    )


def load_schema() -> Dict[str, Any]:
    """Load the JSON Schema for configuration files."""
    with open(SCHEMA_PATH, "r", encoding="utf-8") as f:
        return json.load(f)


def config_from_dict(
    data: Dict[str, Any],
    base: ConverterConfig | None = None,
) -> ConverterConfig:
    """Validate a dict of overrides and layer it over base.

    Args:
        data: Keys as in config_schema.json; all optional.
        base: Configuration to start from; defaults to default_config().

    Raises:
        ConfigurationError: If data does not satisfy the schema.
    """
    try:
        jsonschema.validate(instance=data, schema=load_schema())
    except jsonschema.ValidationError as exc:
        raise ConfigurationError(
            "Invalid configuration: {}".format(exc.message)
        ) from exc

    if base is None:
        base = default_config()

    changes = dict(data)
    if "stop_words" in changes:
        changes["stop_words"] = parse_stop_words(changes["stop_words"])
    return base.replace(**changes)


def load_config_file(path: str | Path) -> ConverterConfig:
    """Load a JSON configuration file over the defaults.

    Raises:
        ConfigurationError: If the file is not valid JSON or violates the schema.
        FileNotFoundError: If the file does not exist.
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigurationError(
            "Config file {} is not valid JSON: {}".format(path, exc)
        ) from exc
    return config_from_dict(data)
