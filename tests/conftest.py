"""Shared test fixtures for the term2regex test suite.

WHY: Most tests need a converter built from the default patterns, some
with the trailing context switched off so expected regexes stay short.
Centralizing them here keeps every module on the same configuration.

HOW: An autouse fixture strips TERM2REGEX_* variables from the
environment (a developer's .env must not change test expectations).
Converter fixtures are built from config.default_config().

RULES:
- SEP and TRAIL mirror the default constants exactly
- Tests never depend on a .env file
"""

import pytest

from term2regex.config import RE_SEP_WORD, RE_TRAIL_CONTEXT, default_config
from term2regex.core.converter import build_converter

SEP = RE_SEP_WORD
TRAIL = RE_TRAIL_CONTEXT

_ENV_VARS = (
    "TERM2REGEX_SPLIT_WORD",
    "TERM2REGEX_SEP_WORD",
    "TERM2REGEX_TRAIL_CONTEXT",
    "TERM2REGEX_STOP_WORDS",
    "TERM2REGEX_DIALECT",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Remove converter overrides from the environment."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def converter():
    """Converter with all default settings, trailing context included."""
    return build_converter(default_config())


@pytest.fixture
def bare_converter():
    """Default converter without trailing context."""
    return build_converter(default_config().replace(trailing_context_pattern=""))
