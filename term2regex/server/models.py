"""Pydantic request/response models for the HTTP API.

WHY: The FastAPI endpoints need typed schemas for request validation,
response serialization, and automatic OpenAPI documentation.

HOW: One model per request or response body. Configuration overrides
mirror config_schema.json; the endpoint still validates them through
config_from_dict so the HTTP service and config files share one set of
rules.

RULES:
- All models use Field(description=...) for OpenAPI documentation
- Override fields are all optional; unset fields keep server defaults
- Python 3.9+ compatible (no PEP 604 unions, use Optional from typing)
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class ConfigOverrides(BaseModel):
    """Per-request changes to the server's default configuration."""

    word_split_pattern: Optional[str] = Field(
        default=None,
        description="Regex matching a separator run in input terms.",
    )
    word_sep_pattern: Optional[str] = Field(
        default=None,
        description="Sub-pattern emitted between words.",
    )
    trailing_context_pattern: Optional[str] = Field(
        default=None,
        description="Sub-pattern appended once at the end; empty string omits it.",
    )
    stop_words: Optional[List[str]] = Field(
        default=None,
        description="Literal words copied unchanged (replaces the defaults).",
    )
    dialect: Optional[str] = Field(
        default=None,
        description="Target regex dialect: python, posix, or monq.",
    )


class ConversionRequest(BaseModel):
    """Terms to convert, with optional configuration overrides."""

    terms: List[str] = Field(description="Multi-word terms to convert.")
    config: Optional[ConfigOverrides] = Field(
        default=None,
        description="Optional overrides of the default configuration.",
    )

    model_config = {"json_schema_extra": {
        "examples": [
            {
                "terms": ["anaemia", "of the anemia"],
                "config": {"trailing_context_pattern": ""},
            }
        ]
    }}


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class ConversionResult(BaseModel):
    """One converted term."""

    term: str = Field(description="The input term.")
    regex: str = Field(description="The generated regular expression.")


class ConfigResponse(BaseModel):
    """Effective converter configuration."""

    word_split_pattern: str = Field(description="Separator regex for input terms.")
    word_sep_pattern: str = Field(description="Sub-pattern emitted between words.")
    trailing_context_pattern: str = Field(description="Sub-pattern appended at the end.")
    stop_words: List[str] = Field(description="Stop words, sorted.")
    dialect: str = Field(description="Target regex dialect.")


class ConversionResponse(BaseModel):
    """Results of a conversion request, in input order."""

    results: List[ConversionResult] = Field(description="One result per input term.")
    config: ConfigResponse = Field(description="Configuration used for this request.")

    model_config = {"json_schema_extra": {
        "examples": [
            {
                "results": [
                    {"term": "anaemia", "regex": "[Aa]na?emias?"},
                ],
                "config": {
                    "word_split_pattern": "[ \t\\-_]+",
                    "word_sep_pattern": "[ \\-_]*",
                    "trailing_context_pattern": "",
                    "stop_words": ["and", "of", "the"],
                    "dialect": "python",
                },
            }
        ]
    }}


class ErrorResponse(BaseModel):
    """Standard error response body.

    RULES:
    - detail is always a human-readable error message
    """

    detail: str = Field(description="Human-readable error description.")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(description="Service health status.", json_schema_extra={"example": "ok"})
    version: str = Field(description="API version string.", json_schema_extra={"example": "0.1.0"})
