"""FastAPI application exposing term conversion over HTTP.

WHY: Term-recognition pipelines written in other languages, or running
on other hosts, need the converter without embedding Python. FastAPI
gives request validation and OpenAPI docs for free.

HOW: The default Converter is built once in the app lifespan and kept on
app.state. POST /conversions converts a batch of terms, either with the
default converter or with a throwaway converter built from per-request
overrides. GET /config, /dialects and /health are read-only.

RULES:
- Invalid overrides return 422 with an ErrorResponse body
- The shared converter is never mutated; overrides build a new one
- Every endpoint has an OpenAPI summary and description
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import List

from fastapi import FastAPI, HTTPException

from term2regex import __version__
from term2regex.config import config_from_dict
from term2regex.core.converter import Converter, build_converter
from term2regex.core.errors import ClassificationError, ConfigurationError
from term2regex.core.escaper import DIALECTS
from term2regex.server.models import (
    ConfigResponse,
    ConversionRequest,
    ConversionResponse,
    ConversionResult,
    ErrorResponse,
    HealthResponse,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the default converter on startup."""
    app.state.converter = build_converter()
    logger.info("Default converter ready (dialect=%s)", app.state.converter.config.dialect)
    yield


app = FastAPI(
    lifespan=lifespan,
    title="term2regex API",
    description=(
        "Convert multi-word vocabulary terms into regular expressions that "
        "also match capitalized, pluralized, and ae/e spelling variants."
    ),
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _default_converter() -> Converter:
    """Return the shared converter, building it if the lifespan did not run."""
    converter = getattr(app.state, "converter", None)
    if converter is None:
        converter = build_converter()
        app.state.converter = converter
    return converter


def _config_response(converter: Converter) -> ConfigResponse:
    return ConfigResponse(**converter.config.to_dict())


# ---------------------------------------------------------------------------
# Endpoints: Conversions
# ---------------------------------------------------------------------------


@app.post(
    "/conversions",
    response_model=ConversionResponse,
    tags=["conversions"],
    summary="Convert terms to regular expressions",
    description=(
        "Converts each term into a regular expression. Optional config "
        "overrides apply to this request only."
    ),
    responses={
        422: {"model": ErrorResponse, "description": "Invalid configuration overrides"},
        500: {"model": ErrorResponse, "description": "Internal classification failure"},
    },
)
async def create_conversion(request: ConversionRequest) -> ConversionResponse:
    converter = _default_converter()

    if request.config is not None:
        overrides = request.config.model_dump(exclude_none=True)
        if overrides:
            try:
                converter = build_converter(
                    config_from_dict(overrides, base=converter.config)
                )
            except ConfigurationError as exc:
                raise HTTPException(status_code=422, detail=str(exc))

    try:
        results = [
            ConversionResult(term=term, regex=converter.convert(term))
            for term in request.terms
        ]
    except ClassificationError as exc:
        logger.exception("Classification failed for %r", exc.term)
        raise HTTPException(status_code=500, detail=str(exc))

    return ConversionResponse(results=results, config=_config_response(converter))


# ---------------------------------------------------------------------------
# Endpoints: Configuration
# ---------------------------------------------------------------------------


@app.get(
    "/config",
    response_model=ConfigResponse,
    tags=["config"],
    summary="Show the default configuration",
    description="Returns the configuration of the shared default converter.",
)
async def get_config() -> ConfigResponse:
    return _config_response(_default_converter())


@app.get(
    "/dialects",
    response_model=List[str],
    tags=["config"],
    summary="List supported regex dialects",
    description="Dialect names accepted in the 'dialect' configuration field.",
)
async def list_dialects() -> List[str]:
    return sorted(DIALECTS)


# ---------------------------------------------------------------------------
# Endpoints: Health
# ---------------------------------------------------------------------------


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["health"],
    summary="Health check",
    description="Liveness and readiness check for load balancers and orchestrators.",
)
async def health_check() -> HealthResponse:
    return HealthResponse(status="ok", version=__version__)


def run_api():
    """Entry point for the term2regex-api console script."""
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
