"""HTTP client package for a remote term2regex service.

WHY: Pipelines that run the converter as a shared service need a typed
way to call it instead of hand-building requests.

RULES:
- All HTTP calls go through ConverterClient (no direct httpx usage elsewhere)
"""

from term2regex.api.client import ConverterAPIError, ConverterClient

__all__ = ["ConverterAPIError", "ConverterClient"]
