"""HTTP service exposing the converter (FastAPI)."""
