"""REST API server exposing the cry analysis engine over HTTP.

Provides ``create_app()`` which returns a FastAPI application with
these endpoints:

- ``GET /health`` -- liveness check
- ``POST /analyze`` -- upload a recording, returns the classification
- ``GET /history`` -- past classifications, most recent first
- ``DELETE /history`` -- clear past classifications

Usage::

    from cry_translator.integrations.server import create_app

    app = create_app(history=InMemoryHistory())

    # Run with:  uvicorn cry_translator.integrations.server:app
"""

import asyncio
import logging
from typing import Any

logger = logging.getLogger(__name__)

API_VERSION = "0.1.0"

# Module-level app instance for ``uvicorn cry_translator.integrations.server:app``
app: Any = None


def create_app(
    engine: Any = None,
    **engine_kwargs: Any,
) -> Any:
    """Create a FastAPI application wrapping a cry analysis engine.

    Parameters
    ----------
    engine:
        Pre-configured ``CryAnalysisEngine`` instance.  If ``None``, a
        new one is created from ``engine_kwargs``.
    **engine_kwargs:
        Keyword arguments forwarded to ``CryAnalysisEngine()`` if no
        ``engine`` is provided.

    Returns
    -------
    FastAPI
        A FastAPI application instance.
    """
    try:
        from fastapi import FastAPI, File, UploadFile
        from pydantic import BaseModel
    except ImportError:
        raise ImportError(
            "fastapi and pydantic are required for the REST API server. "
            "Install them with: pip install cry-translator[server]"
        )

    if engine is None:
        from cry_translator.engine import CryAnalysisEngine
        engine = CryAnalysisEngine(**engine_kwargs)

    # -- Response models --

    class AnalyzeResponse(BaseModel):
        label: str
        confidence: float
        description: str
        is_real_ai: bool
        rule: str | None = None

    class HistoryItem(AnalyzeResponse):
        timestamp: str

    class HealthResponse(BaseModel):
        status: str
        version: str

    # -- FastAPI app --

    api = FastAPI(
        title="Cry Translator API",
        description="On-device baby cry analysis with feeding and sleep context.",
        version=API_VERSION,
    )

    @api.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse(status="ok", version=API_VERSION)

    @api.post("/analyze", response_model=AnalyzeResponse)
    async def analyze(audio: UploadFile = File(...)) -> AnalyzeResponse:
        """Classify an uploaded WAV recording.

        Never fails on bad audio: undecodable uploads come back as a
        low-confidence result rather than an error.
        """
        contents = await audio.read()
        result = await engine.analyze(contents)
        return AnalyzeResponse(**result.to_dict())

    @api.get("/history", response_model=list[HistoryItem])
    async def history() -> list[HistoryItem]:
        """Return past classifications, most recent first."""
        entries = await asyncio.to_thread(engine.get_history)
        return [HistoryItem(**entry.to_dict()) for entry in entries]

    @api.delete("/history", status_code=204)
    async def clear_history() -> None:
        await asyncio.to_thread(engine.clear_history)
        logger.info("Cry history cleared via API")

    # Store reference at module level for uvicorn
    global app
    app = api

    return api
