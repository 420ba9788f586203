"""FastAPI application entrypoint for archanalyzer service mode."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Optional

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..errors import AnalysisError
from ..host import RecordingHost
from ..models import AnalysisResult
from ..orchestrator import Orchestrator


class AnalyzeRequest(BaseModel):
    path: str
    provider: Optional[str] = None
    api_key: Optional[str] = None


class AnalyzeResponse(BaseModel):
    status: str
    report: str


class HealthResponse(BaseModel):
    status: str


def _default_orchestrator() -> Orchestrator:
    return Orchestrator()


def create_app(
    orchestrator_factory: Callable[[], Orchestrator] = _default_orchestrator,
) -> FastAPI:
    """Create the FastAPI application exposing the analysis pipeline."""

    app = FastAPI(title="Architecture Analyzer Service", version="1.0.0")

    async def get_orchestrator() -> Orchestrator:
        # Fresh per request; runs share no state.
        return orchestrator_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/analyze", response_model=AnalyzeResponse)
    async def analyze_project(
        payload: AnalyzeRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> AnalyzeResponse:
        host = RecordingHost()

        def _run() -> Optional[AnalysisResult]:
            return orchestrator.run_path(
                payload.path,
                host,
                api_key=payload.api_key,
                provider=payload.provider,
            )

        loop = asyncio.get_running_loop()
        result = await loop.run_in_executor(None, _run)
        if result is None:
            raise AnalysisError("Analysis was cancelled")
        if not result.ok:
            raise result.error or AnalysisError(host.error or "Analysis failed")
        return AnalyzeResponse(status="ok", report=result.text or "")

    @app.exception_handler(FileNotFoundError)
    async def file_not_found_handler(_: Any, exc: FileNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(AnalysisError)
    async def analysis_error_handler(_: Any, exc: AnalysisError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc), "kind": exc.kind})

    return app


def run_service(host: str = "127.0.0.1", port: int = 8000) -> None:  # pragma: no cover - integration path
    uvicorn.run(create_app(), host=host, port=port)
