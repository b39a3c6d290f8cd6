"""
Analysis Service -- HTTP entry point for the GaiaShield frontend.

Responsibilities:
1. POST /api/analyze/climate_guard   -- climate risk analysis
2. POST /api/analyze/business_shield -- supply chain / resilience analysis
3. POST /api/analyze/cyberprotect    -- security event triage
4. GET  /health, GET /metrics

Request bodies are validated here, before anything reaches the
orchestrators. Core errors are mapped to HTTP statuses in one handler.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, Callable

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from shared.contracts.analysis import (
    BusinessRequest,
    BusinessResponse,
    ClimateRequest,
    ClimateResponse,
    CyberRequest,
    CyberResponse,
    Mode,
    Task,
)
from shared.errors import (
    AnalysisError,
    ModelUnavailableError,
    SchemaError,
)
from shared.logging.logger import setup_logging
from shared.observability.metrics import metrics_response
from shared.observability.sentry import init_sentry
from services.analysis_service.config import AnalysisConfig
from services.analysis_service.context import ServiceContext, build_context

SERVICE_NAME = "analysis_service"
PUBLIC_SERVICE_NAME = "gaiashield-api"

logger = logging.getLogger(SERVICE_NAME)


def error_body(error: str, details: Any = None) -> dict[str, Any]:
    body: dict[str, Any] = {"ok": False, "error": error}
    if details is not None:
        body["details"] = details
    return body


def _status_for(exc: AnalysisError) -> int:
    return 503 if isinstance(exc, ModelUnavailableError) else 500


def _details_for(exc: AnalysisError) -> Any:
    if isinstance(exc, SchemaError):
        return {"violations": [v.to_dict() for v in exc.violations]}
    return exc.message


def create_app(
    context_factory: Callable[[], ServiceContext] | None = None,
    cors_origin: str | None = None,
) -> FastAPI:
    """Build the app; tests pass a factory wired with fakes."""

    @asynccontextmanager
    async def lifespan(application: FastAPI):
        if context_factory is None:
            cfg = AnalysisConfig.from_env()
            setup_logging(SERVICE_NAME, cfg.log_level)
            init_sentry(cfg.sentry_dsn, cfg.sentry_environment, cfg.sentry_traces_sample_rate)
            context = build_context(cfg)
        else:
            context = context_factory()
        application.state.context = context
        logger.info("Analysis Service ready (mode=%s)", context.mode.value)
        yield

        logger.info("Shutting down")
        await context.aclose()

    application = FastAPI(
        title="GaiaShield - Analysis Service",
        version="0.1.0",
        description="Climate, business and cyber risk analysis backed by a generative model",
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=[cors_origin or AnalysisConfig.from_env().cors_origin],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    application.add_middleware(GZipMiddleware, minimum_size=1000)

    @application.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        issues = [
            {
                "path": ".".join(str(part) for part in err["loc"] if part != "body"),
                "message": err["msg"],
            }
            for err in exc.errors()
        ]
        logger.info("Rejected invalid request on %s (%d issue(s))", request.url.path, len(issues))
        return JSONResponse(
            status_code=400,
            content=error_body("VALIDATION_ERROR", {"issues": issues}),
        )

    @application.exception_handler(AnalysisError)
    async def analysis_error_handler(request: Request, exc: AnalysisError):
        status = _status_for(exc)
        logger.error("Request error on %s: %s", request.url.path, exc.code)
        return JSONResponse(
            status_code=status,
            content=error_body(exc.code, _details_for(exc)),
        )

    @application.get("/health")
    async def health(request: Request):
        context: ServiceContext = request.app.state.context
        return {
            "ok": True,
            "service": PUBLIC_SERVICE_NAME,
            "mode": "demo" if context.mode is Mode.DEMO else "production",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    @application.get("/metrics")
    async def metrics():
        return metrics_response()

    @application.post(
        "/api/analyze/climate_guard",
        response_model=ClimateResponse,
        response_model_exclude_none=True,
    )
    async def analyze_climate(body: ClimateRequest, request: Request):
        context: ServiceContext = request.app.state.context
        return await context.orchestrator(Task.CLIMATE).analyze(body)

    @application.post(
        "/api/analyze/business_shield",
        response_model=BusinessResponse,
        response_model_exclude_none=True,
    )
    async def analyze_business(body: BusinessRequest, request: Request):
        context: ServiceContext = request.app.state.context
        return await context.orchestrator(Task.BUSINESS).analyze(body)

    @application.post(
        "/api/analyze/cyberprotect",
        response_model=CyberResponse,
        response_model_exclude_none=True,
    )
    async def analyze_cyber(body: CyberRequest, request: Request):
        context: ServiceContext = request.app.state.context
        return await context.orchestrator(Task.CYBER).analyze(body)

    return application


app = create_app()
