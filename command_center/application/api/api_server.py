from typing import Optional
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import structlog

from command_center.application.api.route.agent import (
    EXECUTION_FAILED, MESSAGE_REQUIRED, router
)
from command_center.application.api.schema.messages import error_body
from command_center.config import EngineConfig, ServerSettings
from command_center.domain.orchestration.core.main_agent import AgentOrchestrator
from command_center.infrastructure.observability.logging import setup_logging, metrics

logger = structlog.get_logger(__name__)


def create_app(
    settings: Optional[ServerSettings] = None,
    orchestrator: Optional[AgentOrchestrator] = None,
) -> FastAPI:
    """Build the HTTP boundary around the reasoning engine"""

    settings = settings or ServerSettings()
    setup_logging(
        log_level=settings.log_level,
        log_format=settings.log_format,
        service_name=settings.service_name,
    )

    app = FastAPI(title="Agentic Command Center")
    app.state.orchestrator = orchestrator or AgentOrchestrator(EngineConfig())

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        # Undecodable JSON is an execution failure; any other body without a
        # usable "message" reads as missing
        if any(error.get("type") == "json_invalid" for error in exc.errors()):
            logger.warning("Request body is not valid JSON", path=request.url.path)
            metrics.record_outcome("failed", reason="invalid_json")
            return JSONResponse(status_code=500, content=error_body(EXECUTION_FAILED))

        metrics.record_outcome("rejected", reason="invalid_body")
        return JSONResponse(status_code=400, content=error_body(MESSAGE_REQUIRED))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error", path=request.url.path)
        metrics.record_outcome("failed", reason="unhandled")
        return JSONResponse(status_code=500, content=error_body(EXECUTION_FAILED))

    app.include_router(router)

    logger.info("Command center API ready", service=settings.service_name)
    return app


app = create_app()
