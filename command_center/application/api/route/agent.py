from typing import Annotated
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
import structlog
import time
import uuid

from command_center.application.api.schema.messages import (
    AgentRequest, AgentResponse, SeedMemoryResponse, error_body
)
from command_center.domain.context.memory.seed import default_seed_memory
from command_center.domain.orchestration.core.main_agent import AgentOrchestrator
from command_center.infrastructure.observability.logging import metrics

logger = structlog.get_logger(__name__)

router = APIRouter()

MESSAGE_REQUIRED = "Message is required."
EXECUTION_FAILED = "Agent execution failed."


def get_orchestrator(request: Request) -> AgentOrchestrator:
    return request.app.state.orchestrator


# Single-shot reasoning over a caller-owned memory snapshot
@router.post("/api/agent")
async def agent_endpoint(
    body: AgentRequest,
    orchestrator: Annotated[AgentOrchestrator, Depends(get_orchestrator)]
):
    directive = body.directive
    if not directive:
        metrics.record_outcome("rejected", reason="empty_message")
        return JSONResponse(status_code=400, content=error_body(MESSAGE_REQUIRED))

    started = time.perf_counter()
    with structlog.contextvars.bound_contextvars(request_id=str(uuid.uuid4())):
        try:
            reply, updated_memory = orchestrator.process(directive, body.memory)
            payload = AgentResponse(reply=reply, updated_memory=updated_memory).model_dump(
                mode="json", by_alias=True, exclude_none=True
            )
        except Exception:
            logger.exception("Agent execution failed", directive_length=len(directive))
            metrics.record_outcome("failed", reason="engine_error")
            return JSONResponse(status_code=500, content=error_body(EXECUTION_FAILED))

        duration_ms = (time.perf_counter() - started) * 1000
        metrics.record_latency(duration_ms)
        metrics.record_outcome("succeeded")
        logger.info(
            "Directive processed",
            actions=len(reply.actions or []),
            memories=len(updated_memory),
        )

    return JSONResponse(content=payload)


# Initial memory for a fresh console
@router.get("/api/memory/seed")
async def seed_memory_endpoint():
    payload = SeedMemoryResponse(memory=default_seed_memory())
    return JSONResponse(content=payload.model_dump(mode="json", by_alias=True))


@router.get("/api/metrics")
async def metrics_endpoint():
    return metrics.get_metrics_summary()


@router.get("/health")
async def health_check():
    return {"status": "ok"}
