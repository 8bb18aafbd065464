"""Shared test fixtures."""

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from command_center.application.api.api_server import create_app
from command_center.config import EngineConfig, ServerSettings
from command_center.domain.context.memory.seed import default_seed_memory
from command_center.domain.models.agent_state import MemoryEntry
from command_center.domain.orchestration.core.main_agent import AgentOrchestrator
from command_center.infrastructure.observability.logging import metrics

FIXED_NOW = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def config() -> EngineConfig:
    return EngineConfig()


@pytest.fixture
def orchestrator(config: EngineConfig) -> AgentOrchestrator:
    """Engine with a frozen clock so outputs are reproducible."""
    return AgentOrchestrator(config, clock=lambda: FIXED_NOW)


@pytest.fixture
def seed() -> list[MemoryEntry]:
    return default_seed_memory(FIXED_NOW)


@pytest.fixture
def make_entry():
    """Build a MemoryEntry with sensible defaults."""

    def _make(memory_id: str, tags: list[str], strength: float = 0.5, **kwargs) -> MemoryEntry:
        return MemoryEntry(
            id=memory_id,
            content=kwargs.pop("content", f"Insight {memory_id}"),
            tags=tags,
            created_at=kwargs.pop("created_at", FIXED_NOW),
            strength=strength,
            **kwargs,
        )

    return _make


@pytest.fixture(autouse=True)
def _reset_metrics():
    metrics.reset()
    yield
    metrics.reset()


@pytest.fixture
def client(orchestrator: AgentOrchestrator) -> TestClient:
    app = create_app(ServerSettings(log_format="console"), orchestrator=orchestrator)
    return TestClient(app)
