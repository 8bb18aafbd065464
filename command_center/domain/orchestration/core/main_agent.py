from typing import TypedDict, Any, Callable, Dict, Iterable, List, Optional, Tuple, Union
from langgraph.graph import StateGraph, END
import structlog
from datetime import datetime, timezone
import hashlib
import json

from command_center.config import EngineConfig
from command_center.domain.context.intake_normalizer import DirectiveClauses, normalize_directive
from command_center.domain.context.memory.memory_store import MemoryStore
from command_center.domain.models.agent_state import (
    AgentAction, AgentMessage, MemoryChange, MemoryEntry, RetrievedMemory
)
from command_center.domain.orchestration.core.response_composer import ResponseComposer
from command_center.domain.orchestration.subagent.action_synthesizer import ActionSynthesizer
from command_center.domain.orchestration.subagent.analyzer import Analyzer
from command_center.domain.orchestration.subagent.planner import Planner
from command_center.domain.orchestration.subagent.reflector import Reflector
from command_center.infrastructure.observability.logging import agent_logger

logger = structlog.get_logger(__name__)


class EmptyDirectiveError(ValueError):
    """Raised when a directive is empty or whitespace only"""


class PipelineState(TypedDict, total=False):
    """State threaded through the pipeline graph"""
    directive: str
    memory: List[Union[MemoryEntry, Dict[str, Any]]]
    clauses: DirectiveClauses
    store: MemoryStore
    fingerprint: str
    now: datetime
    retrieved: List[RetrievedMemory]
    change: MemoryChange
    plan: List[str]
    analysis: str
    actions: List[AgentAction]
    inserted: Optional[MemoryEntry]
    reflections: List[str]
    reply: AgentMessage
    updated_memory: List[MemoryEntry]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class AgentOrchestrator:
    """Single-pass reasoning engine.

    Each call takes a directive plus the caller's memory snapshot and returns
    the reply together with the updated snapshot. The orchestrator keeps no
    memory between calls, so one instance can serve any number of callers.
    """

    def __init__(self, config: Optional[EngineConfig] = None, clock: Optional[Callable[[], datetime]] = None):
        self.config = config or EngineConfig()
        self.clock = clock or utc_now
        self.planner = Planner(self.config)
        self.analyzer = Analyzer(self.config)
        self.synthesizer = ActionSynthesizer(self.config)
        self.reflector = Reflector(self.config)
        self.composer = ResponseComposer(self.config)
        self.workflow = self._create_workflow()

    def _create_workflow(self):
        """Create the linear pipeline graph"""

        workflow = StateGraph(PipelineState)

        workflow.add_node("intake", self.intake_node)
        workflow.add_node("recall", self.recall_node)
        workflow.add_node("planner", self.planning_node)
        workflow.add_node("analyzer", self.analysis_node)
        workflow.add_node("action_synthesizer", self.synthesis_node)
        workflow.add_node("capture", self.capture_node)
        workflow.add_node("reflector", self.reflection_node)
        workflow.add_node("composer", self.compose_node)

        workflow.set_entry_point("intake")
        workflow.add_edge("intake", "recall")
        workflow.add_edge("recall", "planner")
        workflow.add_edge("planner", "analyzer")
        workflow.add_edge("analyzer", "action_synthesizer")
        workflow.add_edge("action_synthesizer", "capture")
        workflow.add_edge("capture", "reflector")
        workflow.add_edge("reflector", "composer")
        workflow.add_edge("composer", END)

        return workflow.compile()

    def process(
        self,
        directive: str,
        memory: Iterable[Union[MemoryEntry, Dict[str, Any]]] = (),
    ) -> Tuple[AgentMessage, List[MemoryEntry]]:
        """Run one directive against a memory snapshot"""

        directive = (directive or "").strip()
        if not directive:
            raise EmptyDirectiveError("Message is required.")

        logger.debug("Processing directive", directive_length=len(directive))
        result = self.workflow.invoke({"directive": directive, "memory": list(memory)})
        return result["reply"], result["updated_memory"]

    def intake_node(self, state: PipelineState) -> Dict[str, Any]:
        """Normalize the directive and load the memory snapshot"""

        clauses = normalize_directive(state["directive"])
        store = MemoryStore.from_payload(state["memory"], config=self.config)

        agent_logger.log_workflow_transition(
            "intake", "recall",
            {"clauses": len(clauses), "memories": len(store)}
        )
        return {
            "clauses": clauses,
            "store": store,
            "fingerprint": self._fingerprint(state["directive"], store),
            "now": self.clock(),
        }

    def recall_node(self, state: PipelineState) -> Dict[str, Any]:
        """Retrieve relevant memories, reinforce them, decay the rest"""

        store = state["store"]
        retrieved = store.retrieve(state["clauses"])
        for hit in retrieved:
            store.reinforce(hit.entry)
        decayed = store.decay()

        agent_logger.log_workflow_transition(
            "recall", self.planner.name,
            {"retrieved": len(retrieved), "decayed": len(decayed)}
        )
        return {
            "retrieved": retrieved,
            "change": MemoryChange(
                reinforced=[hit.entry.id for hit in retrieved],
                decayed=[entry.id for entry in decayed],
            ),
        }

    def planning_node(self, state: PipelineState) -> Dict[str, Any]:
        update = self.planner.process(state)
        agent_logger.log_workflow_transition(self.planner.name, self.analyzer.name, {"steps": len(update["plan"])})
        return update

    def analysis_node(self, state: PipelineState) -> Dict[str, Any]:
        update = self.analyzer.process(state)
        agent_logger.log_workflow_transition(self.analyzer.name, self.synthesizer.name)
        return update

    def synthesis_node(self, state: PipelineState) -> Dict[str, Any]:
        update = self.synthesizer.process(state)
        agent_logger.log_workflow_transition(self.synthesizer.name, "capture", {"actions": len(update["actions"])})
        return update

    def capture_node(self, state: PipelineState) -> Dict[str, Any]:
        """Store the directive as a new memory when it is novel"""

        inserted = self.composer.capture_insight(
            state["clauses"],
            state["store"],
            state["retrieved"],
            state["fingerprint"],
            state["now"],
        )
        change = state["change"]
        if inserted:
            change = change.model_copy(update={"inserted": inserted.id})

        agent_logger.log_workflow_transition("capture", self.reflector.name, {"inserted": bool(inserted)})
        return {"inserted": inserted, "change": change}

    def reflection_node(self, state: PipelineState) -> Dict[str, Any]:
        update = self.reflector.process(state)
        agent_logger.log_workflow_transition(self.reflector.name, "composer", {"reflections": len(update["reflections"])})
        return update

    def compose_node(self, state: PipelineState) -> Dict[str, Any]:
        reply, updated_memory = self.composer.compose(
            plan=state["plan"],
            analysis=state["analysis"],
            actions=state["actions"],
            reflections=state["reflections"],
            change=state["change"],
            store=state["store"],
            fingerprint=state["fingerprint"],
        )
        agent_logger.log_workflow_transition("composer", END, {"memories": len(updated_memory)})
        return {"reply": reply, "updated_memory": updated_memory}

    @staticmethod
    def _fingerprint(directive: str, store: MemoryStore) -> str:
        """Stable digest of a call's inputs, used to derive ids"""

        payload = json.dumps(
            {"directive": directive, "memory": store.to_payload()},
            sort_keys=True,
        )
        return hashlib.sha256(payload.encode("utf-8")).hexdigest()
