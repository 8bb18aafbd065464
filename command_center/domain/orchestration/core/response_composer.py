from typing import List, Optional, Tuple
from datetime import datetime
import uuid

from command_center.config import EngineConfig
from command_center.domain.context.intake_normalizer import DirectiveClauses, stem
from command_center.domain.context.memory.memory_store import MemoryStore
from command_center.domain.models.agent_state import (
    AgentAction, AgentMessage, MemoryChange, MemoryEntry, MessageRole, RetrievedMemory
)


ENGINE_NAMESPACE = uuid.UUID("6f1c2b8e-3d4a-5b9c-8e7f-1a2b3c4d5e6f")
MAX_INSIGHT_TAGS = 3
FALLBACK_TAG = "general"


class ResponseComposer:
    """Owns the caller-visible outcome of a call: new memories and the reply"""

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig()

    def novel_keywords(self, clauses: DirectiveClauses, store: MemoryStore) -> List[str]:
        """Directive keywords that no stored tag covers yet"""

        covered = store.ranker.covered_stems(store.memories)
        return [word for word in clauses.keywords() if stem(word) not in covered]

    def capture_insight(
        self,
        clauses: DirectiveClauses,
        store: MemoryStore,
        retrieved: List[RetrievedMemory],
        fingerprint: str,
        now: datetime,
    ) -> Optional[MemoryEntry]:
        """Insert a memory when the directive brings something new.

        That is the case when nothing was retrieved at all, or when some
        keyword is not covered by any existing tag.
        """

        novel = self.novel_keywords(clauses, store)
        if retrieved and not novel:
            return None

        tags = novel[:MAX_INSIGHT_TAGS] or [FALLBACK_TAG]
        return store.insert(
            content=f"Directive insight: {clauses.first()}",
            tags=tags,
            created_at=now,
            memory_id=f"mem-{uuid.uuid5(ENGINE_NAMESPACE, 'memory:' + fingerprint)}",
        )

    def compose(
        self,
        plan: List[str],
        analysis: str,
        actions: List[AgentAction],
        reflections: List[str],
        change: MemoryChange,
        store: MemoryStore,
        fingerprint: str,
    ) -> Tuple[AgentMessage, List[MemoryEntry]]:
        content = (
            f"Mapped the directive into a {len(plan)}-step plan with "
            f"{len(actions)} candidate action{'' if len(actions) == 1 else 's'}. "
            f"Memory: {len(change.reinforced)} reinforced, {len(change.decayed)} decayed, "
            f"{1 if change.inserted else 0} new."
        )

        reply = AgentMessage(
            id=str(uuid.uuid5(ENGINE_NAMESPACE, "message:" + fingerprint)),
            role=MessageRole.AGENT,
            content=content,
            plan=plan or None,
            analysis=analysis or None,
            actions=actions or None,
            reflections=reflections or None,
        )
        return reply, store.snapshot()
