from typing import Any, Dict, Iterable, List, Optional, Set
from datetime import datetime
import structlog

from command_center.config import EngineConfig
from command_center.domain.models.agent_state import (
    MemoryEntry, RetrievedMemory, clamp, ensure_utc
)
from command_center.domain.context.context_ranker import ContextRanker
from command_center.domain.context.intake_normalizer import DirectiveClauses
from command_center.infrastructure.observability.logging import agent_logger

logger = structlog.get_logger(__name__)


class MemoryStore:
    """Working copy of the caller's memory for a single engine call.

    Entries are copied on construction so the caller's snapshot is never
    mutated. Nothing is ever removed: unused knowledge only loses strength.
    """

    def __init__(self, entries: Iterable[MemoryEntry] = (), config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig()
        self.ranker = ContextRanker(strength_bonus=self.config.strength_bonus)
        self.memories: List[MemoryEntry] = []
        self._reinforced: Set[str] = set()

        seen: Set[str] = set()
        for entry in entries:
            entry = entry.model_copy(deep=True)
            if entry.id in seen:
                entry = entry.model_copy(update={"id": self._unique_id(entry.id, seen)})
            seen.add(entry.id)
            self.memories.append(entry)

    @classmethod
    def from_payload(cls, items: Any, config: Optional[EngineConfig] = None) -> "MemoryStore":
        """Build a store from raw wire items, normalizing malformed entries"""

        entries = []
        if isinstance(items, list):
            for index, item in enumerate(items):
                if isinstance(item, MemoryEntry):
                    entries.append(item)
                elif isinstance(item, dict):
                    entries.append(MemoryEntry.model_validate(item))
                else:
                    logger.warning("Dropping non-object memory item", index=index)
        return cls(entries, config=config)

    def __len__(self) -> int:
        return len(self.memories)

    def get(self, memory_id: str) -> Optional[MemoryEntry]:
        for entry in self.memories:
            if entry.id == memory_id:
                return entry
        return None

    def retrieve(self, clauses: DirectiveClauses) -> List[RetrievedMemory]:
        """Score every entry against the directive and return the relevant ones.

        Ordered by relevance, then strength, then age (older first), then id.
        """

        directive_stems = clauses.stems()
        results = []
        for entry in self.memories:
            relevance = self.ranker.calculate_relevance(entry, directive_stems)
            if relevance > 0.0:
                results.append(RetrievedMemory(entry=entry, relevance=relevance))

        results.sort(key=lambda hit: (
            -hit.relevance,
            -hit.entry.strength,
            hit.entry.created_at,
            hit.entry.id,
        ))

        logger.debug("Retrieved memories", count=len(results), total=len(self.memories))
        return results

    def reinforce(self, entry: MemoryEntry) -> MemoryEntry:
        """Raise an entry's strength, saturating at 1.0"""

        entry.strength = clamp(entry.strength + self.config.reinforcement_increment)
        self._reinforced.add(entry.id)

        agent_logger.log_context_update(
            context_type="memory",
            action="reinforce",
            details={"memory_id": entry.id, "strength": entry.strength}
        )
        return entry

    def decay(self, excluded: Iterable[MemoryEntry] = ()) -> List[MemoryEntry]:
        """Weaken every entry that was neither reinforced nor excluded"""

        skip = self._reinforced | {entry.id for entry in excluded}
        decayed = []
        for entry in self.memories:
            if entry.id in skip:
                continue
            entry.strength = clamp(entry.strength - self.config.decay_decrement)
            decayed.append(entry)

        if decayed:
            agent_logger.log_context_update(
                context_type="memory",
                action="decay",
                details={"memory_ids": [entry.id for entry in decayed]}
            )
        return decayed

    def insert(self, content: str, tags: Iterable[str], created_at: datetime,
               memory_id: str) -> MemoryEntry:
        """Append a new entry at neutral strength"""

        seen = {entry.id for entry in self.memories}
        entry = MemoryEntry(
            id=self._unique_id(memory_id, seen) if memory_id in seen else memory_id,
            content=content,
            tags=list(tags),
            created_at=ensure_utc(created_at),
            strength=self.config.insert_strength,
        )
        self.memories.append(entry)

        agent_logger.log_context_update(
            context_type="memory",
            action="insert",
            details={"memory_id": entry.id, "tags": entry.tags}
        )
        return entry

    def snapshot(self) -> List[MemoryEntry]:
        """Current entries: incoming order, new entries last"""
        return [entry.model_copy(deep=True) for entry in self.memories]

    def to_payload(self) -> List[Dict[str, Any]]:
        return [entry.model_dump(mode="json", by_alias=True) for entry in self.memories]

    @staticmethod
    def _unique_id(memory_id: str, taken: Set[str]) -> str:
        suffix = 2
        while f"{memory_id}-{suffix}" in taken:
            suffix += 1
        return f"{memory_id}-{suffix}"
