from typing import List, Optional
from datetime import datetime, timezone

from command_center.domain.models.agent_state import MemoryEntry


SEED_MEMORY_ID = "seed-vision"
SEED_MEMORY_CONTENT = "Default focus: produce actionable strategies with measurable outcomes."


def default_seed_memory(now: Optional[datetime] = None) -> List[MemoryEntry]:
    """Initial memory a fresh console starts from.

    Called by whoever owns the memory snapshot; the engine never falls back
    to it on its own.
    """

    return [
        MemoryEntry(
            id=SEED_MEMORY_ID,
            content=SEED_MEMORY_CONTENT,
            tags=["foundation"],
            created_at=now or datetime.now(timezone.utc),
            strength=0.8,
        )
    ]
