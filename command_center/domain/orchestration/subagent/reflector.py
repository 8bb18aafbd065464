from typing import Any, Dict, List, Optional

from command_center.domain.models.agent_state import MemoryEntry
from .base_subagent import BaseSubAgent


class Reflector(BaseSubAgent):
    """Describes how memory changed during this call"""

    name = "reflector"
    description = "One statement per reinforced memory plus one for a new memory"

    def reflect(self, reinforced: List[MemoryEntry], inserted: Optional[MemoryEntry]) -> List[str]:
        budget = self.config.max_reflections - (1 if inserted else 0)

        statements = [
            f'Reinforced "{entry.content}" to strength {entry.strength:.2f} ({entry.band.value}).'
            for entry in reinforced[: max(budget, 0)]
        ]
        if inserted:
            tags = ", ".join(inserted.tags)
            statements.append(
                f'Captured new memory "{inserted.content}" tagged [{tags}] '
                f"at strength {inserted.strength:.2f} ({inserted.band.value})."
            )
        return statements

    def process(self, state: Dict[str, Any]) -> Dict[str, Any]:
        reinforced = [hit.entry for hit in state["retrieved"]]
        return {"reflections": self.reflect(reinforced, state.get("inserted"))}
