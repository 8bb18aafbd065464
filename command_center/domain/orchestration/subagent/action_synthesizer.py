from typing import Any, Dict, List, Set

from command_center.domain.context.intake_normalizer import DirectiveClauses
from command_center.domain.models.agent_state import AgentAction, RetrievedMemory, clamp
from .base_subagent import BaseSubAgent


TITLE_WORDS = 4


class ActionSynthesizer(BaseSubAgent):
    """Turns plan steps into candidate actions with a confidence score"""

    name = "action_synthesizer"
    description = "Emits one scored action per leading plan step"

    def confidence(self, retrieved: List[RetrievedMemory], clauses: DirectiveClauses) -> float:
        """Blend of supporting memory strength and directive specificity.

        Clamped away from 0 and 1: the engine never claims certainty or
        impossibility.
        """

        if retrieved:
            average_strength = sum(hit.entry.strength for hit in retrieved) / len(retrieved)
        else:
            average_strength = 0.0

        score = (
            self.config.memory_weight * average_strength
            + self.config.specificity_weight * clauses.specificity()
        )
        return clamp(round(score, 2), self.config.confidence_floor, self.config.confidence_ceiling)

    def synthesize(
        self,
        plan: List[str],
        retrieved: List[RetrievedMemory],
        clauses: DirectiveClauses,
    ) -> List[AgentAction]:
        confidence = self.confidence(retrieved, clauses)
        if retrieved:
            anchor = f'the stored insight "{retrieved[0].entry.content}"'
        else:
            anchor = "the new knowledge area this directive opens"

        actions = []
        used: Set[str] = set()
        for step in plan[: self.config.max_actions]:
            base = self._title(step)
            title, suffix = base, 2
            while title in used:
                title = f"{base} ({suffix})"
                suffix += 1
            used.add(title)

            actions.append(AgentAction(
                title=title,
                description=f"{step.rstrip('.')}. Anchor the work on {anchor}.",
                confidence=confidence,
            ))
        return actions

    @staticmethod
    def _title(step: str) -> str:
        words = step.rstrip(".").replace(";", "").split()
        return " ".join(word.capitalize() for word in words[:TITLE_WORDS]) or "Next Step"

    def process(self, state: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "actions": self.synthesize(state["plan"], state["retrieved"], state["clauses"])
        }
