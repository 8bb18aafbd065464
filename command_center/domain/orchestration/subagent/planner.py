from typing import Any, Dict, List

from command_center.domain.context.intake_normalizer import DirectiveClauses
from .base_subagent import BaseSubAgent


VERIFICATION_STEP = "Define measurable outcomes and verify progress against them."


def as_step(clause: str) -> str:
    return clause[:1].upper() + clause[1:]


class Planner(BaseSubAgent):
    """Decomposes a directive into an ordered plan"""

    name = "planner"
    description = "Turns directive clauses into 1 to max_plan_steps ordered steps"

    def build_plan(self, clauses: DirectiveClauses) -> List[str]:
        """One step per clause.

        A single clause gets a verification step appended. Clauses past the
        step limit are merged into the final step.
        """

        parts = list(clauses)
        limit = self.config.max_plan_steps

        if len(parts) > limit:
            head, tail = parts[: limit - 1], parts[limit - 1:]
            steps = [as_step(part) for part in head]
            steps.append(as_step("; ".join(tail)))
            return steps

        steps = [as_step(part) for part in parts]
        if len(steps) < 2:
            steps.append(VERIFICATION_STEP)
        return steps

    def process(self, state: Dict[str, Any]) -> Dict[str, Any]:
        return {"plan": self.build_plan(state["clauses"])}
