from typing import Any, Dict, List

from command_center.domain.context.intake_normalizer import DirectiveClauses
from command_center.domain.models.agent_state import RetrievedMemory
from .base_subagent import BaseSubAgent


BROAD_DIRECTIVE_THRESHOLD = 0.5


def count_memories(count: int) -> str:
    return f"{count} {'memory' if count == 1 else 'memories'}"


class Analyzer(BaseSubAgent):
    """Writes the analysis paragraph for a directive"""

    name = "analyzer"
    description = "Grounds the plan in retrieved memory and states the main risk"

    def analyze(
        self,
        plan: List[str],
        retrieved: List[RetrievedMemory],
        clauses: DirectiveClauses,
    ) -> str:
        top = retrieved[: self.config.analysis_top_n]

        if top:
            best = top[0]
            sentences = [
                f"Reinforced {count_memories(len(retrieved))} while mapping a {len(plan)}-step plan.",
                f'Strongest signal: "{best.entry.content}" (relevance {best.relevance:.2f}).',
            ]
            supporting = [f'"{hit.entry.content}"' for hit in top[1:]]
            if supporting:
                sentences.append(f"Also drawing on {', '.join(supporting)}.")
        else:
            sentences = [
                "No stored memory matched this directive, so it establishes a new knowledge area.",
                f"The {len(plan)}-step plan starts from first principles.",
            ]

        sentences.append(self._risk(plan, clauses))
        return " ".join(sentences)

    def _risk(self, plan: List[str], clauses: DirectiveClauses) -> str:
        if clauses.specificity() < BROAD_DIRECTIVE_THRESHOLD:
            return "Risk: the directive is broad, so scope may drift without early checkpoints."
        return (
            f"Risk: coordinating {len(plan)} steps raises sequencing risk, "
            "and slips in early steps compound downstream."
        )

    def process(self, state: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "analysis": self.analyze(state["plan"], state["retrieved"], state["clauses"])
        }
