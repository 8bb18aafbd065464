from typing import Iterable, List, Set

from command_center.domain.models.agent_state import MemoryEntry
from .intake_normalizer import stems_of


class ContextRanker:
    """Ranks memory entries by relevance to a directive"""

    def __init__(self, strength_bonus: float = 0.1):
        self.strength_bonus = strength_bonus

    def matched_tags(self, entry: MemoryEntry, directive_stems: Set[str]) -> List[str]:
        """Tags sharing a lexical stem with any directive word"""

        return [
            tag for tag in entry.tags
            if stems_of(tag) & directive_stems
        ]

    def tag_overlap(self, entry: MemoryEntry, directive_stems: Set[str]) -> float:
        """Fraction of the entry's tags that match the directive"""

        if not entry.tags:
            return 0.0
        return len(self.matched_tags(entry, directive_stems)) / len(entry.tags)

    def calculate_relevance(self, entry: MemoryEntry, directive_stems: Set[str]) -> float:
        """Tag overlap plus a small bonus for strong memories.

        Entries without any matching tag score zero regardless of strength.
        """

        overlap = self.tag_overlap(entry, directive_stems)
        if overlap == 0.0:
            return 0.0
        return overlap + self.strength_bonus * entry.strength

    def covered_stems(self, entries: Iterable[MemoryEntry]) -> Set[str]:
        """Every stem some stored tag already speaks to"""

        covered: Set[str] = set()
        for entry in entries:
            for tag in entry.tags:
                covered |= stems_of(tag)
        return covered
