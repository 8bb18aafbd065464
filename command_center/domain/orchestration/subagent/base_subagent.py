from abc import ABC, abstractmethod
from typing import Dict, Any, Optional

from command_center.config import EngineConfig


class BaseSubAgent(ABC):
    """Base class for the pipeline's specialized stages.

    Stages are pure: they read the pipeline state and return the keys they
    produce, never touching anything outside of it.
    """

    name: str = "subagent"
    description: str = ""

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig()

    @abstractmethod
    def process(self, state: Dict[str, Any]) -> Dict[str, Any]:
        """Process pipeline state and return state updates"""
        pass
