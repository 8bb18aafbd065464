from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from command_center.domain.models.agent_state import AgentMessage, MemoryEntry


class AgentRequest(BaseModel):
    """Body of POST /api/agent"""
    message: Optional[str] = None
    memory: List[Any] = Field(default_factory=list)

    @field_validator("memory", mode="before")
    @classmethod
    def _array_or_empty(cls, value: Any) -> List[Any]:
        # Anything that is not an array counts as no memory
        return value if isinstance(value, list) else []

    @property
    def directive(self) -> str:
        return (self.message or "").strip()


class AgentResponse(BaseModel):
    """Successful engine reply"""
    model_config = ConfigDict(populate_by_name=True)

    reply: AgentMessage
    updated_memory: List[MemoryEntry] = Field(alias="updatedMemory")


class SeedMemoryResponse(BaseModel):
    memory: List[MemoryEntry]


class ErrorResponse(BaseModel):
    error: str


def error_body(message: str) -> Dict[str, str]:
    return ErrorResponse(error=message).model_dump()
