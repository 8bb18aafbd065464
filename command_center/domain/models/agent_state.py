from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from datetime import datetime, timezone
from enum import Enum
import hashlib


EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
NEUTRAL_STRENGTH = 0.5


def clamp(value: float, lower: float = 0.0, upper: float = 1.0) -> float:
    """Clamp value into [lower, upper]"""
    return max(lower, min(upper, value))


def ensure_utc(value: datetime) -> datetime:
    """Read naive timestamps as UTC.

    An aware value whose UTC instant falls outside the datetime range reads
    as the epoch.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    try:
        return value.astimezone(timezone.utc)
    except OverflowError:
        return EPOCH


class MessageRole(str, Enum):
    """Who produced a message"""
    USER = "user"  # directive
    AGENT = "agent"  # reflection


class StrengthBand(str, Enum):
    """Coarse label for a memory strength"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def for_strength(cls, strength: float) -> "StrengthBand":
        if strength < 0.4:
            return cls.LOW
        if strength < 0.7:
            return cls.MEDIUM
        return cls.HIGH


class MemoryEntry(BaseModel):
    """A caller-held insight with a reinforcing/decaying strength.

    Construction never fails for a dict payload: malformed fields are
    normalized instead of rejected so the engine stays total.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(description="Unique memory identifier")
    content: str = Field(default="", description="Retained insight")
    tags: List[str] = Field(default_factory=list, description="Short labels, set semantics")
    created_at: datetime = Field(default=EPOCH, alias="createdAt")
    strength: float = Field(default=NEUTRAL_STRENGTH, description="Relevance weight in [0, 1]")

    @model_validator(mode="before")
    @classmethod
    def _normalize_payload(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data

        data = dict(data)

        content = data.get("content")
        data["content"] = "" if content is None else str(content)

        if data.get("id") in (None, ""):
            digest = hashlib.sha1(data["content"].encode("utf-8")).hexdigest()[:12]
            data["id"] = f"mem-{digest}"
        else:
            data["id"] = str(data["id"])

        tags = data.get("tags")
        if isinstance(tags, str):
            tags = [tags]
        elif not isinstance(tags, (list, tuple, set, frozenset)):
            tags = []
        data["tags"] = [str(tag) for tag in tags if tag is not None]

        raw_created = data.pop("createdAt", data.get("created_at"))
        data["created_at"] = _parse_timestamp(raw_created)
        return data

    @field_validator("tags")
    @classmethod
    def _collapse_tags(cls, tags: List[str]) -> List[str]:
        seen: Dict[str, None] = {}
        for tag in tags:
            label = tag.strip().lower()
            if label:
                seen.setdefault(label, None)
        return list(seen)

    @field_validator("created_at")
    @classmethod
    def _utc(cls, value: datetime) -> datetime:
        return ensure_utc(value)

    @field_validator("strength", mode="before")
    @classmethod
    def _clamp_strength(cls, value: Any) -> float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return NEUTRAL_STRENGTH
        if value != value:  # NaN
            return NEUTRAL_STRENGTH
        if isinstance(value, int):
            # ints past the float range must not reach float()
            return float(clamp(value, 0, 1))
        return clamp(float(value))

    @property
    def band(self) -> StrengthBand:
        return StrengthBand.for_strength(self.strength)


def _parse_timestamp(value: Any) -> datetime:
    if isinstance(value, datetime):
        return ensure_utc(value)
    if isinstance(value, str):
        try:
            return ensure_utc(datetime.fromisoformat(value.replace("Z", "+00:00")))
        except (ValueError, OverflowError):
            return EPOCH
    return EPOCH


class AgentAction(BaseModel):
    """A candidate action with a bounded confidence"""
    title: str = Field(description="Short label, unique within a response")
    description: str = Field(description="What the action involves")
    confidence: float = Field(ge=0.0, le=1.0)


class AgentMessage(BaseModel):
    """One message in the console thread.

    Facets are explicit optionals: ``None`` means the facet was not produced.
    """
    id: str = Field(description="Unique message identifier")
    role: MessageRole
    content: str
    plan: Optional[List[str]] = None
    analysis: Optional[str] = None
    actions: Optional[List[AgentAction]] = None
    reflections: Optional[List[str]] = None


class RetrievedMemory(BaseModel):
    """A memory entry scored against the current directive"""
    entry: MemoryEntry
    relevance: float


class MemoryChange(BaseModel):
    """Ids touched by one engine call"""
    reinforced: List[str] = Field(default_factory=list)
    decayed: List[str] = Field(default_factory=list)
    inserted: Optional[str] = None
