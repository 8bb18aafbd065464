"""Tests for engine data models."""

from datetime import datetime, timedelta, timezone

import pytest

from command_center.domain.models.agent_state import (
    EPOCH,
    AgentAction,
    AgentMessage,
    MemoryEntry,
    MessageRole,
    StrengthBand,
)


def test_memory_entry_from_wire_payload() -> None:
    entry = MemoryEntry.model_validate({
        "id": "m1",
        "content": "Ship weekly",
        "tags": ["Cadence", "cadence", " delivery "],
        "createdAt": "2024-01-01T00:00:00Z",
        "strength": 0.7,
    })

    assert entry.id == "m1"
    assert entry.tags == ["cadence", "delivery"]
    assert entry.created_at == datetime(2024, 1, 1, tzinfo=timezone.utc)
    assert entry.strength == 0.7


def test_memory_entry_dumps_camel_case_timestamp() -> None:
    entry = MemoryEntry(id="m1", content="x", tags=["a"], created_at=EPOCH, strength=0.5)

    data = entry.model_dump(mode="json", by_alias=True)

    assert data["createdAt"].startswith("1970-01-01T00:00:00")
    assert "created_at" not in data


def test_missing_fields_are_normalized() -> None:
    entry = MemoryEntry.model_validate({"content": "Orphan insight"})

    assert entry.id.startswith("mem-")
    assert entry.tags == []
    assert entry.strength == 0.5
    assert entry.created_at == EPOCH


def test_missing_id_is_stable_for_same_content() -> None:
    first = MemoryEntry.model_validate({"content": "Same"})
    second = MemoryEntry.model_validate({"content": "Same"})

    assert first.id == second.id


@pytest.mark.parametrize(
    "raw, expected",
    [(1.7, 1.0), (-0.3, 0.0), (0.25, 0.25), (1, 1.0), ("high", 0.5), (None, 0.5), (True, 0.5),
     (10**400, 1.0), (-10**400, 0.0), (float("inf"), 1.0), (float("-inf"), 0.0)],
)
def test_strength_is_clamped_or_defaulted(raw, expected) -> None:
    entry = MemoryEntry.model_validate({"id": "m", "content": "c", "strength": raw})

    assert entry.strength == expected


def test_scalar_tag_becomes_list_and_junk_tags_empty() -> None:
    assert MemoryEntry.model_validate({"id": "a", "tags": "Foundation"}).tags == ["foundation"]
    assert MemoryEntry.model_validate({"id": "b", "tags": 42}).tags == []


def test_unparseable_timestamp_falls_back_to_epoch() -> None:
    entry = MemoryEntry.model_validate({"id": "m", "createdAt": "yesterday"})

    assert entry.created_at == EPOCH


@pytest.mark.parametrize(
    "raw",
    ["0001-01-01T00:00:00+05:00", "9999-12-31T23:59:59-05:00",
     datetime(1, 1, 1, tzinfo=timezone(timedelta(hours=5)))],
)
def test_timestamp_outside_utc_range_falls_back_to_epoch(raw) -> None:
    entry = MemoryEntry.model_validate({"id": "m", "createdAt": raw})

    assert entry.created_at == EPOCH


def test_naive_timestamp_read_as_utc() -> None:
    entry = MemoryEntry.model_validate({"id": "m", "createdAt": "2024-05-01T08:30:00"})

    assert entry.created_at.tzinfo is not None
    assert entry.created_at.utcoffset().total_seconds() == 0


@pytest.mark.parametrize(
    "strength, band",
    [(0.0, StrengthBand.LOW), (0.39, StrengthBand.LOW), (0.4, StrengthBand.MEDIUM),
     (0.69, StrengthBand.MEDIUM), (0.7, StrengthBand.HIGH), (1.0, StrengthBand.HIGH)],
)
def test_strength_band(strength: float, band: StrengthBand) -> None:
    assert StrengthBand.for_strength(strength) is band


def test_agent_message_facets_are_optional() -> None:
    message = AgentMessage(id="x", role=MessageRole.AGENT, content="done")

    assert message.plan is None
    assert message.actions is None
    assert message.model_dump(mode="json", exclude_none=True) == {
        "id": "x",
        "role": "agent",
        "content": "done",
    }


def test_agent_action_rejects_out_of_range_confidence() -> None:
    with pytest.raises(ValueError):
        AgentAction(title="t", description="d", confidence=1.5)
