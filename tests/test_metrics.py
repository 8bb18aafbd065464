"""Tests for the in-process request metrics."""

import pytest

from command_center.infrastructure.observability.logging import MetricsCollector


@pytest.fixture
def collector() -> MetricsCollector:
    return MetricsCollector()


def test_empty_summary(collector: MetricsCollector) -> None:
    assert collector.get_metrics_summary() == {
        "requests": {"total": 0, "succeeded": 0, "rejected": 0, "failed": 0},
        "reasons": {},
        "latency_ms": {"count": 0, "avg": 0.0, "min": 0.0, "max": 0.0},
    }


def test_outcomes_and_reasons_are_counted(collector: MetricsCollector) -> None:
    collector.record_outcome("succeeded")
    collector.record_outcome("rejected", reason="empty_message")
    collector.record_outcome("rejected", reason="empty_message")
    collector.record_outcome("failed", reason="invalid_json")

    summary = collector.get_metrics_summary()

    assert summary["requests"] == {"total": 4, "succeeded": 1, "rejected": 2, "failed": 1}
    assert summary["reasons"] == {"rejected.empty_message": 2, "failed.invalid_json": 1}


def test_unknown_outcome_is_refused(collector: MetricsCollector) -> None:
    with pytest.raises(ValueError):
        collector.record_outcome("timeout")

    assert collector.get_metrics_summary()["requests"]["total"] == 0


def test_latency_summary(collector: MetricsCollector) -> None:
    collector.record_latency(10.0)
    collector.record_latency(30.0)

    assert collector.get_metrics_summary()["latency_ms"] == {
        "count": 2,
        "avg": 20.0,
        "min": 10.0,
        "max": 30.0,
    }


def test_reset_clears_everything(collector: MetricsCollector) -> None:
    collector.record_outcome("failed", reason="engine_error")
    collector.record_latency(5.0)

    collector.reset()

    assert collector.get_metrics_summary()["requests"]["total"] == 0
    assert collector.get_metrics_summary()["reasons"] == {}
    assert collector.get_metrics_summary()["latency_ms"]["count"] == 0
