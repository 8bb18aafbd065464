import structlog
import logging
import sys
from typing import Dict, Any, Optional
from datetime import datetime, timezone
import os


def setup_logging(
    log_level: str = "INFO",
    log_format: str = "json",
    service_name: str = "command-center"
) -> None:
    """Setup structured logging configuration"""

    # Configure Python logging
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper(), logging.INFO)
    )

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        add_service_context,
    ]

    if log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    structlog.contextvars.bind_contextvars(
        service=service_name,
        environment=os.getenv("ENVIRONMENT", "development"),
        version=os.getenv("SERVICE_VERSION", "unknown")
    )


def add_service_context(logger: logging.Logger, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Add request context to all log entries"""

    if "timestamp" not in event_dict:
        event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()

    # Request ID is bound by the HTTP boundary for each call
    request_id = structlog.contextvars.get_contextvars().get("request_id")
    if request_id:
        event_dict["request_id"] = request_id

    return event_dict


class AgentLogger:
    """Specialized logger for engine operations"""

    def __init__(self, name: str):
        self.logger = structlog.get_logger(name)

    def log_workflow_transition(
        self,
        from_node: str,
        to_node: str,
        state_summary: Optional[Dict[str, Any]] = None
    ):
        """Log pipeline stage transitions"""

        self.logger.debug(
            "workflow_transition",
            from_node=from_node,
            to_node=to_node,
            state_summary=state_summary or {}
        )

    def log_context_update(
        self,
        context_type: str,
        action: str,
        details: Optional[Dict[str, Any]] = None
    ):
        """Log memory updates"""

        self.logger.debug(
            "context_update",
            context_type=context_type,
            action=action,
            details=details or {}
        )


# Global logger instance
agent_logger = AgentLogger("command_center.engine")


class MetricsCollector:
    """Count directive outcomes and engine latency in process.

    Every request to the agent endpoint ends in exactly one of ``OUTCOMES``.
    Rejections and failures also carry a short reason.
    """

    OUTCOMES = ("succeeded", "rejected", "failed")

    def __init__(self):
        self.outcomes: Dict[str, int] = {}
        self.reasons: Dict[str, int] = {}
        self.latency: Dict[str, float] = {}
        self.reset()

    def record_outcome(self, outcome: str, reason: Optional[str] = None):
        """Count how one directive request ended"""

        if outcome not in self.OUTCOMES:
            raise ValueError(f"Unknown outcome: {outcome}")

        self.outcomes[outcome] += 1
        if reason:
            key = f"{outcome}.{reason}"
            self.reasons[key] = self.reasons.get(key, 0) + 1

        agent_logger.logger.info(
            "metric",
            metric_type="outcome",
            outcome=outcome,
            reason=reason
        )

    def record_latency(self, duration_ms: float):
        """Record the duration of one successful engine run"""

        self.latency["count"] += 1
        self.latency["sum"] += duration_ms
        self.latency["min"] = min(self.latency["min"], duration_ms)
        self.latency["max"] = max(self.latency["max"], duration_ms)

        agent_logger.logger.info(
            "metric",
            metric_type="latency",
            duration_ms=duration_ms
        )

    def get_metrics_summary(self) -> Dict[str, Any]:
        """Get summary of all metrics"""

        count = self.latency["count"]
        return {
            "requests": {"total": sum(self.outcomes.values()), **self.outcomes},
            "reasons": dict(self.reasons),
            "latency_ms": {
                "count": count,
                "avg": self.latency["sum"] / count if count else 0.0,
                "min": self.latency["min"] if count else 0.0,
                "max": self.latency["max"]
            }
        }

    def reset(self):
        self.outcomes = {outcome: 0 for outcome in self.OUTCOMES}
        self.reasons = {}
        self.latency = {"count": 0, "sum": 0.0, "min": float('inf'), "max": 0.0}


# Global metrics collector
metrics = MetricsCollector()
