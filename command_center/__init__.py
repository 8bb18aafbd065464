"""Agentic Command Center: single-shot reasoning over caller-owned memory."""

__version__ = "0.1.0"
