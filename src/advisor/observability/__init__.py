"""Observability package: structlog configuration."""

from __future__ import annotations

from src.advisor.observability.logging import configure_structlog

__all__ = ["configure_structlog"]
