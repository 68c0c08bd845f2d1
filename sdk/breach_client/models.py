"""Dataclass response models for the Breach Check Service API."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class CheckResult:
    is_breached: bool
    breach_count: int = 0
    error: str | None = None


@dataclass
class HealthStatus:
    status: str
    timestamp: str
