"""Domain event contracts for submission checks."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


@dataclass(frozen=True, slots=True)
class DomainEvent:
    """Base domain event emitted by application services."""

    correlation_id: str
    payload_summary: dict[str, Any]
    occurred_at: datetime = field(default_factory=lambda: datetime.now(tz=timezone.utc))


@dataclass(frozen=True, slots=True)
class FilenameValidated(DomainEvent):
    """A filename was checked against its preset grammar."""


@dataclass(frozen=True, slots=True)
class CriteriaEvaluated(DomainEvent):
    """Header properties were read and checked against technical criteria."""


@dataclass(frozen=True, slots=True)
class SubmissionChecked(DomainEvent):
    """A per-file report with an overall status was produced."""


@dataclass(frozen=True, slots=True)
class SubmissionFailed(DomainEvent):
    """A file could not be read well enough to evaluate its criteria."""
