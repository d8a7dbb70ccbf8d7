"""Prioritization of open (unresolved) diagnostics.

A saved diagnostic becomes more pressing the longer it stays unresolved:

    critical: a critical symptom and open >= medium_after_days
    high:     open >= high_after_days
    medium:   open >= medium_after_days
    low:      recent
"""

import math
from collections.abc import Iterable
from datetime import UTC, datetime
from enum import Enum

from plant_doctor.core.config import TrackerSettings, settings
from plant_doctor.diagnostics.models import PersistedDiagnostic


class TrackerUrgency(str, Enum):
    """Dashboard urgency of an open diagnostic."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


URGENCY_ORDER: dict[TrackerUrgency, int] = {
    TrackerUrgency.CRITICAL: 0,
    TrackerUrgency.HIGH: 1,
    TrackerUrgency.MEDIUM: 2,
    TrackerUrgency.LOW: 3,
}

URGENCY_LABELS: dict[TrackerUrgency, str] = {
    TrackerUrgency.CRITICAL: "Critical - Needs Immediate Attention",
    TrackerUrgency.HIGH: "High Priority - Check Progress",
    TrackerUrgency.MEDIUM: "Medium Priority - Monitor",
    TrackerUrgency.LOW: "Low Priority - Recent",
}


def days_since(created_at: datetime, now: datetime | None = None) -> int:
    """Whole days between two instants, rounded up.

    Naive datetimes are treated as UTC.
    """
    now = now or datetime.now(UTC)
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=UTC)
    if now.tzinfo is None:
        now = now.replace(tzinfo=UTC)
    elapsed = abs((now - created_at).total_seconds())
    return math.ceil(elapsed / 86400)


def tracker_urgency(
    diagnostic: PersistedDiagnostic,
    now: datetime | None = None,
    config: TrackerSettings | None = None,
) -> TrackerUrgency:
    """Classify how urgently an open diagnostic needs a follow-up."""
    config = config or settings.tracker
    age = days_since(diagnostic.created_at, now)
    has_critical = any(symptom in config.critical_symptoms for symptom in diagnostic.symptoms)

    if has_critical and age >= config.medium_after_days:
        return TrackerUrgency.CRITICAL
    if age >= config.high_after_days:
        return TrackerUrgency.HIGH
    if age >= config.medium_after_days:
        return TrackerUrgency.MEDIUM
    return TrackerUrgency.LOW


def prioritize_active(
    diagnostics: Iterable[PersistedDiagnostic],
    now: datetime | None = None,
    config: TrackerSettings | None = None,
) -> list[tuple[PersistedDiagnostic, TrackerUrgency]]:
    """Drop resolved diagnostics and order the rest most urgent first.

    Diagnostics with the same urgency keep their incoming order
    (newest first when fed straight from a store).
    """
    now = now or datetime.now(UTC)
    graded = [(d, tracker_urgency(d, now, config)) for d in diagnostics if not d.resolved]
    return sorted(graded, key=lambda pair: URGENCY_ORDER[pair[1]])
