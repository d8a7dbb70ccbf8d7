"""Models for the plant health diagnostic engine.

This module contains the Pydantic models used by the diagnostic system:
- Symptom / Issue: Read-only reference data (catalog and knowledgebase)
- CareAction / PotRecommendation: Pieces of a generated remediation plan
- DiagnosticResult: Output of a single diagnose() call
- TreatmentPlan / PersistedDiagnostic: What gets stored after a session

Reference data and results are frozen. Once built they are never mutated,
so they can be shared freely between concurrent requests.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

# =============================================================================
# ENUMS
# =============================================================================


class SymptomCategory(str, Enum):
    """Where on the plant a symptom is observed."""

    LEAVES = "leaves"
    STEMS = "stems"
    ROOTS = "roots"
    GROWTH = "growth"


class Severity(str, Enum):
    """How serious an issue is if left untreated.

    Severity drives the urgency tier of the generated care action:
    - HIGH: Act now (immediate)
    - MEDIUM: Act within a few days
    - LOW: Ongoing adjustment
    """

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Urgency(str, Enum):
    """Urgency tier of a care action."""

    IMMEDIATE = "immediate"
    WITHIN_DAYS = "within_days"
    ONGOING = "ongoing"


class PotMaterial(str, Enum):
    """Container materials the pot generator can recommend."""

    TERRACOTTA = "terracotta"
    CERAMIC = "ceramic"
    PLASTIC = "plastic"
    FABRIC = "fabric"
    HANGING = "hanging"


# =============================================================================
# REFERENCE DATA
# =============================================================================


class Symptom(BaseModel):
    """An atomic, user-observable plant condition.

    Example:
        {
            "id": "yellowing-leaves",
            "category": "leaves",
            "name": "Yellowing Leaves",
            "description": "Leaves turning yellow, starting from older leaves"
        }
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Globally unique symptom identifier (kebab-case)")
    category: SymptomCategory = Field(description="Part of the plant where it shows")
    name: str = Field(description="Human-readable label")
    description: str = Field(description="What the gardener should look for")


class Issue(BaseModel):
    """A candidate root cause, defined by the symptoms it produces.

    `treatments` is ordered: the action generator takes a prefix of it,
    so the most important steps must come first.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Unique issue name (e.g., 'Overwatering')")
    symptoms: tuple[str, ...] = Field(
        min_length=1,
        description="Symptom ids that define this issue",
    )
    causes: tuple[str, ...] = Field(default=(), description="Likely causes, most common first")
    treatments: tuple[str, ...] = Field(default=(), description="Treatment steps, in order")
    prevention: tuple[str, ...] = Field(default=(), description="How to avoid a recurrence")
    severity: Severity = Field(description="How serious the issue is")
    commonness: float = Field(
        ge=0.0,
        le=1.0,
        description="Prevalence weight used to scale the coverage ratio",
    )


# =============================================================================
# DIAGNOSTIC OUTPUT
# =============================================================================


class CareAction(BaseModel):
    """One step of the generated remediation plan."""

    model_config = ConfigDict(frozen=True)

    action: str = Field(description="Short label (e.g., 'Address Overwatering')")
    urgency: Urgency = Field(description="When this should be done")
    instructions: tuple[str, ...] = Field(default=(), description="Ordered instructions")
    expected_results: str = Field(description="What the gardener should see if it works")
    timeframe: str = Field(description="How long until results are expected")


class PotRecommendation(BaseModel):
    """Container guidance derived from root symptoms."""

    model_config = ConfigDict(frozen=True)

    size: str = Field(description="Size guidance relative to the current pot")
    material: PotMaterial = Field(description="Recommended pot material")
    drainage: bool = Field(default=True, description="Whether drainage holes are required")
    reasoning: str = Field(description="Why this container helps")


class ScoredIssue(BaseModel):
    """An issue together with the numbers that ranked it."""

    model_config = ConfigDict(frozen=True)

    issue: Issue
    match_count: int = Field(ge=1, description="Symptoms shared with the selection")
    score: float = Field(ge=0.0, description="Coverage ratio scaled by commonness")


class DiagnosticResult(BaseModel):
    """The outcome of one diagnostic session.

    `pot_recommendations` is None (not an empty list) when no root
    symptom was selected, so callers can tell "not applicable" apart
    from "nothing to recommend".
    """

    model_config = ConfigDict(frozen=True)

    possible_causes: tuple[Issue, ...] = Field(
        default=(),
        description="Up to 3 issues, most likely first",
    )
    recommended_actions: tuple[CareAction, ...] = Field(
        default=(),
        description="Care actions in rank order, general health check last",
    )
    pot_recommendations: tuple[PotRecommendation, ...] | None = Field(
        default=None,
        description="Container guidance, only present for root symptoms",
    )
    follow_up_schedule: tuple[str, ...] = Field(
        default=(),
        description="Follow-up reminders, one per ranked issue",
    )


# =============================================================================
# PERSISTENCE MODELS
# =============================================================================


class TreatmentPlan(BaseModel):
    """Snapshot of a result, stored alongside a saved diagnostic.

    Splits the action list into what must happen now and what is ongoing,
    the same way the treatment plan screen presents it.
    """

    diagnosis: str = Field(description="Primary diagnosis label")
    immediate_actions: list[str] = Field(default_factory=list)
    ongoing_care: list[str] = Field(default_factory=list)
    follow_up_schedule: list[str] = Field(default_factory=list)
    pot_recommendations: list[PotRecommendation] | None = Field(default=None)


class PersistedDiagnostic(BaseModel):
    """A diagnostic session saved by a DiagnosticStore.

    Only the store creates these. After creation the only change is the
    `resolved` flag, toggled through the store.
    """

    id: str = Field(description="Store-assigned identifier")
    plant_id: str = Field(description="Plant the session was run for")
    symptoms: list[str] = Field(description="The selection that produced the diagnosis")
    diagnosis: str | None = Field(default=None, description="Primary diagnosis label")
    treatment_plan: TreatmentPlan | None = Field(default=None)
    resolved: bool = Field(default=False)
    created_at: datetime = Field(description="When the session was saved (UTC)")
