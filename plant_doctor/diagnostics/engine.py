"""Plant health diagnostic engine.

Entry point for a diagnostic session:

    selection -> rank_issues -> generate_care_actions  -+-> DiagnosticResult
                             -> generate_pot_recommendations -+

diagnose() is pure and synchronous. It never raises for odd input: an
empty selection short-circuits to an empty result and unknown symptom
ids are ignored. Saving a result is a separate step (see
plant_doctor.store), done by the caller after the result is built.
"""

import logging
from collections.abc import Iterable

from plant_doctor.diagnostics.actions import generate_care_actions
from plant_doctor.diagnostics.models import DiagnosticResult, Issue, TreatmentPlan, Urgency
from plant_doctor.diagnostics.pots import generate_pot_recommendations, has_root_symptoms
from plant_doctor.diagnostics.scorer import normalize_selection, rank_issues

logger = logging.getLogger(__name__)

FALLBACK_DIAGNOSIS = "General care needed"


def _clean_selection(selected_symptom_ids: Iterable[str] | str | None) -> frozenset[str]:
    """Coerce whatever the caller passed into a set of symptom ids."""
    if selected_symptom_ids is None:
        return frozenset()
    if isinstance(selected_symptom_ids, str):
        selected_symptom_ids = [selected_symptom_ids]
    return normalize_selection(s for s in selected_symptom_ids if isinstance(s, str))


def diagnose(
    selected_symptom_ids: Iterable[str],
    issues: Iterable[Issue] | None = None,
) -> DiagnosticResult:
    """Diagnose a plant from the symptoms a gardener observed.

    Args:
        selected_symptom_ids: Symptom ids, duplicates and unknown ids allowed.
        issues: Knowledgebase to diagnose against (defaults to the built-in one).

    Returns:
        A DiagnosticResult. Empty selections give an empty result with
        no actions and no pot recommendations.

    Example:
        >>> result = diagnose(["yellowing-leaves", "soft-mushy-stem", "root-rot"])
        >>> result.possible_causes[0].name
        'Overwatering'
    """
    selection = _clean_selection(selected_symptom_ids)
    if not selection:
        return DiagnosticResult()

    ranked = rank_issues(selection, issues)
    top_issues = [scored.issue for scored in ranked]
    actions, follow_ups = generate_care_actions(top_issues)

    pot_recommendations = None
    if has_root_symptoms(selection):
        pot_recommendations = tuple(generate_pot_recommendations(selection))

    logger.info(
        f"Diagnosed {len(selection)} symptoms -> "
        f"{[issue.name for issue in top_issues] or 'no matching issues'}"
    )

    return DiagnosticResult(
        possible_causes=tuple(top_issues),
        recommended_actions=tuple(actions),
        pot_recommendations=pot_recommendations,
        follow_up_schedule=tuple(follow_ups),
    )


def primary_diagnosis(result: DiagnosticResult) -> str:
    """Label for a result: the most likely cause, or a general fallback."""
    if result.possible_causes:
        return result.possible_causes[0].name
    return FALLBACK_DIAGNOSIS


def build_treatment_plan(result: DiagnosticResult) -> TreatmentPlan:
    """Snapshot a result into the treatment plan stored with a diagnostic.

    Immediate actions are listed separately from everything else, each
    group keeping the result's rank order.
    """
    return TreatmentPlan(
        diagnosis=primary_diagnosis(result),
        immediate_actions=[
            a.action for a in result.recommended_actions if a.urgency == Urgency.IMMEDIATE
        ],
        ongoing_care=[
            a.action for a in result.recommended_actions if a.urgency != Urgency.IMMEDIATE
        ],
        follow_up_schedule=list(result.follow_up_schedule),
        pot_recommendations=(
            list(result.pot_recommendations) if result.pot_recommendations is not None else None
        ),
    )
