"""Care action plan generation.

Turns the ranked issue shortlist into one care action per issue plus a
follow-up reminder, then closes the plan with a general health check.
Actions stay in rank order; they are never re-sorted by urgency.
"""

from collections.abc import Iterable

from plant_doctor.diagnostics.models import CareAction, Issue, Severity, Urgency

GENERAL_HEALTH_CHECK = CareAction(
    action="General Plant Health Check",
    urgency=Urgency.ONGOING,
    instructions=(
        "Check soil moisture regularly",
        "Inspect for new symptoms weekly",
        "Ensure proper light and air circulation",
        "Remove any dead or dying plant material",
    ),
    expected_results="Maintained plant health and early problem detection",
    timeframe="Ongoing",
)

# Severity -> urgency tier for the per-issue action
SEVERITY_URGENCY: dict[Severity, Urgency] = {
    Severity.HIGH: Urgency.IMMEDIATE,
    Severity.MEDIUM: Urgency.WITHIN_DAYS,
    Severity.LOW: Urgency.ONGOING,
}


def action_for_issue(issue: Issue) -> tuple[CareAction, str]:
    """Build the care action and follow-up reminder for one issue.

    High-severity issues get the first three treatments and a 3-day
    check; everything else gets the first two and a weekly reminder.

    Returns:
        (care action, follow-up reminder text)
    """
    if issue.severity == Severity.HIGH:
        action = CareAction(
            action=f"Address {issue.name}",
            urgency=Urgency.IMMEDIATE,
            instructions=issue.treatments[0:3],
            expected_results="Symptoms should begin to improve within 3-7 days",
            timeframe="1-2 weeks",
        )
        return action, f"Check for {issue.name} improvement in 3 days"

    action = CareAction(
        action=f"Monitor and treat {issue.name}",
        urgency=SEVERITY_URGENCY[issue.severity],
        instructions=issue.treatments[0:2],
        expected_results="Gradual improvement over 1-2 weeks",
        timeframe="2-4 weeks",
    )
    return action, f"Monitor {issue.name} progress weekly"


def generate_care_actions(ranked_issues: Iterable[Issue]) -> tuple[list[CareAction], list[str]]:
    """Generate the care plan for a ranked issue list.

    The caller only invokes this for a non-empty selection, so the
    general health check is always appended, even when no issue matched.

    Args:
        ranked_issues: Issues in rank order.

    Returns:
        (care actions, follow-up schedule)
    """
    actions: list[CareAction] = []
    follow_ups: list[str] = []
    for issue in ranked_issues:
        action, follow_up = action_for_issue(issue)
        actions.append(action)
        follow_ups.append(follow_up)
    actions.append(GENERAL_HEALTH_CHECK)
    return actions, follow_ups
