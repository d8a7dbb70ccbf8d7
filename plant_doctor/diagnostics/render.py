"""Markdown rendering of a diagnostic result.

Produces a treatment plan that can be pasted into a notes app:
- Likely causes with severity
- Immediate actions, then ongoing care, as checkboxes
- Follow-up schedule
- Pot guidance when root symptoms were selected
"""

import logging

from plant_doctor.diagnostics.models import CareAction, DiagnosticResult, Urgency

logger = logging.getLogger(__name__)

URGENCY_LABELS: dict[Urgency, str] = {
    Urgency.IMMEDIATE: "Immediate",
    Urgency.WITHIN_DAYS: "Within days",
    Urgency.ONGOING: "Ongoing",
}


def _render_action(action: CareAction) -> list[str]:
    """Render one care action as a checkbox with its instructions."""
    lines = [
        f"- [ ] **{action.action}** ({URGENCY_LABELS[action.urgency]}, {action.timeframe})"
    ]
    for instruction in action.instructions:
        lines.append(f"  - {instruction}")
    lines.append(f"  - *Expected: {action.expected_results}*")
    return lines


def render_treatment_plan(result: DiagnosticResult, plant_name: str | None = None) -> str:
    """Render a diagnostic result as markdown.

    Args:
        result: The result to render.
        plant_name: Optional plant name for the heading.

    Returns:
        Markdown text. An empty result renders a short "nothing selected" note.
    """
    title = f"# Treatment Plan for {plant_name}" if plant_name else "# Treatment Plan"
    lines = [title, ""]

    if not result.recommended_actions:
        lines.append("No symptoms selected. Pick the symptoms you have noticed to get a diagnosis.")
        return "\n".join(lines) + "\n"

    lines.extend(["## Possible Causes", ""])
    if result.possible_causes:
        for rank, issue in enumerate(result.possible_causes, 1):
            lines.append(f"{rank}. **{issue.name}** ({issue.severity.value} severity)")
            if issue.causes:
                lines.append(f"   - Usually caused by: {issue.causes[0].lower()}")
    else:
        lines.append("No known issue matches these symptoms.")
    lines.append("")

    immediate = [a for a in result.recommended_actions if a.urgency == Urgency.IMMEDIATE]
    ongoing = [a for a in result.recommended_actions if a.urgency != Urgency.IMMEDIATE]

    if immediate:
        lines.extend(["## Immediate Actions", ""])
        for action in immediate:
            lines.extend(_render_action(action))
        lines.append("")

    lines.extend(["## Ongoing Care", ""])
    for action in ongoing:
        lines.extend(_render_action(action))
    lines.append("")

    if result.follow_up_schedule:
        lines.extend(["## Follow-up Schedule", ""])
        lines.extend(f"- {entry}" for entry in result.follow_up_schedule)
        lines.append("")

    if result.pot_recommendations:
        lines.extend(["## Pot Recommendations", ""])
        for rec in result.pot_recommendations:
            drainage = "with drainage holes" if rec.drainage else "no drainage needed"
            lines.append(f"- **{rec.material.value.title()}**, {rec.size.lower()} ({drainage})")
            lines.append(f"  - {rec.reasoning}")
        lines.append("")

    prevention = [tip for issue in result.possible_causes for tip in issue.prevention[:2]]
    if prevention:
        lines.extend(["---", "", "## Prevention", ""])
        lines.extend(f"- {tip}" for tip in prevention)

    markdown = "\n".join(lines).rstrip() + "\n"
    logger.info(f"Rendered treatment plan ({len(markdown)} chars)")
    return markdown
