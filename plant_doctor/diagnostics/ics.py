"""ICS calendar export for follow-up reminders.

Converts a result's follow-up schedule into iCalendar (.ics) events so
gardeners can import the reminders into Apple Calendar, Google
Calendar, Outlook, etc.

The generated calendar uses RFC 5545 (iCalendar) format without any
third-party library; the format is simple enough for our use case.
"""

import uuid
from datetime import date, timedelta

from plant_doctor.diagnostics.models import DiagnosticResult

# "Check for X improvement in 3 days" reminders land this many days out
CHECK_OFFSET_DAYS = 3
# "Monitor X progress weekly" reminders start a week out and repeat
MONITOR_OFFSET_DAYS = 7
MONITOR_OCCURRENCES = 4


def _escape_ics(text: str) -> str:
    """Escape special characters for iCalendar text fields (RFC 5545 §3.3.11)."""
    return text.replace("\\", "\\\\").replace(";", "\\;").replace(",", "\\,").replace("\n", "\\n")


def _fold_line(line: str) -> str:
    """Fold long lines per RFC 5545 §3.1 (max 75 octets per line)."""
    if len(line.encode("utf-8")) <= 75:
        return line
    result: list[str] = []
    encoded = line.encode("utf-8")
    first_chunk = encoded[:75].decode("utf-8", errors="ignore")
    result.append(first_chunk)
    pos = len(first_chunk.encode("utf-8"))
    while pos < len(encoded):
        chunk = encoded[pos : pos + 74].decode("utf-8", errors="ignore")
        result.append(" " + chunk)
        pos += len(chunk.encode("utf-8"))
    return "\r\n".join(result)


def _is_weekly(entry: str) -> bool:
    return entry.rstrip().endswith("weekly")


def generate_follow_up_ics(
    result: DiagnosticResult,
    plant_name: str,
    ref_date: date | None = None,
) -> str:
    """Generate an iCalendar string from a result's follow-up schedule.

    3-day checks become a single all-day event three days after the
    reference date. Weekly monitoring reminders become a weekly recurring
    event starting a week out.

    Args:
        result: Diagnostic result whose follow-ups to export.
        plant_name: Plant name (used in the calendar name).
        ref_date: Date of the diagnosis (defaults to today).

    Returns:
        A valid iCalendar string ready to write to a .ics file.
    """
    base_date = ref_date or date.today()
    base_str = base_date.strftime("%Y%m%d")
    action_by_issue = {action.action: action for action in result.recommended_actions}

    lines: list[str] = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        "PRODID:-//Plant Doctor//EN",
        f"X-WR-CALNAME:{_escape_ics(f'Plant Care - {plant_name}')}",
    ]

    for idx, entry in enumerate(result.follow_up_schedule):
        weekly = _is_weekly(entry)
        offset = MONITOR_OFFSET_DAYS if weekly else CHECK_OFFSET_DAYS
        event_date = base_date + timedelta(days=offset)
        date_str = event_date.strftime("%Y%m%d")

        # Follow-ups line up one-to-one with the per-issue actions
        description = ""
        if idx < len(result.possible_causes):
            issue = result.possible_causes[idx]
            action = action_by_issue.get(f"Address {issue.name}") or action_by_issue.get(
                f"Monitor and treat {issue.name}"
            )
            if action:
                description = "\\n".join(_escape_ics(step) for step in action.instructions)

        lines.append("BEGIN:VEVENT")
        # Stable across re-exports, distinct per plant
        uid = uuid.uuid5(uuid.NAMESPACE_URL, f"plant-doctor:{plant_name}:{base_str}:{idx}:{entry}")
        lines.append(f"UID:{uid}@plant-doctor")
        lines.append(f"DTSTART;VALUE=DATE:{date_str}")
        lines.append(f"DTEND;VALUE=DATE:{(event_date + timedelta(days=1)).strftime('%Y%m%d')}")
        lines.append(_fold_line(f"SUMMARY:{_escape_ics(f'{plant_name}: {entry}')}"))
        if description:
            lines.append(_fold_line(f"DESCRIPTION:{description}"))
        if weekly:
            lines.append(f"RRULE:FREQ=WEEKLY;COUNT={MONITOR_OCCURRENCES}")
        lines.append(f"PRIORITY:{5 if weekly else 1}")
        lines.append("STATUS:NEEDS-ACTION")
        lines.append("END:VEVENT")

    lines.append("END:VCALENDAR")

    # RFC 5545 requires CRLF line endings
    return "\r\n".join(lines) + "\r\n"
