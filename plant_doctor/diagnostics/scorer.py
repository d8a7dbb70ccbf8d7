"""Issue scoring and ranking.

Each issue is scored by how much of its symptom profile was observed,
weighted by how common the issue is:

    score = (match_count / len(issue.symptoms)) * issue.commonness

A single matched symptom on a common 4-symptom issue (0.25 * 0.8 = 0.2)
therefore outranks a single match on a rarer one (0.25 * 0.4 = 0.1).
"""

import logging
from collections.abc import Iterable

from plant_doctor.diagnostics.catalog import get_issues
from plant_doctor.diagnostics.models import Issue, ScoredIssue

logger = logging.getLogger(__name__)

MAX_POSSIBLE_CAUSES = 3


def normalize_selection(selected_symptom_ids: Iterable[str]) -> frozenset[str]:
    """De-duplicate a symptom selection.

    Unknown ids are kept: they simply never match anything.
    """
    return frozenset(selected_symptom_ids)


def score_issue(issue: Issue, selection: frozenset[str]) -> ScoredIssue | None:
    """Score one issue against a selection.

    Returns:
        The scored issue, or None if no defining symptom was selected.
    """
    defining = set(issue.symptoms)
    match_count = len(defining & selection)
    if match_count == 0:
        return None
    score = (match_count / len(defining)) * issue.commonness
    return ScoredIssue(issue=issue, match_count=match_count, score=score)


def score_issues(
    selection: frozenset[str],
    issues: Iterable[Issue] | None = None,
) -> list[ScoredIssue]:
    """Score every issue that shares at least one symptom with the selection.

    Results are in knowledgebase order; ranking happens in rank_issues().
    """
    if issues is None:
        issues = get_issues()
    scored = []
    for issue in issues:
        result = score_issue(issue, selection)
        if result is not None:
            scored.append(result)
    return scored


def rank_issues(
    selection: frozenset[str],
    issues: Iterable[Issue] | None = None,
    limit: int = MAX_POSSIBLE_CAUSES,
) -> list[ScoredIssue]:
    """Rank matching issues by score and keep the top few.

    Python's sort is stable, so issues with equal scores stay in
    knowledgebase declaration order.

    Args:
        selection: De-duplicated symptom ids.
        issues: Knowledgebase to rank (defaults to the built-in one).
        limit: Maximum number of issues to return.

    Returns:
        Up to `limit` scored issues, highest score first.
    """
    scored = score_issues(selection, issues)
    ranked = sorted(scored, key=lambda s: s.score, reverse=True)[:limit]
    logger.debug(
        f"Ranked {len(scored)} matching issues: "
        + ", ".join(f"{s.issue.name}={s.score:.3f}" for s in ranked)
    )
    return ranked
