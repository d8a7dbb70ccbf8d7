"""
Evaluation runner for the diagnostic engine.

This script:
1. Loads golden scenarios from diagnosis_golden.json
2. Runs diagnose() for each scenario
3. Checks the top cause, required causes, first action urgency and pot materials
4. Saves a report to eval/reports/

The engine is deterministic, so this doubles as a regression guard when
the knowledgebase data changes.

Usage:
    python -m eval.run_diagnosis_eval
    python -m eval.run_diagnosis_eval --scenario classic_overwatering
    python -m eval.run_diagnosis_eval --threshold-check
"""

import argparse
import json
import sys
from dataclasses import asdict, dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any

from plant_doctor.diagnostics.engine import diagnose

# =============================================================================
# THRESHOLDS: Fixed floors to prevent quality regression
# =============================================================================

THRESHOLDS: dict[str, float] = {
    "overall_pass_rate": 1.0,
}


@dataclass
class ScenarioEvalResult:
    """Evaluation results for a single golden scenario."""

    scenario_id: str
    symptoms: list[str]

    # Actual output
    actual_causes: list[str] = field(default_factory=list)
    actual_first_urgency: str | None = None
    actual_pot_materials: list[str] | None = None

    # Checks
    top_cause_correct: bool = False
    required_causes_present: bool = False
    first_urgency_correct: bool = False
    pot_materials_correct: bool = False

    checks_passed: int = 0
    checks_total: int = 4


def load_golden_scenarios() -> dict[str, Any]:
    """Load golden scenarios from diagnosis_golden.json."""
    golden_path = Path(__file__).parent / "diagnosis_golden.json"
    with open(golden_path) as f:
        result: dict[str, Any] = json.load(f)
        return result


def evaluate_scenario(scenario: dict) -> ScenarioEvalResult:
    """Run one scenario through the engine and score it."""
    expected = scenario["expected"]
    eval_result = ScenarioEvalResult(scenario_id=scenario["id"], symptoms=scenario["symptoms"])

    result = diagnose(scenario["symptoms"])
    eval_result.actual_causes = [issue.name for issue in result.possible_causes]
    if result.recommended_actions:
        eval_result.actual_first_urgency = result.recommended_actions[0].urgency.value
    if result.pot_recommendations is not None:
        eval_result.actual_pot_materials = [r.material.value for r in result.pot_recommendations]

    top = eval_result.actual_causes[0] if eval_result.actual_causes else None
    eval_result.top_cause_correct = top == expected.get("top_cause")
    eval_result.required_causes_present = all(
        name in eval_result.actual_causes for name in expected.get("must_include", [])
    )
    eval_result.first_urgency_correct = (
        eval_result.actual_first_urgency == expected.get("first_urgency")
    )
    eval_result.pot_materials_correct = (
        eval_result.actual_pot_materials == expected.get("pot_materials")
    )

    eval_result.checks_passed = sum(
        [
            eval_result.top_cause_correct,
            eval_result.required_causes_present,
            eval_result.first_urgency_correct,
            eval_result.pot_materials_correct,
        ]
    )
    return eval_result


def generate_report(results: list[ScenarioEvalResult]) -> str:
    """Render evaluation results as a markdown report."""
    passed = sum(r.checks_passed for r in results)
    total = sum(r.checks_total for r in results)
    rate = passed / total if total else 0.0

    lines = [
        "# Diagnostic Engine Evaluation",
        f"*Generated {datetime.now().strftime('%Y-%m-%d %H:%M')}*",
        "",
        f"**Overall**: {passed}/{total} checks passed ({rate:.0%})",
        "",
        "| Scenario | Top cause | Required | Urgency | Pots | Causes |",
        "|---|---|---|---|---|---|",
    ]

    def mark(ok: bool) -> str:
        return "PASS" if ok else "FAIL"

    for r in results:
        lines.append(
            f"| {r.scenario_id} | {mark(r.top_cause_correct)} | "
            f"{mark(r.required_causes_present)} | {mark(r.first_urgency_correct)} | "
            f"{mark(r.pot_materials_correct)} | {', '.join(r.actual_causes) or '-'} |"
        )
    return "\n".join(lines) + "\n"


def check_thresholds(results: list[ScenarioEvalResult]) -> list[str]:
    """Return threshold violations (empty if all thresholds are met)."""
    total = sum(r.checks_total for r in results)
    rate = sum(r.checks_passed for r in results) / total if total else 0.0
    failures = []
    if rate < THRESHOLDS["overall_pass_rate"]:
        failures.append(
            f"overall_pass_rate {rate:.2f} < threshold {THRESHOLDS['overall_pass_rate']:.2f}"
        )
    return failures


def main() -> int:
    """Run the evaluation.

    Returns:
        Process exit code (1 if --threshold-check fails).
    """
    parser = argparse.ArgumentParser(description="Evaluate the diagnostic engine")
    parser.add_argument("--scenario", help="Run only the scenario with this id")
    parser.add_argument(
        "--threshold-check",
        action="store_true",
        help="Exit non-zero if pass rate is below the threshold",
    )
    args = parser.parse_args()

    scenarios = load_golden_scenarios()["scenarios"]
    if args.scenario:
        scenarios = [s for s in scenarios if s["id"] == args.scenario]
        if not scenarios:
            print(f"Unknown scenario: {args.scenario}")
            return 1

    results = [evaluate_scenario(s) for s in scenarios]
    report = generate_report(results)
    print(report)

    reports_dir = Path(__file__).parent / "reports"
    reports_dir.mkdir(exist_ok=True)
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    (reports_dir / f"diagnosis_eval_{stamp}.md").write_text(report)
    (reports_dir / f"diagnosis_eval_{stamp}.json").write_text(
        json.dumps([asdict(r) for r in results], indent=2)
    )

    if args.threshold_check:
        failures = check_thresholds(results)
        for failure in failures:
            print(f"THRESHOLD FAILED: {failure}")
        if failures:
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
