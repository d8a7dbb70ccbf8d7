"""Tests for markdown rendering and the diagnostic session workflow."""

from plant_doctor.diagnostics.engine import diagnose
from plant_doctor.diagnostics.models import DiagnosticResult
from plant_doctor.diagnostics.render import render_treatment_plan
from plant_doctor.diagnostics.workflow import (
    DiagnosticSessionState,
    build_diagnostic_graph,
    create_diagnostic_workflow,
    plan_router,
)

# =============================================================================
# MARKDOWN RENDERING
# =============================================================================


class TestRenderTreatmentPlan:
    """Tests for render_treatment_plan()."""

    def test_title_with_plant_name(self) -> None:
        md = render_treatment_plan(diagnose(["root-rot"]), plant_name="Monstera")
        assert md.startswith("# Treatment Plan for Monstera\n")

    def test_title_without_plant_name(self) -> None:
        md = render_treatment_plan(diagnose(["root-rot"]))
        assert md.startswith("# Treatment Plan\n")

    def test_empty_result(self) -> None:
        md = render_treatment_plan(DiagnosticResult())
        assert "No symptoms selected" in md
        assert "## Possible Causes" not in md

    def test_sections_in_order(self) -> None:
        md = render_treatment_plan(diagnose(["root-rot", "pest-presence"]))
        positions = [
            md.index("## Possible Causes"),
            md.index("## Immediate Actions"),
            md.index("## Ongoing Care"),
            md.index("## Follow-up Schedule"),
            md.index("## Pot Recommendations"),
            md.index("## Prevention"),
        ]
        assert positions == sorted(positions)

    def test_causes_are_numbered_with_severity(self) -> None:
        md = render_treatment_plan(diagnose(["root-rot", "pest-presence"]))
        assert "1. **Overwatering** (high severity)" in md
        assert "2. **Pest Infestation** (medium severity)" in md

    def test_actions_are_checkboxes(self) -> None:
        md = render_treatment_plan(diagnose(["root-rot"]))
        assert "- [ ] **Address Overwatering** (Immediate, 1-2 weeks)" in md
        assert "- [ ] **General Plant Health Check** (Ongoing, Ongoing)" in md
        assert "  - Stop watering immediately" in md

    def test_no_immediate_section_without_high_severity(self) -> None:
        md = render_treatment_plan(diagnose(["pest-presence"]))
        assert "## Immediate Actions" not in md
        assert "**Monitor and treat Pest Infestation** (Within days, 2-4 weeks)" in md

    def test_pot_section_only_for_root_symptoms(self) -> None:
        assert "## Pot Recommendations" not in render_treatment_plan(diagnose(["pest-presence"]))
        md = render_treatment_plan(diagnose(["root-bound"]))
        assert "**Ceramic**, 2-4 inches larger in diameter (with drainage holes)" in md

    def test_unknown_symptoms_render_general_check(self) -> None:
        md = render_treatment_plan(diagnose(["glowing-leaves"]))
        assert "No known issue matches these symptoms." in md
        assert "General Plant Health Check" in md
        assert "## Follow-up Schedule" not in md
        assert "## Prevention" not in md

    def test_ends_with_single_newline(self) -> None:
        md = render_treatment_plan(diagnose(["root-rot"]))
        assert md.endswith("\n")
        assert not md.endswith("\n\n")


# =============================================================================
# WORKFLOW
# =============================================================================


class TestDiagnosticWorkflow:
    """Tests for the LangGraph diagnostic session workflow."""

    def test_graph_compiles(self) -> None:
        graph = build_diagnostic_graph()
        assert graph.compile() is not None

    def test_router_ends_on_empty_result(self) -> None:
        state = DiagnosticSessionState(result=DiagnosticResult())
        assert plan_router(state) == "end"

    def test_router_renders_when_actions_exist(self) -> None:
        state = DiagnosticSessionState(result=diagnose(["root-rot"]))
        assert plan_router(state) == "render_plan"

    def test_full_run(self) -> None:
        workflow = create_diagnostic_workflow()
        out = workflow.invoke({"symptoms": ["root-rot"], "plant_name": "Monstera"})
        assert out["result"].possible_causes[0].name == "Overwatering"
        assert out["treatment_plan"].diagnosis == "Overwatering"
        assert out["markdown_output"].startswith("# Treatment Plan for Monstera")

    def test_empty_run_skips_rendering(self) -> None:
        workflow = create_diagnostic_workflow()
        out = workflow.invoke({"symptoms": []})
        assert out["result"] == DiagnosticResult()
        assert out["treatment_plan"].diagnosis == "General care needed"
        assert out.get("markdown_output") is None

    def test_workflow_matches_direct_call(self) -> None:
        symptoms = ["pale-leaves", "no-flowering", "leggy-growth"]
        out = create_diagnostic_workflow().invoke({"symptoms": symptoms})
        assert out["result"] == diagnose(symptoms)
