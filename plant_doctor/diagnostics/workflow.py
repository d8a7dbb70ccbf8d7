"""Diagnostic Session Workflow.

This module wraps the diagnostic engine in a LangGraph workflow used by
the API:

    START -> run_diagnosis -+-> render_plan -> END
                            +-> END  (nothing selected)

Each node receives the full state and returns a partial update. Both
nodes are pure; persistence is left to the caller.
"""

import logging

from langgraph.graph import END, START, StateGraph
from langgraph.graph.state import CompiledStateGraph
from pydantic import BaseModel, Field

from plant_doctor.diagnostics.engine import build_treatment_plan, diagnose
from plant_doctor.diagnostics.models import DiagnosticResult, TreatmentPlan
from plant_doctor.diagnostics.render import render_treatment_plan

logger = logging.getLogger(__name__)


class DiagnosticSessionState(BaseModel):
    """State that flows through the diagnostic session workflow.

    1. Input sets: symptoms, plant_name
    2. run_diagnosis sets: result, treatment_plan
    3. render_plan sets: markdown_output
    """

    # --- Input ---
    symptoms: list[str] = Field(
        default_factory=list,
        description="Symptom ids selected by the gardener",
    )
    plant_name: str | None = Field(
        default=None,
        description="Plant name used in the rendered plan",
    )

    # --- Output ---
    result: DiagnosticResult | None = Field(default=None)
    treatment_plan: TreatmentPlan | None = Field(default=None)
    markdown_output: str | None = Field(default=None)


# =============================================================================
# NODE FUNCTIONS
# =============================================================================


def run_diagnosis(state: DiagnosticSessionState) -> dict:
    """Diagnose the selected symptoms and snapshot the treatment plan."""
    result = diagnose(state.symptoms)
    return {"result": result, "treatment_plan": build_treatment_plan(result)}


def plan_router(state: DiagnosticSessionState) -> str:
    """Skip rendering when nothing was selected.

    This is a conditional edge function for LangGraph.
    """
    if state.result is None or not state.result.recommended_actions:
        logger.info("Empty selection, skipping plan rendering")
        return "end"
    return "render_plan"


def render_plan(state: DiagnosticSessionState) -> dict:
    """Render the diagnostic result as markdown."""
    if state.result is None:
        return {}
    return {"markdown_output": render_treatment_plan(state.result, state.plant_name)}


# =============================================================================
# GRAPH CONSTRUCTION
# =============================================================================


def build_diagnostic_graph() -> StateGraph:
    """Build the diagnostic session graph.

    Returns:
        Configured StateGraph (not yet compiled).
    """
    graph = StateGraph(DiagnosticSessionState)

    graph.add_node("run_diagnosis", run_diagnosis)
    graph.add_node("render_plan", render_plan)

    graph.add_edge(START, "run_diagnosis")
    graph.add_conditional_edges(
        "run_diagnosis",
        plan_router,
        {
            "render_plan": "render_plan",
            "end": END,
        },
    )
    graph.add_edge("render_plan", END)

    return graph


def create_diagnostic_workflow() -> CompiledStateGraph:
    """Create a compiled diagnostic session workflow.

    Example:
        >>> workflow = create_diagnostic_workflow()
        >>> out = workflow.invoke({"symptoms": ["root-rot"], "plant_name": "Monstera"})
        >>> out["result"].possible_causes[0].name
        'Overwatering'
    """
    return build_diagnostic_graph().compile()
