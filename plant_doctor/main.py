"""FastAPI application for Plant Doctor."""

import logging
from datetime import date

from fastapi import Depends, FastAPI, HTTPException, Response
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from plant_doctor.core.config import settings
from plant_doctor.diagnostics.catalog import get_symptoms, get_symptoms_by_category
from plant_doctor.diagnostics.ics import generate_follow_up_ics
from plant_doctor.diagnostics.models import (
    DiagnosticResult,
    PersistedDiagnostic,
    Symptom,
    SymptomCategory,
    TreatmentPlan,
)
from plant_doctor.diagnostics.tracker import (
    URGENCY_LABELS,
    TrackerUrgency,
    days_since,
    prioritize_active,
)
from plant_doctor.diagnostics.workflow import create_diagnostic_workflow
from plant_doctor.enrichment.ingest import CareProfileCache, ingest_species
from plant_doctor.enrichment.models import CareProfile
from plant_doctor.llm.tracing import init_tracing, observe
from plant_doctor.store import DiagnosticRecordService, create_store

logging.basicConfig(level=logging.DEBUG if settings.debug else logging.INFO)
logger = logging.getLogger(__name__)

# Initialize Langfuse tracing (no-op when OBSERVABILITY__ENABLED=false)
init_tracing()

app = FastAPI(
    title="Plant Doctor",
    description="Symptom-based plant health diagnosis with treatment plans and follow-up tracking",
    version="0.1.0",
)

# =============================================================================
# SHARED STATE
# =============================================================================
# The compiled workflow is stateless and reused across requests. The record
# service and care profile cache are injected through dependencies so tests
# can swap them.

_diagnostic_workflow = create_diagnostic_workflow()
_record_service = DiagnosticRecordService(create_store(settings.store))
_care_profile_cache = CareProfileCache()

# CORS middleware for frontend development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173", "http://localhost:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_record_service() -> DiagnosticRecordService:
    """Dependency: the diagnostic record service."""
    return _record_service


def get_care_profile_cache() -> CareProfileCache:
    """Dependency: the care profile cache."""
    return _care_profile_cache


# =============================================================================
# REQUEST/RESPONSE MODELS
# =============================================================================
# API-specific models. Domain models live in plant_doctor/diagnostics/models.py


class DiagnoseRequest(BaseModel):
    """Request body for diagnosis endpoints."""

    symptoms: list[str] = Field(default_factory=list, description="Selected symptom ids")
    plant_name: str | None = Field(default=None, description="Used in the rendered plan")


class DiagnoseResponse(BaseModel):
    """Response from /diagnose."""

    diagnosis: str
    result: DiagnosticResult
    treatment_plan: TreatmentPlan
    markdown: str | None = None


class SavedDiagnosisResponse(DiagnoseResponse):
    """Response from saving a diagnosis.

    `saved` is False when the store failed; the result is still returned.
    """

    saved: bool
    record: PersistedDiagnostic | None = None


class StatusUpdateRequest(BaseModel):
    """Request body for resolving a diagnostic."""

    resolved: bool


class StatusUpdateResponse(BaseModel):
    """Response after resolving a diagnostic."""

    id: str
    resolved: bool


class ActiveDiagnostic(BaseModel):
    """An open diagnostic with its dashboard urgency."""

    diagnostic: PersistedDiagnostic
    urgency: TrackerUrgency
    urgency_label: str
    days_open: int


class ActiveDiagnosticsResponse(BaseModel):
    """Open diagnostics for a user, most urgent first."""

    total: int
    diagnostics: list[ActiveDiagnostic]


class CareProfileRequest(BaseModel):
    """Request body for /care-profiles."""

    species: str = Field(min_length=1)


# =============================================================================
# HELPERS
# =============================================================================


def _run_diagnosis(request: DiagnoseRequest) -> DiagnoseResponse:
    state = _diagnostic_workflow.invoke(
        {"symptoms": request.symptoms, "plant_name": request.plant_name}
    )
    treatment_plan: TreatmentPlan = state["treatment_plan"]
    return DiagnoseResponse(
        diagnosis=treatment_plan.diagnosis,
        result=state["result"],
        treatment_plan=treatment_plan,
        markdown=state.get("markdown_output"),
    )


# =============================================================================
# ENDPOINTS
# =============================================================================


@app.get("/health")
def health_check() -> dict:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/symptoms", response_model=list[Symptom])
def list_symptoms(category: SymptomCategory | None = None) -> list[Symptom]:
    """
    List observable symptoms in catalog order.

    Optionally filtered to one category (leaves, stems, roots, growth).
    """
    if category is None:
        return list(get_symptoms())
    return list(get_symptoms_by_category(category))


@app.post("/diagnose", response_model=DiagnoseResponse)
@observe(name="api_diagnose")
def diagnose_symptoms(request: DiagnoseRequest) -> DiagnoseResponse:
    """
    Diagnose a plant from selected symptoms.

    Unknown symptom ids are ignored and an empty selection returns an
    empty result. Nothing is saved.
    """
    return _run_diagnosis(request)


@app.post("/diagnose/follow-ups.ics")
@observe(name="api_follow_up_calendar")
def follow_up_calendar(request: DiagnoseRequest) -> Response:
    """
    Export the follow-up schedule for a selection as an .ics calendar.
    """
    response = _run_diagnosis(request)
    ics = generate_follow_up_ics(response.result, request.plant_name or "My plant", date.today())
    return Response(
        content=ics,
        media_type="text/calendar",
        headers={"Content-Disposition": 'attachment; filename="plant-follow-ups.ics"'},
    )


# =============================================================================
# DIAGNOSTIC HISTORY ENDPOINTS
# =============================================================================


@app.post("/plants/{plant_id}/diagnostics", response_model=SavedDiagnosisResponse)
@observe(name="api_save_diagnostic")
async def save_diagnostic(
    plant_id: str,
    request: DiagnoseRequest,
    records: DiagnosticRecordService = Depends(get_record_service),
) -> SavedDiagnosisResponse:
    """
    Diagnose and save the session to the plant's history.

    The diagnosis is computed before anything is stored. If saving fails
    the result is still returned, with `saved` set to false.
    """
    if not request.symptoms:
        raise HTTPException(status_code=400, detail="Select at least one symptom to save.")

    response = _run_diagnosis(request)
    record = await records.save_diagnostic(
        plant_id,
        request.symptoms,
        response.diagnosis,
        response.treatment_plan,
    )
    if record is None:
        logger.warning(f"Diagnosis for plant {plant_id} computed but not saved")

    return SavedDiagnosisResponse(
        **response.model_dump(),
        saved=record is not None,
        record=record,
    )


@app.get("/plants/{plant_id}/diagnostics", response_model=list[PersistedDiagnostic])
async def diagnostic_history(
    plant_id: str,
    records: DiagnosticRecordService = Depends(get_record_service),
) -> list[PersistedDiagnostic]:
    """
    Saved diagnostics for a plant, newest first.
    """
    return await records.get_diagnostic_history(plant_id)


@app.patch("/diagnostics/{diagnostic_id}", response_model=StatusUpdateResponse)
async def update_diagnostic_status(
    diagnostic_id: str,
    request: StatusUpdateRequest,
    records: DiagnosticRecordService = Depends(get_record_service),
) -> StatusUpdateResponse:
    """
    Mark a saved diagnostic resolved (or reopen it).
    """
    updated = await records.update_diagnostic_status(diagnostic_id, request.resolved)
    if not updated:
        raise HTTPException(
            status_code=404,
            detail="Diagnostic not found or could not be updated.",
        )
    return StatusUpdateResponse(id=diagnostic_id, resolved=request.resolved)


@app.get("/users/{user_id}/diagnostics/active", response_model=ActiveDiagnosticsResponse)
async def active_diagnostics(
    user_id: str,
    show_all: bool = False,
    records: DiagnosticRecordService = Depends(get_record_service),
) -> ActiveDiagnosticsResponse:
    """
    Unresolved diagnostics across a user's plants, most urgent first.

    Only the top few are returned unless `show_all` is set.
    """
    prioritized = prioritize_active(await records.get_user_diagnostics(user_id))
    shown = prioritized if show_all else prioritized[: settings.tracker.dashboard_limit]
    return ActiveDiagnosticsResponse(
        total=len(prioritized),
        diagnostics=[
            ActiveDiagnostic(
                diagnostic=diagnostic,
                urgency=urgency,
                urgency_label=URGENCY_LABELS[urgency],
                days_open=days_since(diagnostic.created_at),
            )
            for diagnostic, urgency in shown
        ],
    )


# =============================================================================
# CARE PROFILE ENDPOINT
# =============================================================================


@app.post("/care-profiles", response_model=CareProfile)
@observe(name="api_care_profile")
def care_profile(
    request: CareProfileRequest,
    cache: CareProfileCache = Depends(get_care_profile_cache),
) -> CareProfile:
    """
    Get (or generate with the LLM) a care profile for a plant species.
    """
    cached = cache.get(request.species)
    if cached is not None:
        return cached

    if not settings.openai_api_key:
        raise HTTPException(
            status_code=500,
            detail="OpenAI API key not configured. Set OPENAI_API_KEY environment variable.",
        )

    profile = ingest_species(request.species, cache)
    if profile is None:
        raise HTTPException(
            status_code=502,
            detail=f"Could not generate a care profile for '{request.species}'.",
        )
    return profile
