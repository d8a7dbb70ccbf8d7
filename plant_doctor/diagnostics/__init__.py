"""Plant health diagnostic engine.

Symptom catalog, issue knowledgebase, scoring and plan generation.
diagnose() is the entry point; everything here is pure and synchronous.
"""

from plant_doctor.diagnostics.catalog import get_symptoms, get_symptoms_by_category
from plant_doctor.diagnostics.engine import build_treatment_plan, diagnose, primary_diagnosis

__all__ = [
    "build_treatment_plan",
    "diagnose",
    "get_symptoms",
    "get_symptoms_by_category",
    "primary_diagnosis",
]
