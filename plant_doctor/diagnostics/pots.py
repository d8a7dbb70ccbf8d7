"""Pot (container) recommendations.

Container guidance depends only on which root symptoms were observed,
not on the ranked diagnosis. Root rot calls for a pot that dries out
quickly, a root-bound plant needs room, and dry roots need moisture
retention.
"""

from collections.abc import Iterable

from plant_doctor.diagnostics.catalog import ROOT_SYMPTOM_TRIGGERS
from plant_doctor.diagnostics.models import PotMaterial, PotRecommendation

# Checked in this order; each matched trigger yields one recommendation
TRIGGER_RECOMMENDATIONS: tuple[tuple[str, PotRecommendation], ...] = (
    (
        "root-rot",
        PotRecommendation(
            size="Same size or slightly smaller",
            material=PotMaterial.TERRACOTTA,
            drainage=True,
            reasoning=(
                "Terracotta allows better air circulation and moisture evaporation "
                "to prevent future root rot"
            ),
        ),
    ),
    (
        "root-bound",
        PotRecommendation(
            size="2-4 inches larger in diameter",
            material=PotMaterial.CERAMIC,
            drainage=True,
            reasoning=(
                "Larger pot provides room for root growth, ceramic retains some "
                "moisture while allowing drainage"
            ),
        ),
    ),
    (
        "dry-brittle-roots",
        PotRecommendation(
            size="Current size or slightly larger",
            material=PotMaterial.PLASTIC,
            drainage=True,
            reasoning="Plastic retains moisture better while still providing drainage for recovery",
        ),
    ),
)

DEFAULT_POT_RECOMMENDATION = PotRecommendation(
    size="Current size",
    material=PotMaterial.TERRACOTTA,
    drainage=True,
    reasoning="Terracotta provides good balance of drainage and air circulation for most plants",
)


def has_root_symptoms(selection: Iterable[str]) -> bool:
    """True if any root trigger symptom was selected."""
    return not ROOT_SYMPTOM_TRIGGERS.isdisjoint(selection)


def generate_pot_recommendations(selection: Iterable[str]) -> list[PotRecommendation]:
    """Build container guidance for the selected root symptoms.

    Triggers are not mutually exclusive: root rot plus a root-bound plant
    yields two recommendations. Falls back to a general terracotta
    recommendation if nothing matched.

    Args:
        selection: Selected symptom ids.

    Returns:
        One or more recommendations.
    """
    selected = set(selection)
    recommendations = [rec for trigger, rec in TRIGGER_RECOMMENDATIONS if trigger in selected]
    if not recommendations:
        recommendations.append(DEFAULT_POT_RECOMMENDATION)
    return recommendations
