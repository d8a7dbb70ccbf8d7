"""Symptom catalog and issue knowledgebase.

Both registries are literal, immutable data declared once at import time.
Declaration order matters: it is the stable order returned to callers and
the tie-break order used when ranking issues with equal scores.

The issue content reflects gardening in a damp Irish climate, where
overwatering and fungal problems are far more common than drought.
"""

from collections.abc import Iterable

from plant_doctor.diagnostics.models import Issue, Severity, Symptom, SymptomCategory

# =============================================================================
# SYMPTOM CATALOG
# =============================================================================

SYMPTOMS: tuple[Symptom, ...] = (
    # Leaf symptoms
    Symptom(
        id="yellowing-leaves",
        name="Yellowing Leaves",
        category=SymptomCategory.LEAVES,
        description="Leaves turning yellow, starting from older leaves or throughout the plant",
    ),
    Symptom(
        id="brown-leaf-tips",
        name="Brown Leaf Tips",
        category=SymptomCategory.LEAVES,
        description="Leaf tips turning brown and crispy",
    ),
    Symptom(
        id="brown-spots",
        name="Brown Spots on Leaves",
        category=SymptomCategory.LEAVES,
        description="Dark brown or black spots appearing on leaf surfaces",
    ),
    Symptom(
        id="wilting-leaves",
        name="Wilting Leaves",
        category=SymptomCategory.LEAVES,
        description="Leaves drooping or becoming limp despite adequate soil moisture",
    ),
    Symptom(
        id="leaf-drop",
        name="Excessive Leaf Drop",
        category=SymptomCategory.LEAVES,
        description="Plant dropping more leaves than normal",
    ),
    Symptom(
        id="pale-leaves",
        name="Pale or Light Green Leaves",
        category=SymptomCategory.LEAVES,
        description="Leaves losing their vibrant green color",
    ),
    Symptom(
        id="curling-leaves",
        name="Curling Leaves",
        category=SymptomCategory.LEAVES,
        description="Leaves curling inward or outward abnormally",
    ),
    Symptom(
        id="holes-in-leaves",
        name="Holes in Leaves",
        category=SymptomCategory.LEAVES,
        description="Small or large holes appearing in leaf tissue",
    ),
    # Stem symptoms
    Symptom(
        id="soft-mushy-stem",
        name="Soft or Mushy Stem",
        category=SymptomCategory.STEMS,
        description="Stem feels soft, mushy, or squishy to touch",
    ),
    Symptom(
        id="black-stem-base",
        name="Black Stem Base",
        category=SymptomCategory.STEMS,
        description="Base of stem turning black or very dark",
    ),
    Symptom(
        id="leggy-growth",
        name="Leggy or Stretched Growth",
        category=SymptomCategory.STEMS,
        description="Stems growing long and thin with sparse leaves",
    ),
    Symptom(
        id="stem-spots",
        name="Spots on Stem",
        category=SymptomCategory.STEMS,
        description="Dark spots or lesions on stem surface",
    ),
    # Root symptoms
    Symptom(
        id="root-rot",
        name="Dark or Mushy Roots",
        category=SymptomCategory.ROOTS,
        description="Roots appear dark brown/black and feel mushy",
    ),
    Symptom(
        id="root-bound",
        name="Roots Growing Out of Pot",
        category=SymptomCategory.ROOTS,
        description="Roots visible through drainage holes or circling pot surface",
    ),
    Symptom(
        id="dry-brittle-roots",
        name="Dry, Brittle Roots",
        category=SymptomCategory.ROOTS,
        description="Roots appear dry and break easily when touched",
    ),
    # Growth symptoms
    Symptom(
        id="stunted-growth",
        name="Stunted Growth",
        category=SymptomCategory.GROWTH,
        description="Plant not growing or growing very slowly",
    ),
    Symptom(
        id="no-flowering",
        name="No Flowering/Fruiting",
        category=SymptomCategory.GROWTH,
        description="Plant not producing expected flowers or fruits",
    ),
    Symptom(
        id="pest-presence",
        name="Visible Pests",
        category=SymptomCategory.GROWTH,
        description="Small insects, webs, or other pests visible on plant",
    ),
    Symptom(
        id="fungal-growth",
        name="White Powdery Coating",
        category=SymptomCategory.GROWTH,
        description="White, powdery substance on leaves or stems",
    ),
)

# Selecting any of these makes the pot generator run
ROOT_SYMPTOM_TRIGGERS: frozenset[str] = frozenset({"root-rot", "root-bound", "dry-brittle-roots"})

# =============================================================================
# ISSUE KNOWLEDGEBASE
# =============================================================================

ISSUES: tuple[Issue, ...] = (
    Issue(
        name="Overwatering",
        symptoms=("yellowing-leaves", "soft-mushy-stem", "root-rot", "leaf-drop"),
        causes=(
            "Watering too frequently",
            "Poor drainage in pot",
            "Heavy Irish rainfall without protection",
            "Soil that retains too much moisture",
        ),
        treatments=(
            "Stop watering immediately",
            "Remove plant from pot and inspect roots",
            "Trim away black, mushy roots with sterile scissors",
            "Repot in well-draining soil mix",
            "Place in bright, indirect light to recover",
        ),
        prevention=(
            "Check soil moisture before watering",
            "Ensure pots have drainage holes",
            "Use well-draining potting mix",
            "Protect outdoor plants from excessive rain",
        ),
        severity=Severity.HIGH,
        commonness=0.8,
    ),
    Issue(
        name="Underwatering",
        symptoms=("wilting-leaves", "brown-leaf-tips", "dry-brittle-roots", "leaf-drop"),
        causes=(
            "Infrequent watering",
            "Soil drying out too quickly",
            "Hot, dry conditions",
            "Pot too small for plant size",
        ),
        treatments=(
            "Water thoroughly until water drains from bottom",
            "Increase watering frequency gradually",
            "Check if plant needs repotting",
            "Consider moving to more humid location",
        ),
        prevention=(
            "Establish regular watering schedule",
            "Use moisture meter or finger test",
            "Mulch outdoor plants to retain moisture",
            "Group plants together to increase humidity",
        ),
        severity=Severity.MEDIUM,
        commonness=0.7,
    ),
    Issue(
        name="Nutrient Deficiency",
        symptoms=("pale-leaves", "yellowing-leaves", "stunted-growth", "no-flowering"),
        causes=(
            "Poor quality or depleted soil",
            "Lack of fertilization",
            "pH imbalance preventing nutrient uptake",
            "Overwatering washing away nutrients",
        ),
        treatments=(
            "Apply balanced liquid fertilizer",
            "Test and adjust soil pH if needed",
            "Repot with fresh, nutrient-rich soil",
            "Consider slow-release fertilizer pellets",
        ),
        prevention=(
            "Fertilize regularly during growing season",
            "Use quality potting mix",
            "Test soil pH annually",
            "Refresh top layer of soil periodically",
        ),
        severity=Severity.MEDIUM,
        commonness=0.6,
    ),
    Issue(
        name="Pest Infestation",
        symptoms=("holes-in-leaves", "pest-presence", "yellowing-leaves", "stunted-growth"),
        causes=(
            "Aphids, spider mites, or other insects",
            "Poor air circulation",
            "Stressed plants more susceptible",
            "Bringing infected plants indoors",
        ),
        treatments=(
            "Identify specific pest type",
            "Spray with insecticidal soap or neem oil",
            "Remove heavily infested leaves",
            "Isolate plant to prevent spread",
            "Increase air circulation",
        ),
        prevention=(
            "Inspect plants regularly",
            "Quarantine new plants",
            "Maintain good air circulation",
            "Keep plants healthy to resist pests",
        ),
        severity=Severity.MEDIUM,
        commonness=0.5,
    ),
    Issue(
        name="Fungal Disease",
        symptoms=("brown-spots", "fungal-growth", "black-stem-base", "leaf-drop"),
        causes=(
            "High humidity with poor air circulation",
            "Wet leaves from overhead watering",
            "Irish damp climate conditions",
            "Overcrowded plants",
        ),
        treatments=(
            "Remove affected leaves immediately",
            "Improve air circulation around plant",
            "Apply fungicidal spray if severe",
            "Avoid watering leaves directly",
            "Reduce humidity around plant",
        ),
        prevention=(
            "Water at soil level, not on leaves",
            "Ensure good air circulation",
            "Avoid overcrowding plants",
            "Remove dead plant material promptly",
        ),
        severity=Severity.HIGH,
        commonness=0.4,
    ),
    Issue(
        name="Light Issues",
        symptoms=("leggy-growth", "pale-leaves", "no-flowering", "leaf-drop"),
        causes=(
            "Insufficient light for plant type",
            "Too much direct sunlight causing stress",
            "Irish winter low light conditions",
            "Plant placed too far from windows",
        ),
        treatments=(
            "Move plant to appropriate light location",
            "Consider grow lights for winter",
            "Gradually acclimate to new light conditions",
            "Prune leggy growth to encourage bushiness",
        ),
        prevention=(
            "Research plant light requirements",
            "Rotate plants regularly for even growth",
            "Use grow lights during dark months",
            "Monitor seasonal light changes",
        ),
        severity=Severity.LOW,
        commonness=0.6,
    ),
    Issue(
        name="Temperature Stress",
        symptoms=("curling-leaves", "wilting-leaves", "leaf-drop", "stunted-growth"),
        causes=(
            "Cold drafts from windows or doors",
            "Sudden temperature changes",
            "Irish weather fluctuations",
            "Placement near heating sources",
        ),
        treatments=(
            "Move plant away from temperature extremes",
            "Protect from cold drafts",
            "Gradually acclimate to temperature changes",
            "Provide consistent temperature environment",
        ),
        prevention=(
            "Keep plants away from drafts",
            "Monitor temperature fluctuations",
            "Protect outdoor plants from frost",
            "Use plant covers during cold snaps",
        ),
        severity=Severity.MEDIUM,
        commonness=0.4,
    ),
)


# =============================================================================
# ACCESSORS
# =============================================================================


def get_symptoms() -> tuple[Symptom, ...]:
    """Return every symptom in catalog order.

    The order is stable across calls, so it can be used directly for
    rendering a symptom picker.
    """
    return SYMPTOMS


def get_symptoms_by_category(category: SymptomCategory) -> tuple[Symptom, ...]:
    """Return the symptoms of one category, preserving catalog order.

    Args:
        category: The part of the plant to filter by.

    Returns:
        Matching symptoms (possibly empty).

    Example:
        >>> [s.id for s in get_symptoms_by_category(SymptomCategory.ROOTS)]
        ['root-rot', 'root-bound', 'dry-brittle-roots']
    """
    return tuple(symptom for symptom in SYMPTOMS if symptom.category == category)


def get_issues() -> tuple[Issue, ...]:
    """Return the issue knowledgebase in declaration order."""
    return ISSUES


def validate_knowledgebase(
    symptoms: Iterable[Symptom] = SYMPTOMS,
    issues: Iterable[Issue] = ISSUES,
) -> list[str]:
    """Check the static data for authoring mistakes.

    This is run by the test suite, not at request time. A problem here
    is a bug in the data tables, not a user error.

    Args:
        symptoms: Symptom catalog to check against.
        issues: Issue knowledgebase to check.

    Returns:
        Human-readable problems, empty if the data is consistent.
    """
    problems: list[str] = []
    known_ids: set[str] = set()
    for symptom in symptoms:
        if symptom.id in known_ids:
            problems.append(f"Duplicate symptom id '{symptom.id}'")
        known_ids.add(symptom.id)

    seen_names: set[str] = set()
    for issue in issues:
        if issue.name in seen_names:
            problems.append(f"Duplicate issue name '{issue.name}'")
        seen_names.add(issue.name)

        if len(set(issue.symptoms)) != len(issue.symptoms):
            problems.append(f"Issue '{issue.name}' lists a symptom more than once")
        for symptom_id in issue.symptoms:
            if symptom_id not in known_ids:
                problems.append(f"Issue '{issue.name}' references unknown symptom '{symptom_id}'")
        if not issue.treatments:
            problems.append(f"Issue '{issue.name}' has no treatments")

    for trigger in sorted(ROOT_SYMPTOM_TRIGGERS - known_ids):
        problems.append(f"Root trigger '{trigger}' is not in the symptom catalog")

    return problems
