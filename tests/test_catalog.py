"""Tests for the symptom catalog and issue knowledgebase.

The knowledgebase is static data, so authoring mistakes (an issue
pointing at a symptom that doesn't exist, duplicate names) are caught
here rather than at request time.
"""

import pytest
from pydantic import ValidationError

from plant_doctor.diagnostics.catalog import (
    ISSUES,
    ROOT_SYMPTOM_TRIGGERS,
    SYMPTOMS,
    get_issues,
    get_symptoms,
    get_symptoms_by_category,
    validate_knowledgebase,
)
from plant_doctor.diagnostics.models import Issue, Severity, Symptom, SymptomCategory


class TestSymptomCatalog:
    """Tests for get_symptoms() and get_symptoms_by_category()."""

    def test_catalog_size(self) -> None:
        """Catalog should hold all 19 symptoms."""
        assert len(get_symptoms()) == 19

    def test_order_is_stable(self) -> None:
        """Repeated calls should return the same order."""
        first = [s.id for s in get_symptoms()]
        second = [s.id for s in get_symptoms()]
        assert first == second
        assert first[0] == "yellowing-leaves"
        assert first[-1] == "fungal-growth"

    def test_ids_are_unique(self) -> None:
        ids = [s.id for s in SYMPTOMS]
        assert len(ids) == len(set(ids))

    @pytest.mark.parametrize(
        ("category", "count"),
        [
            (SymptomCategory.LEAVES, 8),
            (SymptomCategory.STEMS, 4),
            (SymptomCategory.ROOTS, 3),
            (SymptomCategory.GROWTH, 4),
        ],
    )
    def test_category_counts(self, category: SymptomCategory, count: int) -> None:
        """Each category should have the expected number of symptoms."""
        symptoms = get_symptoms_by_category(category)
        assert len(symptoms) == count
        assert all(s.category == category for s in symptoms)

    def test_category_filter_preserves_order(self) -> None:
        """Filtered symptoms should appear in catalog order."""
        roots = [s.id for s in get_symptoms_by_category(SymptomCategory.ROOTS)]
        assert roots == ["root-rot", "root-bound", "dry-brittle-roots"]

    def test_categories_cover_catalog(self) -> None:
        """Every symptom belongs to exactly one category listing."""
        total = sum(len(get_symptoms_by_category(c)) for c in SymptomCategory)
        assert total == len(get_symptoms())

    def test_symptoms_are_immutable(self) -> None:
        """Catalog entries are frozen."""
        with pytest.raises(ValidationError):
            SYMPTOMS[0].name = "Changed"  # type: ignore[misc]


class TestKnowledgebase:
    """Integrity checks for the issue knowledgebase."""

    def test_builtin_data_is_consistent(self) -> None:
        """Built-in catalog and knowledgebase should have no problems."""
        assert validate_knowledgebase() == []

    def test_issue_order(self) -> None:
        """Declaration order is the ranking tie-break, so pin it."""
        assert [i.name for i in get_issues()] == [
            "Overwatering",
            "Underwatering",
            "Nutrient Deficiency",
            "Pest Infestation",
            "Fungal Disease",
            "Light Issues",
            "Temperature Stress",
        ]

    def test_every_issue_has_four_symptoms(self) -> None:
        for issue in ISSUES:
            assert len(set(issue.symptoms)) == 4, issue.name

    def test_high_severity_issues_have_three_treatments(self) -> None:
        """Immediate actions use the first three treatments."""
        for issue in ISSUES:
            if issue.severity == Severity.HIGH:
                assert len(issue.treatments) >= 3, issue.name

    def test_root_triggers_are_root_symptoms(self) -> None:
        roots = {s.id for s in get_symptoms_by_category(SymptomCategory.ROOTS)}
        assert ROOT_SYMPTOM_TRIGGERS == roots

    def test_detects_unknown_symptom_reference(self) -> None:
        """An issue pointing at a missing symptom should be reported."""
        bad = Issue(
            name="Ghost",
            symptoms=("not-a-symptom",),
            treatments=("Do something",),
            severity=Severity.LOW,
            commonness=0.1,
        )
        problems = validate_knowledgebase(SYMPTOMS, (*ISSUES, bad))
        assert any("not-a-symptom" in p for p in problems)

    def test_detects_duplicate_issue_name(self) -> None:
        problems = validate_knowledgebase(SYMPTOMS, (ISSUES[0], ISSUES[0]))
        assert any("Duplicate issue name" in p for p in problems)

    def test_detects_duplicate_symptom_id(self) -> None:
        dup = Symptom(
            id="root-rot",
            category=SymptomCategory.ROOTS,
            name="Again",
            description="Duplicate",
        )
        problems = validate_knowledgebase((*SYMPTOMS, dup), ISSUES)
        assert any("Duplicate symptom id 'root-rot'" in p for p in problems)

    def test_issue_requires_symptoms(self) -> None:
        """An issue with no defining symptoms is rejected by the model."""
        with pytest.raises(ValidationError):
            Issue(name="Empty", symptoms=(), severity=Severity.LOW, commonness=0.5)

    def test_commonness_bounds(self) -> None:
        with pytest.raises(ValidationError):
            Issue(name="Odd", symptoms=("root-rot",), severity=Severity.LOW, commonness=1.5)
