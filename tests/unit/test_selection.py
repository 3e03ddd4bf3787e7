"""Unit tests for assessment selections and their validation."""

import pytest

from complianceiq_assessment.core.catalog import CatalogContext
from complianceiq_assessment.core.questions import QuestionSource
from complianceiq_assessment.core.selection import AssessmentSelection, validate_selection
from complianceiq_assessment.errors import NotFoundError, ValidationError


class TestAssessmentSelection:
    """Normalisation of raw selections."""

    def test_blank_ids_become_none(self) -> None:
        """Empty and whitespace ids are treated as not selected."""
        selection = AssessmentSelection(persona_id=" ", therapeutic_area_id="", company_id="  acme ")
        assert selection.persona_id is None
        assert selection.therapeutic_area_id is None
        assert selection.company_id == "acme"

    def test_lists_are_deduplicated_in_order(self) -> None:
        """Repeated ids keep their first position."""
        selection = AssessmentSelection(
            persona_id="admin",
            ai_model_type_ids=("llm", "classifier", "llm", ""),
        )
        assert selection.ai_model_type_ids == ("llm", "classifier")

    def test_selected_ids_per_dimension(self) -> None:
        """The therapeutic area is a single-value dimension."""
        selection = AssessmentSelection(
            persona_id="admin",
            therapeutic_area_id="oncology",
            deployment_scenario_ids=("internal-analytics",),
        )
        assert selection.selected_ids(QuestionSource.THERAPY) == ("oncology",)
        assert selection.selected_ids(QuestionSource.MODEL) == ()
        assert selection.selected_ids(QuestionSource.DEPLOYMENT) == ("internal-analytics",)
        with pytest.raises(ValueError):
            selection.selected_ids(QuestionSource.BASE)


class TestValidateSelection:
    """Required fields and unknown ids."""

    def test_missing_fields_reported_together(self, catalog: CatalogContext) -> None:
        """Every missing field is listed in one error."""
        selection = AssessmentSelection(persona_id=None)
        with pytest.raises(ValidationError) as exc_info:
            validate_selection(
                catalog,
                selection,
                required_fields=("persona_id", "therapeutic_area_id", "ai_model_type_ids"),
            )
        assert exc_info.value.errors == [
            "A persona must be selected",
            "At least one therapeutic area must be selected",
            "At least one AI model type must be selected",
        ]

    def test_valid_selection_passes(self, catalog: CatalogContext) -> None:
        """Known ids with the persona present raise nothing."""
        selection = AssessmentSelection(
            persona_id="regulatory",
            therapeutic_area_id="oncology",
            ai_model_type_ids=("llm",),
        )
        validate_selection(catalog, selection)

    def test_unknown_dimension_id_in_strict_mode(self, catalog: CatalogContext) -> None:
        """Strict mode reports the unknown id with the valid alternatives."""
        selection = AssessmentSelection(persona_id="admin", deployment_scenario_ids=("space-station",))
        with pytest.raises(NotFoundError) as exc_info:
            validate_selection(catalog, selection)
        assert exc_info.value.resource == "deployment_scenario"
        assert exc_info.value.available == ["clinical-decision-support", "internal-analytics"]

    def test_unknown_dimension_id_tolerated_when_lenient(self, catalog: CatalogContext) -> None:
        """Lenient mode leaves unknown ids to resolve as empty contributions."""
        selection = AssessmentSelection(persona_id="admin", ai_model_type_ids=("quantum-oracle",))
        validate_selection(catalog, selection, strict=False)

    def test_unknown_required_field_name(self, catalog: CatalogContext) -> None:
        """Misconfigured required fields fail loudly."""
        with pytest.raises(ValueError):
            validate_selection(catalog, AssessmentSelection(persona_id="admin"), required_fields=("budget",))
