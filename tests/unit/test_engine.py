"""Unit tests for the AssessmentEngine facade and its configuration.

Tests cover:
- Validation before composition
- Full pipeline: compose, score, classify, recommend
- Open blockers gate readiness whatever the percentage
- Engine configuration from Settings
"""

import pytest

from complianceiq_assessment.core.catalog import CatalogContext
from complianceiq_assessment.core.engine import AssessmentEngine
from complianceiq_assessment.core.questions import ResponseRecord
from complianceiq_assessment.core.recommendations import RecommendationKind
from complianceiq_assessment.core.selection import AssessmentSelection
from complianceiq_assessment.errors import NotFoundError, ValidationError
from complianceiq_assessment.settings import Settings

_SELECTION = AssessmentSelection(
    persona_id="admin",
    therapeutic_area_id="oncology",
    ai_model_type_ids=("llm",),
    company_id="acme",
)


def _all_compliant(engine: AssessmentEngine, selection: AssessmentSelection) -> dict[str, ResponseRecord]:
    assessment = engine.compose(selection)
    return {
        question.id: ResponseRecord(value="yes", completed=True)
        for _, question in assessment.iter_questions()
    }


class TestValidation:
    """Selections are validated before any work."""

    def test_missing_persona(self, engine: AssessmentEngine) -> None:
        """A missing persona is a validation error, not a crash."""
        with pytest.raises(ValidationError) as exc_info:
            engine.compose(AssessmentSelection(persona_id=None))
        assert exc_info.value.errors == ["A persona must be selected"]

    def test_foreign_sub_persona(self, engine: AssessmentEngine) -> None:
        """A sub-persona of another persona lists the valid alternatives."""
        selection = AssessmentSelection(persona_id="engineering", sub_persona_id="regulatory-lead")
        with pytest.raises(NotFoundError) as exc_info:
            engine.compose(selection)
        assert exc_info.value.available == ["security-engineer"]

    def test_lenient_engine_ignores_unknown_ids(self, catalog: CatalogContext) -> None:
        """Non-strict engines compose with unknown ids as empty contributions."""
        engine = AssessmentEngine(catalog, strict=False)
        selection = AssessmentSelection(persona_id="engineering", ai_model_type_ids=("unknown",))
        result = engine.score(selection, {})
        assert result.model_complexity_score == 0
        assert sum(score.total_questions for score in result.section_scores) == 4


class TestScore:
    """The full pipeline."""

    def test_all_compliant_with_small_max(self, catalog: CatalogContext) -> None:
        """Every question answered: no gaps and the percentage drives readiness."""
        engine = AssessmentEngine(catalog, max_possible_score=60)
        result = engine.score(_SELECTION, _all_compliant(engine, _SELECTION))

        # sections 19 + 19 + 8, surcharge 5 + 4
        assert result.total_score == 46
        assert result.final_score == 55
        assert result.therapy_overlay_score == 5
        assert result.model_complexity_score == 4
        assert result.deployment_complexity_score == 0
        assert result.percentage == 92
        assert result.readiness_status == "production_ready"
        assert result.readiness_label == "Production Ready"
        assert result.critical_gaps == ()
        assert result.recommendations[-1].priority == "Low"

    def test_open_blocker_caps_high_percentage(self, catalog: CatalogContext) -> None:
        """One open blocker keeps a passing score at conditional."""
        engine = AssessmentEngine(catalog, max_possible_score=50)
        responses = _all_compliant(engine, _SELECTION)
        responses["sec-001"] = ResponseRecord(value="yes", completed=False)

        result = engine.score(_SELECTION, responses)

        assert result.percentage >= 85
        assert result.readiness_status == "conditional"
        assert [gap.question_id for gap in result.critical_gaps] == ["sec-001"]
        assert result.recommendations[0].kind is RecommendationKind.CRITICAL_GAP

    def test_empty_responses(self, engine: AssessmentEngine) -> None:
        """No answers: only the surcharge scores and every blocker is a gap."""
        result = engine.score(_SELECTION, {})
        assert result.total_score == 0
        assert result.final_score == 9
        assert result.percentage == 3
        assert result.readiness_status == "not_ready"
        assert len(result.critical_gaps) == 2
        assert [item.kind for item in result.recommendations] == [
            RecommendationKind.CRITICAL_GAP,
            RecommendationKind.CRITICAL_GAP,
            RecommendationKind.THERAPY,
            RecommendationKind.MODEL,
            RecommendationKind.OVERALL,
        ]

    def test_section_scores_reported(self, engine: AssessmentEngine) -> None:
        """Per-section progress accompanies the result."""
        result = engine.score(_SELECTION, {"gov-002": ResponseRecord(value=True, completed=True)})
        governance = result.section_scores[0]
        assert governance.section_id == "governance"
        assert governance.earned_points == 5
        assert governance.max_points == 19
        assert governance.answered_questions == 1

    def test_bottleneck_resolutions(self, engine: AssessmentEngine) -> None:
        """Resolutions for the selected values."""
        resolutions = engine.bottleneck_resolutions(_SELECTION)
        assert len(resolutions) == 2


class TestFromSettings:
    """Engine configuration from Settings."""

    def test_settings_drive_engine(self, catalog: CatalogContext) -> None:
        """Max score, thresholds and required fields come from settings."""
        settings = Settings(
            max_possible_score=500,
            readiness_thresholds={"production_ready": 90, "conditional": 60},
            required_selection_fields=["persona_id", "ai_model_type_ids"],
        )
        engine = AssessmentEngine.from_settings(catalog, settings)

        assert engine.max_possible_score == 500
        assert [tier.name for tier in engine.classifier.tiers] == [
            "production_ready",
            "conditional",
            "not_ready",
        ]
        with pytest.raises(ValidationError) as exc_info:
            engine.compose(AssessmentSelection(persona_id="admin"))
        assert exc_info.value.errors == ["At least one AI model type must be selected"]

    def test_settings_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """COMPLIANCEIQ_ variables override defaults."""
        monkeypatch.setenv("COMPLIANCEIQ_MAX_POSSIBLE_SCORE", "420")
        monkeypatch.setenv("COMPLIANCEIQ_STRICT_SELECTION", "false")
        settings = Settings()
        assert settings.max_possible_score == 420
        assert settings.strict_selection is False

    def test_settings_reject_non_positive_max(self) -> None:
        """The percentage denominator must be positive."""
        with pytest.raises(ValueError):
            Settings(max_possible_score=0)
