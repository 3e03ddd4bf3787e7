"""Assessment engine facade.

Runs the full pipeline over an immutable catalog:

    validate selection -> persona filter -> compose -> score
        -> classify readiness -> recommendations

The engine is stateless between calls; one instance serves every request.
"""

from collections.abc import Mapping, Sequence

from complianceiq_assessment.core.catalog import BottleneckResolution, CatalogContext
from complianceiq_assessment.core.composer import (
    DEFAULT_MINUTES_PER_QUESTION,
    GeneratedAssessment,
    QuestionComposer,
)
from complianceiq_assessment.core.readiness import ReadinessClassifier
from complianceiq_assessment.core.recommendations import (
    generate_recommendations,
    get_bottleneck_resolutions,
)
from complianceiq_assessment.core.scoring import (
    DEFAULT_MAX_POSSIBLE_SCORE,
    AssessmentResult,
    ResponseRecord,
    ScoringEngine,
)
from complianceiq_assessment.core.selection import AssessmentSelection, validate_selection
from complianceiq_assessment.observability import get_logger
from complianceiq_assessment.settings import Settings

logger = get_logger(__name__)


class AssessmentEngine:
    """Composes and scores assessments for caller selections.

    Args:
        catalog: The reference catalog.
        max_possible_score: Fixed percentage denominator.
        classifier: Readiness classifier; defaults to the standard tiers.
        minutes_per_question: Used for the estimated completion time.
        required_fields: Selection fields that must be present.
        strict: Reject dimension ids the catalog does not know.
    """

    def __init__(
        self,
        catalog: CatalogContext,
        max_possible_score: int = DEFAULT_MAX_POSSIBLE_SCORE,
        classifier: ReadinessClassifier | None = None,
        minutes_per_question: int = DEFAULT_MINUTES_PER_QUESTION,
        required_fields: Sequence[str] = ("persona_id",),
        strict: bool = True,
    ) -> None:
        self.catalog = catalog
        self.classifier = classifier or ReadinessClassifier()
        self._composer = QuestionComposer(catalog, minutes_per_question)
        self._scorer = ScoringEngine(catalog, max_possible_score)
        self._required_fields = tuple(required_fields)
        self._strict = strict

    @classmethod
    def from_settings(cls, catalog: CatalogContext, settings: Settings) -> "AssessmentEngine":
        """Build an engine configured from service settings."""
        return cls(
            catalog=catalog,
            max_possible_score=settings.max_possible_score,
            classifier=ReadinessClassifier(
                thresholds=settings.readiness_thresholds,
                floor_tier=settings.readiness_floor_tier,
                blocker_cap=settings.blocker_cap_tier,
            ),
            minutes_per_question=settings.minutes_per_question,
            required_fields=settings.required_selection_fields,
            strict=settings.strict_selection,
        )

    @property
    def max_possible_score(self) -> int:
        return self._scorer.max_possible_score

    def validate(self, selection: AssessmentSelection) -> None:
        """Validate a selection against the catalog.

        Raises:
            ValidationError: If required selection fields are missing.
            NotFoundError: If a dimension id is unknown (strict mode only).
        """
        validate_selection(self.catalog, selection, self._required_fields, self._strict)

    def compose(self, selection: AssessmentSelection) -> GeneratedAssessment:
        """Validate a selection and compose its assessment.

        Raises:
            ValidationError: If required selection fields are missing.
            NotFoundError: Unknown persona, sub-persona or dimension id.
            CompositionError: If two composed questions would share an id.
        """
        self.validate(selection)
        return self._composer.compose(selection)

    def score_assessment(
        self,
        assessment: GeneratedAssessment,
        responses: Mapping[str, ResponseRecord],
    ) -> AssessmentResult:
        """Score an already composed assessment.

        Args:
            assessment: Output of :meth:`compose`.
            responses: Caller responses keyed by question id.

        Returns:
            The assessment result with readiness and recommendations.
        """
        breakdown = self._scorer.score(assessment, responses)
        tier = self.classifier.classify(breakdown.percentage, breakdown.critical_gaps)
        recommendations = generate_recommendations(
            self.catalog,
            assessment.selection,
            breakdown.critical_gaps,
            breakdown.percentage,
        )
        return AssessmentResult(
            total_score=breakdown.total_score,
            max_possible_score=breakdown.max_possible_score,
            percentage=breakdown.percentage,
            readiness_status=tier.name,
            readiness_label=tier.label,
            critical_gaps=breakdown.critical_gaps,
            recommendations=tuple(recommendations),
            therapy_overlay_score=breakdown.surcharge.therapy_overlay_score,
            model_complexity_score=breakdown.surcharge.model_complexity_score,
            deployment_complexity_score=breakdown.surcharge.deployment_complexity_score,
            final_score=breakdown.final_score,
            section_scores=breakdown.section_scores,
        )

    def score(
        self,
        selection: AssessmentSelection,
        responses: Mapping[str, ResponseRecord],
    ) -> AssessmentResult:
        """Compose the selection's assessment and score the responses against it."""
        assessment = self.compose(selection)
        result = self.score_assessment(assessment, responses)
        logger.info(
            "Assessment scored",
            persona_id=selection.persona_id,
            company_id=selection.company_id,
            percentage=result.percentage,
            readiness_status=result.readiness_status,
            critical_gaps=len(result.critical_gaps),
        )
        return result

    def bottleneck_resolutions(self, selection: AssessmentSelection) -> list[BottleneckResolution]:
        """Validate a selection and return its bottleneck resolutions."""
        self.validate(selection)
        return get_bottleneck_resolutions(self.catalog, selection)
