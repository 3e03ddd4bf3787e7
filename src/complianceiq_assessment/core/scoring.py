"""Multi-layered assessment scoring.

Scores a composed assessment against caller-supplied responses:

    section score     = credited base question points + credited overlay points
    section maximum   = base_points + matched overlay points
    total score       = sum of section scores
    surcharge         = therapy overlay points + model complexity points
                        + deployment complexity points of the selection
    final score       = total score + surcharge
    percentage        = round_half_up(100 * final score / max possible score)

The max possible score is a fixed configuration value, not recomputed from
the selection, so percentages are comparable across selections and may
exceed 100 for heavily overlaid selections.

Critical gaps are collected independently of the percentage: every blocker
question without a completed response is a gap.
"""

import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

from complianceiq_assessment.core.catalog import CatalogContext
from complianceiq_assessment.core.composer import ComposedSection, GeneratedAssessment
from complianceiq_assessment.core.questions import (
    OVERLAY_SOURCES,
    QuestionSource,
    ResponseRecord,
    is_affirmative,
)
from complianceiq_assessment.core.selection import AssessmentSelection
from complianceiq_assessment.observability import get_logger

if TYPE_CHECKING:
    from complianceiq_assessment.core.recommendations import Recommendation

logger = get_logger(__name__)

DEFAULT_MAX_POSSIBLE_SCORE: int = 350

Responses = Mapping[str, ResponseRecord]


@dataclass(frozen=True)
class CriticalGap:
    """An unresolved blocker question.

    Attributes:
        question_id: The blocker question's id.
        section_id: Section containing the question.
        section_name: Display name of that section.
        category: Question category (e.g., 'Production Blocker').
        text: Question text.
        responsible_roles: Roles accountable for resolving the gap.
    """

    question_id: str
    section_id: str
    section_name: str
    category: str
    text: str
    responsible_roles: tuple[str, ...] = ()


@dataclass(frozen=True)
class SectionScore:
    """Per-section score and progress.

    Attributes:
        section_id: Section identifier.
        section_name: Section display name.
        earned_points: Credited points.
        max_points: The section's enhanced points.
        answered_questions: Questions with a completed response.
        total_questions: Questions in the composed section.
        open_blockers: Blocker questions without a completed response.
    """

    section_id: str
    section_name: str
    earned_points: int | float
    max_points: int
    answered_questions: int
    total_questions: int
    open_blockers: int

    @property
    def completion_percentage(self) -> int:
        if self.total_questions == 0:
            return 100
        return round_half_up(100 * self.answered_questions / self.total_questions)


@dataclass(frozen=True)
class DimensionSurcharge:
    """Assessment-wide points added for the selected dimension values."""

    therapy_overlay_score: int = 0
    model_complexity_score: int = 0
    deployment_complexity_score: int = 0

    @property
    def total(self) -> int:
        return self.therapy_overlay_score + self.model_complexity_score + self.deployment_complexity_score


@dataclass(frozen=True)
class ScoreBreakdown:
    """Raw scoring output before readiness classification."""

    section_scores: tuple[SectionScore, ...]
    total_score: int | float
    surcharge: DimensionSurcharge
    final_score: int | float
    max_possible_score: int
    percentage: int
    critical_gaps: tuple[CriticalGap, ...]


@dataclass(frozen=True)
class AssessmentResult:
    """Complete scoring result including readiness and recommendations.

    Attributes:
        total_score: Sum of section scores.
        max_possible_score: Configured denominator.
        percentage: Rounded percentage of final_score over max_possible_score.
        readiness_status: Readiness tier name (e.g., 'conditional').
        readiness_label: Display label of the tier.
        critical_gaps: Unresolved blocker questions.
        recommendations: Ordered remediation and guidance items.
        therapy_overlay_score: Surcharge from the therapeutic area.
        model_complexity_score: Surcharge from AI model types.
        deployment_complexity_score: Surcharge from deployment scenarios.
        final_score: total_score plus all surcharges.
        section_scores: Per-section breakdown and progress.
    """

    total_score: int | float
    max_possible_score: int
    percentage: int
    readiness_status: str
    readiness_label: str
    critical_gaps: tuple[CriticalGap, ...]
    recommendations: tuple["Recommendation", ...] = ()
    therapy_overlay_score: int = 0
    model_complexity_score: int = 0
    deployment_complexity_score: int = 0
    final_score: int | float = 0
    section_scores: tuple[SectionScore, ...] = ()


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for non-negative input."""
    return math.floor(value + 0.5)


def compute_percentage(final_score: int | float, max_possible_score: int) -> int:
    """Return ``round_half_up(100 * final_score / max_possible_score)``.

    Raises:
        ValueError: If max_possible_score is not positive.
    """
    if max_possible_score <= 0:
        raise ValueError(f"max_possible_score must be positive, got {max_possible_score}")
    return round_half_up(100 * final_score / max_possible_score)


def score_section(section: ComposedSection, responses: Responses) -> SectionScore:
    """Score one composed section.

    Base questions earn their resolved credit. Each overlay contribution is
    credited once, in full, when every question expanded from it is
    satisfied. An overlay that expanded into no questions is credited only
    by a completed affirmative response under its response key
    (``{dimension}:{overlay_id}``), so an empty response map earns nothing.

    Args:
        section: The composed section.
        responses: Responses keyed by question id.

    Returns:
        The section score with progress counters.
    """
    earned: int | float = 0
    for question in section.base_questions:
        earned += question.resolve_credit(responses.get(question.id))

    overlay_questions = {question.id: question for question in section.overlay_questions}
    for contribution in section.contributions:
        if contribution.question_ids:
            satisfied = all(
                overlay_questions[question_id].is_satisfied(responses.get(question_id))
                for question_id in contribution.question_ids
            )
        else:
            response = responses.get(contribution.response_key)
            satisfied = response is not None and response.completed and is_affirmative(response.value)
        if satisfied:
            earned += contribution.complexity_points

    answered = sum(
        1
        for question in section.questions
        if (response := responses.get(question.id)) is not None and response.completed
    )
    open_blockers = sum(
        1 for question in section.blocker_questions if question.is_open_blocker(responses.get(question.id))
    )
    return SectionScore(
        section_id=section.id,
        section_name=section.name,
        earned_points=earned,
        max_points=section.enhanced_points,
        answered_questions=answered,
        total_questions=len(section.questions),
        open_blockers=open_blockers,
    )


def dimension_surcharge(catalog: CatalogContext, selection: AssessmentSelection) -> DimensionSurcharge:
    """Sum the points of every selected dimension value.

    Ids the catalog does not know contribute nothing.
    """
    totals: dict[QuestionSource, int] = {}
    for source in OVERLAY_SOURCES:
        index = catalog.dimension_index(source)
        totals[source] = sum(
            index[selected_id].points
            for selected_id in selection.selected_ids(source)
            if selected_id in index
        )
    return DimensionSurcharge(
        therapy_overlay_score=totals[QuestionSource.THERAPY],
        model_complexity_score=totals[QuestionSource.MODEL],
        deployment_complexity_score=totals[QuestionSource.DEPLOYMENT],
    )


def collect_critical_gaps(assessment: GeneratedAssessment, responses: Responses) -> list[CriticalGap]:
    """Return every blocker question lacking a completed response, in composition order."""
    gaps: list[CriticalGap] = []
    for section in assessment.sections:
        for question in section.blocker_questions:
            if not question.is_open_blocker(responses.get(question.id)):
                continue
            gaps.append(
                CriticalGap(
                    question_id=question.id,
                    section_id=section.id,
                    section_name=section.name,
                    category=question.category,
                    text=question.text,
                    responsible_roles=question.responsible_roles,
                )
            )
    return gaps


class ScoringEngine:
    """Scores composed assessments against a fixed maximum.

    Attributes:
        max_possible_score: The configured percentage denominator.
    """

    def __init__(
        self,
        catalog: CatalogContext,
        max_possible_score: int = DEFAULT_MAX_POSSIBLE_SCORE,
    ) -> None:
        if max_possible_score <= 0:
            raise ValueError(f"max_possible_score must be positive, got {max_possible_score}")
        self._catalog = catalog
        self.max_possible_score = max_possible_score

    def score(self, assessment: GeneratedAssessment, responses: Responses) -> ScoreBreakdown:
        """Score an assessment.

        Args:
            assessment: The composed assessment.
            responses: Caller responses keyed by question id, or by response
                key for overlays without questions. Other ids are ignored.

        Returns:
            The score breakdown.
        """
        section_scores = tuple(score_section(section, responses) for section in assessment.sections)
        total_score = sum(section_score.earned_points for section_score in section_scores)
        surcharge = dimension_surcharge(self._catalog, assessment.selection)
        final_score = total_score + surcharge.total
        gaps = tuple(collect_critical_gaps(assessment, responses))

        known_ids = {question.id for _, question in assessment.iter_questions()}
        known_ids.update(
            contribution.response_key
            for section in assessment.sections
            for contribution in section.contributions
            if not contribution.question_ids
        )
        ignored = sum(1 for question_id in responses if question_id not in known_ids)
        if ignored:
            logger.debug("Ignoring responses for questions outside the assessment", count=ignored)

        breakdown = ScoreBreakdown(
            section_scores=section_scores,
            total_score=total_score,
            surcharge=surcharge,
            final_score=final_score,
            max_possible_score=self.max_possible_score,
            percentage=compute_percentage(final_score, self.max_possible_score),
            critical_gaps=gaps,
        )
        logger.debug(
            "Assessment scored",
            total_score=total_score,
            final_score=final_score,
            percentage=breakdown.percentage,
            critical_gaps=len(gaps),
        )
        return breakdown
