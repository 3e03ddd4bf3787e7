"""Question composition: persona-filtered sections merged with overlay questions.

For each visible section the composer applies, in this fixed order:

    1. the section's base questions
    2. the opt-in filter for every active dimension
    3. therapy overlay questions      (therapy:{overlay_id}:{index})
    4. AI-model overlay questions     (model:{overlay_id}:{index})
    5. deployment overlay questions   (deployment:{overlay_id}:{index})

Each matched overlay adds its complexity_points to the section exactly once,
however many question texts it expands into. A section's enhanced points are
its catalog base_points plus those contributions, whether or not the
dimension filters retained every base question. Composition is pure: the same
catalog and selection always produce the same assessment, ids included.
"""

from dataclasses import dataclass

from complianceiq_assessment.core.catalog import CatalogContext, Overlay, Section
from complianceiq_assessment.core.persona_filter import filter_sections
from complianceiq_assessment.core.questions import (
    OVERLAY_QUESTION_TYPES,
    OVERLAY_SOURCES,
    BaseQuestion,
    OverlayQuestion,
    Question,
    QuestionSource,
    synthetic_question_id,
)
from complianceiq_assessment.core.selection import AssessmentSelection
from complianceiq_assessment.errors import CompositionError
from complianceiq_assessment.observability import get_logger

logger = get_logger(__name__)

DEFAULT_MINUTES_PER_QUESTION: int = 2


@dataclass(frozen=True)
class OverlayContribution:
    """The points one matched overlay adds to a section.

    Attributes:
        source: Overlay dimension.
        overlay_id: Id of the matched overlay.
        dimension_id: Selected dimension value the overlay is keyed by.
        complexity_points: Points added to the section, once.
        question_ids: Ids of the questions expanded from the overlay (may be empty).
    """

    source: QuestionSource
    overlay_id: str
    dimension_id: str
    complexity_points: int
    question_ids: tuple[str, ...] = ()

    @property
    def response_key(self) -> str:
        """Key under which a response credits an overlay with no questions."""
        return f"{self.source.value}:{self.overlay_id}"


@dataclass(frozen=True)
class ComposedSection:
    """A section after filtering and overlay expansion.

    Attributes:
        section: The catalog section.
        questions: Ordered questions: retained base, then therapy, model and
            deployment overlay questions.
        contributions: Matched overlays in expansion order.
        retained_base_points: Points of the base questions that survived the
            dimension filters. Filtered-out points stay in the section maximum
            but cannot be earned.
    """

    section: Section
    questions: tuple[Question, ...]
    contributions: tuple[OverlayContribution, ...]
    retained_base_points: int

    @property
    def id(self) -> str:
        return self.section.id

    @property
    def name(self) -> str:
        return self.section.name

    @property
    def overlay_points(self) -> int:
        return sum(contribution.complexity_points for contribution in self.contributions)

    @property
    def enhanced_points(self) -> int:
        """The section's base_points plus every matched overlay's points."""
        return self.section.base_points + self.overlay_points

    @property
    def base_questions(self) -> list[BaseQuestion]:
        return [question for question in self.questions if isinstance(question, BaseQuestion)]

    @property
    def overlay_questions(self) -> list[OverlayQuestion]:
        return [question for question in self.questions if isinstance(question, OverlayQuestion)]

    @property
    def blocker_questions(self) -> list[BaseQuestion]:
        return [question for question in self.base_questions if question.is_blocker]

    def point_ledger(self) -> list[tuple[str, int]]:
        """List every point-carrying entry of the section.

        Every catalog base question appears under its own id, including those
        the dimension filters dropped. Each overlay appears once under its
        response key, carrying its whole complexity points. The entries
        always sum to :attr:`enhanced_points`.

        Returns:
            (entry key, points) pairs in catalog then expansion order.
        """
        ledger: list[tuple[str, int]] = [
            (question.id, question.points) for question in self.section.questions
        ]
        ledger.extend(
            (contribution.response_key, contribution.complexity_points)
            for contribution in self.contributions
        )
        return ledger


@dataclass(frozen=True)
class GeneratedAssessment:
    """A per-request composed assessment.

    Attributes:
        selection: The selection the assessment was composed for.
        sections: Composed sections in catalog order.
        estimated_time: Human-readable completion estimate (e.g., '1h 4m').
    """

    selection: AssessmentSelection
    sections: tuple[ComposedSection, ...]
    estimated_time: str

    @property
    def total_questions(self) -> int:
        return sum(len(section.questions) for section in self.sections)

    @property
    def max_score(self) -> int:
        return sum(section.enhanced_points for section in self.sections)

    @property
    def critical_sections(self) -> int:
        return sum(1 for section in self.sections if section.section.is_critical_blocker)

    @property
    def production_blockers(self) -> int:
        return sum(len(section.blocker_questions) for section in self.sections)

    def iter_questions(self) -> list[tuple[ComposedSection, Question]]:
        """Return every (section, question) pair in composition order."""
        return [(section, question) for section in self.sections for question in section.questions]


def format_estimated_time(
    question_count: int,
    minutes_per_question: int = DEFAULT_MINUTES_PER_QUESTION,
) -> str:
    """Format the completion estimate for a number of questions.

    Args:
        question_count: Number of questions in the assessment.
        minutes_per_question: Expected answering time per question.

    Returns:
        '{h}h {m}m' for an hour or more, otherwise '{m}m'.
    """
    total_minutes = question_count * minutes_per_question
    hours, minutes = divmod(total_minutes, 60)
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"


class QuestionComposer:
    """Composes assessments from an immutable catalog.

    Holds no per-request state; one instance is safely shared by every
    concurrent request.
    """

    def __init__(
        self,
        catalog: CatalogContext,
        minutes_per_question: int = DEFAULT_MINUTES_PER_QUESTION,
    ) -> None:
        """Initialise the composer.

        Args:
            catalog: The reference catalog.
            minutes_per_question: Used for the estimated completion time.
        """
        self._catalog = catalog
        self._minutes_per_question = minutes_per_question

    def compose(self, selection: AssessmentSelection) -> GeneratedAssessment:
        """Compose the assessment for a selection.

        Args:
            selection: Persona and dimension selection. The persona id must be set.

        Returns:
            The generated assessment.

        Raises:
            NotFoundError: Unknown persona, or a sub-persona outside the persona.
            CompositionError: If two questions would share an id.
        """
        if selection.persona_id is None:
            raise ValueError("selection.persona_id is required for composition")

        sections = filter_sections(self._catalog, selection.persona_id, selection.sub_persona_id)
        seen_ids: set[str] = set()
        composed = tuple(self.compose_section(section, selection, seen_ids) for section in sections)
        question_count = sum(len(section.questions) for section in composed)

        assessment = GeneratedAssessment(
            selection=selection,
            sections=composed,
            estimated_time=format_estimated_time(question_count, self._minutes_per_question),
        )
        logger.debug(
            "Assessment composed",
            persona_id=selection.persona_id,
            section_count=len(composed),
            total_questions=assessment.total_questions,
            max_score=assessment.max_score,
        )
        return assessment

    def compose_section(
        self,
        section: Section,
        selection: AssessmentSelection,
        seen_ids: set[str] | None = None,
    ) -> ComposedSection:
        """Compose a single section.

        Args:
            section: Catalog section to compose.
            selection: Dimension selection driving filters and overlays.
            seen_ids: Question ids already used elsewhere in the assessment.
                Updated in place with this section's ids.

        Returns:
            The composed section.

        Raises:
            CompositionError: If a question id is already taken.
        """
        if seen_ids is None:
            seen_ids = set()

        # A dimension whose selected ids are all unknown stays inactive.
        active = []
        for source in OVERLAY_SOURCES:
            known_values = self._catalog.dimension_index(source)
            selected = tuple(
                selected_id for selected_id in selection.selected_ids(source) if selected_id in known_values
            )
            if selected:
                active.append((source, selected))
        base_questions = [
            question
            for question in section.questions
            if all(question.applies_to(source, selected) for source, selected in active)
        ]

        questions: list[Question] = []
        for question in base_questions:
            _claim_id(seen_ids, question.id, section.id, None)
            questions.append(question)

        contributions: list[OverlayContribution] = []
        for source in OVERLAY_SOURCES:
            generated, matched = self._expand_dimension(section, source, selection, seen_ids)
            questions.extend(generated)
            contributions.extend(matched)

        return ComposedSection(
            section=section,
            questions=tuple(questions),
            contributions=tuple(contributions),
            retained_base_points=sum(question.points for question in base_questions),
        )

    def _expand_dimension(
        self,
        section: Section,
        source: QuestionSource,
        selection: AssessmentSelection,
        seen_ids: set[str],
    ) -> tuple[list[OverlayQuestion], list[OverlayContribution]]:
        """Expand the section's overlays matching one dimension's selected ids.

        Overlays are matched in selection order. Ids unknown to the catalog
        never match, whether they come from the selection or from an overlay.
        """
        known_values = self._catalog.dimension_index(source)
        overlays_by_dimension: dict[str, list[Overlay]] = {}
        for overlay in section.overlays_for(source):
            overlays_by_dimension.setdefault(overlay.dimension_id, []).append(overlay)

        question_type = OVERLAY_QUESTION_TYPES[source]
        generated: list[OverlayQuestion] = []
        contributions: list[OverlayContribution] = []

        for dimension_id in selection.selected_ids(source):
            value = known_values.get(dimension_id)
            if value is None:
                logger.debug(
                    "Skipping unknown dimension id",
                    dimension=source.value,
                    dimension_id=dimension_id,
                    section_id=section.id,
                )
                continue

            for overlay in overlays_by_dimension.get(dimension_id, []):
                question_ids: list[str] = []
                for index, text in enumerate(overlay.question_texts):
                    question_id = synthetic_question_id(source, overlay.id, index)
                    _claim_id(seen_ids, question_id, section.id, overlay.id)
                    question_ids.append(question_id)
                    generated.append(
                        question_type(
                            id=question_id,
                            text=text,
                            section_id=section.id,
                            overlay_id=overlay.id,
                            dimension_id=dimension_id,
                            index=index,
                            overlay_points=overlay.complexity_points,
                            responsible_roles=section.default_responsible_roles,
                            category=value.name,
                        )
                    )
                # An overlay id repeated with no question texts claims no
                # question ids, so duplicates are caught on the response key.
                response_key = f"{source.value}:{overlay.id}"
                _claim_id(seen_ids, response_key, section.id, overlay.id)
                contributions.append(
                    OverlayContribution(
                        source=source,
                        overlay_id=overlay.id,
                        dimension_id=dimension_id,
                        complexity_points=overlay.complexity_points,
                        question_ids=tuple(question_ids),
                    )
                )

        return generated, contributions


def _claim_id(seen_ids: set[str], question_id: str, section_id: str, overlay_id: str | None) -> None:
    if question_id in seen_ids:
        raise CompositionError(section_id, overlay_id, question_id)
    seen_ids.add(question_id)


def compose_assessment(
    catalog: CatalogContext,
    selection: AssessmentSelection,
    minutes_per_question: int = DEFAULT_MINUTES_PER_QUESTION,
) -> GeneratedAssessment:
    """Compose an assessment with a throwaway :class:`QuestionComposer`."""
    return QuestionComposer(catalog, minutes_per_question).compose(selection)
