"""Question variants for composed assessments.

A composed assessment mixes catalog-stored base questions with questions
generated at request time from overlays. The variants form a closed set:

    BaseQuestion               stored in the catalog, carries its own points
    TherapyOverlayQuestion     generated from a therapeutic-area overlay
    ModelOverlayQuestion       generated from an AI-model-type overlay
    DeploymentOverlayQuestion  generated from a deployment-scenario overlay

Base questions earn their own point value. Generated questions carry no
points of their own: every question expanded from one overlay shares that
overlay's single complexity_points value, which is credited once per
section when all of them are satisfied.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar

AFFIRMATIVE_VALUES: frozenset[str] = frozenset(
    {
        "yes",
        "y",
        "true",
        "compliant",
        "implemented",
        "fully_implemented",
        "complete",
        "completed",
    }
)


class QuestionSource(str, Enum):
    """Where a composed question came from; doubles as the synthetic id prefix."""

    BASE = "base"
    THERAPY = "therapy"
    MODEL = "model"
    DEPLOYMENT = "deployment"


OVERLAY_SOURCES: tuple[QuestionSource, ...] = (
    QuestionSource.THERAPY,
    QuestionSource.MODEL,
    QuestionSource.DEPLOYMENT,
)


@dataclass(frozen=True)
class ResponseRecord:
    """A caller-supplied answer to one composed question.

    Attributes:
        value: Boolean, affirmative token string, or a pre-resolved point value.
        completed: Whether the respondent marked the answer as final.
    """

    value: Any = None
    completed: bool = False


def is_affirmative(value: Any) -> bool:
    """Return True when a response value signals a compliant answer.

    Args:
        value: Raw response value.

    Returns:
        True for ``True``, positive numbers and affirmative tokens.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value > 0
    if isinstance(value, str):
        return value.strip().lower() in AFFIRMATIVE_VALUES
    return False


def synthetic_question_id(source: QuestionSource, overlay_id: str, index: int) -> str:
    """Build the namespaced id of a generated question.

    Base question ids never contain a colon, so these ids cannot shadow them.

    Args:
        source: Overlay dimension the question was generated from.
        overlay_id: Id of the overlay being expanded.
        index: Zero-based position in the overlay's question-text list.

    Returns:
        Id of the form ``{dimension}:{overlay_id}:{index}``.
    """
    if source is QuestionSource.BASE:
        raise ValueError("base questions do not have synthetic ids")
    return f"{source.value}:{overlay_id}:{index}"


@dataclass(frozen=True)
class BaseQuestion:
    """A catalog-stored question.

    Each ``*_conditions`` field is either None (no explicit conditions) or the
    dimension value ids this question opts into. Once a dimension is active in
    a selection, only questions that opt into a selected value survive.

    Attributes:
        id: Unique identifier within the catalog (e.g., 'reg-001').
        text: Question text presented to respondents.
        points: Credit earned by a completed, compliant answer.
        is_blocker: Whether an unresolved answer gates readiness.
        category: Grouping label used in gap reports.
        evidence_required: Artefacts a reviewer expects to see.
        responsible_roles: Roles accountable for the answer.
    """

    id: str
    text: str
    points: int
    is_blocker: bool = False
    category: str = "General"
    evidence_required: tuple[str, ...] = ()
    responsible_roles: tuple[str, ...] = ()
    therapy_conditions: tuple[str, ...] | None = None
    model_conditions: tuple[str, ...] | None = None
    deployment_conditions: tuple[str, ...] | None = None

    source: ClassVar[QuestionSource] = QuestionSource.BASE

    def conditions_for(self, source: QuestionSource) -> tuple[str, ...] | None:
        """Return this question's opt-in list for one overlay dimension."""
        if source is QuestionSource.THERAPY:
            return self.therapy_conditions
        if source is QuestionSource.MODEL:
            return self.model_conditions
        if source is QuestionSource.DEPLOYMENT:
            return self.deployment_conditions
        return None

    def applies_to(self, source: QuestionSource, selected_ids: tuple[str, ...]) -> bool:
        """Check the opt-in rule for one active dimension.

        Args:
            source: The overlay dimension being filtered.
            selected_ids: Ids selected for that dimension (non-empty).

        Returns:
            True if the question explicitly opts into any selected id.
        """
        conditions = self.conditions_for(source)
        if not conditions:
            return False
        return any(selected in conditions for selected in selected_ids)

    def resolve_credit(self, response: ResponseRecord | None) -> int | float:
        """Resolve the points earned for this question.

        Numeric values are treated as caller pre-resolved partial credit and
        clamped to ``[0, points]``.

        Args:
            response: The caller's response, or None when unanswered.

        Returns:
            Earned points.
        """
        if response is None or not response.completed:
            return 0
        value = response.value
        if isinstance(value, bool):
            return self.points if value else 0
        if isinstance(value, (int, float)):
            return min(max(value, 0), self.points)
        return self.points if is_affirmative(value) else 0

    def is_open_blocker(self, response: ResponseRecord | None) -> bool:
        """Return True when this is a blocker without a completed response."""
        return self.is_blocker and (response is None or not response.completed)


@dataclass(frozen=True)
class OverlayQuestion:
    """A question generated from an overlay's question-text list.

    Attributes:
        id: Synthetic id, see :func:`synthetic_question_id`.
        text: Question text taken verbatim from the overlay.
        section_id: Section the overlay belongs to.
        overlay_id: Id of the overlay the question was expanded from.
        dimension_id: Dimension value id the overlay is keyed by.
        index: Position within the overlay's question-text list.
        overlay_points: The overlay's whole complexity_points, shared by all
            questions generated from it and never divided.
        responsible_roles: Inherited from the section's default roles.
        category: Grouping label.
    """

    id: str
    text: str
    section_id: str
    overlay_id: str
    dimension_id: str
    index: int
    overlay_points: int
    responsible_roles: tuple[str, ...] = ()
    category: str = "Overlay"

    source: ClassVar[QuestionSource]
    is_blocker: ClassVar[bool] = False
    points: ClassVar[int] = 0

    def is_satisfied(self, response: ResponseRecord | None) -> bool:
        """Return True when the response is completed and compliant."""
        return response is not None and response.completed and is_affirmative(response.value)

    def is_open_blocker(self, response: ResponseRecord | None) -> bool:
        return False


@dataclass(frozen=True)
class TherapyOverlayQuestion(OverlayQuestion):
    source: ClassVar[QuestionSource] = QuestionSource.THERAPY


@dataclass(frozen=True)
class ModelOverlayQuestion(OverlayQuestion):
    source: ClassVar[QuestionSource] = QuestionSource.MODEL


@dataclass(frozen=True)
class DeploymentOverlayQuestion(OverlayQuestion):
    source: ClassVar[QuestionSource] = QuestionSource.DEPLOYMENT


Question = BaseQuestion | TherapyOverlayQuestion | ModelOverlayQuestion | DeploymentOverlayQuestion

OVERLAY_QUESTION_TYPES: dict[QuestionSource, type[OverlayQuestion]] = {
    QuestionSource.THERAPY: TherapyOverlayQuestion,
    QuestionSource.MODEL: ModelOverlayQuestion,
    QuestionSource.DEPLOYMENT: DeploymentOverlayQuestion,
}
