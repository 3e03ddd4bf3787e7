"""Deterministic recommendation generation and bottleneck resolution lookup.

Recommendations always come out in the same order:

    1. one remediation item per critical gap
    2. therapeutic areas with an elevated (High/Critical) complexity tier
    3. AI model types with an elevated complexity tier
    4. deployment scenarios with an elevated complexity tier
    5. one overall item for the percentage bucket

Within steps 2-4 items follow catalog order, so reordering a selection never
reorders the output.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from complianceiq_assessment.core.catalog import BottleneckResolution, CatalogContext
from complianceiq_assessment.core.questions import OVERLAY_SOURCES, QuestionSource
from complianceiq_assessment.core.scoring import CriticalGap
from complianceiq_assessment.core.selection import AssessmentSelection


class RecommendationKind(str, Enum):
    CRITICAL_GAP = "critical_gap"
    THERAPY = "therapy"
    MODEL = "model"
    DEPLOYMENT = "deployment"
    OVERALL = "overall"


_KIND_BY_SOURCE: dict[QuestionSource, RecommendationKind] = {
    QuestionSource.THERAPY: RecommendationKind.THERAPY,
    QuestionSource.MODEL: RecommendationKind.MODEL,
    QuestionSource.DEPLOYMENT: RecommendationKind.DEPLOYMENT,
}

_CONTROL_NOUN: dict[QuestionSource, str] = {
    QuestionSource.THERAPY: "regulatory controls",
    QuestionSource.MODEL: "safety controls",
    QuestionSource.DEPLOYMENT: "operational controls",
}

# Percentage buckets for the overall item, highest first.
_OVERALL_BUCKETS: list[tuple[int, str, str]] = [
    (90, "Low", "System ready for production deployment with continuous monitoring"),
    (70, "Medium", "Minor configuration gaps need resolution before production deployment"),
    (0, "High", "Significant infrastructure and compliance gaps require immediate attention"),
]


@dataclass(frozen=True)
class Recommendation:
    """One human-readable recommendation.

    Attributes:
        kind: Which generator step produced the item.
        subject: Section name, dimension value name, or 'Overall'.
        message: The recommendation text.
        responsible_roles: Roles expected to act on it.
        priority: 'Critical', 'High', 'Medium' or 'Low'.
    """

    kind: RecommendationKind
    subject: str
    message: str
    responsible_roles: tuple[str, ...] = ()
    priority: str = "Medium"


def _gap_recommendation(gap: CriticalGap) -> Recommendation:
    roles = ", ".join(gap.responsible_roles) or "unassigned"
    return Recommendation(
        kind=RecommendationKind.CRITICAL_GAP,
        subject=gap.section_name,
        message=(
            f"{gap.section_name} / {gap.category}: resolve '{gap.text}' before production "
            f"deployment (owners: {roles})"
        ),
        responsible_roles=gap.responsible_roles,
        priority="Critical",
    )


def _overall_recommendation(percentage: int | float) -> Recommendation:
    _, priority, message = _OVERALL_BUCKETS[-1]
    for minimum, bucket_priority, bucket_message in _OVERALL_BUCKETS:
        if percentage >= minimum:
            priority, message = bucket_priority, bucket_message
            break
    return Recommendation(
        kind=RecommendationKind.OVERALL,
        subject="Overall",
        message=message,
        priority=priority,
    )


def generate_recommendations(
    catalog: CatalogContext,
    selection: AssessmentSelection,
    critical_gaps: Sequence[CriticalGap],
    percentage: int | float,
) -> list[Recommendation]:
    """Build the ordered recommendation list.

    Args:
        catalog: The reference catalog.
        selection: Selected dimension values.
        critical_gaps: Unresolved blockers, in composition order.
        percentage: Assessment percentage.

    Returns:
        Recommendations: gaps, therapy, model, deployment, then overall.
    """
    recommendations = [_gap_recommendation(gap) for gap in critical_gaps]

    for source in OVERLAY_SOURCES:
        selected = set(selection.selected_ids(source))
        for value in catalog.dimension_values(source):
            if value.id not in selected or not value.complexity.is_elevated:
                continue
            controls = ", ".join(value.required_controls)
            message = f"{value.name}: implement specialised {_CONTROL_NOUN[source]}"
            if controls:
                message += f" ({controls})"
            recommendations.append(
                Recommendation(
                    kind=_KIND_BY_SOURCE[source],
                    subject=value.name,
                    message=message,
                    priority=value.complexity.value,
                )
            )

    recommendations.append(_overall_recommendation(percentage))
    return recommendations


def get_bottleneck_resolutions(
    catalog: CatalogContext,
    selection: AssessmentSelection,
) -> list[BottleneckResolution]:
    """Return the known bottleneck resolutions for a selection.

    Resolutions for the therapeutic area come first, then AI model types,
    then deployment scenarios, each in selection order.
    """
    resolutions: list[BottleneckResolution] = []
    for source in OVERLAY_SOURCES:
        for selected_id in selection.selected_ids(source):
            resolutions.extend(catalog.bottleneck_resolutions.get(selected_id, ()))
    return resolutions
