"""Pydantic request/response schemas for the compliance assessment API.

All API inputs and outputs are strictly typed Pydantic v2 models using
camelCase field names on the wire; snake_case is accepted on input.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from complianceiq_assessment.core.catalog import (
    AIModelType,
    BottleneckResolution,
    DeploymentScenario,
    Persona,
    TherapeuticArea,
)
from complianceiq_assessment.core.composer import (
    ComposedSection,
    GeneratedAssessment,
    OverlayContribution,
)
from complianceiq_assessment.core.questions import BaseQuestion, OverlayQuestion, Question, ResponseRecord
from complianceiq_assessment.core.recommendations import Recommendation
from complianceiq_assessment.core.scoring import AssessmentResult, CriticalGap, SectionScore
from complianceiq_assessment.core.selection import AssessmentSelection


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


class SelectionRequest(CamelModel):
    """Dimensions selected for an assessment.

    Attributes:
        persona_id: Persona answering the assessment.
        sub_persona_id: Optional sub-persona of that persona.
        therapeutic_area_id: Optional therapeutic area.
        ai_model_types: Selected AI model type ids.
        deployment_scenarios: Selected deployment scenario ids.
        company_id: Opaque caller reference echoed back in responses.
    """

    persona_id: str | None = Field(default=None, max_length=100)
    sub_persona_id: str | None = Field(default=None, max_length=100)
    therapeutic_area_id: str | None = Field(default=None, max_length=100)
    ai_model_types: list[str] = Field(default_factory=list, max_length=50)
    deployment_scenarios: list[str] = Field(default_factory=list, max_length=50)
    company_id: str | None = Field(default=None, max_length=100)

    def to_selection(self) -> AssessmentSelection:
        return AssessmentSelection(
            persona_id=self.persona_id,
            sub_persona_id=self.sub_persona_id,
            therapeutic_area_id=self.therapeutic_area_id,
            ai_model_type_ids=tuple(self.ai_model_types),
            deployment_scenario_ids=tuple(self.deployment_scenarios),
            company_id=self.company_id,
        )


class ResponseSchema(CamelModel):
    """A single question response.

    ``value`` is a boolean, an affirmative token ('yes', 'compliant'...) or a
    point value the caller already resolved for partial credit.
    """

    value: bool | int | float | str | None = None
    completed: bool = False


class ScoreRequest(SelectionRequest):
    """Selection plus the responses to score, keyed by question id."""

    responses: dict[str, ResponseSchema] = Field(default_factory=dict)

    def to_responses(self) -> dict[str, ResponseRecord]:
        return {
            question_id: ResponseRecord(value=response.value, completed=response.completed)
            for question_id, response in self.responses.items()
        }


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------


class SubPersonaSchema(CamelModel):
    id: str
    name: str
    expertise_level: str
    description: str


class PersonaSchema(CamelModel):
    id: str
    name: str
    description: str
    is_admin: bool
    sub_personas: list[SubPersonaSchema]

    @classmethod
    def from_domain(cls, persona: Persona) -> "PersonaSchema":
        return cls(
            id=persona.id,
            name=persona.name,
            description=persona.description,
            is_admin=persona.is_admin,
            sub_personas=[
                SubPersonaSchema(
                    id=sub.id,
                    name=sub.name,
                    expertise_level=sub.expertise_level,
                    description=sub.description,
                )
                for sub in persona.sub_personas
            ],
        )


class TherapeuticAreaSchema(CamelModel):
    id: str
    name: str
    overlay_points: int
    complexity: str
    specific_requirements: list[str]
    regulatory_guidance: list[str]

    @classmethod
    def from_domain(cls, area: TherapeuticArea) -> "TherapeuticAreaSchema":
        return cls(
            id=area.id,
            name=area.name,
            overlay_points=area.overlay_points,
            complexity=area.complexity.value,
            specific_requirements=list(area.specific_requirements),
            regulatory_guidance=list(area.regulatory_guidance),
        )


class AIModelTypeSchema(CamelModel):
    id: str
    name: str
    complexity_points: int
    complexity: str
    specific_requirements: list[str]
    safety_considerations: list[str]

    @classmethod
    def from_domain(cls, model: AIModelType) -> "AIModelTypeSchema":
        return cls(
            id=model.id,
            name=model.name,
            complexity_points=model.complexity_points,
            complexity=model.complexity.value,
            specific_requirements=list(model.specific_requirements),
            safety_considerations=list(model.safety_considerations),
        )


class DeploymentScenarioSchema(CamelModel):
    id: str
    name: str
    complexity_points: int
    complexity: str
    regulatory_requirements: list[str]
    operational_considerations: list[str]

    @classmethod
    def from_domain(cls, scenario: DeploymentScenario) -> "DeploymentScenarioSchema":
        return cls(
            id=scenario.id,
            name=scenario.name,
            complexity_points=scenario.complexity_points,
            complexity=scenario.complexity.value,
            regulatory_requirements=list(scenario.regulatory_requirements),
            operational_considerations=list(scenario.operational_considerations),
        )


# ---------------------------------------------------------------------------
# Composed assessment
# ---------------------------------------------------------------------------


class QuestionSchema(CamelModel):
    """A composed question.

    Attributes:
        source: 'base', 'therapy', 'model' or 'deployment'.
        points: Own point value; 0 for overlay questions.
        overlay_points: The shared points of the originating overlay, if any.
    """

    id: str
    text: str
    source: str
    points: int
    is_blocker: bool
    category: str
    evidence_required: list[str]
    responsible_roles: list[str]
    overlay_id: str | None = None
    dimension_id: str | None = None
    overlay_points: int | None = None

    @classmethod
    def from_domain(cls, question: Question) -> "QuestionSchema":
        if isinstance(question, BaseQuestion):
            return cls(
                id=question.id,
                text=question.text,
                source=question.source.value,
                points=question.points,
                is_blocker=question.is_blocker,
                category=question.category,
                evidence_required=list(question.evidence_required),
                responsible_roles=list(question.responsible_roles),
            )
        assert isinstance(question, OverlayQuestion)
        return cls(
            id=question.id,
            text=question.text,
            source=question.source.value,
            points=question.points,
            is_blocker=question.is_blocker,
            category=question.category,
            evidence_required=[],
            responsible_roles=list(question.responsible_roles),
            overlay_id=question.overlay_id,
            dimension_id=question.dimension_id,
            overlay_points=question.overlay_points,
        )


class OverlayContributionSchema(CamelModel):
    dimension: str
    overlay_id: str
    dimension_id: str
    complexity_points: int
    question_ids: list[str]
    response_key: str

    @classmethod
    def from_domain(cls, contribution: OverlayContribution) -> "OverlayContributionSchema":
        return cls(
            dimension=contribution.source.value,
            overlay_id=contribution.overlay_id,
            dimension_id=contribution.dimension_id,
            complexity_points=contribution.complexity_points,
            question_ids=list(contribution.question_ids),
            response_key=contribution.response_key,
        )


class ComposedSectionSchema(CamelModel):
    id: str
    name: str
    description: str
    is_critical_blocker: bool
    base_points: int
    retained_base_points: int
    enhanced_points: int
    questions: list[QuestionSchema]
    overlay_contributions: list[OverlayContributionSchema]

    @classmethod
    def from_domain(cls, section: ComposedSection) -> "ComposedSectionSchema":
        return cls(
            id=section.id,
            name=section.name,
            description=section.section.description,
            is_critical_blocker=section.section.is_critical_blocker,
            base_points=section.section.base_points,
            retained_base_points=section.retained_base_points,
            enhanced_points=section.enhanced_points,
            questions=[QuestionSchema.from_domain(question) for question in section.questions],
            overlay_contributions=[
                OverlayContributionSchema.from_domain(contribution)
                for contribution in section.contributions
            ],
        )


class GeneratedAssessmentResponse(CamelModel):
    """A composed assessment for one selection."""

    persona_id: str | None
    sub_persona_id: str | None
    company_id: str | None
    sections: list[ComposedSectionSchema]
    total_questions: int
    max_score: int
    estimated_time: str
    critical_sections: int
    production_blockers: int

    @classmethod
    def from_domain(cls, assessment: GeneratedAssessment) -> "GeneratedAssessmentResponse":
        selection = assessment.selection
        return cls(
            persona_id=selection.persona_id,
            sub_persona_id=selection.sub_persona_id,
            company_id=selection.company_id,
            sections=[ComposedSectionSchema.from_domain(section) for section in assessment.sections],
            total_questions=assessment.total_questions,
            max_score=assessment.max_score,
            estimated_time=assessment.estimated_time,
            critical_sections=assessment.critical_sections,
            production_blockers=assessment.production_blockers,
        )


# ---------------------------------------------------------------------------
# Assessment result
# ---------------------------------------------------------------------------


class CriticalGapSchema(CamelModel):
    question_id: str
    section_id: str
    section_name: str
    category: str
    text: str
    responsible_roles: list[str]

    @classmethod
    def from_domain(cls, gap: CriticalGap) -> "CriticalGapSchema":
        return cls(
            question_id=gap.question_id,
            section_id=gap.section_id,
            section_name=gap.section_name,
            category=gap.category,
            text=gap.text,
            responsible_roles=list(gap.responsible_roles),
        )


class RecommendationSchema(CamelModel):
    kind: str
    subject: str
    message: str
    responsible_roles: list[str]
    priority: str

    @classmethod
    def from_domain(cls, recommendation: Recommendation) -> "RecommendationSchema":
        return cls(
            kind=recommendation.kind.value,
            subject=recommendation.subject,
            message=recommendation.message,
            responsible_roles=list(recommendation.responsible_roles),
            priority=recommendation.priority,
        )


class SectionScoreSchema(CamelModel):
    section_id: str
    section_name: str
    earned_points: float
    max_points: int
    answered_questions: int
    total_questions: int
    open_blockers: int
    completion_percentage: int

    @classmethod
    def from_domain(cls, score: SectionScore) -> "SectionScoreSchema":
        return cls(
            section_id=score.section_id,
            section_name=score.section_name,
            earned_points=score.earned_points,
            max_points=score.max_points,
            answered_questions=score.answered_questions,
            total_questions=score.total_questions,
            open_blockers=score.open_blockers,
            completion_percentage=score.completion_percentage,
        )


class AssessmentResultResponse(CamelModel):
    """Scored assessment with readiness classification and recommendations."""

    total_score: float
    max_possible_score: int
    percentage: int
    readiness_status: str
    readiness_label: str
    critical_gaps: list[CriticalGapSchema]
    recommendations: list[RecommendationSchema]
    therapy_overlay_score: int
    model_complexity_score: int
    deployment_complexity_score: int
    final_score: float
    section_scores: list[SectionScoreSchema]

    @classmethod
    def from_domain(cls, result: AssessmentResult) -> "AssessmentResultResponse":
        return cls(
            total_score=result.total_score,
            max_possible_score=result.max_possible_score,
            percentage=result.percentage,
            readiness_status=result.readiness_status,
            readiness_label=result.readiness_label,
            critical_gaps=[CriticalGapSchema.from_domain(gap) for gap in result.critical_gaps],
            recommendations=[
                RecommendationSchema.from_domain(item) for item in result.recommendations
            ],
            therapy_overlay_score=result.therapy_overlay_score,
            model_complexity_score=result.model_complexity_score,
            deployment_complexity_score=result.deployment_complexity_score,
            final_score=result.final_score,
            section_scores=[SectionScoreSchema.from_domain(score) for score in result.section_scores],
        )


class BottleneckResolutionSchema(CamelModel):
    bottleneck: str
    resolution: str
    priority: str
    implementation: str

    @classmethod
    def from_domain(cls, item: BottleneckResolution) -> "BottleneckResolutionSchema":
        return cls(
            bottleneck=item.bottleneck,
            resolution=item.resolution,
            priority=item.priority,
            implementation=item.implementation,
        )


class BottleneckResolutionListResponse(CamelModel):
    resolutions: list[BottleneckResolutionSchema]
    total: int
