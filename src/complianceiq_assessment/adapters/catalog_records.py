"""Pydantic models for catalog records supplied by an external catalog store.

Records use the store's camelCase field names (``basePoints``,
``aiModelOverlays``...); snake_case names are accepted as well.
:func:`build_catalog` turns a validated payload into a CatalogContext.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from complianceiq_assessment.core.catalog import (
    AIModelType,
    BottleneckResolution,
    CatalogContext,
    ComplexityTier,
    DeploymentScenario,
    Overlay,
    Persona,
    PersonaSectionMapping,
    Section,
    SubPersona,
    TherapeuticArea,
)
from complianceiq_assessment.core.questions import BaseQuestion


class _Record(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        protected_namespaces=(),
    )


class QuestionRecord(_Record):
    id: str = Field(..., min_length=1)
    text: str
    points: int = Field(..., ge=0)
    is_blocker: bool = False
    category: str = "General"
    evidence_required: list[str] = Field(default_factory=list)
    responsible_roles: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("responsibleRoles", "responsibleRole", "responsible_roles"),
    )
    therapy_conditions: list[str] | None = None
    model_conditions: list[str] | None = None
    deployment_conditions: list[str] | None = None


class OverlayRecord(_Record):
    id: str | None = None
    dimension_id: str
    complexity_points: int = Field(..., ge=0)
    question_texts: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("questions", "questionTexts", "question_texts"),
    )


class SectionRecord(_Record):
    id: str = Field(..., min_length=1)
    name: str = ""
    description: str = ""
    base_points: int = Field(..., ge=0)
    is_critical_blocker: bool = False
    default_responsible_roles: list[str] = Field(default_factory=list)
    questions: list[QuestionRecord] = Field(default_factory=list)
    therapy_overlays: list[OverlayRecord] = Field(default_factory=list)
    ai_model_overlays: list[OverlayRecord] = Field(default_factory=list)
    deployment_overlays: list[OverlayRecord] = Field(default_factory=list)


class SubPersonaRecord(_Record):
    id: str
    name: str
    expertise_level: str = "intermediate"
    description: str = ""


class PersonaRecord(_Record):
    id: str
    name: str
    description: str = ""
    is_admin: bool = False
    sub_personas: list[SubPersonaRecord] = Field(default_factory=list)


class PersonaMappingRecord(_Record):
    persona_id: str
    sub_persona_id: str | None = None
    section_id: str
    is_required: bool = True
    priority_score: int = 1


class TherapeuticAreaRecord(_Record):
    id: str
    name: str
    overlay_points: int = Field(..., ge=0)
    complexity: ComplexityTier
    specific_requirements: list[str] = Field(default_factory=list)
    regulatory_guidance: list[str] = Field(default_factory=list)


class AIModelTypeRecord(_Record):
    id: str
    name: str
    complexity_points: int = Field(..., ge=0)
    complexity: ComplexityTier
    specific_requirements: list[str] = Field(default_factory=list)
    safety_considerations: list[str] = Field(default_factory=list)


class DeploymentScenarioRecord(_Record):
    id: str
    name: str
    complexity_points: int = Field(..., ge=0)
    complexity: ComplexityTier
    regulatory_requirements: list[str] = Field(default_factory=list)
    operational_considerations: list[str] = Field(default_factory=list)


class BottleneckResolutionRecord(_Record):
    bottleneck: str
    resolution: str
    priority: str
    implementation: str


class CatalogRecord(_Record):
    """A complete catalog payload."""

    sections: list[SectionRecord]
    personas: list[PersonaRecord]
    therapeutic_areas: list[TherapeuticAreaRecord] = Field(default_factory=list)
    ai_model_types: list[AIModelTypeRecord] = Field(default_factory=list)
    deployment_scenarios: list[DeploymentScenarioRecord] = Field(default_factory=list)
    persona_mappings: list[PersonaMappingRecord] = Field(default_factory=list)
    bottleneck_resolutions: dict[str, list[BottleneckResolutionRecord]] = Field(default_factory=dict)


def _optional_tuple(values: list[str] | None) -> tuple[str, ...] | None:
    return None if values is None else tuple(values)


def _to_question(record: QuestionRecord) -> BaseQuestion:
    return BaseQuestion(
        id=record.id,
        text=record.text,
        points=record.points,
        is_blocker=record.is_blocker,
        category=record.category,
        evidence_required=tuple(record.evidence_required),
        responsible_roles=tuple(record.responsible_roles),
        therapy_conditions=_optional_tuple(record.therapy_conditions),
        model_conditions=_optional_tuple(record.model_conditions),
        deployment_conditions=_optional_tuple(record.deployment_conditions),
    )


def _to_overlays(section_id: str, records: list[OverlayRecord]) -> tuple[Overlay, ...]:
    return tuple(
        Overlay(
            id=record.id or f"{section_id}.{record.dimension_id}",
            dimension_id=record.dimension_id,
            complexity_points=record.complexity_points,
            question_texts=tuple(record.question_texts),
        )
        for record in records
    )


def _to_section(record: SectionRecord) -> Section:
    return Section(
        id=record.id,
        name=record.name or record.id,
        description=record.description,
        base_points=record.base_points,
        is_critical_blocker=record.is_critical_blocker,
        default_responsible_roles=tuple(record.default_responsible_roles),
        questions=tuple(_to_question(question) for question in record.questions),
        therapy_overlays=_to_overlays(record.id, record.therapy_overlays),
        model_overlays=_to_overlays(record.id, record.ai_model_overlays),
        deployment_overlays=_to_overlays(record.id, record.deployment_overlays),
    )


def _to_persona(record: PersonaRecord) -> Persona:
    return Persona(
        id=record.id,
        name=record.name,
        description=record.description,
        is_admin=record.is_admin,
        sub_personas=tuple(
            SubPersona(
                id=sub.id,
                persona_id=record.id,
                name=sub.name,
                expertise_level=sub.expertise_level,
                description=sub.description,
            )
            for sub in record.sub_personas
        ),
    )


def build_catalog(payload: Mapping[str, Any] | CatalogRecord) -> CatalogContext:
    """Validate catalog records and build an immutable CatalogContext.

    Args:
        payload: Raw catalog mapping (camelCase or snake_case keys) or an
            already validated CatalogRecord.

    Returns:
        The catalog.

    Raises:
        pydantic.ValidationError: If a record is malformed.
        ValueError: If the records are inconsistent (duplicate ids, points
            mismatch, dangling mapping references).
    """
    record = payload if isinstance(payload, CatalogRecord) else CatalogRecord.model_validate(payload)

    return CatalogContext(
        sections=tuple(_to_section(section) for section in record.sections),
        personas=tuple(_to_persona(persona) for persona in record.personas),
        therapeutic_areas=tuple(
            TherapeuticArea(
                id=area.id,
                name=area.name,
                overlay_points=area.overlay_points,
                complexity=area.complexity,
                specific_requirements=tuple(area.specific_requirements),
                regulatory_guidance=tuple(area.regulatory_guidance),
            )
            for area in record.therapeutic_areas
        ),
        ai_model_types=tuple(
            AIModelType(
                id=model.id,
                name=model.name,
                complexity_points=model.complexity_points,
                complexity=model.complexity,
                specific_requirements=tuple(model.specific_requirements),
                safety_considerations=tuple(model.safety_considerations),
            )
            for model in record.ai_model_types
        ),
        deployment_scenarios=tuple(
            DeploymentScenario(
                id=scenario.id,
                name=scenario.name,
                complexity_points=scenario.complexity_points,
                complexity=scenario.complexity,
                regulatory_requirements=tuple(scenario.regulatory_requirements),
                operational_considerations=tuple(scenario.operational_considerations),
            )
            for scenario in record.deployment_scenarios
        ),
        persona_mappings=tuple(
            PersonaSectionMapping(
                persona_id=row.persona_id,
                sub_persona_id=row.sub_persona_id,
                section_id=row.section_id,
                is_required=row.is_required,
                priority_score=row.priority_score,
            )
            for row in record.persona_mappings
        ),
        bottleneck_resolutions={
            dimension_id: tuple(
                BottleneckResolution(
                    bottleneck=item.bottleneck,
                    resolution=item.resolution,
                    priority=item.priority,
                    implementation=item.implementation,
                )
                for item in items
            )
            for dimension_id, items in record.bottleneck_resolutions.items()
        },
    )
