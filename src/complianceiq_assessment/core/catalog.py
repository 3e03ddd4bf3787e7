"""Read-only reference catalog for assessment composition.

The catalog is built once at startup and shared by every request. All
entities are frozen dataclasses holding tuples, and the lookup indexes on
:class:`CatalogContext` are read-only mapping proxies, so concurrent callers
can never observe a mutation.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

from complianceiq_assessment.core.questions import BaseQuestion, QuestionSource


class ComplexityTier(str, Enum):
    """Complexity tier carried by every dimension value."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"

    @property
    def is_elevated(self) -> bool:
        """True for tiers that warrant a tailored recommendation."""
        return self in (ComplexityTier.HIGH, ComplexityTier.CRITICAL)


@dataclass(frozen=True)
class SubPersona:
    id: str
    persona_id: str
    name: str
    expertise_level: str = "intermediate"
    description: str = ""


@dataclass(frozen=True)
class Persona:
    """A respondent role; admin personas see every section.

    Attributes:
        id: Persona identifier (e.g., 'regulatory').
        name: Display name.
        description: Short description of the role.
        is_admin: Bypasses persona-based section filtering.
        sub_personas: Specialisations, each belonging to this persona only.
    """

    id: str
    name: str
    description: str = ""
    is_admin: bool = False
    sub_personas: tuple[SubPersona, ...] = ()

    @property
    def sub_persona_ids(self) -> list[str]:
        return [sub.id for sub in self.sub_personas]


@dataclass(frozen=True)
class TherapeuticArea:
    id: str
    name: str
    overlay_points: int
    complexity: ComplexityTier
    specific_requirements: tuple[str, ...] = ()
    regulatory_guidance: tuple[str, ...] = ()

    @property
    def points(self) -> int:
        return self.overlay_points

    @property
    def required_controls(self) -> tuple[str, ...]:
        return self.regulatory_guidance


@dataclass(frozen=True)
class AIModelType:
    id: str
    name: str
    complexity_points: int
    complexity: ComplexityTier
    specific_requirements: tuple[str, ...] = ()
    safety_considerations: tuple[str, ...] = ()

    @property
    def points(self) -> int:
        return self.complexity_points

    @property
    def required_controls(self) -> tuple[str, ...]:
        return self.safety_considerations


@dataclass(frozen=True)
class DeploymentScenario:
    id: str
    name: str
    complexity_points: int
    complexity: ComplexityTier
    regulatory_requirements: tuple[str, ...] = ()
    operational_considerations: tuple[str, ...] = ()

    @property
    def points(self) -> int:
        return self.complexity_points

    @property
    def required_controls(self) -> tuple[str, ...]:
        return self.regulatory_requirements


DimensionValue = TherapeuticArea | AIModelType | DeploymentScenario


@dataclass(frozen=True)
class Overlay:
    """Extra questions and points attached to a section for one dimension value.

    Attributes:
        id: Overlay identifier, unique across the catalog; used in synthetic
            question ids.
        dimension_id: Id of the therapeutic area, model type or scenario.
        complexity_points: Points added to the section once when matched,
            independent of how many question texts the overlay holds.
        question_texts: Texts expanded into generated questions, in order.
    """

    id: str
    dimension_id: str
    complexity_points: int
    question_texts: tuple[str, ...] = ()


@dataclass(frozen=True)
class Section:
    """An assessment section with its base questions and overlays.

    Attributes:
        id: Section identifier (e.g., 'regulatory-compliance').
        name: Display name.
        base_points: Sum of base question points.
        is_critical_blocker: Whether the section as a whole is production-critical.
        default_responsible_roles: Roles inherited by generated questions.
        questions: Ordered base questions.
        therapy_overlays: Overlays keyed by therapeutic area id.
        model_overlays: Overlays keyed by AI model type id.
        deployment_overlays: Overlays keyed by deployment scenario id.
    """

    id: str
    name: str
    base_points: int
    is_critical_blocker: bool = False
    description: str = ""
    default_responsible_roles: tuple[str, ...] = ()
    questions: tuple[BaseQuestion, ...] = ()
    therapy_overlays: tuple[Overlay, ...] = ()
    model_overlays: tuple[Overlay, ...] = ()
    deployment_overlays: tuple[Overlay, ...] = ()

    def overlays_for(self, source: QuestionSource) -> tuple[Overlay, ...]:
        if source is QuestionSource.THERAPY:
            return self.therapy_overlays
        if source is QuestionSource.MODEL:
            return self.model_overlays
        if source is QuestionSource.DEPLOYMENT:
            return self.deployment_overlays
        return ()


@dataclass(frozen=True)
class PersonaSectionMapping:
    """One row of the persona-to-section visibility table.

    A row whose ``sub_persona_id`` is None applies to every sub-persona of
    the persona.
    """

    persona_id: str
    section_id: str
    sub_persona_id: str | None = None
    is_required: bool = True
    priority_score: int = 1


@dataclass(frozen=True)
class BottleneckResolution:
    bottleneck: str
    resolution: str
    priority: str
    implementation: str


@dataclass(frozen=True, eq=False)
class CatalogContext:
    """Immutable catalog passed into every composition and scoring call.

    Construction validates cross-references and builds read-only indexes.

    Raises:
        ValueError: If ids are duplicated, a section's base_points does not
            equal the sum of its base question points, or a mapping row
            references an unknown persona, sub-persona or section.
    """

    sections: tuple[Section, ...]
    personas: tuple[Persona, ...]
    therapeutic_areas: tuple[TherapeuticArea, ...] = ()
    ai_model_types: tuple[AIModelType, ...] = ()
    deployment_scenarios: tuple[DeploymentScenario, ...] = ()
    persona_mappings: tuple[PersonaSectionMapping, ...] = ()
    bottleneck_resolutions: Mapping[str, tuple[BottleneckResolution, ...]] = field(
        default_factory=dict
    )
    sections_by_id: Mapping[str, Section] = field(init=False, repr=False, compare=False)
    personas_by_id: Mapping[str, Persona] = field(init=False, repr=False, compare=False)
    therapeutic_areas_by_id: Mapping[str, TherapeuticArea] = field(init=False, repr=False, compare=False)
    ai_model_types_by_id: Mapping[str, AIModelType] = field(init=False, repr=False, compare=False)
    deployment_scenarios_by_id: Mapping[str, DeploymentScenario] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        sections_by_id = _index(self.sections, "section")
        personas_by_id = _index(self.personas, "persona")
        therapy_by_id = _index(self.therapeutic_areas, "therapeutic area")
        models_by_id = _index(self.ai_model_types, "AI model type")
        deployments_by_id = _index(self.deployment_scenarios, "deployment scenario")

        for section in self.sections:
            question_total = sum(question.points for question in section.questions)
            if section.base_points != question_total:
                raise ValueError(
                    f"Section {section.id!r} declares base_points={section.base_points} "
                    f"but its questions sum to {question_total}"
                )
            for question in section.questions:
                if ":" in question.id:
                    raise ValueError(
                        f"Base question id {question.id!r} in section {section.id!r} "
                        "must not contain ':'"
                    )

        for persona in self.personas:
            for sub in persona.sub_personas:
                if sub.persona_id != persona.id:
                    raise ValueError(
                        f"Sub-persona {sub.id!r} is listed under {persona.id!r} "
                        f"but belongs to {sub.persona_id!r}"
                    )

        for row in self.persona_mappings:
            persona = personas_by_id.get(row.persona_id)
            if persona is None:
                raise ValueError(f"Mapping references unknown persona {row.persona_id!r}")
            if row.section_id not in sections_by_id:
                raise ValueError(f"Mapping references unknown section {row.section_id!r}")
            if row.sub_persona_id is not None and row.sub_persona_id not in persona.sub_persona_ids:
                raise ValueError(
                    f"Mapping references sub-persona {row.sub_persona_id!r} "
                    f"outside persona {row.persona_id!r}"
                )

        # Frozen dataclass: indexes are attached through object.__setattr__.
        object.__setattr__(self, "sections_by_id", MappingProxyType(sections_by_id))
        object.__setattr__(self, "personas_by_id", MappingProxyType(personas_by_id))
        object.__setattr__(self, "therapeutic_areas_by_id", MappingProxyType(therapy_by_id))
        object.__setattr__(self, "ai_model_types_by_id", MappingProxyType(models_by_id))
        object.__setattr__(self, "deployment_scenarios_by_id", MappingProxyType(deployments_by_id))
        object.__setattr__(
            self,
            "bottleneck_resolutions",
            MappingProxyType({key: tuple(value) for key, value in self.bottleneck_resolutions.items()}),
        )

    def dimension_index(self, source: QuestionSource) -> Mapping[str, DimensionValue]:
        """Return the id index for one overlay dimension."""
        if source is QuestionSource.THERAPY:
            return self.therapeutic_areas_by_id
        if source is QuestionSource.MODEL:
            return self.ai_model_types_by_id
        if source is QuestionSource.DEPLOYMENT:
            return self.deployment_scenarios_by_id
        raise ValueError(f"{source.value!r} is not an overlay dimension")

    def dimension_values(self, source: QuestionSource) -> tuple[DimensionValue, ...]:
        """Return one overlay dimension's values in catalog order."""
        if source is QuestionSource.THERAPY:
            return self.therapeutic_areas
        if source is QuestionSource.MODEL:
            return self.ai_model_types
        if source is QuestionSource.DEPLOYMENT:
            return self.deployment_scenarios
        raise ValueError(f"{source.value!r} is not an overlay dimension")


def _index(items: Iterable, kind: str) -> dict:
    index: dict = {}
    for item in items:
        if item.id in index:
            raise ValueError(f"Duplicate {kind} id {item.id!r}")
        index[item.id] = item
    return index
