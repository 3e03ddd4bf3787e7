"""Assessment selection and its validation.

A selection names the persona answering the assessment and the dimension
values (therapeutic area, AI model types, deployment scenarios) that drive
overlay composition.
"""

from dataclasses import dataclass

from complianceiq_assessment.core.catalog import CatalogContext
from complianceiq_assessment.core.questions import QuestionSource
from complianceiq_assessment.errors import NotFoundError, ValidationError

_REQUIRED_FIELD_MESSAGES: dict[str, str] = {
    "persona_id": "A persona must be selected",
    "sub_persona_id": "A sub-persona must be selected",
    "therapeutic_area_id": "At least one therapeutic area must be selected",
    "ai_model_type_ids": "At least one AI model type must be selected",
    "deployment_scenario_ids": "At least one deployment scenario must be selected",
    "company_id": "A company must be selected",
}

_DIMENSION_RESOURCES: dict[QuestionSource, str] = {
    QuestionSource.THERAPY: "therapeutic_area",
    QuestionSource.MODEL: "ai_model_type",
    QuestionSource.DEPLOYMENT: "deployment_scenario",
}


def _clean_id(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _dedupe(values: tuple[str, ...] | list[str]) -> tuple[str, ...]:
    cleaned = (_clean_id(value) for value in values)
    return tuple(dict.fromkeys(value for value in cleaned if value))


@dataclass(frozen=True)
class AssessmentSelection:
    """The dimensions a caller selected for one assessment.

    Blank ids normalise to None and repeated list entries are dropped,
    keeping first-occurrence order.

    Attributes:
        persona_id: Persona answering the assessment.
        sub_persona_id: Optional sub-persona narrowing the persona.
        therapeutic_area_id: Optional therapeutic area.
        ai_model_type_ids: Selected AI model types, in selection order.
        deployment_scenario_ids: Selected deployment scenarios, in selection order.
        company_id: Opaque caller reference, echoed back but not interpreted.
    """

    persona_id: str | None
    sub_persona_id: str | None = None
    therapeutic_area_id: str | None = None
    ai_model_type_ids: tuple[str, ...] = ()
    deployment_scenario_ids: tuple[str, ...] = ()
    company_id: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "persona_id", _clean_id(self.persona_id))
        object.__setattr__(self, "sub_persona_id", _clean_id(self.sub_persona_id))
        object.__setattr__(self, "therapeutic_area_id", _clean_id(self.therapeutic_area_id))
        object.__setattr__(self, "ai_model_type_ids", _dedupe(self.ai_model_type_ids))
        object.__setattr__(self, "deployment_scenario_ids", _dedupe(self.deployment_scenario_ids))
        object.__setattr__(self, "company_id", _clean_id(self.company_id))

    def selected_ids(self, source: QuestionSource) -> tuple[str, ...]:
        """Return the ids selected for one overlay dimension."""
        if source is QuestionSource.THERAPY:
            return (self.therapeutic_area_id,) if self.therapeutic_area_id else ()
        if source is QuestionSource.MODEL:
            return self.ai_model_type_ids
        if source is QuestionSource.DEPLOYMENT:
            return self.deployment_scenario_ids
        raise ValueError(f"{source.value!r} is not an overlay dimension")


def validate_selection(
    catalog: CatalogContext,
    selection: AssessmentSelection,
    required_fields: tuple[str, ...] | list[str] = ("persona_id",),
    strict: bool = True,
) -> None:
    """Validate a selection before composition.

    Missing required fields are collected and reported together. In strict
    mode every selected dimension id must exist in the catalog.

    Args:
        catalog: The reference catalog.
        selection: The caller's selection.
        required_fields: Selection attributes that must be non-empty.
        strict: Reject dimension ids the catalog does not know.

    Raises:
        ValidationError: If any required field is missing.
        NotFoundError: In strict mode, for the first unknown dimension id.
        ValueError: If ``required_fields`` names an unknown attribute.
    """
    errors: list[str] = []
    for field_name in required_fields:
        message = _REQUIRED_FIELD_MESSAGES.get(field_name)
        if message is None:
            raise ValueError(f"Unknown selection field {field_name!r}")
        if not getattr(selection, field_name):
            errors.append(message)
    if errors:
        raise ValidationError(errors)

    if not strict:
        return

    for source, resource in _DIMENSION_RESOURCES.items():
        index = catalog.dimension_index(source)
        for selected_id in selection.selected_ids(source):
            if selected_id not in index:
                raise NotFoundError(resource, selected_id, list(index))
