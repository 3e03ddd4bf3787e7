"""Domain errors raised by the assessment engine.

The HTTP layer maps these onto status codes; the core never imports FastAPI.
"""


class AssessmentEngineError(Exception):
    """Base class for all assessment engine errors."""


class NotFoundError(AssessmentEngineError):
    """Raised when a persona, sub-persona or dimension id is not in the catalog.

    Attributes:
        resource: Kind of entity that was looked up (e.g., 'persona').
        resource_id: The id that could not be resolved.
        available: Valid alternatives the caller may choose from.
    """

    def __init__(
        self,
        resource: str,
        resource_id: str,
        available: list[str] | None = None,
    ) -> None:
        self.resource = resource
        self.resource_id = resource_id
        self.available = list(available or [])
        message = f"Unknown {resource} {resource_id!r}"
        if self.available:
            message += f"; available: {', '.join(self.available)}"
        super().__init__(message)


class ValidationError(AssessmentEngineError):
    """Raised when a selection is missing required fields.

    All field-level problems are collected before raising so the caller can
    fix them in one round trip.

    Attributes:
        errors: Field-level error messages, in field order.
    """

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


class CompositionError(AssessmentEngineError):
    """Raised when a composed question id collides with one already in the assessment.

    Attributes:
        section_id: Section being composed when the collision was detected.
        overlay_id: Overlay that produced the colliding question, if any.
        question_id: The duplicated question id.
    """

    def __init__(self, section_id: str, overlay_id: str | None, question_id: str) -> None:
        self.section_id = section_id
        self.overlay_id = overlay_id
        self.question_id = question_id
        source = f"overlay {overlay_id!r}" if overlay_id else "base question list"
        super().__init__(
            f"Duplicate question id {question_id!r} from {source} in section {section_id!r}"
        )
