"""Persona-based section visibility.

Sections are visible to a persona when the persona-to-section table holds a
row for it. Rows without a sub-persona apply to every sub-persona of the
persona; rows with one apply only when that sub-persona is requested.
Admin personas see every section.
"""

from complianceiq_assessment.core.catalog import CatalogContext, Persona, Section, SubPersona
from complianceiq_assessment.errors import NotFoundError
from complianceiq_assessment.observability import get_logger

logger = get_logger(__name__)


def resolve_persona(
    catalog: CatalogContext,
    persona_id: str,
    sub_persona_id: str | None = None,
) -> tuple[Persona, SubPersona | None]:
    """Look up a persona and, optionally, one of its sub-personas.

    Args:
        catalog: The reference catalog.
        persona_id: Persona identifier.
        sub_persona_id: Sub-persona identifier, if the caller narrowed the role.

    Returns:
        The persona and the matching sub-persona (None when not requested).

    Raises:
        NotFoundError: If the persona is unknown, or the sub-persona does not
            belong to it. The latter lists the persona's valid sub-personas.
    """
    persona = catalog.personas_by_id.get(persona_id)
    if persona is None:
        raise NotFoundError("persona", persona_id, list(catalog.personas_by_id))

    if sub_persona_id is None:
        return persona, None

    for sub_persona in persona.sub_personas:
        if sub_persona.id == sub_persona_id:
            return persona, sub_persona

    raise NotFoundError("sub_persona", sub_persona_id, persona.sub_persona_ids)


def filter_sections(
    catalog: CatalogContext,
    persona_id: str,
    sub_persona_id: str | None = None,
) -> list[Section]:
    """Return the sections visible to a persona, in catalog order.

    Args:
        catalog: The reference catalog.
        persona_id: Persona identifier.
        sub_persona_id: Optional sub-persona identifier.

    Returns:
        Visible sections. Admin personas receive every section.

    Raises:
        NotFoundError: See :func:`resolve_persona`.
    """
    persona, _ = resolve_persona(catalog, persona_id, sub_persona_id)

    if persona.is_admin:
        logger.debug("Admin persona bypasses section filter", persona_id=persona_id)
        return list(catalog.sections)

    visible_ids = {
        row.section_id
        for row in catalog.persona_mappings
        if row.persona_id == persona_id
        and (row.sub_persona_id is None or row.sub_persona_id == sub_persona_id)
    }
    sections = [section for section in catalog.sections if section.id in visible_ids]

    logger.debug(
        "Sections filtered for persona",
        persona_id=persona_id,
        sub_persona_id=sub_persona_id,
        section_count=len(sections),
    )
    return sections
