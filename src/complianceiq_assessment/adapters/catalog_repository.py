"""Catalog repository backed by the catalog store's ``cq_*`` tables.

Reads every catalog table over an async SQLAlchemy session with plain
``text()`` queries, assembles the camelCase record payload and hands it to
:func:`build_catalog`. List-valued columns hold JSON arrays; drivers that
return them as strings are decoded here.
"""

import json
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from complianceiq_assessment.adapters.catalog_records import build_catalog
from complianceiq_assessment.core.catalog import CatalogContext
from complianceiq_assessment.observability import get_logger

logger = get_logger(__name__)

_OVERLAY_KEYS: dict[str, str] = {
    "therapy": "therapyOverlays",
    "model": "aiModelOverlays",
    "deployment": "deploymentOverlays",
}


def _json_list(value: Any) -> list[Any] | None:
    """Decode a JSON array column; None stays None."""
    if value is None:
        return None
    if isinstance(value, str):
        decoded = json.loads(value)
    else:
        decoded = value
    if not isinstance(decoded, list):
        raise ValueError(f"Expected a JSON array, got {type(decoded).__name__}")
    return decoded


class CatalogRepository:
    """SQLAlchemy repository for the reference catalog.

    Satisfies :class:`~complianceiq_assessment.core.interfaces.ICatalogRepository`.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialise with an async SQLAlchemy session.

        Args:
            session: AsyncSession for catalog store access.
        """
        self._session = session

    async def _fetch(self, query: str) -> list[Any]:
        result = await self._session.execute(text(query))
        return list(result.mappings().all())

    async def load_catalog(self) -> CatalogContext:
        """Load every catalog table and build the CatalogContext.

        Returns:
            The immutable catalog.

        Raises:
            pydantic.ValidationError: If a row is malformed.
            ValueError: If rows are inconsistent, e.g. a section whose
                base_points does not match its questions.
        """
        payload = await self.load_payload()
        catalog = build_catalog(payload)
        logger.info(
            "Catalog loaded from store",
            sections=len(catalog.sections),
            personas=len(catalog.personas),
            therapeutic_areas=len(catalog.therapeutic_areas),
            ai_model_types=len(catalog.ai_model_types),
            deployment_scenarios=len(catalog.deployment_scenarios),
        )
        return catalog

    async def load_payload(self) -> dict[str, Any]:
        """Read the catalog tables into a camelCase record payload."""
        section_rows = await self._fetch(
            """
            SELECT id, name, description, base_points, is_critical_blocker,
                   default_responsible_roles
            FROM cq_sections
            ORDER BY position, id
            """
        )
        sections: dict[str, dict[str, Any]] = {
            row["id"]: {
                "id": row["id"],
                "name": row["name"],
                "description": row["description"] or "",
                "basePoints": row["base_points"],
                "isCriticalBlocker": row["is_critical_blocker"],
                "defaultResponsibleRoles": _json_list(row["default_responsible_roles"]) or [],
                "questions": [],
                "therapyOverlays": [],
                "aiModelOverlays": [],
                "deploymentOverlays": [],
            }
            for row in section_rows
        }

        question_rows = await self._fetch(
            """
            SELECT id, section_id, text, points, is_blocker, category,
                   evidence_required, responsible_roles,
                   therapy_conditions, model_conditions, deployment_conditions
            FROM cq_questions
            ORDER BY section_id, position, id
            """
        )
        for row in question_rows:
            section = sections.get(row["section_id"])
            if section is None:
                raise ValueError(
                    f"Question {row['id']!r} references unknown section {row['section_id']!r}"
                )
            section["questions"].append(
                {
                    "id": row["id"],
                    "text": row["text"],
                    "points": row["points"],
                    "isBlocker": row["is_blocker"],
                    "category": row["category"] or "General",
                    "evidenceRequired": _json_list(row["evidence_required"]) or [],
                    "responsibleRoles": _json_list(row["responsible_roles"]) or [],
                    "therapyConditions": _json_list(row["therapy_conditions"]),
                    "modelConditions": _json_list(row["model_conditions"]),
                    "deploymentConditions": _json_list(row["deployment_conditions"]),
                }
            )

        overlay_rows = await self._fetch(
            """
            SELECT id, section_id, dimension, dimension_id, complexity_points, question_texts
            FROM cq_overlays
            ORDER BY section_id, dimension, position, id
            """
        )
        for row in overlay_rows:
            section = sections.get(row["section_id"])
            key = _OVERLAY_KEYS.get(row["dimension"])
            if section is None or key is None:
                raise ValueError(
                    f"Overlay {row['id']!r} has unknown section {row['section_id']!r} "
                    f"or dimension {row['dimension']!r}"
                )
            section[key].append(
                {
                    "id": row["id"],
                    "dimensionId": row["dimension_id"],
                    "complexityPoints": row["complexity_points"],
                    "questions": _json_list(row["question_texts"]) or [],
                }
            )

        return {
            "sections": list(sections.values()),
            "personas": await self._load_personas(),
            "therapeuticAreas": [
                {
                    "id": row["id"],
                    "name": row["name"],
                    "overlayPoints": row["overlay_points"],
                    "complexity": row["complexity"],
                    "specificRequirements": _json_list(row["specific_requirements"]) or [],
                    "regulatoryGuidance": _json_list(row["regulatory_guidance"]) or [],
                }
                for row in await self._fetch(
                    """
                    SELECT id, name, overlay_points, complexity,
                           specific_requirements, regulatory_guidance
                    FROM cq_therapeutic_areas
                    ORDER BY position, id
                    """
                )
            ],
            "aiModelTypes": [
                {
                    "id": row["id"],
                    "name": row["name"],
                    "complexityPoints": row["complexity_points"],
                    "complexity": row["complexity"],
                    "specificRequirements": _json_list(row["specific_requirements"]) or [],
                    "safetyConsiderations": _json_list(row["safety_considerations"]) or [],
                }
                for row in await self._fetch(
                    """
                    SELECT id, name, complexity_points, complexity,
                           specific_requirements, safety_considerations
                    FROM cq_ai_model_types
                    ORDER BY position, id
                    """
                )
            ],
            "deploymentScenarios": [
                {
                    "id": row["id"],
                    "name": row["name"],
                    "complexityPoints": row["complexity_points"],
                    "complexity": row["complexity"],
                    "regulatoryRequirements": _json_list(row["regulatory_requirements"]) or [],
                    "operationalConsiderations": _json_list(row["operational_considerations"]) or [],
                }
                for row in await self._fetch(
                    """
                    SELECT id, name, complexity_points, complexity,
                           regulatory_requirements, operational_considerations
                    FROM cq_deployment_scenarios
                    ORDER BY position, id
                    """
                )
            ],
            "personaMappings": [
                {
                    "personaId": row["persona_id"],
                    "subPersonaId": row["sub_persona_id"],
                    "sectionId": row["section_id"],
                    "isRequired": row["is_required"],
                    "priorityScore": row["priority_score"],
                }
                for row in await self._fetch(
                    """
                    SELECT persona_id, sub_persona_id, section_id, is_required, priority_score
                    FROM cq_persona_section_mappings
                    ORDER BY persona_id, section_id
                    """
                )
            ],
            "bottleneckResolutions": await self._load_bottleneck_resolutions(),
        }

    async def _load_personas(self) -> list[dict[str, Any]]:
        personas: dict[str, dict[str, Any]] = {
            row["id"]: {
                "id": row["id"],
                "name": row["name"],
                "description": row["description"] or "",
                "isAdmin": row["is_admin"],
                "subPersonas": [],
            }
            for row in await self._fetch(
                """
                SELECT id, name, description, is_admin
                FROM cq_personas
                ORDER BY position, id
                """
            )
        }
        for row in await self._fetch(
            """
            SELECT id, persona_id, name, expertise_level, description
            FROM cq_sub_personas
            ORDER BY persona_id, position, id
            """
        ):
            persona = personas.get(row["persona_id"])
            if persona is None:
                raise ValueError(
                    f"Sub-persona {row['id']!r} references unknown persona {row['persona_id']!r}"
                )
            persona["subPersonas"].append(
                {
                    "id": row["id"],
                    "name": row["name"],
                    "expertiseLevel": row["expertise_level"] or "intermediate",
                    "description": row["description"] or "",
                }
            )
        return list(personas.values())

    async def _load_bottleneck_resolutions(self) -> dict[str, list[dict[str, Any]]]:
        resolutions: dict[str, list[dict[str, Any]]] = {}
        for row in await self._fetch(
            """
            SELECT dimension_id, bottleneck, resolution, priority, implementation
            FROM cq_bottleneck_resolutions
            ORDER BY dimension_id, position
            """
        ):
            resolutions.setdefault(row["dimension_id"], []).append(
                {
                    "bottleneck": row["bottleneck"],
                    "resolution": row["resolution"],
                    "priority": row["priority"],
                    "implementation": row["implementation"],
                }
            )
        return resolutions
