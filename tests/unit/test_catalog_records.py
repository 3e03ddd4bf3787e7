"""Unit tests for catalog record validation and catalog building."""

from typing import Any

import pydantic
import pytest

from complianceiq_assessment.adapters.catalog_records import CatalogRecord, build_catalog
from complianceiq_assessment.core.catalog import ComplexityTier


def _payload() -> dict[str, Any]:
    return {
        "sections": [
            {
                "id": "governance",
                "name": "AI Governance",
                "basePoints": 15,
                "isCriticalBlocker": True,
                "defaultResponsibleRoles": ["Chief Compliance Officer"],
                "questions": [
                    {
                        "id": "gov-001",
                        "text": "Is there a governance board?",
                        "points": 10,
                        "isBlocker": True,
                        "responsibleRole": ["Chief Compliance Officer"],
                        "therapyConditions": ["oncology"],
                    },
                    {"id": "gov-002", "text": "Is there a charter?", "points": 5},
                ],
                "therapyOverlays": [
                    {
                        "dimensionId": "oncology",
                        "complexityPoints": 2,
                        "questions": ["Is oncology data lineage documented?"],
                    }
                ],
                "aiModelOverlays": [
                    {"id": "gov-llm", "dimensionId": "llm", "complexityPoints": 3},
                ],
            }
        ],
        "personas": [
            {
                "id": "regulatory",
                "name": "Regulatory Affairs",
                "subPersonas": [{"id": "regulatory-lead", "name": "Regulatory Lead"}],
            },
            {"id": "admin", "name": "Administrator", "isAdmin": True},
        ],
        "therapeuticAreas": [
            {"id": "oncology", "name": "Oncology", "overlayPoints": 5, "complexity": "Critical"}
        ],
        "aiModelTypes": [
            {"id": "llm", "name": "Large Language Model", "complexityPoints": 4, "complexity": "High"}
        ],
        "personaMappings": [
            {"personaId": "regulatory", "subPersonaId": "regulatory-lead", "sectionId": "governance"}
        ],
        "bottleneckResolutions": {
            "oncology": [
                {
                    "bottleneck": "Provenance",
                    "resolution": "Lineage",
                    "priority": "High",
                    "implementation": "Catalog",
                }
            ]
        },
    }


class TestBuildCatalog:
    """Record payloads to CatalogContext."""

    def test_builds_sections_and_overlays(self) -> None:
        """camelCase payloads map onto catalog entities."""
        catalog = build_catalog(_payload())
        section = catalog.sections_by_id["governance"]

        assert section.is_critical_blocker
        assert [q.id for q in section.questions] == ["gov-001", "gov-002"]
        assert section.questions[0].responsible_roles == ("Chief Compliance Officer",)
        assert section.questions[0].therapy_conditions == ("oncology",)
        assert section.questions[1].therapy_conditions is None
        assert section.therapy_overlays[0].id == "governance.oncology"
        assert section.therapy_overlays[0].question_texts == ("Is oncology data lineage documented?",)
        assert section.model_overlays[0].id == "gov-llm"
        assert section.model_overlays[0].question_texts == ()

    def test_builds_personas_and_dimensions(self) -> None:
        """Sub-personas inherit their persona id; tiers parse from strings."""
        catalog = build_catalog(_payload())
        regulatory = catalog.personas_by_id["regulatory"]
        assert regulatory.sub_personas[0].persona_id == "regulatory"
        assert catalog.personas_by_id["admin"].is_admin
        assert catalog.therapeutic_areas_by_id["oncology"].complexity is ComplexityTier.CRITICAL
        assert catalog.bottleneck_resolutions["oncology"][0].bottleneck == "Provenance"

    def test_accepts_validated_record(self) -> None:
        """A pre-validated CatalogRecord is used as is."""
        record = CatalogRecord.model_validate(_payload())
        assert build_catalog(record).sections[0].id == "governance"

    def test_snake_case_keys_accepted(self) -> None:
        """Field names work as well as aliases."""
        payload = _payload()
        payload["therapeutic_areas"] = payload.pop("therapeuticAreas")
        assert build_catalog(payload).therapeutic_areas[0].overlay_points == 5

    def test_invalid_tier_rejected(self) -> None:
        """Complexity tiers are a closed set."""
        payload = _payload()
        payload["aiModelTypes"][0]["complexity"] = "Extreme"
        with pytest.raises(pydantic.ValidationError):
            build_catalog(payload)

    def test_negative_points_rejected(self) -> None:
        """Points cannot be negative."""
        payload = _payload()
        payload["sections"][0]["questions"][1]["points"] = -5
        with pytest.raises(pydantic.ValidationError):
            build_catalog(payload)

    def test_points_mismatch_rejected(self) -> None:
        """Inconsistent records surface the catalog's ValueError."""
        payload = _payload()
        payload["sections"][0]["basePoints"] = 20
        with pytest.raises(ValueError, match="base_points"):
            build_catalog(payload)
