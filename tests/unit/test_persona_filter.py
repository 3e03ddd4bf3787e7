"""Unit tests for persona-based section filtering."""

import pytest

from complianceiq_assessment.core.catalog import CatalogContext
from complianceiq_assessment.core.persona_filter import filter_sections, resolve_persona
from complianceiq_assessment.errors import NotFoundError


class TestResolvePersona:
    """Persona and sub-persona lookup."""

    def test_resolves_persona_and_sub_persona(self, catalog: CatalogContext) -> None:
        """Both are returned when the sub-persona belongs to the persona."""
        persona, sub_persona = resolve_persona(catalog, "regulatory", "regulatory-lead")
        assert persona.id == "regulatory"
        assert sub_persona is not None
        assert sub_persona.name == "Regulatory Lead"

    def test_unknown_persona(self, catalog: CatalogContext) -> None:
        """Unknown personas list every available persona."""
        with pytest.raises(NotFoundError) as exc_info:
            resolve_persona(catalog, "marketing")
        assert exc_info.value.resource == "persona"
        assert exc_info.value.available == ["admin", "regulatory", "engineering"]

    def test_sub_persona_of_another_persona(self, catalog: CatalogContext) -> None:
        """A mismatched sub-persona lists the persona's own sub-personas."""
        with pytest.raises(NotFoundError) as exc_info:
            resolve_persona(catalog, "regulatory", "security-engineer")
        error = exc_info.value
        assert error.resource == "sub_persona"
        assert error.resource_id == "security-engineer"
        assert error.available == ["regulatory-lead", "regulatory-analyst"]
        assert "regulatory-lead" in str(error)


class TestFilterSections:
    """Visible sections per persona."""

    def test_persona_rows_without_sub_persona(self, catalog: CatalogContext) -> None:
        """Rows without a sub-persona apply to the bare persona."""
        sections = filter_sections(catalog, "regulatory")
        assert [section.id for section in sections] == ["governance"]

    def test_sub_persona_rows_add_sections(self, catalog: CatalogContext) -> None:
        """Sub-persona rows apply only when that sub-persona is requested."""
        lead = filter_sections(catalog, "regulatory", "regulatory-lead")
        analyst = filter_sections(catalog, "regulatory", "regulatory-analyst")
        assert [section.id for section in lead] == ["governance", "security"]
        assert [section.id for section in analyst] == ["governance"]

    def test_sections_keep_catalog_order(self, catalog: CatalogContext) -> None:
        """Output follows the catalog, not the mapping table."""
        sections = filter_sections(catalog, "engineering")
        assert [section.id for section in sections] == ["security", "operations"]

    def test_admin_sees_everything(self, catalog: CatalogContext) -> None:
        """Admin personas bypass the mapping table."""
        sections = filter_sections(catalog, "admin")
        assert [section.id for section in sections] == ["governance", "security", "operations"]
