"""Unit tests for the SQLAlchemy catalog repository.

Runs against an in-memory SQLite database through aiosqlite. List-valued
columns hold JSON text, as they do for drivers without a native JSON type.
"""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from complianceiq_assessment.adapters.catalog_repository import CatalogRepository
from complianceiq_assessment.core.interfaces import ICatalogRepository

_SCHEMA = [
    """
    CREATE TABLE cq_sections (
        id TEXT PRIMARY KEY, name TEXT, description TEXT, base_points INTEGER,
        is_critical_blocker BOOLEAN, default_responsible_roles TEXT, position INTEGER
    )
    """,
    """
    CREATE TABLE cq_questions (
        id TEXT PRIMARY KEY, section_id TEXT, text TEXT, points INTEGER, is_blocker BOOLEAN,
        category TEXT, evidence_required TEXT, responsible_roles TEXT,
        therapy_conditions TEXT, model_conditions TEXT, deployment_conditions TEXT,
        position INTEGER
    )
    """,
    """
    CREATE TABLE cq_overlays (
        id TEXT PRIMARY KEY, section_id TEXT, dimension TEXT, dimension_id TEXT,
        complexity_points INTEGER, question_texts TEXT, position INTEGER
    )
    """,
    """
    CREATE TABLE cq_personas (
        id TEXT PRIMARY KEY, name TEXT, description TEXT, is_admin BOOLEAN, position INTEGER
    )
    """,
    """
    CREATE TABLE cq_sub_personas (
        id TEXT PRIMARY KEY, persona_id TEXT, name TEXT, expertise_level TEXT,
        description TEXT, position INTEGER
    )
    """,
    """
    CREATE TABLE cq_therapeutic_areas (
        id TEXT PRIMARY KEY, name TEXT, overlay_points INTEGER, complexity TEXT,
        specific_requirements TEXT, regulatory_guidance TEXT, position INTEGER
    )
    """,
    """
    CREATE TABLE cq_ai_model_types (
        id TEXT PRIMARY KEY, name TEXT, complexity_points INTEGER, complexity TEXT,
        specific_requirements TEXT, safety_considerations TEXT, position INTEGER
    )
    """,
    """
    CREATE TABLE cq_deployment_scenarios (
        id TEXT PRIMARY KEY, name TEXT, complexity_points INTEGER, complexity TEXT,
        regulatory_requirements TEXT, operational_considerations TEXT, position INTEGER
    )
    """,
    """
    CREATE TABLE cq_persona_section_mappings (
        persona_id TEXT, sub_persona_id TEXT, section_id TEXT,
        is_required BOOLEAN, priority_score INTEGER
    )
    """,
    """
    CREATE TABLE cq_bottleneck_resolutions (
        dimension_id TEXT, bottleneck TEXT, resolution TEXT, priority TEXT,
        implementation TEXT, position INTEGER
    )
    """,
]

_ROWS = [
    """
    INSERT INTO cq_sections VALUES
        ('security', 'Security', '', 10, 1, '["CISO"]', 2),
        ('governance', 'AI Governance', 'Oversight', 15, 1, '["CCO", "AI Lead"]', 1)
    """,
    """
    INSERT INTO cq_questions VALUES
        ('gov-002', 'governance', 'Charter?', 5, 0, NULL, NULL, NULL, NULL, NULL, NULL, 2),
        ('gov-001', 'governance', 'Board?', 10, 1, 'Production Blocker', '["Minutes"]',
         '["CCO"]', '["oncology"]', '["llm"]', NULL, 1),
        ('sec-001', 'security', 'Encryption?', 10, 1, 'Production Blocker', NULL,
         '["CISO"]', NULL, NULL, NULL, 1)
    """,
    """
    INSERT INTO cq_overlays VALUES
        ('governance.oncology', 'governance', 'therapy', 'oncology', 2,
         '["Lineage documented?"]', 1),
        ('governance.llm', 'governance', 'model', 'llm', 3, NULL, 1)
    """,
    """
    INSERT INTO cq_personas VALUES
        ('admin', 'Administrator', NULL, 1, 1),
        ('regulatory', 'Regulatory Affairs', 'Submissions', 0, 2)
    """,
    """
    INSERT INTO cq_sub_personas VALUES
        ('regulatory-lead', 'regulatory', 'Regulatory Lead', 'expert', NULL, 1)
    """,
    """
    INSERT INTO cq_therapeutic_areas VALUES
        ('oncology', 'Oncology', 20, 'Critical', '["Genomics"]', '["FDA OCE"]', 1)
    """,
    """
    INSERT INTO cq_ai_model_types VALUES
        ('llm', 'Large Language Model', 4, 'High', NULL, '["Hallucination monitoring"]', 1)
    """,
    """
    INSERT INTO cq_deployment_scenarios VALUES
        ('internal-analytics', 'Internal Analytics', 1, 'Low', NULL, NULL, 1)
    """,
    """
    INSERT INTO cq_persona_section_mappings VALUES
        ('regulatory', NULL, 'governance', 1, 3),
        ('regulatory', 'regulatory-lead', 'security', 0, 1)
    """,
    """
    INSERT INTO cq_bottleneck_resolutions VALUES
        ('oncology', 'Provenance', 'Lineage', 'High', 'Catalog integration', 1)
    """,
]


@pytest_asyncio.fixture()
async def session() -> AsyncGenerator[AsyncSession, None]:
    """In-memory catalog store populated with a small catalog."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    session_factory = async_sessionmaker(engine, expire_on_commit=False)
    async with session_factory() as db_session:
        for statement in _SCHEMA + _ROWS:
            await db_session.execute(text(statement))
        await db_session.commit()
        yield db_session
    await engine.dispose()


class TestCatalogRepository:
    """Loading the catalog from the store."""

    @pytest.mark.asyncio()
    async def test_satisfies_interface(self, session: AsyncSession) -> None:
        """The repository implements ICatalogRepository."""
        assert isinstance(CatalogRepository(session), ICatalogRepository)

    @pytest.mark.asyncio()
    async def test_load_catalog(self, session: AsyncSession) -> None:
        """Rows are assembled into an ordered catalog."""
        catalog = await CatalogRepository(session).load_catalog()

        assert [section.id for section in catalog.sections] == ["governance", "security"]
        governance = catalog.sections_by_id["governance"]
        assert governance.default_responsible_roles == ("CCO", "AI Lead")
        assert [q.id for q in governance.questions] == ["gov-001", "gov-002"]
        assert governance.questions[0].is_blocker
        assert governance.questions[0].therapy_conditions == ("oncology",)
        assert governance.questions[0].deployment_conditions is None
        assert governance.questions[1].category == "General"
        assert governance.therapy_overlays[0].question_texts == ("Lineage documented?",)
        assert governance.model_overlays[0].question_texts == ()

    @pytest.mark.asyncio()
    async def test_load_personas_and_mappings(self, session: AsyncSession) -> None:
        """Personas, sub-personas and mapping rows are read."""
        catalog = await CatalogRepository(session).load_catalog()

        assert catalog.personas_by_id["admin"].is_admin
        assert catalog.personas_by_id["regulatory"].sub_persona_ids == ["regulatory-lead"]
        assert len(catalog.persona_mappings) == 2
        lead_row = next(row for row in catalog.persona_mappings if row.sub_persona_id)
        assert lead_row.section_id == "security"
        assert not lead_row.is_required

    @pytest.mark.asyncio()
    async def test_load_dimensions_and_resolutions(self, session: AsyncSession) -> None:
        """Dimension tables and bottleneck resolutions are read."""
        catalog = await CatalogRepository(session).load_catalog()

        assert catalog.therapeutic_areas_by_id["oncology"].regulatory_guidance == ("FDA OCE",)
        assert catalog.ai_model_types_by_id["llm"].safety_considerations == ("Hallucination monitoring",)
        assert catalog.deployment_scenarios[0].operational_considerations == ()
        assert catalog.bottleneck_resolutions["oncology"][0].implementation == "Catalog integration"

    @pytest.mark.asyncio()
    async def test_orphan_question_rejected(self, session: AsyncSession) -> None:
        """Questions referencing unknown sections fail the load."""
        await session.execute(
            text(
                "INSERT INTO cq_questions VALUES "
                "('x-001', 'missing', 'Orphan?', 1, 0, NULL, NULL, NULL, NULL, NULL, NULL, 1)"
            )
        )
        with pytest.raises(ValueError, match="unknown section"):
            await CatalogRepository(session).load_catalog()
