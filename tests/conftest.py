"""Test fixtures for complianceiq-assessment.

Provides a small hand-built catalog whose point values are easy to reason
about, an engine over it, and an async HTTP client for the API.

Catalog layout:

    governance   gov-001 (10, blocker)  gov-002 (5)            base 15
                 therapy    oncology -> 2 points, 1 question
                 model      llm      -> 2 points, 2 questions
                 deployment cds      -> 3 points, no questions
    security     sec-001 (10, blocker)  sec-002 (5, oncology only)
                 sec-003 (5, no conditions)                    base 20
                 model      llm      -> 4 points, 1 question
    operations   ops-001 (8)                                   base 8
"""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

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
from complianceiq_assessment.core.engine import AssessmentEngine
from complianceiq_assessment.core.questions import BaseQuestion
from complianceiq_assessment.main import create_app
from complianceiq_assessment.settings import Settings

ALL_THERAPY = ("oncology", "dermatology")
ALL_MODELS = ("llm", "classifier")
ALL_DEPLOYMENTS = ("clinical-decision-support", "internal-analytics")


def _question(question_id: str, points: int, is_blocker: bool = False, **overrides: object) -> BaseQuestion:
    fields: dict = {
        "id": question_id,
        "text": f"Question {question_id}?",
        "points": points,
        "is_blocker": is_blocker,
        "category": "Production Blocker" if is_blocker else "General",
        "responsible_roles": ("Chief Compliance Officer",),
        "therapy_conditions": ALL_THERAPY,
        "model_conditions": ALL_MODELS,
        "deployment_conditions": ALL_DEPLOYMENTS,
    }
    fields.update(overrides)
    return BaseQuestion(**fields)


def build_test_catalog() -> CatalogContext:
    """Build the fixture catalog described in the module docstring."""
    governance = Section(
        id="governance",
        name="AI Governance",
        base_points=15,
        is_critical_blocker=True,
        description="Governance framework and oversight",
        default_responsible_roles=("Chief Compliance Officer", "AI Lead"),
        questions=(_question("gov-001", 10, is_blocker=True), _question("gov-002", 5)),
        therapy_overlays=(
            Overlay(
                id="governance.oncology",
                dimension_id="oncology",
                complexity_points=2,
                question_texts=("Is oncology trial data lineage documented?",),
            ),
        ),
        model_overlays=(
            Overlay(
                id="governance.llm",
                dimension_id="llm",
                complexity_points=2,
                question_texts=(
                    "Is LLM output reviewed by a clinician?",
                    "Has prompt injection been tested?",
                ),
            ),
        ),
        deployment_overlays=(
            Overlay(
                id="governance.cds",
                dimension_id="clinical-decision-support",
                complexity_points=3,
            ),
        ),
    )
    security = Section(
        id="security",
        name="Security & Privacy",
        base_points=20,
        is_critical_blocker=True,
        default_responsible_roles=("CISO",),
        questions=(
            _question("sec-001", 10, is_blocker=True),
            _question("sec-002", 5, therapy_conditions=("oncology",)),
            _question(
                "sec-003",
                5,
                therapy_conditions=None,
                model_conditions=None,
                deployment_conditions=None,
            ),
        ),
        model_overlays=(
            Overlay(
                id="security.llm",
                dimension_id="llm",
                complexity_points=4,
                question_texts=("Are model weights access-controlled?",),
            ),
        ),
    )
    operations = Section(
        id="operations",
        name="Operations",
        base_points=8,
        questions=(_question("ops-001", 8),),
    )

    regulatory = Persona(
        id="regulatory",
        name="Regulatory Affairs",
        sub_personas=(
            SubPersona(id="regulatory-lead", persona_id="regulatory", name="Regulatory Lead"),
            SubPersona(id="regulatory-analyst", persona_id="regulatory", name="Regulatory Analyst"),
        ),
    )
    engineering = Persona(
        id="engineering",
        name="Engineering",
        sub_personas=(
            SubPersona(id="security-engineer", persona_id="engineering", name="Security Engineer"),
        ),
    )
    admin = Persona(id="admin", name="Administrator", is_admin=True)

    return CatalogContext(
        sections=(governance, security, operations),
        personas=(admin, regulatory, engineering),
        therapeutic_areas=(
            TherapeuticArea(
                id="oncology",
                name="Oncology",
                overlay_points=5,
                complexity=ComplexityTier.CRITICAL,
                regulatory_guidance=("ICH E6", "FDA Oncology Guidance"),
            ),
            TherapeuticArea(
                id="dermatology",
                name="Dermatology",
                overlay_points=2,
                complexity=ComplexityTier.LOW,
            ),
        ),
        ai_model_types=(
            AIModelType(
                id="llm",
                name="Large Language Model",
                complexity_points=4,
                complexity=ComplexityTier.HIGH,
                safety_considerations=("Hallucination monitoring",),
            ),
            AIModelType(
                id="classifier",
                name="Classifier",
                complexity_points=1,
                complexity=ComplexityTier.LOW,
            ),
        ),
        deployment_scenarios=(
            DeploymentScenario(
                id="clinical-decision-support",
                name="Clinical Decision Support",
                complexity_points=6,
                complexity=ComplexityTier.CRITICAL,
                regulatory_requirements=("FDA SaMD",),
            ),
            DeploymentScenario(
                id="internal-analytics",
                name="Internal Analytics",
                complexity_points=1,
                complexity=ComplexityTier.LOW,
            ),
        ),
        persona_mappings=(
            PersonaSectionMapping(persona_id="regulatory", section_id="governance"),
            PersonaSectionMapping(
                persona_id="regulatory",
                section_id="security",
                sub_persona_id="regulatory-lead",
                priority_score=2,
            ),
            PersonaSectionMapping(persona_id="engineering", section_id="security"),
            PersonaSectionMapping(persona_id="engineering", section_id="operations"),
        ),
        bottleneck_resolutions={
            "oncology": (
                BottleneckResolution(
                    bottleneck="Trial data provenance",
                    resolution="Automated lineage tracking",
                    priority="High",
                    implementation="Data catalog integration",
                ),
            ),
            "llm": (
                BottleneckResolution(
                    bottleneck="Hallucinated outputs",
                    resolution="Human review workflow",
                    priority="Critical",
                    implementation="Clinician sign-off queue",
                ),
            ),
        },
    )


# ---------------------------------------------------------------------------
# Core fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def catalog() -> CatalogContext:
    """Small fixture catalog."""
    return build_test_catalog()


@pytest.fixture()
def engine(catalog: CatalogContext) -> AssessmentEngine:
    """Engine with default scoring and readiness configuration."""
    return AssessmentEngine(catalog)


# ---------------------------------------------------------------------------
# API fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def app(catalog: CatalogContext) -> FastAPI:
    """Application serving the fixture catalog."""
    return create_app(settings=Settings(catalog_database_url=""), catalog=catalog)


@pytest_asyncio.fixture()
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Async test client bound to the application."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://testserver",
    ) as test_client:
        yield test_client
