"""FastAPI router for the compliance assessment engine.

All routes are thin: they parse inputs, delegate to the AssessmentEngine held
on ``app.state`` and serialise responses. No business logic lives here.

API prefix: /api/v1
"""

import structlog
from fastapi import APIRouter, Depends, HTTPException, Request, status

from complianceiq_assessment.api.schemas import (
    AIModelTypeSchema,
    AssessmentResultResponse,
    BottleneckResolutionListResponse,
    BottleneckResolutionSchema,
    DeploymentScenarioSchema,
    GeneratedAssessmentResponse,
    PersonaSchema,
    ScoreRequest,
    SelectionRequest,
    TherapeuticAreaSchema,
)
from complianceiq_assessment.core.engine import AssessmentEngine
from complianceiq_assessment.errors import (
    AssessmentEngineError,
    CompositionError,
    NotFoundError,
    ValidationError,
)

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["Compliance Assessment"])


def get_engine(request: Request) -> AssessmentEngine:
    """Return the engine built at application startup."""
    return request.app.state.engine


def _to_http_exception(exc: AssessmentEngineError) -> HTTPException:
    """Map a domain error onto an HTTP error response.

    Args:
        exc: The engine error.

    Returns:
        404 for unknown ids, 422 for incomplete selections and 500 for
        composition failures, which indicate a broken catalog.
    """
    if isinstance(exc, NotFoundError):
        return HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={
                "message": str(exc),
                "resource": exc.resource,
                "resourceId": exc.resource_id,
                "available": exc.available,
            },
        )
    if isinstance(exc, ValidationError):
        return HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_CONTENT,
            detail={"message": "Invalid selection", "errors": exc.errors},
        )
    if isinstance(exc, CompositionError):
        logger.error(
            "Assessment composition failed",
            section_id=exc.section_id,
            overlay_id=exc.overlay_id,
            question_id=exc.question_id,
        )
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={"message": str(exc)},
    )


# ---------------------------------------------------------------------------
# Catalog endpoints
# ---------------------------------------------------------------------------


@router.get(
    "/catalog/personas",
    response_model=list[PersonaSchema],
    summary="List personas and their sub-personas",
)
async def list_personas(engine: AssessmentEngine = Depends(get_engine)) -> list[PersonaSchema]:
    return [PersonaSchema.from_domain(persona) for persona in engine.catalog.personas]


@router.get(
    "/catalog/therapeutic-areas",
    response_model=list[TherapeuticAreaSchema],
    summary="List therapeutic areas",
)
async def list_therapeutic_areas(
    engine: AssessmentEngine = Depends(get_engine),
) -> list[TherapeuticAreaSchema]:
    return [TherapeuticAreaSchema.from_domain(area) for area in engine.catalog.therapeutic_areas]


@router.get(
    "/catalog/ai-model-types",
    response_model=list[AIModelTypeSchema],
    summary="List AI model types",
)
async def list_ai_model_types(
    engine: AssessmentEngine = Depends(get_engine),
) -> list[AIModelTypeSchema]:
    return [AIModelTypeSchema.from_domain(model) for model in engine.catalog.ai_model_types]


@router.get(
    "/catalog/deployment-scenarios",
    response_model=list[DeploymentScenarioSchema],
    summary="List deployment scenarios",
)
async def list_deployment_scenarios(
    engine: AssessmentEngine = Depends(get_engine),
) -> list[DeploymentScenarioSchema]:
    return [
        DeploymentScenarioSchema.from_domain(scenario)
        for scenario in engine.catalog.deployment_scenarios
    ]


# ---------------------------------------------------------------------------
# Assessment endpoints
# ---------------------------------------------------------------------------


@router.post(
    "/assessments/compose",
    response_model=GeneratedAssessmentResponse,
    status_code=status.HTTP_200_OK,
    summary="Compose the assessment for a persona and dimension selection",
)
async def compose_assessment(
    body: SelectionRequest,
    engine: AssessmentEngine = Depends(get_engine),
) -> GeneratedAssessmentResponse:
    """Return the persona-filtered sections with overlay questions merged in.

    Each section reports its enhanced points: catalog base points plus the
    complexity points of every overlay matched by the selection.
    """
    try:
        assessment = engine.compose(body.to_selection())
    except AssessmentEngineError as exc:
        raise _to_http_exception(exc) from exc

    logger.info(
        "Assessment composed",
        persona_id=body.persona_id,
        company_id=body.company_id,
        section_count=len(assessment.sections),
        total_questions=assessment.total_questions,
    )
    return GeneratedAssessmentResponse.from_domain(assessment)


@router.post(
    "/assessments/score",
    response_model=AssessmentResultResponse,
    status_code=status.HTTP_200_OK,
    summary="Score responses and classify production readiness",
)
async def score_assessment(
    body: ScoreRequest,
    engine: AssessmentEngine = Depends(get_engine),
) -> AssessmentResultResponse:
    """Compose the selection's assessment and score the submitted responses.

    Any blocker question without a completed response is reported as a
    critical gap and caps readiness regardless of the percentage.
    """
    try:
        result = engine.score(body.to_selection(), body.to_responses())
    except AssessmentEngineError as exc:
        raise _to_http_exception(exc) from exc
    return AssessmentResultResponse.from_domain(result)


@router.post(
    "/assessments/bottleneck-resolutions",
    response_model=BottleneckResolutionListResponse,
    status_code=status.HTTP_200_OK,
    summary="List bottleneck resolutions for the selected dimensions",
)
async def list_bottleneck_resolutions(
    body: SelectionRequest,
    engine: AssessmentEngine = Depends(get_engine),
) -> BottleneckResolutionListResponse:
    try:
        resolutions = engine.bottleneck_resolutions(body.to_selection())
    except AssessmentEngineError as exc:
        raise _to_http_exception(exc) from exc

    items = [BottleneckResolutionSchema.from_domain(item) for item in resolutions]
    return BottleneckResolutionListResponse(resolutions=items, total=len(items))
