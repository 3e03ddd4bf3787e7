"""ComplianceIQ assessment service entry point."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from complianceiq_assessment import __version__
from complianceiq_assessment.adapters.catalog_repository import CatalogRepository
from complianceiq_assessment.api.router import router
from complianceiq_assessment.core.catalog import CatalogContext
from complianceiq_assessment.core.catalog_data import build_default_catalog
from complianceiq_assessment.core.engine import AssessmentEngine
from complianceiq_assessment.observability import configure_logging, get_logger
from complianceiq_assessment.settings import Settings

logger = get_logger(__name__)


async def load_catalog_from_store(database_url: str) -> CatalogContext:
    """Load the catalog once from the catalog store.

    Args:
        database_url: SQLAlchemy async database URL.

    Returns:
        The immutable catalog.
    """
    engine = create_async_engine(database_url)
    try:
        session_factory = async_sessionmaker(engine, expire_on_commit=False)
        async with session_factory() as session:
            return await CatalogRepository(session).load_catalog()
    finally:
        await engine.dispose()


def create_app(settings: Settings | None = None, catalog: CatalogContext | None = None) -> FastAPI:
    """Build the FastAPI application.

    The catalog is resolved in this order: the ``catalog`` argument, the
    catalog store when ``catalog_database_url`` is configured (loaded at
    startup), then the built-in catalog.

    Args:
        settings: Service settings; read from the environment when omitted.
        catalog: Catalog to serve, bypassing the store.

    Returns:
        The configured application.
    """
    settings = settings or Settings()
    configure_logging(settings.log_level, settings.log_json)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        # Startup
        if catalog is None and settings.catalog_database_url:
            loaded = await load_catalog_from_store(settings.catalog_database_url)
            app.state.engine = AssessmentEngine.from_settings(loaded, settings)
        logger.info(
            "Assessment engine ready",
            service=settings.service_name,
            sections=len(app.state.engine.catalog.sections),
        )
        yield

    app = FastAPI(title=settings.service_name, version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.state.engine = AssessmentEngine.from_settings(catalog or build_default_catalog(), settings)
    app.include_router(router, prefix="/api/v1")
    return app


app: FastAPI = create_app()
