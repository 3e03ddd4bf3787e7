"""Abstract interfaces (Protocol classes) for the assessment engine.

The engine depends on these interfaces, not on concrete stores. Concrete
implementations live in ``adapters/``.
"""

from typing import Protocol, runtime_checkable

from complianceiq_assessment.core.catalog import CatalogContext


@runtime_checkable
class ICatalogRepository(Protocol):
    """Source of the read-only reference catalog."""

    async def load_catalog(self) -> CatalogContext:
        """Load every catalog record and return an immutable CatalogContext."""
        ...
