"""Framework-independent assessment engine: catalog, composition, scoring, readiness."""
