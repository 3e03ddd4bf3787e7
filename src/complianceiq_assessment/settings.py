"""Service settings.

Every value can be overridden through environment variables with the
COMPLIANCEIQ_ prefix, e.g. COMPLIANCEIQ_MAX_POSSIBLE_SCORE=500.
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings for complianceiq-assessment.

    Environment variable prefix: COMPLIANCEIQ_
    """

    service_name: str = "complianceiq-assessment"
    log_level: str = "INFO"
    log_json: bool = False

    # Scoring configuration
    max_possible_score: int = 350
    minutes_per_question: int = 2

    # Readiness tiers, highest first. Percentages below the last threshold
    # classify as readiness_floor_tier.
    readiness_thresholds: dict[str, int] = {
        "production_ready": 85,
        "conditional": 70,
        "pre_production": 55,
        "development_complete": 40,
    }
    readiness_floor_tier: str = "not_ready"
    blocker_cap_tier: str = "conditional"

    # Selection validation
    required_selection_fields: list[str] = ["persona_id"]
    strict_selection: bool = True

    # Catalog store; the built-in catalog is used when empty
    catalog_database_url: str = ""

    model_config = SettingsConfigDict(env_prefix="COMPLIANCEIQ_")

    @field_validator("max_possible_score")
    @classmethod
    def _positive_max_score(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("max_possible_score must be positive")
        return value
