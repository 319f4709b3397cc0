"""Application configuration via Pydantic Settings.

NOTE: Every setting maps to an explicit environment variable name
(ASSIGNMENT_WEIGHT_CAPACITY, LOG_LEVEL, etc.) to avoid silent misconfiguration.
"""

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # App
    debug: bool = Field(default=False, validation_alias="DEBUG")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    cors_origins: list[str] = Field(
        default=[
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ],
        validation_alias="CORS_ORIGINS",
    )

    # Assignment engine defaults (callers may still override weights per request)
    weight_capacity: float = Field(default=0.30, validation_alias="ASSIGNMENT_WEIGHT_CAPACITY")
    weight_arr_match: float = Field(default=0.25, validation_alias="ASSIGNMENT_WEIGHT_ARR_MATCH")
    weight_industry_match: float = Field(
        default=0.20, validation_alias="ASSIGNMENT_WEIGHT_INDUSTRY_MATCH"
    )
    weight_geography_match: float = Field(
        default=0.15, validation_alias="ASSIGNMENT_WEIGHT_GEOGRAPHY_MATCH"
    )
    weight_health_score: float = Field(default=0.10, validation_alias="ASSIGNMENT_WEIGHT_HEALTH_SCORE")
    max_recommendations: int = Field(default=3, ge=1, validation_alias="ASSIGNMENT_MAX_RECOMMENDATIONS")
    pool_bonus: float = Field(default=20, validation_alias="ASSIGNMENT_POOL_BONUS")

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
