"""Scoring weights and scale factors, overridable from the environment.

Every value can be set with a HACKVOTE_ prefixed variable, e.g.
HACKVOTE_WEIGHT_PUBLIC=0.3, or in a .env file.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from hackvote.models import Category, Cohort


class ScoringSettings(BaseSettings):
    weight_impact: float = Field(0.4, ge=0)
    weight_readiness: float = Field(0.4, ge=0)
    weight_presentation: float = Field(0.2, ge=0)

    weight_participants: float = Field(0.4, ge=0)
    weight_judges: float = Field(0.4, ge=0)
    weight_public: float = Field(0.2, ge=0)

    scale_participants: float = Field(1.0, ge=0)
    scale_judges: float = Field(0.8, ge=0)
    scale_public: float = Field(0.8, ge=0)

    model_config = SettingsConfigDict(
        env_prefix="HACKVOTE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def category_weights(self) -> dict[Category, float]:
        return {
            Category.IMPACT: self.weight_impact,
            Category.READINESS: self.weight_readiness,
            Category.PRESENTATION: self.weight_presentation,
        }

    def cohort_weights(self) -> dict[Cohort, float]:
        return {
            Cohort.PARTICIPANTS: self.weight_participants,
            Cohort.JUDGES: self.weight_judges,
            Cohort.PUBLIC: self.weight_public,
        }

    def cohort_scale_factors(self) -> dict[Cohort, float]:
        return {
            Cohort.PARTICIPANTS: self.scale_participants,
            Cohort.JUDGES: self.scale_judges,
            Cohort.PUBLIC: self.scale_public,
        }


@lru_cache()
def get_settings() -> ScoringSettings:
    return ScoringSettings()
