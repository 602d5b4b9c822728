# driverfinder/core/config.py
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    entity_hash_precision: int = Field(default=7, ge=1, le=12)  # = DRIVERFINDER_ENTITY_HASH_PRECISION
    query_precision: int = Field(default=7, ge=1, le=12)
    earth_radius_m: float = Field(default=6_371_000.0, gt=0)
    strict_hash_precision: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="DRIVERFINDER_",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
