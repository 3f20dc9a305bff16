"""Configuration management."""

from functools import lru_cache
from typing import Optional, Union

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .core.heightmap_generator import is_valid_size


class Settings(BaseSettings):
    """Application settings pulled from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PY_TERRAIN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Generation
    grid_size: int = Field(default=257, description="Grid side, must be 2**k + 1")
    roughness: float = Field(default=0.7, ge=0.0, le=1.0, description="Displacement damping factor")
    sea_level: float = Field(default=127, allow_inf_nan=False, description="Height separating ocean from land")
    max_land_height: float = Field(default=255.0, gt=0, allow_inf_nan=False, description="Upper bound of normalized heights")
    seed: Optional[Union[int, str]] = Field(
        default=None, union_mode="left_to_right", description="Random seed, unset for a random world"
    )

    # Output
    output_path: str = Field(default="world_map.png", description="Where the CLI writes the image")

    # API
    api_host: str = Field(default="0.0.0.0", description="API host")
    api_port: int = Field(default=8000, description="API port")
    max_api_grid_size: int = Field(default=1025, description="Largest grid the API will generate")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="json", description="Logging format (plain or json)")

    @field_validator("grid_size")
    @classmethod
    def check_grid_size(cls, value: int) -> int:
        if not is_valid_size(value):
            raise ValueError(f"grid_size must be 2**k + 1 with k >= 1, got {value}")
        return value

    @field_validator("log_format")
    @classmethod
    def check_log_format(cls, value: str) -> str:
        if value not in ("plain", "json"):
            raise ValueError(f"log_format must be 'plain' or 'json', got {value!r}")
        return value


@lru_cache
def get_settings() -> Settings:
    """Settings singleton; cached after the first call."""
    return Settings()
