"""Configuration management using pydantic-settings."""

import tomllib
from pathlib import Path
from typing import Literal, Self

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .domain.models import RasterPreset

DEFAULT_SCRATCH = "~/.cache/pagescope/scratch"
DEFAULT_RETENTION_HOURS = 24
CONFIG_PATH = Path("~/.config/pagescope/config.toml").expanduser()


class InferenceConfig(BaseSettings):
    """Ollama connection and model configuration."""

    ollama_url: str = "http://localhost:11434"
    vision_model: str = "qwen2.5vl:7b"
    text_model: str = "deepseek-r1:8b"
    timeout: float = 120.0  # seconds, base for all inference calls
    health_timeout: float = 5.0


class RasterConfig(BaseSettings):
    density: int = 200
    max_width: int = 1200
    max_height: int = 1600
    image_format: Literal["png", "jpeg"] = "png"

    @property
    def preset(self) -> RasterPreset:
        return RasterPreset(
            density=self.density,
            max_width=self.max_width,
            max_height=self.max_height,
            image_format=self.image_format,
        )


class RasterPresets(BaseSettings):
    """Lower density for content analysis, higher for forgery analysis."""

    content: RasterConfig = RasterConfig()
    forgery: RasterConfig = RasterConfig(density=300, max_width=1600, max_height=2000)


class PathsConfig(BaseSettings):
    scratch: Path = Path(DEFAULT_SCRATCH)

    @field_validator("scratch", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        return Path(v).expanduser()


class CleanupConfig(BaseSettings):
    retention_hours: int = DEFAULT_RETENTION_HOURS


class PipelineConfig(BaseSettings):
    confidence_seed: int | None = None  # unset: nondeterministic confidence


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="PAGESCOPE_", env_nested_delimiter="__"
    )

    inference: InferenceConfig = InferenceConfig()
    raster: RasterPresets = RasterPresets()
    paths: PathsConfig = PathsConfig()
    cleanup: CleanupConfig = CleanupConfig()
    pipeline: PipelineConfig = PipelineConfig()

    @model_validator(mode="after")
    def ensure_dirs(self) -> Self:
        self.paths.scratch.mkdir(parents=True, exist_ok=True)
        return self


def load_settings(config_path: Path | None = None) -> Settings:
    """Load settings from TOML file, falling back to defaults."""
    path = config_path or CONFIG_PATH

    if path.exists():
        with open(path, "rb") as f:
            data = tomllib.load(f)

        inference = InferenceConfig(**data.get("inference", {}))
        raster_data = data.get("raster", {})
        raster = RasterPresets(
            content=RasterConfig(**raster_data.get("content", {})),
            forgery=RasterConfig(
                **{
                    "density": 300,
                    "max_width": 1600,
                    "max_height": 2000,
                    **raster_data.get("forgery", {}),
                }
            ),
        )
        paths = PathsConfig(**data.get("paths", {}))
        cleanup = CleanupConfig(**data.get("cleanup", {}))
        pipeline = PipelineConfig(**data.get("pipeline", {}))
        return Settings(
            inference=inference,
            raster=raster,
            paths=paths,
            cleanup=cleanup,
            pipeline=pipeline,
        )

    return Settings()
