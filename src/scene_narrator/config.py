"""Runtime configuration for Scene Narrator."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-driven runtime settings."""

    model_config = SettingsConfigDict(env_prefix="SCENE_NARRATOR_", env_file=".env", extra="ignore")

    app_name: str = "scene-narrator"
    log_level: str = "INFO"
    language: str = "en"
    messages_path: str | None = Field(
        default=None,
        description="Optional JSON message catalog overriding the bundled one.",
    )

    max_hierarchy_depth: int = Field(default=10, ge=1)
    placeholder_texts: tuple[str, ...] = ("new text", "option a", "text", "label", "---")

    self_exclusion_distance: float = Field(default=0.1, ge=0.0)
    dedup_tolerance: float = Field(
        default=0.1,
        gt=0.0,
        description="Axis quantization step used to decide that two entities share a position.",
    )
    report_limit: int = Field(default=5, ge=1)
    scan_radius: float = Field(default=160.0, gt=0.0)

    speech_enabled: bool = True
    speech_interrupt: bool = False
    speech_max_chars: int = Field(default=500, ge=1)


settings = Settings()
