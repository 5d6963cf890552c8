from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Global application-level configuration.

    This class is the single source of truth for:
    - environment selection
    - logging behavior
    - default game shape (frame count)
    """

    model_config = SettingsConfigDict(
        env_prefix="BOWLSCORE_",
        env_file=".env",
        extra="ignore",
    )

    # ---- Environment -------------------------------------------------

    env: Literal["local", "staging", "prod"] = "local"

    # ---- Logging -----------------------------------------------------

    log_level: str = "INFO"

    # ---- Games -------------------------------------------------------

    # Frames per game; the last one is always the final (bonus) frame
    total_frames: int = Field(
        default=10,
        ge=1,
        description="Default number of frames in a game",
    )


# Singleton settings object
settings = AppSettings()
