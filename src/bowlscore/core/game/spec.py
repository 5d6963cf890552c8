from __future__ import annotations

import hashlib
import json

from pydantic import BaseModel, Field

from bowlscore.core.config.settings import settings


class GameSpec(BaseModel):
    """
    Per-game configuration supplied when a game is created.

    Defaults come from AppSettings so a bare `GameSpec()` matches the service
    configuration.
    """

    schema_version: int = Field(default=1, description="GameSpec schema version")

    total_frames: int = Field(
        default_factory=lambda: settings.total_frames,
        ge=1,
        description="Number of frames, the last one being the final frame",
    )
    tags: dict[str, str] = Field(default_factory=dict, description="Arbitrary game tags")

    def config_hash(self) -> str:
        """
        Deterministic fingerprint of the spec.
        """
        blob = json.dumps(self.model_dump(), sort_keys=True, separators=(",", ":"), ensure_ascii=False)
        return hashlib.sha256(blob.encode("utf-8")).hexdigest()
