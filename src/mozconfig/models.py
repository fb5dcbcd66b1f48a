"""Settings model for the mozconfig CLI."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class MozconfigSettings(BaseModel):
    """User settings loaded from the settings file and environment variables."""

    model_config = ConfigDict(frozen=True)

    root: Path | None = None
    verbose: bool = False

    @field_validator("root", mode="before")
    @classmethod
    def expand_root(cls, value: Any) -> Path | None:
        """Expand user paths, treating blank values as unset."""
        if value is None:
            return None
        if isinstance(value, Path):
            return value.expanduser()
        normalized = str(value).strip()
        if not normalized:
            return None
        return Path(normalized).expanduser()
