"""Generator settings.

Defaults work out of the box; a JSON file can override any subset:

    {"arc_resolution": 256, "floor_height": 3.2}
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class MassingSettings(BaseModel):
    """Tunable constants for curve sampling and generation defaults."""

    arc_resolution: int = Field(
        default=128, ge=8, description="Polyline segments per full turn when sampling arcs"
    )
    join_tolerance: float = Field(
        default=1e-6, gt=0, description="Max gap (m) between curve ends that still counts as joined"
    )
    floor_height: float = Field(default=3.5, gt=0, description="Default floor-to-floor height (m)")
    facade_tolerance: float = Field(
        default=1.0, ge=0, lt=45, description="Angle tolerance (deg) for facade classification"
    )


DEFAULT_SETTINGS = MassingSettings()


def load_settings(path: str | Path | None = None) -> MassingSettings:
    """Load settings from a JSON file. Missing path or file gives defaults."""
    if path is None:
        return MassingSettings()
    path = Path(path)
    if not path.exists():
        logger.warning("Settings file %s not found, using defaults", path)
        return MassingSettings()
    data = json.loads(path.read_text(encoding="utf-8"))
    return MassingSettings.model_validate(data)
