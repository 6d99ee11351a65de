"""Drawing surface adapters the tool layer issues map mutations to."""

from map_mcp_tools.surface.base import MapSurface
from map_mcp_tools.surface.recording import (
    RecordedFeature,
    RecordedGroup,
    RecordingSurface,
)

__all__ = [
    "MapSurface",
    "RecordedFeature",
    "RecordedGroup",
    "RecordingSurface",
]
