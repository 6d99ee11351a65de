"""Camera and style tool implementations."""

from __future__ import annotations

from typing import TYPE_CHECKING

from map_mcp_tools.models import CameraOptions, LngLat
from map_mcp_tools.tools.schemas import FIT_BOUNDS_DURATION_MS

if TYPE_CHECKING:
    from map_mcp_tools.models import Bounds
    from map_mcp_tools.surface import MapSurface
    from map_mcp_tools.tools.coercion import FitBoundsArgs, PanMapArgs, SetStyleArgs


class ViewTools:
    """Tool implementations that change what the map shows, not what is on it."""

    def __init__(self, surface: MapSurface) -> None:
        """Initialize with the drawing surface."""
        self._surface = surface

    def pan(self, args: PanMapArgs) -> CameraOptions:
        """Move the camera center; a missing zoom keeps the current one."""
        camera = CameraOptions(
            center=LngLat(args.longitude, args.latitude),
            zoom=args.zoom,
        )
        self._move(camera, args.animated, args.duration_ms)
        return camera

    def fit_bounds(self, args: FitBoundsArgs, bounds: Bounds) -> CameraOptions:
        """Move the camera so `bounds` fits with the requested padding."""
        camera = self._surface.camera_for_bounds(bounds, args.padding)
        self._move(camera, args.animated, FIT_BOUNDS_DURATION_MS)
        return camera

    def set_style(self, args: SetStyleArgs) -> None:
        """Load a new map style."""
        self._surface.load_style(args.style_url)

    def _move(self, camera: CameraOptions, animated: bool, duration_ms: int) -> None:
        if animated:
            self._surface.fly_to(camera, duration_ms)
        else:
            self._surface.set_camera(camera)
