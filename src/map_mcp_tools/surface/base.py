"""Drawing surface interface consumed by the tool layer."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Sequence

if TYPE_CHECKING:
    from map_mcp_tools.layers import FeatureKind
    from map_mcp_tools.models import (
        Bounds,
        CameraOptions,
        MarkerOptions,
        PolygonOptions,
        PolylineOptions,
    )


class MapSurface(ABC):
    """Base class for map rendering backends.

    Every method is called from the dispatcher's render context only, so
    implementations may assume single-threaded access. Group handles are
    opaque to the caller.
    """

    @abstractmethod
    def create_group(self, kind: FeatureKind, layer_name: str) -> Any:
        """Create an empty feature group of `kind` for `layer_name`.

        Returns:
            Handle passed back to the add/delete methods.
        """
        ...

    @abstractmethod
    def add_markers(self, group: Any, markers: Sequence[MarkerOptions]) -> None:
        """Add a batch of markers to a point group."""
        ...

    @abstractmethod
    def add_polyline(self, group: Any, line: PolylineOptions) -> None:
        """Add one polyline to a line group."""
        ...

    @abstractmethod
    def add_polygon(self, group: Any, polygon: PolygonOptions) -> None:
        """Add one filled ring to a polygon group."""
        ...

    @abstractmethod
    def delete_all(self, group: Any) -> None:
        """Remove every feature in `group`."""
        ...

    @abstractmethod
    def get_camera(self) -> CameraOptions:
        """Return the current camera."""
        ...

    @abstractmethod
    def set_camera(self, camera: CameraOptions) -> None:
        """Jump to `camera` without animation."""
        ...

    @abstractmethod
    def fly_to(self, camera: CameraOptions, duration_ms: int) -> None:
        """Animate to `camera` over `duration_ms` milliseconds."""
        ...

    @abstractmethod
    def camera_for_bounds(self, bounds: Bounds, padding: float) -> CameraOptions:
        """Return a camera framing `bounds` with `padding` pixels on every edge."""
        ...

    @abstractmethod
    def load_style(self, style_url: str) -> None:
        """Replace the visual style with the one at `style_url`."""
        ...
