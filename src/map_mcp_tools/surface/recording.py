"""Headless in-memory surface that records every mutation."""

from __future__ import annotations

import itertools
import logging
import math
from dataclasses import dataclass, field
from typing import Iterator, Sequence, Union

from map_mcp_tools.layers import FeatureKind
from map_mcp_tools.models import (
    Bounds,
    CameraOptions,
    LngLat,
    MarkerOptions,
    PolygonOptions,
    PolylineOptions,
)
from map_mcp_tools.surface.base import MapSurface

LOGGER = logging.getLogger(__name__)

FeatureOptions = Union[MarkerOptions, PolylineOptions, PolygonOptions]

TILE_SIZE = 512
MAX_ZOOM = 22.0
MAX_MERCATOR_LAT = 85.051129

_group_ids = itertools.count(1)


@dataclass
class RecordedGroup:
    """A feature group created on a RecordingSurface."""

    kind: FeatureKind
    layer_name: str
    id: int = field(default_factory=lambda: next(_group_ids))
    features: list[FeatureOptions] = field(default_factory=list)
    deleted: bool = False


@dataclass(frozen=True)
class RecordedFeature:
    """A drawn feature together with the layer that owns it."""

    layer_name: str
    kind: FeatureKind
    options: FeatureOptions


@dataclass(frozen=True)
class CameraMove:
    """One camera change: `duration_ms` is None for an immediate jump."""

    camera: CameraOptions
    duration_ms: int | None


class RecordingSurface(MapSurface):
    """
    Map surface without a renderer.

    Keeps the groups, features, camera and style that a real map would show,
    so tool calls can be verified and exported. Reloading the style does not
    touch recorded groups; the dispatcher decides what to do with them.
    """

    def __init__(
        self,
        *,
        camera: CameraOptions | None = None,
        style_url: str | None = None,
        viewport_width: int = 1024,
        viewport_height: int = 768,
    ) -> None:
        self.camera = camera or CameraOptions(center=LngLat(0.0, 0.0), zoom=1.0)
        self.style_url = style_url
        self.viewport_width = viewport_width
        self.viewport_height = viewport_height
        self.groups: list[RecordedGroup] = []
        self.camera_moves: list[CameraMove] = []
        self.style_history: list[str] = []

    # Feature groups

    def create_group(self, kind: FeatureKind, layer_name: str) -> RecordedGroup:
        group = RecordedGroup(kind=kind, layer_name=layer_name)
        self.groups.append(group)
        return group

    def add_markers(
        self, group: RecordedGroup, markers: Sequence[MarkerOptions]
    ) -> None:
        self._check_group(group, FeatureKind.POINT)
        group.features.extend(markers)

    def add_polyline(self, group: RecordedGroup, line: PolylineOptions) -> None:
        self._check_group(group, FeatureKind.LINE)
        group.features.append(line)

    def add_polygon(self, group: RecordedGroup, polygon: PolygonOptions) -> None:
        self._check_group(group, FeatureKind.POLYGON)
        group.features.append(polygon)

    def delete_all(self, group: RecordedGroup) -> None:
        group.features.clear()
        group.deleted = True

    def live_groups(self, kind: FeatureKind | None = None) -> list[RecordedGroup]:
        """Groups that have not been deleted, optionally filtered by kind."""
        return [
            g for g in self.groups
            if not g.deleted and (kind is None or g.kind == kind)
        ]

    def features(self) -> Iterator[RecordedFeature]:
        """Iterate over every feature of every live group."""
        for group in self.live_groups():
            for options in group.features:
                yield RecordedFeature(group.layer_name, group.kind, options)

    # Camera

    def get_camera(self) -> CameraOptions:
        return self.camera

    def set_camera(self, camera: CameraOptions) -> None:
        self._move(camera, None)

    def fly_to(self, camera: CameraOptions, duration_ms: int) -> None:
        self._move(camera, duration_ms)

    def camera_for_bounds(self, bounds: Bounds, padding: float) -> CameraOptions:
        """Frame `bounds` in the viewport using Web Mercator tile math."""
        x_min = _mercator_x(bounds.min_lng)
        x_max = _mercator_x(bounds.max_lng)
        # Mercator y grows southwards.
        y_min = _mercator_y(bounds.max_lat)
        y_max = _mercator_y(bounds.min_lat)

        avail_w = max(self.viewport_width - 2 * padding, 1.0)
        avail_h = max(self.viewport_height - 2 * padding, 1.0)

        zooms = [MAX_ZOOM]
        if x_max > x_min:
            zooms.append(math.log2(avail_w / ((x_max - x_min) * TILE_SIZE)))
        if y_max > y_min:
            zooms.append(math.log2(avail_h / ((y_max - y_min) * TILE_SIZE)))
        zoom = min(max(min(zooms), 0.0), MAX_ZOOM)

        center = LngLat(
            _unproject_x((x_min + x_max) / 2),
            _unproject_y((y_min + y_max) / 2),
        )
        return CameraOptions(center=center, zoom=zoom)

    # Style

    def load_style(self, style_url: str) -> None:
        self.style_url = style_url
        self.style_history.append(style_url)
        LOGGER.debug("Style loaded: %s", style_url)

    def _move(self, camera: CameraOptions, duration_ms: int | None) -> None:
        zoom = camera.zoom if camera.zoom is not None else self.camera.zoom
        self.camera = CameraOptions(center=camera.center, zoom=zoom)
        self.camera_moves.append(CameraMove(camera=camera, duration_ms=duration_ms))

    @staticmethod
    def _check_group(group: RecordedGroup, kind: FeatureKind) -> None:
        if group.kind != kind:
            raise ValueError(
                f"Group {group.id} holds {group.kind.value} features, not {kind.value}"
            )


def _clamp_lat(lat: float) -> float:
    return max(-MAX_MERCATOR_LAT, min(MAX_MERCATOR_LAT, lat))


def _mercator_x(lng: float) -> float:
    return (lng + 180.0) / 360.0


def _mercator_y(lat: float) -> float:
    phi = math.radians(_clamp_lat(lat))
    return (1.0 - math.log(math.tan(phi) + 1.0 / math.cos(phi)) / math.pi) / 2.0


def _unproject_x(x: float) -> float:
    return x * 360.0 - 180.0


def _unproject_y(y: float) -> float:
    return math.degrees(math.atan(math.sinh(math.pi * (1.0 - 2.0 * y))))
