"""Marker, route, polygon and layer-clearing tool implementations.

Methods here run on the render context: they mutate the layer store and the
surface directly and may raise whatever the surface raises.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable

from map_mcp_tools.layers import FeatureKind
from map_mcp_tools.models import MarkerOptions, PolygonOptions, PolylineOptions

if TYPE_CHECKING:
    from map_mcp_tools.layers import LayerEntry, LayerStore
    from map_mcp_tools.surface import MapSurface
    from map_mcp_tools.tools.coercion import (
        AddPointsArgs,
        AddPolygonArgs,
        AddRouteArgs,
        ClearLayersArgs,
    )

LOGGER = logging.getLogger(__name__)


class AnnotationTools:
    """Annotation tool implementations."""

    def __init__(self, layers: LayerStore, surface: MapSurface) -> None:
        """Initialize with the layer store and drawing surface."""
        self._layers = layers
        self._surface = surface

    def add_points(self, args: AddPointsArgs) -> int:
        """Add one marker per point to the layer's point group."""
        markers = [
            MarkerOptions(
                position=point.position,
                color=args.icon_color,
                size=args.icon_size,
                title=point.title,
                description=point.description,
            )
            for point in args.points
        ]
        self._draw(
            args.layer_name,
            FeatureKind.POINT,
            lambda group: self._surface.add_markers(group, markers),
        )
        return len(markers)

    def add_route(self, args: AddRouteArgs) -> None:
        """Add a polyline through the coordinates, in order."""
        line = PolylineOptions(
            points=args.coordinates,
            color=args.line_color,
            width=args.line_width,
            opacity=args.line_opacity,
        )
        self._draw(
            args.layer_name,
            FeatureKind.LINE,
            lambda group: self._surface.add_polyline(group, line),
        )

    def add_polygon(self, args: AddPolygonArgs) -> None:
        """Add a filled ring through the coordinates, in order."""
        polygon = PolygonOptions(
            ring=args.coordinates,
            fill_color=args.fill_color,
            fill_opacity=args.fill_opacity,
            stroke_color=args.stroke_color,
            stroke_width=args.stroke_width,
        )
        self._draw(
            args.layer_name,
            FeatureKind.POLYGON,
            lambda group: self._surface.add_polygon(group, polygon),
        )

    def clear(self, args: ClearLayersArgs) -> list[str]:
        """
        Delete the named layers, or every layer when none are named.

        Names that do not exist are skipped. Each layer is deleted from the
        surface before it leaves the store, so a surface failure leaves the
        remaining layers registered.

        Returns: Names of the layers that were removed.
        """
        names = self._layers.names() if args.clear_all else list(args.layer_names)
        cleared = []
        for name in names:
            entry = self._layers.get(name)
            if entry is None:
                LOGGER.debug("Layer '%s' not found, nothing to clear", name)
                continue
            self._delete_entry(entry)
            self._layers.remove(name)
            cleared.append(name)
        return cleared

    def _draw(
        self,
        layer_name: str,
        kind: FeatureKind,
        draw: Callable[[Any], None],
    ) -> None:
        group, created = self._layers.get_or_create(
            layer_name,
            kind,
            lambda: self._surface.create_group(kind, layer_name),
        )
        try:
            draw(group)
        except Exception:
            if created:
                self._rollback(layer_name, kind, group)
            raise

    def _rollback(self, layer_name: str, kind: FeatureKind, group: Any) -> None:
        """Remove a group created by a failed draw; the group stays registered
        if the surface cannot delete it."""
        try:
            self._surface.delete_all(group)
        except Exception:
            LOGGER.exception(
                "Rollback failed: %s group of layer '%s' is still on the map",
                kind.value,
                layer_name,
            )
            return
        self._layers.remove_group(layer_name, kind)

    def _delete_entry(self, entry: LayerEntry) -> None:
        for kind in entry.kinds:
            self._surface.delete_all(entry.groups[kind])
