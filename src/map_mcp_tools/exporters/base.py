"""Base exporter interface for drawn map features."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING

from map_mcp_tools.models import MarkerOptions, PolygonOptions, PolylineOptions

if TYPE_CHECKING:
    from map_mcp_tools.surface import RecordedFeature, RecordingSurface


class Exporter(ABC):
    """Base class for map exporters."""

    @property
    @abstractmethod
    def extension(self) -> str:
        """File extension without dot (e.g., 'geojson', 'yaml')."""
        ...

    @abstractmethod
    def export(self, surface: RecordingSurface, output_path: Path) -> int:
        """Export the features drawn on `surface` to file.

        Args:
            surface: Surface whose live feature groups are exported.
            output_path: Path to output file.

        Returns:
            Number of features exported.
        """
        ...

    @staticmethod
    def feature_to_dict(feature: RecordedFeature) -> dict:
        """Convert a drawn feature to an exportable dictionary.

        Returns:
            Dictionary with layer, kind, GeoJSON geometry and styling.
        """
        options = feature.options
        out: dict = {"layer": feature.layer_name, "kind": feature.kind.value}

        if isinstance(options, MarkerOptions):
            out["geometry"] = {
                "type": "Point",
                "coordinates": options.position.to_list(),
            }
            out["style"] = {"color": options.color, "size": options.size}
            if options.title is not None:
                out["title"] = options.title
            if options.description is not None:
                out["description"] = options.description
        elif isinstance(options, PolylineOptions):
            out["geometry"] = {
                "type": "LineString",
                "coordinates": [p.to_list() for p in options.points],
            }
            out["style"] = {
                "color": options.color,
                "width": options.width,
                "opacity": options.opacity,
            }
        elif isinstance(options, PolygonOptions):
            ring = [p.to_list() for p in options.ring]
            # GeoJSON rings must be closed; the drawn ring may not be.
            if ring and ring[0] != ring[-1]:
                ring.append(list(ring[0]))
            out["geometry"] = {"type": "Polygon", "coordinates": [ring]}
            out["style"] = {
                "fill_color": options.fill_color,
                "fill_opacity": options.fill_opacity,
                "stroke_color": options.stroke_color,
                "stroke_width": options.stroke_width,
            }
        else:
            raise TypeError(f"Unsupported feature options: {type(options).__name__}")
        return out

