"""GeoJSON exporter for drawn map features."""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING

from map_mcp_tools.exporters.base import Exporter

if TYPE_CHECKING:
    from map_mcp_tools.surface import RecordingSurface


class GeoJsonExporter(Exporter):
    """Export drawn features as a GeoJSON FeatureCollection."""

    @property
    def extension(self) -> str:
        """Return geojson extension."""
        return "geojson"

    def export(self, surface: RecordingSurface, output_path: Path) -> int:
        """Export features to a GeoJSON file.

        Layer, kind, style and popup text go into each feature's properties.

        Returns:
            Number of features exported.
        """
        features = []
        for feature in surface.features():
            data = self.feature_to_dict(feature)
            geometry = data.pop("geometry")
            style = data.pop("style")
            features.append({
                "type": "Feature",
                "geometry": geometry,
                "properties": {**data, **style},
            })
        output = {"type": "FeatureCollection", "features": features}
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(output, f, indent=2, ensure_ascii=False)
        return len(features)
