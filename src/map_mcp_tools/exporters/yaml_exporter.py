"""YAML exporter for the recorded map state."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import yaml

from map_mcp_tools.exporters.base import Exporter

if TYPE_CHECKING:
    from map_mcp_tools.surface import RecordingSurface


class YamlExporter(Exporter):
    """Export features, camera and style to YAML format."""

    @property
    def extension(self) -> str:
        """Return yaml extension."""
        return "yaml"

    def export(self, surface: RecordingSurface, output_path: Path) -> int:
        """Export map state to a YAML file.

        Returns:
            Number of features exported.
        """
        data = [self.feature_to_dict(feature) for feature in surface.features()]
        camera = surface.get_camera()
        output = {
            "style_url": surface.style_url,
            "camera": {
                "center": camera.center.to_list(),
                "zoom": camera.zoom,
            },
            "features": data,
            "count": len(data),
        }
        with open(output_path, "w", encoding="utf-8") as f:
            yaml.safe_dump(output, f, allow_unicode=True, sort_keys=False)
        return len(data)
