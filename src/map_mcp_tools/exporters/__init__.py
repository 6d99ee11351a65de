"""Map exporters for GeoJSON and YAML formats."""

from __future__ import annotations

from pathlib import Path

from map_mcp_tools.exporters.base import Exporter
from map_mcp_tools.exporters.geojson_exporter import GeoJsonExporter
from map_mcp_tools.exporters.yaml_exporter import YamlExporter


def get_exporter(output_path: Path | str) -> Exporter:
    """Pick an exporter from the file extension of `output_path`.

    Raises: ValueError for an unsupported extension.
    """
    suffix = Path(output_path).suffix.lower()
    if suffix in (".geojson", ".json"):
        return GeoJsonExporter()
    if suffix in (".yaml", ".yml"):
        return YamlExporter()
    raise ValueError(f"No exporter for '{suffix}' files (use .geojson, .json or .yaml)")


__all__ = [
    "Exporter",
    "GeoJsonExporter",
    "YamlExporter",
    "get_exporter",
]
