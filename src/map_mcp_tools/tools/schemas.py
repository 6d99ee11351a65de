"""Tool catalog: the fixed set of map tools offered to the LLM."""

from __future__ import annotations

from typing import Literal

from map_mcp_tools.tools.definitions import InputSchema, Property, ToolDefinition

# Defaults shared by the catalog and parameter coercion.
DEFAULT_POINT_LAYER = "points"
DEFAULT_ICON_COLOR = "#FF0000"
DEFAULT_ICON_SIZE = 1.0

DEFAULT_ROUTE_LAYER = "route"
DEFAULT_LINE_COLOR = "#3b9ddd"
DEFAULT_LINE_WIDTH = 4.0
DEFAULT_LINE_OPACITY = 0.8

DEFAULT_POLYGON_LAYER = "polygon"
DEFAULT_FILL_COLOR = "#3b9ddd"
DEFAULT_FILL_OPACITY = 0.5
DEFAULT_STROKE_COLOR = "#000000"
DEFAULT_STROKE_WIDTH = 2.0

DEFAULT_ANIMATED = True
DEFAULT_DURATION_MS = 1000
DEFAULT_PADDING = 50.0
FIT_BOUNDS_DURATION_MS = 1000

TOOL_NAMES = (
    "add_points_to_map",
    "add_route_to_map",
    "add_polygon_to_map",
    "pan_map_to_location",
    "fit_map_to_bounds",
    "clear_map_layers",
    "set_map_style",
)


def _layer_name(default: str) -> Property:
    return Property("string", "Layer name for grouping", default=default)


def _coordinates(description: str) -> Property:
    return Property(
        type="array",
        description=description,
        items=Property("array", items=Property("number")),
    )


def _add_points_definition() -> ToolDefinition:
    return ToolDefinition(
        name="add_points_to_map",
        description="Add markers/points to the map with optional titles and descriptions",
        input_schema=InputSchema(
            properties={
                "points": Property(
                    type="array",
                    description="Array of points to add",
                    items=Property(
                        type="object",
                        properties={
                            "lat": Property("number", "Latitude coordinate"),
                            "lng": Property("number", "Longitude coordinate"),
                            "title": Property("string", "Optional marker title"),
                            "description": Property(
                                "string", "Optional marker description"
                            ),
                        },
                    ),
                ),
                "layerName": _layer_name(DEFAULT_POINT_LAYER),
                "iconColor": Property(
                    "string", "Hex color for markers", default=DEFAULT_ICON_COLOR
                ),
                "iconSize": Property(
                    "number", "Marker size multiplier", default=DEFAULT_ICON_SIZE
                ),
            },
            required=["points"],
        ),
    )


def _add_route_definition() -> ToolDefinition:
    return ToolDefinition(
        name="add_route_to_map",
        description="Draw a line/route on the map",
        input_schema=InputSchema(
            properties={
                "coordinates": _coordinates("Array of [lng, lat] coordinate pairs"),
                "layerName": _layer_name(DEFAULT_ROUTE_LAYER),
                "lineColor": Property(
                    "string", "Hex color for line", default=DEFAULT_LINE_COLOR
                ),
                "lineWidth": Property(
                    "number", "Line width in pixels", default=DEFAULT_LINE_WIDTH
                ),
                "lineOpacity": Property(
                    "number", "Line opacity 0-1", default=DEFAULT_LINE_OPACITY
                ),
            },
            required=["coordinates"],
        ),
    )


def _add_polygon_definition() -> ToolDefinition:
    return ToolDefinition(
        name="add_polygon_to_map",
        description="Draw a filled polygon area on the map",
        input_schema=InputSchema(
            properties={
                "coordinates": _coordinates(
                    "Array of [lng, lat] coordinate pairs forming polygon boundary"
                ),
                "layerName": _layer_name(DEFAULT_POLYGON_LAYER),
                "fillColor": Property(
                    "string", "Hex color for fill", default=DEFAULT_FILL_COLOR
                ),
                "fillOpacity": Property(
                    "number", "Fill opacity 0-1", default=DEFAULT_FILL_OPACITY
                ),
                "strokeColor": Property(
                    "string", "Hex color for border", default=DEFAULT_STROKE_COLOR
                ),
                "strokeWidth": Property(
                    "number", "Border width in pixels", default=DEFAULT_STROKE_WIDTH
                ),
            },
            required=["coordinates"],
        ),
    )


def _pan_map_definition() -> ToolDefinition:
    return ToolDefinition(
        name="pan_map_to_location",
        description="Move the map camera to a specific location",
        input_schema=InputSchema(
            properties={
                "latitude": Property("number", "Latitude coordinate"),
                "longitude": Property("number", "Longitude coordinate"),
                "zoom": Property(
                    "number", "Zoom level (optional, keeps current if not provided)"
                ),
                "animated": Property(
                    "boolean", "Animate the transition", default=DEFAULT_ANIMATED
                ),
                "duration": Property(
                    "number", "Animation duration in ms", default=DEFAULT_DURATION_MS
                ),
            },
            required=["latitude", "longitude"],
        ),
    )


def _fit_bounds_definition() -> ToolDefinition:
    return ToolDefinition(
        name="fit_map_to_bounds",
        description="Adjust camera to show all specified coordinates",
        input_schema=InputSchema(
            properties={
                "coordinates": _coordinates(
                    "Array of [lng, lat] coordinate pairs to fit in view"
                ),
                "padding": Property(
                    "number", "Padding in pixels", default=DEFAULT_PADDING
                ),
                "animated": Property(
                    "boolean", "Animate the transition", default=DEFAULT_ANIMATED
                ),
            },
            required=["coordinates"],
        ),
    )


def _clear_layers_definition() -> ToolDefinition:
    return ToolDefinition(
        name="clear_map_layers",
        description="Remove annotations/layers from the map",
        input_schema=InputSchema(
            properties={
                "layerNames": Property(
                    type="array",
                    description=(
                        "Array of layer names to clear. If null/empty, clears all layers."
                    ),
                    items=Property("string"),
                ),
            },
            required=[],
        ),
    )


def _set_style_definition() -> ToolDefinition:
    return ToolDefinition(
        name="set_map_style",
        description="Change the map's visual style",
        input_schema=InputSchema(
            properties={
                "styleUrl": Property(
                    "string",
                    "Mapbox style URL (e.g., 'mapbox://styles/mapbox/streets-v12')",
                ),
            },
            required=["styleUrl"],
        ),
    )


def get_tools_for_llm() -> list[ToolDefinition]:
    """Return the map tool definitions, in catalog order.

    A new list of new definitions is built on every call.

    Available tools:
        - add_points_to_map: Markers with optional title/description
        - add_route_to_map: Polyline through [lng, lat] pairs
        - add_polygon_to_map: Filled ring through [lng, lat] pairs
        - pan_map_to_location: Move the camera center (and optionally zoom)
        - fit_map_to_bounds: Frame a set of coordinates
        - clear_map_layers: Remove named layers, or all of them
        - set_map_style: Load a new map style
    """
    return [
        _add_points_definition(),
        _add_route_definition(),
        _add_polygon_definition(),
        _pan_map_definition(),
        _fit_bounds_definition(),
        _clear_layers_definition(),
        _set_style_definition(),
    ]


def get_all_tool_schemas(
    format: Literal["anthropic", "openai"] = "anthropic",
) -> list[dict]:
    """Return the catalog serialized for a model provider.

    Args:
        format: "anthropic" for `input_schema` tools, "openai" for
            function calling tools.
    """
    if format == "openai":
        return [tool.to_openai() for tool in get_tools_for_llm()]
    if format == "anthropic":
        return [tool.to_dict() for tool in get_tools_for_llm()]
    raise ValueError(f"Unknown schema format: {format}")
