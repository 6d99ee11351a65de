"""Convert untyped tool-call payloads into typed, defaulted arguments.

Each `coerce_*` function takes the decoded JSON arguments of one tool and
either returns a frozen argument bundle or raises ToolValidationError naming
the first offending field. Nothing here touches the map.

Rules:
- A required field that is absent (or JSON null) is an error.
- An optional field that is absent (or null) takes the default from
  `tools.schemas`.
- A present field of the wrong shape is an error.
- Integers and floats are both accepted for number fields; booleans are not.
- Color fields never fail: anything unparseable becomes FALLBACK_COLOR.
- Coordinate pairs are `[lng, lat, ...]`; only the first two items are read.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Callable, Mapping

from map_mcp_tools.models import Bounds, LngLat, MapPoint
from map_mcp_tools.tools import schemas
from map_mcp_tools.tools.colors import FALLBACK_COLOR, parse_color, resolve_color
from map_mcp_tools.tools.exceptions import ToolValidationError

_MISSING = object()


@dataclass(frozen=True)
class AddPointsArgs:
    points: tuple[MapPoint, ...]
    layer_name: str = schemas.DEFAULT_POINT_LAYER
    icon_color: str = parse_color(schemas.DEFAULT_ICON_COLOR)
    icon_size: float = schemas.DEFAULT_ICON_SIZE


@dataclass(frozen=True)
class AddRouteArgs:
    coordinates: tuple[LngLat, ...]
    layer_name: str = schemas.DEFAULT_ROUTE_LAYER
    line_color: str = parse_color(schemas.DEFAULT_LINE_COLOR)
    line_width: float = schemas.DEFAULT_LINE_WIDTH
    line_opacity: float = schemas.DEFAULT_LINE_OPACITY


@dataclass(frozen=True)
class AddPolygonArgs:
    coordinates: tuple[LngLat, ...]
    layer_name: str = schemas.DEFAULT_POLYGON_LAYER
    fill_color: str = parse_color(schemas.DEFAULT_FILL_COLOR)
    fill_opacity: float = schemas.DEFAULT_FILL_OPACITY
    stroke_color: str = parse_color(schemas.DEFAULT_STROKE_COLOR)
    stroke_width: float = schemas.DEFAULT_STROKE_WIDTH


@dataclass(frozen=True)
class PanMapArgs:
    latitude: float
    longitude: float
    zoom: float | None = None
    animated: bool = schemas.DEFAULT_ANIMATED
    duration_ms: int = schemas.DEFAULT_DURATION_MS


@dataclass(frozen=True)
class FitBoundsArgs:
    coordinates: tuple[LngLat, ...]
    padding: float = schemas.DEFAULT_PADDING
    animated: bool = schemas.DEFAULT_ANIMATED

    @property
    def bounds(self) -> Bounds:
        return Bounds.from_positions(self.coordinates)


@dataclass(frozen=True)
class ClearLayersArgs:
    layer_names: tuple[str, ...] = ()

    @property
    def clear_all(self) -> bool:
        return not self.layer_names


@dataclass(frozen=True)
class SetStyleArgs:
    style_url: str


# Field readers


def _get(params: Mapping[str, Any], key: str) -> Any:
    value = params.get(key, _MISSING)
    return _MISSING if value is None else value


def _require(params: Mapping[str, Any], key: str) -> Any:
    value = _get(params, key)
    if value is _MISSING:
        raise ToolValidationError(key, f"Missing required parameter '{key}'")
    return value


def _is_number(value: Any) -> bool:
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


def _as_number(value: Any, field: str) -> float:
    if not _is_number(value):
        raise ToolValidationError(
            field, f"Parameter '{field}' must be a number, got {type(value).__name__}"
        )
    return float(value)


def _number(
    params: Mapping[str, Any],
    key: str,
    default: Any = _MISSING,
    *,
    minimum: float | None = None,
) -> float:
    value = _get(params, key)
    if value is _MISSING:
        if default is _MISSING:
            raise ToolValidationError(key, f"Missing required parameter '{key}'")
        return default
    number = _as_number(value, key)
    if minimum is not None and number < minimum:
        raise ToolValidationError(key, f"Parameter '{key}' must be >= {minimum:g}")
    return number


def _string(params: Mapping[str, Any], key: str, default: Any = _MISSING) -> str:
    value = _get(params, key)
    if value is _MISSING:
        if default is _MISSING:
            raise ToolValidationError(key, f"Missing required parameter '{key}'")
        return default
    if not isinstance(value, str):
        raise ToolValidationError(
            key, f"Parameter '{key}' must be a string, got {type(value).__name__}"
        )
    return value


def _boolean(params: Mapping[str, Any], key: str, default: bool) -> bool:
    value = _get(params, key)
    if value is _MISSING:
        return default
    if not isinstance(value, bool):
        raise ToolValidationError(
            key, f"Parameter '{key}' must be a boolean, got {type(value).__name__}"
        )
    return value


def _color(params: Mapping[str, Any], key: str, default: str) -> str:
    value = _get(params, key)
    if value is _MISSING:
        return parse_color(default)
    return resolve_color(value, FALLBACK_COLOR)


def _array(params: Mapping[str, Any], key: str) -> list:
    value = _require(params, key)
    if not isinstance(value, (list, tuple)):
        raise ToolValidationError(
            key, f"Parameter '{key}' must be an array, got {type(value).__name__}"
        )
    return list(value)


def _coordinates(
    params: Mapping[str, Any],
    key: str,
    *,
    min_pairs: int,
) -> tuple[LngLat, ...]:
    items = _array(params, key)
    if len(items) < min_pairs:
        raise ToolValidationError(
            key,
            f"Parameter '{key}' needs at least {min_pairs} [lng, lat] pair(s), "
            f"got {len(items)}",
        )
    positions = []
    for i, pair in enumerate(items):
        field = f"{key}[{i}]"
        if not isinstance(pair, (list, tuple)) or len(pair) < 2:
            raise ToolValidationError(field, f"'{field}' must be a [lng, lat] pair")
        positions.append(LngLat(_as_number(pair[0], field), _as_number(pair[1], field)))
    return tuple(positions)


def _point(item: Any, field: str) -> MapPoint:
    if not isinstance(item, Mapping):
        raise ToolValidationError(field, f"'{field}' must be an object with lat and lng")
    if item.get("lat") is None:
        raise ToolValidationError(f"{field}.lat", f"Missing latitude in '{field}'")
    if item.get("lng") is None:
        raise ToolValidationError(f"{field}.lng", f"Missing longitude in '{field}'")
    lat = _as_number(item["lat"], f"{field}.lat")
    lng = _as_number(item["lng"], f"{field}.lng")
    title = _optional_text(item, "title", field)
    description = _optional_text(item, "description", field)
    return MapPoint(lat=lat, lng=lng, title=title, description=description)


def _optional_text(item: Mapping[str, Any], key: str, field: str) -> str | None:
    value = item.get(key)
    if value is None or isinstance(value, str):
        return value
    raise ToolValidationError(f"{field}.{key}", f"'{field}.{key}' must be a string")


# Per-tool coercion


def coerce_add_points(params: Mapping[str, Any]) -> AddPointsArgs:
    items = _array(params, "points")
    points = tuple(_point(item, f"points[{i}]") for i, item in enumerate(items))
    return AddPointsArgs(
        points=points,
        layer_name=_string(params, "layerName", schemas.DEFAULT_POINT_LAYER),
        icon_color=_color(params, "iconColor", schemas.DEFAULT_ICON_COLOR),
        icon_size=_number(params, "iconSize", schemas.DEFAULT_ICON_SIZE, minimum=0),
    )


def coerce_add_route(params: Mapping[str, Any]) -> AddRouteArgs:
    return AddRouteArgs(
        coordinates=_coordinates(params, "coordinates", min_pairs=2),
        layer_name=_string(params, "layerName", schemas.DEFAULT_ROUTE_LAYER),
        line_color=_color(params, "lineColor", schemas.DEFAULT_LINE_COLOR),
        line_width=_number(params, "lineWidth", schemas.DEFAULT_LINE_WIDTH, minimum=0),
        line_opacity=_number(params, "lineOpacity", schemas.DEFAULT_LINE_OPACITY),
    )


def coerce_add_polygon(params: Mapping[str, Any]) -> AddPolygonArgs:
    return AddPolygonArgs(
        coordinates=_coordinates(params, "coordinates", min_pairs=3),
        layer_name=_string(params, "layerName", schemas.DEFAULT_POLYGON_LAYER),
        fill_color=_color(params, "fillColor", schemas.DEFAULT_FILL_COLOR),
        fill_opacity=_number(params, "fillOpacity", schemas.DEFAULT_FILL_OPACITY),
        stroke_color=_color(params, "strokeColor", schemas.DEFAULT_STROKE_COLOR),
        stroke_width=_number(
            params, "strokeWidth", schemas.DEFAULT_STROKE_WIDTH, minimum=0
        ),
    )


def coerce_pan_map(params: Mapping[str, Any]) -> PanMapArgs:
    zoom = _number(params, "zoom", None)
    return PanMapArgs(
        latitude=_number(params, "latitude"),
        longitude=_number(params, "longitude"),
        zoom=zoom,
        animated=_boolean(params, "animated", schemas.DEFAULT_ANIMATED),
        duration_ms=int(
            _number(params, "duration", schemas.DEFAULT_DURATION_MS, minimum=0)
        ),
    )


def coerce_fit_bounds(params: Mapping[str, Any]) -> FitBoundsArgs:
    return FitBoundsArgs(
        coordinates=_coordinates(params, "coordinates", min_pairs=1),
        padding=_number(params, "padding", schemas.DEFAULT_PADDING, minimum=0),
        animated=_boolean(params, "animated", schemas.DEFAULT_ANIMATED),
    )


def coerce_clear_layers(params: Mapping[str, Any]) -> ClearLayersArgs:
    if _get(params, "layerNames") is _MISSING:
        return ClearLayersArgs()
    names = _array(params, "layerNames")
    for i, name in enumerate(names):
        if not isinstance(name, str):
            raise ToolValidationError(
                f"layerNames[{i}]", f"'layerNames[{i}]' must be a string"
            )
    return ClearLayersArgs(layer_names=tuple(names))


def coerce_set_style(params: Mapping[str, Any]) -> SetStyleArgs:
    style_url = _string(params, "styleUrl")
    if not style_url.strip():
        raise ToolValidationError("styleUrl", "Parameter 'styleUrl' must not be empty")
    return SetStyleArgs(style_url=style_url)


PARAMETER_COERCERS: dict[str, Callable[[Mapping[str, Any]], Any]] = {
    "add_points_to_map": coerce_add_points,
    "add_route_to_map": coerce_add_route,
    "add_polygon_to_map": coerce_add_polygon,
    "pan_map_to_location": coerce_pan_map,
    "fit_map_to_bounds": coerce_fit_bounds,
    "clear_map_layers": coerce_clear_layers,
    "set_map_style": coerce_set_style,
}


def coerce_params(name: str, params: Any) -> Any:
    """Coerce `params` for tool `name`.

    Raises:
        KeyError: `name` has no coercer.
        ToolValidationError: `params` is not a mapping or fails a field rule.
    """
    coercer = PARAMETER_COERCERS[name]
    if params is None:
        params = {}
    if not isinstance(params, Mapping):
        raise ToolValidationError(
            "params", f"Tool parameters must be an object, got {type(params).__name__}"
        )
    return coercer(params)
