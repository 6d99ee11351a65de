"""Value types shared by the tool layer and the drawing surface."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LngLat:
    """A geographic position. Longitude first, as in GeoJSON."""

    lng: float
    lat: float

    def to_list(self) -> list[float]:
        return [self.lng, self.lat]


@dataclass(frozen=True)
class MapPoint:
    """A point requested by the model, with optional popup text."""

    lat: float
    lng: float
    title: str | None = None
    description: str | None = None

    @property
    def position(self) -> LngLat:
        return LngLat(self.lng, self.lat)


@dataclass(frozen=True)
class MarkerOptions:
    """Styling and position of a single marker."""

    position: LngLat
    color: str
    size: float
    title: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class PolylineOptions:
    """An ordered line through `points`."""

    points: tuple[LngLat, ...]
    color: str
    width: float
    opacity: float


@dataclass(frozen=True)
class PolygonOptions:
    """A filled ring. The ring is drawn in the order given and is not auto-closed."""

    ring: tuple[LngLat, ...]
    fill_color: str
    fill_opacity: float
    stroke_color: str
    stroke_width: float


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned bounding box in degrees."""

    min_lng: float
    min_lat: float
    max_lng: float
    max_lat: float

    @property
    def southwest(self) -> LngLat:
        return LngLat(self.min_lng, self.min_lat)

    @property
    def northeast(self) -> LngLat:
        return LngLat(self.max_lng, self.max_lat)

    @property
    def center(self) -> LngLat:
        return LngLat(
            (self.min_lng + self.max_lng) / 2,
            (self.min_lat + self.max_lat) / 2,
        )

    @classmethod
    def from_positions(cls, positions: list[LngLat] | tuple[LngLat, ...]) -> Bounds:
        """Compute the min/max box over `positions`.

        Raises: ValueError if `positions` is empty.
        """
        if not positions:
            raise ValueError("Cannot compute bounds of an empty coordinate list")
        lngs = [p.lng for p in positions]
        lats = [p.lat for p in positions]
        return cls(
            min_lng=min(lngs),
            min_lat=min(lats),
            max_lng=max(lngs),
            max_lat=max(lats),
        )


@dataclass(frozen=True)
class CameraOptions:
    """Camera target. A `None` zoom keeps the surface's current zoom."""

    center: LngLat
    zoom: float | None = None
