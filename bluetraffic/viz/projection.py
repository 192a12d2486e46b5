# bluetraffic/viz/projection.py
from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Callable, List, Tuple

from bluetraffic.config import CENTER_LAT, CENTER_LON, MAX_ZOOM, MIN_ZOOM, ZOOM_START

ProjectFn = Callable[[float, float], Tuple[float, float]]
ViewCallback = Callable[[ProjectFn], None]

TILE_SIZE = 512
MAX_LAT = 85.051129


def _world_xy(lon: float, lat: float, scale: float) -> Tuple[float, float]:
    lat = max(-MAX_LAT, min(MAX_LAT, lat))
    x = (lon + 180.0) / 360.0 * scale
    s = math.sin(math.radians(lat))
    y = (0.5 - math.log((1 + s) / (1 - s)) / (4 * math.pi)) * scale
    return x, y


@dataclass(frozen=True)
class WebMercatorProjection:
    """
    Geographic -> screen pixels for a slippy-map viewport.
    The viewport center lands on (width / 2, height / 2).
    """
    center_lon: float
    center_lat: float
    zoom: float
    width: int
    height: int
    tile_size: int = TILE_SIZE

    def __call__(self, lon: float, lat: float) -> Tuple[float, float]:
        return self.project(lon, lat)

    def project(self, lon: float, lat: float) -> Tuple[float, float]:
        scale = self.tile_size * (2 ** self.zoom)
        cx, cy = _world_xy(self.center_lon, self.center_lat, scale)
        x, y = _world_xy(float(lon), float(lat), scale)
        return x - cx + self.width / 2, y - cy + self.height / 2


class MapView:
    """
    Current map viewport plus its view-transform observers.

    pan_to / zoom_to / move / resize change the view and then call every
    registered callback, in registration order, with the new projection.
    """

    def __init__(
        self,
        *,
        center_lon: float = CENTER_LON,
        center_lat: float = CENTER_LAT,
        zoom: float = ZOOM_START,
        width: int = 1024,
        height: int = 768,
        min_zoom: float = MIN_ZOOM,
        max_zoom: float = MAX_ZOOM,
    ):
        if min_zoom > max_zoom:
            raise ValueError("min_zoom must be <= max_zoom")
        self.min_zoom = float(min_zoom)
        self.max_zoom = float(max_zoom)
        self._projection = WebMercatorProjection(
            center_lon=float(center_lon),
            center_lat=float(center_lat),
            zoom=self._clamp_zoom(zoom),
            width=self._check_size(width, "width"),
            height=self._check_size(height, "height"),
        )
        self._callbacks: List[ViewCallback] = []

    @staticmethod
    def _check_size(v, name: str) -> int:
        v = int(v)
        if v <= 0:
            raise ValueError(f"{name} must be > 0")
        return v

    def _clamp_zoom(self, zoom) -> float:
        z = float(zoom)
        if math.isnan(z):
            raise ValueError("zoom must be a number")
        return max(self.min_zoom, min(self.max_zoom, z))

    @property
    def projection(self) -> WebMercatorProjection:
        return self._projection

    @property
    def zoom(self) -> float:
        return self._projection.zoom

    @property
    def center(self) -> Tuple[float, float]:
        return self._projection.center_lon, self._projection.center_lat

    def project(self, lon: float, lat: float) -> Tuple[float, float]:
        return self._projection.project(lon, lat)

    # ---- observers ----
    def on_view_transform(self, callback: ViewCallback) -> Callable[[], None]:
        self._callbacks.append(callback)

        def _unsubscribe():
            if callback in self._callbacks:
                self._callbacks.remove(callback)

        return _unsubscribe

    def _notify(self) -> None:
        for cb in list(self._callbacks):
            cb(self._projection)

    # ---- transforms ----
    def move(self, *, center_lon=None, center_lat=None, zoom=None) -> None:
        changes = {}
        if center_lon is not None:
            changes["center_lon"] = float(center_lon)
        if center_lat is not None:
            changes["center_lat"] = float(center_lat)
        if zoom is not None:
            changes["zoom"] = self._clamp_zoom(zoom)
        self._projection = replace(self._projection, **changes)
        self._notify()

    def pan_to(self, center_lon: float, center_lat: float) -> None:
        self.move(center_lon=center_lon, center_lat=center_lat)

    def zoom_to(self, zoom: float) -> None:
        self.move(zoom=zoom)

    def resize(self, width: int, height: int) -> None:
        self._projection = replace(
            self._projection,
            width=self._check_size(width, "width"),
            height=self._check_size(height, "height"),
        )
        self._notify()
