# bluetraffic/viz/markers.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Sequence, Tuple

from bluetraffic.traffic.scales import NEUTRAL_FLOW, flow_bucket, flow_color
from bluetraffic.traffic.types import Station, StationTraffic


def tooltip_text(st: StationTraffic) -> str:
    return (
        f"{st.total_traffic} trips "
        f"({st.departures} departures, {st.arrivals} arrivals)"
    )


@dataclass
class StationMarker:
    """
    Everything a renderer needs to draw one station circle.
    lat/lon come from the station; the rest is rewritten on updates.
    """
    station: Station
    traffic: StationTraffic
    radius: float = 0.0
    flow_bucket: float = NEUTRAL_FLOW
    screen_x: float | None = None
    screen_y: float | None = None

    @property
    def station_id(self) -> str:
        return self.station.id

    @property
    def lat(self) -> float:
        return self.station.lat

    @property
    def lon(self) -> float:
        return self.station.lon

    @property
    def tooltip(self) -> str:
        return tooltip_text(self.traffic)

    @property
    def fill_color(self) -> str:
        return flow_color(self.flow_bucket)

    def to_record(self) -> dict:
        return {
            "station_id": self.station_id,
            "name": self.station.name,
            "lat": self.lat,
            "lon": self.lon,
            "departures": self.traffic.departures,
            "arrivals": self.traffic.arrivals,
            "total_traffic": self.traffic.total_traffic,
            "radius": self.radius,
            "flow_bucket": self.flow_bucket,
            "fill_color": self.fill_color,
            "screen_x": self.screen_x,
            "screen_y": self.screen_y,
            "tooltip": self.tooltip,
        }


def build_markers(
    traffic: Sequence[StationTraffic],
    radius_scale: Callable[[float], float],
) -> List[StationMarker]:
    """Fresh markers for one set of traffic records, unpositioned."""
    return [
        StationMarker(
            station=st.station,
            traffic=st,
            radius=radius_scale(st.total_traffic),
            flow_bucket=flow_bucket(st.departures, st.total_traffic),
        )
        for st in traffic
    ]


def sync_positions(
    markers: Sequence[StationMarker],
    project: Callable[[float, float], Tuple[float, float]],
) -> None:
    for m in markers:
        x, y = project(m.lon, m.lat)
        m.screen_x = x
        m.screen_y = y


class MarkerLayer:
    """One marker per station, keyed by station id, in station order."""

    def __init__(self, stations: Sequence[Station]):
        self._markers: List[StationMarker] = [
            StationMarker(station=s, traffic=StationTraffic(station=s))
            for s in stations
        ]
        # first marker wins for duplicate ids
        self._by_id: Dict[str, StationMarker] = {}
        for m in self._markers:
            self._by_id.setdefault(m.station_id, m)

    def __iter__(self):
        return iter(self._markers)

    def __len__(self) -> int:
        return len(self._markers)

    def get(self, station_id: str) -> StationMarker | None:
        return self._by_id.get(station_id)

    @property
    def markers(self) -> List[StationMarker]:
        return list(self._markers)

    def apply_traffic(
        self,
        traffic: Sequence[StationTraffic],
        radius_scale: Callable[[float], float],
    ) -> None:
        """`traffic` follows station order, one record per marker."""
        if len(traffic) != len(self._markers):
            raise ValueError(
                f"expected {len(self._markers)} traffic records, got {len(traffic)}"
            )
        for m, st in zip(self._markers, traffic):
            if st.id != m.station_id:
                raise ValueError(f"traffic for {st.id!r} does not match marker {m.station_id!r}")
            m.traffic = st
            m.radius = radius_scale(st.total_traffic)
            m.flow_bucket = flow_bucket(st.departures, st.total_traffic)

    def sync_positions(self, project) -> None:
        sync_positions(self._markers, project)

    def to_records(self) -> List[dict]:
        return [m.to_record() for m in self._markers]
