# bluetraffic/viz/traffic_map.py
from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import List

from bluetraffic.data.loaders import Dataset
from bluetraffic.traffic.aggregate import station_traffic_for_window
from bluetraffic.traffic.scales import SqrtScale, radius_scale_for
from bluetraffic.traffic.time_window import ANY_TIME, validate_time_filter
from bluetraffic.traffic.trip_index import TripIndex
from bluetraffic.traffic.types import StationTraffic
from bluetraffic.viz.markers import MarkerLayer, StationMarker, build_markers, sync_positions
from bluetraffic.viz.projection import MapView
from bluetraffic.viz.time_label import time_filter_label


@dataclass(frozen=True)
class TrafficSnapshot:
    """Markers for one time filter, owned by the caller."""
    time_filter: int
    markers: List[StationMarker]

    @property
    def label(self) -> str:
        return time_filter_label(self.time_filter)


class TrafficMap:
    """
    Ties the loaded data to the marker layer.

    Two independent inputs drive it:
      - set_time_filter(minute): filter -> aggregate -> scale -> markers
      - view transforms on `view`: markers are re-projected, counts untouched

    snapshot(minute) runs the same pipeline into fresh markers and leaves
    the shared layer alone, so concurrent requests can each use their own.
    """

    def __init__(self, dataset: Dataset, view: MapView | None = None):
        self.stations = list(dataset.stations)
        self.index = TripIndex.build(dataset.trips)

        self.view = view if view is not None else MapView()
        self.layer = MarkerLayer(self.stations)

        self.time_filter = ANY_TIME
        self.traffic: List[StationTraffic] = []
        self.radius_scale: SqrtScale | None = None
        self._lock = threading.Lock()

        self.set_time_filter(ANY_TIME)

        self.layer.sync_positions(self.view.projection)
        self._unsubscribe = self.view.on_view_transform(self.layer.sync_positions)

    @property
    def markers(self) -> List[StationMarker]:
        return self.layer.markers

    @property
    def label(self) -> str:
        return time_filter_label(self.time_filter)

    def set_time_filter(self, minute) -> List[StationTraffic]:
        minute = validate_time_filter(minute)

        traffic = station_traffic_for_window(self.stations, self.index, minute)
        scale = radius_scale_for(traffic, minute)

        with self._lock:
            self.layer.apply_traffic(traffic, scale)
            self.time_filter = minute
            self.traffic = traffic
            self.radius_scale = scale
        return traffic

    def snapshot(self, minute, projection=None) -> TrafficSnapshot:
        """
        Markers for `minute`, positioned with `projection`
        (the map view's projection when not given).
        """
        minute = validate_time_filter(minute)

        traffic = station_traffic_for_window(self.stations, self.index, minute)
        markers = build_markers(traffic, radius_scale_for(traffic, minute))
        if projection is None:
            projection = self.view.projection
        sync_positions(markers, projection)
        return TrafficSnapshot(time_filter=minute, markers=markers)

    def detach(self) -> None:
        """Stop following view transforms."""
        self._unsubscribe()
