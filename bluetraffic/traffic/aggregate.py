# bluetraffic/traffic/aggregate.py
from __future__ import annotations

from collections import Counter
from typing import Iterable, List, Sequence

import pandas as pd

from .time_window import filter_by_minute
from .trip_index import TripIndex
from .types import Station, StationTraffic, Trip


def compute_station_traffic(
    stations: Sequence[Station],
    departures: Iterable[Trip],
    arrivals: Iterable[Trip],
) -> List[StationTraffic]:
    """
    Roll up filtered trips into per-station counts.

    - output order follows `stations`
    - stations with no trips in the window get 0 / 0
    - trips at stations not in `stations` are ignored
    """
    dep_counts = Counter(t.start_station_id for t in departures)
    arr_counts = Counter(t.end_station_id for t in arrivals)

    return [
        StationTraffic(
            station=s,
            departures=dep_counts.get(s.id, 0),
            arrivals=arr_counts.get(s.id, 0),
        )
        for s in stations
    ]


def station_traffic_for_window(
    stations: Sequence[Station],
    index: TripIndex,
    minute: int,
) -> List[StationTraffic]:
    return compute_station_traffic(
        stations,
        filter_by_minute(index.departures, minute),
        filter_by_minute(index.arrivals, minute),
    )


def traffic_frame(traffic: Sequence[StationTraffic]) -> pd.DataFrame:
    """
    Flat table of one traffic snapshot:
      station_id, name, lat, lon, departures, arrivals, total_traffic
    """
    return pd.DataFrame(
        {
            "station_id": [st.id for st in traffic],
            "name": [st.station.name for st in traffic],
            "lat": [st.lat for st in traffic],
            "lon": [st.lon for st in traffic],
            "departures": [st.departures for st in traffic],
            "arrivals": [st.arrivals for st in traffic],
            "total_traffic": [st.total_traffic for st in traffic],
        },
        columns=[
            "station_id",
            "name",
            "lat",
            "lon",
            "departures",
            "arrivals",
            "total_traffic",
        ],
    )
