# bluetraffic/traffic/types.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


def minutes_since_midnight(ts: datetime) -> int:
    """
    Wall-clock minute of the day, 0..1439.
    Works for naive datetimes, tz-aware datetimes and pandas Timestamps.
    """
    return ts.hour * 60 + ts.minute


@dataclass(frozen=True)
class Trip:
    start_station_id: str
    end_station_id: str
    started_at: datetime
    ended_at: datetime

    @property
    def start_minute(self) -> int:
        return minutes_since_midnight(self.started_at)

    @property
    def end_minute(self) -> int:
        return minutes_since_midnight(self.ended_at)


@dataclass(frozen=True)
class Station:
    id: str  # short_name code, e.g. "A32000"
    lat: float
    lon: float
    name: str | None = None
    capacity: int | None = None


@dataclass(frozen=True)
class StationTraffic:
    """
    Per-station counts for one time filter.
    A fresh set is built on every filter change; never mutated.
    """
    station: Station
    departures: int = 0
    arrivals: int = 0

    @property
    def total_traffic(self) -> int:
        return self.departures + self.arrivals

    @property
    def id(self) -> str:
        return self.station.id

    @property
    def lat(self) -> float:
        return self.station.lat

    @property
    def lon(self) -> float:
        return self.station.lon

    @property
    def departure_ratio(self) -> float | None:
        total = self.total_traffic
        return self.departures / total if total else None
