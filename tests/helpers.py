"""Shared builders for test data."""

from datetime import datetime, timedelta

from bluetraffic.data.loaders import Dataset
from bluetraffic.traffic.types import Station, Trip

DAY = datetime(2024, 3, 5)


def at(minute):
    return DAY + timedelta(minutes=minute)


def trip(start_id, end_id, start_minute, end_minute):
    return Trip(
        start_station_id=start_id,
        end_station_id=end_id,
        started_at=at(start_minute),
        ended_at=at(end_minute),
    )


STATIONS = [
    Station(id="A", lat=42.36027, lon=-71.09415, name="MIT at Mass Ave"),
    Station(id="B", lat=42.3736, lon=-71.1189, name="Harvard Square"),
    Station(id="C", lat=42.3505, lon=-71.0636, name="South Station"),
]


def scenario_trips():
    """
    Station A: 2 departures at 8:20, 3 arrivals at 8:25.
    Station B: one late-night round trip.
    """
    return [
        trip("A", "B", 500, 520),
        trip("A", "C", 500, 530),
        trip("B", "A", 480, 505),
        trip("C", "A", 490, 505),
        trip("B", "A", 470, 505),
        trip("B", "B", 1420, 1420),
    ]


def scenario_dataset():
    return Dataset(stations=list(STATIONS), trips=scenario_trips())
