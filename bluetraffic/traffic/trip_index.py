# bluetraffic/traffic/trip_index.py
from __future__ import annotations

from typing import Iterable, List, Tuple

from .types import Trip

MINUTES_PER_DAY = 1440

Buckets = Tuple[Tuple[Trip, ...], ...]


class TripIndex:
    """
    Trips bucketed by minute of day.

      departures[m] = trips with start_minute == m
      arrivals[m]   = trips with end_minute == m

    A trip starting and ending in the same minute sits in both indexes.
    Build once with TripIndex.build(); the buckets are tuples afterwards.
    """

    __slots__ = ("_departures", "_arrivals", "_size")

    def __init__(self, departures: Buckets, arrivals: Buckets, size: int):
        if len(departures) != MINUTES_PER_DAY or len(arrivals) != MINUTES_PER_DAY:
            raise ValueError(f"TripIndex needs exactly {MINUTES_PER_DAY} buckets")
        self._departures = departures
        self._arrivals = arrivals
        self._size = size

    @classmethod
    def build(cls, trips: Iterable[Trip]) -> "TripIndex":
        departures: List[List[Trip]] = [[] for _ in range(MINUTES_PER_DAY)]
        arrivals: List[List[Trip]] = [[] for _ in range(MINUTES_PER_DAY)]

        n = 0
        for t in trips:
            departures[t.start_minute].append(t)
            arrivals[t.end_minute].append(t)
            n += 1

        return cls(
            departures=tuple(tuple(b) for b in departures),
            arrivals=tuple(tuple(b) for b in arrivals),
            size=n,
        )

    @property
    def departures(self) -> Buckets:
        return self._departures

    @property
    def arrivals(self) -> Buckets:
        return self._arrivals

    def __len__(self) -> int:
        return self._size

    def bucket_counts(self) -> Tuple[List[int], List[int]]:
        """(departures per minute, arrivals per minute)"""
        return (
            [len(b) for b in self._departures],
            [len(b) for b in self._arrivals],
        )
