# bluetraffic/traffic/scales.py
from __future__ import annotations

import math
from bisect import bisect_right
from dataclasses import dataclass, field
from typing import Sequence, Tuple

from .time_window import ANY_TIME
from .types import StationTraffic

UNFILTERED_RADIUS_RANGE = (0.0, 25.0)
FILTERED_RADIUS_RANGE = (3.0, 50.0)

NEUTRAL_FLOW = 0.5

ARRIVALS_COLOR = "#ff8c00"    # darkorange
DEPARTURES_COLOR = "#4682b4"  # steelblue


@dataclass(frozen=True)
class SqrtScale:
    """
    r(t) = lo + (hi - lo) * sqrt(t / domain_max)

    Circle *area* grows linearly with t. A zero domain maps everything to lo.
    """
    domain_max: float
    range_min: float
    range_max: float

    def __call__(self, value: float) -> float:
        if self.domain_max <= 0:
            return float(self.range_min)
        v = max(0.0, float(value))
        return self.range_min + (self.range_max - self.range_min) * math.sqrt(v / self.domain_max)


@dataclass(frozen=True)
class QuantizeScale:
    """
    Splits a continuous domain into len(outputs) equal slices.
    A value on a slice boundary belongs to the upper slice; values outside
    the domain clamp to the first / last output.
    """
    domain: Tuple[float, float] = (0.0, 1.0)
    outputs: Tuple[float, ...] = (0.0, 0.5, 1.0)
    thresholds: Tuple[float, ...] = field(init=False)

    def __post_init__(self):
        if not self.outputs:
            raise ValueError("QuantizeScale needs at least one output")
        lo, hi = self.domain
        n = len(self.outputs)
        object.__setattr__(
            self,
            "thresholds",
            tuple(lo + (hi - lo) * (i + 1) / n for i in range(n - 1)),
        )

    def __call__(self, value: float) -> float:
        return self.outputs[bisect_right(self.thresholds, value)]


STATION_FLOW = QuantizeScale()


def radius_range(minute: int) -> Tuple[float, float]:
    # filtered windows hold far fewer trips: nonzero floor + wider spread
    return UNFILTERED_RADIUS_RANGE if minute == ANY_TIME else FILTERED_RADIUS_RANGE


def radius_scale_for(traffic: Sequence[StationTraffic], minute: int) -> SqrtScale:
    lo, hi = radius_range(minute)
    domain_max = max((st.total_traffic for st in traffic), default=0)
    return SqrtScale(domain_max=domain_max, range_min=lo, range_max=hi)


def flow_bucket(departures: int, total: int) -> float:
    """
    Quantized departure ratio: 0 = mostly arrivals, 1 = mostly departures.
    Stations without trips in the window are neutral (0.5).
    """
    if total <= 0:
        return NEUTRAL_FLOW
    return STATION_FLOW(departures / total)


def _hex_to_rgb(c: str) -> Tuple[int, int, int]:
    c = c.lstrip("#")
    return int(c[0:2], 16), int(c[2:4], 16), int(c[4:6], 16)


def flow_color(bucket: float) -> str:
    """Mix arrivals color (0) → departures color (1)."""
    w = max(0.0, min(1.0, float(bucket)))
    a = _hex_to_rgb(ARRIVALS_COLOR)
    d = _hex_to_rgb(DEPARTURES_COLOR)
    rgb = (round(a[i] + (d[i] - a[i]) * w) for i in range(3))
    return "#" + "".join(f"{x:02x}" for x in rgb)
