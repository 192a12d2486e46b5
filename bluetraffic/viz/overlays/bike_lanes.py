# bluetraffic/viz/overlays/bike_lanes.py
from __future__ import annotations

import json
from typing import Dict, List, Tuple

import folium
from colorama import Fore, Style

from bluetraffic.config import BOSTON_BIKE_LANES_URL, CAMBRIDGE_BIKE_LANES_URL
from bluetraffic.data.loaders import DataLoadError, read_source

LANE_COLOR = "#32D400"
LANE_WEIGHT = 5
LANE_OPACITY = 0.5

DEFAULT_LANE_SOURCES = [
    ("Boston bike lanes", BOSTON_BIKE_LANES_URL),
    ("Cambridge bike lanes", CAMBRIDGE_BIKE_LANES_URL),
]


def load_bike_lanes(sources=DEFAULT_LANE_SOURCES) -> List[Tuple[str, Dict]]:
    """
    Fetch bike network GeoJSON once.
    Lanes are decoration: a source that fails is reported and skipped.
    """
    layers = []
    for name, src in sources:
        try:
            layers.append((name, json.loads(read_source(src).decode("utf-8"))))
        except (DataLoadError, OSError, ValueError) as e:
            print(f"{Fore.YELLOW}Skipping {name}: {e}{Style.RESET_ALL}")
    return layers


def _lane_style(_feature):
    return {
        "color": LANE_COLOR,
        "weight": LANE_WEIGHT,
        "opacity": LANE_OPACITY,
    }


def add_bike_lanes(m, layers):
    for name, geojson in layers:
        folium.GeoJson(
            geojson,
            name=name,
            style_function=_lane_style,
        ).add_to(m)
