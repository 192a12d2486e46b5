# bluetraffic/config.py
from __future__ import annotations

import os
from dataclasses import dataclass

# Boston / Cambridge
CENTER_LAT = 42.36027
CENTER_LON = -71.09415
ZOOM_START = 12
MIN_ZOOM = 5
MAX_ZOOM = 18

STATIONS_URL = "https://dsc106.com/labs/lab07/data/bluebikes-stations.json"
TRIPS_URL = "https://dsc106.com/labs/lab07/data/bluebikes-traffic-2024-03.csv"

BOSTON_BIKE_LANES_URL = (
    "https://bostonopendata-boston.opendata.arcgis.com/datasets/"
    "boston::existing-bike-network-2022.geojson"
)
CAMBRIDGE_BIKE_LANES_URL = (
    "https://raw.githubusercontent.com/cambridgegis/cambridgegis_data/main/"
    "Recreation/Bike_Facilities/RECREATION_BikeFacilities.geojson"
)

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8080


@dataclass
class Settings:
    stations_source: str = STATIONS_URL
    trips_source: str = TRIPS_URL
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    time_filter: int = -1

    @classmethod
    def from_env(cls, environ=None) -> "Settings":
        env = os.environ if environ is None else environ
        return cls(
            stations_source=env.get("STATIONS_URL", STATIONS_URL),
            trips_source=env.get("TRIPS_CSV", TRIPS_URL),
            host=env.get("HOST", DEFAULT_HOST),
            port=int(env.get("PORT", str(DEFAULT_PORT))),
            time_filter=int(env.get("TIME_FILTER", "-1")),
        )
