# bluetraffic/data/loaders.py
from __future__ import annotations

import io
import json
import urllib.error
import urllib.request
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List

import pandas as pd
from colorama import Fore, Style
from tqdm import tqdm

from bluetraffic.traffic.types import Station, Trip

TRIP_COLUMNS = ["start_station_id", "end_station_id", "started_at", "ended_at"]


class DataLoadError(RuntimeError):
    """Station or trip data could not be obtained. Nothing is rendered."""


@dataclass(frozen=True)
class Dataset:
    stations: List[Station]
    trips: List[Trip]


def _is_url(source) -> bool:
    return str(source).startswith(("http://", "https://"))


def read_source(source, timeout: int = 60) -> bytes:
    """
    Read a local file or an http(s) URL.
    HTTP failures keep the status + first part of the body in the message.
    """
    if not _is_url(source):
        return Path(source).read_bytes()

    req = urllib.request.Request(
        str(source),
        headers={"User-Agent": "bluetraffic/0.1"},
    )
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            return resp.read()
    except urllib.error.HTTPError as e:
        body = ""
        try:
            body = e.read().decode("utf-8", errors="replace")[:500]
        except OSError:
            body = ""
        raise DataLoadError(f"HTTP {e.code} {e.reason} for {source}: {body}") from e


def parse_stations(raw: Dict[str, Any]) -> List[Station]:
    """
    GBFS station_information payload -> Station list.
    The station code (short_name) is the id trips refer to.
    """
    try:
        rows = raw["data"]["stations"]
    except (KeyError, TypeError):
        raise ValueError("station JSON must contain data.stations")

    stations: List[Station] = []
    for s in rows:
        sid = s.get("short_name") or s.get("station_id")
        if sid is None:
            continue
        cap = s.get("capacity")
        stations.append(
            Station(
                id=str(sid),
                lat=float(s["lat"]),
                lon=float(s["lon"]),
                name=s.get("name"),
                capacity=int(cap) if cap is not None else None,
            )
        )
    return stations


def load_stations(source) -> List[Station]:
    try:
        raw = json.loads(read_source(source).decode("utf-8"))
        return parse_stations(raw)
    except DataLoadError:
        raise
    except (OSError, ValueError, KeyError, TypeError) as e:
        raise DataLoadError(f"could not load stations from {source}: {e}") from e


def trips_from_frame(df: pd.DataFrame, *, progress: bool = False) -> List[Trip]:
    """
    Clean a Bluebikes trips DataFrame into Trip records.
    Rows whose timestamps or station ids are missing are dropped.
    """
    missing = [c for c in TRIP_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"trips CSV missing columns: {', '.join(missing)}")

    out = pd.DataFrame()
    out["start_station_id"] = df["start_station_id"].astype("string").str.strip()
    out["end_station_id"] = df["end_station_id"].astype("string").str.strip()
    out["started_at"] = pd.to_datetime(df["started_at"], errors="coerce", format="mixed")
    out["ended_at"] = pd.to_datetime(df["ended_at"], errors="coerce", format="mixed")

    out = out.dropna()
    out = out[(out["start_station_id"] != "") & (out["end_station_id"] != "")]

    rows = out.itertuples(index=False)
    if progress:
        rows = tqdm(rows, total=len(out), desc="Reading trips")

    return [
        Trip(
            start_station_id=str(r.start_station_id),
            end_station_id=str(r.end_station_id),
            started_at=r.started_at,
            ended_at=r.ended_at,
        )
        for r in rows
    ]


def load_trips(source, *, progress: bool = False) -> List[Trip]:
    try:
        df = pd.read_csv(io.BytesIO(read_source(source)), dtype=str)
        return trips_from_frame(df, progress=progress)
    except DataLoadError:
        raise
    except (OSError, ValueError, pd.errors.ParserError) as e:
        raise DataLoadError(f"could not load trips from {source}: {e}") from e


def load_dataset(stations_source, trips_source, *, progress: bool = True) -> Dataset:
    """
    Fetch stations and trips concurrently, then wait for BOTH.
    Either failure is fatal: the error is reported and re-raised.
    """
    print(f"{Fore.CYAN}Loading stations + trips…{Style.RESET_ALL}")

    with ThreadPoolExecutor(max_workers=2) as pool:
        stations_f = pool.submit(load_stations, stations_source)
        trips_f = pool.submit(load_trips, trips_source, progress=progress)

        try:
            stations = stations_f.result()
            trips = trips_f.result()
        except DataLoadError as e:
            print(f"{Fore.RED}Load failed: {e}{Style.RESET_ALL}")
            raise

    print(
        f"{Fore.GREEN}Loaded {len(stations)} stations and {len(trips):,} trips.{Style.RESET_ALL}"
    )
    return Dataset(stations=stations, trips=trips)
