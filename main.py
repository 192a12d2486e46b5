# bluetraffic/main.py

from colorama import Fore, Style

from bluetraffic.config import STATIONS_URL, TRIPS_URL
from bluetraffic.data.loaders import load_dataset
from bluetraffic.traffic.aggregate import traffic_frame
from bluetraffic.viz.app.single import serve_single
from bluetraffic.viz.overlays.bike_lanes import load_bike_lanes
from bluetraffic.viz.traffic_map import TrafficMap

STATIONS = STATIONS_URL
TRIPS = TRIPS_URL
TIME_FILTER = 8 * 60  # 8:00 AM rush


def print_busiest(traffic_map, n=10):
    df = traffic_frame(traffic_map.traffic)
    top = df.sort_values("total_traffic", ascending=False).head(n)

    print(f"\n{Fore.MAGENTA}Busiest stations, {traffic_map.label}:{Style.RESET_ALL}\n")
    for i, row in enumerate(top.itertuples(index=False), 1):
        print(
            f"{i:02d}. "
            f"{row.station_id:>8} | "
            f"{row.total_traffic:5d} trips "
            f"({row.departures} out, {row.arrivals} in) "
            f"{row.name or ''}"
        )


def main():
    dataset = load_dataset(STATIONS, TRIPS)

    traffic_map = TrafficMap(dataset)
    print_busiest(traffic_map)

    traffic_map.set_time_filter(TIME_FILTER)
    print_busiest(traffic_map)

    # ---- UI ----
    serve_single(
        traffic_map,
        port=8080,
        bike_lanes=load_bike_lanes(),
    )


if __name__ == "__main__":
    main()
