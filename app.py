from bluetraffic.config import Settings
from bluetraffic.data.loaders import load_dataset
from bluetraffic.viz.app.single import create_app
from bluetraffic.viz.overlays.bike_lanes import load_bike_lanes
from bluetraffic.viz.traffic_map import TrafficMap


def build_app(settings=None):
  settings = settings or Settings.from_env()

  dataset = load_dataset(settings.stations_source, settings.trips_source)
  traffic_map = TrafficMap(dataset)
  traffic_map.set_time_filter(settings.time_filter)

  return create_app(traffic_map, bike_lanes=load_bike_lanes())


def main():
  settings = Settings.from_env()
  app = build_app(settings)

  app.run(
      host=settings.host,  # 0.0.0.0 when deployed
      port=settings.port,
  )


if __name__ == "__main__":
  main()
