# bluetraffic/viz/app/single.py
from __future__ import annotations

import math

from flask import Flask, jsonify, request

from bluetraffic.traffic.time_window import validate_time_filter
from bluetraffic.viz.maps.render import render_map_document
from bluetraffic.viz.projection import MapView
from bluetraffic.viz.traffic_map import TrafficMap

DEFAULT_TITLE = "Bluebikes traffic"


def create_app(
    traffic_map: TrafficMap,
    *,
    title: str | None = DEFAULT_TITLE,
    bike_lanes=None,
) -> Flask:
    """
    Routes:
      /              -> map page for ?t=<minute> (default: the map's filter)
      /api/stations  -> marker records for ?t=, projected for the view
                        given by lat/lon/zoom/width/height (defaults to
                        the map's own view)

    Every request works on its own snapshot; the shared map is read-only here.
    """
    app = Flask(__name__)

    def _time_filter() -> int:
        return validate_time_filter(request.args.get("t", traffic_map.time_filter))

    def _finite_arg(name: str, default: float) -> float:
        value = request.args.get(name, default, type=float)
        if not math.isfinite(value):
            raise ValueError(f"{name} must be a finite number, got {value!r}")
        return value

    def _request_view() -> MapView:
        base = traffic_map.view
        lon, lat = base.center
        return MapView(
            center_lon=_finite_arg("lon", lon),
            center_lat=_finite_arg("lat", lat),
            zoom=_finite_arg("zoom", base.zoom),
            width=request.args.get("width", base.projection.width, type=int),
            height=request.args.get("height", base.projection.height, type=int),
            min_zoom=base.min_zoom,
            max_zoom=base.max_zoom,
        )

    @app.errorhandler(ValueError)
    def _bad_request(e):
        return jsonify({"error": str(e)}), 400

    @app.route("/")
    def _index():
        snap = traffic_map.snapshot(_time_filter())
        return render_map_document(
            traffic_map,
            title=title,
            bike_lanes=bike_lanes,
            snapshot=snap,
        )

    @app.route("/api/stations")
    def _stations():
        view = _request_view()
        snap = traffic_map.snapshot(_time_filter(), view.projection)

        return jsonify(
            {
                "time_filter": snap.time_filter,
                "label": snap.label,
                "stations": [m.to_record() for m in snap.markers],
            }
        )

    return app


def serve_single(
    traffic_map: TrafficMap,
    *,
    host: str = "127.0.0.1",
    port: int = 8080,
    debug: bool = False,
    title: str | None = DEFAULT_TITLE,
    bike_lanes=None,
):
    app = create_app(traffic_map, title=title, bike_lanes=bike_lanes)
    app.run(host=host, port=int(port), debug=bool(debug))
