"""Tests for the Flask app and the rendered map document."""

import json
import tempfile
import threading
import unittest
from pathlib import Path

from bluetraffic.config import Settings
from bluetraffic.viz.app.single import create_app
from bluetraffic.viz.maps.render import render_map_document
from bluetraffic.viz.overlays.bike_lanes import load_bike_lanes
from bluetraffic.viz.projection import MapView
from bluetraffic.viz.traffic_map import TrafficMap
from bluetraffic.viz.widgets.time_slider import hourly_trip_counts

from helpers import scenario_dataset

LANES = {
    "type": "FeatureCollection",
    "features": [
        {
            "type": "Feature",
            "properties": {"name": "Mass Ave"},
            "geometry": {
                "type": "LineString",
                "coordinates": [[-71.0941, 42.3602], [-71.1000, 42.3650]],
            },
        }
    ],
}


class TestStationsApi(unittest.TestCase):
    def setUp(self):
        self.tm = TrafficMap(scenario_dataset(), view=MapView(width=800, height=600))
        self.client = create_app(self.tm).test_client()

    def test_filtered(self):
        resp = self.client.get("/api/stations?t=500")
        self.assertEqual(resp.status_code, 200)

        payload = resp.get_json()
        self.assertEqual(payload["time_filter"], 500)
        self.assertEqual(payload["label"], "8:20 AM")
        self.assertEqual([s["station_id"] for s in payload["stations"]], ["A", "B", "C"])

        a = payload["stations"][0]
        self.assertEqual((a["departures"], a["arrivals"], a["total_traffic"]), (2, 3, 5))
        self.assertEqual(a["tooltip"], "5 trips (2 departures, 3 arrivals)")
        self.assertAlmostEqual(a["radius"], 50)
        self.assertEqual(a["flow_bucket"], 0.5)

    def test_default_is_any_time(self):
        payload = self.client.get("/api/stations").get_json()
        self.assertEqual(payload["time_filter"], -1)
        self.assertEqual(payload["label"], "(any time)")

    def test_projects_for_requested_view(self):
        resp = self.client.get(
            "/api/stations?t=700&lon=-71.09415&lat=42.36027&zoom=13&width=1000&height=500"
        )
        a = resp.get_json()["stations"][0]
        self.assertAlmostEqual(a["screen_x"], 500)
        self.assertAlmostEqual(a["screen_y"], 250)
        self.assertEqual(a["total_traffic"], 0)
        self.assertEqual(a["radius"], 3)

    def test_request_view_does_not_move_shared_markers(self):
        a = self.tm.layer.get("A")
        before = (a.screen_x, a.screen_y)
        self.client.get("/api/stations?width=1000&height=500")
        self.assertEqual((a.screen_x, a.screen_y), before)

    def test_bad_time_filter(self):
        for q in ("t=1440", "t=-2", "t=abc"):
            resp = self.client.get(f"/api/stations?{q}")
            self.assertEqual(resp.status_code, 400)
            self.assertIn("error", resp.get_json())

    def test_bad_viewport(self):
        resp = self.client.get("/api/stations?width=0")
        self.assertEqual(resp.status_code, 400)

    def test_non_finite_viewport(self):
        for q in ("lon=inf", "lat=-inf", "zoom=nan", "t=500&lon=Infinity"):
            resp = self.client.get(f"/api/stations?{q}")
            self.assertEqual(resp.status_code, 400, q)
            self.assertIn("finite", resp.get_json()["error"])

    def test_default_follows_configured_filter(self):
        self.tm.set_time_filter(500)
        payload = self.client.get("/api/stations").get_json()
        self.assertEqual(payload["time_filter"], 500)
        self.assertEqual(payload["stations"][0]["total_traffic"], 5)

    def test_requests_do_not_change_shared_map(self):
        self.client.get("/api/stations?t=500")
        self.assertEqual(self.tm.time_filter, -1)
        self.assertEqual(self.tm.layer.get("A").radius, 25)

    def test_interleaved_requests_keep_their_own_filter(self):
        app = create_app(self.tm)
        expected = {500: (5, 50), 700: (0, 3)}
        mismatches = []

        def worker(minutes):
            client = app.test_client()
            for t in minutes:
                payload = client.get(f"/api/stations?t={t}").get_json()
                a = payload["stations"][0]
                got = (payload["time_filter"], a["total_traffic"], round(a["radius"], 6))
                want = (t,) + expected[t]
                if got != want:
                    mismatches.append((want, got))

        threads = [
            threading.Thread(target=worker, args=([500, 700] * 20 if i % 2 else [700, 500] * 20,))
            for i in range(4)
        ]
        for th in threads:
            th.start()
        for th in threads:
            th.join()

        self.assertEqual(mismatches, [])


class TestMapPage(unittest.TestCase):
    def setUp(self):
        self.tm = TrafficMap(scenario_dataset())

    def test_index_renders_slider_and_legend(self):
        client = create_app(self.tm, title="Test map").test_client()
        resp = client.get("/?t=500")
        self.assertEqual(resp.status_code, 200)

        html = resp.get_data(as_text=True)
        self.assertIn('id="time-slider"', html)
        self.assertIn('value="500"', html)
        self.assertIn("8:20 AM", html)
        self.assertIn("More departures", html)
        self.assertIn("5 trips (2 departures, 3 arrivals)", html)
        # the page is built from its own snapshot
        self.assertEqual(self.tm.time_filter, -1)

    def test_marker_names_are_exposed_to_slider(self):
        html = render_map_document(self.tm)
        self.assertIn("circle_marker_", html)
        self.assertIn('"A": "circle_marker_', html)

    def test_bike_lanes(self):
        with tempfile.TemporaryDirectory() as d:
            good = Path(d) / "lanes.geojson"
            good.write_text(json.dumps(LANES))
            layers = load_bike_lanes(
                [("Boston bike lanes", good), ("Cambridge bike lanes", Path(d) / "missing.geojson")]
            )

        self.assertEqual([name for name, _ in layers], ["Boston bike lanes"])
        html = render_map_document(self.tm, bike_lanes=layers)
        self.assertIn("geo_json_", html)


class TestHelpers(unittest.TestCase):
    def test_hourly_trip_counts(self):
        per_minute = [0] * 1440
        per_minute[500] = 2
        per_minute[510] = 1
        per_minute[1439] = 4
        counts = hourly_trip_counts(per_minute)
        self.assertEqual(len(counts), 24)
        self.assertEqual(counts[8], 3)
        self.assertEqual(counts[23], 4)
        self.assertEqual(sum(counts), 7)

    def test_settings_from_env(self):
        s = Settings.from_env({"PORT": "10000", "HOST": "0.0.0.0", "TRIPS_CSV": "trips.csv"})
        self.assertEqual(s.port, 10000)
        self.assertEqual(s.host, "0.0.0.0")
        self.assertEqual(s.trips_source, "trips.csv")
        self.assertEqual(s.time_filter, -1)


if __name__ == "__main__":
    unittest.main()
