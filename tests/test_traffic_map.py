"""Tests for the TrafficMap pipeline and time labels."""

import unittest

from bluetraffic.data.loaders import Dataset
from bluetraffic.traffic.time_window import ANY_TIME
from bluetraffic.traffic.types import Station
from bluetraffic.viz.projection import MapView
from bluetraffic.viz.time_label import format_time, time_filter_label
from bluetraffic.viz.traffic_map import TrafficMap

from helpers import STATIONS, scenario_dataset, scenario_trips


class TestTrafficMap(unittest.TestCase):
    def setUp(self):
        self.view = MapView(width=800, height=600)
        self.tm = TrafficMap(scenario_dataset(), view=self.view)

    def test_starts_unfiltered_and_positioned(self):
        self.assertEqual(self.tm.time_filter, ANY_TIME)
        self.assertEqual(self.tm.label, "(any time)")
        for m in self.tm.markers:
            self.assertIsNotNone(m.screen_x)
            self.assertIsNotNone(m.screen_y)

        a = self.tm.layer.get("A")
        self.assertEqual(a.traffic.total_traffic, 5)
        # A and B tie for the max: both get the top of the unfiltered range
        self.assertAlmostEqual(a.radius, 25)

    def test_filter_change(self):
        self.tm.set_time_filter(500)
        a = self.tm.layer.get("A")
        self.assertEqual(
            (a.traffic.departures, a.traffic.arrivals, a.traffic.total_traffic),
            (2, 3, 5),
        )
        self.assertAlmostEqual(a.radius, 50)
        self.assertEqual(self.tm.label, "8:20 AM")

    def test_empty_window_uses_filtered_minimum(self):
        self.tm.set_time_filter(700)
        for m in self.tm.markers:
            self.assertEqual(m.traffic.total_traffic, 0)
            self.assertEqual(m.radius, 3)
            self.assertEqual(m.flow_bucket, 0.5)

    def test_back_to_any_time(self):
        self.tm.set_time_filter(700)
        self.tm.set_time_filter(ANY_TIME)
        self.assertEqual(self.tm.layer.get("A").traffic.total_traffic, 5)
        self.assertEqual(self.tm.layer.get("C").traffic.total_traffic, 2)

    def test_view_transform_moves_markers_only(self):
        self.tm.set_time_filter(500)
        a = self.tm.layer.get("A")
        before_xy = (a.screen_x, a.screen_y)
        before_traffic = (a.traffic, a.radius)

        self.view.pan_to(-71.2, 42.4)

        self.assertNotEqual((a.screen_x, a.screen_y), before_xy)
        self.assertEqual((a.traffic, a.radius), before_traffic)
        self.assertEqual(self.tm.time_filter, 500)

    def test_positions_follow_every_transform(self):
        # B is off-center, so zooming moves it
        b = self.tm.layer.get("B")
        xs = []
        for z in (12, 13, 14):
            self.view.zoom_to(z)
            self.assertEqual((b.screen_x, b.screen_y), self.view.project(b.lon, b.lat))
            xs.append(b.screen_x)
        self.assertEqual(len(set(xs)), 3)

    def test_invalid_filter_keeps_state(self):
        self.tm.set_time_filter(500)
        with self.assertRaises(ValueError):
            self.tm.set_time_filter(1440)
        self.assertEqual(self.tm.time_filter, 500)
        self.assertEqual(self.tm.layer.get("A").traffic.total_traffic, 5)

    def test_detach(self):
        a = self.tm.layer.get("A")
        xy = (a.screen_x, a.screen_y)
        self.tm.detach()
        self.view.zoom_to(15)
        self.assertEqual((a.screen_x, a.screen_y), xy)

    def test_index_built_once(self):
        index = self.tm.index
        self.tm.set_time_filter(30)
        self.tm.set_time_filter(1000)
        self.assertIs(self.tm.index, index)
        self.assertEqual(len(index), 6)

    def test_duplicate_station_ids_all_update(self):
        stations = STATIONS + [Station(id="A", lat=42.3601, lon=-71.0942, name="MIT (second dock)")]
        tm = TrafficMap(Dataset(stations=stations, trips=scenario_trips()), view=self.view)
        tm.set_time_filter(500)

        a_markers = [m for m in tm.markers if m.station_id == "A"]
        self.assertEqual(len(a_markers), 2)
        for m in a_markers:
            self.assertEqual(m.traffic.total_traffic, 5)
            self.assertAlmostEqual(m.radius, 50)

    def test_snapshot_leaves_shared_layer_alone(self):
        a = self.tm.layer.get("A")
        before = (a.traffic, a.radius, a.screen_x, a.screen_y)

        snap = self.tm.snapshot(700, MapView(zoom=14, width=1000, height=500).projection)

        self.assertEqual(snap.time_filter, 700)
        self.assertEqual(snap.label, "11:40 AM")
        snap_a = snap.markers[0]
        self.assertIsNot(snap_a, a)
        self.assertEqual(snap_a.traffic.total_traffic, 0)
        self.assertEqual(snap_a.radius, 3)
        self.assertAlmostEqual(snap_a.screen_x, 500)

        self.assertEqual(self.tm.time_filter, ANY_TIME)
        self.assertEqual((a.traffic, a.radius, a.screen_x, a.screen_y), before)

    def test_snapshot_defaults_to_map_view(self):
        snap = self.tm.snapshot(500)
        b = snap.markers[1]
        self.assertEqual((b.screen_x, b.screen_y), self.view.project(b.lon, b.lat))

    def test_snapshot_rejects_bad_filter(self):
        with self.assertRaises(ValueError):
            self.tm.snapshot(1440)


class TestTimeLabel(unittest.TestCase):
    def test_format_time(self):
        self.assertEqual(format_time(0), "12:00 AM")
        self.assertEqual(format_time(500), "8:20 AM")
        self.assertEqual(format_time(720), "12:00 PM")
        self.assertEqual(format_time(725), "12:05 PM")
        self.assertEqual(format_time(780), "1:00 PM")
        self.assertEqual(format_time(1439), "11:59 PM")

    def test_filter_label(self):
        self.assertEqual(time_filter_label(ANY_TIME), "(any time)")
        self.assertEqual(time_filter_label(65), "1:05 AM")


if __name__ == "__main__":
    unittest.main()
