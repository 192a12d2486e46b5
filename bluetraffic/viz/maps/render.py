# bluetraffic/viz/maps/render.py
import json

import folium

from bluetraffic.config import CENTER_LAT, CENTER_LON, MAX_ZOOM, MIN_ZOOM, ZOOM_START
from bluetraffic.viz.overlays.bike_lanes import add_bike_lanes
from bluetraffic.viz.overlays.stations import add_station_markers
from bluetraffic.viz.widgets.legend import build_legend_widget
from bluetraffic.viz.widgets.time_slider import build_time_slider, hourly_trip_counts


def render_map_document(
    traffic_map,
    *,
    title: str | None = None,
    bike_lanes=None,
    api_url: str = "/api/stations",
    snapshot=None,
):
    """
    Single place that assembles the full Folium map HTML document.

    Draws `snapshot` when given, otherwise the TrafficMap's current
    time filter and markers.
    """
    if snapshot is not None:
        markers, time_filter = snapshot.markers, snapshot.time_filter
    else:
        markers, time_filter = traffic_map.markers, traffic_map.time_filter

    m = folium.Map(
        location=[CENTER_LAT, CENTER_LON],
        zoom_start=ZOOM_START,
        min_zoom=MIN_ZOOM,
        max_zoom=MAX_ZOOM,
        tiles="cartodbpositron",
        prefer_canvas=False,
    )

    # bike network under the stations
    if bike_lanes:
        add_bike_lanes(m, bike_lanes)

    # stations
    js_names = add_station_markers(m, markers)

    # time slider (widget)
    dep_per_minute, _arr = traffic_map.index.bucket_counts()
    m.get_root().html.add_child(
        build_time_slider(
            time_filter,
            hourly_trip_counts(dep_per_minute),
            js_names,
            api_url=api_url,
        )
    )

    # legend (widget)
    m.get_root().html.add_child(build_legend_widget())

    title_js = ""
    if title:
        title_js = (
            "const t=document.createElement('div');t.id='map-title';"
            f"t.textContent={json.dumps(title)};wrap.appendChild(t);"
        )

    # title + wrap so widgets sit on-map
    m.get_root().html.add_child(
        folium.Element(
            f"""
<style>
#map-wrap {{
  position: relative;
  width: 100%;
}}
#map-wrap .leaflet-container {{
  width: 100% !important;
  height: 85vh !important;
  min-height: 520px;
}}
#map-title {{
  position: absolute;
  top: 12px;
  left: 50%;
  transform: translateX(-50%);
  background: rgba(255,255,255,0.95);
  padding: 6px 16px;
  border-radius: 999px;
  font-size: 14px;
  font-weight: 600;
  z-index: 1300;
}}
</style>

<script>
document.addEventListener("DOMContentLoaded", () => {{
  const mapEl = document.querySelector(".leaflet-container");
  if (!mapEl) return;

  let wrap = document.getElementById("map-wrap");
  if (!wrap) {{
    wrap = document.createElement("div");
    wrap.id = "map-wrap";
    mapEl.parentNode.insertBefore(wrap, mapEl);
    wrap.appendChild(mapEl);
  }}

  {title_js}

  ["tslider", "map-legend"].forEach((id) => {{
    const el = document.getElementById(id);
    if (el) wrap.appendChild(el);
  }});
}});
</script>
"""
        )
    )

    return m.get_root().render()
