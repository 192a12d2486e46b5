# bluetraffic/viz/overlays/stations.py
import folium

STROKE_COLOR = "white"
STROKE_WEIGHT = 1
MARKER_OPACITY = 0.8


def add_station_markers(m, markers):
    """
    Draw one circle per StationMarker.
    Returns {station_id: leaflet variable name} so the time slider can
    restyle circles in place.
    """
    js_names = {}

    for mk in markers:
        popup = "<br>".join(
            [
                f"<b>{mk.station.name or mk.station_id}</b>",
                f"Station: {mk.station_id}",
                mk.tooltip,
            ]
        )

        circle = folium.CircleMarker(
            location=[float(mk.lat), float(mk.lon)],
            radius=float(mk.radius),
            color=STROKE_COLOR,
            weight=STROKE_WEIGHT,
            opacity=MARKER_OPACITY,
            fill=True,
            fill_color=mk.fill_color,
            fill_opacity=MARKER_OPACITY,
            tooltip=mk.tooltip,
            popup=popup,
        )
        circle.add_to(m)
        js_names[mk.station_id] = circle.get_name()

    return js_names
