# bluetraffic/viz/widgets/time_slider.py
import json

import folium

from bluetraffic.traffic.time_window import ANY_TIME
from bluetraffic.viz.time_label import ANY_TIME_LABEL, format_time

BAR_MAX_PX = 48


def hourly_trip_counts(departures_per_minute):
    """1440 per-minute counts -> 24 per-hour counts."""
    return [sum(departures_per_minute[h * 60:(h + 1) * 60]) for h in range(24)]


def build_time_slider(t_current, hourly_counts, marker_js_names, *, api_url="/api/stations"):
    """
    Time filter slider:
      - range input -1..1439 (-1 = any time)
      - faint per-hour departure histogram behind the track
      - every input event asks the server for fresh station stats and
        restyles the existing circles; nothing is re-rendered
    """

    max_count = max(hourly_counts, default=0)

    bars = []
    for h, c in enumerate(hourly_counts):
        height = int((c / max_count) * BAR_MAX_PX) if max_count > 0 else 0
        bars.append(
            f'<div class="tslider-bar" title="{format_time(h * 60)}: {c:,} departures" '
            f'style="height:{height}px;"></div>'
        )

    if t_current == ANY_TIME:
        label, any_display = "", "block"
    else:
        label, any_display = format_time(t_current), "none"

    names_json = json.dumps(marker_js_names)

    return folium.Element(
        f"""
<style>
#tslider {{
  position: absolute;
  top: 12px;
  right: 16px;
  width: 340px;
  z-index: 1200;
  background: rgba(255,255,255,0.95);
  padding: 10px 14px;
  border-radius: 10px;
  font-size: 12px;
  font-family: sans-serif;
  box-shadow: 0 1px 4px rgba(0,0,0,0.2);
}}

#tslider-head {{
  display: flex;
  justify-content: space-between;
  align-items: baseline;
}}

#tslider-hist {{
  display: flex;
  align-items: flex-end;
  height: {BAR_MAX_PX}px;
  gap: 2px;
  margin-top: 6px;
}}

.tslider-bar {{
  flex: 1;
  background: #9ecae1;
  border-radius: 2px 2px 0 0;
}}

#time-slider {{
  width: 100%;
  margin: 0;
}}

#selected-time {{
  font-weight: 600;
}}

#any-time {{
  color: #777;
  font-style: italic;
}}
</style>

<div id="tslider">
  <div id="tslider-head">
    <label for="time-slider">Filter by time:</label>
    <span>
      <time id="selected-time">{label}</time>
      <em id="any-time" style="display:{any_display};">{ANY_TIME_LABEL}</em>
    </span>
  </div>
  <div id="tslider-hist">{''.join(bars)}</div>
  <input id="time-slider" type="range" min="{ANY_TIME}" max="1439" value="{t_current}">
</div>

<script>
(function() {{
  const MARKERS = {names_json};

  function formatTime(minutes) {{
    const date = new Date(0, 0, 0, 0, minutes);
    return date.toLocaleString("en-US", {{ timeStyle: "short" }});
  }}

  function updateTimeDisplay(t) {{
    const selected = document.getElementById("selected-time");
    const anyTime = document.getElementById("any-time");
    if (t === {ANY_TIME}) {{
      selected.textContent = "";
      anyTime.style.display = "block";
    }} else {{
      selected.textContent = formatTime(t);
      anyTime.style.display = "none";
    }}
  }}

  let pending = 0;

  function updateMarkers(t) {{
    const ticket = ++pending;
    fetch("{api_url}?t=" + t)
      .then((r) => r.json())
      .then((payload) => {{
        if (ticket !== pending) return;
        payload.stations.forEach((s) => {{
          const circle = window[MARKERS[s.station_id]];
          if (!circle) return;
          circle.setRadius(s.radius);
          circle.setStyle({{ fillColor: s.fill_color }});
          circle.setTooltipContent(s.tooltip);
        }});
      }});
  }}

  function onInput(evt) {{
    const t = Number(evt.target.value);
    updateTimeDisplay(t);
    updateMarkers(t);

    const url = new URL(window.location.href);
    url.searchParams.set("t", String(t));
    window.history.replaceState(null, "", url.toString());
  }}

  document.addEventListener("DOMContentLoaded", () => {{
    const slider = document.getElementById("time-slider");
    if (slider) slider.addEventListener("input", onInput);
  }});
}})();
</script>
"""
    )
