# bluetraffic/viz/widgets/legend.py
import folium

from bluetraffic.traffic.scales import flow_color

LEGEND_ITEMS = [
    (1.0, "More departures"),
    (0.5, "Balanced"),
    (0.0, "More arrivals"),
]


def build_legend_widget():
    """
    Floating legend for the three flow colors.
    """
    rows = "".join(
        f'<div><span class="legend-dot" style="background:{flow_color(b)}"></span> {text}</div>'
        for b, text in LEGEND_ITEMS
    )

    return folium.Element(
        f"""
<style>
#map-legend {{
  position: absolute;
  bottom: 24px;
  left: 16px;
  background: rgba(255,255,255,0.95);
  padding: 8px 12px;
  border-radius: 10px;
  font-size: 12px;
  font-family: sans-serif;
  z-index: 1200;
}}

.legend-dot {{
  width: 10px;
  height: 10px;
  border-radius: 50%;
  display: inline-block;
  margin-right: 6px;
}}
</style>

<div id="map-legend">
  <div style="font-weight:600;margin-bottom:4px;">Legend:</div>
  {rows}
</div>
"""
    )
