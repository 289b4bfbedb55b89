"""
Leyenda estática de colores por elevación, como control Leaflet.
"""
import json
from html import escape

import folium
from branca.element import MacroElement, Template

from services.styling import legend_entries

LEGEND_TITLE = "Elevation"


def legend_html() -> str:
    rows = "".join(
        f'<i style="background:{color};width:18px;height:18px;float:left;'
        f'margin-right:8px;opacity:0.7;"></i>{escape(label)}<br>'
        for color, label in legend_entries()
    )
    return f"<strong>{escape(LEGEND_TITLE)}</strong><br>{rows}"


class ElevationLegend(MacroElement):
    """Control no interactivo anclado en una esquina del mapa."""

    def __init__(self, position: str = "bottomright"):
        super().__init__()
        self._name = "ElevationLegend"
        self.position = json.dumps(position)
        self.legend_content = json.dumps(legend_html())
        self._template = Template(
            """
            {% macro script(this, kwargs) %}
            var {{ this.get_name() }} = L.control({position: {{ this.position }}});
            {{ this.get_name() }}.onAdd = function (map) {
                var div = L.DomUtil.create('div', 'legend');
                div.style.cssText = 'line-height:18px;color:#555;background:white;padding:6px 8px;'
                    + 'border-radius:5px;box-shadow:0 0 15px rgba(0,0,0,0.2);font-size:14px;';
                div.innerHTML = {{ this.legend_content }};
                return div;
            };
            {{ this.get_name() }}.addTo({{ this._parent.get_name() }});
            {% endmacro %}
            """
        )


def add_legend(fmap: folium.Map) -> ElevationLegend:
    legend = ElevationLegend()
    legend.add_to(fmap)
    return legend
