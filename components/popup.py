"""
Popups de estación y gestión del clic sobre un marcador.
"""
import logging
from html import escape
from typing import Any, Callable, Mapping, MutableMapping, Optional

import folium

from config import MSG_NO_IDENTIFIER
from providers.types import Station
from services.climate import fetch_climate
from utils.helpers import fmt_number

logger = logging.getLogger(__name__)

TOOLTIP_SEPARATOR = " — "
POPUP_MAX_WIDTH = 260
LAST_CLICK_SESSION_KEY = "climamap_last_click"


def popup_html(station: Station) -> str:
    """
    Resumen HTML de la estación. Cada línea es opcional: si falta el
    dato, la línea no aparece.
    """
    lines = []
    if station.name:
        lines.append(f"<strong>{escape(station.name)}</strong>")
    if station.station_id:
        lines.append(f"ID: {escape(station.station_id)}")
    if station.elevation_m is not None:
        lines.append(f"Elevation: {escape(fmt_number(station.elevation_m))} m")
    if station.province:
        lines.append(f"Province: {escape(station.province)}")
    if not lines:
        lines.append(escape(station.key))
    return "<br>".join(lines)


def tooltip_text(station: Station) -> str:
    if station.name:
        return f"{station.key}{TOOLTIP_SEPARATOR}{station.name}"
    return station.key


def station_key_from_tooltip(text: Optional[str]) -> Optional[str]:
    """Clave de estación a partir del tooltip devuelto por st_folium."""
    if not text:
        return None
    key = str(text).split(TOOLTIP_SEPARATOR, 1)[0].strip()
    return key or None


def bind_station(station: Station, marker: folium.CircleMarker) -> folium.CircleMarker:
    """Adjunta popup y tooltip; el tooltip identifica la estación al hacer clic."""
    folium.Popup(popup_html(station), max_width=POPUP_MAX_WIDTH).add_to(marker)
    folium.Tooltip(escape(tooltip_text(station))).add_to(marker)
    return marker


def handle_station_click(
    panel,
    station: Station,
    fetcher: Callable = fetch_climate,
) -> bool:
    """
    Reacciona al clic: nombre al panel, placeholder de carga y consulta
    climática si la estación tiene identificador.
    Devuelve True si se lanzó la consulta.
    """
    logger.info(f"Estación seleccionada: {station.key}")
    panel.begin(station.key)
    panel.show_station(station.display_name)
    panel.show_loading()

    if not station.climate_id:
        panel.show_message(MSG_NO_IDENTIFIER)
        return False

    fetcher(panel, station)
    return True


def dispatch_click(
    panel,
    station_map,
    map_state: Optional[Mapping[str, Any]],
    session: MutableMapping[str, Any],
    fetcher: Callable = fetch_climate,
) -> bool:
    """
    Traduce el estado devuelto por st_folium en un clic de estación.

    El contador de clics distingue dos clics seguidos sobre el mismo
    marcador; el tooltip solo sirve para encontrar la estación. Un rerun
    sin clic nuevo devuelve el mismo contador y no hace nada.
    Devuelve True si se atendió un clic nuevo.
    """
    state = map_state or {}
    tooltip = state.get("last_object_clicked_tooltip")
    if not tooltip:
        return False

    count = state.get("last_object_clicked_count")
    click_id = (count, tooltip) if count is not None else tooltip
    if session.get(LAST_CLICK_SESSION_KEY) == click_id:
        return False
    session[LAST_CLICK_SESSION_KEY] = click_id

    station = station_map.station(station_key_from_tooltip(tooltip))
    if station is None:
        logger.warning(f"Tooltip sin estación asociada: {tooltip}")
        return False

    handle_station_click(panel, station, fetcher)
    return True
