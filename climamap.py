"""
ClimaMapX - Mapa de estaciones climáticas
Aplicación principal
"""
import streamlit as st
st.set_page_config(
    page_title="ClimaMapX",
    layout="wide",
)
import logging
from typing import List

from streamlit_folium import st_folium

# Imports locales
from config import (
    STATIONS_GEOJSON_URL, STATIONS_CACHE_TTL_SECONDS, MAP_HEIGHT_PX,
    CLIMATE_TARGET_YEAR, MSG_LOAD_ERROR,
)
from providers import GeoJsonStationProvider, LoadError, Station
from components import (
    StationMap, get_panel_state, render_panel,
    dispatch_click, handle_station_click,
)
from components.charts import records_frame, temperature_chart, display_table
from services.climate import fetch_climate

# Configurar logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@st.cache_data(ttl=STATIONS_CACHE_TTL_SECONDS, show_spinner=False)
def load_stations_cached(url: str) -> List[Station]:
    """Una sola descarga por URL y hora; los errores no se cachean."""
    return GeoJsonStationProvider(url).load_stations()


# ============================================================
# CABECERA
# ============================================================

st.markdown(
    "<h1 style='text-align:center;margin-bottom:0'>Climate Data Web Map</h1>",
    unsafe_allow_html=True,
)
st.caption(
    f"Weather stations colored by elevation. Click a station to see its most recent "
    f"daily climate observations for {CLIMATE_TARGET_YEAR}."
)

# ============================================================
# MAPA + ESTACIONES
# ============================================================

station_map = StationMap()
try:
    with st.spinner("Loading stations…"):
        stations = load_stations_cached(STATIONS_GEOJSON_URL)
    station_map.add_stations(stations)
except LoadError as e:
    logger.error(f"No se pudieron cargar las estaciones ({e.kind}, status={e.status_code})")
    st.error(MSG_LOAD_ERROR)
finally:
    station_map.ensure_layer_control()

panel = get_panel_state()
map_col, panel_col = st.columns([3, 1])

with panel_col:
    panel_slot = st.empty()


def fetch_with_placeholder(panel, station):
    """Pinta el placeholder de carga antes de la consulta síncrona."""
    render_panel(panel, panel_slot)
    fetch_climate(panel, station)


with map_col:
    map_state = st_folium(
        station_map.fmap,
        height=MAP_HEIGHT_PX,
        use_container_width=True,
        key="station_map",
        returned_objects=["last_object_clicked_tooltip", "last_object_clicked_count"],
    )

dispatch_click(panel, station_map, map_state, st.session_state, fetcher=fetch_with_placeholder)

# ============================================================
# PANEL LATERAL
# ============================================================

with panel_col:
    active = station_map.station(panel.active_station_key)
    if active is not None and st.button("Refresh", key="refresh_climate"):
        handle_station_click(panel, active, fetcher=fetch_with_placeholder)

    render_panel(panel, panel_slot)

    frame = records_frame(panel.records)
    if not frame.empty:
        with st.expander(f"Last {len(frame)} days", expanded=False):
            fig = temperature_chart(frame)
            if fig is not None:
                st.plotly_chart(fig, use_container_width=True, key="recent_days_chart")
            st.dataframe(display_table(frame), hide_index=True, use_container_width=True)

# ============================================================
# PIE
# ============================================================

st.markdown("---")
st.caption(
    "Data: Environment and Climate Change Canada, MSC GeoMet "
    "(climate-stations, climate-daily). Base maps: OpenStreetMap, Esri."
)
