"""
Mapa de estaciones: capas base, cluster de marcadores, control de capas
y leyenda, todo en un único objeto dueño del mapa.
"""
import logging
from typing import Dict, Iterable, List, Optional

import folium
from folium.plugins import MarkerCluster

from config import MAP_CENTER, MAP_ZOOM, STATIONS_LAYER_NAME
from providers.geojson_provider import GeoJsonStationProvider, LoadError
from providers.types import Station
from services.styling import station_style

from .legend import add_legend
from .popup import bind_station

logger = logging.getLogger(__name__)

# (nombre visible, tiles, atribución)
BASE_LAYERS = (
    ("OpenStreetMap", "OpenStreetMap", None),
    (
        "Esri World Imagery",
        "https://server.arcgisonline.com/ArcGIS/rest/services/World_Imagery/MapServer/tile/{z}/{y}/{x}",
        "Tiles &copy; Esri",
    ),
)


class StationMap:
    """
    Contexto del mapa. Se construye una vez por renderizado y se pasa
    explícitamente a quien necesite tocar capas.
    """

    def __init__(self, center=MAP_CENTER, zoom: int = MAP_ZOOM):
        self.fmap = folium.Map(location=list(center), zoom_start=zoom, tiles=None, control_scale=True)
        self.base_layers: List[folium.TileLayer] = []
        for idx, (name, tiles, attr) in enumerate(BASE_LAYERS):
            layer = folium.TileLayer(tiles=tiles, name=name, attr=attr, overlay=False, control=True, show=idx == 0)
            layer.add_to(self.fmap)
            self.base_layers.append(layer)

        self.cluster: Optional[MarkerCluster] = None
        self.layer_control: Optional[folium.LayerControl] = None
        self.stations: Dict[str, Station] = {}
        self.legend = add_legend(self.fmap)

    @property
    def loaded(self) -> bool:
        return self.cluster is not None

    def add_stations(self, stations: Iterable[Station]) -> Optional[MarkerCluster]:
        """
        Crea un marcador por estación dentro de un único cluster y
        registra el control de capas. Segunda llamada: no hace nada.
        """
        if self.loaded:
            logger.warning("Estaciones ya cargadas en este mapa; se ignora la segunda carga")
            return self.cluster

        cluster = MarkerCluster(name=STATIONS_LAYER_NAME, overlay=True, control=True)
        count = 0
        for station in stations:
            marker = folium.CircleMarker(location=[station.lat, station.lon], **station_style(station.elevation_m))
            bind_station(station, marker)
            marker.add_to(cluster)
            self.stations[station.key] = station
            count += 1

        # El control de capas debe ir detrás del cluster para poder listarlo
        self._drop_layer_control()
        cluster.add_to(self.fmap)
        self.cluster = cluster
        self.ensure_layer_control()
        logger.info(f"{count} marcadores añadidos al cluster")
        return cluster

    def load(self, source_url: str) -> Optional[MarkerCluster]:
        """Descarga y añade las estaciones. Propaga LoadError."""
        if self.loaded:
            logger.warning("Estaciones ya cargadas en este mapa; se ignora la segunda carga")
            return self.cluster
        try:
            stations = GeoJsonStationProvider(source_url).load_stations()
        except LoadError:
            # Sin estaciones, pero con selector de capas base
            self.ensure_layer_control()
            raise
        return self.add_stations(stations)

    def ensure_layer_control(self) -> folium.LayerControl:
        """Registra el control de capas una sola vez. Debe añadirse el último."""
        if self.layer_control is None:
            self.layer_control = folium.LayerControl(collapsed=False)
            self.layer_control.add_to(self.fmap)
        return self.layer_control

    def _drop_layer_control(self):
        if self.layer_control is not None:
            self.fmap._children.pop(self.layer_control.get_name(), None)
            self.layer_control = None

    def station(self, key: Optional[str]) -> Optional[Station]:
        if not key:
            return None
        return self.stations.get(key)
