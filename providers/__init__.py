"""
Capa de acceso a estaciones.
"""
from .types import Station
from .geojson_provider import (
    FIELD_ALIASES,
    GeoJsonStationProvider,
    LoadError,
    fetch_station_collection,
    station_from_feature,
    stations_from_collection,
)

__all__ = [
    "Station",
    "FIELD_ALIASES",
    "GeoJsonStationProvider",
    "LoadError",
    "fetch_station_collection",
    "station_from_feature",
    "stations_from_collection",
]
