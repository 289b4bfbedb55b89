"""
Carga de estaciones desde una FeatureCollection GeoJSON remota.

Cada feature se normaliza una sola vez a `Station` usando una tabla
explícita de claves alternativas por campo lógico.
"""

import logging
from dataclasses import replace
from typing import Any, Dict, List, Optional, Tuple

import requests

from config import HTTP_USER_AGENT, STATIONS_TIMEOUT_SECONDS
from utils.helpers import first_present, safe_float

from .types import Station

logger = logging.getLogger(__name__)


# Claves aceptadas por campo, en orden de prioridad.
FIELD_ALIASES: Dict[str, Tuple[str, ...]] = {
    "station_id": ("STN_ID", "stn_id", "id"),
    "name": ("STATION_NAME", "name"),
    "province": ("PROV_STATE_TERR_CODE", "province"),
    "elevation": ("ELEVATION", "elevation"),
    "climate_id": ("CLIMATE_IDENTIFIER", "climate_identifier"),
}


class LoadError(Exception):
    def __init__(self, kind: str, status_code: Optional[int] = None):
        self.kind = kind
        self.status_code = status_code
        super().__init__(kind)


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _point_coords(feature: Dict[str, Any]) -> Optional[Tuple[float, float]]:
    """Devuelve (lat, lon) de una geometría Point válida."""
    geometry = feature.get("geometry")
    if not isinstance(geometry, dict) or geometry.get("type") != "Point":
        return None
    coords = geometry.get("coordinates")
    if not isinstance(coords, (list, tuple)) or len(coords) < 2:
        return None
    lon = safe_float(coords[0])
    lat = safe_float(coords[1])
    if lat is None or lon is None:
        return None
    if not (-90.0 <= lat <= 90.0 and -180.0 <= lon <= 180.0):
        return None
    return lat, lon


def station_from_feature(feature: Dict[str, Any], fallback_key: str) -> Optional[Station]:
    """Normaliza una feature GeoJSON. None si no es un punto utilizable."""
    if not isinstance(feature, dict):
        return None
    coords = _point_coords(feature)
    if coords is None:
        return None

    props = feature.get("properties")
    if not isinstance(props, dict):
        props = {}

    station_id = _text(first_present(props, FIELD_ALIASES["station_id"]))
    if not station_id:
        # El id de la feature GeoJSON (fuera de properties) como último recurso
        station_id = _text(feature.get("id"))

    lat, lon = coords
    return Station(
        key=station_id or fallback_key,
        station_id=station_id,
        name=_text(first_present(props, FIELD_ALIASES["name"])),
        province=_text(first_present(props, FIELD_ALIASES["province"])),
        elevation_m=safe_float(first_present(props, FIELD_ALIASES["elevation"])),
        climate_id=_text(first_present(props, FIELD_ALIASES["climate_id"])),
        lat=lat,
        lon=lon,
        metadata=props,
    )


def stations_from_collection(collection: Dict[str, Any]) -> List[Station]:
    """Convierte una FeatureCollection en estaciones con claves únicas."""
    features = collection.get("features") or []
    stations: List[Station] = []
    seen: Dict[str, int] = {}
    skipped = 0

    for idx, feature in enumerate(features):
        station = station_from_feature(feature, fallback_key=f"feature-{idx}")
        if station is None:
            skipped += 1
            continue

        count = seen.get(station.key, 0)
        seen[station.key] = count + 1
        if count:
            station = replace(station, key=f"{station.key}#{count}")
        stations.append(station)

    if skipped:
        logger.warning(f"{skipped} features sin geometría Point válida descartadas")
    logger.info(f"Estaciones normalizadas: {len(stations)}")
    return stations


def fetch_station_collection(url: str) -> Dict[str, Any]:
    """
    Descarga la FeatureCollection de estaciones.
    Lanza LoadError si la respuesta falla o no es GeoJSON válido.
    """
    headers = {
        "User-Agent": HTTP_USER_AGENT,
        "Accept": "application/geo+json, application/json",
    }
    logger.info(f"Descargando estaciones: {url}")
    try:
        response = requests.get(url, headers=headers, timeout=STATIONS_TIMEOUT_SECONDS)
    except requests.RequestException as e:
        logger.error(f"Error de red al descargar estaciones: {e}")
        raise LoadError("network") from e

    if not response.ok:
        logger.error(f"HTTP {response.status_code} al descargar estaciones")
        raise LoadError("http", status_code=response.status_code)

    try:
        payload = response.json()
    except ValueError as e:
        logger.error("Respuesta de estaciones no es JSON")
        raise LoadError("invalid_json") from e

    if not isinstance(payload, dict) or payload.get("type") != "FeatureCollection":
        logger.error("Respuesta de estaciones no es una FeatureCollection")
        raise LoadError("not_feature_collection")
    if not isinstance(payload.get("features"), list):
        raise LoadError("not_feature_collection")
    return payload


class GeoJsonStationProvider:
    def __init__(self, url: str):
        self.url = url

    def load_stations(self) -> List[Station]:
        return stations_from_collection(fetch_station_collection(self.url))
