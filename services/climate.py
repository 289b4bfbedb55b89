"""
Servicio de datos climáticos diarios (MSC GeoMet, colección climate-daily).

Flujo por clic:
  start_climate_fetch  -> marca el panel y reserva un token
  request_climate      -> GET a la API
  finish_climate_fetch -> pinta el panel solo si el token sigue vigente
"""
import logging
from dataclasses import dataclass
from html import escape
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

import requests

from config import (
    CLIMATE_API_BASE, CLIMATE_TIMEOUT_SECONDS, CLIMATE_TARGET_YEAR,
    CLIMATE_RECORD_LIMIT, CLIMATE_SORT, HTTP_USER_AGENT,
    MSG_NO_DATA, MSG_FETCH_ERROR,
)
from utils.helpers import fmt_number, is_blank

logger = logging.getLogger(__name__)


class FetchError(Exception):
    def __init__(self, kind: str, status_code: Optional[int] = None):
        self.kind = kind
        self.status_code = status_code
        super().__init__(kind)


# (atributo, clave de la API, etiqueta, unidad)
CLIMATE_FIELDS: Tuple[Tuple[str, str, str, str], ...] = (
    ("date", "LOCAL_DATE", "Date", ""),
    ("max_temp", "MAX_TEMPERATURE", "Max Temp", "°C"),
    ("min_temp", "MIN_TEMPERATURE", "Min Temp", "°C"),
    ("mean_temp", "MEAN_TEMPERATURE", "Mean Temp", "°C"),
    ("total_precip", "TOTAL_PRECIPITATION", "Total Precip", "mm"),
    ("total_rain", "TOTAL_RAIN", "Total Rain", "mm"),
    ("total_snow", "TOTAL_SNOW", "Total Snow", "cm"),
)


@dataclass(frozen=True)
class ClimateRecord:
    date: Optional[str] = None
    max_temp: Optional[float] = None
    min_temp: Optional[float] = None
    mean_temp: Optional[float] = None
    total_precip: Optional[float] = None
    total_rain: Optional[float] = None
    total_snow: Optional[float] = None

    @classmethod
    def from_properties(cls, props: Dict[str, Any]) -> "ClimateRecord":
        values = {}
        for attr, api_key, _, _ in CLIMATE_FIELDS:
            raw = props.get(api_key)
            values[attr] = None if is_blank(raw) else raw
        return cls(**values)

    def present_fields(self) -> List[Tuple[str, str, Any]]:
        """(etiqueta, unidad, valor) de los campos informados, en orden fijo."""
        out = []
        for attr, _, label, unit in CLIMATE_FIELDS:
            value = getattr(self, attr)
            if value is not None:
                out.append((label, unit, value))
        return out


@dataclass(frozen=True)
class ClimateRequest:
    token: int
    station_key: str
    climate_id: str
    year: int


def climate_query(climate_id: str, year: int = CLIMATE_TARGET_YEAR) -> Tuple[str, Dict[str, Any]]:
    """URL y parámetros de la consulta; el orden de los parámetros es fijo."""
    url = f"{CLIMATE_API_BASE}/items"
    params = {
        "limit": CLIMATE_RECORD_LIMIT,
        "sortby": CLIMATE_SORT,
        "CLIMATE_IDENTIFIER": climate_id,
        "LOCAL_YEAR": year,
    }
    return url, params


def request_climate(climate_id: str, year: int = CLIMATE_TARGET_YEAR) -> Dict[str, Any]:
    """
    Lanza una consulta a la API climática.
    Lanza FetchError ante error de red, HTTP no exitoso o JSON inválido.
    """
    url, params = climate_query(climate_id, year)
    headers = {
        "User-Agent": HTTP_USER_AGENT,
        "Accept": "application/geo+json, application/json",
    }
    logger.info(f"Consultando datos climáticos: {climate_id} ({year})")
    try:
        response = requests.get(url, params=params, headers=headers, timeout=CLIMATE_TIMEOUT_SECONDS)
    except requests.RequestException as e:
        logger.warning(f"Error de red en climate-daily para {climate_id}: {e}")
        raise FetchError("network") from e

    if not response.ok:
        logger.warning(f"HTTP {response.status_code} en climate-daily para {climate_id}")
        raise FetchError("http", status_code=response.status_code)

    try:
        payload = response.json()
    except ValueError as e:
        logger.warning(f"Respuesta no JSON en climate-daily para {climate_id}")
        raise FetchError("invalid_json") from e
    if not isinstance(payload, dict):
        raise FetchError("invalid_json")
    return payload


def parse_climate_records(payload: Dict[str, Any]) -> List[ClimateRecord]:
    records = []
    for feature in payload.get("features") or []:
        if not isinstance(feature, dict):
            continue
        props = feature.get("properties")
        if isinstance(props, dict):
            records.append(ClimateRecord.from_properties(props))
    return records


def _format_value(value: Any, unit: str) -> str:
    if not unit:
        # LOCAL_DATE llega como "2025-03-14 00:00:00"
        return escape(str(value).split(" ")[0])
    return f"{escape(fmt_number(value))} {unit}"


def no_data_html(year: int = CLIMATE_TARGET_YEAR) -> str:
    return f"<p>{escape(MSG_NO_DATA.format(year=year))}</p>"


def error_html() -> str:
    return f"<p>{escape(MSG_FETCH_ERROR)}</p>"


def climate_panel_html(records: Sequence[ClimateRecord], year: int = CLIMATE_TARGET_YEAR) -> str:
    """HTML del panel con el registro más reciente (el primero)."""
    if not records:
        return no_data_html(year)

    fields = records[0].present_fields()
    if not fields:
        return no_data_html(year)

    lines = [
        f"<p><strong>{escape(label)}:</strong> {_format_value(value, unit)}</p>"
        for label, unit, value in fields
    ]
    return "\n".join(lines)


def start_climate_fetch(panel, station, year: int = CLIMATE_TARGET_YEAR) -> ClimateRequest:
    """Reserva un token en el panel y deja el placeholder de carga."""
    token = panel.begin(station.key)
    panel.show_loading()
    return ClimateRequest(token=token, station_key=station.key, climate_id=station.climate_id, year=year)


def finish_climate_fetch(
    panel,
    request: ClimateRequest,
    payload: Optional[Dict[str, Any]] = None,
    error: Optional[Exception] = None,
) -> bool:
    """
    Pinta el resultado de una consulta en el panel.
    Devuelve False si la respuesta llegó tarde y se descartó.
    """
    if error is not None:
        return panel.commit(request.token, error_html())

    records = parse_climate_records(payload or {})
    logger.info(f"{len(records)} registros para {request.climate_id}")
    return panel.commit(request.token, climate_panel_html(records, request.year), records=records)


def fetch_climate(
    panel,
    station,
    request: Callable[..., Dict[str, Any]] = request_climate,
    year: int = CLIMATE_TARGET_YEAR,
) -> bool:
    """Consulta completa para una estación. Nunca propaga FetchError."""
    pending = start_climate_fetch(panel, station, year)
    try:
        payload = request(pending.climate_id, year)
    except FetchError as e:
        return finish_climate_fetch(panel, pending, error=e)
    return finish_climate_fetch(panel, pending, payload=payload)
