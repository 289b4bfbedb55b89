"""
Estilo de marcadores por elevación.

Una única tabla de tramos alimenta tanto el estilo de los marcadores
como la leyenda, para que ambos no puedan divergir.
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from config import (
    ELEVATION_LOW_MAX, ELEVATION_MEDIUM_MAX,
    COLOR_LOW, COLOR_MEDIUM, COLOR_HIGH,
    MARKER_RADIUS, MARKER_STROKE_COLOR, MARKER_STROKE_WEIGHT,
    MARKER_OPACITY, MARKER_FILL_OPACITY,
)
from utils.helpers import safe_float

# Elevación asumida cuando la estación no la informa.
MISSING_ELEVATION_DEFAULT = 0.0


@dataclass(frozen=True)
class ElevationBucket:
    key: str
    label: str
    color: str
    lower: Optional[float]   # inclusivo; None = sin límite
    upper: Optional[float]   # None = sin límite
    upper_inclusive: bool = False

    def contains(self, elevation: float) -> bool:
        if self.lower is not None and elevation < self.lower:
            return False
        if self.upper is None:
            return True
        return elevation <= self.upper if self.upper_inclusive else elevation < self.upper


ELEVATION_BUCKETS: Tuple[ElevationBucket, ...] = (
    ElevationBucket("low", f"Low (<{ELEVATION_LOW_MAX}m)", COLOR_LOW,
                    None, ELEVATION_LOW_MAX),
    ElevationBucket("medium", f"Medium ({ELEVATION_LOW_MAX}-{ELEVATION_MEDIUM_MAX}m)", COLOR_MEDIUM,
                    ELEVATION_LOW_MAX, ELEVATION_MEDIUM_MAX, upper_inclusive=True),
    # Alto empieza estrictamente por encima de ELEVATION_MEDIUM_MAX
    ElevationBucket("high", f"High (>{ELEVATION_MEDIUM_MAX}m)", COLOR_HIGH,
                    None, None),
)


def _normalize_elevation(elevation: Any) -> float:
    value = safe_float(elevation)
    return MISSING_ELEVATION_DEFAULT if value is None else value


def elevation_bucket(elevation: Any) -> ElevationBucket:
    """
    Tramo de elevación para una estación.

    Los tramos se evalúan en orden; el último es abierto y recoge todo
    lo que no haya entrado antes, así que la función es total.
    """
    value = _normalize_elevation(elevation)
    for bucket in ELEVATION_BUCKETS:
        if bucket.contains(value):
            return bucket
    return ELEVATION_BUCKETS[-1]


def elevation_color(elevation: Any) -> str:
    return elevation_bucket(elevation).color


def station_style(elevation: Any) -> Dict[str, Any]:
    """Keywords de folium.CircleMarker para una elevación dada (m)."""
    return {
        "radius": MARKER_RADIUS,
        "fill": True,
        "fill_color": elevation_color(elevation),
        "color": MARKER_STROKE_COLOR,
        "weight": MARKER_STROKE_WEIGHT,
        "opacity": MARKER_OPACITY,
        "fill_opacity": MARKER_FILL_OPACITY,
    }


def legend_entries() -> List[Tuple[str, str]]:
    """Pares (color, etiqueta) en el orden de los tramos."""
    return [(bucket.color, bucket.label) for bucket in ELEVATION_BUCKETS]
