"""
Tipos de dominio para estaciones meteorológicas.
"""
from dataclasses import dataclass, field
from typing import Dict, Any, Optional


@dataclass(frozen=True)
class Station:
    """Representa una estación normalizada a partir de una feature GeoJSON."""
    key: str
    station_id: str
    name: str
    province: str
    elevation_m: Optional[float]
    climate_id: str
    lat: float
    lon: float
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def display_name(self) -> str:
        return self.name or self.station_id or self.key
