"""
Módulo de servicios
"""
from .styling import ELEVATION_BUCKETS, elevation_bucket, station_style, legend_entries
from .climate import (
    ClimateRecord,
    FetchError,
    climate_panel_html,
    climate_query,
    fetch_climate,
    finish_climate_fetch,
    request_climate,
    start_climate_fetch,
)

__all__ = [
    'ELEVATION_BUCKETS',
    'elevation_bucket',
    'station_style',
    'legend_entries',
    'ClimateRecord',
    'FetchError',
    'climate_panel_html',
    'climate_query',
    'fetch_climate',
    'finish_climate_fetch',
    'request_climate',
    'start_climate_fetch',
]
