"""
Módulo de componentes visuales
"""
from .legend import ElevationLegend, add_legend, legend_html
from .panel import PanelState, get_panel_state, render_panel
from .popup import bind_station, dispatch_click, handle_station_click, popup_html, station_key_from_tooltip
from .station_map import StationMap

__all__ = [
    'ElevationLegend',
    'add_legend',
    'legend_html',
    'PanelState',
    'get_panel_state',
    'render_panel',
    'bind_station',
    'dispatch_click',
    'handle_station_click',
    'popup_html',
    'station_key_from_tooltip',
    'StationMap',
]
