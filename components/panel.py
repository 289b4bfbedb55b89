"""
Panel lateral de información de la estación.

Dos huecos HTML: nombre de la estación y datos climáticos. Cada consulta
reserva un token creciente; solo la última puede escribir resultados.
"""
import logging
from html import escape
from typing import List, Optional, Sequence

import streamlit as st

from config import PANEL_DEFAULT_NAME, PANEL_DEFAULT_CONTENT, MSG_LOADING

logger = logging.getLogger(__name__)

NAME_SLOT_ID = "station-name"
CONTENT_SLOT_ID = "climate-data"
_SESSION_KEY = "climamap_panel"


class PanelState:
    def __init__(self):
        self.name_html = escape(PANEL_DEFAULT_NAME)
        self.content_html = f"<p>{escape(PANEL_DEFAULT_CONTENT)}</p>"
        self.request_seq = 0
        self.active_station_key: Optional[str] = None
        self.records: List = []

    def begin(self, station_key: str) -> int:
        """Nueva selección: invalida cualquier consulta anterior."""
        self.request_seq += 1
        self.active_station_key = station_key
        self.records = []
        return self.request_seq

    def is_current(self, token: int) -> bool:
        return token == self.request_seq

    def commit(self, token: int, content_html: str, records: Sequence = ()) -> bool:
        if not self.is_current(token):
            logger.info(f"Respuesta descartada (token {token}, vigente {self.request_seq})")
            return False
        self.content_html = content_html
        self.records = list(records)
        return True

    def show_station(self, name: str):
        self.name_html = escape(name)

    def show_loading(self):
        self.content_html = f"<p><em>{escape(MSG_LOADING)}</em></p>"

    def show_message(self, text: str):
        self.content_html = f"<p>{escape(text)}</p>"


def get_panel_state() -> PanelState:
    """PanelState único por sesión de Streamlit."""
    if _SESSION_KEY not in st.session_state:
        st.session_state[_SESSION_KEY] = PanelState()
    return st.session_state[_SESSION_KEY]


def render_panel(panel: PanelState, target=None):
    """
    Pinta los dos huecos del panel. `target` es un st.empty() para poder
    repintar en el mismo sitio (placeholder de carga y resultado).
    """
    slot = target if target is not None else st
    slot.markdown(panel_html(panel), unsafe_allow_html=True)


def panel_html(panel: PanelState) -> str:
    # Sin sangría: markdown trataría las líneas sangradas como bloque de código
    return "".join([
        '<div class="info-panel">',
        f'<h2 id="{NAME_SLOT_ID}">{panel.name_html}</h2>',
        f'<div id="{CONTENT_SLOT_ID}">{panel.content_html}</div>',
        "</div>",
    ])
