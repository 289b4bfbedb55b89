"""
Vista de los últimos días devueltos por la API climática
"""
from dataclasses import asdict
from typing import Optional, Sequence

import pandas as pd
import plotly.graph_objects as go

from services.climate import CLIMATE_FIELDS

NUMERIC_COLUMNS = [attr for attr, _, _, unit in CLIMATE_FIELDS if unit]
COLUMN_LABELS = {
    attr: f"{label} ({unit})" if unit else label
    for attr, _, label, unit in CLIMATE_FIELDS
}


def records_frame(records: Sequence) -> pd.DataFrame:
    """DataFrame con un registro por fila, en orden cronológico."""
    columns = [attr for attr, _, _, _ in CLIMATE_FIELDS]
    if not records:
        return pd.DataFrame(columns=columns)

    df = pd.DataFrame([asdict(r) for r in records], columns=columns)
    df["date"] = pd.to_datetime(df["date"], errors="coerce")
    for col in NUMERIC_COLUMNS:
        df[col] = pd.to_numeric(df[col], errors="coerce")
    return df.dropna(subset=["date"]).sort_values("date").reset_index(drop=True)


def temperature_chart(df: pd.DataFrame) -> Optional[go.Figure]:
    if df.empty:
        return None

    fig = go.Figure()
    fig.add_bar(
        x=df["date"],
        y=df["total_precip"],
        name=COLUMN_LABELS["total_precip"],
        marker_color="#4dabf7",
        opacity=0.6,
        yaxis="y2",
    )
    for col, color in (("max_temp", "#d73027"), ("mean_temp", "#636363"), ("min_temp", "#4575b4")):
        fig.add_scatter(
            x=df["date"],
            y=df[col],
            name=COLUMN_LABELS[col],
            mode="lines+markers",
            line=dict(color=color, width=2),
            marker=dict(size=5),
        )

    fig.update_layout(
        template="plotly_white",
        height=320,
        margin=dict(t=20, r=10, l=10, b=20),
        legend=dict(orientation="h", yanchor="bottom", y=1.02, x=0),
        hovermode="x unified",
        yaxis=dict(title="°C"),
        yaxis2=dict(title="mm", overlaying="y", side="right", showgrid=False),
    )
    return fig


def display_table(df: pd.DataFrame) -> pd.DataFrame:
    """Copia con etiquetas legibles para st.dataframe."""
    out = df.copy()
    if not out.empty:
        out["date"] = out["date"].dt.strftime("%Y-%m-%d")
    return out.rename(columns=COLUMN_LABELS)
