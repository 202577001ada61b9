"""
Componentes de tarjetas y grillas para visualizacion de avisos
"""

from html import escape
from typing import Iterable, List

import pandas as pd
import streamlit as st

from models import WeatherWarning
from utils.helpers import html_clean, fmt_datetime


# Niveles de aviso del DWD
LEVEL_LABELS = {
    1: "Aviso de tiempo",
    2: "Aviso importante",
    3: "Aviso de temporal",
    4: "Aviso de temporal extremo",
}

LEVEL_COLORS = {
    1: "#ffeb3b",
    2: "#fb8c00",
    3: "#e53935",
    4: "#880e4f",
}


def level_label(level: int) -> str:
    return LEVEL_LABELS.get(level, f"Nivel {level}")


def _altitude_html(w: WeatherWarning) -> str:
    if w.altitude_start is None and w.altitude_end is None:
        return ""
    lo = "—" if w.altitude_start is None else f"{w.altitude_start} m"
    hi = "—" if w.altitude_end is None else f"{w.altitude_end} m"
    return f"<div class='subtitle'>Altitud: {lo} – {hi}</div>"


def warning_card(w: WeatherWarning, dark: bool = False) -> str:
    """
    Genera HTML de una tarjeta de aviso.
    """
    color = LEVEL_COLORS.get(w.level, "#9e9e9e")
    text_color = "#eee" if dark else "#222"
    instruction_html = (
        f"<div class='subtitle'><b>Recomendación:</b> {escape(w.instruction)}</div>"
        if w.instruction else ""
    )

    return html_clean(
        f"""
  <div class="card card-h" style="border-left: 6px solid {color}; color: {text_color};">
    <div class="content-col">
      <div class="card-title">{escape(w.location)} · {escape(level_label(w.level))}</div>
      <div class="card-value">{escape(w.headline or w.event)}</div>
      <div class="subtitle">{fmt_datetime(w.time_start)} → {fmt_datetime(w.time_end)}</div>
      <div class="subtitle">{escape(w.description)}</div>
      {instruction_html}
      {_altitude_html(w)}
    </div>
  </div>
"""
    )


def warnings_dataframe(warnings: Iterable[WeatherWarning]) -> pd.DataFrame:
    """Tabla resumida de avisos, ordenada por nivel y región"""
    rows: List[dict] = [
        {
            "Región": w.location,
            "Evento": w.event,
            "Nivel": w.level,
            "Inicio": w.time_start,
            "Fin": w.time_end,
            "Categoría": w.category_id,
        }
        for w in warnings
    ]
    df = pd.DataFrame(rows, columns=["Región", "Evento", "Nivel", "Inicio", "Fin", "Categoría"])
    if df.empty:
        return df
    return df.sort_values(["Nivel", "Región"], ascending=[False, True]).reset_index(drop=True)


def section_title(text: str):
    """
    Renderiza un titulo de seccion.
    """
    st.markdown(f"<div class='section-title'>{text}</div>", unsafe_allow_html=True)


def render_grid(cards: list, cols: int = 2, extra_class: str = ""):
    """
    Renderiza una grilla de tarjetas.
    """
    cards_html = "".join(cards)
    html = f"<div class='grid grid-{cols} {extra_class}'>{cards_html}</div>"
    st.markdown(html, unsafe_allow_html=True)
