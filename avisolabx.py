"""
AvisoLabX - Panel de avisos meteorológicos del DWD
Aplicación principal
"""
import streamlit as st
st.set_page_config(
    page_title="AvisoLabX",
    layout="wide",
    initial_sidebar_state="expanded"
)
import logging
from streamlit_autorefresh import st_autorefresh

# Imports locales
from config import DASHBOARD_REFRESH_SECONDS
from api import ConfigError
from services import ClientRegistry
from utils import age_string, fmt_datetime, datetime_from_epoch_ms
from components import (
    warning_card, warnings_dataframe, level_label,
    section_title, render_grid, render_sidebar
)

# Configurar logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@st.cache_resource
def _get_registry() -> ClientRegistry:
    """Un único cliente de avisos por proceso, compartido entre sesiones"""
    return ClientRegistry()


# ============================================================
# SIDEBAR
# ============================================================

patterns, proxy, dark = render_sidebar()

st.title("AvisoLabX")

if not patterns:
    st.info("Añade al menos un patrón de región en la barra lateral.")
    st.stop()

registry = _get_registry()

try:
    client = registry.get_client(patterns, proxy)
except ConfigError as e:
    st.error(f"Configuración inválida: {e}")
    st.stop()

if client.last_update is None:
    st.caption("Avisos meteorológicos del Deutscher Wetterdienst · esperando la primera consulta")
else:
    updated = fmt_datetime(datetime_from_epoch_ms(client.last_update * 1000))
    st.caption(
        f"Avisos meteorológicos del Deutscher Wetterdienst · datos de {updated} "
        f"(hace {age_string(client.last_update)})"
    )

if st.button("Actualizar"):
    client.refresh()

warnings = registry.collect()

# ============================================================
# AVISOS
# ============================================================

if not warnings:
    st.success("Sin avisos para las regiones configuradas.")
else:
    for level in sorted({w.level for w in warnings}, reverse=True):
        section_title(level_label(level))
        render_grid([warning_card(w, dark=dark) for w in warnings if w.level == level])

    section_title("Resumen")
    st.dataframe(warnings_dataframe(warnings), hide_index=True)

st_autorefresh(interval=DASHBOARD_REFRESH_SECONDS * 1000, key="refresh_avisos")
