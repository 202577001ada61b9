"""
Componentes de sidebar
"""
from typing import List, Tuple

import streamlit as st

from config import DEFAULT_LOCATIONS, DEFAULT_PROXY
from utils.helpers import normalize_text_input, parse_location_list


def render_sidebar() -> Tuple[List[str], str, bool]:
    """
    Renderiza la configuración del cliente de avisos.

    Returns:
        (patrones de localidad, URL de proxy, tema oscuro)
    """
    with st.sidebar:
        st.markdown("### Regiones")
        raw_patterns = st.text_area(
            "Patrones (uno por línea, expresiones regulares)",
            value="\n".join(parse_location_list(DEFAULT_LOCATIONS)),
            key="avisos_patterns",
        )
        proxy = st.text_input("Proxy (opcional)", value=DEFAULT_PROXY, key="avisos_proxy")
        dark = st.toggle("Tema oscuro", value=False, key="avisos_dark")

    return parse_location_list(raw_patterns), normalize_text_input(proxy).strip(), dark
