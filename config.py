"""
Configuración global de AvisoLabX
"""
import os

# ============================================================
# SERVICIO DE AVISOS DWD
# ============================================================
WARN_URL = "https://www.dwd.de/DWD/warnungen/warnapp/json/warnings.json"
REQUEST_TIMEOUT_SECONDS = 90  # Acota lo que puede bloquear un ciclo de consulta

# Prefijo literal de la respuesta:
# warnWetter.loadWarnings({"time":1627052765000,"warnings":{},...});
RESPONSE_CALLBACK = "warnWetter.loadWarnings"

# ============================================================
# CONFIGURACIÓN DE REFRESCO
# ============================================================
MIN_CHECK_INTERVAL_SECONDS = 30  # Mínimo para no abusar del servicio
CHECK_INTERVAL_SECONDS = max(
    MIN_CHECK_INTERVAL_SECONDS,
    int(os.getenv("AVISOLABX_CHECK_INTERVAL", "300")),
)
PUSH_RETRY_SECONDS = 0.5  # Cada cuánto revisa el bucle si se pidió parar con la cola llena

# ============================================================
# COLA DE SALIDA
# ============================================================
WARN_QUEUE_SIZE = 8

# ============================================================
# FILTROS Y PROXY POR DEFECTO
# ============================================================
DEFAULT_PROXY = os.getenv("AVISOLABX_PROXY", "")
DEFAULT_LOCATIONS = os.getenv("AVISOLABX_LOCATIONS", "")  # Separadas por ";"

# ============================================================
# LOGGING
# ============================================================
LOG_PAYLOAD_CHARS = 512  # Máximo de payload que se incluye en errores

# ============================================================
# PANEL
# ============================================================
DASHBOARD_REFRESH_SECONDS = 60
