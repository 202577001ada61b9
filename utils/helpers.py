"""
Funciones auxiliares generales
"""
import textwrap
import time
from datetime import datetime, timezone
from typing import List, Optional, Union

from config import LOG_PAYLOAD_CHARS


def html_clean(s: str) -> str:
    """Limpia y dedenta HTML"""
    return textwrap.dedent(s).strip()


def normalize_text_input(value) -> str:
    """Normaliza entrada de texto a string"""
    if value is None:
        return ""
    return str(value)


def parse_location_list(raw: str, sep: str = ";") -> List[str]:
    """
    Convierte una lista de patrones en texto a lista de strings.
    Acepta separador explícito y saltos de línea; ignora entradas vacías.
    """
    text = normalize_text_input(raw).replace("\n", sep)
    return [part.strip() for part in text.split(sep) if part.strip()]


def truncate_payload(payload: Union[bytes, str], limit: int = LOG_PAYLOAD_CHARS) -> str:
    """Recorta un payload para incluirlo en logs y mensajes de error"""
    if isinstance(payload, (bytes, bytearray)):
        text = bytes(payload).decode("utf-8", errors="replace")
    else:
        text = normalize_text_input(payload)
    if len(text) <= limit:
        return text
    return f"{text[:limit]}... ({len(text) - limit} caracteres más)"


def datetime_from_epoch_ms(epoch_ms: Optional[int]) -> Optional[datetime]:
    """Convierte epoch en milisegundos a datetime UTC (resolución de segundos)"""
    if epoch_ms is None:
        return None
    return datetime.fromtimestamp(epoch_ms // 1000, tz=timezone.utc)


def fmt_datetime(dt: Optional[datetime]) -> str:
    """Formatea un datetime en hora local"""
    if dt is None:
        return "—"
    return dt.astimezone().strftime("%d-%m-%Y %H:%M")


def age_string(epoch: int) -> str:
    """Calcula la edad de un dato desde epoch"""
    diff_s = int(time.time() - epoch)
    if diff_s < 60:
        return f"{diff_s}s"
    if diff_s < 3600:
        return f"{diff_s // 60}m"
    return f"{diff_s // 3600}h {(diff_s % 3600) // 60}m"
