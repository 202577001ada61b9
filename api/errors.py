"""
Errores del cliente de avisos DWD
"""
from typing import Optional, Union

from utils.helpers import truncate_payload


class DwdError(Exception):
    def __init__(self, kind: str, message: str = "", status_code: Optional[int] = None):
        self.kind = kind
        self.status_code = status_code
        super().__init__(message or kind)


class ConfigError(DwdError):
    """Configuración inválida (proxy o patrón de localidad). Fatal al construir el cliente."""

    def __init__(self, message: str):
        super().__init__("config", message)


class FetchError(DwdError):
    """Fallo HTTP (status distinto de 200) o de transporte."""

    def __init__(self, kind: str, message: str = "", status_code: Optional[int] = None):
        super().__init__(kind, message, status_code)


class ProtocolMismatch(DwdError):
    """La respuesta no tiene la forma warnWetter.loadWarnings(...);"""

    def __init__(self, body: Union[bytes, str]):
        self.body = body
        super().__init__("protocol", f"Respuesta con formato inesperado: {truncate_payload(body)!r}")


class ParseError(DwdError):
    """JSON mal formado o con estructura/tipos inesperados."""

    def __init__(self, message: str, payload: Union[bytes, str] = b""):
        self.payload = truncate_payload(payload)
        super().__init__("parse", f"{message}: {self.payload!r}" if self.payload else message)
