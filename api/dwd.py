"""
Cliente HTTP del servicio de avisos del DWD (Deutscher Wetterdienst).

El servicio no devuelve JSON puro sino una llamada JavaScript:
    warnWetter.loadWarnings({"time":1627052765000,"warnings":{},...});
`unwrap_response` recupera el JSON interior y `DwdFetcher` hace la petición.
"""
import logging
import re
from typing import Optional, Union
from urllib.parse import urlsplit

import requests

from config import RESPONSE_CALLBACK, REQUEST_TIMEOUT_SECONDS, WARN_URL
from utils.helpers import truncate_payload
from .errors import ConfigError, FetchError, ProtocolMismatch

logger = logging.getLogger(__name__)

RESP_PATTERN = re.compile(
    rb"^" + re.escape(RESPONSE_CALLBACK.encode("ascii")) + rb"\((.*)\);\s*$",
    re.DOTALL,
)

# requests sin el extra [socks] solo sabe usar proxies HTTP
PROXY_SCHEMES = ("http", "https")


def unwrap_response(body: Union[bytes, str]) -> bytes:
    """
    Extrae el JSON de la respuesta del DWD.
    Si el cuerpo no tiene exactamente la forma esperada lanza ProtocolMismatch.
    """
    if isinstance(body, str):
        body = body.encode("utf-8")

    match = RESP_PATTERN.match(body)
    if match is None:
        logger.error(f"Respuesta de {WARN_URL} sin el formato esperado: {truncate_payload(body)!r}")
        raise ProtocolMismatch(body)

    return match.group(1)


def validate_proxy(proxy: str) -> str:
    """Comprueba que la URL del proxy sea utilizable. Lanza ConfigError si no."""
    try:
        parts = urlsplit(proxy)
        # Acceder al puerto valida que sea numérico y esté en rango
        parts.port
    except ValueError as e:
        raise ConfigError(f"URL de proxy inválida {proxy!r}: {e}")

    if parts.scheme.lower() not in PROXY_SCHEMES:
        raise ConfigError(f"Esquema de proxy no soportado en {proxy!r}")
    if not parts.hostname:
        raise ConfigError(f"URL de proxy sin host: {proxy!r}")

    return proxy


class DwdFetcher:
    """
    Descarga el documento de avisos. No reintenta: el siguiente intento
    lo hace el bucle de consulta en su próximo ciclo.
    """

    def __init__(
        self,
        proxy: Optional[str] = None,
        url: str = WARN_URL,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ):
        self.url = url
        self.timeout = timeout
        self.proxy = validate_proxy(proxy) if proxy else None
        # Solo se cierra la sesión si la creó el propio fetcher
        self._owns_session = session is None
        self.session = session if session is not None else requests.Session()

        if self.proxy:
            self.session.proxies.update({"http": self.proxy, "https": self.proxy})
            logger.info(f"Usando proxy {self.proxy} para {self.url}")

    def fetch(self) -> bytes:
        """Petición GET al servicio. Devuelve el cuerpo crudo si el status es 200."""
        logger.debug(f"Consultando avisos ({self.url})")

        try:
            r = self.session.get(self.url, timeout=self.timeout)
        except requests.Timeout as e:
            logger.error(f"Timeout consultando {self.url}: {e}")
            raise FetchError("timeout", f"Timeout consultando {self.url}: {e}")
        except requests.RequestException as e:
            logger.error(f"Error de red consultando {self.url}: {e}")
            raise FetchError("network", f"Error de red consultando {self.url}: {e}")

        if r.status_code != 200:
            logger.warning(f"HTTP {r.status_code} en {self.url}")
            raise FetchError("http", f"HTTP {r.status_code} en {self.url}", r.status_code)

        return r.content

    def fetch_body(self) -> bytes:
        """Descarga y desenvuelve: devuelve directamente el JSON"""
        return unwrap_response(self.fetch())

    def close(self):
        """Libera la sesión HTTP si es propia; una sesión inyectada la cierra quien la creó"""
        if self._owns_session:
            self.session.close()
