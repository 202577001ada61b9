"""
Registro del cliente de avisos compartido por todas las sesiones del panel.
"""
import logging
import threading
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional

from models import WeatherWarning, sort_warnings
from .client import ClientState, WarningClient

logger = logging.getLogger(__name__)


class ClientRegistry:
    """
    Mantiene un único WarningClient por proceso y los avisos vigentes que
    ha entregado, sin duplicados (clave `unique_id`).

    Al cambiar la configuración se construye el cliente nuevo antes de
    detener el anterior: si la configuración es inválida sigue el actual.
    """

    def __init__(self, client_factory=WarningClient):
        self._factory = client_factory
        self._lock = threading.Lock()
        self._client: Optional[WarningClient] = None
        self._key = None
        self._warnings: Dict[str, WeatherWarning] = {}

    def get_client(self, patterns: Iterable[str], proxy: str = "") -> WarningClient:
        key = (tuple(patterns), proxy or "")
        with self._lock:
            current = self._client
            if current is not None and self._key == key and current.state is ClientState.ACTIVE:
                return current

            client = self._factory(list(key[0]), proxy=proxy or None)

            if current is not None:
                logger.info("Configuración cambiada; deteniendo el cliente anterior")
                current.stop()

            client.start()
            self._client = client
            self._key = key
            self._warnings = {}
            return client

    def collect(self, now: Optional[datetime] = None) -> List[WeatherWarning]:
        """Vacía la cola del cliente y devuelve los avisos vigentes ordenados"""
        with self._lock:
            if self._client is not None:
                for w in self._client.warn_queue.drain():
                    self._warnings[w.unique_id] = w

            now = now or datetime.now(timezone.utc)
            for uid in [uid for uid, w in self._warnings.items() if w.is_expired(now)]:
                del self._warnings[uid]

            return sort_warnings(self._warnings.values())

    def shutdown(self):
        with self._lock:
            if self._client is not None:
                self._client.stop()
            self._client = None
            self._key = None
            self._warnings = {}
