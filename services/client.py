"""
Cliente de avisos del DWD: bucle de consulta en segundo plano.

Cada ciclo descarga el documento, lo desenvuelve y lo parsea, descarta
documentos ya vistos (por su marca `time`) y mete en `warn_queue` los avisos
cuyas regiones encajan con los patrones configurados.
"""
import logging
import queue
import threading
import time
from enum import Enum
from typing import Iterable, List, Optional, Union

from api.dwd import DwdFetcher, unwrap_response
from api.errors import DwdError
from config import CHECK_INTERVAL_SECONDS, PUSH_RETRY_SECONDS, WARN_QUEUE_SIZE
from models import WeatherWarning
from utils.helpers import fmt_datetime
from .matcher import LocationMatcher
from .parser import parse_weather_info
from .warn_queue import WarnQueue

logger = logging.getLogger(__name__)

_CMD_REFRESH = "refresh"
_CMD_STOP = "stop"


class ClientState(Enum):
    IDLE = "idle"
    ACTIVE = "active"
    STOPPED = "stopped"


class WarningClient:
    """
    Une descarga, parseo y filtro en un hilo que consulta periódicamente.

    `start()` lanza el hilo, `stop()` lo detiene y espera a que termine,
    `refresh()` pide un ciclo inmediato. Al salir, el hilo cierra `warn_queue`.
    Un cliente detenido no se puede volver a arrancar.
    """

    def __init__(
        self,
        locations: Iterable[str],
        proxy: Optional[str] = None,
        interval: float = CHECK_INTERVAL_SECONDS,
        queue_size: int = WARN_QUEUE_SIZE,
        fetcher=None,
        initial_poll: bool = True,
    ):
        self.matcher = LocationMatcher(locations)
        self._owns_fetcher = fetcher is None
        self.fetcher = fetcher if fetcher is not None else DwdFetcher(proxy)
        self.interval = interval
        self.initial_poll = initial_poll
        self.warn_queue = WarnQueue(queue_size)

        self._control = queue.Queue()
        self._lock = threading.Lock()
        self._active = False
        self._state = ClientState.IDLE
        self._thread: Optional[threading.Thread] = None
        # Solo lo escribe el hilo del bucle
        self._last_stamp = 0

    # --------------------------------------------------------
    # Consultas puntuales (no tocan el estado del bucle)
    # --------------------------------------------------------

    def fetch_warning(self) -> bytes:
        """Descarga el documento y devuelve el JSON interior"""
        return unwrap_response(self.fetcher.fetch())

    def process_warnings(self, raw: Union[bytes, str]) -> List[WeatherWarning]:
        """Parsea el JSON y devuelve los avisos que encajan con los patrones"""
        info = parse_weather_info(raw)
        return self.matcher.filter_info(info)

    def get_warnings(self) -> List[WeatherWarning]:
        """Consulta el DWD ahora mismo y devuelve los avisos relevantes"""
        try:
            return self.process_warnings(self.fetch_warning())
        except DwdError as e:
            logger.error(f"No se pudieron obtener los avisos: {e}")
            raise

    # --------------------------------------------------------
    # Control del bucle
    # --------------------------------------------------------

    @property
    def state(self) -> ClientState:
        with self._lock:
            return self._state

    @property
    def last_update(self) -> Optional[int]:
        """Marca `time` (epoch en segundos) del último documento aceptado por el bucle"""
        stamp = self._last_stamp
        return stamp // 1000 if stamp else None

    def is_active(self) -> bool:
        with self._lock:
            return self._active

    def start(self):
        with self._lock:
            if self._state is ClientState.ACTIVE:
                logger.warning("El bucle de avisos ya está activo; start() ignorado")
                return
            if self._state is ClientState.STOPPED:
                raise RuntimeError("El cliente ya se detuvo y su cola está cerrada")

            self._active = True
            self._state = ClientState.ACTIVE
            self._thread = threading.Thread(target=self._loop, name="avisolabx-loop", daemon=True)
            self._thread.start()

        logger.info(f"Bucle de avisos iniciado (intervalo {self.interval}s)")

    def stop(self):
        """Detiene el bucle y espera a que el hilo termine. Después la cola está cerrada."""
        if self._thread is not None and threading.current_thread() is self._thread:
            raise RuntimeError("stop() no se puede llamar desde el propio bucle")

        with self._lock:
            if self._state is not ClientState.ACTIVE:
                logger.debug(f"stop() con el cliente en estado {self._state.value}; nada que hacer")
                return
            if self._active:
                self._active = False
                self._control.put(_CMD_STOP)
            thread = self._thread

        thread.join()

    def refresh(self):
        """Pide un ciclo inmediato sin esperar al temporizador"""
        if not self.is_active():
            logger.warning("refresh() con el bucle inactivo; se ignora")
            return
        self._control.put(_CMD_REFRESH)

    # --------------------------------------------------------
    # Hilo del bucle
    # --------------------------------------------------------

    def _loop(self):
        next_tick = time.monotonic() + self.interval

        try:
            if self.initial_poll and self.is_active():
                self._check_warnings()

            while self.is_active():
                try:
                    cmd = self._control.get(timeout=max(0.0, next_tick - time.monotonic()))
                except queue.Empty:
                    cmd = None

                # Varias peticiones de refresco pendientes cuentan como una
                while cmd == _CMD_REFRESH:
                    try:
                        cmd = self._control.get_nowait()
                    except queue.Empty:
                        break

                if cmd == _CMD_STOP or not self.is_active():
                    break

                if cmd is None:
                    logger.debug("Comprobando avisos")
                    now = time.monotonic()
                    next_tick += self.interval
                    if next_tick < now:
                        next_tick = now + self.interval
                else:
                    logger.info("Actualización solicitada")

                self._check_warnings()
        finally:
            with self._lock:
                self._active = False
                self._state = ClientState.STOPPED
            self.warn_queue.close()
            if self._owns_fetcher:
                self.fetcher.close()
            logger.info("Bucle de avisos detenido")

    def _check_warnings(self):
        try:
            info = parse_weather_info(self.fetch_warning())
        except DwdError as e:
            logger.error(f"No se pueden obtener los avisos del DWD: {e}")
            return
        except Exception:
            logger.exception("Error inesperado consultando avisos")
            return

        if info.time <= self._last_stamp:
            logger.debug(f"Los datos de {fmt_datetime(info.timestamp)} ya se procesaron")
            return

        self._last_stamp = info.time

        logger.info(
            f"Procesando {len(info.warnings)} categorías de avisos y "
            f"{len(info.prelim_warnings)} de avisos previos ({fmt_datetime(info.timestamp)})"
        )

        matches = self.matcher.filter_info(info)
        for w in matches:
            if not self._push(w):
                logger.warning("Parada solicitada con la cola llena; se descarta el resto del ciclo")
                return

        logger.info(f"{len(matches)} avisos relevantes enviados")

    def _push(self, warning: WeatherWarning) -> bool:
        # Bloquea con la cola llena, pero sin dejar de atender a stop()
        while True:
            try:
                self.warn_queue.put(warning, timeout=PUSH_RETRY_SECONDS)
                return True
            except queue.Full:
                if not self.is_active():
                    return False
