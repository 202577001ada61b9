"""
Cola acotada de avisos que se puede cerrar.

Solo el bucle de consulta la cierra, una única vez, al terminar. Los
consumidores leen hasta recibir QueueClosed.
"""
import threading
import time
from collections import deque
from queue import Empty, Full
from typing import Any, List, Optional


class QueueClosed(Exception):
    pass


class WarnQueue:
    def __init__(self, maxsize: int):
        if maxsize <= 0:
            raise ValueError("La cola de avisos necesita capacidad positiva")
        self.maxsize = maxsize
        self._items = deque()
        self._closed = False
        self._cond = threading.Condition()

    @property
    def closed(self) -> bool:
        with self._cond:
            return self._closed

    def qsize(self) -> int:
        with self._cond:
            return len(self._items)

    def put(self, item: Any, timeout: Optional[float] = None):
        """Bloquea mientras la cola esté llena. Lanza Full si vence el timeout."""
        deadline = None if timeout is None else time.monotonic() + timeout
        with self._cond:
            while True:
                if self._closed:
                    raise QueueClosed("Envío a una cola de avisos cerrada")
                if len(self._items) < self.maxsize:
                    break
                if deadline is None:
                    self._cond.wait()
                    continue
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    raise Full
                self._cond.wait(remaining)
            self._items.append(item)
            self._cond.notify_all()

    def get(self, timeout: Optional[float] = None) -> Any:
        """
        Devuelve el siguiente aviso. Lanza Empty si vence el timeout y
        QueueClosed cuando la cola está cerrada y vacía.
        """
        deadline = None if timeout is None else time.monotonic() + timeout
        with self._cond:
            while not self._items:
                if self._closed:
                    raise QueueClosed
                if deadline is None:
                    self._cond.wait()
                    continue
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    raise Empty
                self._cond.wait(remaining)
            item = self._items.popleft()
            self._cond.notify_all()
            return item

    def get_nowait(self) -> Any:
        with self._cond:
            if self._items:
                item = self._items.popleft()
                self._cond.notify_all()
                return item
            if self._closed:
                raise QueueClosed
            raise Empty

    def drain(self) -> List[Any]:
        """Saca sin bloquear todo lo que haya en la cola"""
        with self._cond:
            items = list(self._items)
            self._items.clear()
            self._cond.notify_all()
            return items

    def close(self):
        with self._cond:
            if self._closed:
                raise RuntimeError("La cola de avisos ya estaba cerrada")
            self._closed = True
            self._cond.notify_all()

    def __iter__(self):
        while True:
            try:
                yield self.get()
            except QueueClosed:
                return
