"""
Configuración de pytest y fixtures compartidas para los tests de AvisoLabX.
"""

import json
import sys
import threading
from pathlib import Path

import pytest

# Raíz del proyecto en el path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

TESTDATA = Path(__file__).parent / "testdata"


def wrap(payload) -> bytes:
    """Envuelve un JSON como lo sirve el DWD"""
    if isinstance(payload, dict):
        payload = json.dumps(payload)
    if isinstance(payload, str):
        payload = payload.encode("utf-8")
    return b"warnWetter.loadWarnings(" + payload + b");"


def make_warning(region: str, event: str = "GEWITTER", start: int = 1627048800000, **extra) -> dict:
    item = {
        "state": "Bayern",
        "type": 0,
        "level": 2,
        "start": start,
        "end": (start if isinstance(start, int) else 1627048800000) + 3600 * 1000,
        "regionName": region,
        "event": event,
        "headline": f"Amtliche WARNUNG vor {event}",
        "description": "",
        "instruction": "",
        "stateShort": "BY",
        "altitudeStart": None,
        "altitudeEnd": None,
    }
    item.update(extra)
    return item


def make_doc(time: int, warnings=None, prelim=None) -> dict:
    return {
        "time": time,
        "warnings": warnings or {},
        "vorabInformation": prelim or {},
        "copyright": "Copyright Deutscher Wetterdienst",
    }


class ScriptedFetcher:
    """Fetcher falso que devuelve los cuerpos en orden y repite el último"""

    def __init__(self, bodies):
        self.bodies = list(bodies)
        self.calls = 0
        self.lock = threading.Lock()

    def fetch(self) -> bytes:
        with self.lock:
            idx = min(self.calls, len(self.bodies) - 1)
            self.calls += 1
            body = self.bodies[idx]
        if isinstance(body, Exception):
            raise body
        return body


@pytest.fixture(scope="session")
def testdata_dir():
    return TESTDATA


@pytest.fixture
def load_doc():
    """Devuelve el contenido JSON de un fichero de testdata"""
    def _load(name: str) -> bytes:
        return (TESTDATA / name).read_bytes()
    return _load
