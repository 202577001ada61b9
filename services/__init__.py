"""
Módulo de servicios: parseo, filtro y bucle de consulta de avisos
"""
from .parser import parse_weather_info
from .matcher import LocationMatcher
from .warn_queue import WarnQueue, QueueClosed
from .client import WarningClient, ClientState
from .registry import ClientRegistry

__all__ = [
    'parse_weather_info',
    'LocationMatcher',
    'WarnQueue',
    'QueueClosed',
    'WarningClient',
    'ClientState',
    'ClientRegistry',
]
