"""
Módulo de modelos de datos
"""
from .warning import WeatherWarning, WeatherInfo, sort_warnings

__all__ = [
    'WeatherWarning',
    'WeatherInfo',
    'sort_warnings',
]
