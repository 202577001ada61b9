"""
Filtro de avisos por nombre de región.
"""
import logging
import re
from dataclasses import replace
from typing import Dict, Iterable, List, Optional

from api.errors import ConfigError
from models import WeatherInfo, WeatherWarning

logger = logging.getLogger(__name__)


class LocationMatcher:
    """
    Lista ordenada de expresiones regulares de localidades.
    Gana el primer patrón que coincide; no se busca la "mejor" coincidencia.
    """

    def __init__(self, patterns: Iterable[str]):
        self.patterns: List[re.Pattern] = []

        for p in patterns:
            if not isinstance(p, str) or not p.strip():
                raise ConfigError(f"Patrón de localidad vacío o inválido: {p!r}")
            logger.debug(f"Añadiendo patrón {p}")
            try:
                self.patterns.append(re.compile(p))
            except re.error as e:
                logger.error(f"No se puede compilar el patrón {p!r}: {e}")
                raise ConfigError(f"No se puede compilar el patrón {p!r}: {e}")

        if not self.patterns:
            raise ConfigError("Se necesita al menos un patrón de localidad")

        logger.info(f"Filtro con {len(self.patterns)} patrones de localidad")

    def match(self, location: str) -> Optional[re.Pattern]:
        """Devuelve el primer patrón que encaja con la localidad, o None"""
        for pattern in self.patterns:
            if pattern.search(location):
                return pattern
        return None

    def filter(self, categories: Dict[int, List[WeatherWarning]]) -> List[WeatherWarning]:
        """
        Recorre las categorías en orden ascendente y devuelve los avisos que
        encajan, con `category_id` tomado de la clave de la categoría.
        """
        matches = []
        for cat_id in sorted(categories):
            for w in categories[cat_id]:
                if self.match(w.location) is not None:
                    matches.append(replace(w, category_id=cat_id))
        return matches

    def filter_info(self, info: WeatherInfo) -> List[WeatherWarning]:
        """Avisos activos primero, luego avisos previos (vorabInformation)"""
        return self.filter(info.warnings) + self.filter(info.prelim_warnings)
