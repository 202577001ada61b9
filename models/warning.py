"""
Tipos de dominio para los avisos del DWD.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional, Tuple

from utils.helpers import datetime_from_epoch_ms


@dataclass(frozen=True)
class WeatherWarning:
    """
    Aviso meteorológico para una región y un intervalo de tiempo.

    Los tiempos derivados se calculan al construir el objeto y no cambian
    después. `category_id` lo asigna el filtro de localidades a partir de la
    clave bajo la que apareció el aviso en el documento.
    """
    location: str
    start: int
    end: Optional[int] = None
    category_id: int = 0
    warn_type: int = 0
    state: str = ""
    level: int = 0
    description: str = ""
    event: str = ""
    headline: str = ""
    instruction: str = ""
    state_short: str = ""
    altitude_start: Optional[int] = None
    altitude_end: Optional[int] = None
    time_start: datetime = field(init=False, repr=False, compare=False)
    time_end: Optional[datetime] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "time_start", datetime_from_epoch_ms(self.start))
        object.__setattr__(self, "time_end", datetime_from_epoch_ms(self.end))

    @property
    def period(self) -> Tuple[datetime, Optional[datetime]]:
        """Intervalo del aviso: (inicio, fin)"""
        return self.time_start, self.time_end

    @property
    def unique_id(self) -> str:
        """Clave para detectar duplicados aguas abajo: región/evento"""
        return f"{self.location}/{self.event}"

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        if self.time_end is None:
            return False
        now = now or datetime.now(timezone.utc)
        return self.time_end < now


def sort_warnings(warnings: Iterable[WeatherWarning]) -> List[WeatherWarning]:
    """Ordena por región y, dentro de cada región, por inicio"""
    return sorted(warnings, key=lambda w: (w.location, w.start))


@dataclass(frozen=True)
class WeatherInfo:
    """Conjunto de avisos publicado por el DWD en un instante dado."""
    time: int
    warnings: Dict[int, List[WeatherWarning]] = field(default_factory=dict)
    prelim_warnings: Dict[int, List[WeatherWarning]] = field(default_factory=dict)
    copyright: str = ""

    @property
    def timestamp(self) -> datetime:
        return datetime_from_epoch_ms(self.time)

    def count(self) -> int:
        """Número total de avisos (activos y previos)"""
        return sum(len(v) for v in self.warnings.values()) + sum(
            len(v) for v in self.prelim_warnings.values()
        )
