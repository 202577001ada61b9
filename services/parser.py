"""
Conversión del JSON del DWD al agregado WeatherInfo.
"""
import json
import logging
from typing import Any, Dict, List, Union

from api.errors import ParseError
from models import WeatherInfo, WeatherWarning

logger = logging.getLogger(__name__)

# (clave JSON, atributo, tipo, obligatorio, admite null)
WARNING_FIELDS = (
    ("regionName", "location", str, True, False),
    ("start", "start", int, True, False),
    ("end", "end", int, False, True),
    ("type", "warn_type", int, False, False),
    ("state", "state", str, False, False),
    ("level", "level", int, False, False),
    ("description", "description", str, False, False),
    ("event", "event", str, False, False),
    ("headline", "headline", str, False, False),
    ("instruction", "instruction", str, False, False),
    ("stateShort", "state_short", str, False, False),
    ("altitudeStart", "altitude_start", int, False, True),
    ("altitudeEnd", "altitude_end", int, False, True),
)


def _is_type(value: Any, kind: type) -> bool:
    # bool es subclase de int, pero en el feed nunca es un entero válido
    if kind is int and isinstance(value, bool):
        return False
    return isinstance(value, kind)


def _parse_warning(obj: Any, raw: Union[bytes, str]) -> WeatherWarning:
    if not isinstance(obj, dict):
        raise ParseError(f"Se esperaba un objeto de aviso, llegó {type(obj).__name__}", raw)

    kwargs = {}
    for key, attr, kind, required, nullable in WARNING_FIELDS:
        if key not in obj:
            if required:
                raise ParseError(f"Falta el campo {key!r} en un aviso", raw)
            continue

        value = obj[key]
        if value is None:
            if required or not nullable:
                raise ParseError(f"Campo {key!r} nulo en un aviso", raw)
            kwargs[attr] = None
            continue

        if not _is_type(value, kind):
            raise ParseError(
                f"Campo {key!r}: se esperaba {kind.__name__}, llegó {type(value).__name__}", raw
            )
        kwargs[attr] = value

    return WeatherWarning(**kwargs)


def _parse_category_map(data: Dict[str, Any], key: str, raw: Union[bytes, str]) -> Dict[int, List[WeatherWarning]]:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ParseError(f"{key!r} debe ser un objeto, llegó {type(value).__name__}", raw)

    categories = {}
    for cat_key, items in value.items():
        try:
            cat_id = int(cat_key)
        except ValueError:
            raise ParseError(f"Categoría no numérica {cat_key!r} en {key!r}", raw)
        if cat_id in categories:
            raise ParseError(f"Categoría {cat_id} repetida en {key!r}", raw)
        if not isinstance(items, list):
            raise ParseError(f"{key}[{cat_key}] debe ser una lista", raw)
        categories[cat_id] = [_parse_warning(item, raw) for item in items]

    # Orden de categorías determinista
    return {cat_id: categories[cat_id] for cat_id in sorted(categories)}


def parse_weather_info(raw: Union[bytes, str]) -> WeatherInfo:
    """
    Decodifica el JSON ya desenvuelto.

    Devuelve el agregado completo o lanza ParseError; nunca un resultado a medias.
    """
    try:
        data = json.loads(raw)
    except ValueError as e:
        # JSONDecodeError y UnicodeDecodeError son ValueError
        raise ParseError(f"JSON inválido ({e})", raw)

    if not isinstance(data, dict):
        raise ParseError(f"Se esperaba un objeto JSON, llegó {type(data).__name__}", raw)

    stamp = data.get("time")
    if not _is_type(stamp, int):
        raise ParseError("Campo 'time' ausente o no entero", raw)

    copyright_ = data.get("copyright")
    if copyright_ is None:
        copyright_ = ""
    elif not isinstance(copyright_, str):
        raise ParseError("Campo 'copyright' no es texto", raw)

    info = WeatherInfo(
        time=stamp,
        warnings=_parse_category_map(data, "warnings", raw),
        prelim_warnings=_parse_category_map(data, "vorabInformation", raw),
        copyright=copyright_,
    )

    logger.debug(
        f"Documento {info.time}: {len(info.warnings)} categorías de avisos, "
        f"{len(info.prelim_warnings)} de avisos previos"
    )
    return info
