"""
Módulo de utilidades
"""
from .helpers import (
    html_clean,
    normalize_text_input,
    parse_location_list,
    truncate_payload,
    datetime_from_epoch_ms,
    fmt_datetime,
    age_string,
)

__all__ = [
    'html_clean',
    'normalize_text_input',
    'parse_location_list',
    'truncate_payload',
    'datetime_from_epoch_ms',
    'fmt_datetime',
    'age_string',
]
