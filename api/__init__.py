"""
Módulo API
"""
from .errors import (
    DwdError,
    ConfigError,
    FetchError,
    ProtocolMismatch,
    ParseError,
)
from .dwd import (
    DwdFetcher,
    unwrap_response,
    validate_proxy,
)

__all__ = [
    'DwdError',
    'ConfigError',
    'FetchError',
    'ProtocolMismatch',
    'ParseError',
    'DwdFetcher',
    'unwrap_response',
    'validate_proxy',
]
