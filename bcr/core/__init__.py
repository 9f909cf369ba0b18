"""Core entry-generation logic: parsing, merging and stamping."""

from .config import Config, load_config, resolve_config
from .errors import EntryError, ErrorCode
from .request import EntryRequest, normalize_version, resolve_request
from .result import Err, Ok, Result, is_err, is_ok

__all__ = [
    # config
    "Config",
    "load_config",
    "resolve_config",
    # errors
    "EntryError",
    "ErrorCode",
    # request
    "EntryRequest",
    "normalize_version",
    "resolve_request",
    # result
    "Err",
    "Ok",
    "Result",
    "is_err",
    "is_ok",
]
