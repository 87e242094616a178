"""Adapters that apply obfuscators to HTTP headers, HTTP parameters and maps."""

from .error_strategy import ErrorStrategy
from .http_headers import HttpHeaderObfuscator, http_headers
from .http_parameters import HttpParameterObfuscator, ParameterDecodeError, http_parameters
from .maps import MapObfuscator, maps

__all__ = [
    "ErrorStrategy",
    "HttpHeaderObfuscator",
    "HttpParameterObfuscator",
    "MapObfuscator",
    "ParameterDecodeError",
    "http_headers",
    "http_parameters",
    "maps",
]
