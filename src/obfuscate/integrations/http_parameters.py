"""HTTP query and form parameter obfuscation.

CONTRACT
- Inputs: parameter name -> Obfuscator mapping; `name=value&name=value` strings
- Outputs (required):
  - obfuscate(): the parameter string with matching values obfuscated
  - obfuscate_parameter_string(): same, plus the decode error (or None)
- Invariants:
  - Names are matched exactly after URL-unescaping
  - Names are copied as they were received; values are URL-unescaped before they are
    obfuscated and are not re-escaped
  - Pairs without "=" are copied unchanged
  - Processing stops at the first invalid escape sequence
- Failure:
  - Decode errors are routed through ErrorStrategy; only RAISE propagates them
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from urllib.parse import unquote_plus

from loguru import logger

from ..obfuscator import Obfuscator
from .error_strategy import ErrorStrategy

_INVALID_ESCAPE_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")


class ParameterDecodeError(ValueError):
    """Raised when a parameter name or value is not validly URL-escaped."""


def query_unescape(text: str) -> str:
    """Decode `+` and `%XX` escapes, rejecting malformed escapes like `%A` or `%zz`."""
    bad = _INVALID_ESCAPE_RE.search(text)
    if bad:
        escape = text[bad.start() : bad.start() + 3]
        raise ParameterDecodeError(f'invalid URL escape "{escape}"')
    return unquote_plus(text)


@dataclass(frozen=True)
class HttpParameterObfuscator(Obfuscator):
    obfuscators: Mapping[str, Obfuscator] = field(default_factory=dict, hash=False)
    on_error: ErrorStrategy = ErrorStrategy.LOG

    def obfuscate_parameter(self, name: str, value: str) -> str:
        obfuscator = self.obfuscators.get(name)
        if obfuscator is None:
            return value
        return obfuscator.obfuscate(value)

    def obfuscate_parameter_string(self, text: str) -> tuple[str, ParameterDecodeError | None]:
        """Obfuscate a parameter string, returning any decode error instead of handling it.

        Returns: (output up to the error, error or None)
        """
        out: list[str] = []
        try:
            for i, pair in enumerate(text.split("&")):
                if i:
                    out.append("&")
                self._write_pair(pair, out)
        except ParameterDecodeError as e:
            return "".join(out), e
        return "".join(out), None

    def obfuscate(self, text: str) -> str:
        result, error = self.obfuscate_parameter_string(text)
        if error is None:
            return result
        return self._handle_error(error, result)

    def _write_pair(self, pair: str, out: list[str]) -> None:
        raw_name, sep, raw_value = pair.partition("=")
        if not sep:
            out.append(pair)
            return
        name = query_unescape(raw_name)
        out.append(raw_name + "=")
        value = query_unescape(raw_value)
        out.append(self.obfuscate_parameter(name, value))

    def _handle_error(self, error: ParameterDecodeError, result: str) -> str:
        if self.on_error is ErrorStrategy.LOG:
            logger.warning("ObfuscateString error: {}", error)
            return result
        if self.on_error is ErrorStrategy.INCLUDE:
            return f"{result}<error: {error}>"
        if self.on_error is ErrorStrategy.STOP:
            return result
        logger.error("ObfuscateString error: {}", error)
        raise error


def http_parameters(
    obfuscators: Mapping[str, Obfuscator],
    on_error: ErrorStrategy = ErrorStrategy.LOG,
) -> HttpParameterObfuscator:
    return HttpParameterObfuscator(dict(obfuscators), on_error)
