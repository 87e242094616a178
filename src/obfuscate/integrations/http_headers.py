"""HTTP header obfuscation.

CONTRACT
- Inputs: header name -> Obfuscator mapping; header values, maps or multi-maps
- Outputs:
  - New strings / lists / dicts with matching header values obfuscated
- Invariants:
  - Header names are matched case-insensitively
  - Returned dicts keep the caller's header name spelling
  - Inputs are never modified
- Failure:
  - None
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from ..obfuscator import Obfuscator


@dataclass(frozen=True)
class HttpHeaderObfuscator:
    obfuscators: Mapping[str, Obfuscator] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        # Names are matched case-insensitively
        lowered = {name.lower(): o for name, o in self.obfuscators.items()}
        object.__setattr__(self, "obfuscators", lowered)

    def _lookup(self, header_name: str) -> Obfuscator | None:
        return self.obfuscators.get(header_name.lower())

    def obfuscate_header_value(self, header_name: str, header_value: str) -> str:
        obfuscator = self._lookup(header_name)
        if obfuscator is None:
            return header_value
        return obfuscator.obfuscate(header_value)

    def obfuscate_header_values(self, header_name: str, header_values: Iterable[str]) -> list[str]:
        obfuscator = self._lookup(header_name)
        if obfuscator is None:
            return list(header_values)
        return [obfuscator.obfuscate(v) for v in header_values]

    def obfuscate_header_map(self, header_map: Mapping[str, str] | None) -> dict[str, str]:
        if not header_map:
            return {}
        return {name: self.obfuscate_header_value(name, value) for name, value in header_map.items()}

    def obfuscate_header_multi_map(
        self, header_map: Mapping[str, Iterable[str]] | None
    ) -> dict[str, list[str]]:
        if not header_map:
            return {}
        return {
            name: self.obfuscate_header_values(name, values) for name, values in header_map.items()
        }


def http_headers(obfuscators: Mapping[str, Obfuscator]) -> HttpHeaderObfuscator:
    return HttpHeaderObfuscator(dict(obfuscators))
