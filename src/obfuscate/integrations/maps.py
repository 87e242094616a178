from __future__ import annotations

from collections.abc import Hashable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from ..obfuscator import Obfuscator

K = TypeVar("K", bound=Hashable)


@dataclass(frozen=True)
class MapObfuscator(Generic[K]):
    """Obfuscates map values by exact key; values for other keys are copied."""

    obfuscators: Mapping[K, Obfuscator] = field(default_factory=dict, hash=False)

    def obfuscate_map(self, values: Mapping[K, str] | None) -> dict[K, str]:
        result: dict[K, str] = {}
        for key, value in (values or {}).items():
            obfuscator = self.obfuscators.get(key)
            result[key] = value if obfuscator is None else obfuscator.obfuscate(value)
        return result

    def obfuscate_multi_map(self, values: Mapping[K, Iterable[str]] | None) -> dict[K, list[str]]:
        result: dict[K, list[str]] = {}
        for key, items in (values or {}).items():
            obfuscator = self.obfuscators.get(key)
            if obfuscator is None:
                result[key] = list(items)
            else:
                result[key] = [obfuscator.obfuscate(v) for v in items]
        return result


def maps(obfuscators: Mapping[K, Obfuscator]) -> MapObfuscator[K]:
    return MapObfuscator(dict(obfuscators))
