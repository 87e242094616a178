"""Obfuscator contract and prefix chaining.

CONTRACT
- Inputs: text strings
- Outputs (required):
  - obfuscate() returns the masked text
  - until_length() returns an ObfuscatorPrefix that can be completed with then()
- Invariants:
  - Obfuscators are immutable; obfuscate() never raises
  - Prefix lengths in one chain are strictly increasing (tracked as min_prefix_length)
- Failure:
  - Raises InvalidConfiguration while building a rule, never while obfuscating
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable


class InvalidConfiguration(ValueError):
    """Raised when an obfuscation rule is set up with invalid values."""


def validate_non_negative(value: int, name: str) -> int:
    if value < 0:
        raise InvalidConfiguration(f"{name}: {value} < 0")
    return value


class Obfuscator(ABC):
    """A rule that makes strings partly or completely unreadable."""

    @property
    def min_prefix_length(self) -> int:
        return 1

    @abstractmethod
    def obfuscate(self, text: str) -> str: ...

    def __call__(self, text: str) -> str:
        return self.obfuscate(text)

    def until_length(self, prefix_length: int) -> ObfuscatorPrefix:
        """Use this obfuscator for the first `prefix_length` characters only.

        Complete the returned prefix with `then(other)` to choose the obfuscator for
        any remaining characters. Each prefix length in a chain must be larger than
        its direct predecessor.
        """
        if prefix_length < self.min_prefix_length:
            raise InvalidConfiguration(
                f"prefix_length: {prefix_length} < {self.min_prefix_length}"
            )
        return ObfuscatorPrefix(self, prefix_length)


@dataclass(frozen=True)
class ObfuscatorPrefix:
    obfuscator: Obfuscator
    prefix_length: int

    def then(self, other: Obfuscator) -> PrefixChain:
        return PrefixChain(self.obfuscator, self.prefix_length, other)


@dataclass(frozen=True)
class PrefixChain(Obfuscator):
    first: Obfuscator
    prefix_length: int
    second: Obfuscator

    @property
    def min_prefix_length(self) -> int:
        return self.prefix_length + 1

    def obfuscate(self, text: str) -> str:
        """Apply `first` to the prefix and `second` to the rest.

        Longer chains nest earlier links in `first`; they are walked in a loop so
        chain depth is not limited by the recursion limit.
        """
        parts: list[str] = []
        end = len(text)
        node: Obfuscator = self
        while isinstance(node, PrefixChain):
            if end > node.prefix_length:
                parts.append(node.second.obfuscate(text[node.prefix_length : end]))
                end = node.prefix_length
            node = node.first
        parts.append(node.obfuscate(text[:end]))
        return "".join(reversed(parts))


@dataclass(frozen=True)
class FunctionObfuscator(Obfuscator):
    function: Callable[[str], str]

    def obfuscate(self, text: str) -> str:
        return self.function(text)


def from_function(function: Callable[[str], str]) -> Obfuscator:
    """Wrap a plain `str -> str` callable, e.g. `from_function(str.upper)`."""
    return FunctionObfuscator(function)
