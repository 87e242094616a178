"""Primitive obfuscators.

CONTRACT
- Inputs: text strings
- Outputs:
  - all_characters(): one mask per input character
  - none(): the input, unchanged
  - with_fixed_value(): a constant value
  - with_fixed_length(): the mask repeated a constant number of times
- Invariants:
  - Lengths are counted in characters, never in encoded bytes
- Failure:
  - with_fixed_length() raises InvalidConfiguration for a negative length
"""

from __future__ import annotations

from dataclasses import dataclass

from .obfuscator import Obfuscator, validate_non_negative

DEFAULT_MASK = "*"


@dataclass(frozen=True)
class AllMask(Obfuscator):
    mask: str = DEFAULT_MASK

    def obfuscate(self, text: str) -> str:
        return self.mask * len(text)


@dataclass(frozen=True)
class Unchanged(Obfuscator):
    def obfuscate(self, text: str) -> str:
        return text


@dataclass(frozen=True)
class FixedValue(Obfuscator):
    value: str

    def obfuscate(self, text: str) -> str:
        return self.value


_NONE = Unchanged()


def all_characters(mask: str = DEFAULT_MASK) -> Obfuscator:
    return AllMask(mask)


def none() -> Obfuscator:
    """Return the shared no-op obfuscator. Useful as a default value."""
    return _NONE


def with_fixed_value(value: str) -> Obfuscator:
    return FixedValue(value)


def with_fixed_length(fixed_length: int, mask: str = DEFAULT_MASK) -> Obfuscator:
    validate_non_negative(fixed_length, "fixed_length")
    return FixedValue(mask * fixed_length)
