"""Portion obfuscation.

CONTRACT
- Inputs: builder options (keep/at-least counts, fixed total length, mask)
- Outputs (required):
  - Portion obfuscator: kept head + masked middle + kept tail
- Invariants:
  - at_least_from_start / at_least_from_end always win over keep_at_start / keep_at_end
  - Without fixed_total_length the kept head and tail never share source characters
  - With fixed_total_length the output always has exactly that length; head and tail
    may repeat the same source characters when the input is short
- Failure:
  - Builder raises InvalidConfiguration on negative values, an empty mask, or a
    fixed_total_length smaller than keep_at_start + keep_at_end
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from .obfuscator import InvalidConfiguration, Obfuscator, validate_non_negative
from .obfuscators import DEFAULT_MASK
from .schemas import PortionOptions


@dataclass(frozen=True)
class Portion(Obfuscator):
    keep_at_start: int = 0
    keep_at_end: int = 0
    at_least_from_start: int = 0
    at_least_from_end: int = 0
    fixed_total_length: int | None = None
    mask: str = DEFAULT_MASK

    def __post_init__(self) -> None:
        validate_non_negative(self.keep_at_start, "keep_at_start")
        validate_non_negative(self.keep_at_end, "keep_at_end")
        validate_non_negative(self.at_least_from_start, "at_least_from_start")
        validate_non_negative(self.at_least_from_end, "at_least_from_end")
        if not self.mask:
            raise InvalidConfiguration("mask must not be empty")
        if self.fixed_total_length is not None:
            validate_non_negative(self.fixed_total_length, "fixed_total_length")
            if self.fixed_total_length < self.keep_at_start + self.keep_at_end:
                raise InvalidConfiguration(
                    f"fixed_total_length ({self.fixed_total_length}) < "
                    f"keep_at_start ({self.keep_at_start}) + keep_at_end ({self.keep_at_end})"
                )

    def obfuscate(self, text: str) -> str:
        length = len(text)
        from_start = self._from_start(length)
        from_end = self._from_end(length, from_start)
        # 0 <= from_start <= length and 0 <= from_end <= length, so both slices are in range

        output_length = length if self.fixed_total_length is None else self.fixed_total_length
        masked = output_length - from_start - from_end
        return text[:from_start] + self.mask * masked + text[length - from_end :]

    def _from_start(self, length: int) -> int:
        if self.at_least_from_start > 0:
            return 0
        keep_at_most = max(0, length - self.at_least_from_end)
        return min(self.keep_at_start, keep_at_most)

    def _from_end(self, length: int, from_start: int) -> int:
        if self.at_least_from_end > 0:
            return 0
        if self.fixed_total_length is not None:
            available = length
        else:
            available = length - from_start
        keep_at_most = max(0, length - self.at_least_from_start)
        return min(self.keep_at_end, available, keep_at_most)


class PortionBuilder:
    """Collects Portion options; build() validates and returns the obfuscator.

    Setters validate their own value immediately and return the builder, so calls
    can be chained:

        portion().keep_at_start(4).keep_at_end(4).build()
    """

    def __init__(self) -> None:
        self._keep_at_start = 0
        self._keep_at_end = 0
        self._at_least_from_start = 0
        self._at_least_from_end = 0
        self._fixed_total_length: int | None = None
        self._mask = DEFAULT_MASK

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> PortionBuilder:
        try:
            parsed = PortionOptions.model_validate(dict(options))
        except ValidationError as e:
            raise InvalidConfiguration(f"Invalid portion options: {e}") from e
        builder = (
            cls()
            .keep_at_start(parsed.keep_at_start)
            .keep_at_end(parsed.keep_at_end)
            .at_least_from_start(parsed.at_least_from_start)
            .at_least_from_end(parsed.at_least_from_end)
            .mask(parsed.mask)
        )
        if parsed.fixed_total_length is not None:
            builder.fixed_total_length(parsed.fixed_total_length)
        return builder

    def keep_at_start(self, value: int) -> PortionBuilder:
        self._keep_at_start = validate_non_negative(value, "keep_at_start")
        return self

    def keep_at_end(self, value: int) -> PortionBuilder:
        self._keep_at_end = validate_non_negative(value, "keep_at_end")
        return self

    def at_least_from_start(self, value: int) -> PortionBuilder:
        """Minimum number of leading characters to mask; overrules keep_at_start/keep_at_end."""
        self._at_least_from_start = validate_non_negative(value, "at_least_from_start")
        return self

    def at_least_from_end(self, value: int) -> PortionBuilder:
        """Minimum number of trailing characters to mask; overrules keep_at_start/keep_at_end."""
        self._at_least_from_end = validate_non_negative(value, "at_least_from_end")
        return self

    def fixed_total_length(self, value: int) -> PortionBuilder:
        """Pad or cut the masked middle so every result has exactly `value` characters.

        Must be at least keep_at_start + keep_at_end. When the input is shorter than
        both keeps combined, parts of it are repeated in the result.
        """
        self._fixed_total_length = validate_non_negative(value, "fixed_total_length")
        return self

    def mask(self, mask: str) -> PortionBuilder:
        if not mask:
            raise InvalidConfiguration("mask must not be empty")
        self._mask = mask
        return self

    def build(self) -> Portion:
        # Portion checks fixed_total_length against both keeps
        return Portion(
            keep_at_start=self._keep_at_start,
            keep_at_end=self._keep_at_end,
            at_least_from_start=self._at_least_from_start,
            at_least_from_end=self._at_least_from_end,
            fixed_total_length=self._fixed_total_length,
            mask=self._mask,
        )


def portion() -> PortionBuilder:
    return PortionBuilder()
