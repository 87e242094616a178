"""Split points.

A split point divides a string into a part before it and a part after it, each with
its own obfuscator. For instance, to keep the domain of an email address:

    local_part = portion().keep_at_start(1).keep_at_end(1).fixed_total_length(8).build()
    email = at_first("@").split_to(local_part, none())
    email("test@example.org")  # 't******t@example.org'

Split points cannot be chained like until_length(), but they nest:

    domain = at_last(".").split_to(all_characters(), none())
    email = at_first("@").split_to(local_part, domain)
    email("test@example.org")  # 't******t@*******.org'

CONTRACT
- Inputs: a locate function (text -> index, negative or None when not found) and a match length
- Outputs (required):
  - SplitObfuscator: before(text[:i]) + text[i:i+m] + after(text[i+m:])
- Invariants:
  - The located match itself is never obfuscated
  - When nothing is located, only `before` is applied, to the whole text
- Failure:
  - Raises InvalidConfiguration for a negative match length or occurrence
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional

from .obfuscator import Obfuscator, validate_non_negative

Locate = Callable[[str], Optional[int]]


@dataclass(frozen=True)
class SplitPoint:
    locate: Locate
    match_length: int
    label: str = field(default="custom", compare=False)

    def __post_init__(self) -> None:
        validate_non_negative(self.match_length, "match_length")

    def split_to(self, before: Obfuscator, after: Obfuscator) -> SplitObfuscator:
        return SplitObfuscator(self, before, after)


@dataclass(frozen=True)
class SplitObfuscator(Obfuscator):
    split_point: SplitPoint
    before: Obfuscator
    after: Obfuscator

    def obfuscate(self, text: str) -> str:
        start = self.split_point.locate(text)
        if start is None or start < 0:
            return self.before.obfuscate(text)
        end = start + self.split_point.match_length
        return self.before.obfuscate(text[:start]) + text[start:end] + self.after.obfuscate(text[end:])


def split_point(locate: Locate, match_length: int, label: str = "custom") -> SplitPoint:
    """Split at a custom position; `match_length` characters from there are kept as-is."""
    return SplitPoint(locate, match_length, label)


def at_first(separator: str) -> SplitPoint:
    return SplitPoint(lambda text: text.find(separator), len(separator), f"first {separator!r}")


def at_last(separator: str) -> SplitPoint:
    return SplitPoint(lambda text: text.rfind(separator), len(separator), f"last {separator!r}")


def at_nth(separator: str, occurrence: int) -> SplitPoint:
    """Split at the zero-based `occurrence` of `separator`.

    Each search restarts one character after the previous match, so overlapping
    matches count ("aaa" contains "aa" twice).
    """
    validate_non_negative(occurrence, "occurrence")
    return SplitPoint(
        lambda text: nth_index(text, separator, occurrence),
        len(separator),
        f"occurrence {occurrence} of {separator!r}",
    )


def nth_index(text: str, separator: str, occurrence: int) -> int:
    index = text.find(separator)
    for _ in range(occurrence):
        if index == -1:
            break
        index = text.find(separator, index + 1)
    return index
