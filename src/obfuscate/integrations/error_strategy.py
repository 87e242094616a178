from __future__ import annotations

from enum import Enum


class ErrorStrategy(str, Enum):
    """What to do when an error occurs while obfuscating a parameter string.

    Every strategy stops processing at the error; they differ in how it is reported.
    """
    LOG = "log"          # Log the error, return the output so far
    INCLUDE = "include"  # Append "<error: ...>" to the output so far
    STOP = "stop"        # Return the output so far, error is not visible
    RAISE = "raise"      # Log the error, then raise it

    @classmethod
    def parse(cls, value: str) -> ErrorStrategy:
        try:
            return cls(value.lower())
        except ValueError as e:
            allowed = ", ".join(s.value for s in cls)
            raise ValueError(f"Unknown error strategy {value!r} (expected one of: {allowed})") from e
