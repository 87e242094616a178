"""Option schemas.

CONTRACT
- Inputs: plain dictionaries (rules files, CLI flags, caller code)
- Outputs:
  - Validated PortionOptions
- Invariants:
  - Keys may be snake_case or camelCase (keepAtStart == keep_at_start)
  - Unknown keys are rejected
- Failure:
  - Raises pydantic ValidationError on negative numbers, empty mask or unknown keys
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class PortionOptions(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="forbid", frozen=True
    )

    keep_at_start: int = Field(default=0, ge=0)
    keep_at_end: int = Field(default=0, ge=0)
    at_least_from_start: int = Field(default=0, ge=0)
    at_least_from_end: int = Field(default=0, ge=0)
    fixed_total_length: int | None = Field(default=None, ge=0)
    mask: str = Field(default="*", min_length=1)
