"""Template data models.

This module defines the immutable Pydantic models produced by the
placeholder parser:
- Placeholder: One ``{{name(args)}}`` token
- RepeatMarker: Cardinality of a repeated array element
- DateLiteral: A ``new Date(...)`` argument, materialised at generation time
- ParsedString: A template string split into literal text and placeholders
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone, tzinfo
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

REPEAT_FUNCTION = "repeat"


class DateLiteral(BaseModel):
    """A ``new Date(...)`` expression found in placeholder arguments.

    Follows JavaScript Date constructor semantics:
    - no arguments: the reference time ("now")
    - one number: milliseconds since the Unix epoch
    - one string: an ISO-8601 timestamp
    - two or more numbers: year, zero-based month, day, hours, minutes,
      seconds, milliseconds (out-of-range parts roll over)

    Attributes:
        args: Literal constructor arguments
    """

    model_config = ConfigDict(frozen=True)

    args: tuple[Any, ...] = ()

    def resolve(self, now: datetime, tz: tzinfo = timezone.utc) -> datetime:
        """Materialise the literal as an aware datetime.

        Args:
            now: Reference time used for ``new Date()``
            tz: Zone used for component-wise constructors

        Returns:
            Timezone-aware datetime

        Raises:
            ValueError: If the arguments do not form a valid date
        """
        if not self.args:
            return now

        if len(self.args) == 1:
            (value,) = self.args
            if isinstance(value, bool):
                raise ValueError(f"invalid Date argument {value!r}")
            if isinstance(value, (int, float)):
                epoch = datetime(1970, 1, 1, tzinfo=timezone.utc)
                return (epoch + timedelta(milliseconds=value)).astimezone(tz)
            if isinstance(value, str):
                parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
                if parsed.tzinfo is None:
                    parsed = parsed.replace(tzinfo=tz)
                return parsed
            raise ValueError(f"invalid Date argument {value!r}")

        parts = list(self.args) + [0] * (7 - len(self.args))
        if len(self.args) < 3:
            parts[2] = 1
        if any(isinstance(p, bool) or not isinstance(p, (int, float)) for p in parts):
            raise ValueError(f"Date components must be numbers, got {self.args!r}")

        year, month, day, hours, minutes, seconds, millis = parts[:7]
        year = int(year) + int(month) // 12
        month = int(month) % 12 + 1
        base = datetime(year, month, 1, tzinfo=tz)
        return base + timedelta(
            days=day - 1,
            hours=hours,
            minutes=minutes,
            seconds=seconds,
            milliseconds=millis,
        )


class Placeholder(BaseModel):
    """A single ``{{name(args)}}`` token.

    Attributes:
        name: Generator function name
        args: Literal arguments (numbers, strings, booleans, None, DateLiteral)
        start: Offset of ``{{`` in the containing string
        end: Offset just past ``}}`` in the containing string
        source: Raw token text
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    args: tuple[Any, ...] = ()
    start: int = Field(default=0, ge=0)
    end: int = Field(default=0, ge=0)
    source: str = ""

    @property
    def is_repeat(self) -> bool:
        """Whether this token is a repeat marker."""
        return self.name == REPEAT_FUNCTION


class RepeatMarker(BaseModel):
    """Cardinality requested by ``{{repeat(min, max)}}``.

    Attributes:
        min_count: Minimum number of repetitions (inclusive)
        max_count: Maximum number of repetitions (inclusive)
    """

    model_config = ConfigDict(frozen=True)

    min_count: int = Field(..., ge=0)
    max_count: int = Field(..., ge=0)

    @model_validator(mode="after")
    def max_must_not_be_below_min(self) -> RepeatMarker:
        """Validate that max_count >= min_count."""
        if self.max_count < self.min_count:
            msg = f"max ({self.max_count}) must be >= min ({self.min_count})"
            raise ValueError(msg)
        return self


class ParsedString(BaseModel):
    """A template string split into literal text and placeholders.

    ``parts`` alternates freely between ``str`` segments and Placeholder
    instances, in source order. Empty literal segments are omitted.
    """

    model_config = ConfigDict(frozen=True)

    text: str
    parts: tuple[str | Placeholder, ...] = ()

    @property
    def placeholders(self) -> list[Placeholder]:
        """Placeholders in source order."""
        return [p for p in self.parts if isinstance(p, Placeholder)]

    @property
    def has_placeholders(self) -> bool:
        """Whether the string contains at least one token."""
        return any(isinstance(p, Placeholder) for p in self.parts)

    @property
    def is_single_placeholder(self) -> bool:
        """Whether the whole string is exactly one token."""
        return len(self.parts) == 1 and isinstance(self.parts[0], Placeholder)
