"""Generation context shared by generator functions.

This module defines the GenerationContext handed to every generator
function, plus argument-coercion helpers used by the built-ins.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from faker import Faker

from jsonmock.config import GeneratorSettings
from jsonmock.errors import ConfigurationError, GeneratorArgumentError
from jsonmock.template.models import DateLiteral


class GenerationContext:
    """State available to generator functions during one generation run.

    All randomness must flow through ``fake`` (and ``fake.random``) so that
    a seeded run is reproducible.

    Attributes:
        settings: Generator settings
        fake: Seeded Faker instance

    Example:
        >>> ctx = GenerationContext(GeneratorSettings(seed=42))
        >>> name = ctx.fake.first_name()
    """

    def __init__(self, settings: GeneratorSettings) -> None:
        """Initialize the context and seed Faker.

        Args:
            settings: Generator settings (seed, locale, reference time)

        Raises:
            ConfigurationError: If the Faker locale is unknown
        """
        self.settings = settings
        try:
            self.fake = Faker(settings.locale)
        except AttributeError as err:
            raise ConfigurationError(
                f"Unknown locale '{settings.locale}'",
                internal_details=repr(err),
            ) from err
        if settings.seed is not None:
            self.fake.seed_instance(settings.seed)
        # Reference time is fixed once per run so every new Date() agrees
        self._now = settings.now()
        self._indices: list[int] = []

    @property
    def now(self) -> datetime:
        """Reference time for ``new Date()``."""
        return self._now

    @property
    def current_index(self) -> int:
        """Index of the innermost repetition (0 outside any repeat)."""
        return self._indices[-1] if self._indices else 0

    def push_index(self, index: int) -> None:
        """Enter a repetition."""
        self._indices.append(index)

    def pop_index(self) -> None:
        """Leave the innermost repetition."""
        self._indices.pop()

    def to_datetime(self, function: str, value: Any) -> datetime:
        """Coerce a date argument (``new Date(...)``, ISO string or epoch ms).

        Args:
            function: Calling function name, for error messages
            value: Raw argument

        Returns:
            Timezone-aware datetime

        Raises:
            GeneratorArgumentError: If the value is not a date
        """
        literal = value if isinstance(value, DateLiteral) else DateLiteral(args=(value,))
        try:
            resolved = literal.resolve(self.now, self.settings.tzinfo)
        except (ValueError, OverflowError) as err:
            raise GeneratorArgumentError(function, f"invalid date {value!r}: {err}") from err
        return resolved.astimezone(self.settings.tzinfo)


def to_number(function: str, name: str, value: Any) -> int | float:
    """Validate a numeric argument.

    Raises:
        GeneratorArgumentError: If the value is not an int or float
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise GeneratorArgumentError(function, f"{name} must be a number, got {value!r}")
    return value


def to_int(function: str, name: str, value: Any) -> int:
    """Validate an integral argument (``2.0`` is accepted as ``2``).

    Raises:
        GeneratorArgumentError: If the value is not integral
    """
    number = to_number(function, name, value)
    if isinstance(number, float):
        if not number.is_integer():
            raise GeneratorArgumentError(function, f"{name} must be an integer, got {value!r}")
        return int(number)
    return number


def to_str(function: str, name: str, value: Any) -> str:
    """Validate a string argument.

    Raises:
        GeneratorArgumentError: If the value is not a string
    """
    if not isinstance(value, str):
        raise GeneratorArgumentError(function, f"{name} must be a string, got {value!r}")
    return value


def check_range(function: str, low: int | float, high: int | float) -> None:
    """Ensure ``low <= high``.

    Raises:
        GeneratorArgumentError: If the range is empty
    """
    if low > high:
        raise GeneratorArgumentError(function, f"min ({low}) must be <= max ({high})")
