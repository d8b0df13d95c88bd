"""Built-in generator functions using Faker.

Every function is registered on ``default_registry`` under the name used
in templates (``{{firstName()}}``, ``{{integer(20, 40)}}``, ...). All
randomness comes from the context's seeded Faker instance.
"""

from __future__ import annotations

import re
import unicodedata
from datetime import datetime, timedelta
from typing import Any

from jsonmock.errors import GeneratorArgumentError
from jsonmock.generators.base import (
    GenerationContext,
    check_range,
    to_int,
    to_number,
    to_str,
)
from jsonmock.generators.formats import format_date, format_number
from jsonmock.generators.registry import register
from jsonmock.template.models import REPEAT_FUNCTION, DateLiteral

GENDERS = ("male", "female")
LOREM_UNITS = ("words", "sentences", "paragraphs")
DEFAULT_PHONE_FORMAT = "+1 (xxx) xxx-xxxx"
# new Date(1970, 0, 1)
DEFAULT_MIN_DATE = DateLiteral(args=(1970, 0, 1))
_NON_ADDRESS_CHARS = re.compile(r"[^a-z0-9]")


def _formatted(function: str, value: int | float, pattern: Any) -> int | float | str:
    if pattern is None:
        return value
    pattern = to_str(function, "format", pattern)
    try:
        return format_number(value, pattern)
    except ValueError as err:
        raise GeneratorArgumentError(function, str(err)) from None


def _address_part(text: str) -> str:
    """Lowercase ASCII letters and digits of ``text`` (accents stripped)."""
    ascii_text = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    return _NON_ADDRESS_CHARS.sub("", ascii_text.lower())


@register(REPEAT_FUNCTION)
def repeat(ctx: GenerationContext, min: Any, max: Any = None) -> Any:
    """Repeat the following array element(s) between min and max times."""
    raise GeneratorArgumentError(
        REPEAT_FUNCTION,
        "repeat() is only valid as the first element of an array",
    )


@register("index")
def index(ctx: GenerationContext, start: Any = 0) -> int:
    """Index of the current repetition, offset by start."""
    return ctx.current_index + to_int("index", "start", start)


@register("objectId")
def object_id(ctx: GenerationContext) -> str:
    """24-character hexadecimal identifier."""
    return ctx.fake.hexify(text="^" * 24)


@register("guid")
def guid(ctx: GenerationContext) -> str:
    """Random UUID (version 4)."""
    return ctx.fake.uuid4()


@register("bool")
def boolean(ctx: GenerationContext) -> bool:
    """Random boolean."""
    return ctx.fake.pybool()


@register("integer")
def integer(ctx: GenerationContext, min: Any = 0, max: Any = 10, format: Any = None) -> int | str:
    """Random integer in [min, max], optionally formatted."""
    low = to_int("integer", "min", min)
    high = to_int("integer", "max", max)
    check_range("integer", low, high)
    return _formatted("integer", ctx.fake.random.randint(low, high), format)


@register("floating")
def floating(
    ctx: GenerationContext,
    min: Any = 0,
    max: Any = 10000,
    fixed: Any = 4,
    format: Any = None,
) -> float | str:
    """Random float in [min, max] rounded to fixed decimals, optionally formatted."""
    low = to_number("floating", "min", min)
    high = to_number("floating", "max", max)
    check_range("floating", low, high)
    digits = to_int("floating", "fixed", fixed)
    if digits < 0:
        raise GeneratorArgumentError("floating", f"fixed must be >= 0, got {digits}")
    value = round(ctx.fake.random.uniform(low, high), digits)
    return _formatted("floating", value, format)


@register("random")
def random_value(ctx: GenerationContext, *values: Any) -> Any:
    """One of the given values, chosen at random."""
    if not values:
        raise GeneratorArgumentError("random", "at least one value is required")
    chosen = ctx.fake.random.choice(values)
    if isinstance(chosen, DateLiteral):
        return ctx.to_datetime("random", chosen).isoformat()
    return chosen


@register("gender")
def gender(ctx: GenerationContext) -> str:
    """Either 'male' or 'female'."""
    return ctx.fake.random.choice(GENDERS)


@register("firstName")
def first_name(ctx: GenerationContext, gender: Any = None) -> str:
    """First name, optionally for the given gender ('male' or 'female')."""
    if gender is None:
        return ctx.fake.first_name()
    if gender not in GENDERS:
        raise GeneratorArgumentError("firstName", f"gender must be one of {GENDERS}, got {gender!r}")
    if gender == "male":
        return ctx.fake.first_name_male()
    return ctx.fake.first_name_female()


@register("surname")
def surname(ctx: GenerationContext) -> str:
    """Family name."""
    return ctx.fake.last_name()


@register("company")
def company(ctx: GenerationContext) -> str:
    """Company name."""
    return ctx.fake.company()


@register("email")
def email(ctx: GenerationContext, random: Any = False) -> str:
    """E-mail address.

    By default the address reads like a person at a company
    (``first.last@company.tld``); with ``random`` true it is any Faker address.
    """
    if not isinstance(random, bool):
        raise GeneratorArgumentError("email", f"random must be true or false, got {random!r}")
    if random:
        return ctx.fake.email()

    first = _address_part(ctx.fake.first_name())
    last = _address_part(ctx.fake.last_name())
    domain = _address_part(ctx.fake.company())
    if not (first and last and domain):
        # Scripts with no ASCII transliteration, e.g. ja_JP names
        return ctx.fake.email()
    return f"{first}.{last}@{domain}.{ctx.fake.tld()}"


@register("phone")
def phone(ctx: GenerationContext, format: Any = DEFAULT_PHONE_FORMAT) -> str:
    """Phone number; each 'x' in format becomes a random digit."""
    pattern = to_str("phone", "format", format)
    return "".join(str(ctx.fake.random_digit()) if c == "x" else c for c in pattern)


@register("country")
def country(ctx: GenerationContext) -> str:
    """Country name."""
    return ctx.fake.country()


@register("city")
def city(ctx: GenerationContext) -> str:
    """City name."""
    return ctx.fake.city()


@register("street")
def street(ctx: GenerationContext) -> str:
    """Street name."""
    return ctx.fake.street_name()


@register("state")
def state(ctx: GenerationContext) -> str:
    """State or administrative region."""
    return ctx.fake.administrative_unit()


@register("date")
def date(ctx: GenerationContext, min: Any = DEFAULT_MIN_DATE, max: Any = None, format: Any = None) -> str:
    """Random date between min and max (default: 1970-01-01 to now)."""
    start = ctx.to_datetime("date", min)
    end = ctx.now if max is None else ctx.to_datetime("date", max)
    if start > end:
        raise GeneratorArgumentError(
            "date",
            f"min ({start.isoformat()}) must be <= max ({end.isoformat()})",
        )

    span_seconds = int((end - start).total_seconds())
    value: datetime = start + timedelta(seconds=ctx.fake.random.randint(0, span_seconds))
    if format is None:
        return value.isoformat()
    return format_date(value, to_str("date", "format", format))


@register("lorem")
def lorem(ctx: GenerationContext, count: Any = 1, units: Any = "sentences") -> str:
    """Lorem ipsum text: count words, sentences or paragraphs."""
    amount = to_int("lorem", "count", count)
    if amount < 0:
        raise GeneratorArgumentError("lorem", f"count must be >= 0, got {amount}")
    if units not in LOREM_UNITS:
        raise GeneratorArgumentError("lorem", f"units must be one of {LOREM_UNITS}, got {units!r}")

    if amount == 0:
        return ""
    if units == "words":
        return " ".join(ctx.fake.words(nb=amount))
    if units == "sentences":
        return " ".join(ctx.fake.sentences(nb=amount))
    return "\n\n".join(ctx.fake.paragraphs(nb=amount))
