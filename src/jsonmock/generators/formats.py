"""Number and date formatting for generated values.

Number patterns follow numeral.js conventions (``"$0,0.00"``, ``"0.0%"``);
date patterns follow the json-generator token set
(``"YYYY-MM-ddThh:mm:ss Z"``).
"""

from __future__ import annotations

import re
from datetime import datetime

_DATE_TOKEN_RE = re.compile(r"YYYY|YY|MMMM|MMM|MM|M|dddd|ddd|dd|d|HH|H|hh|h|mm|m|ss|s|Z")

_MONTHS = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)
_WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


def _utc_offset(value: datetime) -> str:
    offset = value.utcoffset()
    if offset is None:
        return "+00:00"
    minutes = int(offset.total_seconds() // 60)
    sign = "-" if minutes < 0 else "+"
    hours, minutes = divmod(abs(minutes), 60)
    return f"{sign}{hours:02d}:{minutes:02d}"


def format_date(value: datetime, pattern: str) -> str:
    """Render ``value`` using json-generator date tokens.

    Tokens: ``YYYY`` ``YY`` year; ``MMMM`` ``MMM`` ``MM`` ``M`` month;
    ``dddd`` ``ddd`` weekday name; ``dd`` ``d`` day of month; ``hh`` ``h``
    ``HH`` ``H`` hours (00-23); ``mm`` ``m`` minutes; ``ss`` ``s``
    seconds; ``Z`` UTC offset (``+HH:MM``). Everything else is literal.

    Example:
        >>> format_date(datetime(2017, 3, 5, 7, 8, 9), "YYYY-MM-ddThh:mm:ss Z")
        '2017-03-05T07:08:09 +00:00'
    """

    def render(match: re.Match[str]) -> str:
        token = match.group(0)
        if token == "YYYY":
            return f"{value.year:04d}"
        if token == "YY":
            return f"{value.year % 100:02d}"
        if token == "MMMM":
            return _MONTHS[value.month - 1]
        if token == "MMM":
            return _MONTHS[value.month - 1][:3]
        if token == "MM":
            return f"{value.month:02d}"
        if token == "M":
            return str(value.month)
        if token == "dddd":
            return _WEEKDAYS[value.weekday()]
        if token == "ddd":
            return _WEEKDAYS[value.weekday()][:3]
        if token == "dd":
            return f"{value.day:02d}"
        if token == "d":
            return str(value.day)
        if token in ("hh", "HH"):
            return f"{value.hour:02d}"
        if token in ("h", "H"):
            return str(value.hour)
        if token == "mm":
            return f"{value.minute:02d}"
        if token == "m":
            return str(value.minute)
        if token == "ss":
            return f"{value.second:02d}"
        if token == "s":
            return str(value.second)
        return _utc_offset(value)

    return _DATE_TOKEN_RE.sub(render, pattern)


def format_number(value: int | float, pattern: str) -> str:
    """Render ``value`` using a numeral.js-style pattern.

    The numeric core runs from the first to the last ``0`` in the pattern;
    anything before or after it is a literal prefix or suffix. A ``,`` in
    the core enables thousands grouping and the zeros after ``.`` set the
    number of decimals. A ``%`` anywhere scales the value by 100.

    Raises:
        ValueError: If the pattern has no ``0`` digit placeholder

    Example:
        >>> format_number(1234.5, "$0,0.00")
        '$1,234.50'
        >>> format_number(-3, "0.0")
        '-3.0'
    """
    first = pattern.find("0")
    last = pattern.rfind("0")
    if first < 0:
        raise ValueError(f"number format {pattern!r} has no '0' digit placeholder")

    prefix, core, suffix = pattern[:first], pattern[first : last + 1], pattern[last + 1 :]
    if "%" in prefix or "%" in suffix:
        value = value * 100

    decimals = len(core.split(".", 1)[1]) if "." in core else 0
    grouping = "," if "," in core else ""
    body = f"{abs(value):{grouping}.{decimals}f}"
    sign = "-" if value < 0 and float(body.replace(",", "")) != 0 else ""
    return f"{sign}{prefix}{body}{suffix}"
