"""Placeholder grammar.

Template strings embed generator calls as ``{{name(arg, ...)}}`` tokens.
Arguments are literals only: numbers, quoted strings, ``true``, ``false``,
``null``, ``undefined`` and ``new Date(...)`` expressions. Template
content is interpreted, never evaluated.

Example:
    >>> parsed = parse_string("{{firstName()}} {{surname()}}")
    >>> [p.name for p in parsed.placeholders]
    ['firstName', 'surname']
"""

from __future__ import annotations

import re
from typing import Any

from jsonmock.errors import PlaceholderSyntaxError
from jsonmock.template.models import DateLiteral, ParsedString, Placeholder

OPEN = "{{"
CLOSE = "}}"

_IDENT_RE = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*")
_NUMBER_RE = re.compile(r"-?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_WS_RE = re.compile(r"\s*")

_KEYWORDS: dict[str, Any] = {
    "true": True,
    "false": False,
    "null": None,
    "undefined": None,
}

_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "0": "\0",
}


class _CallParser:
    """Recursive-descent parser over the inside of one ``{{...}}`` token."""

    def __init__(self, text: str, offset: int = 0, source: str | None = None) -> None:
        self.text = text
        self.pos = 0
        # Offset of ``text`` inside ``source``, for error columns
        self.offset = offset
        self.source = source if source is not None else text

    def error(self, message: str) -> PlaceholderSyntaxError:
        return PlaceholderSyntaxError(
            message,
            text=self.source,
            column=self.offset + self.pos,
        )

    def skip_ws(self) -> None:
        match = _WS_RE.match(self.text, self.pos)
        if match:
            self.pos = match.end()

    def peek(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def expect(self, char: str) -> None:
        self.skip_ws()
        if self.peek() != char:
            found = self.peek() or "end of placeholder"
            raise self.error(f"expected '{char}', found '{found}'")
        self.pos += 1

    def ident(self) -> str:
        self.skip_ws()
        match = _IDENT_RE.match(self.text, self.pos)
        if not match:
            raise self.error("expected a function name")
        self.pos = match.end()
        return match.group(0)

    def call(self) -> tuple[str, tuple[Any, ...]]:
        name = self.ident()
        args = self.arguments()
        self.skip_ws()
        if self.pos != len(self.text):
            raise self.error(f"unexpected '{self.text[self.pos:]}' after call")
        return name, args

    def arguments(self) -> tuple[Any, ...]:
        self.expect("(")
        args: list[Any] = []
        self.skip_ws()
        if self.peek() == ")":
            self.pos += 1
            return ()
        while True:
            args.append(self.literal())
            self.skip_ws()
            char = self.peek()
            if char == ",":
                self.pos += 1
                continue
            if char == ")":
                self.pos += 1
                return tuple(args)
            found = char or "end of placeholder"
            raise self.error(f"expected ',' or ')', found '{found}'")

    def literal(self) -> Any:
        self.skip_ws()
        char = self.peek()
        if char in ("'", '"'):
            return self.string(char)

        number = _NUMBER_RE.match(self.text, self.pos)
        if number:
            self.pos = number.end()
            token = number.group(0)
            if any(c in token for c in ".eE"):
                return float(token)
            return int(token)

        word = _IDENT_RE.match(self.text, self.pos)
        if word:
            name = word.group(0)
            if name in _KEYWORDS:
                self.pos = word.end()
                return _KEYWORDS[name]
            if name == "new":
                return self.date()

        found = char or "end of placeholder"
        raise self.error(f"expected a literal argument, found '{found}'")

    def string(self, quote: str) -> str:
        self.pos += 1
        chars: list[str] = []
        while self.pos < len(self.text):
            char = self.text[self.pos]
            if char == "\\":
                self.pos += 1
                if self.pos >= len(self.text):
                    break
                escaped = self.text[self.pos]
                if escaped == "u":
                    digits = self.text[self.pos + 1 : self.pos + 5]
                    if len(digits) != 4 or not all(c in "0123456789abcdefABCDEF" for c in digits):
                        raise self.error("invalid unicode escape")
                    chars.append(chr(int(digits, 16)))
                    self.pos += 4
                else:
                    chars.append(_ESCAPES.get(escaped, escaped))
            elif char == quote:
                self.pos += 1
                return "".join(chars)
            else:
                chars.append(char)
            self.pos += 1
        raise self.error("unterminated string")

    def date(self) -> DateLiteral:
        self.pos += len("new")
        if self.ident() != "Date":
            raise self.error("only 'new Date(...)' is supported")
        return DateLiteral(args=self.arguments())


def parse_call(
    expression: str,
    *,
    offset: int = 0,
    source: str | None = None,
) -> tuple[str, tuple[Any, ...]]:
    """Parse the inside of a token, e.g. ``integer(20, 40)``.

    Args:
        expression: Call expression without the surrounding braces
        offset: Offset of ``expression`` in ``source``
        source: Containing string, reported in syntax errors

    Returns:
        Tuple of (function name, literal arguments)

    Raises:
        PlaceholderSyntaxError: If the expression is malformed
    """
    return _CallParser(expression, offset, source).call()


def _find_close(text: str, start: int) -> int:
    """Return the index of the ``}}`` closing the token whose body starts at ``start``.

    Quoted strings are skipped so arguments may contain ``}}``.
    """
    pos = start
    quote = ""
    while pos < len(text):
        char = text[pos]
        if quote:
            if char == "\\":
                pos += 1
            elif char == quote:
                quote = ""
        elif char in ("'", '"'):
            quote = char
        elif text.startswith(CLOSE, pos):
            return pos
        pos += 1
    return -1


def parse_string(text: str) -> ParsedString:
    """Split a template string into literal text and placeholders.

    Args:
        text: Template string value

    Returns:
        ParsedString with parts in source order

    Raises:
        PlaceholderSyntaxError: If a token is unterminated or malformed

    Example:
        >>> parse_string("{{integer(20, 40)}}").is_single_placeholder
        True
    """
    parts: list[str | Placeholder] = []
    pos = 0

    while True:
        start = text.find(OPEN, pos)
        if start < 0:
            break
        body_start = start + len(OPEN)
        close = _find_close(text, body_start)
        if close < 0:
            raise PlaceholderSyntaxError("unterminated '{{'", text=text, column=start)

        name, args = parse_call(text[body_start:close], offset=body_start, source=text)
        end = close + len(CLOSE)
        if start > pos:
            parts.append(text[pos:start])
        parts.append(
            Placeholder(
                name=name,
                args=args,
                start=start,
                end=end,
                source=text[start:end],
            )
        )
        pos = end

    if pos < len(text):
        parts.append(text[pos:])

    return ParsedString(text=text, parts=tuple(parts))


def contains_placeholder(text: str) -> bool:
    """Cheap check for the token opener, without parsing."""
    return OPEN in text
