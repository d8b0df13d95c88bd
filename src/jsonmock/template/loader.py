"""JSON5 template loading.

Templates are JSON5 documents: unquoted keys, single-quoted strings,
trailing commas and comments are all accepted. Strict JSON is a subset.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

import json5
import structlog

from jsonmock.errors import TemplateParseError
from jsonmock.observability import traced

logger = structlog.get_logger(__name__)

# json5 reports errors as "<source>:<line> <reason> at column <col>"
_JSON5_ERROR_RE = re.compile(
    r"^(?:.*?):(?P<line>\d+) (?P<reason>.*?)(?: at column (?P<column>\d+))?$",
    re.DOTALL,
)


def _parse_error(err: ValueError, source: str) -> TemplateParseError:
    """Convert a json5 ValueError into a TemplateParseError with location."""
    message = str(err)
    match = _JSON5_ERROR_RE.match(message)
    if match is None:
        return TemplateParseError(message, source=source, internal_details=repr(err))

    column = match.group("column")
    return TemplateParseError(
        match.group("reason"),
        source=source,
        line=int(match.group("line")),
        column=int(column) if column else None,
        internal_details=repr(err),
    )


def loads_template(text: str, *, source: str = "<string>") -> Any:
    """Parse template text.

    Args:
        text: JSON5 document
        source: Name used in error messages

    Returns:
        Parsed value tree (dicts, lists, strings, numbers, booleans, None)

    Raises:
        TemplateParseError: If the text is not valid JSON5 or nests too deeply

    Example:
        >>> loads_template("{name: '{{firstName()}}'}")
        {'name': '{{firstName()}}'}
    """
    if not text.strip():
        raise TemplateParseError("template is empty", source=source)

    try:
        return json5.loads(text)
    except ValueError as err:
        raise _parse_error(err, source) from err
    except RecursionError as err:
        raise TemplateParseError(
            "template is nested too deeply",
            source=source,
            internal_details=repr(err),
        ) from None


def load_template(path: str | Path) -> Any:
    """Load a template file.

    The file extension is not significant: ``.json``, ``.json5`` and
    ``.js`` templates are all parsed as JSON5.

    Args:
        path: Template file path

    Returns:
        Parsed value tree

    Raises:
        FileNotFoundError: If the file does not exist
        PermissionError: If the file cannot be read
        TemplateParseError: If the file is not UTF-8 or not valid JSON5
    """
    template_path = Path(path)
    with traced("load_template", source=str(template_path)):
        try:
            text = template_path.read_text(encoding="utf-8")
        except UnicodeDecodeError as err:
            raise TemplateParseError(
                f"not UTF-8 text (byte {err.start})",
                source=str(template_path),
                internal_details=repr(err),
            ) from None
        template = loads_template(text, source=str(template_path))
        logger.debug("template_loaded", source=str(template_path), size=len(text))
        return template
