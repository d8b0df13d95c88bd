"""Template loading and placeholder grammar.

This module provides:
- load_template / loads_template: JSON5 parsing of template documents
- parse_string / parse_call: The ``{{name(args)}}`` placeholder grammar
- Placeholder, RepeatMarker, DateLiteral, ParsedString: Parsed models
"""

from __future__ import annotations

from jsonmock.template.loader import load_template, loads_template
from jsonmock.template.models import DateLiteral, ParsedString, Placeholder, RepeatMarker
from jsonmock.template.placeholders import contains_placeholder, parse_call, parse_string

__all__ = [
    "DateLiteral",
    "ParsedString",
    "Placeholder",
    "RepeatMarker",
    "contains_placeholder",
    "load_template",
    "loads_template",
    "parse_call",
    "parse_string",
]
