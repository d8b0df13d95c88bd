"""Template-driven mock JSON data generation.

This package turns JSON5 templates containing ``{{placeholder()}}`` tokens
into concrete JSON documents.

Key Components:
- template: JSON5 loading and placeholder grammar
- generators: Faker-backed generator functions and their registry
- engine: Template resolution with repeat markers
- config: Environment-driven generator settings
- cli: The ``jsonmock`` command line

Example:
    >>> from jsonmock import TemplateGenerator, load_template
    >>>
    >>> template = load_template("countries.json5")
    >>> generator = TemplateGenerator(seed=42)
    >>> data = generator.generate(template)
"""

from __future__ import annotations

__version__ = "0.1.0"

from jsonmock.config import GeneratorSettings
from jsonmock.engine import TemplateGenerator, TemplateIssue
from jsonmock.errors import (
    ConfigurationError,
    GeneratorArgumentError,
    JsonMockError,
    MisplacedRepeatError,
    PlaceholderSyntaxError,
    RepeatBoundsError,
    TemplateError,
    TemplateParseError,
    UnknownFunctionError,
)
from jsonmock.template.loader import load_template, loads_template

__all__ = [
    "__version__",
    "ConfigurationError",
    "GeneratorArgumentError",
    "GeneratorSettings",
    "JsonMockError",
    "MisplacedRepeatError",
    "PlaceholderSyntaxError",
    "RepeatBoundsError",
    "TemplateError",
    "TemplateGenerator",
    "TemplateIssue",
    "TemplateParseError",
    "UnknownFunctionError",
    "load_template",
    "loads_template",
]
