"""Template resolution engine.

This module provides the TemplateGenerator, which walks a parsed template
and replaces every placeholder with a generated value:
- Objects are resolved key by key (order preserved)
- Arrays starting with ``{{repeat(min, max)}}`` repeat their remaining
  elements a random number of times
- A string that is exactly one placeholder becomes the function's native
  value (bool, int, float, str)
- Any other string with placeholders becomes an interpolated string

Features:
- Deterministic seeding for reproducible fixtures
- Template validation without generation
- JSON paths on every error

Example:
    >>> generator = TemplateGenerator(seed=42)
    >>> data = generator.generate({"users": ["{{repeat(2)}}", {"age": "{{integer(20, 40)}}"}]})
    >>> len(data["users"])
    2
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any

import structlog
from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from jsonmock.config import GeneratorSettings
from jsonmock.errors import (
    MisplacedRepeatError,
    PlaceholderSyntaxError,
    RepeatBoundsError,
    TemplateError,
)
from jsonmock.generators import GenerationContext, default_registry
from jsonmock.generators.registry import FunctionRegistry
from jsonmock.observability import traced
from jsonmock.template.loader import load_template, loads_template
from jsonmock.template.models import ParsedString, Placeholder, RepeatMarker
from jsonmock.template.placeholders import contains_placeholder, parse_string

logger = structlog.get_logger(__name__)

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


class TemplateIssue(BaseModel):
    """A problem found by TemplateGenerator.validate.

    Attributes:
        path: JSON path of the offending node
        kind: Error class that generation would raise
        message: Human-readable description
    """

    model_config = ConfigDict(frozen=True)

    path: str
    kind: str
    message: str


def child_path(path: str, key: str | int) -> str:
    """Extend a JSON path with an object key or array index.

    Example:
        >>> child_path("$.countries", 0)
        '$.countries[0]'
        >>> child_path("$", "first name")
        "$['first name']"
    """
    if isinstance(key, int):
        return f"{path}[{key}]"
    if _IDENTIFIER_RE.match(key):
        return f"{path}.{key}"
    escaped = key.replace("\\", "\\\\").replace("'", "\\'")
    return f"{path}['{escaped}']"


def render_js(value: Any) -> str:
    """Render a generated value the way JavaScript string concatenation would."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def to_json(value: Any, *, pretty: bool = False) -> str:
    """Serialize generated data as JSON text."""
    if pretty:
        return json.dumps(value, ensure_ascii=False, indent=2)
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def _repeat_marker(placeholder: Placeholder, max_repeat: int) -> RepeatMarker:
    """Build a RepeatMarker from ``{{repeat(min[, max])}}`` arguments.

    Raises:
        RepeatBoundsError: If the bounds are missing, non-integral, negative,
            inverted or above ``max_repeat``
    """
    args = placeholder.args
    if not 1 <= len(args) <= 2:
        raise RepeatBoundsError(f"repeat() takes 1 or 2 arguments, got {len(args)}")
    for arg in args:
        if isinstance(arg, bool) or not isinstance(arg, int):
            raise RepeatBoundsError(f"repeat() bounds must be integers, got {arg!r}")

    low = args[0]
    high = args[1] if len(args) == 2 else low
    try:
        marker = RepeatMarker(min_count=low, max_count=high)
    except PydanticValidationError as err:
        details = "; ".join(e["msg"] for e in err.errors())
        raise RepeatBoundsError(f"invalid repeat({low}, {high}): {details}") from None

    if marker.max_count > max_repeat:
        raise RepeatBoundsError(
            f"repeat max ({marker.max_count}) exceeds the configured limit ({max_repeat})"
        )
    return marker


def _marker_placeholder(node: Any) -> Placeholder | None:
    """Return the repeat placeholder if ``node`` is a bare repeat marker string."""
    if not isinstance(node, str) or not contains_placeholder(node):
        return None
    parsed = parse_string(node.strip())
    if parsed.is_single_placeholder and parsed.placeholders[0].is_repeat:
        return parsed.placeholders[0]
    return None


class TemplateGenerator:
    """Resolves templates into generated JSON values.

    A generator owns one seeded Faker instance; successive ``generate``
    calls continue the same random sequence. Call ``reset`` to start over.

    Attributes:
        settings: Generator settings
        registry: Functions available to placeholders

    Example:
        >>> generator = TemplateGenerator(seed=7)
        >>> full_name = generator.generate("{{firstName()}} {{surname()}}")
    """

    def __init__(
        self,
        settings: GeneratorSettings | None = None,
        *,
        registry: FunctionRegistry | None = None,
        seed: int | None = None,
    ) -> None:
        """Initialize the generator.

        Args:
            settings: Generator settings (default: loaded from environment)
            registry: Function registry (default: the built-ins)
            seed: Overrides ``settings.seed`` when given
        """
        settings = settings or GeneratorSettings()
        if seed is not None:
            settings = settings.model_copy(update={"seed": seed})
        self.settings = settings
        self.registry = registry if registry is not None else default_registry
        self._ctx = GenerationContext(settings)

    def reset(self) -> None:
        """Re-seed the generator so the next run repeats the first one."""
        self._ctx = GenerationContext(self.settings)

    def generate(self, template: Any) -> Any:
        """Resolve every placeholder in ``template``.

        The template is not modified; a new value tree is returned.

        Args:
            template: Parsed template (dicts, lists, strings, scalars)

        Returns:
            Generated value tree

        Raises:
            TemplateError: If a placeholder is malformed, unknown, misplaced
                or given invalid arguments (always carries a JSON path)
        """
        with traced("generate", seed=self.settings.seed, locale=self.settings.locale):
            return self._resolve(template, "$")

    def generate_text(self, text: str, *, source: str = "<string>") -> Any:
        """Parse JSON5 template text and generate from it."""
        return self.generate(loads_template(text, source=source))

    def generate_file(self, path: str | Path) -> Any:
        """Load a template file and generate from it."""
        return self.generate(load_template(path))

    def _resolve(self, node: Any, path: str) -> Any:
        if isinstance(node, dict):
            return {key: self._resolve(value, child_path(path, key)) for key, value in node.items()}
        if isinstance(node, list):
            return self._resolve_list(node, path)
        if isinstance(node, str):
            return self._resolve_string(node, path)
        return node

    def _resolve_list(self, node: list[Any], path: str) -> list[Any]:
        try:
            marker_token = _marker_placeholder(node[0]) if node else None
        except TemplateError as err:
            raise err.at(child_path(path, 0)) from None

        if marker_token is None:
            return [self._resolve(item, child_path(path, i)) for i, item in enumerate(node)]

        try:
            marker = _repeat_marker(marker_token, self.settings.max_repeat)
        except TemplateError as err:
            raise err.at(child_path(path, 0)) from None

        count = self._ctx.fake.random.randint(marker.min_count, marker.max_count)
        body = node[1:]
        logger.debug("repeat_expanded", path=path, count=count, elements=len(body))

        result: list[Any] = []
        for i in range(count):
            self._ctx.push_index(i)
            try:
                for j, item in enumerate(body, start=1):
                    result.append(self._resolve(item, child_path(path, j)))
            finally:
                self._ctx.pop_index()
        return result

    def _resolve_string(self, text: str, path: str) -> Any:
        if not contains_placeholder(text):
            return text

        try:
            parsed = parse_string(text)
            values = [
                part if isinstance(part, str) else self._call(part)
                for part in parsed.parts
            ]
        except TemplateError as err:
            raise err.at(path) from None

        if parsed.is_single_placeholder:
            return values[0]
        return "".join(render_js(value) for value in values)

    def _call(self, placeholder: Placeholder) -> Any:
        if placeholder.is_repeat:
            raise MisplacedRepeatError("repeat() is only valid as the first element of an array")
        return self.registry.call(self._ctx, placeholder.name, placeholder.args)

    def validate(self, template: Any) -> list[TemplateIssue]:
        """Check a template without generating any data.

        Reports every malformed placeholder, unknown function, wrong argument
        count, misplaced repeat marker and invalid repeat bound.

        Args:
            template: Parsed template

        Returns:
            Issues in document order (empty when the template is valid)
        """
        issues: list[TemplateIssue] = []
        self._validate_node(template, "$", issues)
        logger.debug("template_validated", issues=len(issues))
        return issues

    def _validate_node(self, node: Any, path: str, issues: list[TemplateIssue]) -> None:
        if isinstance(node, dict):
            for key, value in node.items():
                self._validate_node(value, child_path(path, key), issues)
        elif isinstance(node, list):
            start = 0
            if node:
                marker_path = child_path(path, 0)
                try:
                    marker_token = _marker_placeholder(node[0])
                    if marker_token is not None:
                        _repeat_marker(marker_token, self.settings.max_repeat)
                        start = 1
                except TemplateError as err:
                    issues.append(_issue(err.at(marker_path)))
                    start = 1
            for i in range(start, len(node)):
                self._validate_node(node[i], child_path(path, i), issues)
        elif isinstance(node, str) and contains_placeholder(node):
            self._validate_string(node, path, issues)

    def _validate_string(self, text: str, path: str, issues: list[TemplateIssue]) -> None:
        try:
            parsed: ParsedString = parse_string(text)
        except PlaceholderSyntaxError as err:
            issues.append(_issue(err.at(path)))
            return

        for placeholder in parsed.placeholders:
            try:
                if placeholder.is_repeat:
                    raise MisplacedRepeatError(
                        "repeat() is only valid as the first element of an array"
                    )
                self.registry.check_arguments(placeholder.name, placeholder.args)
            except TemplateError as err:
                issues.append(_issue(err.at(path)))


def _issue(err: TemplateError) -> TemplateIssue:
    return TemplateIssue(path=err.path, kind=type(err).__name__, message=err.detail)
