"""Generator function registry.

Maps placeholder function names to callables. Every generator function
takes the GenerationContext first, followed by the placeholder's literal
arguments:

    >>> registry = FunctionRegistry()
    >>> @registry.register("answer")
    ... def answer(ctx):
    ...     \"\"\"The answer.\"\"\"
    ...     return 42
"""

from __future__ import annotations

import inspect
from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING, Any

from jsonmock.errors import GeneratorArgumentError, UnknownFunctionError
from jsonmock.template.models import DateLiteral

if TYPE_CHECKING:
    from jsonmock.generators.base import GenerationContext

GeneratorFunction = Callable[..., Any]


def _render_parameter(param: inspect.Parameter) -> str:
    """Render a parameter in template syntax, e.g. ``min=0`` or ``...values``."""
    if param.kind is inspect.Parameter.VAR_POSITIONAL:
        return f"...{param.name}"
    if param.default is inspect.Parameter.empty:
        return param.name

    default = param.default
    if default is None:
        rendered = "null"
    elif isinstance(default, bool):
        rendered = "true" if default else "false"
    elif isinstance(default, str):
        rendered = f'"{default}"'
    elif isinstance(default, DateLiteral):
        rendered = f"new Date({', '.join(str(a) for a in default.args)})"
    else:
        rendered = str(default)
    return f"{param.name}={rendered}"


class FunctionRegistry:
    """Named collection of generator functions."""

    def __init__(self) -> None:
        self._functions: dict[str, GeneratorFunction] = {}

    def register(self, name: str) -> Callable[[GeneratorFunction], GeneratorFunction]:
        """Decorator registering ``fn`` under ``name``.

        Raises:
            ValueError: If ``name`` is already registered
        """

        def inner(fn: GeneratorFunction) -> GeneratorFunction:
            self.add(name, fn)
            return fn

        return inner

    def add(self, name: str, fn: GeneratorFunction) -> None:
        """Register ``fn`` under ``name``.

        Raises:
            ValueError: If ``name`` is already registered
        """
        if name in self._functions:
            raise ValueError(f"Duplicate generator function: {name}")
        self._functions[name] = fn

    def get(self, name: str) -> GeneratorFunction:
        """Look up a function by name.

        Raises:
            UnknownFunctionError: If no function has that name
        """
        try:
            return self._functions[name]
        except KeyError:
            raise UnknownFunctionError(name, self.names()) from None

    def __contains__(self, name: object) -> bool:
        return name in self._functions

    def __len__(self) -> int:
        return len(self._functions)

    def names(self) -> list[str]:
        """Registered names, sorted."""
        return sorted(self._functions)

    def describe(self) -> Iterator[tuple[str, str, str]]:
        """Yield ``(name, signature, summary)`` for each function, sorted by name."""
        for name in self.names():
            fn = self._functions[name]
            params = list(inspect.signature(fn).parameters.values())[1:]
            signature = f"{name}({', '.join(_render_parameter(p) for p in params)})"
            doc = inspect.getdoc(fn) or ""
            summary = doc.splitlines()[0] if doc else ""
            yield name, signature, summary

    def check_arguments(self, name: str, args: tuple[Any, ...]) -> None:
        """Verify that ``args`` fit the function's signature.

        Raises:
            UnknownFunctionError: If no function has that name
            GeneratorArgumentError: If the argument count is wrong
        """
        fn = self.get(name)
        try:
            inspect.signature(fn).bind(None, *args)
        except TypeError as err:
            raise GeneratorArgumentError(name, str(err)) from None

    def call(self, ctx: GenerationContext, name: str, args: tuple[Any, ...]) -> Any:
        """Invoke a function with the context and literal arguments.

        Raises:
            UnknownFunctionError: If no function has that name
            GeneratorArgumentError: If the arguments are invalid
        """
        self.check_arguments(name, args)
        return self._functions[name](ctx, *args)

    def copy(self) -> FunctionRegistry:
        """Return an independent registry with the same functions.

        Useful for adding custom functions without touching the defaults.
        """
        clone = FunctionRegistry()
        clone._functions = dict(self._functions)
        return clone


default_registry = FunctionRegistry()


def register(name: str) -> Callable[[GeneratorFunction], GeneratorFunction]:
    """Register a function on the default registry."""
    return default_registry.register(name)
