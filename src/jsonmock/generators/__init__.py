"""Generator functions for template placeholders.

This module provides:
- FunctionRegistry / default_registry: Name to function mapping
- GenerationContext: Seeded Faker instance and per-run state
- builtins: country, objectId, bool, floating, integer, firstName,
  surname, company, email, date, lorem, and friends

Importing this package registers the built-ins on ``default_registry``.
"""

from __future__ import annotations

from jsonmock.generators import builtins as _builtins  # noqa: F401  (registers built-ins)
from jsonmock.generators.base import GenerationContext
from jsonmock.generators.registry import FunctionRegistry, default_registry, register

__all__ = [
    "FunctionRegistry",
    "GenerationContext",
    "default_registry",
    "register",
]
