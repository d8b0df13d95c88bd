"""jsonmock validate command - Check a template without generating data."""

from __future__ import annotations

from pathlib import Path

import click

from jsonmock.cli.errors import (
    EXIT_USER_ERROR,
    CLIError,
    invalid_settings,
    missing_template,
    permission_denied,
)
from jsonmock.cli.output import error, success


@click.command()
@click.argument("template", type=click.Path(dir_okay=False))
def validate(template: str) -> None:
    """Validate the placeholders in TEMPLATE.

    Reports malformed placeholders, unknown functions, wrong argument counts
    and misplaced or invalid repeat markers, each with its JSON path.

    Examples:

        jsonmock validate countries.json5
    """
    path = Path(template)
    if not path.exists():
        missing_template(template)

    # Import here to avoid heavy imports at CLI startup
    from pydantic import ValidationError as PydanticValidationError

    from jsonmock.config import GeneratorSettings
    from jsonmock.engine import TemplateGenerator
    from jsonmock.errors import JsonMockError
    from jsonmock.template.loader import load_template

    try:
        settings = GeneratorSettings()
    except PydanticValidationError as e:
        invalid_settings(e)

    try:
        parsed = load_template(path)
        issues = TemplateGenerator(settings).validate(parsed)
    except PermissionError:
        permission_denied(template, "read")
    except JsonMockError as e:
        raise CLIError.from_library(e) from None

    if not issues:
        success(f"Template valid: {template}")
        return

    for issue in issues:
        error(f"{issue.path}: {issue.message} [{issue.kind}]")
    raise SystemExit(EXIT_USER_ERROR)
