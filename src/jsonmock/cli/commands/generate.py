"""jsonmock generate command - Resolve a template into JSON data."""

from __future__ import annotations

from pathlib import Path

import click

from jsonmock.cli.errors import (
    CLIError,
    invalid_settings,
    missing_template,
    permission_denied,
    write_failed,
)
from jsonmock.cli.output import print_json_text, success


@click.command()
@click.argument("template", type=click.Path(dir_okay=False))
@click.option(
    "-t",
    "--target",
    "target_path",
    type=click.Path(dir_okay=False),
    default="result.json",
    help="Output file [default: result.json]",
)
@click.option(
    "-p",
    "--pretty",
    is_flag=True,
    default=False,
    help="Indent the generated JSON.",
)
@click.option(
    "-s",
    "--seed",
    type=int,
    default=None,
    help="Random seed for reproducible output [env: JSONMOCK_SEED]",
)
@click.option(
    "--locale",
    type=str,
    default=None,
    help="Faker locale, e.g. de_DE [env: JSONMOCK_LOCALE]",
)
@click.option(
    "--stdout",
    "to_stdout",
    is_flag=True,
    default=False,
    help="Print the generated JSON instead of writing --target.",
)
def generate(
    template: str,
    target_path: str,
    pretty: bool,
    seed: int | None,
    locale: str | None,
    to_stdout: bool,
) -> None:
    """Generate JSON data from TEMPLATE.

    Every placeholder in the JSON5 template is replaced with generated data.

    Examples:

        jsonmock generate countries.json5

        jsonmock generate countries.json5 --target countries.json --pretty

        jsonmock generate countries.json5 --seed 42 --stdout
    """
    path = Path(template)
    if not path.exists():
        missing_template(template)

    # Import here to avoid heavy imports at CLI startup
    from pydantic import ValidationError as PydanticValidationError

    from jsonmock.config import GeneratorSettings
    from jsonmock.engine import TemplateGenerator, to_json
    from jsonmock.errors import JsonMockError

    overrides = {"seed": seed, "locale": locale}
    try:
        settings = GeneratorSettings(**{k: v for k, v in overrides.items() if v is not None})
    except PydanticValidationError as e:
        invalid_settings(e)

    try:
        data = TemplateGenerator(settings).generate_file(path)
    except PermissionError:
        permission_denied(template, "read")
    except JsonMockError as e:
        raise CLIError.from_library(e) from None

    text = to_json(data, pretty=pretty)
    if to_stdout:
        print_json_text(text)
        return

    target = Path(target_path)
    try:
        target.write_text(text + "\n", encoding="utf-8")
    except PermissionError:
        permission_denied(target_path, "write")
    except OSError as e:
        write_failed(target_path, e)

    success(f"Generated {target}")
