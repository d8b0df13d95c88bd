"""CLI entry point for jsonmock.

Sub-commands are registered by name and imported on first use, so
``jsonmock --help`` never pulls in Faker or json5.
"""

from __future__ import annotations

import importlib
from typing import Any

import click
import rich_click as rclick

from jsonmock import __version__
from jsonmock.cli.output import set_no_color
from jsonmock.observability import LOG_LEVELS, configure_logging

rclick.rich_click.TEXT_MARKUP = "markdown"
rclick.rich_click.SHOW_ARGUMENTS = True
rclick.rich_click.GROUP_ARGUMENTS_OPTIONS = True

# command name -> "module:attribute"
COMMANDS = {
    "functions": "jsonmock.cli.commands.functions:functions",
    "generate": "jsonmock.cli.commands.generate:generate",
    "validate": "jsonmock.cli.commands.validate:validate",
}


class LazyGroup(rclick.RichGroup):
    """Rich help group whose commands are imported when first looked up.

    Attributes:
        command_targets: Command name to ``"module:attribute"`` target.
    """

    def __init__(
        self,
        *args: Any,
        command_targets: dict[str, str] | None = None,
        **kwargs: Any,
    ) -> None:
        """Initialize LazyGroup.

        Args:
            *args: Positional arguments for RichGroup.
            command_targets: Command name to import target, e.g.
                {"generate": "jsonmock.cli.commands.generate:generate"}
            **kwargs: Keyword arguments for RichGroup.
        """
        super().__init__(*args, **kwargs)
        self.command_targets: dict[str, str] = dict(command_targets or {})

    def list_commands(self, ctx: click.Context) -> list[str]:
        """List every command name, loaded or not.

        Args:
            ctx: Click context.

        Returns:
            Sorted command names.
        """
        return sorted({*super().list_commands(ctx), *self.command_targets})

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        """Return a registered command, importing and registering it if needed.

        Args:
            ctx: Click context.
            cmd_name: Name typed on the command line.

        Returns:
            The command, or None if the name is unknown.

        Raises:
            TypeError: If the import target is not a click command.
        """
        cmd = super().get_command(ctx, cmd_name)  # type: ignore[arg-type]
        if cmd is not None or cmd_name not in self.command_targets:
            return cmd

        module_name, _, attr_name = self.command_targets[cmd_name].partition(":")
        loaded = getattr(importlib.import_module(module_name), attr_name)
        if not isinstance(loaded, click.Command):
            raise TypeError(f"{module_name}:{attr_name} is not a click command")
        self.add_command(loaded, cmd_name)
        return loaded


def _disable_color(ctx: click.Context, param: click.Parameter, value: bool) -> None:
    if value:
        set_no_color(True)


@click.command(cls=LazyGroup, command_targets=COMMANDS)
@click.version_option(version=__version__, prog_name="jsonmock")
@click.option(
    "--no-color",
    is_flag=True,
    is_eager=True,
    expose_value=False,
    callback=_disable_color,
    help="Disable colored output.",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Minimum level of log lines written to stderr.",
)
@click.option("--log-json", is_flag=True, help="Write log lines as JSON.")
def cli(log_level: str, log_json: bool) -> None:
    """jsonmock - Generate mock JSON from templates.

    Templates are JSON5 documents whose strings contain placeholders such as
    `{{firstName()}}` or `{{integer(20, 40)}}`. An array starting with
    `{{repeat(min, max)}}` repeats its remaining elements.

    **Examples:**

    - `jsonmock generate template.json5` - Write generated data to result.json
    - `jsonmock generate template.json5 --seed 7 --stdout` - Reproducible output on stdout
    - `jsonmock validate template.json5` - Check placeholders without generating
    - `jsonmock functions` - List the available generator functions
    """
    configure_logging(log_level, json_logs=log_json)


if __name__ == "__main__":
    cli()
