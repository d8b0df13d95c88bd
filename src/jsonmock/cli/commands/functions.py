"""jsonmock functions command - List available generator functions."""

from __future__ import annotations

import click

from jsonmock.cli.output import print_json_text, print_table


@click.command()
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    default=False,
    help="Print the list as JSON.",
)
def functions(as_json: bool) -> None:
    """List the generator functions usable in placeholders.

    Examples:

        jsonmock functions

        jsonmock functions --json
    """
    # Import here to avoid heavy imports at CLI startup
    from jsonmock.engine import to_json
    from jsonmock.generators import default_registry

    rows = list(default_registry.describe())
    if as_json:
        payload = [
            {"name": name, "signature": signature, "summary": summary}
            for name, signature, summary in rows
        ]
        print_json_text(to_json(payload, pretty=True))
        return

    print_table("Generator functions", ["Placeholder", "Description"], [(sig, summary) for _, sig, summary in rows])
