"""Entry point of the `tracegen` command."""

from typing import Optional

import typer
from typing_extensions import Annotated

from tracegen_cli.commands.generate import app as generate_app
from tracegen_cli.commands.version import app as version_app
from tracegen_cli.commands.version import installed_version

app = typer.Typer(
    name='tracegen',
    help='Generate OpenTelemetry instrumentation for connect-go clients.',
    no_args_is_help=True,
    add_completion=False,
    pretty_exceptions_enable=False,
)


def print_version(value: bool):
    if value:
        typer.echo(f'tracegen {installed_version()}', err=True)
        raise typer.Exit()


@app.callback()
def main_options(
    version: Annotated[
        Optional[bool],
        typer.Option(
            '--version',
            callback=print_version,
            is_eager=True,
            help='Show the tracegen version and exit',
        ),
    ] = None,
):
    """Generate OpenTelemetry instrumentation for connect-go clients."""


app.add_typer(generate_app)
app.add_typer(version_app)


def main():
    app()
