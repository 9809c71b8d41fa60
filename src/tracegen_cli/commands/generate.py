import sys
from pathlib import Path
from typing import Optional, List, Annotated

import typer

from tracegen_core.exceptions import TracegenException
from tracegen_core.facade import Tracegen
from tracegen_core.models.config import TracegenConfig
from tracegen_core.tracing import tracer
from tracegen_cli.console.console import Console

app = typer.Typer()

console = Console()


@app.command()
def generate(
    directories: Annotated[
        Optional[List[Path]],
        typer.Argument(
            help='Directories to walk looking for connect-go files. When omitted, the source is read from stdin and the result printed to stdout',
            file_okay=False,
            dir_okay=True,
        ),
    ] = None,
    lifecycle: Annotated[
        Optional[bool],
        typer.Option(
            '--lifecycle/--no-lifecycle',
            help='Emit tracer provider initialization and shutdown helpers (default: TRACEGEN_INCLUDE_PROVIDER_LIFECYCLE)',
        ),
    ] = None,
    toggle: Annotated[
        Optional[bool],
        typer.Option(
            '--toggle/--no-toggle',
            help='Emit a switch to turn instrumentation on and off at runtime (default: TRACEGEN_RUNTIME_TOGGLE)',
        ),
    ] = None,
    global_tracer: Annotated[
        bool,
        typer.Option(
            '--global-tracer',
            help='Use package level tracers instead of passing a tracer to each instrumented client',
        ),
    ] = False,
    env_file: Annotated[
        Optional[str],
        typer.Option(
            '--env',
            '-e',
            help='Path to .env file with configuration',
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
        ),
    ] = None,
):
    """Generate OpenTelemetry instrumented connect-go clients."""
    config = TracegenConfig(_env_file=env_file) if env_file else TracegenConfig()

    if lifecycle is not None:
        config.include_provider_lifecycle = lifecycle
    if toggle is not None:
        config.runtime_toggle = toggle
    if global_tracer:
        config.tracer_as_injectable_capability = False

    Tracegen.configure(config)

    try:
        if not directories:
            source = sys.stdin.buffer.read()
            artifact = Tracegen.generate(source)
            typer.echo(artifact.text, nl=False)
            return

        for directory in directories:
            with console.spinner(f'Walking {directory}...'):
                written = Tracegen.generate_tree(directory)

            for path in written:
                console.success(f'Generated {path}')

            if not written:
                console.warning(f'No {config.input_filename} found in {directory}')

    except (TracegenException, OSError) as e:
        console.error(str(e))
        raise typer.Exit(1)
    finally:
        tracer.shutdown()
