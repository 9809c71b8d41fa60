import platform
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as metadata_version

import typer

from tracegen_cli.console.console import Console

app = typer.Typer()

console = Console()


def installed_version() -> str:
    try:
        return metadata_version('tracegen')
    except PackageNotFoundError:
        return 'development'


@app.command()
def version():
    """Show the tracegen, Python and platform versions."""
    console.highlight(f'tracegen {installed_version()}')
    console.muted(f'Python {platform.python_version()} on {platform.platform()}')
