import typer
from rich.console import Console

from ..config import get_setting, set_setting

app = typer.Typer()
console = Console()


@app.command("get")
def get_value(key: str):
    """show a setting, as seen from the environment or the config file."""
    value = get_setting(key)
    if value is None:
        console.print(f"[yellow]{key} is not set.[/yellow]")
        raise typer.Exit(1)
    console.print(value)


@app.command("set")
def set_value(key: str, value: str):
    """
    store a setting in the config file.

    e.g. STENCIL_REPOSITORY, HTTPS_PROXY_HOST or HTTPS_PROXY_PORT.
    """
    try:
        set_setting(key, value)
    except RuntimeError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    console.print(f"[green]✓[/green] {key}={value}")
