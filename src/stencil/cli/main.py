import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel

from ..config import CONFIG_DIR, get_repository
from ..domain.errors import StencilError
from ..domain.models import LookupOutcome
from ..services.fetch import FetchService
from ..services.info import InfoService
from ..sources import RemoteCatalogPackageSource
from ..templates.store import TemplateStore
from ..ui.progress import ProgressManager
from .config_commands import app as config_app

app = typer.Typer()
console = Console()

app.add_typer(config_app, name="config", help="Read and write stencil settings")

# repository chosen by the --repo option, resolved per invocation
state = {"repo": None}


def get_source() -> RemoteCatalogPackageSource:
    return RemoteCatalogPackageSource(state["repo"] or get_repository())


@app.callback()
def main_callback(
    repo: Optional[str] = typer.Option(None, "--repo", "-r", help="Catalog repository to query"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log catalog requests"),
):
    """resolve and download project templates from a package catalog."""
    state["repo"] = repo
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )


@app.command("list")
def list_templates():
    """list the templates available in the repository."""
    source = get_source()
    progress = ProgressManager(console)
    try:
        with progress.querying(source.name, "templates"):
            names = source.list_packages()
    except StencilError as e:
        console.print(f"[red]Error listing templates:[/red] {e}")
        raise typer.Exit(1)

    if not names:
        console.print(f"[yellow]No templates found in {source.name}.[/yellow]")
        return

    console.print(f"[bold]Templates in {source.name}:[/bold]")
    for name in names:
        console.print(f"  {name}")


@app.command()
def count():
    """show how many packages the repository hosts."""
    source = get_source()
    try:
        total = source.get_package_count()
    except StencilError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    console.print(f"{source.name}: {total} packages")


@app.command()
def info(name: str):
    """show information about a template."""
    lookup = InfoService(get_source(), console).show_info(name)
    if lookup.outcome is not LookupOutcome.FOUND:
        raise typer.Exit(1)


@app.command()
def url(
    name: str,
    version: Optional[str] = typer.Argument(None, help="Template version, latest if omitted"),
):
    """print the download URL of a template archive."""
    source = get_source()
    if version is None:
        lookup = source.lookup_package(name)
        if lookup.outcome is LookupOutcome.NOT_FOUND:
            console.print(f"[red]Package '{name}' not found in {source.name}.[/red]")
            raise typer.Exit(1)
        if lookup.error is not None:
            console.print(f"[red]Error:[/red] {lookup.error}")
            raise typer.Exit(1)
        version = lookup.info.latest_version

    console.print(source.get_template_url(name, version), soft_wrap=True)


@app.command()
def fetch(
    name: str,
    version: Optional[str] = typer.Argument(None, help="Template version, latest if omitted"),
    dest: Path = typer.Option(CONFIG_DIR / "templates", "--dest", help="Directory to store archives in"),
):
    """download a template archive."""
    source = get_source()
    service = FetchService(source, TemplateStore(dest), source.transport, ProgressManager(console))
    try:
        path = service.fetch(name, version)
    except StencilError as e:
        console.print(f"[red]Error fetching template:[/red] {e}")
        raise typer.Exit(1)

    console.print(Panel.fit(
        f"[bold green]Template Ready[/bold green]\n"
        f"Template: {name}\n"
        f"Archive: {path}",
        border_style="green"
    ))


if __name__ == "__main__":
    app()
