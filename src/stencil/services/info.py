from typing import Optional
from packaging.version import InvalidVersion, Version
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..domain.models import LookupOutcome, PackageInfo, PackageLookup
from ..sources.base import PackageSource

def _newest_first(versions):
    try:
        return sorted(versions, key=Version, reverse=True)
    except InvalidVersion:
        # keep catalog order (newest last) when versions aren't PEP 440
        return list(reversed(versions))

class InfoService:
    """handles fetching and displaying template package information."""

    def __init__(self, source: PackageSource, console: Optional[Console] = None):
        self.source = source
        self.console = console or Console()

    def show_info(self, package_name: str) -> PackageLookup:
        """
        look a package up and display what the source knows about it.

        returns the lookup so callers can act on its outcome.
        """
        lookup = self.source.lookup_package(package_name)

        if lookup.outcome is LookupOutcome.NOT_FOUND:
            self.console.print(f"[red]Package '{package_name}' not found in {self.source.name}.[/red]")
        elif lookup.outcome is LookupOutcome.NO_VERSIONS:
            self.console.print(f"[yellow]Package '{package_name}' has no published versions.[/yellow]")
        elif lookup.outcome is LookupOutcome.ERROR:
            self.console.print(f"[red]Error fetching package info:[/red] {lookup.error}")
        else:
            self.console.print(self.render(lookup.info))

        return lookup

    def render(self, info: PackageInfo) -> Panel:
        grid = Table.grid(expand=True)
        grid.add_column(style="bold cyan", justify="right")
        grid.add_column(style="white")

        grid.add_row("Name:", info.name)
        grid.add_row("Latest:", info.latest_version)
        grid.add_row("Description:", info.description or "No description provided.")

        if info.owner:
            grid.add_row("Owner:", info.owner)
        if info.info_url:
            grid.add_row("More info:", info.info_url)

        other_versions = [v for v in info.versions if v != info.latest_version]
        if other_versions:
            # show top 5 recent
            grid.add_row("Other Versions:", ", ".join(_newest_first(other_versions)[:5]))

        grid.add_row("Download:", info.template_url())

        return Panel(grid, title=f"📦 Template: {info.name}", border_style="cyan")
