"""terminal feedback while talking to a package source."""

import sys
from contextlib import contextmanager
from typing import Callable, Iterator, Optional
from rich.console import Console
from rich.progress import (
    Progress,
    TextColumn,
    BarColumn,
    DownloadColumn,
    TransferSpeedColumn,
)

# (bytes downloaded so far, total size if known)
DownloadCallback = Callable[[int, Optional[int]], None]


def _ignore_progress(downloaded: int, total: Optional[int]):
    pass


class ProgressManager:
    """spinners for catalog queries and transfer bars for archive downloads."""

    def __init__(self, console: Optional[Console] = None, enabled: Optional[bool] = None):
        self.console = console or Console()
        # piped output and CI logs get no live display
        self._enabled = sys.stdout.isatty() if enabled is None else enabled

    @contextmanager
    def querying(self, source_name: str, subject: str) -> Iterator[None]:
        """spinner naming the source and what is being asked of it."""
        if not self._enabled:
            yield
            return

        with self.console.status(f"Querying {source_name} for {subject}"):
            yield

    @contextmanager
    def downloading(self, label: str) -> Iterator[DownloadCallback]:
        """
        transfer bar for a single archive.

        yields a callback to report progress with; it does nothing when
        the display is disabled.
        """
        if not self._enabled:
            yield _ignore_progress
            return

        with Progress(
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            DownloadColumn(),
            TransferSpeedColumn(),
            console=self.console,
            transient=True,
        ) as progress:
            task_id = progress.add_task(f"Downloading {label}", total=None)

            def report(downloaded: int, total: Optional[int]):
                progress.update(task_id, completed=downloaded, total=total)

            yield report
