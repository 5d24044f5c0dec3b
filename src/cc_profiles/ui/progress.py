"""spinner handling for cc-profiles commands."""

import sys
from contextlib import contextmanager
from typing import Optional
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn


class ProgressManager:
    """shows spinners on a terminal and plain messages everywhere else."""

    def __init__(self, console: Optional[Console] = None):
        """
        initialize progress manager.

        args:
            console: optional rich console instance. if not provided, creates new one.
        """
        self.console = console or Console()
        self._enabled = self._should_show_progress()

    def _should_show_progress(self) -> bool:
        """
        check if we should show spinners.

        returns false in non-interactive environments (ci/cd, piped output).
        """
        return sys.stdout.isatty() and not sys.stdout.closed and self.console.is_terminal

    @contextmanager
    def spinner(self, description: str, done: Optional[str] = None):
        """
        show an indeterminate spinner while the block runs.

        args:
            description: text to display next to spinner
            done: message printed once the block finishes without error
        """
        if not self._enabled:
            # in non-interactive mode, just print the message
            self.console.print(f"{description}")
            yield
        else:
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                console=self.console,
                transient=True,
            ) as progress:
                progress.add_task(description, total=None)
                yield

        if done:
            self.console.print(f"[green]✓[/green] {done}")
