"""console formatting for profiles."""
from pathlib import Path
from typing import Iterable

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..profiles.models import Profile


def format_path(path: Path, home: Path) -> str:
    """shorten paths under the home directory to ~/..."""
    try:
        return "~/" + path.relative_to(home).as_posix()
    except ValueError:
        return str(path)


def format_auth_status(is_authenticated: bool) -> str:
    if is_authenticated:
        return "[green]● Authenticated[/green]"
    return "[yellow]○ Not authenticated[/yellow]"


def format_link_status(links_ok: bool) -> str:
    if links_ok:
        return "[green]✓ Shared config linked[/green]"
    return "[red]✗ Shared config links broken[/red]"


def show_error(console: Console, message: str) -> None:
    console.print(f"[red]Error:[/red] {escape(message)}", soft_wrap=True)


def show_not_configured(console: Console) -> None:
    console.print(
        "[red]Claude Code is not configured.[/red]\n\n"
        "Run [cyan]claude[/cyan] first to set up your main configuration."
    )


def show_no_profiles(console: Console) -> None:
    console.print("[yellow]No profiles found.[/yellow]")
    console.print("\nCreate one with: [cyan]cc-profiles create[/cyan]")


def profiles_table(profiles: Iterable[Profile], link_checks: dict, home: Path) -> Table:
    """
    build the table shown by `cc-profiles list`.

    args:
        profiles: profiles to show
        link_checks: profile name -> result of verify_links
        home: home directory used to shorten paths
    """
    table = Table(title="Profiles")
    table.add_column("Name", style="cyan")
    table.add_column("Status")
    table.add_column("Config")
    table.add_column("Path", style="dim")
    table.add_column("Created", style="dim")

    for profile in profiles:
        table.add_row(
            profile.name,
            format_auth_status(profile.is_authenticated),
            format_link_status(link_checks.get(profile.name, False)),
            format_path(profile.path, home),
            profile.created_at.date().isoformat(),
        )

    return table


def next_steps_panel(name: str, rc_file: Path, integrated: bool) -> Panel:
    how = "open a new terminal or run" if integrated else "run"
    return Panel(
        f"Profile [cyan]{name}[/cyan] is ready!\n\n"
        f"To use it, {how}:\n"
        f"  [green]source {rc_file}[/green]\n\n"
        "Then start Claude with:\n"
        f"  [green]{name}[/green]\n\n"
        "First time? Run [cyan]/login[/cyan] inside Claude to authenticate.",
        title="Next Steps",
    )
