import logging
from dataclasses import dataclass
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.prompt import Confirm, Prompt

from .. import __version__
from ..config import ProfilePaths
from ..domain.errors import ErrorKind, ProfileError
from ..profiles import ProfileManager, explain_profile_name
from ..services.claude import check_claude_installation
from ..shell import LauncherGenerator, detect_target
from ..ui.output import (
    format_auth_status,
    format_link_status,
    format_path,
    next_steps_panel,
    profiles_table,
    show_error,
    show_no_profiles,
    show_not_configured,
)
from ..ui.progress import ProgressManager

app = typer.Typer(
    help="Manage multiple Claude Code profiles with shared configuration",
    no_args_is_help=False,
)
shell_app = typer.Typer(help="Manage shell integration for profile launchers")
app.add_typer(shell_app, name="shell")

console = Console()

MENU_CHOICES = ["create", "list", "remove", "exit"]


@dataclass
class AppContext:
    paths: ProfilePaths
    manager: ProfileManager
    launcher: LauncherGenerator
    progress: ProgressManager


def get_context() -> AppContext:
    """wire up the components for one invocation."""
    paths = ProfilePaths.from_home()
    manager = ProfileManager(paths)
    launcher = LauncherGenerator(paths, detect_target(paths), store=manager.store)
    return AppContext(paths, manager, launcher, ProgressManager(console))


def _version_callback(value: bool):
    if value:
        console.print(f"cc-profiles {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version and exit"
    ),
):
    """open the interactive menu when no command is given."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )

    if ctx.invoked_subcommand is None:
        interactive()


def _ensure_configured(context: AppContext) -> None:
    status = check_claude_installation(context.paths)
    if not status.is_configured:
        show_not_configured(console)
        raise typer.Exit(1)


def _prompt_profile_name(existing: List[str]) -> str:
    while True:
        name = Prompt.ask("Profile name (e.g. work, personal)", console=console).strip()
        reason = explain_profile_name(name)
        if reason is None and name in existing:
            reason = f'Profile "{name}" already exists'
        if reason is None:
            return name
        console.print(f"[red]{reason}[/red]")


def _select_profile(context: AppContext) -> Optional[str]:
    names = context.manager.profile_names()
    if not names:
        show_no_profiles(console)
        return None
    return Prompt.ask("Select profile to remove", choices=names, console=console)


def run_create(context: AppContext, name: Optional[str] = None, setup_shell: Optional[bool] = None) -> None:
    """
    create a profile and refresh the launchers.

    raises:
        ProfileError: if the profile cannot be created
    """
    if name is None:
        name = _prompt_profile_name(context.manager.profile_names())

    with context.progress.spinner("Creating profile...", done="Profile created!"):
        profile = context.manager.create_profile(name)

    for link in profile.linked:
        console.print(f"  [dim]│[/dim] Symlinked {link.target.name}")

    with context.progress.spinner("Updating shell aliases...", done="Shell aliases updated!"):
        context.launcher.sync_from_store()

    launcher = context.launcher
    if not launcher.is_integrated():
        if setup_shell is None:
            setup_shell = Confirm.ask(
                "Shell integration not found. Set it up now?", default=True, console=console
            )
        if setup_shell:
            rc_file = launcher.setup_integration()
            console.print(f"[green]✓[/green] Added shell integration to {rc_file}")

    console.print(next_steps_panel(name, launcher.target.rc_file, launcher.is_integrated()))


def run_list(context: AppContext) -> None:
    profiles = context.manager.list_profiles()

    if not profiles:
        show_no_profiles(console)
        return

    console.print(f"Found [cyan]{len(profiles)}[/cyan] profile(s):\n")
    link_checks = {p.name: context.manager.verify_links(p.name) for p in profiles}
    console.print(profiles_table(profiles, link_checks, context.paths.home))


def run_remove(context: AppContext, name: Optional[str] = None, assume_yes: bool = False) -> None:
    """
    remove a profile and refresh the launchers.

    raises:
        ProfileError: if the profile cannot be removed
    """
    if name is None:
        name = _select_profile(context)
        if name is None:
            return

    if not assume_yes and not Confirm.ask(
        f'Remove profile "{name}"? Its credentials will be deleted.', default=False, console=console
    ):
        console.print("[dim]Profile removal cancelled.[/dim]")
        return

    with context.progress.spinner("Removing profile...", done="Profile removed!"):
        context.manager.remove_profile(name)

    with context.progress.spinner("Updating shell aliases...", done="Shell aliases updated!"):
        context.launcher.sync_from_store()

    console.print(f'[green]✓[/green] Profile "{name}" has been removed.')
    console.print(
        f"Open a new terminal or run 'source {context.launcher.target.rc_file}' to apply changes."
    )


def _fail(error: ProfileError) -> None:
    show_error(console, str(error))
    if error.kind is ErrorKind.BASE_NOT_CONFIGURED:
        console.print("Run [cyan]claude[/cyan] once to initialize it, then try again.")
    raise typer.Exit(1)


@app.command("create")
def create_profile(
    name: Optional[str] = typer.Argument(None, help="Name of the new profile"),
    shell_integration: Optional[bool] = typer.Option(
        None, "--shell-integration/--no-shell-integration", help="Set up shell integration without asking"
    ),
):
    """create a new profile linked to the shared ~/.claude configuration."""
    context = get_context()
    _ensure_configured(context)

    if name is not None and name in context.manager.profile_names():
        show_error(console, f'Profile "{name}" already exists.')
        raise typer.Exit(1)

    try:
        run_create(context, name, setup_shell=shell_integration)
    except ProfileError as e:
        _fail(e)


@app.command("list")
def list_profiles():
    """list all profiles."""
    run_list(get_context())


@app.command("ls", hidden=True)
def list_profiles_alias():
    """list all profiles."""
    list_profiles()


@app.command("remove")
def remove_profile(
    name: Optional[str] = typer.Argument(None, help="Profile to remove"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
):
    """remove a profile and its credentials."""
    context = get_context()

    if name is not None and not context.manager.profile_exists(name):
        show_error(console, f'Profile "{name}" does not exist.')
        raise typer.Exit(1)

    try:
        run_remove(context, name, assume_yes=yes)
    except ProfileError as e:
        _fail(e)


@app.command("rm", hidden=True)
def remove_profile_alias(
    name: Optional[str] = typer.Argument(None, help="Profile to remove"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
):
    """remove a profile and its credentials."""
    remove_profile(name, yes)


@app.command("status")
def profile_status(name: str = typer.Argument(..., help="Profile to inspect")):
    """show authentication and shared-config link state of a profile."""
    context = get_context()
    profile = context.manager.get_profile(name)

    if profile is None:
        show_error(console, f'Profile "{name}" does not exist.')
        raise typer.Exit(1)

    console.print(f"\n[bold]{profile.name}[/bold]")
    console.print(f"  Status: {format_auth_status(profile.is_authenticated)}")
    console.print(f"  Config: {format_link_status(context.manager.verify_links(name))}")
    console.print(f"  Path:   {format_path(profile.path, context.paths.home)}\n")

    for link in context.manager.link_status(name):
        if not link.exists:
            mark = "[dim]-[/dim]"
        elif link.is_link and link.target_resolves:
            mark = "[green]✓[/green]"
        elif link.is_link:
            mark = "[red]✗ broken[/red]"
        else:
            mark = "[yellow]local copy[/yellow]"
        console.print(f"  {mark} {link.name}")


@app.command("interactive")
def interactive():
    """open the interactive menu."""
    context = get_context()
    console.rule("cc-profiles")
    _ensure_configured(context)

    while True:
        action = Prompt.ask("What would you like to do?", choices=MENU_CHOICES, default="list", console=console)

        if action == "exit":
            break

        try:
            if action == "create":
                run_create(context)
            elif action == "list":
                run_list(context)
            elif action == "remove":
                run_remove(context)
        except ProfileError as e:
            show_error(console, str(e))

        console.print()

    console.print("Goodbye!")


@shell_app.command("setup")
def shell_setup():
    """source the profile launchers from your shell startup file."""
    context = get_context()
    try:
        context.launcher.sync_from_store()
        rc_file = context.launcher.setup_integration()
    except ProfileError as e:
        _fail(e)
    console.print(f"[green]✓[/green] Shell integration is set up in {rc_file}")


@shell_app.command("teardown")
def shell_teardown():
    """remove the shell integration and the generated launcher file."""
    context = get_context()
    try:
        context.launcher.teardown_integration()
    except ProfileError as e:
        _fail(e)
    console.print("[green]✓[/green] Shell integration removed")


if __name__ == "__main__":
    app()
