"""shell detection."""
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from ..config import ProfilePaths


class ShellFamily(Enum):
    ZSH = "zsh"
    BASH = "bash"
    FISH = "fish"
    UNKNOWN = "unknown"


class LauncherStyle(Enum):
    """
    how profile launchers reach the shell.

    SCRIPT: a sourced file of POSIX-style functions (zsh, bash).
    AUTOLOAD: a function file the shell loads on its own (fish).
    """
    SCRIPT = "script"
    AUTOLOAD = "autoload"


@dataclass(frozen=True)
class ShellTarget:
    family: ShellFamily
    rc_file: Path
    artifact_path: Path

    @property
    def style(self) -> LauncherStyle:
        if self.family is ShellFamily.FISH:
            return LauncherStyle.AUTOLOAD
        return LauncherStyle.SCRIPT


def detect_target(paths: ProfilePaths, shell: Optional[str] = None) -> ShellTarget:
    """
    work out the user's shell, its startup file and where launchers go.

    args:
        paths: resolved cc-profiles paths
        shell: shell path to inspect; defaults to $SHELL
    """
    if shell is None:
        shell = os.environ.get("SHELL", "")

    home = paths.home

    if "zsh" in shell:
        return ShellTarget(ShellFamily.ZSH, home / ".zshrc", paths.aliases_file)

    if "bash" in shell:
        # .bash_profile on macOS, .bashrc on Linux
        bash_profile = home / ".bash_profile"
        rc_file = bash_profile if bash_profile.exists() else home / ".bashrc"
        return ShellTarget(ShellFamily.BASH, rc_file, paths.aliases_file)

    if "fish" in shell:
        return ShellTarget(
            ShellFamily.FISH,
            home / ".config" / "fish" / "config.fish",
            paths.fish_functions_file,
        )

    return ShellTarget(ShellFamily.UNKNOWN, home / ".bashrc", paths.aliases_file)
