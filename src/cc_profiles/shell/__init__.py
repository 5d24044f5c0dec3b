"""shell launchers for profiles."""
from .launcher import INTEGRATION_MARKER, LauncherGenerator
from .target import LauncherStyle, ShellFamily, ShellTarget, detect_target

__all__ = [
    "INTEGRATION_MARKER",
    "LauncherGenerator",
    "LauncherStyle",
    "ShellFamily",
    "ShellTarget",
    "detect_target",
]
