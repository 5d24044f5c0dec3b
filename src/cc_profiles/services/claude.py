import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from ..config import ProfilePaths

logger = logging.getLogger(__name__)

# tried in order until one answers
VERSION_COMMANDS: List[List[str]] = [
    ["claude", "--version"],
    ["~/.local/bin/claude", "--version"],
    ["npx", "@anthropic-ai/claude-code", "--version"],
]


@dataclass
class ClaudeStatus:
    """status of the Claude Code installation."""
    is_installed: bool
    is_configured: bool
    config_path: Path
    version: Optional[str] = None


def check_claude_installation(paths: ProfilePaths, timeout: float = 5.0) -> ClaudeStatus:
    """
    check whether Claude Code is installed and has been set up.

    a command that fails, is missing or times out just means "not
    installed"; nothing is raised.

    args:
        paths: resolved cc-profiles paths
        timeout: seconds to wait for each version command

    returns:
        installation status
    """
    version = _probe_version(paths, timeout)

    is_configured = paths.shared_root.exists() and paths.shared_credentials.exists()

    return ClaudeStatus(
        is_installed=version is not None,
        is_configured=is_configured,
        config_path=paths.shared_root,
        version=version,
    )


def _probe_version(paths: ProfilePaths, timeout: float) -> Optional[str]:
    for command in VERSION_COMMANDS:
        argv = list(command)
        if argv[0].startswith("~/"):
            argv[0] = str(paths.home / argv[0][2:])

        try:
            result = subprocess.run(
                argv,
                capture_output=True,
                text=True,
                timeout=timeout,
                check=True,
            )
        except (OSError, subprocess.CalledProcessError, subprocess.TimeoutExpired) as e:
            logger.debug(f"{' '.join(argv)} failed: {e}")
            continue

        return result.stdout.strip()

    return None
