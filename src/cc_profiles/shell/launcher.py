"""generation of the shell functions that launch each profile."""
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from ..config import ProfilePaths
from ..domain.errors import FilesystemError
from ..profiles.store import ProfileStore
from ..profiles.validation import is_valid_profile_name
from .target import LauncherStyle, ShellTarget

logger = logging.getLogger(__name__)

INTEGRATION_MARKER = "# cc-profiles shell integration"

LIST_FUNCTION_NAME = "cc-list"

_HEADER_LINES = (
    "# Auto-generated by cc-profiles - DO NOT EDIT MANUALLY",
    "# This file is regenerated when profiles are created/removed",
)

_LIST_INTRO = "Available Claude Code profiles:"
_LIST_HINT = "Run any profile name as a command to start Claude with that profile."


class LauncherRenderer:
    """renders one launcher function per profile plus the cc-list function."""

    def header(self, generated_at: str) -> str:
        raise NotImplementedError

    def function(self, name: str) -> str:
        raise NotImplementedError

    def list_function(self, names: Sequence[str]) -> str:
        raise NotImplementedError

    def render(self, names: Sequence[str], generated_at: str) -> str:
        functions = "\n\n".join(self.function(name) for name in names)
        return self.header(generated_at) + functions + "\n" + self.list_function(names) + "\n"


class ScriptRenderer(LauncherRenderer):
    """bash/zsh function syntax, written to a file the rc file sources."""

    def header(self, generated_at: str) -> str:
        return "#!/bin/bash\n" + "\n".join(_HEADER_LINES) + f"\n# Generated: {generated_at}\n\n"

    def function(self, name: str) -> str:
        return (
            f"{name}() {{\n"
            f'    CLAUDE_CONFIG_DIR="$HOME/.claude-{name}" command claude "$@"\n'
            f"}}"
        )

    def list_function(self, names: Sequence[str]) -> str:
        echoes = "\n".join(f'    echo "  {name}"' for name in names)
        return (
            "\n# List all available profiles\n"
            f"{LIST_FUNCTION_NAME}() {{\n"
            f'    echo "{_LIST_INTRO}"\n'
            f"{echoes}\n"
            '    echo ""\n'
            f'    echo "{_LIST_HINT}"\n'
            "}"
        )


class AutoloadRenderer(LauncherRenderer):
    """fish function syntax, written into fish's autoloaded functions directory."""

    def header(self, generated_at: str) -> str:
        return "\n".join(_HEADER_LINES) + f"\n# Generated: {generated_at}\n\n"

    def function(self, name: str) -> str:
        return (
            f"function {name}\n"
            f'    set -x CLAUDE_CONFIG_DIR "$HOME/.claude-{name}"\n'
            "    command claude $argv\n"
            "end"
        )

    def list_function(self, names: Sequence[str]) -> str:
        echoes = "\n".join(f'    echo "  {name}"' for name in names)
        return (
            f"\nfunction {LIST_FUNCTION_NAME}\n"
            f'    echo "{_LIST_INTRO}"\n'
            f"{echoes}\n"
            '    echo ""\n'
            f'    echo "{_LIST_HINT}"\n'
            "end"
        )


RENDERERS: Dict[LauncherStyle, LauncherRenderer] = {
    LauncherStyle.SCRIPT: ScriptRenderer(),
    LauncherStyle.AUTOLOAD: AutoloadRenderer(),
}


class LauncherGenerator:
    """
    keeps the generated launcher file in step with the registered profiles.

    the file is always rewritten in full from the list of profile names;
    it is never edited in place.
    """

    def __init__(self, paths: ProfilePaths, target: ShellTarget, store: Optional[ProfileStore] = None):
        self.paths = paths
        self.target = target
        self.store = store or ProfileStore(paths.profiles_config)
        self.renderer = RENDERERS[target.style]

    @property
    def artifact_path(self) -> Path:
        return self.target.artifact_path

    def render(self, names: Sequence[str], generated_at: Optional[str] = None) -> str:
        if generated_at is None:
            generated_at = datetime.now(timezone.utc).isoformat()
        return self.renderer.render(names, generated_at)

    def regenerate(self, names: Sequence[str]) -> None:
        """
        rewrite the launcher file for the given profile names.

        an empty list deletes the file. names that are not valid profile
        names are skipped.

        raises:
            FilesystemError: if the file cannot be written or deleted
        """
        artifact = self.artifact_path

        skipped = [name for name in names if not is_valid_profile_name(name)]
        if skipped:
            logger.warning(f"not writing launchers for invalid profile names: {skipped}")
        names = [name for name in names if is_valid_profile_name(name)]

        if not names:
            if artifact.exists():
                try:
                    artifact.unlink()
                except OSError as e:
                    raise FilesystemError("delete", artifact, e) from e
                logger.debug(f"removed {artifact}")
            return

        try:
            if self.target.style is LauncherStyle.AUTOLOAD:
                artifact.parent.mkdir(parents=True, exist_ok=True)

            artifact.write_text(self.render(names))
            artifact.chmod(0o644)
        except OSError as e:
            raise FilesystemError("write", artifact, e) from e
        logger.debug(f"wrote {len(names)} launcher(s) to {artifact}")

    def sync_from_store(self) -> List[str]:
        """
        regenerate the launcher file from ~/.cc-profiles.json.

        call after every profile create or remove.

        returns:
            the profile names written
        """
        names = self.store.profile_names()
        self.regenerate(names)
        return names

    def is_integrated(self) -> bool:
        """check if the rc file already sources the launcher file."""
        if self.target.style is LauncherStyle.AUTOLOAD:
            return True

        rc_file = self.target.rc_file
        if not rc_file.exists():
            return False

        try:
            return INTEGRATION_MARKER in rc_file.read_text()
        except OSError as e:
            raise FilesystemError("read", rc_file, e) from e

    def setup_integration(self) -> Path:
        """
        append the source line to the user's rc file (one-time setup).

        returns:
            path to the rc file

        raises:
            FilesystemError: if the rc file cannot be read or written
        """
        rc_file = self.target.rc_file

        if self.target.style is LauncherStyle.AUTOLOAD or self.is_integrated():
            return rc_file

        source_path = self._shell_path(self.artifact_path)
        integration = f"{INTEGRATION_MARKER}\n[ -f {source_path} ] && source {source_path}"

        try:
            content = rc_file.read_text() if rc_file.exists() else ""
            rc_file.parent.mkdir(parents=True, exist_ok=True)
            rc_file.write_text(content.rstrip() + "\n\n" + integration + "\n")
        except OSError as e:
            raise FilesystemError("update", rc_file, e) from e
        logger.info(f"added shell integration to {rc_file}")

        return rc_file

    def teardown_integration(self) -> None:
        """
        remove the integration lines from the rc file and delete the launcher file.

        raises:
            FilesystemError: if the rc file or launcher file cannot be changed
        """
        rc_file = self.target.rc_file

        if self.target.style is LauncherStyle.SCRIPT and rc_file.exists():
            artifact_name = self.artifact_path.name
            try:
                lines = rc_file.read_text().split("\n")
                kept = [
                    line for line in lines
                    if INTEGRATION_MARKER not in line and artifact_name not in line
                ]
                rc_file.write_text("\n".join(kept))
            except OSError as e:
                raise FilesystemError("update", rc_file, e) from e
            logger.info(f"removed shell integration from {rc_file}")

        if self.artifact_path.exists():
            try:
                self.artifact_path.unlink()
            except OSError as e:
                raise FilesystemError("delete", self.artifact_path, e) from e

    def _shell_path(self, path: Path) -> str:
        """spell a path the way it should appear in the rc file (~/ when under home)."""
        try:
            return "~/" + path.relative_to(self.paths.home).as_posix()
        except ValueError:
            return str(path)
