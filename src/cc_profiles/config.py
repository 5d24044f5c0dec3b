import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

# overrides the home directory for every path below
HOME_ENV_VAR = "CC_PROFILES_HOME"

PROFILES_CONFIG_NAME = ".cc-profiles.json"
ALIASES_FILE_NAME = ".cc-profiles-aliases.sh"
CONFIG_VERSION = "1.0.0"


@dataclass(frozen=True)
class ProfilePaths:
    """
    every filesystem location cc-profiles touches, resolved once.

    components receive an instance of this instead of computing paths
    from the home directory themselves.
    """
    home: Path
    shared_root: Path
    shared_credentials: Path
    profiles_config: Path
    aliases_file: Path
    fish_functions_file: Path

    @classmethod
    def from_home(cls, home: Optional[Path] = None) -> "ProfilePaths":
        """
        build paths relative to a home directory.

        args:
            home: home directory; falls back to $CC_PROFILES_HOME, then Path.home()
        """
        if home is None:
            override = os.environ.get(HOME_ENV_VAR)
            home = Path(override).expanduser() if override else Path.home()

        return cls(
            home=home,
            shared_root=home / ".claude",
            shared_credentials=home / ".claude.json",
            profiles_config=home / PROFILES_CONFIG_NAME,
            aliases_file=home / ALIASES_FILE_NAME,
            fish_functions_file=home / ".config" / "fish" / "functions" / "cc-profiles.fish",
        )

    def profile_dir(self, name: str) -> Path:
        """private config directory for a profile (~/.claude-<name>)."""
        return self.home / f".claude-{name}"

    def credentials_file(self, name: str) -> Path:
        """credentials file for a profile (~/.claude-<name>.json)."""
        return self.home / f".claude-{name}.json"
