import json
import logging
from pathlib import Path
from typing import List

from pydantic import ValidationError

from ..domain.errors import StoreWriteError
from .models import ProfileConfig, ProfileMetadata
from .validation import is_valid_profile_name

logger = logging.getLogger(__name__)


class ProfileStore:
    """
    handles profile persistence to ~/.cc-profiles.json.

    every mutation is a full read-modify-write of the document. there is
    no locking, so two processes writing at once can lose an update.
    """

    def __init__(self, profiles_file: Path):
        self.profiles_file = profiles_file

    def load(self) -> ProfileConfig:
        """
        load profiles from JSON file, or an empty config if missing or unreadable.

        entries keyed by an invalid profile name are dropped, since the keys
        end up as function names in the generated shell launcher.
        """
        if not self.profiles_file.exists():
            return ProfileConfig.empty()

        try:
            with open(self.profiles_file, "r") as f:
                data = json.load(f)
            config = ProfileConfig.model_validate(data)
        except (OSError, json.JSONDecodeError, ValidationError, ValueError) as e:
            # corrupted file, return empty
            logger.warning(f"ignoring unreadable profiles config {self.profiles_file}: {e}")
            return ProfileConfig.empty()

        for name in [n for n in config.profiles if not is_valid_profile_name(n)]:
            logger.warning(f"ignoring profile entry with invalid name {name!r} in {self.profiles_file}")
            del config.profiles[name]

        return config

    def save(self, config: ProfileConfig) -> None:
        """
        save profiles to JSON file.

        raises:
            StoreWriteError: if the file cannot be written
        """
        payload = config.model_dump(by_alias=True, exclude_none=True)

        try:
            self.profiles_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.profiles_file, "w") as f:
                json.dump(payload, f, indent=2)
        except OSError as e:
            raise StoreWriteError(self.profiles_file, e) from e

        logger.debug(f"wrote {len(config.profiles)} profile(s) to {self.profiles_file}")

    def add_profile(self, metadata: ProfileMetadata) -> None:
        """add or replace a profile entry."""
        config = self.load()
        config.profiles[metadata.name] = metadata
        self.save(config)

    def remove_profile(self, name: str) -> None:
        """remove profile from store."""
        config = self.load()

        if name in config.profiles:
            del config.profiles[name]
            self.save(config)

    def profile_names(self) -> List[str]:
        """registered profile names in document order."""
        return list(self.load().profiles.keys())
