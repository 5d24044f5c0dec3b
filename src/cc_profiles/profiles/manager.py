import logging
import shutil
from datetime import datetime, timezone
from typing import List, Optional

from ..config import ProfilePaths
from ..domain.errors import (
    BaseNotConfiguredError,
    FilesystemError,
    InvalidProfileNameError,
    ProfileExistsError,
    ProfileNotFoundError,
)
from .links import LinkManager
from .models import LinkStatus, Profile, ProfileMetadata, now_timestamp, parse_timestamp
from .store import ProfileStore
from .validation import explain_profile_name

logger = logging.getLogger(__name__)


class ProfileManager:
    """manages Claude Code profiles that share the ~/.claude configuration."""

    def __init__(
        self,
        paths: ProfilePaths,
        store: Optional[ProfileStore] = None,
        links: Optional[LinkManager] = None,
    ):
        self.paths = paths
        self.store = store or ProfileStore(paths.profiles_config)
        self.links = links or LinkManager(paths)

    def create_profile(self, name: str) -> Profile:
        """
        create a new profile linked to the shared configuration.

        a failure while linking leaves the new profile directory on disk
        without a registry entry; remove it by hand before retrying.

        args:
            name: name for the profile

        returns:
            created profile

        raises:
            InvalidProfileNameError: if the name fails validation
            ProfileExistsError: if the profile directory already exists
            BaseNotConfiguredError: if ~/.claude does not exist
            MissingSharedResourceError: if a required shared item is absent
            FilesystemError: if the directory or a link cannot be created
        """
        reason = explain_profile_name(name)
        if reason is not None:
            raise InvalidProfileNameError(name, reason)

        profile_path = self.paths.profile_dir(name)

        if self.profile_exists(name):
            raise ProfileExistsError(name)

        if not self.paths.shared_root.exists():
            raise BaseNotConfiguredError(self.paths.shared_root)

        try:
            profile_path.mkdir(parents=True)
        except OSError as e:
            raise FilesystemError("create", profile_path, e) from e
        logger.debug(f"created profile directory {profile_path}")

        created = self.links.create_links(name)
        logger.debug(f"created {len(created)} link(s) for '{name}'")

        metadata = ProfileMetadata(
            name=name,
            created_at=now_timestamp(),
            shell_alias=name,
        )
        self.store.add_profile(metadata)

        logger.info(f"created profile '{name}'")

        profile = self._build_profile(metadata)
        profile.linked = created
        return profile

    def list_profiles(self) -> List[Profile]:
        """
        list registered profiles whose directory still exists, newest first.

        entries whose directory was deleted behind our back are skipped
        but stay in the config file until removed explicitly.
        """
        config = self.store.load()
        profiles: List[Profile] = []

        for name, metadata in config.profiles.items():
            if not self.paths.profile_dir(name).exists():
                logger.debug(f"skipping '{name}': profile directory is missing")
                continue
            profiles.append(self._build_profile(metadata, name=name))

        profiles.sort(key=lambda p: p.created_at, reverse=True)
        return profiles

    def get_profile(self, name: str) -> Optional[Profile]:
        """get a single profile by name, or None."""
        return next((p for p in self.list_profiles() if p.name == name), None)

    def profile_names(self) -> List[str]:
        """names of the visible profiles, newest first."""
        return [p.name for p in self.list_profiles()]

    def remove_profile(self, name: str) -> None:
        """
        remove a profile, its credentials and its registry entry.

        links are detached before the directory is deleted, so the
        recursive delete never reaches into ~/.claude.

        raises:
            ProfileNotFoundError: if the profile directory does not exist
            FilesystemError: if the directory or credentials cannot be deleted
        """
        profile_path = self.paths.profile_dir(name)
        credentials_path = self.paths.credentials_file(name)

        if not self.profile_exists(name):
            raise ProfileNotFoundError(name)

        try:
            # a symlinked profile directory is unlinked, never followed
            if profile_path.is_symlink():
                profile_path.unlink()
            else:
                self.links.remove_links(name)
                shutil.rmtree(profile_path)
        except OSError as e:
            raise FilesystemError("delete", profile_path, e) from e

        if credentials_path.exists():
            try:
                credentials_path.unlink()
            except OSError as e:
                raise FilesystemError("delete", credentials_path, e) from e

        self.store.remove_profile(name)

        logger.info(f"removed profile '{name}'")

    def profile_exists(self, name: str) -> bool:
        """true if anything, even a dangling symlink, sits at the profile directory path."""
        profile_path = self.paths.profile_dir(name)
        return profile_path.exists() or profile_path.is_symlink()

    def verify_links(self, name: str) -> bool:
        return self.links.verify_links(name)

    def link_status(self, name: str) -> List[LinkStatus]:
        return self.links.link_status(name)

    def _build_profile(self, metadata: ProfileMetadata, name: Optional[str] = None) -> Profile:
        name = name or metadata.name
        credentials_path = self.paths.credentials_file(name)

        try:
            created_at = parse_timestamp(metadata.created_at)
        except ValueError:
            logger.warning(f"profile '{name}' has an invalid createdAt: {metadata.created_at!r}")
            created_at = datetime.min.replace(tzinfo=timezone.utc)

        return Profile(
            name=name,
            path=self.paths.profile_dir(name),
            credentials_path=credentials_path,
            is_authenticated=credentials_path.exists(),
            created_at=created_at,
        )
