"""symlinks between the shared ~/.claude root and profile directories."""
import logging
import shutil
from pathlib import Path
from typing import Iterable, List

from ..config import ProfilePaths
from ..domain.errors import FilesystemError, MissingSharedResourceError
from .models import SHARED_ITEMS, LinkStatus, LinkTarget, SharedItem

logger = logging.getLogger(__name__)


class LinkManager:
    """creates, removes and checks the shared-config symlinks of a profile."""

    def __init__(self, paths: ProfilePaths, shared_items: Iterable[SharedItem] = SHARED_ITEMS):
        self.paths = paths
        self.shared_items = tuple(shared_items)

    def create_links(self, name: str) -> List[LinkTarget]:
        """
        link every shared item into the profile directory.

        targets that are already symlinks are left alone, so calling this
        again on an existing profile is safe. a real file or directory at a
        target is replaced by the link.

        args:
            name: profile name

        returns:
            the links created by this call

        raises:
            MissingSharedResourceError: if a required shared item is absent
            FilesystemError: if a link cannot be created
        """
        profile_dir = self.paths.profile_dir(name)
        created: List[LinkTarget] = []

        for item in self.shared_items:
            source = self.paths.shared_root / item.name
            target = profile_dir / item.name

            if not source.exists():
                if item.required:
                    raise MissingSharedResourceError(source)
                continue

            if target.is_symlink():
                continue

            try:
                if target.exists():
                    logger.debug(f"replacing {target} with a link to {source}")
                    _remove_path(target)

                target.symlink_to(source, target_is_directory=source.is_dir())
            except OSError as e:
                raise FilesystemError("link", target, e) from e
            logger.debug(f"linked {target} -> {source}")

            created.append(LinkTarget(
                source=source,
                target=target,
                kind=item.kind,
                required=item.required,
            ))

        return created

    def remove_links(self, name: str) -> None:
        """
        unlink the shared items from a profile directory.

        only symlinks are removed; local files with the same names stay.
        """
        profile_dir = self.paths.profile_dir(name)

        for item in self.shared_items:
            target = profile_dir / item.name
            if target.is_symlink():
                try:
                    target.unlink()
                except OSError as e:
                    raise FilesystemError("unlink", target, e) from e
                logger.debug(f"unlinked {target}")

    def verify_links(self, name: str) -> bool:
        """check that every required shared item is linked and the link resolves."""
        profile_dir = self.paths.profile_dir(name)

        for item in self.shared_items:
            if not item.required:
                continue

            target = profile_dir / item.name

            if not target.is_symlink():
                return False

            # broken symlink
            if not target.exists():
                return False

        return True

    def link_status(self, name: str) -> List[LinkStatus]:
        """report the link state of every shared item, required or not."""
        profile_dir = self.paths.profile_dir(name)
        status: List[LinkStatus] = []

        for item in self.shared_items:
            target = profile_dir / item.name
            is_link = target.is_symlink()
            resolves = target.exists()

            status.append(LinkStatus(
                name=item.name,
                exists=is_link or resolves,
                is_link=is_link,
                target_resolves=is_link and resolves,
            ))

        return status


def _remove_path(path: Path) -> None:
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()
