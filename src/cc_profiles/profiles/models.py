"""data models for profile management."""
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field

from ..config import CONFIG_VERSION


class ProfileMetadata(BaseModel):
    """what ~/.cc-profiles.json records about a single profile."""
    model_config = ConfigDict(populate_by_name=True)

    name: str
    created_at: str = Field(alias="createdAt")  # ISO format datetime
    shell_alias: str = Field(alias="shellAlias")


class ProfileConfig(BaseModel):
    """complete contents of ~/.cc-profiles.json."""
    model_config = ConfigDict(populate_by_name=True)

    profiles: Dict[str, ProfileMetadata] = Field(default_factory=dict)
    version: str = CONFIG_VERSION
    default_profile: Optional[str] = Field(default=None, alias="defaultProfile")

    @classmethod
    def empty(cls) -> "ProfileConfig":
        """create empty profile config."""
        return cls(profiles={}, version=CONFIG_VERSION)


class ItemKind(str, Enum):
    FILE = "file"
    DIRECTORY = "directory"


class SharedItem(BaseModel):
    """an entry of the shared root that every profile links to."""
    model_config = ConfigDict(frozen=True)

    name: str
    kind: ItemKind
    required: bool = False


class LinkTarget(BaseModel):
    """a symlink created inside a profile directory."""
    source: Path
    target: Path
    kind: ItemKind
    required: bool


class LinkStatus(BaseModel):
    name: str
    exists: bool
    is_link: bool
    target_resolves: bool


class Profile(BaseModel):
    """
    live view of a registered profile.

    is_authenticated is read from the filesystem when the view is built
    and never persisted. linked is only filled in on the view returned by
    create_profile.
    """
    name: str
    path: Path
    credentials_path: Path
    is_authenticated: bool
    created_at: datetime
    linked: List[LinkTarget] = Field(default_factory=list)


SHARED_ITEMS: Tuple[SharedItem, ...] = (
    SharedItem(name="settings.json", kind=ItemKind.FILE, required=True),
    SharedItem(name="stats-cache.json", kind=ItemKind.FILE),
    SharedItem(name="CLAUDE.md", kind=ItemKind.FILE),
    SharedItem(name="agents", kind=ItemKind.DIRECTORY),
    SharedItem(name="commands", kind=ItemKind.DIRECTORY),
    SharedItem(name="plugins", kind=ItemKind.DIRECTORY),
    SharedItem(name="skills", kind=ItemKind.DIRECTORY),
)


def now_timestamp() -> str:
    """current time as an ISO-8601 UTC string."""
    return datetime.now(timezone.utc).isoformat()


def parse_timestamp(value: str) -> datetime:
    """parse an ISO-8601 timestamp, treating naive values as UTC."""
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
