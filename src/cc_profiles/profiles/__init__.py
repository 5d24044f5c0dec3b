"""profile management for Claude Code identities sharing one configuration."""
from .manager import ProfileManager
from .store import ProfileStore
from .links import LinkManager
from .models import Profile, ProfileConfig, ProfileMetadata, LinkStatus, LinkTarget, SharedItem, SHARED_ITEMS
from .validation import explain_profile_name, is_valid_profile_name

__all__ = [
    "ProfileManager",
    "ProfileStore",
    "LinkManager",
    "Profile",
    "ProfileConfig",
    "ProfileMetadata",
    "LinkStatus",
    "LinkTarget",
    "SharedItem",
    "SHARED_ITEMS",
    "explain_profile_name",
    "is_valid_profile_name",
]
