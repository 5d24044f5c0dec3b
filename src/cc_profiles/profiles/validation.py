"""profile name validation."""
import re
from typing import Optional

MAX_PROFILE_NAME_LENGTH = 32

PROFILE_NAME_PATTERN = re.compile(r"^[a-z][a-z0-9-]*$")

# compared case-insensitively
RESERVED_NAMES = frozenset({"claude", "default", "main", "primary"})


def explain_profile_name(name: str) -> Optional[str]:
    """
    return the first rule a profile name breaks, or None if it is valid.

    rules are checked in a fixed order: empty, too long, bad start
    character, bad characters, reserved word.
    """
    if not name:
        return "Profile name is required"

    if len(name) > MAX_PROFILE_NAME_LENGTH:
        return f"Name must be {MAX_PROFILE_NAME_LENGTH} characters or less"

    if not ("a" <= name[0] <= "z"):
        return "Name must start with a lowercase letter"

    if not PROFILE_NAME_PATTERN.fullmatch(name):
        return "Use only lowercase letters, numbers, and hyphens"

    if name.lower() in RESERVED_NAMES:
        return f'"{name}" is a reserved name'

    return None


def is_valid_profile_name(name: str) -> bool:
    return explain_profile_name(name) is None
