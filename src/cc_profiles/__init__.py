"""cc-profiles: multiple Claude Code identities sharing one configuration."""

__version__ = "1.0.0"
