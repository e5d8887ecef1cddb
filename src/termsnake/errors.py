"""Exception types raised by termsnake."""


class TermsnakeError(Exception):
    """Base class for all termsnake errors."""


class ConfigError(TermsnakeError):
    """The game settings cannot produce a playable board."""


class FrontendError(TermsnakeError):
    """The input or drawing backend failed; there is no safe way to continue."""
