"""actionmap exception hierarchy.

Shared across the index, scanner, and CLI so every module raises and
catches the same types.  The scan itself never raises for "not found"
or "no match" conditions; those yield empty results.
"""


class ActionMapError(Exception):
    """Base for all actionmap-specific errors."""


class ConfigurationError(ActionMapError):
    """Raised when a scan configuration is invalid.

    Typically raised by ``ScanConfig.__post_init__`` at construction.
    """


class SourceRootError(ActionMapError):
    """Raised when a source or library root is not a readable directory."""

    def __init__(self, root: str, detail: str = "not a directory") -> None:
        self.root = root
        self.detail = detail
        super().__init__(f"Source root {root!r}: {detail}")
