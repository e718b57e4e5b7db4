"""
Exceptions raised by qlthemes.
"""


class ThemeError(Exception):
    """Base class for theme errors."""


class MissingThemeFolderError(ThemeError):
    """Raised when an unsaved theme has no themes folder to be written into."""

    def __init__(self, folder=None):
        self.folder = folder
        if folder is None:
            msg = "No themes folder available"
        else:
            msg = f"Themes folder not found: {folder}"
        super().__init__(msg)


class ThemeLoadError(ThemeError):
    """Raised when a native theme dump cannot be read."""

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load theme {path}: {reason}")
