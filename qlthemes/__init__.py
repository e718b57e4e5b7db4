"""
qlthemes - Syntax highlight themes for Quick Look previews.

Converts parsed highlight themes into:
- CSS stylesheets for the rendered preview
- HTML sample pages
- Thumbnail swatches (PyQt6)
- Lua-style .theme files for the highlighter
"""

__version__ = "0.1.0"

from .errors import ThemeError, MissingThemeFolderError, ThemeLoadError
from .theme import (
    Appearance,
    AttributeName,
    AttributeValue,
    NativeProperty,
    NativeTheme,
    PropertyStyle,
    Theme,
    ThemeEngine,
    ThemePreview,
    ThemeSaved,
    TokenKind,
)

__all__ = [
    # Errors
    "ThemeError",
    "MissingThemeFolderError",
    "ThemeLoadError",
    # Model
    "Appearance",
    "AttributeName",
    "AttributeValue",
    "NativeProperty",
    "NativeTheme",
    "PropertyStyle",
    "Theme",
    "ThemeSaved",
    "TokenKind",
    # Management
    "ThemeEngine",
    "ThemePreview",
]
