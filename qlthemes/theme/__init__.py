"""
Syntax highlight themes: token kinds, style records and their renderings.
"""

from .tokens import TokenKind, FIXED_KINDS, CSS_ORDER, THEME_FILE_KEYS
from .style import AttributeName, AttributeValue, PropertyStyle, RenderedToken, Underline
from .native import NativeProperty, NativeTheme
from .engine import Appearance, Theme, ThemeEngine, ThemeSaved
from .preview import ThemePreview, combine_preview, combine_side_by_side, render_thumbnail

__all__ = [
    # Tokens
    "TokenKind",
    "FIXED_KINDS",
    "CSS_ORDER",
    "THEME_FILE_KEYS",
    # Styles
    "AttributeName",
    "AttributeValue",
    "PropertyStyle",
    "RenderedToken",
    "Underline",
    # Parser input
    "NativeProperty",
    "NativeTheme",
    # Themes
    "Appearance",
    "Theme",
    "ThemeEngine",
    "ThemeSaved",
    # Previews
    "ThemePreview",
    "combine_preview",
    "combine_side_by_side",
    "render_thumbnail",
]
