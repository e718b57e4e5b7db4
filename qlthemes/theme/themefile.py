"""
Writer for the Lua-style ``.theme`` file format read by the highlighter.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from qlthemes.theme.style import PropertyStyle
from qlthemes.theme.tokens import THEME_FILE_KEYS

if TYPE_CHECKING:
    from qlthemes.theme.engine import Theme

THEME_EXTENSION = ".theme"

_LUA_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\0": "\\0",
}


def escape_lua(value: str) -> str:
    """Escape text for use inside a double quoted Lua string."""
    return "".join(_LUA_ESCAPES.get(ch, ch) for ch in value)


def _lua_bool(value: bool) -> str:
    return "True" if value else "False"


def format_property(style: PropertyStyle, key: str = "") -> str:
    """
    One property line.

    Named properties read ``Key\\t= { ... }``; unnamed ones (keyword
    entries) are tab indented and followed by a comma.
    """
    parts = []
    if style.color is not None:
        parts.append(f'Colour="{escape_lua(style.color)}"')
    if style.bold is not None:
        parts.append(f"Bold={_lua_bool(style.bold)}")
    if style.italic is not None:
        parts.append(f"Italic={_lua_bool(style.italic)}")
    if style.underline is not None:
        parts.append(f"Underline={_lua_bool(style.underline)}")

    line = f"{key}\t= " if key else "\t"
    line += "{ " + ", ".join(parts) + " }"
    if not key:
        line += ", "
    return line + "\n"


def generate_theme_file(theme: Theme) -> str:
    """
    Serialize a theme to theme-file text.

    Args:
        theme: Theme to export

    Returns:
        Theme file contents
    """
    s = f'Name = "{escape_lua(theme.name)}"\n\n'
    s += f'Description = "{escape_lua(theme.description)}"\n\n'

    if theme.appearance_name:
        s += f'Categories = {{ "{theme.appearance_name}" }}\n\n'

    for key, kind in THEME_FILE_KEYS:
        s += format_property(theme[kind], key)

    s += "\nKeywords = {\n"
    for keyword in theme.keywords:
        s += format_property(keyword)
    s += "}\n\n"
    return s
