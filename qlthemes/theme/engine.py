"""
Theme system.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Iterable, Iterator, Optional
import logging
import os
import uuid

from PyQt6.QtCore import QSize
from PyQt6.QtGui import QFont, QImage

from qlthemes.errors import MissingThemeFolderError, ThemeError
from qlthemes.resources import resources
from qlthemes.theme.native import NativeTheme
from qlthemes.theme.style import PropertyStyle
from qlthemes.theme.stylesheet import generate_css, generate_html_preview
from qlthemes.theme.themefile import THEME_EXTENSION, generate_theme_file
from qlthemes.theme.tokens import FIXED_KINDS, MAX_KEYWORDS, TokenKind

logger = logging.getLogger(__name__)

DUMP_EXTENSION = ".yaml"


def _replace_text(path: Path, text: str) -> None:
    """Write ``text`` through a ``.tmp`` sibling, removed again on failure."""
    tmp = path.with_name(path.name + ".tmp")
    try:
        tmp.write_text(text, encoding="utf-8")
        os.replace(tmp, path)
    except OSError:
        tmp.unlink(missing_ok=True)
        raise


class Appearance(Enum):
    """Light/dark classification, values match the parser codes."""
    UNDEFINED = 0
    LIGHT = 1
    DARK = 2

    @classmethod
    def from_code(cls, code: int) -> Appearance:
        try:
            return cls(code)
        except ValueError:
            return cls.UNDEFINED


@dataclass
class ThemeSaved:
    """Emitted after a theme has been written to disk."""
    theme: Theme
    path: Path


class _StyleSlot:
    """Read-only access to the record of a fixed token kind."""

    def __set_name__(self, owner, name):
        self.attr = name

    def __get__(self, obj, objtype=None):
        if obj is None:
            return self
        return obj._styles[self.attr]

    def __set__(self, obj, value):
        raise AttributeError(f"{self.attr} is read-only, assign its attributes instead")


class Theme:
    """
    Syntax highlight theme: one style record per token kind plus metadata.

    Changing the name, description, appearance or any style value marks
    the theme dirty; loading and saving clear the flag.
    """

    plain = _StyleSlot()
    canvas = _StyleSlot()
    number = _StyleSlot()
    string = _StyleSlot()
    escape = _StyleSlot()
    pre_processor = _StyleSlot()
    string_pre_proc = _StyleSlot()
    block_comment = _StyleSlot()
    line_comment = _StyleSlot()
    line_num = _StyleSlot()
    operator = _StyleSlot()
    interpolation = _StyleSlot()

    def __init__(self, name: str = ""):
        self._name = name
        self._description = ""
        self._appearance = Appearance.UNDEFINED
        self.path = ""
        self.is_base16 = False
        self.is_standalone = False

        self._styles: dict[str, PropertyStyle] = {}
        for kind in FIXED_KINDS:
            self._set_style(kind, PropertyStyle())
        self.plain.color = "#000000"
        self.canvas.color = "#ffffff"
        self._keywords: list[PropertyStyle] = []

        self._event_handler: Optional[Callable[[ThemeSaved], None]] = None
        self.is_dirty = False

    @classmethod
    def from_native(cls, native: NativeTheme) -> Theme:
        """
        Import a theme from the parser struct.

        Args:
            native: Parsed theme

        Returns:
            New theme, not dirty
        """
        theme = cls(native.name or "")
        theme.description = native.desc or ""
        theme.path = native.path or ""
        theme.appearance = Appearance.from_code(native.appearance)
        theme.is_standalone = native.standalone > 0
        theme.is_base16 = native.base16 > 0

        for kind in FIXED_KINDS:
            theme._set_style(kind, PropertyStyle.from_native(getattr(native, kind.attr)))

        for i in range(native.keyword_count):
            prop = native.keywords[i] if i < len(native.keywords) else None
            if prop is None:
                continue
            if len(theme._keywords) >= MAX_KEYWORDS:
                logger.warning(
                    f"Theme {theme.name!r} defines more than {MAX_KEYWORDS} keyword groups, "
                    f"ignoring the rest"
                )
                break
            theme._keywords.append(theme._bind(PropertyStyle.from_native(prop)))

        theme.is_dirty = False
        return theme

    @classmethod
    def from_yaml(cls, path: Path) -> Theme:
        """
        Load a theme from a YAML dump of the parser struct.

        A ``path`` stored in the dump is dropped: the dump itself is never
        a save target.
        """
        theme = cls.from_native(NativeTheme.load(path))
        theme.path = ""
        return theme

    def to_native(self) -> NativeTheme:
        """Export to the parser struct (no path)."""
        native = NativeTheme(
            name=self.name,
            desc=self.description,
            appearance=self.appearance.value,
            standalone=int(self.is_standalone),
            base16=int(self.is_base16),
            keywords=[k.to_native() for k in self._keywords],
        )
        for kind in FIXED_KINDS:
            setattr(native, kind.attr, self[kind].to_native())
        return native

    # Metadata

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        if value != self._name:
            self._name = value
            self._mark_dirty()

    @property
    def description(self) -> str:
        return self._description

    @description.setter
    def description(self, value: str) -> None:
        if value != self._description:
            self._description = value
            self._mark_dirty()

    @property
    def appearance(self) -> Appearance:
        return self._appearance

    @appearance.setter
    def appearance(self, value: Appearance) -> None:
        if value != self._appearance:
            self._appearance = value
            self._mark_dirty()

    @property
    def appearance_name(self) -> str:
        """Category name for the theme file, empty when undefined."""
        if self._appearance is Appearance.UNDEFINED:
            return ""
        return self._appearance.name.lower()

    def _mark_dirty(self) -> None:
        self.is_dirty = True

    # Styles

    def _bind(self, style: PropertyStyle) -> PropertyStyle:
        style.bind(self._mark_dirty)
        return style

    def _set_style(self, kind: TokenKind, style: PropertyStyle) -> None:
        self._styles[kind.attr] = self._bind(style)

    @property
    def keywords(self) -> tuple[PropertyStyle, ...]:
        """Keyword styles; position gives the keyword index."""
        return tuple(self._keywords)

    def add_keyword(self, style: Optional[PropertyStyle] = None) -> TokenKind:
        """
        Append a keyword group.

        Returns:
            Kind of the new group

        Raises:
            ValueError: if the theme already has the maximum number of groups
        """
        kind = TokenKind.keyword(len(self._keywords))
        self._keywords.append(self._bind(style or PropertyStyle()))
        self._mark_dirty()
        return kind

    def remove_keyword(self, keyword_index: int) -> PropertyStyle:
        """
        Remove a keyword group; later groups shift down one index.

        Raises:
            IndexError: if ``keyword_index`` is negative or out of range
        """
        if not 0 <= keyword_index < len(self._keywords):
            raise IndexError(f"No keyword group {keyword_index}")
        style = self._keywords.pop(keyword_index)
        style.bind(None)
        self._mark_dirty()
        return style

    def __getitem__(self, kind: TokenKind) -> Optional[PropertyStyle]:
        if kind.is_keyword:
            if kind.keyword_index < len(self._keywords):
                return self._keywords[kind.keyword_index]
            return None
        return self._styles[kind.attr]

    def styles(self, order: Iterable[TokenKind] = FIXED_KINDS) -> Iterator[tuple[TokenKind, PropertyStyle]]:
        """Yield ``(kind, style)`` for ``order`` then every keyword group."""
        for kind in order:
            yield kind, self[kind]
        for i, style in enumerate(self._keywords):
            yield TokenKind.keyword(i), style

    # Output

    def to_css(self) -> str:
        return generate_css(self)

    def to_html_preview(self) -> str:
        return generate_html_preview(self)

    def to_theme_file(self) -> str:
        return generate_theme_file(self)

    def to_thumbnail(self, size: QSize, font: QFont) -> Optional[QImage]:
        """Render a preview image, None if no surface could be created."""
        from qlthemes.theme.preview import render_thumbnail

        return render_thumbnail(self, size, font)

    # Persistence

    def set_event_handler(self, handler: Optional[Callable[[ThemeSaved], None]]) -> None:
        """Set callback fired after a successful save."""
        self._event_handler = handler

    def write(self, path: Path) -> None:
        """Write the theme file to ``path`` (replaced atomically)."""
        _replace_text(Path(path), self.to_theme_file())

    def save(self, themes_folder: Optional[Path] = None) -> ThemeSaved:
        """
        Write the theme to its path, allocating ``<UUID>.theme`` inside
        ``themes_folder`` when the theme was never saved.

        A native YAML dump with the same stem is written beside the theme
        file so ThemeEngine picks the theme up again.

        Args:
            themes_folder: Destination for unsaved themes

        Returns:
            The ThemeSaved event, also passed to the event handler

        Raises:
            MissingThemeFolderError: if a new file is needed and
                ``themes_folder`` is missing
        """
        if self.path:
            path = Path(self.path)
        else:
            if themes_folder is None or not Path(themes_folder).is_dir():
                raise MissingThemeFolderError(themes_folder)
            path = Path(themes_folder) / f"{str(uuid.uuid4()).upper()}{THEME_EXTENSION}"

        self.write(path)
        _replace_text(path.with_suffix(DUMP_EXTENSION), self.to_native().to_yaml())
        self.path = str(path)
        self.is_dirty = False
        logger.debug(f"Saved theme {self.name!r} to {path}")

        event = ThemeSaved(self, path)
        if self._event_handler is not None:
            self._event_handler(event)
        return event

    def duplicate(self) -> Theme:
        """
        Unsaved copy with the same name, description and styles.

        Path, appearance and the standalone/base16 flags keep their defaults.
        """
        theme = type(self)(self.name)
        theme._description = self._description
        for kind in FIXED_KINDS:
            theme._set_style(kind, self[kind].copy())
        theme._keywords = [theme._bind(k.copy()) for k in self._keywords]
        theme.is_dirty = False
        return theme

    def __eq__(self, other) -> bool:
        if not isinstance(other, Theme):
            return NotImplemented
        return self.name == other.name and self.is_standalone == other.is_standalone

    __hash__ = None

    def __repr__(self) -> str:
        flags = "standalone" if self.is_standalone else "custom"
        return f"<Theme {self.name!r} {self.appearance_name or 'undefined'} {flags}>"


class ThemeEngine:
    """Manages theme loading and light/dark selection."""

    def __init__(self, themes_folder: Path = None, builtin_dir: Path = None):
        """
        Initialize theme engine.

        Args:
            themes_folder: Directory holding user themes, also the save target
            builtin_dir: Directory of bundled themes
        """
        self.themes_folder = Path(themes_folder) if themes_folder else None
        self.builtin_dir = builtin_dir or resources.themes_dir

        self._themes: dict[str, Theme] = {}
        self._light: Optional[Theme] = None
        self._dark: Optional[Theme] = None
        self._event_handler: Optional[Callable[[ThemeSaved], None]] = None

        self._load_dir(self.builtin_dir)

    def _load_dir(self, directory: Path) -> int:
        count = 0
        for path in sorted(directory.glob(f"*{DUMP_EXTENSION}")):
            try:
                theme = Theme.from_yaml(path)
            except (ThemeError, OSError) as e:
                logger.warning(f"Failed to load theme {path}: {e}")
                continue
            theme_file = path.with_suffix(THEME_EXTENSION)
            if theme_file.is_file():
                theme.path = str(theme_file)
            self._themes[theme.name] = theme
            count += 1
            logger.debug(f"Loaded theme: {theme.name}")
        return count

    def load_themes(self) -> int:
        """
        Load all themes from the user themes folder.

        Returns:
            Number of themes loaded
        """
        if self.themes_folder is None or not self.themes_folder.exists():
            logger.debug(f"Theme directory not found: {self.themes_folder}")
            return 0
        return self._load_dir(self.themes_folder)

    def get_theme(self, name: str) -> Optional[Theme]:
        """
        Get theme by name.

        Args:
            name: Theme name

        Returns:
            Theme if found, None otherwise
        """
        return self._themes.get(name)

    def list_themes(self) -> list[str]:
        """Sorted theme names."""
        return sorted(self._themes.keys())

    def themes_for_appearance(self, appearance: Appearance) -> list[Theme]:
        """Themes of one appearance, ordered by name."""
        return [
            self._themes[name] for name in self.list_themes()
            if self._themes[name].appearance is appearance
        ]

    def register_theme(self, theme: Theme) -> None:
        """
        Register a theme.

        Args:
            theme: Theme to register
        """
        self._themes[theme.name] = theme

    def remove_theme(self, name: str) -> Optional[Theme]:
        theme = self._themes.pop(name, None)
        if theme is not None:
            if self._light is theme:
                self._light = None
            if self._dark is theme:
                self._dark = None
        return theme

    def set_event_handler(self, handler: Optional[Callable[[ThemeSaved], None]]) -> None:
        """Set callback for themes saved through the engine."""
        self._event_handler = handler

    def save_theme(self, theme: Theme) -> ThemeSaved:
        """Save ``theme`` into the themes folder and register it."""
        event = theme.save(self.themes_folder)
        self.register_theme(theme)
        if self._event_handler is not None:
            self._event_handler(event)
        return event

    def _fallback(self, appearance: Appearance) -> Optional[Theme]:
        themes = self.themes_for_appearance(appearance)
        return themes[0] if themes else None

    @property
    def current_light(self) -> Optional[Theme]:
        """Theme used for light mode."""
        return self._light or self._fallback(Appearance.LIGHT)

    @current_light.setter
    def current_light(self, theme: Optional[Theme]) -> None:
        self._light = theme

    @property
    def current_dark(self) -> Optional[Theme]:
        """Theme used for dark mode."""
        return self._dark or self._fallback(Appearance.DARK)

    @current_dark.setter
    def current_dark(self, theme: Optional[Theme]) -> None:
        self._dark = theme
