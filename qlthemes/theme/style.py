"""
Per-token style record.

Every attribute is tri-state: ``None`` means "inherit from the plain
style", which is not the same as ``False``.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Optional, Union

from PyQt6.QtGui import QColor, QFont, QFontDatabase

from qlthemes.theme.native import NativeProperty


class AttributeName(Enum):
    """Attributes addressable through the keyed accessor."""
    ITALIC = "italic"
    BOLD = "bold"
    UNDERLINE = "underline"
    COLOR = "color"

    @property
    def is_flag(self) -> bool:
        return self is not AttributeName.COLOR


class ValueKind(Enum):
    FLAG = auto()
    TEXT = auto()
    UNSET = auto()


@dataclass(frozen=True)
class AttributeValue:
    """Tagged value for :meth:`PropertyStyle.set`."""
    kind: ValueKind
    value: Union[bool, str, None] = None

    @classmethod
    def flag(cls, value: bool) -> AttributeValue:
        return cls(ValueKind.FLAG, bool(value))

    @classmethod
    def text(cls, value: str) -> AttributeValue:
        if not value:
            return cls.unset()
        return cls(ValueKind.TEXT, value)

    @classmethod
    def unset(cls) -> AttributeValue:
        return cls(ValueKind.UNSET)

    @classmethod
    def from_python(cls, value) -> AttributeValue:
        """Wrap a plain ``bool``, ``str`` or ``None``."""
        if value is None:
            return cls.unset()
        if isinstance(value, bool):
            return cls.flag(value)
        if isinstance(value, str):
            return cls.text(value)
        raise TypeError(f"Unsupported attribute value: {value!r}")

    def fits(self, name: AttributeName) -> bool:
        if self.kind is ValueKind.UNSET:
            return True
        return (self.kind is ValueKind.FLAG) == name.is_flag


class Underline(Enum):
    """Underline decoration applied when rendering."""
    NONE = 0
    DOUBLE = 1


@dataclass
class RenderedToken:
    """Text unit with its effective drawing attributes."""
    text: str
    font: QFont
    color: Optional[QColor] = None
    underline: Optional[Underline] = None
    underline_color: Optional[QColor] = None


_FLAG_TOKENS = {
    "italic": (AttributeName.ITALIC, True),
    "noitalic": (AttributeName.ITALIC, False),
    "bold": (AttributeName.BOLD, True),
    "nobold": (AttributeName.BOLD, False),
    "underline": (AttributeName.UNDERLINE, True),
    "nounderline": (AttributeName.UNDERLINE, False),
}


def parse_color(css: Optional[str]) -> Optional[QColor]:
    """QColor for a CSS colour (hex or SVG name), None if unset or invalid."""
    if not css:
        return None
    color = QColor(css)
    return color if color.isValid() else None


class PropertyStyle:
    """Optional colour/bold/italic/underline overrides for one token kind."""

    def __init__(
        self,
        color: Optional[str] = None,
        italic: Optional[bool] = None,
        bold: Optional[bool] = None,
        underline: Optional[bool] = None,
    ):
        self._color = color or None
        self._italic = italic
        self._bold = bold
        self._underline = underline
        self._on_change: Optional[Callable[[], None]] = None

    @classmethod
    def from_native(cls, prop: NativeProperty) -> PropertyStyle:
        """Import a parser property, mapping negative flags to unset."""
        def flag(v: int) -> Optional[bool]:
            return None if v < 0 else v > 0

        return cls(
            color=prop.color,
            italic=flag(prop.italic),
            bold=flag(prop.bold),
            underline=flag(prop.underline),
        )

    def to_native(self) -> NativeProperty:
        def flag(v: Optional[bool]) -> int:
            return -1 if v is None else int(v)

        return NativeProperty(
            color=self._color,
            bold=flag(self._bold),
            italic=flag(self._italic),
            underline=flag(self._underline),
        )

    @classmethod
    def from_export_tokens(cls, text: str) -> PropertyStyle:
        """Inverse of :meth:`to_export_tokens`."""
        style = cls()
        color = []
        for token in text.split():
            if token in _FLAG_TOKENS:
                name, value = _FLAG_TOKENS[token]
                style.set(name, AttributeValue.flag(value))
            else:
                color.append(token)
        if color:
            style.color = " ".join(color)
        return style

    # Attributes

    @property
    def color(self) -> Optional[str]:
        return self._color

    @color.setter
    def color(self, value: Optional[str]) -> None:
        self._update("_color", value or None)

    @property
    def italic(self) -> Optional[bool]:
        return self._italic

    @italic.setter
    def italic(self, value: Optional[bool]) -> None:
        self._update("_italic", value)

    @property
    def bold(self) -> Optional[bool]:
        return self._bold

    @bold.setter
    def bold(self, value: Optional[bool]) -> None:
        self._update("_bold", value)

    @property
    def underline(self) -> Optional[bool]:
        return self._underline

    @underline.setter
    def underline(self, value: Optional[bool]) -> None:
        self._update("_underline", value)

    def _update(self, slot: str, value) -> None:
        if getattr(self, slot) == value:
            return
        setattr(self, slot, value)
        if self._on_change is not None:
            self._on_change()

    def bind(self, on_change: Optional[Callable[[], None]]) -> None:
        """Register the owner callback fired when a value changes."""
        self._on_change = on_change

    @property
    def is_empty(self) -> bool:
        return self._color is None and self._italic is None \
            and self._bold is None and self._underline is None

    # Keyed access

    def get(self, name: AttributeName) -> AttributeValue:
        value = getattr(self, name.value)
        if value is None:
            return AttributeValue.unset()
        if name.is_flag:
            return AttributeValue.flag(value)
        return AttributeValue.text(value)

    def set(self, name: AttributeName, value: AttributeValue) -> None:
        """
        Assign an attribute.

        Raises:
            TypeError: if a text value targets a flag or vice versa
        """
        if not value.fits(name):
            raise TypeError(
                f"{name.value} does not accept a {value.kind.name.lower()} value"
            )
        setattr(self, name.value, value.value)

    def clear(self, name: AttributeName) -> None:
        self.set(name, AttributeValue.unset())

    def __getitem__(self, name: AttributeName):
        return getattr(self, AttributeName(name).value)

    def __setitem__(self, name: AttributeName, value) -> None:
        self.set(AttributeName(name), AttributeValue.from_python(value))

    # Output

    def to_css_declarations(self) -> str:
        """CSS declarations for the set attributes, each ending in ``"; "``."""
        style = ""
        if self._italic is not None:
            style += f"font-style: {'italic' if self._italic else 'normal'}; "
        if self._bold is not None:
            style += f"font-weight: {'bold' if self._bold else 'normal'}; "
        if self._underline is not None:
            style += f"text-decoration: {'underline' if self._underline else 'none'}; "
        if self._color is not None:
            style += f"color: {self._color}; "
        return style

    def to_export_tokens(self) -> str:
        """Space separated ``[no]italic [no]bold [no]underline color`` tokens."""
        tokens = []
        if self._italic is not None:
            tokens.append("italic" if self._italic else "noitalic")
        if self._bold is not None:
            tokens.append("bold" if self._bold else "nobold")
        if self._underline is not None:
            tokens.append("underline" if self._underline else "nounderline")
        if self._color is not None:
            tokens.append(self._color)
        return " ".join(tokens).rstrip()

    def to_render_attributes(
        self,
        text: str,
        font: QFont,
        plain_color: Optional[str] = None,
        for_icon: bool = False,
    ) -> RenderedToken:
        """
        Resolve the drawing attributes for ``text``.

        The own colour wins over ``plain_color``. Underline is left alone
        for icons; otherwise True gives a double underline and False removes
        any underline. Bold/italic pick a matching variant of ``font`` when
        the family provides one, else ``font`` is used unchanged.

        Returns:
            RenderedToken carrying ``text`` with a trailing newline
        """
        color = parse_color(self._color or plain_color)
        token = RenderedToken(
            text=text + "\n",
            font=self._font_variant(font),
            color=color,
        )
        if not for_icon and self._underline is not None:
            token.underline = Underline.DOUBLE if self._underline else Underline.NONE
            token.underline_color = color
        return token

    def _font_variant(self, font: QFont) -> QFont:
        if self._bold is None and self._italic is None:
            return font

        family = font.family()
        for style in QFontDatabase.styles(family):
            if self._bold is not None and QFontDatabase.bold(family, style) != self._bold:
                continue
            if self._italic is not None and QFontDatabase.italic(family, style) != self._italic:
                continue
            variant = QFont(font)
            if self._bold is not None:
                variant.setBold(self._bold)
            if self._italic is not None:
                variant.setItalic(self._italic)
            return variant
        return font

    def copy(self) -> PropertyStyle:
        """Detached copy (the owner binding is not carried over)."""
        return PropertyStyle(self._color, self._italic, self._bold, self._underline)

    def __eq__(self, other) -> bool:
        if not isinstance(other, PropertyStyle):
            return NotImplemented
        return (self._color, self._italic, self._bold, self._underline) == \
            (other._color, other._italic, other._bold, other._underline)

    __hash__ = None

    def __repr__(self) -> str:
        return f"<PropertyStyle {self.to_export_tokens() or '(unset)'}>"
