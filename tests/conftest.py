"""Shared fixtures for the qlthemes test suite.

pytest-qt provides the session ``qapp``; it is a QGuiApplication on the
offscreen platform here. Also factories for native parser records and themes.
"""

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PyQt6.QtGui import QGuiApplication

from qlthemes.theme.engine import Theme
from qlthemes.theme.native import NativeProperty, NativeTheme


@pytest.fixture(scope="session")
def qapp_cls():
    """Rendering needs QPainter and fonts only, no widgets."""
    return QGuiApplication


@pytest.fixture
def native_factory():
    """Factory fixture: NativeTheme with a few styled kinds."""
    def _make(name="Native", appearance=0, standalone=0, base16=0, keywords=None, **props):
        if keywords is None:
            keywords = [
                NativeProperty(color="#ff0000", bold=1),
                NativeProperty(color="#00ff00", italic=0, underline=-1),
            ]
        native = NativeTheme(
            name=name,
            desc="From the parser",
            path=None,
            appearance=appearance,
            standalone=standalone,
            base16=base16,
            plain=NativeProperty(color="#111111"),
            canvas=NativeProperty(color="#eeeeee"),
            keywords=keywords,
        )
        for attr, prop in props.items():
            setattr(native, attr, prop)
        return native
    return _make


@pytest.fixture
def simple_theme():
    """The default theme: black on white, no keywords."""
    return Theme("Test")


@pytest.fixture
def styled_theme():
    """Theme with a mix of set and unset attributes and two keyword groups."""
    theme = Theme("Styled")
    theme.description = "Two keywords"
    theme.number.color = "#0000ff"
    theme.string.italic = True
    theme.block_comment.bold = False
    theme.line_comment.underline = True
    theme.add_keyword()
    theme.keywords[0].color = "#ff0000"
    theme.keywords[0].bold = True
    theme.add_keyword()
    theme.keywords[1].italic = False
    theme.is_dirty = False
    return theme
