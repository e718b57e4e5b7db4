"""Thumbnail rendering, diagonal/side-by-side composition and ThemePreview."""

import pytest
from PyQt6.QtCore import QSize, Qt
from PyQt6.QtGui import QColor, QFont, QImage

from qlthemes.theme.engine import Theme
from qlthemes.theme.preview import (
    ThemePreview,
    accent_color,
    combine_preview,
    combine_side_by_side,
    render_thumbnail,
)
from qlthemes.theme.style import PropertyStyle


@pytest.fixture
def font(qapp):
    font = QFont()
    font.setPointSize(8)
    return font


def _solid(color, size=20):
    image = QImage(size, size, QImage.Format.Format_ARGB32_Premultiplied)
    image.fill(QColor(color))
    return image


def _themed(name, canvas, standalone=True):
    theme = Theme(name)
    theme.canvas.color = canvas
    theme.is_standalone = standalone
    return theme


class TestRenderThumbnail:
    def test_size(self, font):
        image = render_thumbnail(Theme("T"), QSize(100, 80), font)
        assert image.width() == 100
        assert image.height() == 80

    def test_canvas_fill(self, font):
        image = render_thumbnail(_themed("T", "#336699"), QSize(100, 100), font)
        assert image.pixelColor(1, 1).name() == "#336699"
        assert image.pixelColor(98, 98).name() == "#336699"

    def test_transparent_without_canvas(self, font):
        theme = _themed("T", None)
        image = render_thumbnail(theme, QSize(100, 100), font)
        assert image.pixelColor(1, 1).alpha() == 0

    def test_custom_badge(self, font):
        image = render_thumbnail(_themed("T", "#336699", standalone=False), QSize(100, 100), font)
        assert image.pixelColor(98, 98).name() == accent_color().name()
        assert image.pixelColor(1, 98).name() == "#336699"

    def test_rows_include_keywords(self, font, monkeypatch):
        drawn = []
        monkeypatch.setattr(
            "qlthemes.theme.preview.draw_tokens",
            lambda painter, tokens, rect: drawn.extend(tokens),
        )
        theme = Theme("T")
        theme.plain.color = "#101010"
        theme.add_keyword(PropertyStyle(color="#ff0000", bold=True))
        theme.add_keyword()

        assert render_thumbnail(theme, QSize(100, 100), font) is not None

        texts = [token.text for token in drawn]
        assert "Background\n" not in texts
        assert texts[0] == "Default\n"
        assert texts[-2:] == ["Keyword 1\n", "Keyword 2\n"]
        assert drawn[-2].color.name() == "#ff0000"
        assert drawn[-1].color.name() == "#101010"

    def test_zero_size_is_none(self, font):
        assert render_thumbnail(Theme("T"), QSize(0, 0), font) is None

    def test_method_delegates(self, font):
        image = _themed("T", "#010101").to_thumbnail(QSize(40, 40), font)
        assert image.pixelColor(0, 0).name() == "#010101"


class TestCombinePreview:
    def test_both_missing(self, qapp):
        assert combine_preview(None, None) is None

    def test_diagonal_split(self, qapp):
        image = combine_preview(_solid("#ff0000"), _solid("#0000ff"))
        assert image.size() == QSize(20, 20)
        assert image.pixelColor(2, 2).name() == "#ff0000"
        assert image.pixelColor(17, 17).name() == "#0000ff"

    def test_light_only(self, qapp):
        image = combine_preview(_solid("#ff0000"), None)
        assert image.pixelColor(17, 17).name() == "#ff0000"

    def test_dark_only_fills_everything(self, qapp):
        image = combine_preview(None, _solid("#0000ff", size=30))
        assert image.size() == QSize(30, 30)
        assert image.pixelColor(2, 2).name() == "#0000ff"

    def test_null_image_counts_as_missing(self, qapp):
        assert combine_preview(QImage(), None) is None


class TestSideBySide:
    def test_both_missing(self, qapp):
        assert combine_side_by_side(None, None, 50, 10) is None

    def test_layout(self, qapp):
        image = combine_side_by_side(
            _themed("L", "#eeeeee"), _themed("D", "#111111"), 50, 10
        )
        assert image.width() == 110
        assert image.height() == 50
        assert image.pixelColor(1, 1).name() == "#eeeeee"
        assert image.pixelColor(55, 25).alpha() == 0
        assert image.pixelColor(61, 1).name() == "#111111"

    def test_one_side(self, qapp):
        image = combine_side_by_side(None, _themed("D", "#111111"), 40, 4)
        assert image.pixelColor(1, 1).alpha() == 0
        assert image.pixelColor(45, 1).name() == "#111111"


class TestThemePreview:
    def test_image_cached(self, qapp):
        preview = ThemePreview("P")
        first = preview.image
        assert first is not None
        assert first.size() == QSize(100, 100)
        assert preview.image is first

    def test_invalidate(self, qapp):
        preview = ThemePreview("P")
        first = preview.image
        preview.canvas.color = "#123456"
        assert preview.image is first
        preview.invalidate_image()
        second = preview.image
        assert second is not first
        assert second.pixelColor(1, 1).name() == "#123456"

    def test_title(self):
        preview = ThemePreview("Name")
        assert preview.title == "Name"
        preview.description = "Desc"
        assert preview.title == "Name\nDesc"

    def test_duplicate_keeps_type(self):
        copy = ThemePreview("P").duplicate()
        assert isinstance(copy, ThemePreview)
        assert copy.path == ""
