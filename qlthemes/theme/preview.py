"""
Thumbnail rendering for themes.

Images are drawn with QPainter on QImage surfaces, so a QGuiApplication
must exist before any of these functions is called.
"""

from __future__ import annotations
from contextlib import contextmanager
from typing import Iterator, Optional, Sequence
import logging

from PyQt6.QtCore import QPointF, QRectF, QSize, Qt
from PyQt6.QtGui import (
    QColor,
    QFont,
    QFontDatabase,
    QFontMetricsF,
    QGuiApplication,
    QImage,
    QPainter,
    QPainterPath,
    QPalette,
    QPen,
)

from qlthemes.errors import ThemeError
from qlthemes.theme.engine import Theme
from qlthemes.theme.style import RenderedToken, Underline, parse_color
from qlthemes.theme.tokens import THUMBNAIL_ORDER

logger = logging.getLogger(__name__)

TEXT_INSET = 6
BADGE_SIZE = 20
DEFAULT_ACCENT = "#007aff"
THUMBNAIL_SIZE = 100
THUMBNAIL_FONT_SIZE = 8

_FORMAT = QImage.Format.Format_ARGB32_Premultiplied


class SurfaceError(ThemeError):
    """A drawing surface could not be created or painted on."""


def _new_surface(width: int, height: int) -> QImage:
    image = QImage(width, height, _FORMAT)
    if image.isNull():
        raise SurfaceError(f"Cannot allocate a {width}x{height} image")
    image.fill(Qt.GlobalColor.transparent)
    return image


@contextmanager
def _painting(image: QImage) -> Iterator[QPainter]:
    """Active painter on ``image``, always ended on exit."""
    painter = QPainter()
    if not painter.begin(image):
        raise SurfaceError("Cannot begin painting")
    try:
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.setRenderHint(QPainter.RenderHint.TextAntialiasing)
        yield painter
    finally:
        painter.end()


def accent_color() -> QColor:
    """Highlight colour of the running application."""
    if QGuiApplication.instance() is None:
        return QColor(DEFAULT_ACCENT)
    color = QGuiApplication.palette().color(QPalette.ColorRole.Highlight)
    return color if color.isValid() else QColor(DEFAULT_ACCENT)


def draw_tokens(painter: QPainter, tokens: Sequence[RenderedToken], rect: QRectF) -> None:
    """Draw rendered tokens one per line from the top of ``rect``."""
    painter.save()
    try:
        painter.setClipRect(rect)
        y = rect.top()
        for token in tokens:
            if y >= rect.bottom():
                break
            metrics = QFontMetricsF(token.font)
            color = token.color or QColor(Qt.GlobalColor.black)
            painter.setFont(token.font)
            painter.setPen(color)
            baseline = y + metrics.ascent()
            text = token.text.rstrip("\n")
            painter.drawText(QPointF(rect.left(), baseline), text)

            if token.underline is Underline.DOUBLE:
                pen = QPen(token.underline_color or color)
                pen.setWidthF(max(1.0, metrics.lineWidth()))
                painter.setPen(pen)
                width = metrics.horizontalAdvance(text)
                for offset in (metrics.underlinePos(), metrics.underlinePos() + 2 * pen.widthF()):
                    painter.drawLine(
                        QPointF(rect.left(), baseline + offset),
                        QPointF(rect.left() + width, baseline + offset),
                    )
            y += metrics.lineSpacing()
    finally:
        painter.restore()


def _draw_custom_badge(painter: QPainter, width: int, height: int) -> None:
    path = QPainterPath()
    path.moveTo(width, height)
    path.lineTo(width - BADGE_SIZE, height)
    path.lineTo(width, height - BADGE_SIZE)
    path.closeSubpath()
    painter.fillPath(path, accent_color())


def render_thumbnail(theme: Theme, size: QSize, font: QFont) -> Optional[QImage]:
    """
    Render a swatch listing every token kind in its style.

    Args:
        theme: Theme to render
        size: Image size in pixels
        font: Base font, bold/italic variants are derived from it

    Returns:
        The image, or None if the surface could not be created
    """
    plain_color = theme.plain.color
    tokens = [
        style.to_render_attributes(kind.name, font, plain_color, for_icon=True)
        for kind, style in theme.styles(THUMBNAIL_ORDER)
    ]

    try:
        image = _new_surface(size.width(), size.height())
        canvas = parse_color(theme.canvas.color)
        if canvas is not None:
            image.fill(canvas)

        with _painting(image) as painter:
            rect = QRectF(image.rect()).adjusted(TEXT_INSET, TEXT_INSET, -TEXT_INSET, -TEXT_INSET)
            draw_tokens(painter, tokens, rect)
            if not theme.is_standalone:
                _draw_custom_badge(painter, image.width(), image.height())
    except SurfaceError as e:
        logger.warning(f"Thumbnail for theme {theme.name!r} not rendered: {e}")
        return None

    logger.debug(f"Rendered {size.width()}x{size.height()} thumbnail for {theme.name!r}")
    return image


def _present(image: Optional[QImage]) -> Optional[QImage]:
    return image if image is not None and not image.isNull() else None


def combine_preview(light: Optional[QImage], dark: Optional[QImage]) -> Optional[QImage]:
    """
    Merge two thumbnails along the diagonal.

    The light image keeps the upper-left triangle, the dark one fills the
    rest. The result takes the light image size, or the dark one when
    there is no light image.

    Returns:
        The combined image, None when both inputs are missing
    """
    light, dark = _present(light), _present(dark)
    if light is None and dark is None:
        return None

    base = light if light is not None else dark
    try:
        image = _new_surface(base.width(), base.height())
        with _painting(image) as painter:
            rect = QRectF(image.rect())
            if light is not None:
                painter.drawImage(rect, light)
                clip = QPainterPath()
                clip.moveTo(rect.right(), rect.top())
                clip.lineTo(rect.right(), rect.bottom())
                clip.lineTo(rect.left(), rect.bottom())
                clip.closeSubpath()
                painter.setClipPath(clip)
            if dark is not None:
                painter.drawImage(rect, dark)
    except SurfaceError as e:
        logger.warning(f"Combined preview not rendered: {e}")
        return None
    return image


def combine_side_by_side(
    light: Optional[Theme],
    dark: Optional[Theme],
    size: int,
    spacing: int,
) -> Optional[QImage]:
    """
    Render two themes next to each other, light on the left.

    Each theme is drawn at ``size`` x ``size`` with a font scaled to the
    swatch; the dark one starts at ``size + spacing``.

    Returns:
        The image, None when both themes are missing
    """
    if light is None and dark is None:
        return None

    font = QFontDatabase.systemFont(QFontDatabase.SystemFont.GeneralFont)
    font.setPointSizeF(max(3.0, size / 6))
    swatch = QSize(size, size)

    try:
        image = _new_surface(size * 2 + spacing, size)
        with _painting(image) as painter:
            if light is not None:
                thumb = render_thumbnail(light, swatch, font)
                if thumb is not None:
                    painter.drawImage(QPointF(0, 0), thumb)
            if dark is not None:
                thumb = render_thumbnail(dark, swatch, font)
                if thumb is not None:
                    painter.drawImage(QPointF(size + spacing, 0), thumb)
    except SurfaceError as e:
        logger.warning(f"Side by side preview not rendered: {e}")
        return None
    return image


class ThemePreview(Theme):
    """Theme that keeps its thumbnail until told the styles changed."""

    def __init__(self, name: str = ""):
        super().__init__(name)
        self._image: Optional[QImage] = None
        self._image_is_set = False

    @property
    def image(self) -> Optional[QImage]:
        """Cached 100x100 thumbnail, rendered on first access."""
        if not self._image_is_set:
            font = QFontDatabase.systemFont(QFontDatabase.SystemFont.GeneralFont)
            font.setPointSize(THUMBNAIL_FONT_SIZE)
            self._image = self.to_thumbnail(QSize(THUMBNAIL_SIZE, THUMBNAIL_SIZE), font)
            self._image_is_set = True
        return self._image

    def invalidate_image(self) -> None:
        """Drop the cached thumbnail; the next access renders it again."""
        self._image = None
        self._image_is_set = False

    @property
    def title(self) -> str:
        """Name, with the description on a second line when present."""
        if self.description:
            return f"{self.name}\n{self.description}"
        return self.name
