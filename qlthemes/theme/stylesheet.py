"""
CSS and HTML preview generation from themes.
"""

from __future__ import annotations
from html import escape
from typing import TYPE_CHECKING

from qlthemes.theme.style import PropertyStyle
from qlthemes.theme.tokens import CANVAS, CSS_ORDER, TokenKind

if TYPE_CHECKING:
    from qlthemes.theme.engine import Theme

DEFAULT_CANVAS = "#ffffff"


def _format_rule(kind: TokenKind, style: PropertyStyle) -> str:
    css = kind.css_selector + " {\n"
    if kind == CANVAS:
        css += f"    background-color: {style.color or DEFAULT_CANVAS};\n"
    else:
        css += style.to_css_declarations()
    css += "}\n"
    return css


def generate_css(theme: Theme) -> str:
    """
    Generate the highlight stylesheet for a theme.

    Args:
        theme: Theme to generate the stylesheet from

    Returns:
        CSS text: the ``body`` rules followed by one rule per token kind
    """
    css = ""
    if theme.canvas.color:
        css += f"body {{ background-color: {theme.canvas.color}; }}\n"
    if theme.plain.color:
        css += f"body {{ color: {theme.plain.color}; }}\n"

    for kind, style in theme.styles(CSS_ORDER):
        css += _format_rule(kind, style)
    return css


def generate_html_preview(theme: Theme) -> str:
    """
    Generate a static HTML page showing each token kind in its style.

    Args:
        theme: Theme to preview

    Returns:
        HTML document embedding :func:`generate_css`
    """
    rows = "".join(
        f"<div class='{' '.join(kind.css_class)}'>{escape(kind.name)}</div>\n"
        for kind, _ in theme.styles(CSS_ORDER)
    )

    return f"""<html>
<head>
        <title>{escape(theme.name)}</title>
<style type="text/css">
body {{
    font-family: ui-monospace, -apple-system, BlinkMacSystemFont, sans-serif;
    user-select: none;
}}
{generate_css(theme)}
</style>
</head>

<body>
    <pre>
{rows}    </pre>
</body>
</html>"""
