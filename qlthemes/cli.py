"""
qlthemes/cli.py

Command-line interface for theme conversion.

Usage:
    qlthemes-cli list
    qlthemes-cli css "Solarized Dark"
    qlthemes-cli export "Solarized Dark" -o solarized.theme
    qlthemes-cli thumbnail "Solarized Dark" -o solarized.png --size 128
    qlthemes-cli combined "Solarized Light" "Solarized Dark" -o pair.png
    qlthemes-cli --themes-folder ~/themes duplicate "Print" "My Print"
    qlthemes-cli select --light "Solarized Light" --dark "Solarized Dark"
"""

import json
import logging
import os
import sys
from pathlib import Path
from typing import Optional

import click

from .config import get_settings, save_settings
from .errors import MissingThemeFolderError, ThemeError
from .theme.engine import Theme, ThemeEngine

# Shared QGuiApplication for the rendering commands
_app = None


def ensure_app():
    """Create the QGuiApplication needed by QFont/QPainter, once."""
    global _app
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    from PyQt6.QtGui import QGuiApplication

    _app = QGuiApplication.instance() or QGuiApplication([sys.argv[0]])
    return _app


def format_table(items: list, columns: list[tuple[str, str, int]]) -> str:
    """
    Format rows as a simple table.

    Args:
        items: List of dicts
        columns: List of (key, header, width) tuples
    """
    if not items:
        return "No themes."

    header = " ".join(f"{name:<{width}}" for _, name, width in columns)
    separator = " ".join("-" * width for _, _, width in columns)
    lines = [header.rstrip(), separator.rstrip()]
    for item in items:
        row = " ".join(
            f"{str(item.get(key, ''))[:width - 1]:<{width}}" for key, _, width in columns
        )
        lines.append(row.rstrip())
    return "\n".join(lines)


def get_engine(ctx) -> ThemeEngine:
    """Engine over the chosen themes folder, seeded with the stored selection."""
    settings = get_settings()
    engine = ThemeEngine(ctx.obj.get("themes_folder") or settings.themes_path)
    engine.load_themes()
    if settings.light_theme:
        engine.current_light = engine.get_theme(settings.light_theme)
    if settings.dark_theme:
        engine.current_dark = engine.get_theme(settings.dark_theme)
    return engine


def resolve_theme(ctx, name: str) -> Theme:
    """Theme by registered name, or from a YAML dump path."""
    theme = get_engine(ctx).get_theme(name)
    if theme is not None:
        return theme

    path = Path(name)
    if path.suffix in (".yaml", ".yml") and path.is_file():
        try:
            return Theme.from_yaml(path)
        except ThemeError as e:
            click.echo(str(e), err=True)
            sys.exit(1)

    click.echo(f"Theme '{name}' not found.", err=True)
    sys.exit(1)


def _emit(text: str, output: Optional[Path]) -> None:
    if output is None:
        click.echo(text, nl=False)
    else:
        output.write_text(text, encoding="utf-8")
        click.echo(f"Wrote {output}", err=True)


def _save_image(image, output: Path) -> None:
    if image is None or not image.save(str(output)):
        click.echo(f"Failed to render {output}", err=True)
        sys.exit(1)
    click.echo(f"Wrote {output}", err=True)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option(
    "--themes-folder",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="User themes folder (defaults to the configured one)",
)
@click.pass_context
def cli(ctx, verbose, themes_folder):
    """Convert highlight themes to CSS, HTML, thumbnails and theme files."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG)
    ctx.ensure_object(dict)
    ctx.obj["themes_folder"] = themes_folder


@cli.command("list")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
@click.pass_context
def list_themes(ctx, output_json):
    """List available themes."""
    engine = get_engine(ctx)
    current = (("light", engine.current_light), ("dark", engine.current_dark))
    rows = []
    for name in engine.list_themes():
        theme = engine.get_theme(name)
        rows.append({
            "selected": ",".join(mode for mode, t in current if t is theme),
            "name": theme.name,
            "appearance": theme.appearance_name or "-",
            "kind": "built-in" if theme.is_standalone else "custom",
            "base16": theme.is_base16,
            "keywords": len(theme.keywords),
        })

    if output_json:
        click.echo(json.dumps(rows, indent=2))
    else:
        columns = [
            ("name", "NAME", 30),
            ("appearance", "APPEARANCE", 11),
            ("kind", "KIND", 9),
            ("keywords", "KEYWORDS", 8),
            ("selected", "SELECTED", 10),
        ]
        click.echo(format_table(rows, columns))
        click.echo(f"\n{len(rows)} theme(s)")


@cli.command("css")
@click.argument("name")
@click.option("-o", "--output", type=click.Path(dir_okay=False, path_type=Path), default=None)
@click.pass_context
def css(ctx, name, output):
    """Print the stylesheet of a theme."""
    _emit(resolve_theme(ctx, name).to_css(), output)


@cli.command("html")
@click.argument("name")
@click.option("-o", "--output", type=click.Path(dir_okay=False, path_type=Path), default=None)
@click.pass_context
def html(ctx, name, output):
    """Print the HTML sample page of a theme."""
    _emit(resolve_theme(ctx, name).to_html_preview(), output)


@cli.command("export")
@click.argument("name")
@click.option("-o", "--output", type=click.Path(dir_okay=False, path_type=Path), default=None)
@click.pass_context
def export(ctx, name, output):
    """Print a theme in the .theme file format."""
    _emit(resolve_theme(ctx, name).to_theme_file(), output)


@cli.command("thumbnail")
@click.argument("name")
@click.option("-o", "--output", type=click.Path(dir_okay=False, path_type=Path), required=True)
@click.option("-s", "--size", type=click.IntRange(min=1), default=None, help="Edge in pixels")
@click.pass_context
def thumbnail(ctx, name, output, size):
    """Render a theme swatch to an image file."""
    theme = resolve_theme(ctx, name)
    ensure_app()
    from PyQt6.QtCore import QSize
    from PyQt6.QtGui import QFont, QFontDatabase

    settings = get_settings()
    size = size or settings.thumbnail_size
    if settings.thumbnail_font_family:
        font = QFont(settings.thumbnail_font_family)
    else:
        font = QFontDatabase.systemFont(QFontDatabase.SystemFont.GeneralFont)
    font.setPointSize(settings.thumbnail_font_size)

    _save_image(theme.to_thumbnail(QSize(size, size), font), output)


@cli.command("combined")
@click.argument("light")
@click.argument("dark")
@click.option("-o", "--output", type=click.Path(dir_okay=False, path_type=Path), required=True)
@click.option("-s", "--size", type=click.IntRange(min=1), default=100, show_default=True)
@click.option("--spacing", type=click.IntRange(min=0), default=8, show_default=True)
@click.option("--diagonal", is_flag=True, help="Split one swatch diagonally instead")
@click.pass_context
def combined(ctx, light, dark, output, size, spacing, diagonal):
    """Render a light and a dark theme into one image."""
    light_theme = resolve_theme(ctx, light)
    dark_theme = resolve_theme(ctx, dark)
    ensure_app()
    from .theme.preview import combine_preview, combine_side_by_side

    if diagonal:
        from PyQt6.QtCore import QSize
        from PyQt6.QtGui import QFontDatabase

        font = QFontDatabase.systemFont(QFontDatabase.SystemFont.GeneralFont)
        font.setPointSizeF(max(3.0, size / 12))
        edge = QSize(size, size)
        image = combine_preview(
            light_theme.to_thumbnail(edge, font),
            dark_theme.to_thumbnail(edge, font),
        )
    else:
        image = combine_side_by_side(light_theme, dark_theme, size, spacing)
    _save_image(image, output)


@cli.command("duplicate")
@click.argument("name")
@click.argument("new_name")
@click.pass_context
def duplicate(ctx, name, new_name):
    """Save a copy of a theme into the themes folder."""
    engine = get_engine(ctx)
    source = engine.get_theme(name)
    if source is None:
        click.echo(f"Theme '{name}' not found.", err=True)
        sys.exit(1)

    theme = source.duplicate()
    theme.name = new_name
    theme.appearance = source.appearance
    try:
        event = engine.save_theme(theme)
    except MissingThemeFolderError as e:
        click.echo(f"{e}. Use --themes-folder to choose one.", err=True)
        sys.exit(1)
    click.echo(str(event.path))


@cli.command("select")
@click.option("--light", "light_name", default=None, help="Theme for light mode")
@click.option("--dark", "dark_name", default=None, help="Theme for dark mode")
@click.pass_context
def select(ctx, light_name, dark_name):
    """Store the themes used for light and dark mode."""
    engine = get_engine(ctx)
    for name in (light_name, dark_name):
        if name is not None and engine.get_theme(name) is None:
            click.echo(f"Theme '{name}' not found.", err=True)
            sys.exit(1)

    settings = get_settings()
    if light_name is not None:
        settings.light_theme = light_name
    if dark_name is not None:
        settings.dark_theme = dark_name
    save_settings()
    click.echo(f"light: {settings.light_theme or '-'}")
    click.echo(f"dark: {settings.dark_theme or '-'}")


def main():
    cli(obj={})


if __name__ == "__main__":
    main()
