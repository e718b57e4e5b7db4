"""ThemeEngine: bundled themes, user folder loading, selection and saving."""

import logging

import pytest

from qlthemes.errors import MissingThemeFolderError
from qlthemes.theme.engine import Appearance, Theme, ThemeEngine

BUNDLED = ["Base16 Monokai", "Print", "Solarized Dark", "Solarized Light"]

USER_THEME = """\
name: User Theme
appearance: 2
plain: {color: "#dddddd"}
canvas: {color: "#101010"}
keywords:
  - {color: "#ff8800", bold: 1}
"""


@pytest.fixture
def engine(tmp_path):
    return ThemeEngine(themes_folder=tmp_path)


class TestBundled:
    def test_builtin_themes(self, engine):
        assert engine.list_themes() == BUNDLED

    def test_builtins_are_standalone(self, engine):
        for name in BUNDLED:
            assert engine.get_theme(name).is_standalone

    def test_bundled_content(self, engine):
        theme = engine.get_theme("Solarized Dark")
        assert theme.appearance is Appearance.DARK
        assert theme.canvas.color == "#002b36"
        assert theme.block_comment.italic is True
        assert len(theme.keywords) == 4
        assert not theme.is_dirty

    def test_base16_flag(self, engine):
        assert engine.get_theme("Base16 Monokai").is_base16
        assert not engine.get_theme("Print").is_base16

    def test_unknown_theme(self, engine):
        assert engine.get_theme("nope") is None


class TestUserFolder:
    def test_load_themes(self, engine, tmp_path):
        (tmp_path / "user.yaml").write_text(USER_THEME, encoding="utf-8")
        assert engine.load_themes() == 1
        theme = engine.get_theme("User Theme")
        assert not theme.is_standalone
        assert theme.keywords[0].bold is True

    def test_broken_file_skipped(self, engine, tmp_path, caplog):
        (tmp_path / "good.yaml").write_text(USER_THEME, encoding="utf-8")
        (tmp_path / "bad.yaml").write_text("name: [oops\n", encoding="utf-8")
        with caplog.at_level(logging.WARNING, logger="qlthemes.theme.engine"):
            assert engine.load_themes() == 1
        assert "bad.yaml" in caplog.text

    def test_missing_folder(self, tmp_path):
        engine = ThemeEngine(themes_folder=tmp_path / "absent")
        assert engine.load_themes() == 0

    def test_no_folder(self):
        assert ThemeEngine().load_themes() == 0


class TestSelection:
    def test_for_appearance(self, engine):
        names = [t.name for t in engine.themes_for_appearance(Appearance.LIGHT)]
        assert names == ["Print", "Solarized Light"]

    def test_fallbacks(self, engine):
        assert engine.current_light.name == "Print"
        assert engine.current_dark.name == "Base16 Monokai"

    def test_explicit_selection(self, engine):
        engine.current_dark = engine.get_theme("Solarized Dark")
        assert engine.current_dark.name == "Solarized Dark"

    def test_remove_clears_selection(self, engine):
        engine.current_light = engine.get_theme("Solarized Light")
        removed = engine.remove_theme("Solarized Light")
        assert removed.name == "Solarized Light"
        assert engine.current_light.name == "Print"
        assert engine.remove_theme("Solarized Light") is None


class TestSaveTheme:
    def test_save_registers(self, engine, tmp_path):
        events = []
        engine.set_event_handler(events.append)
        theme = engine.get_theme("Solarized Dark").duplicate()
        theme.name = "My Solarized"

        event = engine.save_theme(theme)

        assert event.path.parent == tmp_path
        assert event.path.suffix == ".theme"
        assert engine.get_theme("My Solarized") is theme
        assert events == [event]

    def test_save_without_folder(self):
        engine = ThemeEngine()
        theme = Theme("Orphan")
        with pytest.raises(MissingThemeFolderError):
            engine.save_theme(theme)
        assert engine.get_theme("Orphan") is None

    def test_saved_theme_loads_again(self, engine, tmp_path):
        theme = engine.get_theme("Solarized Dark").duplicate()
        theme.name = "My Copy"
        theme.appearance = Appearance.DARK
        event = engine.save_theme(theme)

        fresh = ThemeEngine(themes_folder=tmp_path)
        assert fresh.load_themes() == 1
        loaded = fresh.get_theme("My Copy")
        assert loaded is not None
        assert loaded.path == str(event.path)
        assert loaded.appearance is Appearance.DARK
        assert not loaded.is_standalone
        assert not loaded.is_dirty
        assert loaded.to_theme_file() == theme.to_theme_file()

    def test_reloaded_theme_saves_in_place(self, engine, tmp_path):
        theme = Theme("Round Trip")
        first = engine.save_theme(theme)

        loaded = ThemeEngine(themes_folder=tmp_path)
        loaded.load_themes()
        reloaded = loaded.get_theme("Round Trip")
        reloaded.description = "edited"
        second = loaded.save_theme(reloaded)

        assert second.path == first.path
        assert len(list(tmp_path.glob("*.theme"))) == 1
        assert len(list(tmp_path.glob("*.yaml"))) == 1
