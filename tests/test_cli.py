"""qlthemes-cli commands."""

import json

import pytest
from click.testing import CliRunner

from qlthemes.cli import cli
from qlthemes.config import SettingsManager


@pytest.fixture(autouse=True)
def settings(tmp_path, monkeypatch):
    """Settings kept in a per-test file instead of the user's home."""
    manager = SettingsManager(tmp_path / "settings" / "config.json")
    monkeypatch.setattr("qlthemes.config._manager", manager)
    return manager


@pytest.fixture
def run(tmp_path):
    runner = CliRunner()

    def _run(*args):
        return runner.invoke(cli, ["--themes-folder", str(tmp_path), *args], obj={})
    return _run


def test_list(run):
    result = run("list")
    assert result.exit_code == 0
    assert "Solarized Dark" in result.output
    assert "4 theme(s)" in result.output


def test_list_json(run):
    result = run("list", "--json")
    rows = json.loads(result.output)
    monokai = next(r for r in rows if r["name"] == "Base16 Monokai")
    assert monokai["appearance"] == "dark"
    assert monokai["kind"] == "built-in"
    assert monokai["base16"] is True
    assert monokai["keywords"] == 5


def test_css(run):
    result = run("css", "Solarized Dark")
    assert result.exit_code == 0
    assert "body { background-color: #002b36; }" in result.output
    assert ".hl.kwa {" in result.output


def test_html(run):
    result = run("html", "Print")
    assert result.exit_code == 0
    assert "<title>Print</title>" in result.output


def test_export_to_file(run, tmp_path):
    out = tmp_path / "out.theme"
    result = run("export", "Solarized Light", "-o", str(out))
    assert result.exit_code == 0
    text = out.read_text(encoding="utf-8")
    assert text.startswith('Name = "Solarized Light"\n')
    assert 'Categories = { "light" }' in text


def test_theme_from_yaml_path(run, tmp_path):
    path = tmp_path / "extra" / "one.yaml"
    path.parent.mkdir()
    path.write_text("name: From File\nplain: {color: \"#123456\"}\n", encoding="utf-8")
    result = run("css", str(path))
    assert result.exit_code == 0
    assert "body { color: #123456; }" in result.output


def test_unknown_theme(run):
    result = run("css", "Does Not Exist")
    assert result.exit_code == 1


def test_thumbnail(run, tmp_path, qapp):
    out = tmp_path / "thumb.png"
    result = run("thumbnail", "Solarized Dark", "-o", str(out), "--size", "64")
    assert result.exit_code == 0
    assert out.stat().st_size > 0


@pytest.mark.parametrize("extra", [[], ["--diagonal"]])
def test_combined(run, tmp_path, qapp, extra):
    out = tmp_path / "pair.png"
    result = run("combined", "Solarized Light", "Solarized Dark", "-o", str(out), *extra)
    assert result.exit_code == 0
    assert out.exists()


def test_duplicate_saves_copy(run, tmp_path):
    result = run("duplicate", "Print", "My Print")
    assert result.exit_code == 0
    saved = list(tmp_path.glob("*.theme"))
    assert len(saved) == 1
    text = saved[0].read_text(encoding="utf-8")
    assert text.startswith('Name = "My Print"\n')
    assert 'Categories = { "light" }' in text


def test_duplicate_without_folder(tmp_path):
    runner = CliRunner()
    missing = tmp_path / "absent"
    result = runner.invoke(
        cli, ["--themes-folder", str(missing), "duplicate", "Print", "Copy"], obj={}
    )
    assert result.exit_code == 1
    assert "Themes folder not found" in result.output


def test_duplicate_listed_on_next_run(run):
    assert run("duplicate", "Print", "My Print").exit_code == 0
    rows = json.loads(run("list", "--json").output)
    copy = next(r for r in rows if r["name"] == "My Print")
    assert copy["kind"] == "custom"
    assert copy["appearance"] == "light"


def test_list_marks_fallback_selection(run):
    rows = json.loads(run("list", "--json").output)
    selected = {r["name"]: r["selected"] for r in rows}
    assert selected["Print"] == "light"
    assert selected["Base16 Monokai"] == "dark"
    assert selected["Solarized Dark"] == ""


def test_select_stores_settings(run, settings):
    result = run("select", "--dark", "Solarized Dark")
    assert result.exit_code == 0
    assert "dark: Solarized Dark" in result.output

    stored = SettingsManager(settings.config_dir / "config.json").settings
    assert stored.dark_theme == "Solarized Dark"
    assert stored.light_theme == ""

    rows = json.loads(run("list", "--json").output)
    selected = {r["name"]: r["selected"] for r in rows}
    assert selected["Solarized Dark"] == "dark"
    assert selected["Base16 Monokai"] == ""


def test_select_unknown_theme(run, settings):
    result = run("select", "--light", "Nope")
    assert result.exit_code == 1
    assert "Theme 'Nope' not found." in result.output
    assert not (settings.config_dir / "config.json").exists()


def test_stale_selection_falls_back(run, settings):
    settings.settings.light_theme = "Removed Theme"
    rows = json.loads(run("list", "--json").output)
    assert next(r for r in rows if r["name"] == "Print")["selected"] == "light"
