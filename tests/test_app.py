"""Tests for the command line and preset loading."""

import json

import pytest
from PIL import Image

from rasterbator import ConfigurationError
from rasterbator.app import main
from rasterbator.config_manager import ConfigManager


@pytest.fixture
def black_png(tmp_path):
    path = tmp_path / "black.png"
    Image.new("RGB", (4, 4), (0, 0, 0)).save(path)
    return path


SMALL_PAGE = [
    "--use-pixels",
    "--paper-width", "20",
    "--paper-height", "20",
    "--dot-size", "10",
    "--target-width", "20",
]


def test_cli_writes_numbered_pages(tmp_path, black_png, capsys):
    base = tmp_path / "out" / "page"
    status = main([str(black_png), "-o", str(base), "--pages-wide", "2", *SMALL_PAGE])

    assert status == 0
    assert (tmp_path / "out" / "page_01.png").exists()
    assert (tmp_path / "out" / "page_02.png").exists()
    assert "Generated 2 page(s)" in capsys.readouterr().out


def test_cli_svg_and_preview(tmp_path, black_png):
    base = tmp_path / "page"
    preview = tmp_path / "preview.png"
    status = main(
        [str(black_png), "-o", str(base), "--format", "svg", "--preview", str(preview), *SMALL_PAGE]
    )

    assert status == 0
    assert "<circle" in (tmp_path / "page_01.svg").read_text(encoding="utf-8")
    with Image.open(preview) as image:
        assert image.size == (20, 20)


def test_cli_rejects_bad_color(tmp_path, black_png, capsys):
    status = main([str(black_png), "-o", str(tmp_path / "p"), "--dot-color", "#12345z"])
    assert status == 2
    assert "Invalid hex color" in capsys.readouterr().err
    assert not list(tmp_path.glob("p_*"))


def test_cli_missing_input(tmp_path, capsys):
    status = main([str(tmp_path / "nope.png"), "-o", str(tmp_path / "p")])
    assert status == 2
    assert "Failed to load image" in capsys.readouterr().err


def test_cli_preset_with_override(tmp_path, black_png):
    preset = tmp_path / "preset.json"
    preset.write_text(json.dumps({"pagesWide": 3, "pagesHigh": 2}))

    status = main(
        [str(black_png), "-o", str(tmp_path / "p"), "--config", str(preset), "--pages-high", "1", *SMALL_PAGE]
    )

    assert status == 0
    assert len(list(tmp_path.glob("p_*.png"))) == 3


def test_config_manager_missing_file_gives_defaults(tmp_path):
    config = ConfigManager(tmp_path / "missing.json").load()
    assert config.pages_wide == 1


def test_config_manager_overrides_win(tmp_path):
    preset = tmp_path / "preset.json"
    preset.write_text(json.dumps({"dotSize": 8, "colorMode": "average"}))
    config = ConfigManager(preset).load(dot_size=3)
    assert config.dot_size == 3
    assert config.color_mode.value == "average"


@pytest.mark.parametrize("content", ["{not json", "[1, 2]", '{"colorMode": "neon"}'])
def test_config_manager_invalid_presets(tmp_path, content):
    preset = tmp_path / "preset.json"
    preset.write_text(content)
    with pytest.raises(ConfigurationError):
        ConfigManager(preset).load()


def test_cli_unknown_preview_extension_fails_before_writing(tmp_path, black_png, capsys):
    status = main(
        [str(black_png), "-o", str(tmp_path / "p"), "--preview", str(tmp_path / "out.nope"), *SMALL_PAGE]
    )
    assert status == 2
    assert "Unknown image file extension" in capsys.readouterr().err
    assert not list(tmp_path.glob("p_*"))


def test_cli_reports_unwritable_output(tmp_path, black_png, capsys):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    status = main([str(black_png), "-o", str(blocker / "p"), *SMALL_PAGE])
    assert status == 2
    assert "Error:" in capsys.readouterr().err
