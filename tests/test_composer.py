"""Tests for per-cell dot decisions."""

import pytest

from rasterbator import AreaSample, RasterConfig
from rasterbator.image_processing.composer import compose_dot, dot_radius


def test_radius_from_brightness():
    assert dot_radius(0.0, 10) == 5
    assert dot_radius(1.0, 10) == 0
    assert dot_radius(0.5, 10) == 2.5


def test_darker_cells_get_larger_dots():
    config = RasterConfig()
    dark = compose_dot(AreaSample((40, 40, 40), 0.2), 0, 0, 20, config)
    light = compose_dot(AreaSample((200, 200, 200), 0.7), 0, 0, 20, config)
    assert dark.radius >= light.radius


def test_radius_at_half_pixel_is_suppressed():
    # (1 - 0.5) * 2 / 2 = 0.5
    sample = AreaSample((128, 128, 128), 0.5)
    assert compose_dot(sample, 0, 0, 2, RasterConfig()) is None


def test_radius_just_above_half_pixel_is_kept():
    sample = AreaSample((128, 128, 128), 0.49)
    dot = compose_dot(sample, 3, 4, 2, RasterConfig())
    assert dot is not None
    assert dot.radius == pytest.approx(0.51)
    assert (dot.center_x, dot.center_y) == (3, 4)


def test_mono_mode_uses_configured_color():
    config = RasterConfig(color_mode="mono", dot_color="#123456")
    dot = compose_dot(AreaSample((200, 0, 0), 0.1), 0, 0, 10, config)
    assert dot.color == (0x12, 0x34, 0x56)


@pytest.mark.parametrize("mode", ["multi", "average"])
def test_color_modes_use_sampled_color(mode):
    config = RasterConfig(color_mode=mode)
    dot = compose_dot(AreaSample((200, 0, 0), 0.1), 0, 0, 10, config)
    assert dot.color == (200, 0, 0)


def test_background_cell_is_suppressed_even_when_dark():
    config = RasterConfig(background_removal=True, background_color="#000000")
    sample = AreaSample((0, 0, 0), 0.0, is_background=True)
    assert compose_dot(sample, 0, 0, 10, config) is None


def test_edge_keeps_background_cell_only_with_preserve_edges():
    sample = AreaSample((240, 240, 240), 0.9, is_background=True)

    without = RasterConfig(background_removal=True)
    assert compose_dot(sample, 0, 0, 20, without, is_edge=True) is None

    with_edges = RasterConfig(background_removal=True, preserve_edges=True)
    assert compose_dot(sample, 0, 0, 20, with_edges, is_edge=False) is None
    dot = compose_dot(sample, 0, 0, 20, with_edges, is_edge=True)
    assert dot is not None
    assert dot.radius == pytest.approx(1.0)


def test_background_flag_ignored_when_removal_disabled():
    sample = AreaSample((0, 0, 0), 0.0, is_background=True)
    assert compose_dot(sample, 0, 0, 10, RasterConfig()) is not None
