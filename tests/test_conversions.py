import itertools

import numpy as np

from colorkit.conversions import (
    cmyk_to_rgb,
    gray_to_cmyk,
    gray_to_hsb,
    hsb_to_rgb,
    rgb_to_cmyk,
    rgb_to_gray,
    rgb_to_hsb,
    wrap_hue,
)

GRID = np.linspace(0.0, 1.0, 7)


def rgb_grid():
    for r, g, b in itertools.product(GRID, GRID, GRID):
        yield float(r), float(g), float(b)


def test_primaries_to_hsb():
    assert np.allclose(rgb_to_hsb(1, 0, 0), (0, 1, 1))
    assert np.allclose(rgb_to_hsb(0, 1, 0), (1 / 3, 1, 1))
    assert np.allclose(rgb_to_hsb(0, 0, 1), (2 / 3, 1, 1))


def test_magenta_hue_wraps_positive():
    # max == r with g < b gives a negative sector before wrapping
    h, s, v = rgb_to_hsb(1.0, 0.0, 0.5)
    assert 0.0 <= h < 1.0
    assert np.isclose(h, 1 - 1 / 12)


def test_achromatic_has_zero_hue_and_saturation():
    assert rgb_to_hsb(0.3, 0.3, 0.3) == (0.0, 0.0, 0.3)
    assert rgb_to_hsb(0.0, 0.0, 0.0) == (0.0, 0.0, 0.0)


def test_rgb_hsb_round_trip():
    for rgb in rgb_grid():
        h, s, v = rgb_to_hsb(*rgb)
        assert 0.0 <= h < 1.0
        assert np.allclose(hsb_to_rgb(h, s, v), rgb, atol=1e-9)


def test_rgb_cmyk_round_trip():
    for rgb in rgb_grid():
        assert np.allclose(cmyk_to_rgb(*rgb_to_cmyk(*rgb)), rgb, atol=1e-9)


def test_black_cmyk_is_degenerate():
    assert rgb_to_cmyk(0.0, 0.0, 0.0) == (0.0, 0.0, 0.0, 1.0)
    assert cmyk_to_rgb(0.3, 0.7, 0.2, 1.0) == (0.0, 0.0, 0.0)


def test_luma_weights():
    assert np.isclose(rgb_to_gray(1, 1, 1), 1.0)
    assert np.isclose(rgb_to_gray(1, 0, 0), 0.299)
    assert np.isclose(rgb_to_gray(0, 1, 0), 0.587)
    assert np.isclose(rgb_to_gray(0, 0, 1), 0.114)


def test_gray_helpers():
    assert gray_to_hsb(0.42) == (0.0, 0.0, 0.42)
    assert np.allclose(gray_to_cmyk(0.42), (0, 0, 0, 0.58))


def test_hue_of_one_is_red():
    assert np.allclose(hsb_to_rgb(1.0, 1.0, 1.0), (1, 0, 0))


def test_wrap_hue():
    assert wrap_hue(0.25) == 0.25
    assert wrap_hue(1.0) == 0.0
    assert np.isclose(wrap_hue(1.25), 0.25)
    assert np.isclose(wrap_hue(-0.25), 0.75)
    assert wrap_hue(-1e-18) == 0.0
