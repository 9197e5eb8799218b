import numpy as np
import pytest

from colorkit.schemes import SCHEME_KINDS, color_scheme
from colorkit.token import ColorToken

BASE = ColorToken.from_hsb(0.5, 0.6, 0.9, 0.7)


def test_every_kind_returns_four_hsb_tokens():
    for kind in SCHEME_KINDS:
        out = color_scheme(BASE, kind)
        assert len(out) == 4
        for t in out:
            assert t.formulation == "hsb"
            assert t.alpha == 0.7
            assert 0.0 <= t.hue < 1.0
            assert 0.0 <= t.saturation <= 1.0
            assert 0.0 <= t.brightness <= 1.0


def test_analogous_offsets():
    hues = [t.hue for t in color_scheme(BASE, "analogous")]
    expected = [0.5 + d / 360 for d in (30, 15, -15, -30)]
    assert np.allclose(hues, expected)
    assert np.isclose(color_scheme(BASE, "analogous")[0].brightness, 0.8)


def test_triadic_wraps_hue():
    out = color_scheme(BASE, "triadic")
    assert np.isclose(out[1].hue, (0.5 + 1 / 3) % 1.0)
    assert np.isclose(out[2].hue, (0.5 + 2 / 3) % 1.0)
    assert np.isclose(out[0].saturation, 0.4)


def test_complementary_opposite_hue():
    out = color_scheme(BASE, "complementary")
    assert np.isclose(out[2].hue, 0.0)
    assert np.isclose(out[3].saturation, 0.6 * 5 / 7)


def test_monochromatic_keeps_hue():
    out = color_scheme(BASE, "monochromatic")
    assert all(np.isclose(t.hue, 0.5) for t in out)
    assert np.isclose(out[0].brightness, 0.3)


def test_dark_source_clamps_brightness():
    dark = ColorToken.from_hsb(0.2, 0.02, 0.03)
    for t in color_scheme(dark, "analogous"):
        assert t.saturation == 0.0
        assert t.brightness == 0.0


def test_unknown_kind():
    with pytest.raises(ValueError):
        color_scheme(BASE, "tetradic")
