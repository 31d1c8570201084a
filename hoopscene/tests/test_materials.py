"""
Tests for materials and color management.
"""
import numpy as np
import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from src.materials import (
    ColorPolicy,
    Shading,
    aces_filmic,
    court_palette,
    display_rgb,
    hex_to_rgb,
    linear_to_srgb,
    make_material,
    rgb_to_css,
    srgb_to_linear,
    to_working_space,
)


class TestHexColors:

    def test_parse(self):
        assert hex_to_rgb("#ff8c00") == pytest.approx((1.0, 140 / 255, 0.0))
        assert hex_to_rgb("c68642") == pytest.approx((198 / 255, 134 / 255, 66 / 255))

    def test_short_form(self):
        assert hex_to_rgb("#fff") == (1.0, 1.0, 1.0)

    @pytest.mark.parametrize("bad", ["", "#12", "#gggggg", "not a color"])
    def test_invalid(self, bad):
        with pytest.raises(ValueError):
            hex_to_rgb(bad)

    def test_css(self):
        assert rgb_to_css((1.0, 0.5, 0.0)) == "rgb(255,128,0)"
        assert rgb_to_css((1.5, -0.2, 0.0)) == "rgb(255,0,0)"


class TestTransferFunctions:

    def test_round_trip(self):
        c = np.linspace(0.0, 1.0, 101)
        assert np.allclose(linear_to_srgb(srgb_to_linear(c)), c, atol=1e-6)

    def test_known_values(self):
        assert float(srgb_to_linear(0.5)) == pytest.approx(0.2140, abs=1e-4)
        assert float(srgb_to_linear(1.0)) == pytest.approx(1.0)
        assert float(srgb_to_linear(0.0)) == 0.0

    def test_aces_is_bounded_and_monotonic(self):
        c = np.linspace(0.0, 10.0, 200)
        out = aces_filmic(c)
        assert out.min() >= 0.0 and out.max() <= 1.0
        assert np.all(np.diff(out) >= 0)


class TestColorPolicy:

    def test_parse(self):
        assert ColorPolicy.parse("raw") is ColorPolicy.RAW
        assert ColorPolicy.parse(" Linearized ") is ColorPolicy.LINEARIZED
        assert ColorPolicy.parse(ColorPolicy.RAW) is ColorPolicy.RAW

    def test_parse_unknown(self):
        with pytest.raises(ValueError, match="Unknown color policy"):
            ColorPolicy.parse("gamma")

    def test_raw_passthrough(self):
        rgb = to_working_space("#c68642", ColorPolicy.RAW)
        assert np.allclose(display_rgb(rgb, ColorPolicy.RAW, exposure=1.2), hex_to_rgb("#c68642"))

    def test_linearized_round_trip_without_tone_mapping(self):
        rgb = to_working_space("#c68642", ColorPolicy.LINEARIZED)
        assert rgb[0] < hex_to_rgb("#c68642")[0]
        out = display_rgb(rgb, ColorPolicy.LINEARIZED, exposure=1.0, tone_mapping=False)
        assert np.allclose(out, hex_to_rgb("#c68642"), atol=1e-6)

    def test_display_accepts_arrays(self):
        cols = np.array([[0.0, 0.0, 0.0], [1.0, 1.0, 1.0]])
        out = display_rgb(cols, ColorPolicy.LINEARIZED, exposure=1.2)
        assert out.shape == (2, 3)
        assert np.allclose(out[0], 0.0)


class TestPalette:

    def test_court_materials(self, palette_raw):
        assert palette_raw.court.shading is Shading.PHONG
        assert palette_raw.court.shininess == 50.0
        assert palette_raw.line.shading is Shading.BASIC
        assert palette_raw.backboard.transparent is True
        assert palette_raw.backboard.opacity == 0.6
        assert palette_raw.rim.color == hex_to_rgb("#ff8c00")

    def test_policy_applies_to_every_material(self):
        raw = court_palette(ColorPolicy.RAW)
        lin = court_palette(ColorPolicy.LINEARIZED)
        for name in ("court", "support", "rim"):
            r, l = getattr(raw, name), getattr(lin, name)
            assert np.allclose(srgb_to_linear(r.color), l.color)

    def test_make_material(self):
        m = make_material("#888888", ColorPolicy.RAW, "phong", shininess=10.0)
        assert m.shading is Shading.PHONG
        assert m.shininess == 10.0
