"""
Unit tests for the color model.

Covers conversions, WCAG contrast, hue geometry, temperature, neutral
detection and color naming.
"""

import colorsys

import numpy as np
import pytest

from outfit_intel.services.colors.color_model import (
    rgb_to_hsl, rgb_to_hsl_array, hsl_to_rgb, rgb_to_hex, hex_to_rgb, round_half_up,
    calculate_contrast, lightness_contrast, hue_difference, is_warm_hue, is_cool_hue,
    get_temperature, is_neutral, is_achromatic, is_fashion_neutral, get_color_description
)
from outfit_intel.services.colors.records import HSL, RGB, ColorRecord, color_record_from_hex

from conftest import make_color


class TestConversions:
    """Test RGB <-> HSL <-> HEX conversions."""

    def test_primary_colors(self):
        """Test conversion of primary colors to HSL."""
        assert rgb_to_hsl(255, 0, 0) == HSL(0, 100, 50)
        assert rgb_to_hsl(0, 255, 0) == HSL(120, 100, 50)
        assert rgb_to_hsl(0, 0, 255) == HSL(240, 100, 50)

    def test_achromatic_extremes(self):
        """Test black, white and mid gray."""
        assert rgb_to_hsl(0, 0, 0) == HSL(0, 0, 0)
        assert rgb_to_hsl(255, 255, 255) == HSL(0, 0, 100)
        assert rgb_to_hsl(128, 128, 128) == HSL(0, 0, 50)

    def test_hue_wraps_to_zero(self):
        """A hue that rounds to 360 is reported as 0."""
        assert rgb_to_hsl(255, 0, 1).h == 0

    def test_round_half_up(self):
        """Test that halves round up."""
        assert round_half_up(0.5) == 1
        assert round_half_up(2.5) == 3
        assert round_half_up(2.4999) == 2

    def test_matches_float_reference_within_rounding(self):
        """Test integer HSL against colorsys on a coarse RGB grid."""
        for r in range(0, 256, 17):
            for g in range(0, 256, 17):
                for b in range(0, 256, 17):
                    hsl = rgb_to_hsl(r, g, b)
                    ref_h, ref_l, ref_s = colorsys.rgb_to_hls(r / 255, g / 255, b / 255)

                    assert abs(hsl.l - ref_l * 100) <= 0.5 + 1e-9
                    assert abs(hsl.s - ref_s * 100) <= 0.5 + 1e-9
                    assert hue_difference(hsl.h, ref_h * 360) <= 0.5 + 1e-9

    def test_vectorized_matches_scalar(self):
        """Test that the array conversion agrees with the scalar one."""
        rng = np.random.default_rng(7)
        pixels = rng.integers(0, 256, size=(2000, 3))
        pixels = np.vstack([pixels, [[255, 0, 1], [10, 10, 10], [255, 255, 0], [0, 255, 255]]])

        vectorized = rgb_to_hsl_array(pixels)
        scalar = np.array([rgb_to_hsl(*p) for p in pixels.tolist()])

        np.testing.assert_array_equal(vectorized, scalar)

    def test_hsl_to_rgb_basic(self):
        """Test HSL to RGB for reference colors."""
        assert hsl_to_rgb(0, 100, 50) == RGB(255, 0, 0)
        assert hsl_to_rgb(0, 0, 100) == RGB(255, 255, 255)
        assert hsl_to_rgb(240, 100, 25) == RGB(0, 0, 128)

    def test_hex_formatting(self):
        """Test uppercase hex output and case-insensitive input."""
        assert rgb_to_hex(255, 0, 128) == "#FF0080"
        assert rgb_to_hex(0, 0, 0) == "#000000"
        assert hex_to_rgb("#ff0080") == RGB(255, 0, 128)

    @pytest.mark.parametrize("bad", ["FF0080", "#FF00", "#GG0080", "", "#FF00800"])
    def test_hex_to_rgb_rejects_malformed(self, bad):
        """Test that malformed hex strings raise ValueError."""
        with pytest.raises(ValueError):
            hex_to_rgb(bad)


class TestContrast:
    """Test WCAG and lightness contrast."""

    def test_black_on_white_is_21(self):
        """Test the maximum WCAG contrast ratio."""
        black = ColorRecord.from_rgb(0, 0, 0)
        white = ColorRecord.from_rgb(255, 255, 255)
        assert calculate_contrast(black, white) == pytest.approx(21.0)
        assert calculate_contrast(white, black) == pytest.approx(21.0)

    def test_identical_colors_is_1(self):
        """Test the minimum WCAG contrast ratio."""
        navy = color_record_from_hex("#1F2A44")
        assert calculate_contrast(navy, navy) == pytest.approx(1.0)

    def test_lightness_contrast(self):
        """Test absolute lightness difference."""
        assert lightness_contrast(make_color(0, 0, 20), make_color(200, 50, 70)) == 50


class TestHueAndTemperature:
    """Test hue distance and warm/cool classification."""

    def test_hue_difference_is_circular(self):
        """Test hue distance across the 0/360 seam."""
        assert hue_difference(350, 10) == 20
        assert hue_difference(10, 350) == 20
        assert hue_difference(0, 180) == 180
        assert hue_difference(90, 90) == 0

    def test_warm_and_cool_bands(self):
        """Test warm and cool hue band edges."""
        assert is_warm_hue(0) and is_warm_hue(69) and is_warm_hue(300)
        assert not is_warm_hue(70)
        assert is_cool_hue(170) and is_cool_hue(299)
        assert not is_cool_hue(120) and not is_warm_hue(120)

    def test_get_temperature(self):
        """Test temperature labels for warm, cool and neutral colors."""
        assert get_temperature(make_color(20, 60, 50)) == "warm"
        assert get_temperature(make_color(220, 60, 50)) == "cool"
        assert get_temperature(make_color(0, 0, 50)) == "neutral"


class TestNeutrals:
    """Test neutral and fashion-neutral detection."""

    def test_low_saturation_is_neutral(self):
        """Test the saturation cutoff for neutrals."""
        assert is_neutral(make_color(200, 11, 50))
        assert not is_neutral(make_color(200, 12, 50))

    def test_near_black_and_white_tolerate_more_saturation(self):
        """Test the relaxed cutoff near black and white."""
        assert is_neutral(make_color(30, 18, 95))
        assert is_neutral(make_color(30, 18, 8))
        assert not is_neutral(make_color(30, 18, 50))

    def test_achromatic_is_plain_saturation_test(self):
        """Test the scoring engine's stricter achromatic check."""
        assert is_achromatic(make_color(0, 11, 50))
        assert not is_achromatic(make_color(30, 18, 95))

    def test_fashion_neutrals(self):
        """Test navy, khaki and olive boxes."""
        assert is_fashion_neutral(make_color(230, 40, 20))  # navy
        assert is_fashion_neutral(make_color(40, 25, 65))   # khaki
        assert is_fashion_neutral(make_color(80, 30, 30))   # olive
        assert not is_fashion_neutral(make_color(0, 90, 50))


class TestColorNaming:
    """Test fashion-aware color descriptions."""

    def test_achromatic_names(self):
        """Test names for black, gray and white."""
        assert get_color_description(HSL(0, 0, 5)) == "Black"
        assert get_color_description(HSL(0, 0, 45)) == "Gray"
        assert get_color_description(HSL(0, 0, 97)) == "White"

    def test_near_neutral_tints(self):
        """Test names for barely tinted colors."""
        assert get_color_description(HSL(40, 10, 70)) == "Cream"
        assert get_color_description(HSL(40, 10, 40)) == "Taupe"
        assert get_color_description(HSL(200, 10, 40)) == "Gray"
        assert get_color_description(HSL(200, 10, 10)) == "Near Black"

    def test_saturation_modifiers(self):
        """Test vivid, vibrant and muted prefixes."""
        assert get_color_description(HSL(0, 100, 50)) == "Vivid Red"
        assert get_color_description(HSL(120, 70, 50)) == "Vibrant Green"
        assert get_color_description(HSL(120, 20, 50)) == "Muted Sage"

    def test_lightness_modifier_wins(self):
        """Test that very dark and pale override saturation."""
        assert get_color_description(HSL(220, 60, 15)) == "Very Dark Navy"
        assert get_color_description(HSL(280, 90, 90)) == "Pale Lavender"

    def test_accepts_records(self):
        """Test naming from a color record."""
        assert get_color_description(make_color(0, 100, 50)) == "Vivid Red"

    def test_naming_is_total(self):
        """Test that every HSL triple gets a name."""
        for h in range(0, 360, 3):
            for s in range(0, 101, 10):
                for l in range(0, 101, 10):
                    name = get_color_description(HSL(h, s, l))
                    assert name and "Unknown" not in name
