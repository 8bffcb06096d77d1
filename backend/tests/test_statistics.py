"""
Unit tests for pixel sampling, color statistics and skin rejection.
"""

import numpy as np
import pytest

from outfit_intel.services.colors.pixels import PixelBuffer, Rect, sample_pixels
from outfit_intel.services.colors.records import RGB
from outfit_intel.services.colors.skin import (
    DEFAULT_SKIN_RANGES, SkinRange, is_skin_color, reject_skin_pixels, skin_mask
)
from outfit_intel.services.colors.statistics import (
    dominant_color_bucketing, extract_average_color, trimmed_mean
)

from conftest import solid_image


class TestPixelBuffer:
    """Test buffer construction and region access."""

    def test_flat_rgba_requires_matching_length(self):
        """Test flat buffers with the wrong length."""
        with pytest.raises(ValueError):
            PixelBuffer([0] * 15, width=2, height=2)
        with pytest.raises(ValueError):
            PixelBuffer([0] * 16)

    def test_flat_rgba_reshaped(self):
        """Test that flat RGBA data is reshaped row-major."""
        data = list(range(2 * 3 * 4))
        buf = PixelBuffer(bytes(data), width=3, height=2)
        assert (buf.width, buf.height) == (3, 2)
        assert buf.rgba[1, 0].tolist() == [12, 13, 14, 15]

    def test_rgb_input_is_opaque(self):
        """Test that RGB arrays gain an opaque alpha channel."""
        buf = PixelBuffer(np.zeros((4, 5, 3), dtype=np.uint8))
        assert buf.rgba.shape == (4, 5, 4)
        assert (buf.rgba[:, :, 3] == 255).all()

    def test_rejects_wrong_shape(self):
        """Test arrays with an unsupported channel count."""
        with pytest.raises(ValueError):
            PixelBuffer(np.zeros((4, 5, 2), dtype=np.uint8))

    def test_buffer_is_read_only_but_source_is_not(self):
        """Test that wrapping does not freeze the caller's array."""
        source = solid_image(4, 4, (1, 2, 3))
        buf = PixelBuffer(source)
        assert not buf.rgba.flags.writeable
        assert source.flags.writeable

    def test_clamp_rect(self):
        """Test rectangle clamping to buffer bounds."""
        buf = PixelBuffer(solid_image(10, 10, (0, 0, 0)))
        assert buf.clamp_rect(Rect(-5, 2, 10, 20)) == Rect(0, 2, 10, 8)
        assert buf.clamp_rect(Rect(20, 20, 5, 5)) is None


class TestSampling:
    """Test stride and alpha filtering."""

    def test_stride_subsamples_row_major(self):
        """Test stride subsampling."""
        buf = PixelBuffer(solid_image(10, 10, (50, 60, 70)))
        assert len(sample_pixels(buf, Rect(0, 0, 10, 10), stride=4)) == 25
        assert len(sample_pixels(buf, Rect(0, 0, 10, 10), stride=1)) == 100

    def test_transparent_pixels_dropped(self):
        """Test alpha filtering."""
        img = solid_image(10, 10, (50, 60, 70))
        img[:5, :, 3] = 0
        pixels = sample_pixels(PixelBuffer(img), Rect(0, 0, 10, 10), stride=1)
        assert pixels.shape == (50, 3)

    def test_outside_region_is_empty(self):
        """Test sampling outside the buffer."""
        buf = PixelBuffer(solid_image(10, 10, (50, 60, 70)))
        assert sample_pixels(buf, Rect(50, 50, 5, 5)).shape == (0, 3)

    def test_invalid_stride_rejected(self):
        """Test that an out-of-range stride raises ValueError."""
        buf = PixelBuffer(solid_image(10, 10, (50, 60, 70)))
        with pytest.raises(ValueError):
            sample_pixels(buf, Rect(0, 0, 10, 10), stride=100)

    def test_zero_stride_is_not_replaced_by_default(self):
        """Test that an explicit zero stride is validated, not defaulted."""
        buf = PixelBuffer(solid_image(10, 10, (50, 60, 70)))
        with pytest.raises(ValueError):
            sample_pixels(buf, Rect(0, 0, 10, 10), stride=0)


class TestTrimmedMean:
    """Test outlier-resistant averaging."""

    def test_empty_is_neutral_gray(self):
        """Test the trimmed mean of nothing."""
        assert trimmed_mean([]) == 128.0

    def test_constant_values(self):
        """Test the trimmed mean of a constant."""
        assert trimmed_mean([50] * 100) == 50.0

    def test_trims_ten_percent_each_end(self):
        """Test that outliers are trimmed."""
        assert trimmed_mean(list(range(1, 11))) == pytest.approx(5.5)
        assert trimmed_mean([10] * 9 + [255]) == pytest.approx(10.0)

    def test_small_samples_are_not_trimmed(self):
        """Test that tiny samples keep every value."""
        assert trimmed_mean([0, 0, 255]) == pytest.approx(85.0)

    def test_falls_back_to_median(self):
        """Test the median fallback for an empty remainder."""
        assert trimmed_mean([1, 2, 3, 4], trim_ratio=0.5) == 3.0

    def test_extract_average_color(self):
        """Test average color and the gray fallback."""
        pixels = np.array([[200, 10, 10]] * 18 + [[0, 255, 0]] * 2)
        assert extract_average_color(pixels) == RGB(200, 10, 10)
        assert extract_average_color(np.empty((0, 3))) == RGB(128, 128, 128)


class TestDominantColors:
    """Test quantized bucketing."""

    def test_ranked_by_count(self):
        """Test buckets ranked by pixel count."""
        pixels = np.array([[200, 10, 10]] * 6 + [[10, 10, 200]] * 3 + [[10, 200, 10]])
        colors = dominant_color_bucketing(pixels, k=3)

        assert [c.rgb for c in colors] == [RGB(200, 10, 10), RGB(10, 10, 200), RGB(10, 200, 10)]
        assert [c.frequency for c in colors] == pytest.approx([0.6, 0.3, 0.1])
        assert colors[0].hex == "#C80A0A"

    def test_ties_keep_first_seen_order(self):
        """Test tie-breaking by first-seen bucket."""
        pixels = np.array([[10, 10, 200], [200, 10, 10], [10, 10, 200], [200, 10, 10]])
        colors = dominant_color_bucketing(pixels, k=2)
        assert colors[0].rgb == RGB(10, 10, 200)
        assert colors[1].rgb == RGB(200, 10, 10)

    def test_bucket_reports_member_mean(self):
        """Test that a bucket reports the mean of its pixels."""
        pixels = np.array([[0, 0, 0], [15, 15, 15]])
        colors = dominant_color_bucketing(pixels, k=3, shift=4)
        assert len(colors) == 1
        assert colors[0].rgb == RGB(8, 8, 8)
        assert colors[0].frequency == 1.0

    def test_finer_quantization_separates_buckets(self):
        """Test that a smaller shift splits buckets."""
        pixels = np.array([[0, 0, 0], [15, 15, 15]])
        assert len(dominant_color_bucketing(pixels, k=3, shift=3)) == 2

    def test_empty_input(self):
        """Test bucketing with no pixels."""
        assert dominant_color_bucketing(np.empty((0, 3))) == []

    def test_invalid_shift_rejected(self):
        """Test that an out-of-range shift raises ValueError."""
        with pytest.raises(ValueError):
            dominant_color_bucketing(np.zeros((4, 3)), shift=8)


class TestSkinFilter:
    """Test skin tone rejection."""

    def test_typical_skin_tones(self):
        """Test light and dark skin tones."""
        assert is_skin_color((224, 172, 105))
        assert is_skin_color((141, 85, 36))

    def test_garment_colors_are_not_skin(self):
        """Test blue, black and gray."""
        assert not is_skin_color((0, 0, 255))
        assert not is_skin_color((10, 10, 10))
        assert not is_skin_color((128, 128, 128))

    def test_mask_matches_scalar(self):
        """Test that the vectorized mask agrees with the scalar check."""
        rng = np.random.default_rng(11)
        pixels = rng.integers(0, 256, size=(1500, 3))
        expected = [is_skin_color(p) for p in pixels.tolist()]
        assert skin_mask(pixels).tolist() == expected

    def test_reject_preserves_order(self):
        """Test that rejection keeps pixel order."""
        pixels = np.array([[0, 0, 255], [224, 172, 105], [10, 10, 10]])
        assert reject_skin_pixels(pixels).tolist() == [[0, 0, 255], [10, 10, 10]]

    def test_ranges_are_data(self):
        """Test custom skin ranges."""
        blue_range = (SkinRange(200, 260, 50, 100, 20, 80),)
        assert is_skin_color((0, 0, 255), ranges=blue_range)
        assert not is_skin_color((224, 172, 105), ranges=blue_range)
        assert len(DEFAULT_SKIN_RANGES) == 2
