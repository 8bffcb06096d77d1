"""
Outfit Intelligence Configuration
Manages environment variables and defaults for the analysis core.
"""
import os


class Config:
    """Configuration class for the outfit analysis core."""

    # Logging
    LOG_LEVEL: str = os.environ.get("OUTFIT_LOG_LEVEL", "INFO")

    # Zone detection
    SMART_CROP_DEFAULT: bool = bool(int(os.environ.get("OUTFIT_SMART_CROP_DEFAULT", "1")))

    # Pixel sampling
    SAMPLE_STRIDE: int = int(os.environ.get("OUTFIT_SAMPLE_STRIDE", "4"))
    ALPHA_THRESHOLD: int = int(os.environ.get("OUTFIT_ALPHA_THRESHOLD", "128"))

    # Dominant color bucketing
    BUCKET_SHIFT: int = int(os.environ.get("OUTFIT_BUCKET_SHIFT", "4"))
    DOMINANT_COLOR_COUNT: int = int(os.environ.get("OUTFIT_DOMINANT_COLOR_COUNT", "3"))

    # Minimum extraction confidence (0-1) for a zone color to count as reliable
    MIN_ZONE_CONFIDENCE: float = float(os.environ.get("OUTFIT_MIN_ZONE_CONFIDENCE", "0.25"))

    # Observability
    METRICS_ENABLED: bool = bool(int(os.environ.get("OUTFIT_METRICS_ENABLED", "1")))

    # Neutral gray returned when a region yields no usable pixels
    FALLBACK_RGB = (128, 128, 128)

    @classmethod
    def validate_stride(cls, stride: int) -> bool:
        """Validate pixel sampling stride."""
        return 1 <= stride <= 64

    @classmethod
    def validate_bucket_shift(cls, shift: int) -> bool:
        """Validate quantization shift (bits dropped per channel)."""
        return 0 <= shift <= 7

    @classmethod
    def validate_proportions(cls, *boundaries: float) -> bool:
        """Validate that zone boundaries are ascending fractions of image height."""
        if not boundaries:
            return False
        if any(b < 0.0 or b > 1.0 for b in boundaries):
            return False
        return all(a < b for a, b in zip(boundaries, boundaries[1:]))


# Global config instance
config = Config()
