"""
Integration tests for the analysis pipeline, response schemas and
pipeline observability.
"""

from datetime import datetime, timezone

import pytest
from loguru import logger

from outfit_intel.config import Config
from outfit_intel.schemas import AnalysisResponse, to_response
from outfit_intel.services.analysis import (
    OutfitAnalysisError, analyze_image, analyze_outfit, calculate_contrast_ratios
)
from outfit_intel.services.colors.records import color_record_from_hex, color_record_from_rgb
from outfit_intel.services.observability import (
    get_metrics_collector, performance_monitor, performance_tracked
)
from outfit_intel.services.scoring import get_grade
from outfit_intel.utils.ids import generate_analysis_id
from outfit_intel.utils.logging import configure_logging, get_logger, reset_logging


def manual_outfit():
    return {
        "top": color_record_from_hex("#1F3A5F"),
        "bottom": color_record_from_hex("#D9D4C7"),
        "shoes": color_record_from_rgb(20, 20, 20),
    }


class TestAnalyzeOutfit:
    """Test analysis assembly from garment colors."""

    def test_analysis_fields(self):
        """Test that every analysis field is filled and consistent."""
        analysis = analyze_outfit(manual_outfit())

        assert analysis.analysis_id.startswith("ana-")
        assert list(analysis.colors) == ["top", "bottom", "shoes"]
        assert analysis.grade == get_grade(analysis.score.total)
        assert 0 <= analysis.confidence <= 100
        assert analysis.temperature.warm_count + analysis.temperature.cool_count \
            + analysis.temperature.neutral_count == 3
        assert analysis.zones is None

    def test_id_and_timestamp_share_one_utc_instant(self):
        """Test that the ID embeds the same UTC second as the timestamp."""
        analysis = analyze_outfit(manual_outfit())
        stamp = datetime.fromisoformat(analysis.timestamp)

        assert stamp.utcoffset().total_seconds() == 0
        assert analysis.analysis_id.split("-")[1] == stamp.strftime("%Y%m%d%H%M%S")

    def test_contrast_ratio_labels(self):
        """Test WCAG pairs are labelled in garment order."""
        analysis = analyze_outfit(manual_outfit())
        assert [cr.pair for cr in analysis.contrast_ratios] == [
            "Top ↔ Bottom", "Top ↔ Shoes", "Bottom ↔ Shoes"
        ]
        for cr in analysis.contrast_ratios:
            assert 1.0 <= cr.ratio <= 21.0

    def test_mapping_is_put_in_garment_order(self):
        """Test that a shuffled mapping comes back as top, bottom, shoes."""
        outfit = manual_outfit()
        shuffled = {"shoes": outfit["shoes"], "top": outfit["top"], "bottom": outfit["bottom"]}
        assert list(analyze_outfit(shuffled).colors) == ["top", "bottom", "shoes"]

    def test_sequence_input(self):
        """Test that a plain list is keyed by garment position."""
        analysis = analyze_outfit(list(manual_outfit().values()))
        assert list(analysis.colors) == ["top", "bottom", "shoes"]

    def test_two_garments(self):
        """Test contrast pairs for a two-piece outfit."""
        outfit = manual_outfit()
        ratios = calculate_contrast_ratios({"top": outfit["top"], "bottom": outfit["bottom"]})
        assert [cr.pair for cr in ratios] == ["Top ↔ Bottom"]

    def test_empty_outfit_rejected(self):
        """Test that nothing to analyze raises OutfitAnalysisError."""
        with pytest.raises(OutfitAnalysisError):
            analyze_outfit({})

    def test_manual_records_are_fully_confident(self):
        """Test records built from typed-in hex values."""
        record = color_record_from_hex("#1F3A5F")
        assert record.confidence == 1.0
        assert record.dominant_colors == ()
        assert not record.is_pattern


class TestAnalyzeImage:
    """Test the full photo pipeline on a synthetic outfit."""

    def test_pipeline(self, outfit_buffer):
        """Test zones, colors and contrast for a synthetic outfit photo."""
        analysis = analyze_image(outfit_buffer, smart_crop=True)

        assert set(analysis.zones) == {"top", "bottom", "shoes"}
        assert list(analysis.colors) == ["top", "bottom", "shoes"]
        assert analysis.colors["shoes"].hsl.l < analysis.colors["top"].hsl.l
        assert len(analysis.contrast_ratios) == 3

    def test_transparent_photo_still_analyzed(self, transparent_buffer):
        """Test that a fully transparent photo yields gray sentinels."""
        analysis = analyze_image(transparent_buffer, smart_crop=False)
        assert all(c.hex == "#808080" for c in analysis.colors.values())
        assert all(c.confidence == 0.0 for c in analysis.colors.values())

    def test_pipeline_stages_are_recorded(self, outfit_buffer):
        """Test that each pipeline stage is timed once."""
        analyze_image(outfit_buffer)
        collector = get_metrics_collector()

        for stage in ("detect_zones", "extract_colors", "judge_outfit", "analyze_image"):
            assert collector.get_operation_stats(stage)["total_calls"] == 1


class TestResponseSchema:
    """Test conversion into response models."""

    def test_to_response(self, outfit_buffer):
        """Test conversion of a photo analysis into response models."""
        response = to_response(analyze_image(outfit_buffer))

        assert isinstance(response, AnalysisResponse)
        assert response.contrast_ratios[0].pair == "Top ↔ Bottom"
        assert response.zones["top"].label == "Top"
        assert len(response.score.breakdown) == 6

    def test_json_round_trip(self):
        """Test that the response survives JSON serialization."""
        response = to_response(analyze_outfit(manual_outfit()))
        restored = AnalysisResponse.model_validate_json(response.model_dump_json())

        assert restored == response
        assert restored.zones is None
        assert restored.colors["top"].hex == "#1F3A5F"


class TestObservability:
    """Test metrics collection around pipeline stages."""

    def test_errors_are_recorded_and_reraised(self):
        """Test that a failing stage is counted and the error propagates."""
        with pytest.raises(RuntimeError):
            with performance_monitor("failing_stage"):
                raise RuntimeError("boom")

        stats = get_metrics_collector().get_operation_stats("failing_stage")
        assert stats["total_calls"] == 1
        assert stats["error_count"] == 1

    def test_decorator_tracks_calls(self):
        """Test the decorator form of the stage monitor."""
        @performance_tracked("double")
        def double(x):
            return x * 2

        assert double(4) == 8
        assert double(5) == 10
        stats = get_metrics_collector().get_operation_stats("double")
        assert stats["total_calls"] == 2
        assert stats["p95_ms"] >= 0.0

    def test_unknown_operation_has_no_stats(self):
        """Test that a stage that never ran reports nothing."""
        assert get_metrics_collector().get_operation_stats("never_ran") == {}

    def test_pixel_throughput_and_summary(self, outfit_buffer):
        """Test pixel totals per stage in the collector summary."""
        analyze_image(outfit_buffer)
        summary = get_metrics_collector().summary()

        assert summary["detect_zones"]["pixels_processed"] == 120 * 200
        assert summary["judge_outfit"]["pixels_processed"] == 0
        assert set(summary) >= {"detect_zones", "extract_colors", "judge_outfit", "analyze_image"}


class TestLogging:
    """Test structured logging and sink ownership."""

    def test_existing_sinks_keep_receiving_records(self, log_lines):
        """Test that running an analysis leaves previously added sinks alone."""
        logger.info("host before")
        analyze_outfit(list(manual_outfit().values())[:2])
        logger.info("host after")

        messages = [line.split(" | ")[1] for line in log_lines]
        assert messages[0] == "host before"
        assert messages[-1] == "host after"
        assert "Outfit analyzed" in messages

    def test_verdict_carries_analysis_context(self, log_lines):
        """Test that zone and verdict lines bind the analysis ID."""
        analysis = analyze_outfit(manual_outfit())

        zone_lines = [line for line in log_lines if "Zone top color #1F3A5F" in line]
        verdict = [line for line in log_lines if "Outfit analyzed" in line]
        assert len(zone_lines) == 1
        assert len(verdict) == 1
        assert analysis.analysis_id in verdict[0]
        assert analysis.grade.letter in verdict[0]

    def test_structured_logger_binds_extra(self, log_lines):
        """Test that extra fields are bound onto the record."""
        get_logger().warning("low confidence", extra={"zone": "shoes"})
        assert log_lines[-1].startswith("WARNING | low confidence")
        assert "'zone': 'shoes'" in log_lines[-1]

    def test_configure_logging_replaces_only_its_own_sink(self, log_lines):
        """Test that reconfiguring swaps the configured sink and keeps others."""
        first, second = [], []
        try:
            configure_logging(level="info", sink=first.append)
            configure_logging(level="info", sink=second.append)
            logger.info("after reconfigure")
        finally:
            reset_logging()
        logger.info("after reset")

        assert first == []
        assert len(second) == 1
        assert "after reconfigure" in second[0]
        assert [line.split(" | ")[1] for line in log_lines] == ["after reconfigure", "after reset"]


class TestUtilities:
    """Test ID generation and configuration validators."""

    def test_analysis_ids_are_unique(self):
        """Test that IDs do not collide within one second."""
        ids = {generate_analysis_id() for _ in range(50)}
        assert len(ids) == 50

    def test_analysis_id_uses_utc(self):
        """Test that aware instants are converted to UTC for the ID."""
        instant = datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
        assert generate_analysis_id(instant).startswith("ana-20260102030405-")
        assert generate_analysis_id(instant.replace(tzinfo=None)).startswith("ana-20260102030405-")

    def test_config_validators(self):
        """Test stride, shift and proportion validation."""
        assert Config.validate_stride(4)
        assert not Config.validate_stride(0)
        assert Config.validate_bucket_shift(3)
        assert not Config.validate_bucket_shift(8)
        assert Config.validate_proportions(0.08, 0.42, 0.78, 0.97)
        assert not Config.validate_proportions(0.42, 0.08)
        assert not Config.validate_proportions()
