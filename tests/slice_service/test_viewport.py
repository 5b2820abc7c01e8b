"""
Unit tests for viewport descriptor parsing.

Tests both the structured result and the logging wrapper.
"""

import logging
import math

import pytest

from slice_service.viewport import (
    VIEWPORT_PRESETS,
    ViewportDimensions,
    ViewportErrorReason,
    get_viewport_dimensions,
    parse_viewport_size,
    resolve_viewport_size,
)


class TestValidSizes:
    """Tests for well-formed WIDTHxHEIGHT descriptors."""

    @pytest.mark.parametrize(
        "descriptor,width,height",
        [
            ("1200x675", 1200, 675),
            ("1200x1200", 1200, 1200),
            ("1200x628", 1200, 628),
            ("1080x1920", 1080, 1920),
            ("600x335", 600, 335),
            ("1x1", 1, 1),
            ("10000x10000", 10000, 10000),
        ],
    )
    def test_parses_dimensions(self, descriptor, width, height):
        assert get_viewport_dimensions(descriptor) == ViewportDimensions(width=width, height=height)

    def test_integral_values_are_ints(self):
        dimensions = get_viewport_dimensions("1200x675")
        assert isinstance(dimensions.width, int)
        assert isinstance(dimensions.height, int)

    def test_decimal_values_preserved(self):
        assert get_viewport_dimensions("1200.5x675.3") == ViewportDimensions(width=1200.5, height=675.3)

    def test_extra_segments_ignored(self):
        assert get_viewport_dimensions("1200x675x100") == ViewportDimensions(width=1200, height=675)

    def test_surrounding_whitespace_ignored(self):
        assert get_viewport_dimensions(" 800 x 600 ") == ViewportDimensions(width=800, height=600)

    def test_to_dict(self):
        assert get_viewport_dimensions("1200x675").to_dict() == {"width": 1200, "height": 675}


class TestAutoMode:
    def test_auto_returns_none(self):
        assert get_viewport_dimensions("auto") is None

    def test_auto_result(self):
        result = parse_viewport_size("auto")
        assert result.is_auto
        assert result.ok
        assert result.dimensions is None
        assert result.reason is None
        assert result.message is None

    def test_auto_does_not_log(self, caplog):
        with caplog.at_level(logging.ERROR, logger="slice_service.viewport"):
            get_viewport_dimensions("auto")
        assert caplog.text == ""


class TestInvalidInputs:
    """Invalid descriptors return None and log a diagnostic."""

    def test_missing_separator(self, caplog):
        with caplog.at_level(logging.ERROR, logger="slice_service.viewport"):
            assert get_viewport_dimensions("1200-675") is None
        assert "Invalid viewport size format: 1200-675" in caplog.text

    def test_empty_string(self, caplog):
        with caplog.at_level(logging.ERROR, logger="slice_service.viewport"):
            assert get_viewport_dimensions("") is None
        assert "Invalid viewport size format:" in caplog.text

    @pytest.mark.parametrize(
        "descriptor,expected_message",
        [
            ("abcx675", "Invalid viewport dimensions: NaN 675"),
            ("1200xabc", "Invalid viewport dimensions: 1200 NaN"),
            ("-1200x675", "Invalid viewport dimensions: -1200 675"),
            ("1200x-675", "Invalid viewport dimensions: 1200 -675"),
            ("0x675", "Invalid viewport dimensions: 0 675"),
            ("1200x0", "Invalid viewport dimensions: 1200 0"),
        ],
    )
    def test_invalid_dimensions(self, descriptor, expected_message, caplog):
        with caplog.at_level(logging.ERROR, logger="slice_service.viewport"):
            assert get_viewport_dimensions(descriptor) is None
        assert expected_message in caplog.text

    def test_uppercase_separator_is_not_accepted(self):
        assert parse_viewport_size("1200X675").reason == ViewportErrorReason.MISSING_SEPARATOR


class TestReasonCodes:
    """Tests for the structured parse result."""

    def test_missing_separator(self):
        result = parse_viewport_size("1200-675")
        assert not result.ok
        assert result.reason == ViewportErrorReason.MISSING_SEPARATOR
        assert result.reason.value == "MissingSeparator"
        assert result.width is None

    @pytest.mark.parametrize("descriptor", ["abcx675", "1200xabc", "infxinf", "nanx10", "1_000x10", "1e999x10", "Infinityx5", "5x-Infinity"])
    def test_non_numeric(self, descriptor):
        result = parse_viewport_size(descriptor)
        assert result.reason == ViewportErrorReason.NON_NUMERIC
        assert result.reason.value == "NonNumeric"

    def test_non_numeric_keeps_raw_values(self):
        result = parse_viewport_size("abcx675")
        assert math.isnan(result.width)
        assert result.height == 675

    @pytest.mark.parametrize("descriptor", ["0x675", "1200x0", "-1x5", "x", "1200x"])
    def test_non_positive(self, descriptor):
        result = parse_viewport_size(descriptor)
        assert result.reason == ViewportErrorReason.NON_POSITIVE
        assert result.reason.value == "NonPositive"

    def test_non_numeric_checked_before_sign(self):
        assert parse_viewport_size("-5xabc").reason == ViewportErrorReason.NON_NUMERIC

    def test_exponent_notation(self):
        assert parse_viewport_size("1e3x5e2").dimensions == ViewportDimensions(width=1000, height=500)

    def test_parse_does_not_log(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="slice_service.viewport"):
            parse_viewport_size("1200-675")
        assert caplog.text == ""


class TestPresets:
    def test_preset_names_resolve(self):
        for name, descriptor in VIEWPORT_PRESETS.items():
            assert resolve_viewport_size(name).dimensions == parse_viewport_size(descriptor).dimensions

    def test_twitter_card(self):
        assert resolve_viewport_size("twitter-card").dimensions == ViewportDimensions(width=1200, height=628)

    def test_descriptors_pass_through(self):
        assert resolve_viewport_size("800x600").dimensions == ViewportDimensions(width=800, height=600)
        assert resolve_viewport_size("auto").is_auto

    def test_unknown_name_is_invalid(self):
        assert resolve_viewport_size("huge").reason == ViewportErrorReason.MISSING_SEPARATOR
