#!/usr/bin/env python3
"""
Unit Tests for the Options Serializer
Tests option-to-path encoding and options copying
"""

import pytest
import sys
import os

# Add the project root to the Python path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from thumbor_url.schemas.options import (
    EncryptionMode,
    Filter,
    FitIn,
    HorizontalAlign,
    Rect,
    Size,
    TransformOptions,
    VerticalAlign,
)
from thumbor_url.services.serializer import url_options, url_options_path


class TestURLOptions:
    """Test cases for path segment generation."""

    def test_default_options_are_empty(self):
        """Default options produce no segments and an empty path."""
        options = TransformOptions()
        assert url_options(options) == []
        assert url_options_path(options) == ""

    def test_target_size(self):
        options = TransformOptions(target_size=Size(width=300, height=200))
        assert url_options_path(options) == "300x200"

    def test_single_dimension(self):
        options = TransformOptions(target_size=Size(width=300))
        assert url_options_path(options) == "300x0"

    def test_scale_multiplies_size(self):
        options = TransformOptions(target_size=Size(width=100, height=50), scale=2.0)
        assert url_options_path(options) == "200x100"

    def test_scaled_size_truncates(self):
        options = TransformOptions(target_size=Size(width=101, height=33), scale=1.5)
        assert url_options_path(options) == "151x49"

    def test_flips_negate_size(self):
        """Horizontal flip negates width, vertical flip negates height."""
        options = TransformOptions(target_size=Size(width=300, height=200), hflip=True)
        assert url_options_path(options) == "-300x200"

        options = TransformOptions(target_size=Size(width=300, height=200), vflip=True)
        assert url_options_path(options) == "300x-200"

        options = TransformOptions(target_size=Size(width=300, height=200), hflip=True, vflip=True)
        assert url_options_path(options) == "-300x-200"

    def test_flip_without_size_is_omitted(self):
        options = TransformOptions(hflip=True, vflip=True)
        assert url_options(options) == []

    def test_crop(self):
        """Crop is rendered as top-left and bottom-right corners."""
        options = TransformOptions(crop=Rect(x=10, y=20, width=100, height=50))
        assert url_options_path(options) == "10x20:110x70"

    def test_crop_truncates_fractions(self):
        options = TransformOptions(crop=Rect(x=10.7, y=20.2, width=100.9, height=50.5))
        assert url_options_path(options) == "10x20:111x70"

    def test_fit_in_modes(self):
        assert url_options(TransformOptions(fit_in=FitIn.NORMAL)) == ["fit-in"]
        assert url_options(TransformOptions(fit_in=FitIn.ADAPTIVE)) == ["adaptive-fit-in"]
        assert url_options(TransformOptions(fit_in=FitIn.NONE)) == []

    def test_alignment(self):
        assert url_options(TransformOptions(halign=HorizontalAlign.LEFT)) == ["left"]
        assert url_options(TransformOptions(halign=HorizontalAlign.RIGHT)) == ["right"]
        assert url_options(TransformOptions(halign=HorizontalAlign.CENTER)) == []
        assert url_options(TransformOptions(valign=VerticalAlign.TOP)) == ["top"]
        assert url_options(TransformOptions(valign=VerticalAlign.BOTTOM)) == ["bottom"]
        assert url_options(TransformOptions(valign=VerticalAlign.MIDDLE)) == []

    def test_filters(self):
        options = TransformOptions(filters=[
            Filter.create("quality", 80),
            Filter.create("brightness", "10"),
        ])
        assert url_options_path(options) == "filters:quality(80):brightness(10)"

    def test_filter_with_several_arguments(self):
        options = TransformOptions(filters=[Filter.create("watermark", "logo.png", 10, 20, 50)])
        assert url_options_path(options) == "filters:watermark(logo.png,10,20,50)"

    def test_filter_without_arguments(self):
        options = TransformOptions(filters=[Filter.create("grayscale")])
        assert url_options_path(options) == "filters:grayscale()"

    def test_full_segment_order(self):
        """Every option set at once follows the fixed segment order."""
        options = TransformOptions(
            debug=True,
            meta=True,
            crop=Rect(x=1, y=2, width=3, height=4),
            fit_in=FitIn.ADAPTIVE,
            target_size=Size(width=300, height=200),
            hflip=True,
            halign=HorizontalAlign.RIGHT,
            valign=VerticalAlign.BOTTOM,
            smart=True,
            filters=[Filter.create("quality", 80)],
        )
        assert url_options(options) == [
            "debug",
            "meta",
            "1x2:4x6",
            "adaptive-fit-in",
            "-300x200",
            "right",
            "bottom",
            "smart",
            "filters:quality(80)",
        ]
        assert url_options_path(options) == (
            "debug/meta/1x2:4x6/adaptive-fit-in/-300x200/right/bottom/smart/filters:quality(80)"
        )

    def test_encryption_not_serialized(self):
        options = TransformOptions(encryption=EncryptionMode.AES128)
        assert url_options_path(options) == ""


class TestOptionsCopy:
    """Test cases for cloning options."""

    def setup_method(self):
        """Set up test fixtures."""
        self.options = TransformOptions(
            target_size=Size(width=640, height=480),
            crop=Rect(x=5, y=5, width=10, height=10),
            smart=True,
            debug=True,
            meta=True,
            hflip=True,
            vflip=True,
            fit_in=FitIn.NORMAL,
            halign=HorizontalAlign.LEFT,
            valign=VerticalAlign.TOP,
            scale=2.0,
            filters=[Filter.create("quality", 90)],
            encryption=EncryptionMode.AES128,
        )

    def test_copy_preserves_path(self):
        copied = self.options.copy()
        assert url_options_path(copied) == url_options_path(self.options)
        assert copied == self.options
        assert copied.encryption == EncryptionMode.AES128

    def test_copy_is_independent(self):
        copied = self.options.copy()
        copied.filters.append(Filter.create("blur", 2))
        copied.smart = False

        assert len(self.options.filters) == 1
        assert self.options.smart is True

    def test_with_size(self):
        """with_size only changes the target size."""
        resized = self.options.with_size(100, 50)

        assert resized.target_size == Size(width=100, height=50)
        assert self.options.target_size == Size(width=640, height=480)
        assert url_options(resized)[4] == "-200x-100"
        assert url_options(resized)[:4] == url_options(self.options)[:4]

    def test_assignment_is_validated(self):
        options = TransformOptions()
        with pytest.raises(ValueError):
            options.fit_in = "stretch"


class TestFilter:
    """Test cases for filters."""

    def test_equality(self):
        assert Filter.create("quality", 80) == Filter(name="quality", arguments=["80"])
        assert Filter.create("quality", 80) != Filter.create("quality", 81)
        assert Filter.create("quality", 80) != Filter.create("format", 80)
        assert Filter.create("fill", "red", 1) != Filter.create("fill", 1, "red")

    def test_arguments_are_strings(self):
        assert Filter.create("round_corner", 20, 0.5).arguments == ("20", "0.5")

    def test_single_string_argument(self):
        """A bare string is one argument, not a list of characters."""
        f = Filter(name="quality", arguments="80")
        assert f.arguments == ("80",)
        assert f.render() == "quality(80)"
        assert Filter(name="quality", arguments=b"80") == Filter.create("quality", 80)

    def test_filters_are_immutable(self):
        f = Filter.create("quality", 80)
        with pytest.raises(ValueError):
            f.name = "format"

    def test_render(self):
        assert Filter.create("fill", "ff0000").render() == "fill(ff0000)"
