"""Tests for colour contrast maths."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from sketchui.schema.contrast import (
    MIN_CONTRAST,
    contrast_ratio,
    hex_to_rgb,
    luminance,
    readable_text_color,
)


@pytest.mark.unit
def test_hex_parsing():
    assert hex_to_rgb("#ffffff") == (255, 255, 255)
    assert hex_to_rgb("#FFF") == (255, 255, 255)
    assert hex_to_rgb("1f2937") == (31, 41, 55)
    assert hex_to_rgb("red") is None
    assert hex_to_rgb("rgb(0, 0, 0)") is None


@pytest.mark.unit
def test_luminance_bounds_and_unknown():
    assert luminance("#000000") == 0
    assert luminance("#ffffff") == pytest.approx(1.0)
    assert luminance("tomato") == 0.5


@pytest.mark.unit
def test_contrast_ratio_extremes():
    assert contrast_ratio("#000000", "#ffffff") == pytest.approx(21.0)
    assert contrast_ratio("#ffffff", "#000000") == pytest.approx(21.0)
    assert contrast_ratio("#777777", "#777777") == pytest.approx(1.0)


@pytest.mark.unit
def test_readable_text_color_light_and_dark():
    assert readable_text_color("#ffffff") == "#1f2937"
    assert readable_text_color("#0f172a") == "#ffffff"


@pytest.mark.unit
def test_readable_text_color_mid_luminance_falls_back():
    # Luminance just below 0.5: white fails, black passes
    color = readable_text_color("#b4b4b4")
    assert contrast_ratio(color, "#b4b4b4") >= MIN_CONTRAST


hex_colors = st.tuples(*(st.integers(0, 255) for _ in range(3))).map(
    lambda rgb: "#{:02x}{:02x}{:02x}".format(*rgb)
)


@pytest.mark.unit
@given(background=hex_colors | st.text(max_size=8))
def test_readable_text_color_always_meets_minimum(background):
    assert contrast_ratio(readable_text_color(background), background) >= MIN_CONTRAST
