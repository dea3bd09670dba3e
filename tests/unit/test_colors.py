"""Tests for color parsing and contrast."""

import pytest

from site_check.colors import RGB, contrast_ratio, parse_color, relative_luminance


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("rgb(255, 255, 255)", RGB(255, 255, 255)),
        ("rgba(10, 20, 30, 0.5)", RGB(10, 20, 30)),
        ("#000000", RGB(0, 0, 0)),
        ("#FfF", RGB(255, 255, 255)),
        ("rgba(0, 0, 0, 0)", None),
        ("transparent", None),
        ("", None),
        (None, None),
        ("hsl(0, 0%, 0%)", None),
    ],
)
def test_parse_color(value: str | None, expected: RGB | None) -> None:
    """Parses rgb, rgba and hex; transparent and unknown values give None."""
    assert parse_color(value) == expected


def test_relative_luminance_bounds() -> None:
    """Black has luminance 0 and white 1."""
    assert relative_luminance(RGB(0, 0, 0)) == 0
    assert relative_luminance(RGB(255, 255, 255)) == pytest.approx(1.0)


def test_black_on_white_is_maximum_contrast() -> None:
    """Black on white is 21:1 regardless of argument order."""
    assert contrast_ratio(RGB(0, 0, 0), RGB(255, 255, 255)) == pytest.approx(21.0)
    assert contrast_ratio(RGB(255, 255, 255), RGB(0, 0, 0)) == pytest.approx(21.0)


def test_same_color_is_minimum_contrast() -> None:
    """A color against itself has ratio 1."""
    assert contrast_ratio(RGB(120, 50, 200), RGB(120, 50, 200)) == pytest.approx(1.0)


def test_grey_on_white_below_aa() -> None:
    """#999 on white does not meet the 4.5:1 minimum."""
    ratio = contrast_ratio(parse_color("#999"), parse_color("rgb(255, 255, 255)"))

    assert 2.8 < ratio < 2.9
