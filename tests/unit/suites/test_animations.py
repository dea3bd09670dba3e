"""Tests for the animation suite."""

import pytest

from site_check.config import SiteCheckConfig
from site_check.suites import animations
from site_check.suites.animations import AnimationSuite, parse_duration_ms
from site_check.testing.fakes import FakeLauncher, scripted_page


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("0.3s", 300),
        ("250ms", 250),
        ("0s, 1.5s", 1500),
        ("0.2s, 400ms", 400),
        ("", 0),
        ("none", 0),
    ],
)
def test_parse_duration_ms(value: str, expected: float) -> None:
    """The longest duration in a CSS time list is returned in milliseconds."""
    assert parse_duration_ms(value) == expected


async def test_slow_transitions_warn(config: SiteCheckConfig) -> None:
    """Transitions longer than the limit are a warning."""
    page = scripted_page(
        {
            animations.TRANSITIONS_SCRIPT: [
                {"tag": "A", "className": "btn", "property": "all", "duration": "0.2s"},
                {
                    "tag": "DIV",
                    "className": "card",
                    "property": "all",
                    "duration": "2s",
                },
            ],
            animations.KEYFRAMES_SCRIPT: [],
            animations.REDUCED_MOTION_SCRIPT: True,
        }
    )
    page.query_selector.return_value = None

    summary = await AnimationSuite.execute(config, FakeLauncher(page=page))

    statuses = {o.name: o.status for o in summary.outcomes}
    assert statuses["CSS transitions defined"] == "PASS"
    assert statuses["Slow transitions"] == "WARN"
    assert statuses["CSS keyframe animations"] == "SKIP"
    assert statuses["prefers-reduced-motion respected"] == "PASS"
    assert statuses["Hover state transitions"] == "SKIP"
    assert summary.counts.failed == 0


async def test_long_finite_animation_fails(config: SiteCheckConfig) -> None:
    """A finite keyframe animation longer than the limit fails."""
    page = scripted_page(
        {
            animations.TRANSITIONS_SCRIPT: [],
            animations.KEYFRAMES_SCRIPT: [
                {"tag": "DIV", "name": "spin", "duration": "5s", "iterations": "1"},
                {
                    "tag": "DIV",
                    "name": "pulse",
                    "duration": "9s",
                    "iterations": "infinite",
                },
            ],
        }
    )
    page.query_selector.return_value = None

    summary = await AnimationSuite.execute(config, FakeLauncher(page=page))

    statuses = {o.name: o.status for o in summary.outcomes}
    assert statuses["CSS transitions defined"] == "WARN"
    assert statuses["CSS keyframe animations"] == "FAIL"
    assert statuses["Reduced motion support"] == "WARN"
