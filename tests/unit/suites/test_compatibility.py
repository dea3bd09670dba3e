"""Tests for the compatibility suite."""

from typing import Any

from site_check.config import SiteCheckConfig
from site_check.suites import compatibility
from site_check.suites.compatibility import CompatibilitySuite
from site_check.testing.fakes import FakeLauncher, scripted_page

SUPPORTED = {
    "customProperties": True,
    "flexbox": True,
    "grid": True,
    "clamp": True,
    "backdropFilter": False,
}


def responses(**overrides: Any) -> dict[str, Any]:
    """Answers for a modern page with clean stylesheets."""
    answers = {
        compatibility.FEATURES_SCRIPT: SUPPORTED,
        compatibility.FONTS_SCRIPT: {
            "status": "loaded",
            "count": 2,
            "bodyFont": "Inter, sans-serif",
        },
        compatibility.EXTERNAL_RESOURCES_SCRIPT: {
            "stylesheets": ["https://fonts.example.com/inter.css"],
            "scripts": [],
            "images": [],
        },
        compatibility.MEDIA_RULES_SCRIPT: {"print": True, "prefixes": []},
        compatibility.BOX_SIZING_SCRIPT: 0,
        compatibility.Z_INDEX_SCRIPT: [{"element": "NAV.navbar", "zIndex": 1000}],
    }
    answers.update(overrides)
    return answers


async def test_clean_page_passes(config: SiteCheckConfig) -> None:
    """A page with no compatibility concerns only records passes."""
    page = scripted_page(responses())

    summary = await CompatibilitySuite.execute(config, FakeLauncher(page=page))

    assert [o.name for o in summary.outcomes] == [
        "Required CSS features supported",
        "Font loading complete",
        "External resources use HTTPS",
        "Print styles present",
        "No vendor prefixes required",
        "All elements use border-box sizing",
        "Z-index layering reasonable",
    ]
    assert summary.counts.passed == summary.counts.total


async def test_concerns_are_reported(config: SiteCheckConfig) -> None:
    """Insecure resources fail and stylesheet hygiene issues warn."""
    page = scripted_page(
        responses(
            **{
                compatibility.FONTS_SCRIPT: {
                    "status": "loaded",
                    "count": 1,
                    "bodyFont": "Inter",
                },
                compatibility.EXTERNAL_RESOURCES_SCRIPT: {
                    "stylesheets": [],
                    "scripts": ["http://cdn.example.com/app.js"],
                    "images": [],
                },
                compatibility.MEDIA_RULES_SCRIPT: {
                    "print": False,
                    "prefixes": ["-webkit-", "-moz-"],
                },
                compatibility.BOX_SIZING_SCRIPT: 3,
                compatibility.Z_INDEX_SCRIPT: [
                    {"element": "DIV.modal", "zIndex": 99999},
                    {"element": "NAV.navbar", "zIndex": 1000},
                ],
            }
        )
    )

    summary = await CompatibilitySuite.execute(config, FakeLauncher(page=page))

    by_name = {o.name: o for o in summary.outcomes}
    assert by_name["Font fallback stack"].status == "WARN"
    assert by_name["Mixed content"].status == "FAIL"
    assert by_name["Mixed content"].error == "1 resource(s) loaded over plain HTTP"
    assert by_name["No print styles detected"].status == "WARN"
    assert by_name["Vendor prefixes in stylesheets"].warning == (
        "Prefixes in use: -moz-, -webkit-"
    )
    assert by_name["Box sizing consistency"].status == "WARN"
    assert by_name["Very high z-index values detected"].details == {
        "elements": [{"element": "DIV.modal", "zIndex": 99999}]
    }


async def test_unsupported_feature_fails(config: SiteCheckConfig) -> None:
    """A missing required CSS feature is a failure."""
    page = scripted_page(
        responses(**{compatibility.FEATURES_SCRIPT: {**SUPPORTED, "grid": False}})
    )

    summary = await CompatibilitySuite.execute(config, FakeLauncher(page=page))

    first = summary.outcomes[0]
    assert (first.name, first.status) == ("CSS feature support", "FAIL")
    assert first.error == "grid not supported"


async def test_unreadable_stylesheets_fail_prefix_check(
    config: SiteCheckConfig,
) -> None:
    """When stylesheet rules can not be read both dependent checks fail."""
    page = scripted_page(
        responses(**{compatibility.MEDIA_RULES_SCRIPT: RuntimeError("detached")})
    )

    summary = await CompatibilitySuite.execute(config, FakeLauncher(page=page))

    statuses = {o.name: o.status for o in summary.outcomes}
    assert statuses["Print styles check"] == "FAIL"
    assert statuses["Vendor prefix usage"] == "FAIL"
    assert statuses["All elements use border-box sizing"] == "PASS"
