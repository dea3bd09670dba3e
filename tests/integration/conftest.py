"""Fixtures for integration tests running a real headless browser."""

import asyncio
from pathlib import Path

import pytest
from playwright.async_api import Error as PlaywrightError

from site_check.browser import launch_browser
from site_check.config import BrowserOptions, SiteCheckConfig, load_config

FIXTURE_SITE = Path(__file__).parent / "fixtures" / "site"


async def _can_launch() -> bool:
    try:
        async with launch_browser(BrowserOptions()) as browser:
            return browser.is_connected()
    except PlaywrightError:
        return False


@pytest.fixture(scope="session")
def chromium() -> None:
    """Skip when Chromium has not been installed for Playwright."""
    if not asyncio.run(_can_launch()):
        pytest.skip("Chromium is not installed; run `playwright install chromium`")


@pytest.fixture
def site_config(chromium: None) -> SiteCheckConfig:
    """Configuration targeting the fixture site, with no network probes."""
    return load_config(
        site_root=FIXTURE_SITE, overrides={"check_external_links": False}
    )
