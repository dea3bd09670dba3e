"""Fixtures for unit tests."""

from collections.abc import Iterator

import pytest
from aioresponses import aioresponses

from site_check.config import SiteCheckConfig, Targets


@pytest.fixture
def mock_aioresponse() -> Iterator[aioresponses]:
    """Intercept aiohttp requests."""
    with aioresponses() as m:
        yield m


@pytest.fixture
def config() -> SiteCheckConfig:
    """Configuration pointing at a placeholder site."""
    return SiteCheckConfig(
        targets=Targets(
            main_site="file:///site/index.html",
            contact_form="file:///site/assets/contact-form.html",
        )
    )
