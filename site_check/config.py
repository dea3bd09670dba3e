"""Configuration for site checks.

Defaults describe the site under test, the viewport set and the thresholds
used by the suites. A YAML file may override any of them; see
:func:`load_config`.
"""

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field

from site_check.models.base import Model

DEFAULT_BROWSER_ARGS = (
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-web-security",
    "--allow-file-access-from-files",
)


class Viewport(Model):
    """A named width x height pair."""

    width: int = Field(..., gt=0)
    height: int = Field(..., gt=0)
    name: str

    def as_size(self) -> dict[str, int]:
        """Return the size mapping expected by the browser."""
        return {"width": self.width, "height": self.height}


DEFAULT_VIEWPORTS: Mapping[str, Viewport] = {
    "mobile": Viewport(width=375, height=667, name="Mobile (iPhone SE)"),
    "mobile_landscape": Viewport(width=667, height=375, name="Mobile Landscape"),
    "tablet": Viewport(width=768, height=1024, name="Tablet (iPad)"),
    "tablet_landscape": Viewport(width=1024, height=768, name="Tablet Landscape"),
    "laptop": Viewport(width=1366, height=768, name="Laptop"),
    "desktop": Viewport(width=1920, height=1080, name="Desktop (1080p)"),
    "ultrawide": Viewport(width=2560, height=1440, name="Ultrawide (1440p)"),
}


class Targets(Model):
    """Pages to load."""

    main_site: str
    contact_form: str

    @classmethod
    def for_site_root(cls, root: Path) -> "Targets":
        """Build file:// targets for a site checked out at ``root``."""
        root = root.resolve()
        return cls(
            main_site=(root / "index.html").as_uri(),
            contact_form=(root / "assets" / "contact-form.html").as_uri(),
        )


class Timing(Model):
    """Timing thresholds and settle delays, in milliseconds."""

    transition_max: int = 500
    animation_max: int = 1000
    load_max: int = 3000
    interaction_delay: int = 100
    scroll_delay: int = 50
    hover_delay: int = 200


class Timeouts(Model):
    """Operation timeouts, in milliseconds."""

    test: int = 30000
    navigation: int = 10000
    element: int = 5000


class AccessibilityThresholds(Model):
    """WCAG AA derived limits."""

    contrast_ratio_min: float = 4.5
    contrast_ratio_large: float = 3.0
    min_tap_target: int = 44
    required_landmarks: Sequence[str] = ("main", "navigation")
    max_heading_skip: int = 1


class FormValidation(Model):
    """Expectations for the contact form."""

    required_fields: Sequence[str] = ("name", "email", "description")
    email_pattern: str = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"
    min_description_length: int = 10
    max_description_length: int = 500


class BrowserOptions(Model):
    """Options passed to the headless browser launch."""

    headless: bool = True
    args: Sequence[str] = DEFAULT_BROWSER_ARGS
    executable_path: str | None = None


class ReportOptions(Model):
    """Console report presentation."""

    warning_limit: int = Field(default=10, ge=0)


class SiteCheckConfig(Model):
    """Complete configuration consumed by the suites and the report."""

    targets: Targets
    viewports: Mapping[str, Viewport] = Field(
        default_factory=lambda: dict(DEFAULT_VIEWPORTS)
    )
    timing: Timing = Field(default_factory=Timing)
    timeouts: Timeouts = Field(default_factory=Timeouts)
    accessibility: AccessibilityThresholds = Field(
        default_factory=AccessibilityThresholds
    )
    form_validation: FormValidation = Field(default_factory=FormValidation)
    browser: BrowserOptions = Field(default_factory=BrowserOptions)
    report: ReportOptions = Field(default_factory=ReportOptions)
    external_domains: Sequence[str] = (
        "globaldeets.com",
        "culturesherpa.org",
        "aiaimate.com",
        "goodflippinvibes.com",
        "formspree.io",
    )
    transition_properties: Sequence[str] = (
        "opacity",
        "transform",
        "background-color",
        "border-color",
        "box-shadow",
        "color",
    )
    check_external_links: bool = True

    @property
    def default_viewport(self) -> Viewport:
        """Viewport used when a suite does not ask for a specific one."""
        if "desktop" in self.viewports:
            return self.viewports["desktop"]
        return next(iter(self.viewports.values()))


def load_config(
    path: Path | None = None,
    *,
    site_root: Path | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> SiteCheckConfig:
    """Load configuration, layering YAML file values and overrides on defaults.

    Args:
        path: Optional YAML file; its top-level keys mirror SiteCheckConfig
        site_root: Directory of the site under test, used for default targets
        overrides: Values applied after the file (e.g. from CLI flags)

    Returns:
        Validated configuration

    Raises:
        FileNotFoundError: If ``path`` does not exist
        yaml.YAMLError: If the file is not valid YAML
        pydantic.ValidationError: If values do not match the schema

    """
    data: dict[str, Any] = {}
    if path is not None:
        with path.open(encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
        if not isinstance(loaded, dict):
            raise ValueError(f"Config file {path} must contain a mapping")
        data.update(loaded)

    targets = Targets.for_site_root(site_root or Path.cwd()).model_dump()
    targets.update(data.get("targets") or {})
    data["targets"] = targets

    for key, value in (overrides or {}).items():
        if isinstance(value, Mapping) and isinstance(data.get(key), Mapping):
            data[key] = {**data[key], **value}
        else:
            data[key] = value

    return SiteCheckConfig.model_validate(data)
