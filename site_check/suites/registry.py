"""Ordered registry of the suites the orchestrator knows about."""

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass

from site_check.suites.accessibility import AccessibilitySuite
from site_check.suites.animations import AnimationSuite
from site_check.suites.base import SuiteRunner
from site_check.suites.compatibility import CompatibilitySuite
from site_check.suites.forms import FormSuite
from site_check.suites.navigation import NavigationSuite
from site_check.suites.responsive import ResponsiveSuite
from site_check.suites.structure import StructureSuite


class SuiteNotFoundError(Exception):
    """Raised when a suite is not found."""


@dataclass(frozen=True, kw_only=True)
class SuiteManifest:
    """Display name and runner of one registered suite."""

    name: str
    runner: SuiteRunner

    @property
    def key(self) -> str:
        """Case-insensitive lookup key."""
        return self.name.lower()


class SuiteRegistry:
    """Explicit, ordered name -> suite mapping built once at startup."""

    def __init__(self, manifests: Iterable[SuiteManifest]) -> None:
        self._manifests: dict[str, SuiteManifest] = {}
        for manifest in manifests:
            if manifest.key in self._manifests:
                raise ValueError(f"Duplicate suite name: {manifest.name}")
            self._manifests[manifest.key] = manifest

    def __iter__(self) -> Iterator[SuiteManifest]:
        return iter(self._manifests.values())

    def __len__(self) -> int:
        return len(self._manifests)

    @property
    def names(self) -> Sequence[str]:
        """Display names in declared order."""
        return [m.name for m in self._manifests.values()]

    def get(self, name: str) -> SuiteManifest:
        """Look up one suite by display name, ignoring case.

        Raises:
            SuiteNotFoundError: If no suite has that name

        """
        try:
            return self._manifests[name.strip().lower()]
        except KeyError:
            raise SuiteNotFoundError(
                f"Suite '{name}' not found. Available suites: {list(self.names)}"
            ) from None

    def select(self, names: Iterable[str] | None = None) -> Sequence[SuiteManifest]:
        """Return the requested suites in declared order.

        ``None`` selects every suite. Unrecognized names are dropped.
        """
        if names is None:
            return list(self._manifests.values())
        wanted = {name.strip().lower() for name in names}
        return [m for key, m in self._manifests.items() if key in wanted]


def default_registry() -> SuiteRegistry:
    """Registry of the built-in suites, in run order."""
    return SuiteRegistry(
        [
            SuiteManifest(name="Structure", runner=StructureSuite.execute),
            SuiteManifest(name="Navigation", runner=NavigationSuite.execute),
            SuiteManifest(name="Forms", runner=FormSuite.execute),
            SuiteManifest(name="Responsive", runner=ResponsiveSuite.execute),
            SuiteManifest(name="Accessibility", runner=AccessibilitySuite.execute),
            SuiteManifest(name="Animations", runner=AnimationSuite.execute),
            SuiteManifest(name="Compatibility", runner=CompatibilitySuite.execute),
        ]
    )
