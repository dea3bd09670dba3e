"""Animation and transition checks."""

import re
import sys

from playwright.async_api import Browser

from site_check import assertions
from site_check.browser import create_page, delay, navigate, wait_for_stable
from site_check.results import TestResults
from site_check.suites.base import BrowserSuite, run_standalone

HOVER_SELECTOR = "a.btn, .button, button, .card, .portfolio-card, .service-card"

_DURATION_RE = re.compile(r"([\d.]+)(ms|s)")

TRANSITIONS_SCRIPT = """() => Array.from(document.querySelectorAll('body *'))
    .map(el => {
        const s = getComputedStyle(el);
        return {
            tag: el.tagName,
            className: typeof el.className === 'string' ? el.className.slice(0, 40) : '',
            property: s.transitionProperty,
            duration: s.transitionDuration,
        };
    })
    .filter(t => t.duration.split(',').some(d => parseFloat(d) > 0))"""

KEYFRAMES_SCRIPT = """() => Array.from(document.querySelectorAll('body *'))
    .map(el => {
        const s = getComputedStyle(el);
        return {
            tag: el.tagName,
            name: s.animationName,
            duration: s.animationDuration,
            iterations: s.animationIterationCount,
        };
    })
    .filter(a => a.name && a.name !== 'none')"""

REDUCED_MOTION_SCRIPT = """() => Array.from(document.styleSheets).some(sheet => {
    try {
        return Array.from(sheet.cssRules).some(rule =>
            rule.media && /prefers-reduced-motion/.test(rule.media.mediaText));
    } catch (e) {
        return false;
    }
})"""

STYLE_SNAPSHOT_SCRIPT = """([selector, props]) => {
    const el = document.querySelector(selector);
    if (!el) return null;
    const s = getComputedStyle(el);
    return Object.fromEntries(props.map(p => [p, s.getPropertyValue(p)]));
}"""


def parse_duration_ms(value: str) -> float:
    """Return the longest duration in a CSS time list, in milliseconds."""
    durations = [
        float(number) * (1 if unit == "ms" else 1000)
        for number, unit in _DURATION_RE.findall(value)
    ]
    return max(durations, default=0.0)


class AnimationSuite(BrowserSuite):
    """Transition timing, keyframes, reduced motion and hover feedback."""

    title = "Animations & Transitions"

    async def run_checks(self, browser: Browser, results: TestResults) -> None:
        """Measure animations once the page has settled."""
        timing = self.config.timing
        instrumented = await create_page(
            browser, self.config.default_viewport, timeouts=self.config.timeouts
        )
        page = instrumented.page
        await navigate(
            page, self.config.targets.main_site, timeouts=self.config.timeouts
        )
        await wait_for_stable(page, timeout_ms=timing.animation_max)

        transitions = []
        with results.check("CSS transitions defined"):
            transitions = await page.evaluate(TRANSITIONS_SCRIPT)
            if not transitions:
                results.add_warn(
                    "CSS transitions defined", "No elements declare transitions"
                )
            else:
                results.add_pass(
                    "CSS transitions defined", {"elements": len(transitions)}
                )

        with results.check("Transition duration appropriateness"):
            slow = [
                t
                for t in transitions
                if parse_duration_ms(t["duration"]) > timing.transition_max
            ]
            if slow:
                results.add_warn(
                    "Slow transitions",
                    f"{len(slow)} transition(s) longer than {timing.transition_max}ms",
                    {"transitions": slow[:10]},
                )
            else:
                results.add_pass("Transition durations within limit")

        with results.check("CSS keyframe animations"):
            animations = await page.evaluate(KEYFRAMES_SCRIPT)
            if not animations:
                results.add_skip("CSS keyframe animations", "No keyframe animations")
            else:
                long_running = [
                    a
                    for a in animations
                    if a["iterations"] != "infinite"
                    and parse_duration_ms(a["duration"]) > timing.animation_max
                ]
                assertions.is_false(
                    long_running,
                    f"{len(long_running)} animation(s) exceed {timing.animation_max}ms",
                )
                results.add_pass(
                    "Keyframe animations within limit", {"animations": len(animations)}
                )

        with results.check("Reduced motion support"):
            if await page.evaluate(REDUCED_MOTION_SCRIPT):
                results.add_pass("prefers-reduced-motion respected")
            else:
                results.add_warn(
                    "Reduced motion support",
                    "No prefers-reduced-motion media query found",
                )

        with results.check("Hover state transitions"):
            target = await page.query_selector(HOVER_SELECTOR)
            if target is None:
                results.add_skip("Hover state transitions", "No hoverable elements")
            else:
                props = list(self.config.transition_properties)
                selector = await target.evaluate(
                    """el => {
                        el.setAttribute('data-site-check-hover', '');
                        return '[data-site-check-hover]';
                    }"""
                )
                before = await page.evaluate(STYLE_SNAPSHOT_SCRIPT, [selector, props])
                await target.hover()
                await delay(timing.hover_delay)
                after = await page.evaluate(STYLE_SNAPSHOT_SCRIPT, [selector, props])
                changed = [p for p in props if before[p] != after[p]]
                if changed:
                    results.add_pass("Hover state changes", {"changed": changed})
                else:
                    results.add_warn(
                        "Hover state transitions",
                        "Hovering the first interactive element changes no style",
                    )


if __name__ == "__main__":  # pragma: no cover
    sys.exit(run_standalone(AnimationSuite.execute, AnimationSuite.title))
