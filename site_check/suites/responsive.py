"""Responsive layout checks across the configured viewports."""

import sys

from playwright.async_api import Browser, Page

from site_check import assertions
from site_check.browser import get_all_elements, navigate, open_page, wait_for_stable
from site_check.config import Viewport
from site_check.results import TestResults
from site_check.suites.base import BrowserSuite, run_standalone

MOBILE_MAX_WIDTH = 768
OVERFLOW_TOLERANCE_PX = 5
MIN_FONT_SIZE_PX = 12

OVERFLOW_SCRIPT = """(tolerance) => {
    const winWidth = window.innerWidth;
    const offenders = [];
    document.querySelectorAll('body *').forEach(el => {
        const rect = el.getBoundingClientRect();
        if (rect.right > winWidth + tolerance && offenders.length < 5) {
            offenders.push({ tag: el.tagName, id: el.id, overflow: rect.right - winWidth });
        }
    });
    const docWidth = document.documentElement.scrollWidth;
    return { docWidth, winWidth, overflow: docWidth - winWidth, offenders };
}"""

NAV_SCRIPT = """() => {
    const nav = document.querySelector('nav');
    if (!nav) return null;
    const links = document.querySelector('.nav-links');
    const toggle = document.querySelector('.hamburger, .menu-toggle, [class*="mobile-menu"]');
    const visible = el => !!el && getComputedStyle(el).display !== 'none';
    return {
        navVisible: visible(nav),
        linksVisible: visible(links),
        hasToggle: !!toggle,
        toggleVisible: visible(toggle),
    };
}"""

TAP_TARGET_SELECTOR = "a[href], button"

BODY_FONT_SCRIPT = """() => parseFloat(getComputedStyle(document.body).fontSize)"""


class ResponsiveSuite(BrowserSuite):
    """Layout behavior at every configured viewport."""

    title = "Responsive Design"

    async def run_checks(self, browser: Browser, results: TestResults) -> None:
        """Open one page per viewport, sequentially."""
        for viewport in self.config.viewports.values():
            async with open_page(
                browser, viewport, timeouts=self.config.timeouts
            ) as instrumented:
                with results.check(f"[{viewport.name}] Page load"):
                    await navigate(
                        instrumented.page,
                        self.config.targets.main_site,
                        timeouts=self.config.timeouts,
                    )
                    await wait_for_stable(instrumented.page)
                    await self._check_viewport(instrumented.page, viewport, results)

    async def _check_viewport(
        self, page: Page, viewport: Viewport, results: TestResults
    ) -> None:
        label = f"[{viewport.name}]"
        is_mobile = viewport.width < MOBILE_MAX_WIDTH

        with results.check(f"{label} Overflow check"):
            overflow = await page.evaluate(OVERFLOW_SCRIPT, OVERFLOW_TOLERANCE_PX)
            if overflow["overflow"] > OVERFLOW_TOLERANCE_PX:
                results.add_fail(
                    f"{label} Horizontal overflow",
                    f"{overflow['overflow']}px overflow detected",
                    overflow,
                )
            else:
                results.add_pass(f"{label} No horizontal overflow", overflow)

        with results.check(f"{label} Navigation behavior"):
            nav = await page.evaluate(NAV_SCRIPT)
            if nav is None:
                results.add_skip(f"{label} Navigation behavior", "No <nav> element")
            else:
                assertions.is_true(nav["navVisible"], "Navigation hidden")
                if is_mobile and nav["linksVisible"] and not nav["hasToggle"]:
                    results.add_warn(
                        f"{label} Navigation behavior",
                        "Full link list shown on a narrow viewport "
                        "without a menu toggle",
                        nav,
                    )
                else:
                    results.add_pass(f"{label} Navigation adapts to viewport", nav)

        if is_mobile:
            with results.check(f"{label} Tap target sizes"):
                min_size = self.config.accessibility.min_tap_target
                targets = await get_all_elements(page, TAP_TARGET_SELECTOR)
                small = [
                    {"text": t["text"][:30], **t["rect"]}
                    for t in targets
                    if t["visible"]
                    and t["rect"]["width"] > 0
                    and (
                        t["rect"]["width"] < min_size
                        or t["rect"]["height"] < min_size
                    )
                ]
                if small:
                    results.add_warn(
                        f"{label} Tap target sizes",
                        f"{len(small)} tap targets smaller than {min_size}px",
                        {"targets": small[:10]},
                    )
                else:
                    results.add_pass(f"{label} Tap targets large enough")

        with results.check(f"{label} Readable font size"):
            font_size = await page.evaluate(BODY_FONT_SCRIPT)
            assertions.is_false(
                font_size < MIN_FONT_SIZE_PX,
                f"Body font size {font_size}px below {MIN_FONT_SIZE_PX}px",
            )
            results.add_pass(f"{label} Readable font size", {"font_size": font_size})


if __name__ == "__main__":  # pragma: no cover
    sys.exit(run_standalone(ResponsiveSuite.execute, ResponsiveSuite.title))
