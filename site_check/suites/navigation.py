"""Navigation, anchor and link checks."""

import sys

from playwright.async_api import Browser

from site_check import assertions
from site_check.browser import (
    create_page,
    delay,
    get_bounding_box,
    get_computed_styles,
    navigate,
)
from site_check.links import probe_domains
from site_check.results import TestResults
from site_check.suites.base import BrowserSuite, run_standalone

SCROLL_TO_SCRIPT = "(y) => window.scrollTo(0, y)"
SCROLL_DEPTH_PX = 1000

ANCHORS_SCRIPT = """() => Array.from(document.querySelectorAll('a[href^="#"]'))
    .map(a => a.getAttribute('href'))
    .filter(href => href.length > 1)
    .map(href => ({ href, exists: !!document.getElementById(href.slice(1)) }))"""

SCROLL_BEHAVIOR_SCRIPT = """() => getComputedStyle(document.documentElement).scrollBehavior"""

EXTERNAL_LINKS_SCRIPT = """() => Array.from(document.querySelectorAll('a[href^="http"]'))
    .filter(a => a.hostname !== location.hostname)
    .map(a => ({
        href: a.href,
        text: a.textContent.trim().slice(0, 50),
        target: a.getAttribute('target'),
        rel: a.getAttribute('rel') || '',
    }))"""

SKIP_LINK_SCRIPT = """() => {
    const link = document.querySelector(
        'a[href="#main"], a[href="#content"], a.skip-link, a[class*="skip"]'
    );
    return link ? { href: link.getAttribute('href'), text: link.textContent.trim() } : null;
}"""

BACK_TO_TOP_SCRIPT = """() => {
    const el = document.querySelector(
        '.back-to-top, #back-to-top, [class*="scroll-top"], a[href="#top"], a[href="#"]'
    );
    return el ? { tag: el.tagName, href: el.getAttribute('href') } : null;
}"""


class NavigationSuite(BrowserSuite):
    """Fixed navigation, anchors, external links and skip links."""

    title = "Navigation & Links"

    async def run_checks(self, browser: Browser, results: TestResults) -> None:
        """Exercise navigation on the main page."""
        instrumented = await create_page(
            browser, self.config.default_viewport, timeouts=self.config.timeouts
        )
        page = instrumented.page
        await navigate(
            page, self.config.targets.main_site, timeouts=self.config.timeouts
        )

        with results.check("Fixed navigation scroll test"):
            await page.evaluate(SCROLL_TO_SCRIPT, SCROLL_DEPTH_PX)
            try:
                await delay(self.config.timing.scroll_delay)
                styles = await get_computed_styles(page, "nav")
                box = await get_bounding_box(page, "nav")
            finally:
                await page.evaluate(SCROLL_TO_SCRIPT, 0)
            assertions.is_true(styles and box, "No <nav> element found")
            assertions.contains(
                ("fixed", "sticky"),
                styles["position"],
                f"Navigation is position:{styles['position']}, "
                "expected fixed or sticky",
            )
            assertions.less_than(box["y"], 1, "Navigation scrolled out of view")
            results.add_pass(
                "Fixed navigation stays visible on scroll",
                {"position": styles["position"], "top": box["y"]},
            )

        anchors = []
        with results.check("Internal anchor link validation"):
            anchors = await page.evaluate(ANCHORS_SCRIPT)
            broken = [a["href"] for a in anchors if not a["exists"]]
            assertions.is_false(broken, f"Anchors without targets: {', '.join(broken)}")
            results.add_pass(
                "All internal anchor links have valid targets",
                {"anchors": len(anchors)},
            )

        with results.check("Smooth scroll behavior"):
            if not any(a["exists"] for a in anchors):
                results.add_skip("Smooth scroll test", "No valid anchor links found")
            elif await page.evaluate(SCROLL_BEHAVIOR_SCRIPT) == "smooth":
                results.add_pass("Smooth scroll behavior enabled")
            else:
                results.add_warn(
                    "Smooth scroll behavior",
                    "Scroll works but smooth behavior not enabled",
                )

        with results.check("External link validation"):
            links = await page.evaluate(EXTERNAL_LINKS_SCRIPT)
            no_blank = [link["href"] for link in links if link["target"] != "_blank"]
            no_noopener = [
                link["href"]
                for link in links
                if link["target"] == "_blank" and "noopener" not in link["rel"]
            ]
            if no_blank:
                results.add_warn(
                    'External links without target="_blank"',
                    f"{len(no_blank)} external links open in the same tab",
                    {"links": no_blank},
                )
            if no_noopener:
                results.add_warn(
                    'External links without rel="noopener"',
                    f"{len(no_noopener)} links open a new tab without noopener",
                    {"links": no_noopener},
                )
            if not no_blank and not no_noopener:
                results.add_pass(
                    "All external links configured correctly", {"links": len(links)}
                )

        with results.check("External domain reachability"):
            if not self.config.check_external_links:
                results.add_skip(
                    "External domain reachability", "External link checks disabled"
                )
            elif not self.config.external_domains:
                results.add_skip(
                    "External domain reachability", "No external domains configured"
                )
            else:
                probes = await probe_domains(
                    self.config.external_domains,
                    timeout_s=self.config.timeouts.navigation / 1000,
                )
                unreachable = {
                    p.domain: p.error or p.status for p in probes if not p.reachable
                }
                if unreachable:
                    results.add_warn(
                        "External domain reachability",
                        f"{len(unreachable)} external domain(s) unreachable",
                        unreachable,
                    )
                else:
                    results.add_pass(
                        "External domains reachable", {"domains": len(probes)}
                    )

        with results.check("Skip link check"):
            skip_link = await page.evaluate(SKIP_LINK_SCRIPT)
            if skip_link:
                results.add_pass("Skip link present", skip_link)
            else:
                results.add_warn(
                    "Skip link not found",
                    "Consider adding a skip-to-content link for keyboard users",
                )

        with results.check("Back to top check"):
            back_to_top = await page.evaluate(BACK_TO_TOP_SCRIPT)
            if back_to_top:
                results.add_pass("Back to top functionality present", back_to_top)
            else:
                results.add_skip(
                    "Back to top check",
                    "No back-to-top button found (optional feature)",
                )


if __name__ == "__main__":  # pragma: no cover
    sys.exit(run_standalone(NavigationSuite.execute, NavigationSuite.title))
