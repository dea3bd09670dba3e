"""Accessibility checks against WCAG 2.1 AA thresholds."""

import sys

from playwright.async_api import Browser

from site_check import assertions
from site_check.browser import create_page, get_focusable_elements, navigate
from site_check.colors import contrast_ratio, parse_color
from site_check.results import TestResults
from site_check.suites.base import BrowserSuite, run_standalone

LARGE_TEXT_PX = 24
LARGE_BOLD_TEXT_PX = 18.66

LANDMARKS_SCRIPT = """() => ({
    main: !!document.querySelector('main, [role="main"]'),
    navigation: !!document.querySelector('nav, [role="navigation"]'),
    banner: !!document.querySelector('header, [role="banner"]'),
    contentinfo: !!document.querySelector('footer, [role="contentinfo"]'),
})"""

HEADING_LEVELS_SCRIPT = """() => Array.from(document.querySelectorAll('h1,h2,h3,h4,h5,h6'))
    .map(h => Number(h.tagName[1]))"""

TEXT_COLORS_SCRIPT = """() => {
    const background = el => {
        for (let node = el; node; node = node.parentElement) {
            const bg = getComputedStyle(node).backgroundColor;
            if (bg && bg !== 'transparent' && !/rgba\\(.*,\\s*0\\)$/.test(bg)) return bg;
        }
        return 'rgb(255, 255, 255)';
    };
    return Array.from(document.querySelectorAll('p, a, li, h1, h2, h3, button, label'))
        .filter(el => el.textContent.trim().length > 0)
        .slice(0, 200)
        .map(el => {
            const s = getComputedStyle(el);
            return {
                tag: el.tagName,
                text: el.textContent.trim().slice(0, 40),
                color: s.color,
                background: background(el),
                fontSize: parseFloat(s.fontSize),
                bold: Number(s.fontWeight) >= 700,
            };
        });
}"""


FORM_LABELS_SCRIPT = """() => Array.from(document.querySelectorAll(
    'input:not([type="hidden"]):not([type="submit"]), textarea, select'
)).map(input => {
    const labelled = !!(
        (input.id && document.querySelector(`label[for="${input.id}"]`))
        || input.closest('label')
        || input.getAttribute('aria-label')
        || input.getAttribute('aria-labelledby')
    );
    return {
        type: input.type || input.tagName.toLowerCase(),
        id: input.id,
        name: input.name,
        labelled,
        placeholderOnly: !labelled && !!input.placeholder,
    };
})"""


class AccessibilitySuite(BrowserSuite):
    """Landmarks, headings, contrast, names and language."""

    title = "Accessibility (WCAG 2.1 AA)"

    async def run_checks(self, browser: Browser, results: TestResults) -> None:
        """Run the accessibility checks on the main page."""
        thresholds = self.config.accessibility
        instrumented = await create_page(
            browser, self.config.default_viewport, timeouts=self.config.timeouts
        )
        page = instrumented.page
        await navigate(
            page, self.config.targets.main_site, timeouts=self.config.timeouts
        )

        with results.check("Page language"):
            lang = await page.evaluate("() => document.documentElement.lang")
            assertions.is_true(lang, "<html> has no lang attribute")
            results.add_pass("Page language declared", {"lang": lang})

        with results.check("Landmark regions"):
            landmarks = await page.evaluate(LANDMARKS_SCRIPT)
            for landmark in thresholds.required_landmarks:
                assertions.is_true(
                    landmarks.get(landmark), f"Missing {landmark} landmark"
                )
            results.add_pass("Required landmarks present", landmarks)

        with results.check("Heading level order"):
            levels = await page.evaluate(HEADING_LEVELS_SCRIPT)
            skips = [
                (prev, cur)
                for prev, cur in zip(levels, levels[1:])
                if cur - prev > thresholds.max_heading_skip
            ]
            if skips:
                results.add_warn(
                    "Heading levels skipped",
                    ", ".join(f"h{a} -> h{b}" for a, b in skips),
                    {"levels": levels},
                )
            else:
                results.add_pass("Heading levels in order", {"levels": levels})

        with results.check("Text color contrast"):
            samples = await page.evaluate(TEXT_COLORS_SCRIPT)
            low = []
            for sample in samples:
                large = sample["fontSize"] >= LARGE_TEXT_PX or (
                    sample["bold"] and sample["fontSize"] >= LARGE_BOLD_TEXT_PX
                )
                minimum = (
                    thresholds.contrast_ratio_large
                    if large
                    else thresholds.contrast_ratio_min
                )
                ratio = contrast_ratio(
                    parse_color(sample["color"]), parse_color(sample["background"])
                )
                if ratio < minimum:
                    low.append({**sample, "ratio": round(ratio, 2)})
            assertions.is_false(
                low, f"{len(low)} text element(s) below contrast minimum"
            )
            results.add_pass("Text contrast meets minimum", {"checked": len(samples)})

        focusable = []
        with results.check("Accessible names for controls"):
            focusable = await get_focusable_elements(page)
            unnamed = [
                el
                for el in focusable
                if el["tagName"] in ("A", "BUTTON")
                and not el["text"]
                and not el["ariaLabel"]
            ]
            assertions.is_false(
                unnamed, f"{len(unnamed)} links/buttons without an accessible name"
            )
            results.add_pass(
                "Links and buttons have accessible names", {"focusable": len(focusable)}
            )

        with results.check("Form labels"):
            fields = await page.evaluate(FORM_LABELS_SCRIPT)
            unlabelled = [f for f in fields if not f["labelled"]]
            placeholder_only = [f for f in unlabelled if f["placeholderOnly"]]
            if placeholder_only and len(placeholder_only) == len(unlabelled):
                results.add_warn(
                    "Inputs using placeholder as only label",
                    "Placeholders disappear on input, use proper labels",
                    {"fields": placeholder_only},
                )
            else:
                assertions.is_false(
                    unlabelled,
                    f"{len(unlabelled)} form field(s) have no accessible label",
                )
                results.add_pass("All form fields have labels", {"count": len(fields)})

        with results.check("Keyboard focus order"):
            positive = [el for el in focusable if el["tabIndex"] > 0]
            if positive:
                results.add_warn(
                    "Positive tabindex values",
                    f"{len(positive)} element(s) override the natural tab order",
                    {"elements": positive[:10]},
                )
            else:
                results.add_pass("Natural tab order preserved")


if __name__ == "__main__":  # pragma: no cover
    sys.exit(run_standalone(AccessibilitySuite.execute, AccessibilitySuite.title))
