"""HTML/CSS structure checks."""

import sys

from playwright.async_api import Browser

from site_check import assertions
from site_check.browser import create_page, navigate
from site_check.results import TestResults
from site_check.suites.base import BrowserSuite, run_standalone

DOCUMENT_SCRIPT = """() => ({
    hasDoctype: document.doctype !== null,
    htmlLang: document.documentElement.lang,
    hasTitle: document.title.trim().length > 0,
    title: document.title,
    hasMetaCharset: !!document.querySelector('meta[charset]'),
    hasMetaViewport: !!document.querySelector('meta[name="viewport"]'),
    hasMetaDescription: !!document.querySelector('meta[name="description"]'),
})"""

CSS_VARIABLES_SCRIPT = """(names) => {
    const root = getComputedStyle(document.documentElement);
    return Object.fromEntries(names.map(n => [n, root.getPropertyValue(n).trim()]));
}"""

BODY_STYLE_SCRIPT = """() => {
    const body = getComputedStyle(document.body);
    return {
        fontFamily: body.fontFamily,
        backgroundColor: body.backgroundColor,
        color: body.color,
        lineHeight: body.lineHeight,
    };
}"""

SEMANTICS_SCRIPT = """() => ({
    nav: !!document.querySelector('nav'),
    main: !!document.querySelector('main'),
    header: !!document.querySelector('header'),
    footer: !!document.querySelector('footer'),
    sections: document.querySelectorAll('section').length,
})"""

HEADINGS_SCRIPT = """() => Array.from(document.querySelectorAll('h1,h2,h3,h4,h5,h6'))
    .map(h => ({ level: Number(h.tagName[1]), text: h.textContent.trim().slice(0, 60) }))"""

IMAGES_SCRIPT = """() => Array.from(document.images).map(img => ({
    src: img.getAttribute('src'),
    hasAlt: img.hasAttribute('alt'),
    altIsEmpty: img.getAttribute('alt') === '',
}))"""


class StructureSuite(BrowserSuite):
    """Document structure, stylesheet loading and semantic markup."""

    title = "HTML/CSS Structure Validation"

    async def run_checks(self, browser: Browser, results: TestResults) -> None:
        """Load the main page once and inspect its structure."""
        instrumented = await create_page(
            browser, self.config.default_viewport, timeouts=self.config.timeouts
        )
        page = instrumented.page
        await navigate(
            page, self.config.targets.main_site, timeouts=self.config.timeouts
        )

        with results.check("Document structure validation"):
            doc = await page.evaluate(DOCUMENT_SCRIPT)
            assertions.is_true(doc["hasDoctype"], "Missing DOCTYPE declaration")
            assertions.is_true(doc["htmlLang"], "Missing lang attribute on <html>")
            assertions.is_true(doc["hasTitle"], "Missing or empty <title>")
            assertions.is_true(doc["hasMetaCharset"], "Missing charset meta tag")
            assertions.is_true(doc["hasMetaViewport"], "Missing viewport meta tag")
            if doc["hasMetaDescription"]:
                results.add_pass("Document structure is valid", doc)
            else:
                results.add_warn(
                    "Document structure is valid",
                    "Missing description meta tag",
                    doc,
                )

        with results.check("CSS custom properties"):
            variables = await page.evaluate(
                CSS_VARIABLES_SCRIPT, ["--bg", "--text", "--accent", "--border"]
            )
            assertions.is_true(variables["--bg"], "CSS variable --bg not defined")
            assertions.is_true(variables["--text"], "CSS variable --text not defined")
            results.add_pass("CSS custom properties loaded", variables)

        with results.check("Critical CSS validation"):
            body = await page.evaluate(BODY_STYLE_SCRIPT)
            assertions.is_true(
                body["fontFamily"] and body["backgroundColor"],
                "Critical styles not applied",
            )
            family = body["fontFamily"].lower()
            if "times" in family or family.strip('"') == "serif":
                results.add_warn(
                    "Critical CSS loaded with warnings",
                    "Using default serif font - custom fonts may not have loaded",
                    body,
                )
            else:
                results.add_pass("Critical CSS loaded correctly", body)

        with results.check("Semantic HTML structure"):
            semantics = await page.evaluate(SEMANTICS_SCRIPT)
            assertions.is_true(semantics["nav"], "Missing <nav> element")
            assertions.is_true(semantics["main"], "Missing <main> element")
            missing = [tag for tag in ("header", "footer") if not semantics[tag]]
            if missing:
                results.add_warn(
                    "Semantic HTML structure",
                    f"Missing optional landmarks: {', '.join(missing)}",
                    semantics,
                )
            else:
                results.add_pass("Semantic HTML structure present", semantics)

        with results.check("Heading hierarchy"):
            headings = await page.evaluate(HEADINGS_SCRIPT)
            h1_count = sum(1 for h in headings if h["level"] == 1)
            assertions.equals(
                h1_count, 1, f"Expected exactly one <h1>, found {h1_count}"
            )
            results.add_pass("Single <h1> present", {"headings": len(headings)})

        with results.check("Image alt text validation"):
            images = await page.evaluate(IMAGES_SCRIPT)
            missing_alt = [img["src"] for img in images if not img["hasAlt"]]
            empty_alt = [img["src"] for img in images if img["altIsEmpty"]]
            assertions.is_false(
                missing_alt, f"{len(missing_alt)} images missing alt attribute"
            )
            if empty_alt:
                results.add_warn(
                    "Some images have empty alt text",
                    f"{len(empty_alt)} images have alt=\"\" "
                    "(acceptable for decorative images)",
                    {"empty_alt": empty_alt},
                )
            elif not images:
                results.add_skip("Image alt text validation", "No images on page")
            else:
                results.add_pass("All images have alt text", {"images": len(images)})

        with results.check("No errors during page load"):
            assertions.is_false(
                instrumented.errors,
                f"{len(instrumented.errors)} error(s) during load: "
                + "; ".join(instrumented.errors[:3]),
            )
            results.add_pass("No console or page errors during load")


if __name__ == "__main__":  # pragma: no cover
    sys.exit(run_standalone(StructureSuite.execute, StructureSuite.title))
