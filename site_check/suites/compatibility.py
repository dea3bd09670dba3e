"""Visual consistency and cross-browser compatibility checks."""

import sys

from playwright.async_api import Browser

from site_check import assertions
from site_check.browser import create_page, navigate
from site_check.results import TestResults
from site_check.suites.base import BrowserSuite, run_standalone

FEATURES_SCRIPT = """() => ({
    customProperties: CSS.supports('color', 'var(--x)'),
    flexbox: CSS.supports('display', 'flex'),
    grid: CSS.supports('display', 'grid'),
    clamp: CSS.supports('width', 'clamp(1px, 2vw, 3px)'),
    backdropFilter: CSS.supports('backdrop-filter', 'blur(2px)')
        || CSS.supports('-webkit-backdrop-filter', 'blur(2px)'),
})"""

FONTS_SCRIPT = """async () => {
    await document.fonts.ready;
    return {
        status: document.fonts.status,
        count: document.fonts.size,
        bodyFont: getComputedStyle(document.body).fontFamily,
    };
}"""

EXTERNAL_RESOURCES_SCRIPT = """() => ({
    stylesheets: Array.from(document.querySelectorAll('link[rel="stylesheet"]'))
        .map(l => l.href).filter(h => h.startsWith('http')),
    scripts: Array.from(document.querySelectorAll('script[src]'))
        .map(s => s.src).filter(h => h.startsWith('http')),
    images: Array.from(document.images).map(i => i.currentSrc || i.src)
        .filter(h => h.startsWith('http')),
})"""

MEDIA_RULES_SCRIPT = """() => {
    let print = !!document.querySelector('link[media="print"]');
    const prefixes = new Set();
    for (const sheet of Array.from(document.styleSheets)) {
        let rules;
        try { rules = Array.from(sheet.cssRules || []); } catch (e) { continue; }
        for (const rule of rules) {
            if (rule.media && /print/.test(rule.media.mediaText)) print = true;
            (rule.cssText.match(/-webkit-|-moz-|-ms-|-o-/g) || []).forEach(p => prefixes.add(p));
        }
    }
    return { print, prefixes: Array.from(prefixes) };
}"""

BOX_SIZING_SCRIPT = """() => Array.from(document.querySelectorAll('body *'))
    .filter(el => getComputedStyle(el).boxSizing !== 'border-box').length"""

Z_INDEX_SCRIPT = """() => Array.from(document.querySelectorAll('body *'))
    .map(el => ({ el, style: getComputedStyle(el) }))
    .filter(({ style }) => style.zIndex !== 'auto' && style.position !== 'static')
    .map(({ el, style }) => ({
        element: el.tagName + (el.classList[0] ? '.' + el.classList[0] : ''),
        zIndex: parseInt(style.zIndex, 10),
    }))
    .sort((a, b) => b.zIndex - a.zIndex)"""

MAX_Z_INDEX = 9999


class CompatibilitySuite(BrowserSuite):
    """Feature support, fonts, resources and stylesheet hygiene."""

    title = "Visual Consistency & Compatibility"

    async def run_checks(self, browser: Browser, results: TestResults) -> None:
        """Inspect the main page for compatibility concerns."""
        instrumented = await create_page(
            browser, self.config.default_viewport, timeouts=self.config.timeouts
        )
        page = instrumented.page
        await navigate(
            page, self.config.targets.main_site, timeouts=self.config.timeouts
        )

        with results.check("CSS feature support"):
            features = await page.evaluate(FEATURES_SCRIPT)
            for feature in ("customProperties", "flexbox", "grid"):
                assertions.is_true(features[feature], f"{feature} not supported")
            results.add_pass("Required CSS features supported", features)

        with results.check("Font loading"):
            fonts = await page.evaluate(FONTS_SCRIPT)
            assertions.equals(fonts["status"], "loaded", "Web fonts failed to load")
            if "," not in fonts["bodyFont"]:
                results.add_warn(
                    "Font fallback stack",
                    f"Body font {fonts['bodyFont']} has no fallback fonts",
                    fonts,
                )
            else:
                results.add_pass("Font loading complete", fonts)

        with results.check("Mixed content"):
            resources = await page.evaluate(EXTERNAL_RESOURCES_SCRIPT)
            insecure = [
                url
                for urls in resources.values()
                for url in urls
                if url.startswith("http://")
            ]
            assertions.is_false(
                insecure, f"{len(insecure)} resource(s) loaded over plain HTTP"
            )
            results.add_pass("External resources use HTTPS", resources)

        media = None
        with results.check("Print styles check"):
            media = await page.evaluate(MEDIA_RULES_SCRIPT)
            if media["print"]:
                results.add_pass("Print styles present")
            else:
                results.add_warn(
                    "No print styles detected",
                    "Consider adding print-specific styles for better printed output",
                )

        with results.check("Vendor prefix usage"):
            assertions.is_true(media is not None, "Stylesheet rules unavailable")
            if media["prefixes"]:
                results.add_warn(
                    "Vendor prefixes in stylesheets",
                    f"Prefixes in use: {', '.join(sorted(media['prefixes']))}",
                    media,
                )
            else:
                results.add_pass("No vendor prefixes required")

        with results.check("Box sizing consistency"):
            content_box = await page.evaluate(BOX_SIZING_SCRIPT)
            if content_box:
                results.add_warn(
                    "Box sizing consistency",
                    f"{content_box} element(s) use content-box sizing",
                )
            else:
                results.add_pass("All elements use border-box sizing")

        with results.check("Z-index layering"):
            layers = await page.evaluate(Z_INDEX_SCRIPT)
            excessive = [layer for layer in layers if layer["zIndex"] > MAX_Z_INDEX]
            if excessive:
                results.add_warn(
                    "Very high z-index values detected",
                    f"{len(excessive)} element(s) above z-index {MAX_Z_INDEX}",
                    {"elements": excessive[:3]},
                )
            else:
                results.add_pass(
                    "Z-index layering reasonable",
                    {"layered": len(layers), "top": layers[:5]},
                )


if __name__ == "__main__":  # pragma: no cover
    sys.exit(run_standalone(CompatibilitySuite.execute, CompatibilitySuite.title))
