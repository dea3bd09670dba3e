"""Headless browser lifecycle and page instrumentation."""

import asyncio
import logging
from collections.abc import AsyncGenerator, Callable, Mapping, Sequence
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from dataclasses import dataclass, field
from typing import Any

from playwright.async_api import (
    Browser,
    ConsoleMessage,
    Error,
    Page,
    async_playwright,
)

from site_check.config import DEFAULT_VIEWPORTS, BrowserOptions, Timeouts, Viewport

log = logging.getLogger(__name__)

BrowserLauncher = Callable[[BrowserOptions], AbstractAsyncContextManager[Browser]]

WAIT_FOR_STABLE_SCRIPT = """
({ quietMs, timeoutMs }) => new Promise(resolve => {
    const root = document.body || document.documentElement;
    if (!root) {
        resolve(true);
        return;
    }
    const started = Date.now();
    let lastMutation = started;
    const observer = new MutationObserver(() => { lastMutation = Date.now(); });
    observer.observe(root, { childList: true, subtree: true, attributes: true });
    const poll = () => {
        const now = Date.now();
        if (now - lastMutation >= quietMs) {
            observer.disconnect();
            resolve(true);
        } else if (now - started >= timeoutMs) {
            observer.disconnect();
            resolve(false);
        } else {
            setTimeout(poll, Math.min(50, quietMs));
        }
    };
    setTimeout(poll, Math.min(50, quietMs));
})
"""


COMPUTED_STYLES_SCRIPT = """(sel) => {
    const el = document.querySelector(sel);
    if (!el) return null;
    const s = window.getComputedStyle(el);
    return {
        display: s.display,
        visibility: s.visibility,
        opacity: s.opacity,
        color: s.color,
        backgroundColor: s.backgroundColor,
        fontSize: s.fontSize,
        fontWeight: s.fontWeight,
        lineHeight: s.lineHeight,
        transform: s.transform,
        transition: s.transition,
        position: s.position,
        zIndex: s.zIndex,
        overflow: s.overflow,
        cursor: s.cursor,
    };
}"""

ALL_ELEMENTS_SCRIPT = """(sel) => Array.from(document.querySelectorAll(sel)).map(el => {
    const r = el.getBoundingClientRect();
    const s = window.getComputedStyle(el);
    return {
        tagName: el.tagName,
        id: el.id,
        className: typeof el.className === 'string' ? el.className : '',
        text: (el.textContent || '').trim().substring(0, 100),
        href: el.getAttribute('href'),
        rect: { x: r.x, y: r.y, width: r.width, height: r.height },
        visible: s.display !== 'none' && s.visibility !== 'hidden'
            && parseFloat(s.opacity) > 0,
    };
})"""

FOCUSABLE_SCRIPT = """() => {
    const focusable = 'a[href], button, input, select, textarea, '
        + '[tabindex]:not([tabindex="-1"])';
    return Array.from(document.querySelectorAll(focusable)).map(el => ({
        tagName: el.tagName,
        type: el.type || null,
        id: el.id,
        name: el.getAttribute('name'),
        tabIndex: el.tabIndex,
        disabled: !!el.disabled,
        ariaLabel: el.getAttribute('aria-label'),
        text: (el.textContent || '').trim().substring(0, 50),
    }));
}"""


@dataclass(kw_only=True)
class InstrumentedPage:
    """A page with console and uncaught-error collectors attached."""

    page: Page
    viewport: Viewport
    console_errors: list[str] = field(default_factory=list)
    page_errors: list[str] = field(default_factory=list)

    @property
    def errors(self) -> Sequence[str]:
        """All collected console and page errors."""
        return [*self.console_errors, *self.page_errors]


@asynccontextmanager
async def launch_browser(options: BrowserOptions) -> AsyncGenerator[Browser, None]:
    """Start one headless Chromium process and close it on exit."""
    async with async_playwright() as playwright:
        log.debug("Launching browser (headless=%s)", options.headless)
        browser = await playwright.chromium.launch(
            headless=options.headless,
            args=list(options.args),
            executable_path=options.executable_path,
        )
        try:
            yield browser
        finally:
            log.debug("Closing browser")
            await browser.close()


async def create_page(
    browser: Browser,
    viewport: Viewport | None = None,
    *,
    timeouts: Timeouts | None = None,
) -> InstrumentedPage:
    """Open a page with error collectors attached.

    The page is sized to ``viewport``, or the desktop viewport when none is
    given. The collectors are registered before any navigation so that errors
    raised while the document loads are captured.
    """
    viewport = viewport or DEFAULT_VIEWPORTS["desktop"]
    page = await browser.new_page(viewport=viewport.as_size())
    if timeouts is not None:
        page.set_default_timeout(timeouts.element)
        page.set_default_navigation_timeout(timeouts.navigation)

    instrumented = InstrumentedPage(page=page, viewport=viewport)

    def on_console(message: ConsoleMessage) -> None:
        if message.type == "error":
            instrumented.console_errors.append(message.text)

    def on_page_error(error: Error) -> None:
        instrumented.page_errors.append(str(error))

    page.on("console", on_console)
    page.on("pageerror", on_page_error)
    return instrumented


@asynccontextmanager
async def open_page(
    browser: Browser, viewport: Viewport, *, timeouts: Timeouts | None = None
) -> AsyncGenerator[InstrumentedPage, None]:
    """Open an instrumented page and close it on exit."""
    instrumented = await create_page(browser, viewport, timeouts=timeouts)
    try:
        yield instrumented
    finally:
        await instrumented.page.close()


async def navigate(page: Page, url: str, *, timeouts: Timeouts) -> None:
    """Load ``url`` and wait for the network to go idle."""
    log.debug("Navigating to %s", url)
    await page.goto(url, wait_until="networkidle", timeout=timeouts.navigation)


async def wait_for_stable(
    page: Page, timeout_ms: int = 1000, quiet_ms: int = 100
) -> bool:
    """Wait until the DOM has not mutated for ``quiet_ms``.

    Returns:
        True once the page is quiet, False if ``timeout_ms`` elapsed first

    """
    settled: bool = await page.evaluate(
        WAIT_FOR_STABLE_SCRIPT, {"quietMs": quiet_ms, "timeoutMs": timeout_ms}
    )
    if not settled:
        log.debug("Page still mutating after %dms", timeout_ms)
    return settled


async def delay(ms: int) -> None:
    """Let in-page transitions settle for ``ms`` milliseconds."""
    await asyncio.sleep(ms / 1000)


async def get_computed_styles(page: Page, selector: str) -> Mapping[str, str] | None:
    """Return a subset of computed styles for the first match, or None."""
    return await page.evaluate(COMPUTED_STYLES_SCRIPT, selector)


async def get_bounding_box(page: Page, selector: str) -> Mapping[str, float] | None:
    """Return the bounding box of the first match, or None."""
    element = await page.query_selector(selector)
    if element is None:
        return None
    return await element.bounding_box()


async def get_all_elements(page: Page, selector: str) -> Sequence[Mapping[str, Any]]:
    """Describe every element matching ``selector``."""
    return await page.evaluate(ALL_ELEMENTS_SCRIPT, selector)


async def get_focusable_elements(page: Page) -> Sequence[Mapping[str, Any]]:
    """Describe every keyboard-focusable element in document order."""
    return await page.evaluate(FOCUSABLE_SCRIPT)
