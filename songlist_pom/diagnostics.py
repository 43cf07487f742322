"""Browser-side diagnostics collected alongside the page checks."""
from typing import Optional

import structlog
from playwright.async_api import ConsoleMessage, Page
from playwright.async_api import Error as PlaywrightError

from .models import PageLoadMetrics

logger = structlog.get_logger()

# Event durations come from the navigation entry; paints from navigation start.
PAGE_LOAD_SCRIPT = """() => {
    const nav = performance.getEntriesByType('navigation')[0];
    const paint = name => {
        const entry = performance.getEntriesByName(name)[0];
        return entry ? entry.startTime : 0;
    };
    const resources = performance.getEntriesByType('resource');
    return {
        domContentLoaded: nav ? nav.domContentLoadedEventEnd - nav.domContentLoadedEventStart : 0,
        loadComplete: nav ? nav.loadEventEnd - nav.loadEventStart : 0,
        firstPaint: paint('first-paint'),
        firstContentfulPaint: paint('first-contentful-paint'),
        totalRequests: resources.length,
        totalBytes: resources.reduce((total, r) => total + (r.transferSize || 0), 0),
    };
}"""


class ConsoleErrorCollector:
    """Record the text of every ``error`` console message a page emits.

    Attach before navigating so errors raised during the first load are
    kept. Other message types are ignored.
    """

    def __init__(self) -> None:
        self.errors: list[str] = []
        self._page: Optional[Page] = None

    def attach(self, page: Page) -> None:
        """Start listening on a page's console."""
        self._page = page
        page.on("console", self._on_console)

    def detach(self) -> None:
        """Stop listening; collected errors are kept."""
        if self._page is not None:
            self._page.remove_listener("console", self._on_console)
            self._page = None

    def _on_console(self, message: ConsoleMessage) -> None:
        if message.type == "error":
            self.errors.append(message.text)
            logger.warning("console_error", text=message.text)


async def collect_page_load_metrics(page: Page) -> Optional[PageLoadMetrics]:
    """Read navigation and paint timing from the page.

    Args:
        page: Page that has finished its first navigation.

    Returns:
        Load metrics, or None if the page could not be evaluated.
    """
    try:
        timing = await page.evaluate(PAGE_LOAD_SCRIPT)
    except PlaywrightError as e:
        logger.warning("page_load_metrics_unavailable", error=str(e))
        return None
    metrics = PageLoadMetrics.from_timing(timing or {})
    logger.info("page_load_metrics", **metrics.to_dict())
    return metrics
