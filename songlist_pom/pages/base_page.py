"""Base page object for Playwright automation."""
import re
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union

import structlog
from playwright.async_api import Locator, Page
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

DEFAULT_SCREENSHOT_DIR = Path("test-results/screenshots")


def screenshot_timestamp(moment: Optional[datetime] = None) -> str:
    """Return a filesystem-safe ISO-8601 UTC timestamp.

    ``2026-01-05T10:20:30.123Z`` becomes ``2026-01-05T10-20-30-123Z``.

    Args:
        moment: Instant to format, defaults to now.

    Returns:
        Timestamp with every ``:`` and ``.`` replaced by ``-``.
    """
    moment = moment or datetime.now(timezone.utc)
    iso = moment.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    iso = iso.replace("+00:00", "Z")
    return re.sub(r"[:.]", "-", iso)


class BasePage(ABC):
    """Base class for all page objects.

    Provides navigation, wait, interaction, extraction and visibility-probe
    primitives shared by every page. The Playwright page is borrowed from
    the caller and never closed here.
    """

    def __init__(
        self,
        page: Page,
        logger: Optional[structlog.stdlib.BoundLogger] = None,
        screenshot_dir: Union[str, Path] = DEFAULT_SCREENSHOT_DIR,
    ) -> None:
        """Initialize the base page.

        Args:
            page: Playwright page instance.
            logger: Logger to record actions on, defaults to a structlog
                logger bound to this page object.
            screenshot_dir: Directory screenshots are written to.
        """
        self._page = page
        self.logger = logger or structlog.get_logger().bind(
            service="playwright-tests",
            page_object=type(self).__name__,
        )
        self.screenshot_dir = Path(screenshot_dir)

    @property
    def page(self) -> Page:
        """Get the underlying Playwright page."""
        return self._page

    @property
    @abstractmethod
    def url_pattern(self) -> str:
        """Regex pattern to validate current URL.

        Subclasses must implement this to define valid URLs for the page.
        """

    def is_current_page(self) -> bool:
        """Check whether the browser is on a URL this page object handles."""
        return re.match(self.url_pattern, self._page.url) is not None

    async def navigate_to(self, url: str) -> None:
        """Navigate to a specific URL.

        Args:
            url: URL to navigate to.
        """
        await self._page.goto(url)
        self.logger.info("navigated", url=url)

    async def wait_for_element(self, selector: str, timeout: int = 10000) -> None:
        """Wait for a selector to become visible.

        Args:
            selector: CSS or other selector string.
            timeout: Maximum wait time in milliseconds.

        Raises:
            playwright.async_api.TimeoutError: If the element never shows up.
        """
        await self._page.wait_for_selector(selector, state="visible", timeout=timeout)

    async def click_element(self, selector: str) -> None:
        """Click an element once it is visible.

        Args:
            selector: CSS or other selector string.
        """
        element = self._page.locator(selector)
        await element.wait_for(state="visible")
        await element.click()
        self.logger.info("element_clicked", selector=selector)

    async def fill_input(self, selector: str, value: str) -> None:
        """Clear an input and fill it with a value.

        Args:
            selector: CSS or other selector string.
            value: Value to fill.
        """
        field = self._page.locator(selector)
        await field.wait_for(state="visible")
        await field.clear()
        await field.fill(value)
        self.logger.info("input_filled", selector=selector, value=value)

    async def get_text_content(self, selector: str) -> str:
        """Get text content of a visible element.

        Args:
            selector: CSS or other selector string.

        Returns:
            Text content, or an empty string if the element has none.
        """
        element = self._page.locator(selector)
        await element.wait_for(state="visible")
        return await element.text_content() or ""

    async def take_screenshot(self, name: str) -> str:
        """Take a full-page screenshot named after the current instant.

        Args:
            name: Screenshot name prefix.

        Returns:
            Screenshot filename, ``<name>-<timestamp>.png``.
        """
        filename = f"{name}-{screenshot_timestamp()}.png"
        self.screenshot_dir.mkdir(parents=True, exist_ok=True)
        await self._page.screenshot(
            path=str(self.screenshot_dir / filename), full_page=True
        )
        self.logger.info("screenshot_saved", filename=filename)
        return filename

    async def take_element_screenshot(self, locator: Locator, name: str) -> str:
        """Screenshot a single element, named like :meth:`take_screenshot`."""
        filename = f"{name}-{screenshot_timestamp()}.png"
        self.screenshot_dir.mkdir(parents=True, exist_ok=True)
        await locator.screenshot(path=str(self.screenshot_dir / filename))
        self.logger.info("screenshot_saved", filename=filename, scope="element")
        return filename

    async def is_element_visible(self, selector: str, timeout: int = 2000) -> bool:
        """Check if an element shows up within the timeout.

        Args:
            selector: CSS or other selector string.
            timeout: Maximum wait time in milliseconds.

        Returns:
            True if the element became visible, False on timeout.
        """
        try:
            await self._page.wait_for_selector(selector, state="visible", timeout=timeout)
            return True
        except PlaywrightTimeoutError:
            return False

    async def is_locator_visible(self, locator: Locator, timeout: int = 1000) -> bool:
        """Check if a locator resolves to a visible element within the timeout.

        Only timeouts are reported as False. A locator that matches several
        nodes raises Playwright's strict mode error, so page objects pin
        single-element locators with ``.first``.

        Args:
            locator: Locator to wait on.
            timeout: Maximum wait time in milliseconds.

        Returns:
            True if the locator became visible, False on timeout.
        """
        try:
            await locator.wait_for(state="visible", timeout=timeout)
            return True
        except PlaywrightTimeoutError:
            return False

    async def wait_for_page_load(self, state: str = "networkidle") -> None:
        """Wait for page to reach a load state.

        Args:
            state: Load state to wait for.
        """
        await self._page.wait_for_load_state(state)
        self.logger.info("page_loaded", state=state)

    async def get_page_title(self) -> str:
        """Get the document title."""
        return await self._page.title()

    async def get_current_url(self) -> str:
        """Get the current page URL."""
        return self._page.url
