"""Playwright smoke run over the site's page objects."""
import asyncio
from datetime import datetime
from typing import Callable, Iterable, Optional

import structlog
from playwright.async_api import Browser, BrowserContext, Page, async_playwright

from .diagnostics import ConsoleErrorCollector, collect_page_load_metrics
from .models import PageName, ScreenshotResult, SmokeRunResult, SuiteSettings
from .pages import BasePage, HeaderLinksPage, NavigationHeaderPage, SongLibraryPage

logger = structlog.get_logger()


class SmokeRunner:
    """Drive the page objects once against a live site and collect results.

    The runner owns the browser lifecycle; the page objects only borrow the
    Playwright page it opens.
    """

    def __init__(
        self,
        settings: SuiteSettings,
        pages: Optional[Iterable[PageName]] = None,
        take_screenshots: bool = False,
        progress_callback: Optional[Callable[[str], None]] = None,
    ) -> None:
        """Initialize the smoke runner.

        Args:
            settings: Resolved suite settings.
            pages: Page objects to check, defaults to all of them. The site is
                opened through the first one selected.
            take_screenshots: Capture a screenshot per checked page.
            progress_callback: Optional function called with progress messages.

        Raises:
            ValueError: If an empty page selection is given.
        """
        self.settings = settings
        self.pages = list(pages) if pages is not None else list(PageName)
        if not self.pages:
            raise ValueError("At least one page must be selected")
        self.take_screenshots = take_screenshots
        self._progress_callback = progress_callback

    def _report_progress(self, message: str) -> None:
        if self._progress_callback:
            self._progress_callback(message)

    def run(self) -> SmokeRunResult:
        """Synchronous entry point - runs the async smoke run."""
        return asyncio.run(self._run_async())

    async def _run_async(self) -> SmokeRunResult:
        async with async_playwright() as p:
            browser = await p.chromium.launch(headless=self.settings.headless)
            try:
                context = await self._create_context(browser)
                try:
                    page = await context.new_page()
                    return await self.run_checks(page)
                finally:
                    await context.close()
            finally:
                await browser.close()

    async def _create_context(self, browser: Browser) -> BrowserContext:
        context = await browser.new_context(
            viewport={
                "width": self.settings.viewport_width,
                "height": self.settings.viewport_height,
            },
            ignore_https_errors=True,
            extra_http_headers={"Accept-Language": "en-US,en;q=0.9"},
        )
        context.set_default_timeout(self.settings.action_timeout_ms)
        context.set_default_navigation_timeout(self.settings.navigation_timeout_ms)
        return context

    def _page_objects(self, page: Page) -> dict[PageName, BasePage]:
        """Build the selected page objects in check order."""
        page_kwargs = {"screenshot_dir": self.settings.screenshot_dir}
        factories = {
            PageName.HEADER: lambda: NavigationHeaderPage(page, **page_kwargs),
            PageName.LINKS: lambda: HeaderLinksPage(page, **page_kwargs),
            PageName.LIBRARY: lambda: SongLibraryPage(
                page,
                expected_song_count=self.settings.expected_song_count,
                **page_kwargs,
            ),
        }
        return {name: factories[name]() for name in PageName if name in self.pages}

    @staticmethod
    def _screenshot(page_object: BasePage, filename: str) -> ScreenshotResult:
        return ScreenshotResult(
            filename=filename, path=str(page_object.screenshot_dir / filename)
        )

    async def run_checks(self, page: Page) -> SmokeRunResult:
        """Navigate to the site and run the selected page checks in order.

        Console errors are collected for the whole run and load timing is
        read once after the first navigation.

        Args:
            page: Open Playwright page to drive.

        Returns:
            Everything the checks collected.
        """
        result = SmokeRunResult(url=self.settings.base_url)
        page_objects = self._page_objects(page)

        logger.info("smoke_run_started", url=result.url, pages=[str(p) for p in self.pages])
        self._report_progress(f"Opening {result.url}")

        console = ConsoleErrorCollector()
        console.attach(page)
        try:
            navigator = next(iter(page_objects.values()))
            await navigator.navigate_to(result.url)
            await navigator.wait_for_page_load("domcontentloaded")
            result.page_load = await collect_page_load_metrics(page)

            header = page_objects.get(PageName.HEADER)
            if header is not None:
                self._report_progress("Checking navigation header")
                await header.wait_for_navigation_header_load()
                result.navigation_header = await header.check_all_elements_visibility()
                result.submenus = await header.check_all_submenu_visibility()
                if self.take_screenshots:
                    filename = await header.take_navigation_header_screenshot()
                    result.screenshots.append(self._screenshot(header, filename))

            links = page_objects.get(PageName.LINKS)
            if links is not None:
                self._report_progress("Checking header links")
                await links.wait_for_header_load()
                result.header_links = await links.check_all_links_visibility()
                if self.take_screenshots:
                    filename = await links.take_header_screenshot()
                    result.screenshots.append(self._screenshot(links, filename))

            library = page_objects.get(PageName.LIBRARY)
            if library is not None:
                self._report_progress("Checking song library")
                result.song_library = await library.check_all_elements_visibility()
                result.initial_songs_loaded = await library.are_initial_songs_loaded()
                result.songs = await library.get_all_song_data()
                result.validation = await library.verify_all_songs_have_required_fields(
                    result.songs
                )
                if self.take_screenshots:
                    filename = await library.take_screenshot("song-library")
                    result.screenshots.append(self._screenshot(library, filename))
        finally:
            console.detach()

        result.console_errors = list(console.errors)
        result.ended_at = datetime.now()
        logger.info(
            "smoke_run_complete",
            passed=result.passed,
            songs=len(result.songs),
            console_errors=len(result.console_errors),
            elapsed_seconds=result.elapsed_seconds,
        )
        self._report_progress("PASS" if result.passed else "FAIL")
        return result
