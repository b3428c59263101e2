"""Playwright browser session — one Chromium per run, one page per check."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path
from types import TracebackType

from playwright.async_api import async_playwright, Browser, Page, Playwright

from pqa.errors import PageError, SetupError
from pqa.schemas.config import SuiteSettings

logger = logging.getLogger(__name__)


class BrowserSession:
    """Owns the shared Chromium instance that Lighthouse attaches to.

    The browser exposes a remote-debugging endpoint on
    ``settings.debugging_port``. Checks never touch the browser directly;
    they borrow short-lived pages::

        async with BrowserSession(settings) as session:
            async with session.page() as page:
                await page.goto("https://example.com")
    """

    def __init__(self, settings: SuiteSettings) -> None:
        self._settings = settings
        self._pw: Playwright | None = None
        self._browser: Browser | None = None

    @property
    def port(self) -> int:
        return self._settings.debugging_port

    @property
    def report_dir(self) -> Path:
        return self._settings.report_dir

    @property
    def is_open(self) -> bool:
        return self._browser is not None

    async def open(self) -> "BrowserSession":
        """Launch the browser and make sure the report directory exists.

        Any failure is logged and re-raised as ``SetupError``.
        """
        try:
            self._pw = await async_playwright().start()
            self._browser = await self._pw.chromium.launch(
                headless=self._settings.headless,
                args=[f"--remote-debugging-port={self.port}"],
            )
            self.report_dir.mkdir(parents=True, exist_ok=True)
        except Exception as exc:
            logger.error("Error setting up browser: %s", exc, exc_info=True)
            await self.close()
            raise SetupError(f"Browser setup failed: {exc}") from exc
        logger.info("Browser launched (remote debugging on port %d)", self.port)
        return self

    async def close(self) -> None:
        """Release the browser and the Playwright driver; errors are only logged."""
        if self._browser is not None:
            try:
                await self._browser.close()
            except Exception as exc:
                logger.error("Error closing browser: %s", exc)
            self._browser = None
        if self._pw is not None:
            try:
                await self._pw.stop()
            except Exception as exc:
                logger.error("Error stopping Playwright: %s", exc)
            self._pw = None
        logger.info("Browser closed")

    async def __aenter__(self) -> "BrowserSession":
        return await self.open()

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()

    async def open_page(self) -> Page:
        assert self._browser is not None, "BrowserSession not opened"
        try:
            return await self._browser.new_page()
        except Exception as exc:
            logger.error("Error creating page: %s", exc)
            raise PageError(f"Could not create a page: {exc}") from exc

    async def close_page(self, page: Page) -> None:
        try:
            await page.close()
        except Exception as exc:
            logger.error("Error closing page: %s", exc)

    @asynccontextmanager
    async def page(self) -> AsyncIterator[Page]:
        """Borrow a fresh page, closed again whatever the body does."""
        page = await self.open_page()
        try:
            yield page
        finally:
            await self.close_page(page)
