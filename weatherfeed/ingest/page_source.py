"""Page sources: load a rendered page and pull table cells out of it."""

import logging
from typing import Protocol

from playwright.async_api import Browser, Page, Playwright, async_playwright

logger = logging.getLogger(__name__)

# Runs in the page; returns the trimmed text of each row's bound cells.
_EXTRACT_CELLS_JS = """
(rows, cellSelector) => rows.map(
    row => Array.from(row.querySelectorAll(cellSelector)).map(
        cell => cell.textContent.trim()
    )
)
"""


class PageSource(Protocol):
    async def load(self, url: str, row_selector: str) -> None:
        """Navigate to url and wait until a row matching row_selector exists."""
        ...

    async def extract_rows(
        self, row_selector: str, cell_selector: str
    ) -> list[list[str]]:
        """Return the text of cell_selector cells for each matching row."""
        ...


class PlaywrightPageSource:
    """Headless Chromium session. Use as an async context manager.

    The browser is closed on every exit path, including extraction errors.
    """

    def __init__(self, headless: bool = True, timeout_ms: int = 30000):
        self.headless = headless
        self.timeout_ms = timeout_ms
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._page: Page | None = None

    async def __aenter__(self) -> "PlaywrightPageSource":
        self._playwright = await async_playwright().start()
        try:
            self._browser = await self._playwright.chromium.launch(headless=self.headless)
            self._page = await self._browser.new_page()
            self._page.set_default_timeout(self.timeout_ms)
        except Exception:
            await self._close()
            raise
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self._close()

    async def _close(self) -> None:
        try:
            if self._browser is not None:
                await self._browser.close()
        finally:
            self._browser = None
            self._page = None
            if self._playwright is not None:
                await self._playwright.stop()
                self._playwright = None

    async def load(self, url: str, row_selector: str) -> None:
        page = self._require_page()
        logger.debug("Loading %s", url)
        await page.goto(url)
        await page.wait_for_selector(row_selector)

    async def extract_rows(
        self, row_selector: str, cell_selector: str
    ) -> list[list[str]]:
        page = self._require_page()
        return await page.eval_on_selector_all(
            row_selector, _EXTRACT_CELLS_JS, cell_selector
        )

    def _require_page(self) -> Page:
        if self._page is None:
            raise RuntimeError("PlaywrightPageSource used outside 'async with'")
        return self._page
