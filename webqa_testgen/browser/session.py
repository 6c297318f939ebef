import asyncio
import logging
import uuid
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional, Tuple

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page

from webqa_testgen.browser.config import DEFAULT_CONFIG
from webqa_testgen.browser.driver import Driver


class SessionLaunchError(RuntimeError):
    """The shared browser could not be started."""


class NavigationError(RuntimeError):
    """A page could not be loaded within the navigation timeout."""


class BrowserSession:
    """One caller's lease on the pooled browser.

    Every page visit runs in its own browser context, closed on every exit
    path before control returns to the caller.
    """

    def __init__(self, pool: "BrowserSessionPool", session_id: str = None):
        self.pool = pool
        self.session_id = session_id or str(uuid.uuid4())

    @property
    def browser_config(self) -> Dict[str, Any]:
        return self.pool.browser_config

    @asynccontextmanager
    async def page_scope(self, viewport: Optional[Dict[str, int]] = None) -> AsyncIterator[Page]:
        """Open an ephemeral context and page for one visit."""
        context = await self.pool.driver.new_context(viewport=viewport)
        try:
            page = await context.new_page()
            yield page
        finally:
            try:
                await context.close()
            except PlaywrightError as e:
                logging.error(f"Session {self.session_id} failed to close browser context: {e}")

    async def navigate_to(self, page: Page, url: str, **kwargs):
        """Navigate to URL, failing after the configured timeout.

        Raises:
            NavigationError: unreachable URL or timeout. Never retried.
        """
        kwargs.setdefault("timeout", self.browser_config["navigation_timeout"])
        kwargs.setdefault("wait_until", self.browser_config["wait_until"])
        logging.info(f"Session {self.session_id} navigating to: {url}")
        try:
            await page.goto(url, **kwargs)
        except PlaywrightError as e:
            logging.error(f"Session {self.session_id} failed to load {url}: {e.message}")
            raise NavigationError(e.message) from e

    async def fetch_markup(self, url: str) -> Tuple[str, str]:
        """Render ``url`` and return its HTML and title."""
        async with self.page_scope() as page:
            await self.navigate_to(page, url)
            # Wait a bit for dynamic content to load
            await asyncio.sleep(self.browser_config["settle_delay"])
            html = await page.content()
            title = await page.title()
            return html, title


class BrowserSessionPool:
    """Lazily launched browser shared by concurrent operations.

    Callers hold a lease for the duration of an operation. ``close()`` with
    leases outstanding only marks the pool as draining; the browser is torn
    down when the last lease is released.

    Usage:
        pool = BrowserSessionPool()
        async with pool.lease() as session:
            html, title = await session.fetch_markup("https://example.com")
        await pool.close()
    """

    def __init__(self, browser_config: Dict[str, Any] = None):
        self.browser_config = {**DEFAULT_CONFIG, **(browser_config or {})}
        self.driver: Optional[Driver] = None
        self._leases = 0
        self._close_requested = False
        self._lock = asyncio.Lock()

    @property
    def active_leases(self) -> int:
        return self._leases

    @property
    def is_running(self) -> bool:
        return self.driver is not None and not self.driver.is_closed()

    @property
    def is_draining(self) -> bool:
        return self._close_requested

    async def _ensure_driver(self):
        if self.is_running:
            return
        try:
            self.driver = await Driver.getInstance(browser_config=self.browser_config)
        except Exception as e:
            self.driver = None
            raise SessionLaunchError(f"Failed to launch browser: {e}") from e

    @asynccontextmanager
    async def lease(self) -> AsyncIterator[BrowserSession]:
        async with self._lock:
            await self._ensure_driver()
            self._leases += 1
        session = BrowserSession(self)
        logging.debug(f"Leased session {session.session_id} ({self._leases} active)")
        try:
            yield session
        finally:
            await self._release(session)

    async def _release(self, session: BrowserSession):
        async with self._lock:
            self._leases -= 1
            logging.debug(f"Released session {session.session_id} ({self._leases} active)")
            if self._leases == 0 and self._close_requested:
                await self._teardown()

    async def close(self, force: bool = False) -> bool:
        """Close the browser, or defer until every lease is released.

        Args:
            force: tear down even if leases are outstanding (process shutdown).

        Returns:
            True if the browser was torn down now.
        """
        async with self._lock:
            if self._leases and not force:
                logging.info(f"Deferring browser close until {self._leases} active leases are released")
                self._close_requested = True
                return False
            await self._teardown()
            return True

    async def _teardown(self):
        self._close_requested = False
        driver, self.driver = self.driver, None
        if driver is not None and not driver.is_closed():
            try:
                await driver.close_browser()
            except Exception as e:
                logging.error(f"Error during browser teardown: {e}")
