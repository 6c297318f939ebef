import asyncio
import logging
from typing import Dict, Optional

from playwright.async_api import async_playwright


class Driver:
    # Serializes browser launches when several coroutines need a browser at once
    __lock = asyncio.Lock()

    @staticmethod
    async def getInstance(browser_config, *args, **kwargs):
        """Launch and return a new Driver.

        Args:
            browser_config (dict): Browser configuration options.
        """
        logging.info(f"Driver.getInstance called with browser_config: {browser_config}")

        async with Driver.__lock:
            driver = Driver(browser_config=browser_config)
            await driver.create_browser(browser_config=browser_config)
            return driver

    def __init__(self, browser_config=None, *args, **kwargs):
        self._is_closed = False
        self.browser = None
        self.playwright = None
        self.config = browser_config or {}

    def is_closed(self):
        """Check if the browser instance is closed."""
        return getattr(self, "_is_closed", True)

    async def create_browser(self, browser_config):
        """Creates a new headless Chromium instance.

        Args:
            browser_config (dict): Browser configuration containing:
                - headless (bool): Whether to run browser in headless mode
                - viewport (dict): Default viewport width and height
                - launch_args (list): Extra Chromium command line switches

        Returns:
            None
        """
        try:
            self.playwright = await async_playwright().start()
            self.browser = await self.playwright.chromium.launch(
                headless=browser_config["headless"],
                args=[
                    *browser_config.get("launch_args", []),
                    f'--window-size={browser_config["viewport"]["width"]},{browser_config["viewport"]["height"]}',
                ],
            )
            self.config = browser_config
            logging.debug(f"Browser instance created successfully with config: {browser_config}")

        except Exception as e:
            logging.error("Failed to create browser instance.", exc_info=True)
            if self.playwright is not None:
                await self.playwright.stop()
                self.playwright = None
            self._is_closed = True
            raise e

    async def new_context(self, viewport: Optional[Dict[str, int]] = None):
        """Open an isolated browser context.

        Args:
            viewport: Overrides the configured viewport for this context only.

        Returns:
            BrowserContext: The new context. The caller must close it.
        """
        if self.is_closed() or self.browser is None:
            raise RuntimeError("Browser instance not created or already closed")
        viewport = viewport or self.config["viewport"]
        return await self.browser.new_context(
            viewport={"width": viewport["width"], "height": viewport["height"]},
            device_scale_factor=1,
            is_mobile=False,
            locale=self.config.get("language"),
        )

    async def close_browser(self):
        """Closes the browser instance and stops Playwright."""
        try:
            if not self.is_closed():
                await self.browser.close()
                await self.playwright.stop()
                self._is_closed = True
                logging.info("Browser instance closed successfully.")
        except Exception as e:
            logging.error("Failed to close browser instance.", exc_info=True)
            raise e
