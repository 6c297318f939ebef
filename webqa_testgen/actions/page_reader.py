import base64
import logging
from typing import Any, Dict, List

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page

from webqa_testgen.browser.config import AXE_CORE_URL, AXE_UNAVAILABLE
from webqa_testgen.crawler.content_extractor import extract_tables, list_links

AXE_RUN_SCRIPT = f"""async () => {{
    if (window.axe) {{
        return await window.axe.run();
    }}
    return {{ error: '{AXE_UNAVAILABLE}' }};
}}"""

VISIBLE_TEXT_SCRIPT = "() => document.body ? document.body.innerText : ''"


class PageReader:
    """Reads results directly off a rendered page."""

    def __init__(self, page: Page):
        self.page = page

    async def accessibility_audit(self) -> Dict[str, Any]:
        """Inject axe-core and run it against the current page.

        Returns:
            dict: axe results, or ``{"error": "axe-core not loaded"}`` when the
            script could not be injected.
        """
        try:
            await self.page.add_script_tag(url=AXE_CORE_URL)
        except PlaywrightError as e:
            logging.warning(f"Failed to inject axe-core from {AXE_CORE_URL}: {e.message}")
            return {"error": AXE_UNAVAILABLE}
        return await self.page.evaluate(AXE_RUN_SCRIPT)

    async def b64_screenshot(self, full_page: bool = False, timeout: float = 30000) -> str:
        """Get page screenshot (Base64 encoded PNG, no data URL prefix)."""
        screenshot_bytes = await self.page.screenshot(full_page=full_page, timeout=timeout, type="png")
        return base64.b64encode(screenshot_bytes).decode("utf-8")

    async def visible_text(self) -> str:
        return await self.page.evaluate(VISIBLE_TEXT_SCRIPT)

    async def cookies(self) -> List[Dict[str, Any]]:
        return await self.page.context.cookies()

    async def links(self) -> List[Dict[str, Any]]:
        html = await self.page.content()
        return list_links(html)

    async def tables(self) -> List[Dict[str, list]]:
        html = await self.page.content()
        return extract_tables(html)

    async def snapshot(self) -> Dict[str, str]:
        """Current markup and title."""
        return {"title": await self.page.title(), "html": await self.page.content()}
