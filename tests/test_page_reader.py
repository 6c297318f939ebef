"""Tests for direct page reads."""

import asyncio
from unittest.mock import AsyncMock

from playwright.async_api import Error as PlaywrightError

from webqa_testgen.actions.page_reader import PageReader
from webqa_testgen.browser.config import AXE_CORE_URL


class TestAccessibilityAudit:
    def test_runs_axe_after_injection(self, fake_page) -> None:
        fake_page.evaluate.return_value = {"violations": [{"id": "color-contrast"}]}
        result = asyncio.run(PageReader(fake_page).accessibility_audit())
        assert result == {"violations": [{"id": "color-contrast"}]}
        fake_page.add_script_tag.assert_awaited_once_with(url=AXE_CORE_URL)

    def test_injection_failure_reports_marker(self, fake_page) -> None:
        fake_page.add_script_tag = AsyncMock(side_effect=PlaywrightError("net::ERR_BLOCKED_BY_CLIENT"))
        result = asyncio.run(PageReader(fake_page).accessibility_audit())
        assert result == {"error": "axe-core not loaded"}
        fake_page.evaluate.assert_not_awaited()


class TestReads:
    def test_screenshot_is_plain_base64(self, fake_page) -> None:
        assert asyncio.run(PageReader(fake_page).b64_screenshot()) == "iVBORw=="

    def test_snapshot(self, fake_page) -> None:
        snapshot = asyncio.run(PageReader(fake_page).snapshot())
        assert snapshot["title"] == "Sign in to Example"
        assert "<form" in snapshot["html"]

    def test_cookies_come_from_the_page_context(self, fake_page) -> None:
        assert asyncio.run(PageReader(fake_page).cookies()) == [{"name": "sid", "value": "abc"}]
