from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock

import pytest

from webqa_testgen.crawler.dom_extractor import parse_html

LOGIN_HTML = """
<html>
  <head><title>Sign in to Example</title></head>
  <body>
    <nav class="navbar">
      <a href="/">Home</a>
      <a href="/pricing">Pricing</a>
      <a href="">Empty</a>
    </nav>
    <form id="login-form" method="post" action="/session">
      <input id="email" type="email" placeholder="Email address">
      <input id="password" type="password">
      <button>Sign In</button>
    </form>
    <a href="/help">Need help?</a>
    <img src="/logo.png" alt="Example logo">
  </body>
</html>
"""

SEARCH_HTML = """
<html>
  <body>
    <form role="search">
      <input name="q" placeholder="Search products">
    </form>
  </body>
</html>
"""

TABLE_HTML = """
<html>
  <body>
    <table>
      <thead><tr><th>Name</th><th>Price</th></tr></thead>
      <tbody><tr><td>Widget</td><td>9.99</td></tr></tbody>
    </table>
  </body>
</html>
"""


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addoption(
        '--url',
        action='store',
        default=None,
        help='Target URL for live browser tests (overrides default)',
    )


@pytest.fixture
def test_url(request: pytest.FixtureRequest) -> str:
    return request.config.getoption('--url') or 'https://example.com/'


@pytest.fixture
def login_html() -> str:
    return LOGIN_HTML


@pytest.fixture
def login_analysis():
    return parse_html(LOGIN_HTML, "https://x.test/login", "Sign in to Example")


@pytest.fixture
def search_analysis():
    return parse_html(SEARCH_HTML, "https://x.test/search", "Search")


@pytest.fixture
def fake_page():
    """Stand-in for a Playwright page holding ``LOGIN_HTML``."""
    page = MagicMock()
    page.content = AsyncMock(return_value=LOGIN_HTML)
    page.title = AsyncMock(return_value="Sign in to Example")
    page.evaluate = AsyncMock()
    page.add_script_tag = AsyncMock()
    page.screenshot = AsyncMock(return_value=b"\x89PNG")
    page.context.cookies = AsyncMock(return_value=[{"name": "sid", "value": "abc"}])
    return page


class FakeSession:
    def __init__(self, page, html=LOGIN_HTML, title="Sign in to Example"):
        self.page = page
        self.viewports = []
        self.fetch_markup = AsyncMock(return_value=(html, title))
        self.navigate_to = AsyncMock()

    @asynccontextmanager
    async def page_scope(self, viewport=None):
        self.viewports.append(viewport)
        yield self.page


class FakePool:
    """In-memory replacement for :class:`BrowserSessionPool`."""

    def __init__(self, session):
        self.session = session
        self.leases = 0
        self.close = AsyncMock(return_value=True)

    @asynccontextmanager
    async def lease(self):
        self.leases += 1
        yield self.session


@pytest.fixture
def fake_session(fake_page):
    return FakeSession(fake_page)


@pytest.fixture
def fake_pool(fake_session):
    return FakePool(fake_session)
