import asyncio
import json
import logging
import os
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, AsyncIterator, Dict, List, Optional, Type

from pydantic import BaseModel, ConfigDict, Field

from webqa_testgen.actions.page_reader import PageReader
from webqa_testgen.browser.session import BrowserSessionPool
from webqa_testgen.crawler.dom_extractor import DomExtractor
from webqa_testgen.data import PageAnalysis, ToolDefinition, ToolResult
from webqa_testgen.generator.emitter import (
    generate_page_object,
    generate_test_suite,
    page_object_filename,
    test_suite_filename,
)
from webqa_testgen.utils.log_icon import icon

PAGE_OBJECT_DIR = "page-objects"
TEST_DIR = "tests"


class UnsupportedOperationError(ValueError):
    """Raised for an operation name the dispatcher does not know."""


class UrlArgs(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    url: str = Field(..., min_length=1, description="The URL of the page to visit")


class OutputPathArgs(UrlArgs):
    output_path: Optional[str] = Field(
        None, alias="outputPath", description="Optional path to save the generated file"
    )


class OutputDirArgs(UrlArgs):
    output_dir: Optional[str] = Field(
        None, alias="outputDir", description="Optional directory to save generated files"
    )


class ViewportArgs(UrlArgs):
    width: int = Field(..., gt=0, description="Viewport width")
    height: int = Field(..., gt=0, description="Viewport height")


@dataclass(frozen=True)
class Operation:
    name: str
    description: str
    args_model: Type[UrlArgs] = UrlArgs

    def definition(self) -> ToolDefinition:
        return ToolDefinition(
            name=self.name,
            description=self.description,
            input_schema=self.args_model.model_json_schema(by_alias=True),
        )


OPERATIONS: List[Operation] = [
    Operation("scrape_page", "Scrape a web page and analyze its structure for test generation"),
    Operation("generate_page_object", "Generate a Cypress Page Object class from a web page", OutputPathArgs),
    Operation("generate_test_suite", "Generate comprehensive Cypress test suite from page analysis", OutputPathArgs),
    Operation("generate_full_test_setup", "Generate both Page Object and test suite for a URL", OutputDirArgs),
    Operation("analyze_accessibility", "Analyze a web page for accessibility issues using axe-core"),
    Operation("screenshot_page", "Take a screenshot of the page and return as base64"),
    Operation("extract_text_content", "Extract all visible text from a web page"),
    Operation("list_links", "List all links and their destinations on a web page"),
    Operation("extract_table_data", "Extract data from all tables on a web page"),
    Operation("get_cookies", "Retrieve all cookies for a web page"),
    Operation("set_viewport", "Set the viewport size before scraping a page", ViewportArgs),
]


def list_operations() -> List[ToolDefinition]:
    return [op.definition() for op in OPERATIONS]


def to_json(value: Any, indent: Optional[int] = 2) -> str:
    separators = None if indent is not None else (",", ":")
    return json.dumps(value, indent=indent, separators=separators, ensure_ascii=False)


def write_artifact(path: str, text: str, make_dirs: bool = False):
    if make_dirs:
        os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)
    logging.info(f"{icon['file']} Wrote {path}")


def full_setup_summary(url: str, page_object: str, test_suite: str) -> str:
    return (
        f"Generated Page Object and Test Suite for {url}\n\n"
        f"=== PAGE OBJECT ===\n\n{page_object}\n\n"
        f"=== TEST SUITE ===\n\n{test_suite}"
    )


class ToolDispatcher:
    """Routes operation calls to handlers and turns every outcome into a
    :class:`ToolResult`.

    Failures never propagate: each becomes an error payload whose last text
    item is ``Error: <message>``.
    """

    def __init__(self, pool: BrowserSessionPool = None, browser_config: Dict[str, Any] = None):
        self.pool = pool or BrowserSessionPool(browser_config)
        self.extractor = DomExtractor()
        self.operations = {op.name: op for op in OPERATIONS}

    def list_tools(self) -> List[ToolDefinition]:
        return list_operations()

    async def call(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> ToolResult:
        """Run one operation.

        Args:
            name: Operation name, e.g. ``scrape_page``.
            arguments: Raw arguments; camelCase and snake_case keys are both accepted.

        Returns:
            ToolResult: the operation's payload, or an error payload.
        """
        try:
            operation = self.operations.get(name)
            if operation is None:
                raise UnsupportedOperationError(f"Unknown tool: {name}")
            args = operation.args_model.model_validate(arguments or {})
            logging.info(f"{icon['running']} Running operation: {name} on {args.url}")
            result = await getattr(self, f"handle_{name}")(args)
            if not result.is_error:
                logging.info(f"{icon['check']} Operation completed: {name}")
            return result
        except Exception as e:
            logging.error(f"{icon['cross']} Operation {name} failed: {e}")
            return ToolResult.error(str(e))

    async def scrape(self, url: str) -> PageAnalysis:
        async with self.pool.lease() as session:
            html, title = await session.fetch_markup(url)
        return self.extractor.extract(html, url, title)

    @asynccontextmanager
    async def open_page(self, url: str, viewport: Optional[Dict[str, int]] = None) -> AsyncIterator[PageReader]:
        """Lease the pool, open an ephemeral page at ``url`` and yield a reader for it."""
        async with self.pool.lease() as session:
            async with session.page_scope(viewport=viewport) as page:
                await session.navigate_to(page, url)
                yield PageReader(page)

    async def _emit_to_path(self, text: str, output_path: Optional[str]) -> ToolResult:
        if output_path:
            try:
                await asyncio.to_thread(write_artifact, output_path, text)
            except OSError as e:
                logging.error(f"Failed to write {output_path}: {e}")
                return ToolResult.error(f"Failed to write {output_path}: {e}", text)
        return ToolResult.text(text)

    async def handle_scrape_page(self, args: UrlArgs) -> ToolResult:
        analysis = await self.scrape(args.url)
        return ToolResult.text(analysis.to_json())

    async def handle_generate_page_object(self, args: OutputPathArgs) -> ToolResult:
        analysis = await self.scrape(args.url)
        return await self._emit_to_path(generate_page_object(analysis), args.output_path)

    async def handle_generate_test_suite(self, args: OutputPathArgs) -> ToolResult:
        analysis = await self.scrape(args.url)
        return await self._emit_to_path(generate_test_suite(analysis), args.output_path)

    async def handle_generate_full_test_setup(self, args: OutputDirArgs) -> ToolResult:
        analysis = await self.scrape(args.url)
        page_object = generate_page_object(analysis)
        test_suite = generate_test_suite(analysis)
        summary = full_setup_summary(args.url, page_object, test_suite)

        if args.output_dir:
            targets = [
                (os.path.join(args.output_dir, PAGE_OBJECT_DIR, page_object_filename(args.url)), page_object),
                (os.path.join(args.output_dir, TEST_DIR, test_suite_filename(args.url)), test_suite),
            ]
            try:
                for path, text in targets:
                    await asyncio.to_thread(write_artifact, path, text, make_dirs=True)
            except OSError as e:
                logging.error(f"Failed to write test setup under {args.output_dir}: {e}")
                return ToolResult.error(f"Failed to write test setup under {args.output_dir}: {e}", summary)

        return ToolResult.text(summary)

    async def handle_analyze_accessibility(self, args: UrlArgs) -> ToolResult:
        async with self.open_page(args.url) as reader:
            results = await reader.accessibility_audit()
        return ToolResult.text(to_json(results))

    async def handle_screenshot_page(self, args: UrlArgs) -> ToolResult:
        async with self.open_page(args.url) as reader:
            data = await reader.b64_screenshot()
        return ToolResult.image(data)

    async def handle_extract_text_content(self, args: UrlArgs) -> ToolResult:
        async with self.open_page(args.url) as reader:
            text = await reader.visible_text()
        return ToolResult.text(text)

    async def handle_list_links(self, args: UrlArgs) -> ToolResult:
        async with self.open_page(args.url) as reader:
            links = await reader.links()
        return ToolResult.text(to_json(links))

    async def handle_extract_table_data(self, args: UrlArgs) -> ToolResult:
        async with self.open_page(args.url) as reader:
            tables = await reader.tables()
        return ToolResult.text(to_json(tables))

    async def handle_get_cookies(self, args: UrlArgs) -> ToolResult:
        async with self.open_page(args.url) as reader:
            cookies = await reader.cookies()
        return ToolResult.text(to_json(cookies))

    async def handle_set_viewport(self, args: ViewportArgs) -> ToolResult:
        viewport = {"width": args.width, "height": args.height}
        async with self.open_page(args.url, viewport=viewport) as reader:
            snapshot = await reader.snapshot()
        payload = {"url": args.url, "title": snapshot["title"], "viewport": viewport, "html": snapshot["html"]}
        return ToolResult.text(to_json(payload, indent=None))
