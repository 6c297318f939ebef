import argparse
import asyncio
import base64
import os
import sys
import traceback

import yaml
from dotenv import load_dotenv
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright

from webqa_testgen.executor import TaskExecutor, TaskSpec, list_operations
from webqa_testgen.utils.get_log import GetLog

PROJECT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

# Operations whose --output flag maps onto a named argument
OUTPUT_ARGUMENTS = {
    "generate_page_object": "outputPath",
    "generate_test_suite": "outputPath",
    "generate_full_test_setup": "outputDir",
}


def find_config_file(args_config=None, required=True):
    """Find the configuration file.

    Returns None when nothing is found and ``required`` is False.
    """
    if args_config:
        if os.path.isfile(args_config):
            print(f"✅ Using specified config file: {args_config}")
            return args_config
        raise FileNotFoundError(f"❌ Specified config file not found: {args_config}")

    current_dir = os.getcwd()
    default_paths = [
        os.path.join(current_dir, "config", "config.yaml"),
        os.path.join(PROJECT_DIR, "config", "config.yaml"),
        os.path.join(current_dir, "config.yaml"),
        os.path.join(PROJECT_DIR, "config.yaml"),
        "/app/config/config.yaml",  # Docker container
    ]

    for path in default_paths:
        if os.path.isfile(path):
            print(f"✅ Auto-discovered config file: {path}")
            return path

    if not required:
        return None
    print("❌ Config file not found, please check these locations:")
    for path in default_paths:
        print(f"   - {path}")
    raise FileNotFoundError("Config file does not exist")


def load_yaml(path):
    if not os.path.isfile(path):
        print(f"[ERROR] Config file not found: {path}", file=sys.stderr)
        sys.exit(1)
    try:
        with open(path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    except Exception as e:
        print(f"[ERROR] Failed to read YAML: {e}", file=sys.stderr)
        sys.exit(1)


async def check_playwright_browsers_async():
    try:
        async with async_playwright() as p:
            browser = await p.chromium.launch(headless=True)
            await browser.close()
        print("✅ Playwright browsers available")
        return True
    except PlaywrightError as e:
        print(f"⚠️ Playwright browsers unavailable: {e}")
        return False
    except Exception as e:
        print(f"❌ Playwright check exception: {e}")
        return False


def build_browser_config(cfg):
    browser_cfg = dict(cfg.get("browser_config") or {})

    # Docker environment detection: force headless mode
    if os.getenv("DOCKER_ENV") == "true" and not browser_cfg.get("headless", True):
        print("⚠️  Docker environment detected, forcing headless mode")
        browser_cfg["headless"] = True
    return browser_cfg


def build_tasks(cfg, args):
    """Tasks from the command line take precedence over the ``tasks`` list in config."""
    target_url = args.url or (cfg.get("target") or {}).get("url", "")

    if args.operation:
        arguments = {"url": target_url}
        if args.output:
            output_key = OUTPUT_ARGUMENTS.get(args.operation)
            if output_key:
                arguments[output_key] = args.output
        if args.width is not None:
            arguments["width"] = args.width
        if args.height is not None:
            arguments["height"] = args.height
        return [TaskSpec(operation=args.operation, arguments=arguments)]

    tasks = []
    for raw in cfg.get("tasks") or []:
        task = TaskSpec.model_validate(raw)
        task.arguments.setdefault("url", target_url)
        tasks.append(task)
    return tasks


def resolve_concurrency(cfg):
    raw_concurrency = (cfg.get("target") or {}).get("max_concurrent_tasks", 2)
    try:
        max_concurrent_tasks = int(raw_concurrency)
        if max_concurrent_tasks < 1:
            raise ValueError
    except (TypeError, ValueError):
        print(f"⚠️  Invalid concurrency setting: {raw_concurrency}, fallback to 2")
        max_concurrent_tasks = 2
    return max_concurrent_tasks


def print_result(task, result, output=None):
    status = "❌" if result.is_error else "✅"
    print(f"\n{status} {task.operation} ({task.arguments.get('url', '')})")
    for item in result.content:
        if item.type == "image":
            if output and not result.is_error:
                with open(output, "wb") as f:
                    f.write(base64.b64decode(item.data))
                print(f"Screenshot saved to {output}")
            else:
                print(f"[{item.mime_type} image, {len(item.data or '')} base64 characters]")
        else:
            print(item.text)


async def run_tasks(cfg, args):
    is_docker = os.getenv("DOCKER_ENV") == "true"
    print(f"🏃 Runtime environment: {'Docker container' if is_docker else 'Local environment'}")

    tasks = build_tasks(cfg, args)
    if not tasks:
        print("⚠️  No tasks configured, pass --operation or add a tasks list to the config file", file=sys.stderr)
        sys.exit(1)

    print("🔍 Checking Playwright browsers...")
    if not await check_playwright_browsers_async():
        print("Please manually run: `playwright install` to install browser binaries, then retry.", file=sys.stderr)
        sys.exit(1)

    max_concurrent_tasks = resolve_concurrency(cfg)
    print(f"⚙️ Concurrency: {max_concurrent_tasks}")

    executor = TaskExecutor(max_concurrent_tasks=max_concurrent_tasks, browser_config=build_browser_config(cfg))
    results = await executor.execute(tasks)
    for task, result in zip(tasks, results):
        print_result(task, result, output=args.output if task.operation == "screenshot_page" else None)

    failed = sum(1 for r in results if r.is_error)
    print(f"\n🔢 Total operations: {len(results)}")
    print(f"✅ Succeeded: {len(results) - failed}")
    print(f"❌ Failed: {failed}")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="WebQA TestGen: Cypress page objects and test suites from live pages")
    parser.add_argument("--config", "-c", help="YAML configuration file path (optional, default auto-search config/config.yaml)")
    parser.add_argument("--operation", "-o", help="Run a single operation instead of the configured tasks")
    parser.add_argument("--url", "-u", help="Target URL, overrides target.url from config")
    parser.add_argument("--output", help="Output file or directory for generating operations and screenshots")
    parser.add_argument("--width", type=int, help="Viewport width for set_viewport")
    parser.add_argument("--height", type=int, help="Viewport height for set_viewport")
    parser.add_argument("--list-operations", action="store_true", help="List available operations and exit")
    return parser.parse_args(argv)


def main(argv=None):
    load_dotenv()
    args = parse_args(argv)

    if args.list_operations:
        for definition in list_operations():
            print(f"{definition.name:<26} {definition.description}")
        return

    try:
        config_path = find_config_file(args.config, required=not args.operation)
        cfg = load_yaml(config_path) if config_path else {}
    except FileNotFoundError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        sys.exit(1)

    GetLog.get_log(log_level=(cfg.get("log") or {}).get("level", "info"))

    try:
        asyncio.run(run_tasks(cfg, args))
    except Exception:
        print("Task execution failed, stack trace:", file=sys.stderr)
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
