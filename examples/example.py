import asyncio
import os
import sys
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from dotenv import load_dotenv
load_dotenv()

from webqa_testgen.executor import TaskExecutor, TaskSpec
from webqa_testgen.utils.get_log import GetLog


async def example():
    target_url = os.getenv("WEBQA_TARGET_URL", "https://example.com/")
    output_dir = os.path.join(os.getcwd(), "cypress")

    tasks = [
        # Page Object and test file written under cypress/page-objects and cypress/tests
        TaskSpec(operation="generate_full_test_setup", arguments={"url": target_url, "outputDir": output_dir}),
        TaskSpec(operation="analyze_accessibility", arguments={"url": target_url}),
        TaskSpec(operation="extract_table_data", arguments={"url": target_url}),
        # Mobile-sized render
        TaskSpec(operation="set_viewport", arguments={"url": target_url, "width": 375, "height": 667}),
    ]

    executor = TaskExecutor(
        max_concurrent_tasks=2,
        browser_config={"viewport": {"width": 1280, "height": 720}, "headless": True},
    )
    results = await executor.execute(tasks)

    for task, result in zip(tasks, results):
        status = "failed" if result.is_error else "ok"
        print(f"{task.operation}: {status}")
        print(result.first_text[:500])


async def main():
    """Main function - Run all examples"""
    GetLog.get_log()
    try:
        await example()
    except Exception as e:
        print(f"Example run failed: {e}")


if __name__ == "__main__":
    asyncio.run(main())
