"""End-to-end run against a real page. Skipped unless ``--url`` is given."""

import asyncio

import pytest

from webqa_testgen.executor.task_executor import TaskExecutor, TaskSpec


@pytest.fixture
def live_url(request: pytest.FixtureRequest, test_url: str) -> str:
    if not request.config.getoption('--url'):
        pytest.skip('pass --url to run live browser tests')
    return test_url


def test_full_setup_against_live_page(live_url: str, tmp_path) -> None:
    tasks = [
        TaskSpec(operation='generate_full_test_setup', arguments={'url': live_url, 'outputDir': str(tmp_path)}),
        TaskSpec(operation='list_links', arguments={'url': live_url}),
    ]
    results = asyncio.run(TaskExecutor(max_concurrent_tasks=2).execute(tasks))

    assert not any(r.is_error for r in results), [r.content[-1].text for r in results]
    assert list((tmp_path / 'page-objects').glob('*Page.ts'))
    assert list((tmp_path / 'tests').glob('*.spec.ts'))
