import asyncio
import logging
from typing import Any, Dict, List

from pydantic import BaseModel, Field

from webqa_testgen.browser.session import BrowserSessionPool
from webqa_testgen.data import ToolResult
from webqa_testgen.executor.tool_dispatcher import ToolDispatcher
from webqa_testgen.utils.log_icon import icon


class TaskSpec(BaseModel):
    """One configured operation call."""

    operation: str
    arguments: Dict[str, Any] = Field(default_factory=dict)


class TaskExecutor:
    """Runs a batch of operations concurrently against one shared browser pool."""

    def __init__(self, max_concurrent_tasks: int = 2, browser_config: Dict[str, Any] = None, pool: BrowserSessionPool = None):
        self.max_concurrent_tasks = max(1, max_concurrent_tasks)
        self.pool = pool or BrowserSessionPool(browser_config)
        self.dispatcher = ToolDispatcher(pool=self.pool)

    async def execute(self, tasks: List[TaskSpec]) -> List[ToolResult]:
        """Execute ``tasks`` and return their results in task order.

        The pool is force-closed when the batch ends, however it ends.
        """
        logging.info(f"Starting execution of {len(tasks)} tasks (max {self.max_concurrent_tasks} concurrent)")
        semaphore = asyncio.Semaphore(self.max_concurrent_tasks)
        try:
            results = await asyncio.gather(*(self._execute_single_task(task, semaphore) for task in tasks))
        finally:
            await self.pool.close(force=True)

        failed = sum(1 for r in results if r.is_error)
        logging.info(f"{icon['check']} Execution finished: {len(results) - failed} succeeded, {failed} failed")
        return list(results)

    async def _execute_single_task(self, task: TaskSpec, semaphore: asyncio.Semaphore) -> ToolResult:
        async with semaphore:
            return await self.dispatcher.call(task.operation, task.arguments)
