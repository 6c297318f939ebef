from .task_executor import TaskExecutor, TaskSpec
from .tool_dispatcher import OPERATIONS, ToolDispatcher, UnsupportedOperationError, list_operations

__all__ = [
    "TaskExecutor",
    "TaskSpec",
    "OPERATIONS",
    "ToolDispatcher",
    "UnsupportedOperationError",
    "list_operations",
]
