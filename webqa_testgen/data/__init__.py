from .page_structures import (
    ElementRecord,
    FormRecord,
    InteractionType,
    NavigationRecord,
    PageAnalysis,
)
from .tool_structures import ContentItem, ToolDefinition, ToolResult

__all__ = [
    "InteractionType",
    "ElementRecord",
    "FormRecord",
    "NavigationRecord",
    "PageAnalysis",
    "ContentItem",
    "ToolDefinition",
    "ToolResult",
]
