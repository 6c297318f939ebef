from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field


class ContentItem(BaseModel):
    type: Literal["text", "image"] = "text"
    text: Optional[str] = None
    data: Optional[str] = None  # base64 payload for images
    mime_type: Optional[str] = None


class ToolResult(BaseModel):
    """Payload returned by every operation, successful or not."""

    content: List[ContentItem] = Field(default_factory=list)
    is_error: bool = False

    @classmethod
    def text(cls, text: str) -> "ToolResult":
        return cls(content=[ContentItem(type="text", text=text)])

    @classmethod
    def image(cls, data: str, mime_type: str = "image/png") -> "ToolResult":
        return cls(content=[ContentItem(type="image", data=data, mime_type=mime_type)])

    @classmethod
    def error(cls, message: str, *extra_text: str) -> "ToolResult":
        items = [ContentItem(type="text", text=t) for t in extra_text]
        items.append(ContentItem(type="text", text=f"Error: {message}"))
        return cls(content=items, is_error=True)

    @property
    def first_text(self) -> str:
        for item in self.content:
            if item.type == "text" and item.text is not None:
                return item.text
        return ""


class ToolDefinition(BaseModel):
    name: str
    description: str
    input_schema: Dict[str, Any] = Field(default_factory=dict)
