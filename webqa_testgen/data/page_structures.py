from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class InteractionType(str, Enum):
    """How generated code acts on an element."""

    CLICK = "click"
    INPUT = "input"
    SELECT = "select"
    NAVIGATE = "navigate"
    MEDIA = "media"


class _Record(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=False,
    )

    def to_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ElementRecord(_Record):
    """One interactive DOM node."""

    selector: str
    tag: str
    type: Optional[str] = None
    id: Optional[str] = None
    class_name: Optional[str] = None
    name: Optional[str] = None
    placeholder: Optional[str] = None
    text: Optional[str] = None
    role: Optional[str] = None
    aria_label: Optional[str] = None
    href: Optional[str] = None
    src: Optional[str] = None
    interaction_type: InteractionType
    # Document position of the source node, shared by every record built from it.
    position: Optional[int] = Field(default=None, exclude=True)


class FormRecord(_Record):
    selector: str
    method: Optional[str] = None
    action: Optional[str] = None
    fields: Tuple[ElementRecord, ...] = ()


class NavigationRecord(_Record):
    selector: str
    href: str
    text: str


class PageAnalysis(_Record):
    """Result of one extraction pass over one rendered page.

    Created once per scrape and never mutated; emitters only read it.
    """

    url: str
    title: str
    elements: Tuple[ElementRecord, ...] = ()
    forms: Tuple[FormRecord, ...] = ()
    navigation: Tuple[NavigationRecord, ...] = ()

    def to_json(self, indent: int = 2) -> str:
        return self.model_dump_json(indent=indent, by_alias=True, exclude_none=True)


def classify_form_control(tag: str, element_type: Optional[str]) -> InteractionType:
    """Category of an ``input``/``textarea``/``select`` node."""
    if element_type in ("submit", "button"):
        return InteractionType.CLICK
    if tag == "select":
        return InteractionType.SELECT
    return InteractionType.INPUT


def classify_form_field(tag: str, element_type: Optional[str]) -> InteractionType:
    """Category of a node collected as a form field.

    Differs from :func:`classify_form_control` in that every ``button`` is a
    click target, whatever its ``type``.
    """
    if element_type == "submit" or tag == "button":
        return InteractionType.CLICK
    if tag == "select":
        return InteractionType.SELECT
    return InteractionType.INPUT
