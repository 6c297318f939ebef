import logging
from typing import Dict, List, Optional

from bs4 import BeautifulSoup
from bs4.element import Tag

from webqa_testgen.crawler.selector import class_tokens, generate_selector, node_attr, node_text
from webqa_testgen.data.page_structures import (
    ElementRecord,
    FormRecord,
    InteractionType,
    NavigationRecord,
    PageAnalysis,
    classify_form_control,
    classify_form_field,
)

FORM_CONTROL_TAGS = ("input", "textarea", "select")
MEDIA_TAGS = ("img", "video", "audio")
BUTTON_CLASSES = ("btn", "button")
NAV_CONTAINER_CLASSES = ("nav", "navbar", "menu")

# Element collections are emitted in this order, each in document order.
CLICKABLE = "clickable"
FORM_CONTROL = "form_control"
ANCHOR = "anchor"
MEDIA = "media"
NODE_CLASSES = (CLICKABLE, FORM_CONTROL, ANCHOR, MEDIA)


def load_soup(html: str) -> BeautifulSoup:
    # Keep class as the raw attribute string so token order and emptiness are preserved.
    return BeautifulSoup(html, "html.parser", multi_valued_attributes=None)


def node_class(node: Tag) -> Optional[str]:
    """Return which interactive node class ``node`` belongs to, if any.

    The classes are disjoint: a node is checked against form controls, anchors
    and media before the generic clickable markers.
    """
    tag = node.name
    if tag in FORM_CONTROL_TAGS:
        return FORM_CONTROL
    if tag == "a" and node.has_attr("href"):
        return ANCHOR
    if tag in MEDIA_TAGS:
        return MEDIA
    if tag == "button" or node_attr(node, "role") == "button":
        return CLICKABLE
    if any(c in BUTTON_CLASSES for c in class_tokens(node)):
        return CLICKABLE
    return None


def document_positions(soup: BeautifulSoup) -> Dict[int, int]:
    """Map each tag, by object id, to its index in document order."""
    return {id(node): position for position, node in enumerate(soup.find_all(True))}


def is_nav_container(node: Tag) -> bool:
    if node.name == "nav":
        return True
    return any(c in NAV_CONTAINER_CLASSES for c in class_tokens(node))


class DomExtractor:
    """Walks parsed markup and builds a :class:`PageAnalysis`."""

    def extract(self, html: str, url: str, title: str) -> PageAnalysis:
        soup = load_soup(html)
        elements = self.parse_interactive_elements(soup)
        forms = self.parse_forms(soup)
        navigation = self.parse_navigation(soup)
        logging.debug(
            f"Extracted {len(elements)} elements, {len(forms)} forms, {len(navigation)} navigation links from {url}"
        )
        return PageAnalysis(
            url=url,
            title=title,
            elements=tuple(elements),
            forms=tuple(forms),
            navigation=tuple(navigation),
        )

    def parse_interactive_elements(self, soup: BeautifulSoup) -> List[ElementRecord]:
        buckets: Dict[str, List[ElementRecord]] = {key: [] for key in NODE_CLASSES}
        for position, node in enumerate(soup.find_all(True)):
            kind = node_class(node)
            if kind is None:
                continue
            buckets[kind].append(self._build_record(kind, node, position))
        return [record for key in NODE_CLASSES for record in buckets[key]]

    def _build_record(self, kind: str, node: Tag, position: int) -> ElementRecord:
        tag = node.name.lower()
        selector = generate_selector(node)

        if kind == CLICKABLE:
            return ElementRecord(
                selector=selector,
                tag=tag,
                id=node_attr(node, "id"),
                class_name=node_attr(node, "class"),
                text=node_text(node),
                role=node_attr(node, "role"),
                aria_label=node_attr(node, "aria-label"),
                interaction_type=InteractionType.CLICK,
                position=position,
            )

        if kind == FORM_CONTROL:
            element_type = node_attr(node, "type") or "text"
            return ElementRecord(
                selector=selector,
                tag=tag,
                type=element_type,
                id=node_attr(node, "id"),
                class_name=node_attr(node, "class"),
                name=node_attr(node, "name"),
                placeholder=node_attr(node, "placeholder"),
                aria_label=node_attr(node, "aria-label"),
                interaction_type=classify_form_control(tag, element_type),
                position=position,
            )

        if kind == ANCHOR:
            return ElementRecord(
                selector=selector,
                tag="a",
                href=node.get("href"),
                text=node_text(node),
                aria_label=node_attr(node, "aria-label"),
                interaction_type=InteractionType.NAVIGATE,
                position=position,
            )

        return ElementRecord(
            selector=selector,
            tag=tag,
            src=node_attr(node, "src"),
            aria_label=node_attr(node, "aria-label") or node_attr(node, "alt"),
            interaction_type=InteractionType.MEDIA,
            position=position,
        )

    def parse_forms(self, soup: BeautifulSoup) -> List[FormRecord]:
        positions = document_positions(soup)
        forms = []
        for form in soup.find_all("form"):
            fields = []
            for field in form.find_all(["input", "textarea", "select", "button"]):
                if field.name == "button" and field.get("type") != "submit":
                    continue
                tag = field.name.lower()
                element_type = node_attr(field, "type") or "text"
                fields.append(
                    ElementRecord(
                        selector=generate_selector(field),
                        tag=tag,
                        type=element_type,
                        id=node_attr(field, "id"),
                        class_name=node_attr(field, "class"),
                        name=node_attr(field, "name"),
                        placeholder=node_attr(field, "placeholder"),
                        aria_label=node_attr(field, "aria-label"),
                        interaction_type=classify_form_field(tag, element_type),
                        position=positions[id(field)],
                    )
                )
            forms.append(
                FormRecord(
                    selector=generate_selector(form),
                    method=node_attr(form, "method"),
                    action=node_attr(form, "action"),
                    fields=tuple(fields),
                )
            )
        return forms

    def parse_navigation(self, soup: BeautifulSoup) -> List[NavigationRecord]:
        navigation = []
        for link in soup.find_all("a"):
            href = node_attr(link, "href")
            if not href:
                continue
            if not any(is_nav_container(parent) for parent in link.parents if isinstance(parent, Tag)):
                continue
            navigation.append(NavigationRecord(selector=generate_selector(link), href=href, text=node_text(link)))
        return navigation


def parse_html(html: str, url: str, title: str) -> PageAnalysis:
    return DomExtractor().extract(html, url, title)
