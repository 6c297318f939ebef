from typing import List, Optional

from bs4.element import Tag

# Text at or above this length is never used to address a node.
MAX_TEXT_SELECTOR_LENGTH = 50

TEST_ID_ATTRIBUTES = ("data-testid", "data-test-id")


def node_attr(node: Tag, name: str) -> Optional[str]:
    """Return an attribute as a string, treating an empty value as absent."""
    value = node.get(name)
    if isinstance(value, list):
        value = " ".join(value)
    return value or None


def node_text(node: Tag) -> str:
    return node.get_text().strip()


def class_tokens(node: Tag) -> List[str]:
    raw = node_attr(node, "class") or ""
    return raw.split()


def sibling_index(node: Tag) -> int:
    """1-based position of ``node`` among its element siblings."""
    index = 1
    for sibling in node.previous_siblings:
        if isinstance(sibling, Tag):
            index += 1
    return index


def generate_selector(node: Tag) -> str:
    """Build the addressing string for one DOM node.

    Rules are tried in order and the first applicable one wins:
    id, test id, name, class list, short visible text, nth-child position.

    Args:
        node: parsed element.

    Returns:
        A CSS-like selector. ``:contains()`` is a Cypress/jQuery extension, not
        standard CSS.
    """
    element_id = node_attr(node, "id")
    if element_id:
        return f"#{element_id}"

    for attr in TEST_ID_ATTRIBUTES:
        test_id = node_attr(node, attr)
        if test_id:
            return f'[{attr}="{test_id}"]'

    name = node_attr(node, "name")
    if name:
        return f'[name="{name}"]'

    tag = node.name.lower()
    classes = class_tokens(node)
    if classes:
        return f"{tag}.{'.'.join(classes)}"

    text = node_text(node)
    if text and len(text) < MAX_TEXT_SELECTOR_LENGTH:
        return f'{tag}:contains("{text}")'

    return f"{tag}:nth-child({sibling_index(node)})"
