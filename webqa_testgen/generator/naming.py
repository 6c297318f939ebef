import re
from typing import Optional
from urllib.parse import urlsplit

from webqa_testgen.data.page_structures import ElementRecord

# Text at or above this length is not used as an identifier source.
MAX_TEXT_NAME_LENGTH = 30

DEFAULT_PAGE_NAME = "page"
HOME_PAGE_NAME = "home"

_NON_ALNUM = re.compile(r"[^a-zA-Z0-9]")
_WORD_BREAK = re.compile(r"\s+(.)")
_SPACE = re.compile(r"\s")


def to_camel_case(value: str) -> str:
    """Fold ``value`` into lowerCamelCase.

    Every non-alphanumeric character is a word boundary. The first character
    of each word after the first is upper-cased, the first character of the
    result is lower-cased; the rest is left as written.
    """
    folded = _NON_ALNUM.sub(" ", value)
    folded = _WORD_BREAK.sub(lambda m: m.group(1).upper(), folded)
    folded = _SPACE.sub("", folded)
    return folded[:1].lower() + folded[1:]


def to_pascal_case(value: str) -> str:
    camel = to_camel_case(value)
    return camel[:1].upper() + camel[1:]


def _name_sources(element: ElementRecord):
    yield element.id
    yield element.name
    if element.text and len(element.text) < MAX_TEXT_NAME_LENGTH:
        yield element.text
    yield element.placeholder


def element_name(element: ElementRecord) -> str:
    """Map an element to a lowerCamelCase identifier.

    Sources are tried in order: id, name, short text, placeholder. The first
    one that folds to a non-empty identifier wins; otherwise the name is built
    from the tag and subtype, e.g. ``inputCheckboxElement``.
    """
    for source in _name_sources(element):
        if not source:
            continue
        name = to_camel_case(source)
        if not name:
            continue
        if name[0].isdigit():
            name = f"{element.tag}{name}"
        return name

    subtype = to_pascal_case(element.type) if element.type else ""
    return f"{element.tag}{subtype}Element"


def _split_url(url: str):
    try:
        parts = urlsplit(url)
    except ValueError:
        return None
    if not parts.scheme or not (parts.netloc or parts.path):
        return None
    return parts


def page_name(url: str) -> str:
    """Last non-empty path segment of ``url``.

    Returns ``home`` for a URL without path segments and ``page`` for one that
    cannot be parsed.
    """
    parts = _split_url(url)
    if parts is None:
        return DEFAULT_PAGE_NAME
    segments = [s for s in parts.path.split("/") if s]
    return segments[-1] if segments else HOME_PAGE_NAME


def page_path(url: str) -> str:
    parts = _split_url(url)
    if parts is None:
        return "/"
    return parts.path or "/"


def page_class_stem(url: str) -> str:
    """PascalCase class stem for ``url``; ``Page`` when nothing usable remains."""
    default = to_pascal_case(DEFAULT_PAGE_NAME)
    stem = to_pascal_case(page_name(url))
    if not stem:
        return default
    if stem[0].isdigit():
        return f"{default}{stem}"
    return stem


def page_class_name(url: str, suffix: Optional[str] = "Page") -> str:
    return f"{page_class_stem(url)}{suffix or ''}"
