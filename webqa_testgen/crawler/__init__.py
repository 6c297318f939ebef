from .content_extractor import extract_tables, list_links
from .dom_extractor import DomExtractor, parse_html
from .selector import generate_selector

__all__ = ["DomExtractor", "parse_html", "generate_selector", "extract_tables", "list_links"]
