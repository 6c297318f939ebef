"""Direct reads of rendered markup: links and tables."""

from typing import Dict, List, Optional

from bs4.element import Tag

from webqa_testgen.crawler.dom_extractor import load_soup


def _cell_text(cell: Tag) -> str:
    return cell.get_text().strip()


def list_links(html: str) -> List[Dict[str, Optional[str]]]:
    """Return every ``a[href]`` as ``{"href", "text"}`` in document order."""
    soup = load_soup(html)
    return [{"href": a.get("href"), "text": _cell_text(a)} for a in soup.find_all("a", href=True)]


def extract_tables(html: str) -> List[Dict[str, list]]:
    """Extract header and row texts from every table.

    Headers come from ``thead th``. When there are none, the cells of the
    first row become the headers and that row is not repeated in ``rows``.
    Rows inside ``thead`` and rows without any ``td`` are dropped.
    """
    soup = load_soup(html)
    results = []
    for table in soup.find_all("table"):
        headers: List[str] = []
        header_row: Optional[Tag] = None
        thead = table.find("thead")
        if thead is not None:
            headers = [_cell_text(th) for th in thead.find_all("th")]

        rows_nodes = table.find_all("tr")
        if not headers and rows_nodes:
            header_row = rows_nodes[0]
            headers = [_cell_text(cell) for cell in header_row.find_all(["th", "td"])]

        rows = []
        for tr in rows_nodes:
            if tr is header_row or any(parent is thead for parent in tr.parents):
                continue
            cells = [_cell_text(td) for td in tr.find_all("td")]
            if cells:
                rows.append(cells)

        results.append({"headers": headers, "rows": rows})
    return results
