"""CSS selector based field extraction."""

from typing import List, Optional

from bs4 import BeautifulSoup

from ..errors import ExtractionMiss


def parse_html(html: str) -> BeautifulSoup:
    """Parse raw HTML into a queryable document tree."""
    return BeautifulSoup(html, "html.parser")


def extract_single(document: BeautifulSoup, selector: str) -> Optional[str]:
    """
    Get the text of the first node matching a selector.

    Args:
        document: Parsed document
        selector: CSS selector

    Returns:
        Text content of the first match, or None if nothing matches
    """
    node = document.select_one(selector)
    if node is None:
        return None
    return node.get_text()


def extract_many(document: BeautifulSoup, selector: str) -> List[str]:
    """
    Get the text of every node matching a selector, in document order.

    Args:
        document: Parsed document
        selector: CSS selector

    Returns:
        List of text contents, empty if nothing matches
    """
    return [node.get_text() for node in document.select(selector)]


def require_single(document: BeautifulSoup, selector: str, url: str) -> str:
    """Like extract_single, but raise ExtractionMiss so the caller can report the gap."""
    text = extract_single(document, selector)
    if text is None:
        raise ExtractionMiss(url, selector)
    return text
