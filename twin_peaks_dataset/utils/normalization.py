"""Normalization utilities for scraped text."""

import re

_WHITESPACE_RE = re.compile(r"\s+")
_CITATION_RE = re.compile(r"\[[^\]]*\]")
_ALTERNATE_TITLE_PREFIX_RE = re.compile(r"^(?:or:\s*)+", re.IGNORECASE)


def collapse_whitespace(text: str) -> str:
    """Collapse runs of whitespace (newlines included) into single spaces and trim."""
    return _WHITESPACE_RE.sub(" ", text).strip()


def remove_citations(text: str) -> str:
    """Remove bracketed markers such as [1] or [citation needed]."""
    return _CITATION_RE.sub("", text)


def normalize_quotes(text: str) -> str:
    """Replace single quotes with double quotes."""
    return text.replace("'", '"')


def strip_alternate_title_prefix(text: str) -> str:
    """Remove the leading 'or:' the wiki puts in front of alternate titles."""
    return _ALTERNATE_TITLE_PREFIX_RE.sub("", text)


def normalize_text(text: str) -> str:
    """
    Clean a scraped text value.

    Collapses whitespace, removes citation markers and normalizes quotes.
    Whitespace is collapsed again at the end since removing a marker can
    leave a double space behind. Safe to run on already clean text.
    """
    text = collapse_whitespace(text)
    text = remove_citations(text)
    text = normalize_quotes(text)
    return collapse_whitespace(text)


def normalize_title(text: str) -> str:
    """Clean an episode title: normalize_text plus removal of the 'or:' prefix."""
    text = normalize_text(text)
    text = strip_alternate_title_prefix(text)
    return collapse_whitespace(text)
