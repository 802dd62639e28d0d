# services/extractor/metadata.py
"""Title and publication date of an article page, when the markup exposes them."""

from typing import Optional

from .document import Document

DATE_META_SELECTORS = (
    'meta[property="article:published_time"]',
    'meta[name="article:published_time"]',
    'meta[name="pubdate"]',
    'meta[name="publish-date"]',
    'meta[name="date"]',
)


def _meta_content(document: Document, selector: str) -> Optional[str]:
    tag = document.select_one(selector)
    if tag is None:
        return None
    value = (tag.get("content") or "").strip()
    return value or None


def extract_title(document: Document) -> Optional[str]:
    og_title = _meta_content(document, 'meta[property="og:title"]')
    if og_title:
        return og_title

    for name in ("title", "h1"):
        tag = document.find(name)
        if tag is not None:
            text = tag.get_text().strip()
            if text:
                return text
    return None


def extract_date(document: Document) -> Optional[str]:
    for selector in DATE_META_SELECTORS:
        value = _meta_content(document, selector)
        if value:
            return value

    time_tag = document.find("time")
    if time_tag is not None:
        datetime_attr = (time_tag.get("datetime") or "").strip()
        if datetime_attr:
            return datetime_attr
        text = time_tag.get_text().strip()
        if text:
            return text

    date_like = document.select_one("[class*=date], [id*=date]")
    if date_like is not None:
        return date_like.get_text().strip() or None
    return None
