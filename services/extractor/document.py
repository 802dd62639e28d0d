# services/extractor/document.py
import copy
from typing import Union

from bs4 import BeautifulSoup, Tag
from bs4.element import CData, NavigableString, Script, Stylesheet, TemplateString

from .selectors import EXCLUDE_SELECTORS

Document = BeautifulSoup

# html.parser stores <script>, <style> and <template> bodies as their own
# string types, which get_text() skips unless asked for them
RAW_STRING_TYPES = (NavigableString, CData, Script, Stylesheet, TemplateString)


def parse_document(html: Union[str, bytes]) -> Document:
    """Parse fetched HTML. Malformed markup never raises, it just yields fewer nodes."""
    return BeautifulSoup(html, "html.parser")


def clean_text(node: Tag) -> str:
    """
    Trimmed text of ``node`` with the exclusion set stripped.

    Works on a copy: the node and its document are left untouched. Only
    descendants are stripped, never ``node`` itself.
    """
    clone = copy.copy(node)
    for selector in EXCLUDE_SELECTORS:
        for element in clone.select(selector):
            # extract() rather than decompose(): matches can be nested
            element.extract()
    return clone.get_text().strip()


def raw_text(node: Tag) -> str:
    """Trimmed text of every descendant string, script and style bodies included."""
    return node.get_text(types=RAW_STRING_TYPES).strip()
