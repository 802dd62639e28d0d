# services/extractor/content_extractor.py
"""
Locate the article body inside arbitrary HTML.

The extractor is an ordered cascade of cheap strategies, each a pure
``Document -> str | None`` function. The first strategy that returns a
candidate wins; later strategies are broader and less precise:

1. ``semantic_container`` - first element matched by each selector in
   ``CONTENT_SELECTORS``.
2. ``paragraphs``         - every substantial ``<p>`` joined by blank lines.
3. ``content_div``        - longest ``div`` whose class names hint at prose.
4. ``dense_div``          - longest ``div`` that looks like a block of prose.
5. ``body``               - the whole body minus boilerplate.

Every candidate is cleaned on a copy (see ``document.clean_text``) and is
rejected when it mentions a login / subscription wall.
"""

from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from bs4 import Tag
from loguru import logger

from models.extraction import ExtractionOutcome, ExtractionResult, FailureReason

from .document import Document, clean_text, raw_text
from .metadata import extract_date, extract_title
from .selectors import (
    BODY_MIN,
    CONTAINER_PRIMARY_MIN,
    CONTAINER_RELAXED_MIN,
    CONTENT_DIV_MIN,
    CONTENT_DIV_SELECTOR,
    CONTENT_SELECTORS,
    DENSE_DIV_LINE_MIN,
    DENSE_DIV_MIN,
    DENSE_DIV_MIN_LINES,
    DENSE_DIV_MIN_PARAGRAPHS,
    DIV_ACCEPT_MIN,
    GATE_PAYWALL_MAX,
    GATE_TOO_SHORT,
    PARAGRAPH_MIN,
    PARAGRAPHS_COMBINED_MIN,
    PAYWALL_INDICATORS,
)

Strategy = Callable[[Document], Optional[str]]


def is_paywalled(text: str) -> bool:
    lowered = text.lower()
    return any(indicator in lowered for indicator in PAYWALL_INDICATORS)


def _accept(text: Optional[str], min_length: int) -> Optional[str]:
    if text and len(text) > min_length and not is_paywalled(text):
        return text
    return None


def _longest(elements: Iterable[Tag]) -> Optional[Tag]:
    """Element with the longest raw text; the first one wins ties."""
    best: Optional[Tag] = None
    best_length = -1
    for element in elements:
        length = len(raw_text(element))
        if length > best_length:
            best, best_length = element, length
    return best


# ----------------------------------------------------------------------
# Strategies
# ----------------------------------------------------------------------
def semantic_container(document: Document) -> Optional[str]:
    for selector in CONTENT_SELECTORS:
        node = document.select_one(selector)
        if node is None:
            continue
        text = clean_text(node)
        if not text:
            continue
        accepted = _accept(text, CONTAINER_PRIMARY_MIN) or _accept(
            text, CONTAINER_RELAXED_MIN
        )
        if accepted:
            logger.debug(f"Content container matched selector '{selector}'")
            return accepted
    return None


def paragraphs(document: Document) -> Optional[str]:
    substantial = [
        p for p in document.find_all("p") if len(raw_text(p)) > PARAGRAPH_MIN
    ]
    if not substantial:
        return None

    cleaned = [clean_text(p) for p in substantial]
    combined = "\n\n".join(text for text in cleaned if text).strip()
    return _accept(combined, PARAGRAPHS_COMBINED_MIN)


def content_div(document: Document) -> Optional[str]:
    candidates = [
        div
        for div in document.select(CONTENT_DIV_SELECTOR)
        if len(raw_text(div)) > CONTENT_DIV_MIN
    ]
    best = _longest(candidates)
    if best is None:
        return None
    return _accept(clean_text(best), DIV_ACCEPT_MIN)


def _is_dense(div: Tag) -> bool:
    text = raw_text(div)
    if len(text) <= DENSE_DIV_MIN:
        return False
    if len(div.find_all("p")) > DENSE_DIV_MIN_PARAGRAPHS:
        return True
    lines = [line for line in text.split("\n") if len(line.strip()) > DENSE_DIV_LINE_MIN]
    return len(lines) > DENSE_DIV_MIN_LINES


def dense_div(document: Document) -> Optional[str]:
    best = _longest(div for div in document.find_all("div") if _is_dense(div))
    if best is None:
        return None
    return _accept(clean_text(best), DIV_ACCEPT_MIN)


def body(document: Document) -> Optional[str]:
    root = document.body or document
    return _accept(clean_text(root), BODY_MIN)


CASCADE: Tuple[Tuple[str, Strategy], ...] = (
    ("semantic_container", semantic_container),
    ("paragraphs", paragraphs),
    ("content_div", content_div),
    ("dense_div", dense_div),
    ("body", body),
)


# ----------------------------------------------------------------------
# Post-extraction gate
# ----------------------------------------------------------------------
def classify_content(
    content: Optional[str], result: Optional[ExtractionResult] = None
) -> ExtractionOutcome:
    """
    Decide whether accepted content can be trusted.

    Almost no text, or a short text mentioning a login / subscription wall,
    points at an access-gated page rather than a real article.
    """
    content = (content or "").strip()
    result = result or ExtractionResult(content=content or None)

    if not content:
        return ExtractionOutcome.failure(FailureReason.NOT_FOUND)
    if len(content) < GATE_TOO_SHORT:
        return ExtractionOutcome.failure(FailureReason.TOO_SHORT, result)
    if len(content) < GATE_PAYWALL_MAX and is_paywalled(content):
        return ExtractionOutcome.failure(FailureReason.PAYWALLED, result)
    return ExtractionOutcome.success(result)


# ----------------------------------------------------------------------
# Public API
# ----------------------------------------------------------------------
class ContentExtractor:
    """Runs the strategy cascade over a parsed document."""

    def __init__(self, strategies: Optional[Sequence[Tuple[str, Strategy]]] = None):
        self.strategies: List[Tuple[str, Strategy]] = list(strategies or CASCADE)

    def run_cascade(self, document: Document) -> Optional[ExtractionResult]:
        for name, strategy in self.strategies:
            content = strategy(document)
            if content:
                logger.debug(f"Extraction strategy '{name}' accepted {len(content)} chars")
                return ExtractionResult(content=content, strategy=name)
        return None

    def extract(self, document: Document) -> ExtractionOutcome:
        found = self.run_cascade(document)
        if found is None:
            # Not a cascade step: this pass only picks the failure reason.
            # A page whose remaining text is a login or subscription notice
            # is gated (403), anything else simply has no body (400).
            remaining = clean_text(document.body or document)
            if remaining and is_paywalled(remaining):
                return ExtractionOutcome.failure(FailureReason.PAYWALLED)
            return ExtractionOutcome.failure(FailureReason.NOT_FOUND)

        result = found.model_copy(
            update={"title": extract_title(document), "date": extract_date(document)}
        )
        return classify_content(result.content, result)


def extract(document: Document) -> ExtractionOutcome:
    return ContentExtractor().extract(document)
