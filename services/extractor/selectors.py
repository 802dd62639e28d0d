# services/extractor/selectors.py
"""
Selector lists, paywall phrases and length thresholds used by the content
extractor. Order is significant everywhere: earlier entries win.
"""

from typing import Tuple

# ----------------------------------------------------------------------
# Containers that usually hold the article body, most specific first
# ----------------------------------------------------------------------
CONTENT_SELECTORS: Tuple[str, ...] = (
    "article",
    "[class*=post]",
    "[class*=content]",
    "[class*=article-content]",
    "[class*=entry-content]",
    "[class*=post-content]",
    "[class*=story-body]",
    "[class*=article-body]",
    "[class*=text-content]",
    "[class*=main-content]",
    "[class*=page-content]",
    "[id*=content]",
    "[id*=article]",
    "[id*=post]",
    "[role=article]",
    "main",
)

# ----------------------------------------------------------------------
# Boilerplate removed from every candidate before it is measured
# ----------------------------------------------------------------------
EXCLUDE_SELECTORS: Tuple[str, ...] = (
    "nav",
    "header",
    "footer",
    "aside",
    "[class*=nav]",
    "[class*=menu]",
    "[class*=sidebar]",
    "[class*=header]",
    "[class*=footer]",
    "[class*=ad]",
    "[class*=advertisement]",
    "[class*=widget]",
    "[class*=social]",
    "[class*=share]",
    "[class*=comment]",
    "script",
    "style",
    "noscript",
)

# div class markers for the narrow div search
CONTENT_DIV_SELECTOR = (
    "div[class*=text], div[class*=story], div[class*=news], div[class*=article]"
)

PAYWALL_INDICATORS: Tuple[str, ...] = (
    "login",
    "subscribe",
    "sign up",
    "premium",
    "members only",
    "end of free content",
    "to access this material",
    "please log in",
)

# ----------------------------------------------------------------------
# Length thresholds (characters, all strict comparisons)
# ----------------------------------------------------------------------
CONTAINER_PRIMARY_MIN = 200      # semantic container, first rule
CONTAINER_RELAXED_MIN = 100      # semantic container, second rule
PARAGRAPH_MIN = 30               # paragraphs shorter than this are skipped
PARAGRAPHS_COMBINED_MIN = 80
CONTENT_DIV_MIN = 100            # narrow div search, raw and cleaned text
DENSE_DIV_MIN = 150              # broad div search, raw text
DENSE_DIV_MIN_PARAGRAPHS = 2     # "more than two" <p> descendants
DENSE_DIV_MIN_LINES = 3          # "more than three" substantial lines
DENSE_DIV_LINE_MIN = 20
DIV_ACCEPT_MIN = 100             # cleaned text of either div search
BODY_MIN = 150

# Post-extraction gate
GATE_TOO_SHORT = 50
GATE_PAYWALL_MAX = 300
