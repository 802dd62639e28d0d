from .content_extractor import CASCADE, ContentExtractor, classify_content, extract, is_paywalled
from .document import Document, clean_text, parse_document

__all__ = [
    "CASCADE",
    "ContentExtractor",
    "Document",
    "classify_content",
    "clean_text",
    "extract",
    "is_paywalled",
    "parse_document",
]
