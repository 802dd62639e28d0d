from .extraction import ExtractionOutcome, ExtractionResult, FailureReason
from .request import ArticleRequest
from .response import (
    IllustrationResponse,
    ParseResponse,
    SummaryResponse,
    TelegramPostResponse,
    ThesisResponse,
    TranslationResponse,
)

__all__ = [
    "ArticleRequest",
    "ExtractionOutcome",
    "ExtractionResult",
    "FailureReason",
    "IllustrationResponse",
    "ParseResponse",
    "SummaryResponse",
    "TelegramPostResponse",
    "ThesisResponse",
    "TranslationResponse",
]
