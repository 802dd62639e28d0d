# models/extraction.py
from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class FailureReason(str, Enum):
    NOT_FOUND = "not_found"
    TOO_SHORT = "too_short"
    PAYWALLED = "paywalled"

    @property
    def http_status(self) -> int:
        """``NOT_FOUND`` is a client-side 400; the access-gated reasons are 403."""
        return 400 if self is FailureReason.NOT_FOUND else 403


class ExtractionResult(BaseModel):
    """
    What the extractor found on one page.

    ``content`` is the trimmed article body (``None`` when nothing usable was
    found). ``title`` / ``date`` come from the page metadata and are optional.
    ``strategy`` names the cascade step that produced ``content``.
    """

    model_config = ConfigDict(frozen=True)

    content: Optional[str] = None
    title: Optional[str] = None
    date: Optional[str] = None
    strategy: Optional[str] = None


class ExtractionOutcome(BaseModel):
    """
    Caller-facing extraction verdict: success with a result, or a classified
    failure carrying the HTTP status the caller should answer with.
    """

    model_config = ConfigDict(frozen=True)

    result: Optional[ExtractionResult] = None
    reason: Optional[FailureReason] = None
    http_status: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.reason is None and self.result is not None

    @property
    def content(self) -> Optional[str]:
        return self.result.content if self.result else None

    @classmethod
    def success(cls, result: ExtractionResult) -> "ExtractionOutcome":
        return cls(result=result)

    @classmethod
    def failure(
        cls, reason: FailureReason, result: Optional[ExtractionResult] = None
    ) -> "ExtractionOutcome":
        # The rejected result is kept for logging only; ``ok`` stays False.
        return cls(result=result, reason=reason, http_status=reason.http_status)
