# core/exceptions.py
"""
Error taxonomy surfaced by the API.

Every exception carries the HTTP status it maps to and a stable ``code``;
``to_dict`` renders the JSON body used by the FastAPI exception handlers.
"""

from typing import Any, Dict, List, Optional


class ReferentException(Exception):
    """Base class for all errors the API translates into a response."""

    status_code: int = 500
    code: str = "INTERNAL_SERVER_ERROR"

    def __init__(
        self,
        message: str,
        *,
        code: Optional[str] = None,
        status_code: Optional[int] = None,
        extra: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code
        self.extra: Dict[str, Any] = extra or {}

    def to_dict(self) -> Dict[str, Any]:
        error = {
            "code": self.code,
            "message": self.message,
            "status": self.status_code,
        }
        error.update(self.extra)
        return {"error": error}


class InvalidRequestError(ReferentException):
    status_code = 400
    code = "INVALID_REQUEST"


class ValidationError(ReferentException):
    """Request body failed pydantic validation."""

    status_code = 422
    code = "VALIDATION_ERROR"

    def __init__(self, errors: List[Any]):
        super().__init__("Request validation failed", extra={"details": errors})
        self.errors = errors


class ContentNotFoundError(ReferentException):
    """No usable article body was found on the page."""

    status_code = 400
    code = "CONTENT_NOT_FOUND"

    def __init__(self, message: str = "Could not extract content from the article"):
        super().__init__(message)


class PaywallError(ReferentException):
    """The page looks access-gated (paywall, login wall, or almost no text)."""

    status_code = 403
    code = "PAYWALL_ERROR"

    def __init__(
        self,
        message: str = (
            "Could not extract article content. "
            "The article may be behind a paywall or require login."
        ),
    ):
        super().__init__(message)


class FetchError(ReferentException):
    """The article page could not be downloaded."""

    status_code = 502
    code = "FETCH_ERROR"

    def __init__(
        self,
        message: str = "Failed to fetch article",
        *,
        upstream_status: Optional[int] = None,
        is_timeout: bool = False,
    ):
        super().__init__(
            message,
            extra={"statusCode": upstream_status, "isTimeout": is_timeout},
        )
        self.upstream_status = upstream_status
        self.is_timeout = is_timeout


class ApiConfigError(ReferentException):
    """A required API credential is missing."""

    status_code = 500
    code = "API_CONFIG_ERROR"


class TokenLimitError(ReferentException):
    """The text model refused the request for credit / token budget reasons."""

    status_code = 402
    code = "TOKEN_LIMIT_ERROR"


class CompletionError(ReferentException):
    status_code = 500
    code = "PROCESSING_ERROR"


class ImageGenerationError(ReferentException):
    code = "IMAGE_GENERATION_ERROR"

    def __init__(self, message: str, upstream_status: int = 502):
        super().__init__(message, status_code=upstream_status)
