# models/request.py
from typing import Optional
from urllib.parse import urlparse

from pydantic import BaseModel, Field, field_validator, model_validator


class ArticleRequest(BaseModel):
    """
    Body of every article endpoint.

    Either ``url`` (the page is fetched and the body extracted) or ``text``
    (the article text itself). Supplying both fails validation; supplying
    neither is rejected by the pipeline as an invalid request.
    """

    url: Optional[str] = Field(
        default=None,
        description="Address of the article page (http or https)",
    )
    text: Optional[str] = Field(
        default=None,
        description="Raw article text, used instead of fetching a page",
    )

    # ------------------------------------------------------------------
    # Validators
    # ------------------------------------------------------------------
    @field_validator("url", "text", mode="before")
    @classmethod
    def _blank_to_none(cls, value):
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value

    @field_validator("url")
    @classmethod
    def _validate_url(cls, url: Optional[str]) -> Optional[str]:
        if url is None:
            return url
        parsed = urlparse(url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"Invalid article URL '{url}': expected an http(s) address")
        return url

    @model_validator(mode="after")
    def _single_source(self) -> "ArticleRequest":
        if self.url is not None and self.text is not None:
            raise ValueError("Provide either 'url' or 'text', not both")
        return self

    @property
    def has_source(self) -> bool:
        return self.url is not None or self.text is not None

    model_config = {
        "json_schema_extra": {
            "example": {"url": "https://example.com/news/2024/05/some-article"}
        }
    }
