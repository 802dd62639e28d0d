# tests/conftest.py
import json
from typing import Callable, Dict, List, Optional, Tuple, Union

import httpx
import pytest

from core.config import Settings
from services.extractor import parse_document
from services.fetcher import Fetcher
from services.llm import CompletionClient, ImageClient
from services.pipeline import ArticlePipeline

SENTENCE = "The river town rebuilt its old stone bridge after the spring floods receded. "
OTHER = "Engineers measured the tide twice a day and wrote each reading in a notebook. "

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-image-bytes"


def prose(length: int, sentence: str = SENTENCE) -> str:
    """Ordinary text of exactly ``length`` characters, never ending in whitespace."""
    text = (sentence * (length // len(sentence) + 2))[:length - 1]
    return text + "."


def page(body: str, head: str = ""):
    return parse_document(f"<html><head>{head}</head><body>{body}</body></html>")


@pytest.fixture
def settings() -> Settings:
    return Settings(
        OPENROUTER_API_KEY="test-openrouter-key",
        HUGGINGFACE_API_KEY="test-hf-key",
        LLM_MAX_ATTEMPTS=1,
        TARGET_LANGUAGE="Russian",
    )


PageMap = Dict[str, Union[Tuple[int, str], Exception]]


class FakeBackends:
    """Records what the pipeline sent to the text and image models."""

    def __init__(self, completion: Union[str, Tuple[int, dict]] = "Generated text"):
        self.completion = completion
        self.completion_requests: List[dict] = []
        self.image_requests: List[dict] = []

    def completion_handler(self, request: httpx.Request) -> httpx.Response:
        self.completion_requests.append(json.loads(request.content))
        if isinstance(self.completion, tuple):
            status, body = self.completion
            return httpx.Response(status, json=body)
        return httpx.Response(200, json={"choices": [{"message": {"content": self.completion}}]})

    def image_handler(self, request: httpx.Request) -> httpx.Response:
        self.image_requests.append(json.loads(request.content))
        return httpx.Response(200, content=PNG_BYTES, headers={"content-type": "image/png"})


def page_handler(pages: PageMap) -> Callable[[httpx.Request], httpx.Response]:
    def handler(request: httpx.Request) -> httpx.Response:
        entry = pages.get(str(request.url))
        if entry is None:
            return httpx.Response(404, text="not found")
        if isinstance(entry, Exception):
            raise entry
        status, html = entry
        return httpx.Response(status, text=html)

    return handler


@pytest.fixture
def make_pipeline(settings):
    def factory(
        pages: Optional[PageMap] = None,
        backends: Optional[FakeBackends] = None,
        settings_override: Optional[Settings] = None,
    ) -> Tuple[ArticlePipeline, FakeBackends]:
        cfg = settings_override or settings
        backends = backends or FakeBackends()
        pipeline = ArticlePipeline(
            fetcher=Fetcher(cfg, transport=httpx.MockTransport(page_handler(pages or {}))),
            completion_client=CompletionClient(
                cfg, transport=httpx.MockTransport(backends.completion_handler)
            ),
            image_client=ImageClient(cfg, transport=httpx.MockTransport(backends.image_handler)),
            settings=cfg,
        )
        return pipeline, backends

    return factory
