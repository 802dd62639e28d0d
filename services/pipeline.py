# services/pipeline.py
"""
Article pipeline: fetch -> extract -> gate -> text model -> (image model).

``ArticlePipeline`` is the caller of the content extractor. It turns a
classified ``ExtractionOutcome`` into the API error taxonomy and feeds the
accepted text to the task prompts.
"""

import asyncio
from typing import Optional, Tuple

from loguru import logger
from prometheus_client import Counter

from core.config import Settings
from core.exceptions import ContentNotFoundError, InvalidRequestError, PaywallError
from models.extraction import ExtractionOutcome, ExtractionResult, FailureReason
from models.request import ArticleRequest
from services.extractor import ContentExtractor, classify_content, parse_document
from services.fetcher import Fetcher
from services.llm import CompletionClient, GeneratedImage, ImageClient
from services.prompts import TaskPrompt, get_task_prompt

EXTRACTION_OUTCOMES = Counter(
    "extraction_outcomes_total",
    "Article extraction outcomes",
    ["strategy", "outcome"],
)


class ArticlePipeline:
    """
    Main entry point used by the API routes and the CLI script.

    All collaborators are injected; ``from_settings`` wires the default ones.
    """

    def __init__(
        self,
        fetcher: Fetcher,
        completion_client: CompletionClient,
        image_client: ImageClient,
        settings: Settings,
        extractor: Optional[ContentExtractor] = None,
    ):
        self.fetcher = fetcher
        self.completion_client = completion_client
        self.image_client = image_client
        self.settings = settings
        self.extractor = extractor or ContentExtractor()

    @classmethod
    def from_settings(cls, settings: Settings) -> "ArticlePipeline":
        return cls(
            fetcher=Fetcher(settings),
            completion_client=CompletionClient(settings),
            image_client=ImageClient(settings),
            settings=settings,
        )

    # ------------------------------------------------------------------
    # Extraction
    # ------------------------------------------------------------------
    def _extract_html(self, html: str) -> ExtractionOutcome:
        return self.extractor.extract(parse_document(html))

    async def load_article(self, request: ArticleRequest) -> ExtractionResult:
        """
        Return the accepted article text for ``request``.

        Raises ``FetchError`` (from the fetcher), ``PaywallError`` for
        access-gated pages and ``ContentNotFoundError`` when no body was found.
        A request without a url or text raises ``InvalidRequestError``.
        """
        if not request.has_source:
            raise InvalidRequestError("Request body needs a 'url' or a 'text'")

        if request.text is not None:
            outcome = classify_content(request.text)
            source = "text"
        else:
            html = await self.fetcher.fetch(request.url)
            # Tree traversal is CPU-bound, keep it off the event loop
            loop = asyncio.get_running_loop()
            outcome = await loop.run_in_executor(None, self._extract_html, html)
            source = request.url

        strategy = (outcome.result.strategy if outcome.result else None) or "none"
        EXTRACTION_OUTCOMES.labels(
            strategy=strategy,
            outcome=outcome.reason.value if outcome.reason else "success",
        ).inc()

        if not outcome.ok:
            logger.info(f"Extraction failed for {source}: {outcome.reason.value}")
            if outcome.reason is FailureReason.NOT_FOUND:
                raise ContentNotFoundError()
            raise PaywallError()

        content = outcome.result.content
        logger.info(f"Extracted content length: {len(content)} characters")
        logger.debug(f"Content preview: {content[:200]}...")
        return outcome.result

    # ------------------------------------------------------------------
    # Tasks
    # ------------------------------------------------------------------
    def prompt_for(self, task: str) -> TaskPrompt:
        prompt = get_task_prompt(task, self.settings.PROMPTS_PATH)
        return prompt.render(self.settings.TARGET_LANGUAGE)

    async def _complete(self, task: str, content: str) -> str:
        prompt = self.prompt_for(task)
        return await self.completion_client.complete(
            prompt.system,
            prompt.user,
            content,
            max_tokens=prompt.max_tokens,
        )

    async def run_task(self, task: str, request: ArticleRequest) -> str:
        article = await self.load_article(request)
        return await self._complete(task, article.content)

    async def summarize(self, request: ArticleRequest) -> str:
        return await self.run_task("summary", request)

    async def extract_thesis(self, request: ArticleRequest) -> str:
        return await self.run_task("thesis", request)

    async def telegram_post(self, request: ArticleRequest) -> str:
        post = await self.run_task("telegram", request)
        if request.url:
            return f"{post}\n\n🔗 {request.url}"
        return post

    async def translate(self, request: ArticleRequest) -> str:
        return await self.run_task("translate", request)

    async def illustrate(self, request: ArticleRequest) -> Tuple[str, GeneratedImage]:
        """Return the generated image prompt and the image made from it."""
        article = await self.load_article(request)
        prompt = self.prompt_for("illustration")
        image_prompt = await self.completion_client.complete(
            prompt.system,
            prompt.user,
            article.content,
            max_tokens=prompt.max_tokens or self.settings.ILLUSTRATION_PROMPT_MAX_TOKENS,
        )
        image = await self.image_client.generate(image_prompt)
        return image_prompt, image

    # ------------------------------------------------------------------
    # Graceful shutdown
    # ------------------------------------------------------------------
    async def aclose(self) -> None:
        await self.fetcher.aclose()
        await self.completion_client.aclose()
        await self.image_client.aclose()
