# services/llm/completion_client.py
"""
Chat-completion calls against an OpenRouter-compatible API.

The article is cut down to ``COMPLETION_MAX_CHARS`` before it is sent. The
cut is lossy on purpose: the request never exceeds the budget, even if the
end of the article is lost.
"""

from typing import Any, Dict, List, Optional

import httpx
from loguru import logger
from prometheus_client import Counter
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from core.config import Settings
from core.exceptions import ApiConfigError, CompletionError, TokenLimitError

COMPLETION_REQUESTS = Counter("completion_requests_total", "Chat-completion requests sent")
COMPLETION_ERRORS = Counter("completion_errors_total", "Failed chat-completion requests", ["reason"])

TRUNCATION_NOTE = "\n\n[... article truncated due to length limits ...]"
TOKEN_LIMIT_MARKERS = ("credits", "max_tokens", "afford")


def truncate_content(content: str, max_length: int) -> str:
    """Return ``content`` unchanged, or cut it so that text plus note fit ``max_length``."""
    if len(content) <= max_length:
        return content
    keep = max_length - len(TRUNCATION_NOTE)
    if keep <= 0:
        return content[:max_length]
    return content[:keep] + TRUNCATION_NOTE


def _error_message(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        data = {}
    error = data.get("error") if isinstance(data, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    if isinstance(error, str) and error:
        return error
    return response.reason_phrase or f"HTTP {response.status_code}"


class CompletionClient:
    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.api_key = settings.OPENROUTER_API_KEY
        self.model = settings.OPENROUTER_MODEL
        self.max_chars = settings.COMPLETION_MAX_CHARS
        self.default_max_tokens = settings.COMPLETION_MAX_TOKENS
        self.max_attempts = max(settings.LLM_MAX_ATTEMPTS, 1)
        self._client = httpx.AsyncClient(
            base_url=settings.OPENROUTER_BASE_URL.rstrip("/") + "/",
            timeout=httpx.Timeout(settings.LLM_TIMEOUT),
            headers={
                "Content-Type": "application/json",
                "HTTP-Referer": settings.APP_URL,
                "X-Title": settings.APP_TITLE,
            },
            transport=transport,
        )

    def build_messages(self, system_prompt: str, user_prompt: str, article: str) -> List[Dict[str, str]]:
        return [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": f"{user_prompt}\n\n{truncate_content(article, self.max_chars)}"},
        ]

    async def _post(self, payload: Dict[str, Any]) -> httpx.Response:
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(multiplier=1, min=1, max=8),
            retry=retry_if_exception_type(httpx.TransportError),
            reraise=True,
        ):
            with attempt:
                return await self._client.post(
                    "chat/completions",
                    json=payload,
                    headers={"Authorization": f"Bearer {self.api_key}"},
                )
        raise CompletionError("No response received from AI")  # pragma: no cover

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        article: str,
        max_tokens: Optional[int] = None,
    ) -> str:
        """
        Ask the model to transform ``article`` and return the generated text.

        Raises ``ApiConfigError`` without a key, ``TokenLimitError`` when the
        provider reports exhausted credits or an oversized request, and
        ``CompletionError`` for every other failure.
        """
        if not self.api_key:
            raise ApiConfigError("OPENROUTER_API_KEY is not configured")

        payload = {
            "model": self.model,
            "messages": self.build_messages(system_prompt, user_prompt, article),
            "max_tokens": max_tokens or self.default_max_tokens,
        }

        COMPLETION_REQUESTS.inc()
        try:
            response = await self._post(payload)
        except httpx.HTTPError as exc:
            COMPLETION_ERRORS.labels(reason="transport").inc()
            logger.error(f"Chat-completion request failed: {exc}")
            raise CompletionError(f"Chat-completion request failed: {exc}") from exc

        if not response.is_success:
            message = _error_message(response)
            logger.error(f"Chat-completion API error {response.status_code}: {message}")
            if any(marker in message for marker in TOKEN_LIMIT_MARKERS):
                COMPLETION_ERRORS.labels(reason="token_limit").inc()
                raise TokenLimitError(message)
            COMPLETION_ERRORS.labels(reason="status").inc()
            raise CompletionError(message)

        try:
            data = response.json()
            result = data["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError):
            result = None

        if not result:
            COMPLETION_ERRORS.labels(reason="empty").inc()
            raise CompletionError("No response received from AI")
        return result

    async def aclose(self) -> None:
        await self._client.aclose()
