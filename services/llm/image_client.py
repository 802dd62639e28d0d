# services/llm/image_client.py
import base64
from dataclasses import dataclass
from typing import Optional

import httpx
from loguru import logger
from prometheus_client import Counter
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from core.config import Settings
from core.exceptions import ApiConfigError, ImageGenerationError

IMAGE_REQUESTS = Counter("image_generation_requests_total", "Image generation requests", ["outcome"])


@dataclass(frozen=True)
class GeneratedImage:
    content: bytes
    media_type: str = "image/png"

    def to_data_url(self) -> str:
        encoded = base64.b64encode(self.content).decode("ascii")
        return f"data:{self.media_type};base64,{encoded}"


class ImageClient:
    """Text-to-image calls against a Hugging Face inference endpoint."""

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.api_key = settings.HUGGINGFACE_API_KEY
        self.model_url = settings.IMAGE_MODEL_URL
        self.parameters = {
            "num_inference_steps": settings.IMAGE_INFERENCE_STEPS,
            "guidance_scale": settings.IMAGE_GUIDANCE_SCALE,
        }
        self.max_attempts = max(settings.LLM_MAX_ATTEMPTS, 1)
        self._client = httpx.AsyncClient(timeout=httpx.Timeout(settings.LLM_TIMEOUT), transport=transport)

    async def generate(self, prompt: str) -> GeneratedImage:
        if not self.api_key:
            raise ApiConfigError("HUGGINGFACE_API_KEY is not configured")

        payload = {"inputs": prompt.strip(), "parameters": self.parameters}
        headers = {"Content-Type": "application/json", "Authorization": f"Bearer {self.api_key}"}

        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.max_attempts),
                wait=wait_exponential(multiplier=1, min=1, max=8),
                retry=retry_if_exception_type(httpx.TransportError),
                reraise=True,
            ):
                with attempt:
                    response = await self._client.post(self.model_url, json=payload, headers=headers)
        except httpx.HTTPError as exc:
            IMAGE_REQUESTS.labels(outcome="error").inc()
            logger.error(f"Image generation request failed: {exc}")
            raise ImageGenerationError(f"Image generation failed: {exc}") from exc

        if not response.is_success:
            IMAGE_REQUESTS.labels(outcome="error").inc()
            try:
                detail = response.json().get("error")
            except (ValueError, AttributeError):
                detail = None
            message = detail or response.reason_phrase
            logger.error(f"Image API error {response.status_code}: {message}")
            raise ImageGenerationError(
                f"Image generation failed: {message}", upstream_status=response.status_code
            )

        IMAGE_REQUESTS.labels(outcome="success").inc()
        media_type = response.headers.get("content-type", "image/png").split(";")[0].strip()
        if not media_type.startswith("image/"):
            media_type = "image/png"
        return GeneratedImage(content=response.content, media_type=media_type)

    async def aclose(self) -> None:
        await self._client.aclose()
