# tests/test_image_client.py
import asyncio
import base64
import json

import httpx
import pytest

from conftest import PNG_BYTES
from core.config import Settings
from core.exceptions import ApiConfigError, ImageGenerationError
from services.llm import GeneratedImage, ImageClient


def run_generate(settings, handler, prompt="  A stone bridge at dawn  "):
    client = ImageClient(settings, transport=httpx.MockTransport(handler))

    async def run():
        try:
            return await client.generate(prompt)
        finally:
            await client.aclose()

    return asyncio.run(run())


def test_generate_posts_prompt_and_parameters(settings):
    captured = {}

    def handler(request):
        captured["url"] = str(request.url)
        captured["auth"] = request.headers["authorization"]
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, content=PNG_BYTES, headers={"content-type": "image/png"})

    image = run_generate(settings, handler)

    assert image == GeneratedImage(content=PNG_BYTES, media_type="image/png")
    assert captured["url"] == settings.IMAGE_MODEL_URL
    assert captured["auth"] == "Bearer test-hf-key"
    assert captured["body"] == {
        "inputs": "A stone bridge at dawn",
        "parameters": {"num_inference_steps": 30, "guidance_scale": 7.5},
    }


def test_data_url():
    image = GeneratedImage(content=b"abc", media_type="image/jpeg")
    assert image.to_data_url() == "data:image/jpeg;base64," + base64.b64encode(b"abc").decode()


def test_non_image_content_type_defaults_to_png(settings):
    handler = lambda request: httpx.Response(
        200, content=PNG_BYTES, headers={"content-type": "application/octet-stream"}
    )
    assert run_generate(settings, handler).media_type == "image/png"


def test_missing_api_key():
    settings = Settings(HUGGINGFACE_API_KEY=None, LLM_MAX_ATTEMPTS=1)
    with pytest.raises(ApiConfigError):
        run_generate(settings, lambda request: httpx.Response(200, content=PNG_BYTES))


def test_upstream_error_keeps_status(settings):
    handler = lambda request: httpx.Response(503, json={"error": "Model is loading"})
    with pytest.raises(ImageGenerationError) as exc_info:
        run_generate(settings, handler)

    assert exc_info.value.status_code == 503
    assert "Model is loading" in exc_info.value.message
