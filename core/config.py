# core/config.py
"""
Process-wide settings, read from the environment (and an optional ``.env``).

Collaborators never read the environment themselves: they receive a
``Settings`` instance at construction, so tests can build their own.
"""

from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).resolve().parents[1]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # ------------------------------------------------------------------
    # API
    # ------------------------------------------------------------------
    PROJECT_NAME: str = "Referent"
    DEBUG: bool = False
    PORT: int = 8000
    WORKERS: int = 1
    LOG_LEVEL: str = "INFO"
    ALLOWED_HOSTS: List[str] = Field(default_factory=lambda: ["*"])

    # ------------------------------------------------------------------
    # Article fetching
    # ------------------------------------------------------------------
    FETCH_TIMEOUT: float = 30.0
    USER_AGENT: str = (
        "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
    )

    # ------------------------------------------------------------------
    # Text model (OpenRouter chat completions)
    # ------------------------------------------------------------------
    OPENROUTER_API_KEY: Optional[str] = None
    OPENROUTER_BASE_URL: str = "https://openrouter.ai/api/v1"
    OPENROUTER_MODEL: str = "deepseek/deepseek-chat"
    APP_URL: str = "http://localhost:3000"
    APP_TITLE: str = "Referent AI Translator"
    COMPLETION_MAX_CHARS: int = 8000
    COMPLETION_MAX_TOKENS: int = 2000
    ILLUSTRATION_PROMPT_MAX_TOKENS: int = 500
    LLM_TIMEOUT: float = 120.0
    LLM_MAX_ATTEMPTS: int = 2

    # ------------------------------------------------------------------
    # Image model (Hugging Face inference)
    # ------------------------------------------------------------------
    HUGGINGFACE_API_KEY: Optional[str] = None
    IMAGE_MODEL_URL: str = (
        "https://router.huggingface.co/hf-inference/models/"
        "stabilityai/stable-diffusion-xl-base-1.0"
    )
    IMAGE_INFERENCE_STEPS: int = 30
    IMAGE_GUIDANCE_SCALE: float = 7.5

    # ------------------------------------------------------------------
    # Task prompts
    # ------------------------------------------------------------------
    TARGET_LANGUAGE: str = "Russian"
    PROMPTS_PATH: Path = PROJECT_ROOT / "configs" / "prompts.yaml"


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
