# models/response.py
from typing import Optional

from pydantic import BaseModel, Field


class ParseResponse(BaseModel):
    date: Optional[str] = None
    title: Optional[str] = None
    content: Optional[str] = None


class SummaryResponse(BaseModel):
    summary: str


class ThesisResponse(BaseModel):
    thesis: str


class TelegramPostResponse(BaseModel):
    post: str


class TranslationResponse(BaseModel):
    translation: str


class IllustrationResponse(BaseModel):
    illustration: str = Field(..., description="Generated image as a data: URL")
    prompt: str = Field(..., description="Image prompt produced from the article")
