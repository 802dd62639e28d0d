# api/v1/endpoints/article.py
from fastapi import APIRouter, Depends, Request
from loguru import logger

from models.request import ArticleRequest
from models.response import (
    IllustrationResponse,
    ParseResponse,
    SummaryResponse,
    TelegramPostResponse,
    ThesisResponse,
    TranslationResponse,
)
from services.pipeline import ArticlePipeline

router = APIRouter()


def get_pipeline(request: Request) -> ArticlePipeline:
    """The pipeline built in the application lifespan."""
    return request.app.state.pipeline


@router.post("/parse", response_model=ParseResponse)
async def parse_article(body: ArticleRequest, pipeline: ArticlePipeline = Depends(get_pipeline)):
    logger.info(f"Parse request: {body.url or 'raw text'}")
    article = await pipeline.load_article(body)
    return ParseResponse(date=article.date, title=article.title, content=article.content)


@router.post("/summary", response_model=SummaryResponse)
async def summarize_article(body: ArticleRequest, pipeline: ArticlePipeline = Depends(get_pipeline)):
    return SummaryResponse(summary=await pipeline.summarize(body))


@router.post("/thesis", response_model=ThesisResponse)
async def article_thesis(body: ArticleRequest, pipeline: ArticlePipeline = Depends(get_pipeline)):
    return ThesisResponse(thesis=await pipeline.extract_thesis(body))


@router.post("/telegram", response_model=TelegramPostResponse)
async def telegram_post(body: ArticleRequest, pipeline: ArticlePipeline = Depends(get_pipeline)):
    return TelegramPostResponse(post=await pipeline.telegram_post(body))


@router.post("/translate", response_model=TranslationResponse)
async def translate_article(body: ArticleRequest, pipeline: ArticlePipeline = Depends(get_pipeline)):
    return TranslationResponse(translation=await pipeline.translate(body))


@router.post("/illustration", response_model=IllustrationResponse)
async def illustrate_article(body: ArticleRequest, pipeline: ArticlePipeline = Depends(get_pipeline)):
    prompt, image = await pipeline.illustrate(body)
    return IllustrationResponse(illustration=image.to_data_url(), prompt=prompt)
