"""
FastAPI Routes for Extractor Module
处理网页正文提取的 HTTP 端点

端点：
- POST /extract - 提取文章正文与样式摘要
"""

import logging

from fastapi import APIRouter, Depends, Request

from .models import ExtractRequest, ExtractResponse
from .service import ExtractorService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["extractor"])


def get_extractor_service(request: Request) -> ExtractorService:
    return request.app.state.extractor_service


@router.post("/extract", response_model=ExtractResponse)
async def extract_article(
    payload: ExtractRequest,
    service: ExtractorService = Depends(get_extractor_service),
):
    """
    提取博客文章正文与样式摘要

    Request Body:
        {"url": "https://example.com/post"}

    Returns:
        {
            "title": "...",
            "content": "plain text",
            "html": "<div>...</div>",
            "styleSummary": {"typography": {...}, "colors": {...},
                             "spacing": {...}, "components": {...}}
        }
    """
    logger.info(f"[Extract] Start: {payload.url}")
    result = await service.extract(payload.url)
    logger.info(f"[Extract] Success: {payload.url} ({len(result.content)} chars)")
    return result
