"""
Extractor Service
提取服务

URL -> readable article + style summary of the page.
"""

import logging
from typing import Optional

import httpx

from core.errors import ValidationError
from .article import fetch_page, parse_article
from .models import ExtractResponse
from .style_analyzer import StyleAnalyzer

logger = logging.getLogger(__name__)


class ExtractorService:
    """
    Extracts the main article of a blog post and the page's visual style.

    Usage:
        service = ExtractorService(http_client, StyleAnalyzer(PlaywrightStyleReader()))
        result = await service.extract("https://example.com/post")
    """

    def __init__(self, http_client: httpx.AsyncClient, style_analyzer: StyleAnalyzer):
        self.http_client = http_client
        self.style_analyzer = style_analyzer

    async def extract(self, url: Optional[str]) -> ExtractResponse:
        url = (url or "").strip()
        if not url:
            raise ValidationError("No URL provided")
        if not url.startswith(("http://", "https://")):
            raise ValidationError("URL must start with http:// or https://")

        html = await fetch_page(self.http_client, url)
        article = parse_article(html, url)
        style_summary = await self.style_analyzer.analyze(html, url)

        return ExtractResponse(
            title=article.title,
            content=article.content,
            html=article.html,
            style_summary=style_summary,
        )
