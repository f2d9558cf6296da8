"""
Extractor Module
网页正文提取模块

Provides:
- Article extraction (readability)
- Style summary from computed CSS (Playwright)
"""

from .models import Article, ExtractRequest, ExtractResponse, StyleSummary
from .service import ExtractorService
from .style_analyzer import PlaywrightStyleReader, StyleAnalyzer
from .article import create_fetch_client
from .routes import router as extractor_router

__all__ = [
    "Article",
    "ExtractRequest",
    "ExtractResponse",
    "StyleSummary",
    "ExtractorService",
    "PlaywrightStyleReader",
    "StyleAnalyzer",
    "create_fetch_client",
    "extractor_router",
]
