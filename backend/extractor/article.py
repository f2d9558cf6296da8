"""
Article Fetcher
文章抓取与正文提取

Handles:
- Fetching the page with browser-like headers (reduces bot blocking)
- Isolating the main article with readability-lxml
- Converting the article markup to plain text
"""

import logging

import httpx
from bs4 import BeautifulSoup
from readability import Document

from core.errors import ExtractionError, UpstreamFetchError
from .models import Article

logger = logging.getLogger(__name__)

# readability placeholder when the page has no <title>
NO_TITLE = "[no-title]"


# Complete browser-like headers to avoid naive bot blocking
BROWSER_HEADERS = {
    "User-Agent": "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
    "Sec-Ch-Ua": '"Not_A Brand";v="8", "Chromium";v="120", "Google Chrome";v="120"',
    "Sec-Ch-Ua-Mobile": "?0",
    "Sec-Ch-Ua-Platform": '"macOS"',
    "Sec-Fetch-Dest": "document",
    "Sec-Fetch-Mode": "navigate",
    "Sec-Fetch-Site": "none",
    "Cache-Control": "no-cache",
}


def create_fetch_client(timeout: float) -> httpx.AsyncClient:
    """HTTP client used for outbound page fetches"""
    return httpx.AsyncClient(
        timeout=timeout,
        follow_redirects=True,
        headers=BROWSER_HEADERS,
    )


async def fetch_page(client: httpx.AsyncClient, url: str) -> str:
    """
    Download the page HTML.

    Raises:
        UpstreamFetchError: timeout, connection failure or non-2xx status
    """
    try:
        response = await client.get(url)
        response.raise_for_status()
    except httpx.TimeoutException as e:
        logger.error(f"[Fetch] Timeout: {url[:80]}")
        raise UpstreamFetchError("Failed to extract content", f"Timed out fetching {url}") from e
    except httpx.HTTPStatusError as e:
        logger.error(f"[Fetch] HTTP error {e.response.status_code}: {url[:80]}")
        raise UpstreamFetchError(
            "Failed to extract content",
            f"Request failed with status code {e.response.status_code}",
        ) from e
    except httpx.HTTPError as e:
        logger.error(f"[Fetch] Fetch error: {e}")
        raise UpstreamFetchError("Failed to extract content", str(e)) from e

    logger.info(f"[Fetch] Fetched: {url[:80]} ({len(response.content)} bytes)")
    return response.text


def html_to_text(html: str) -> str:
    """Plain text of a markup fragment, one non-blank line per block"""
    soup = BeautifulSoup(html, "lxml")
    lines = (line.strip() for line in soup.get_text("\n").splitlines())
    return "\n".join(line for line in lines if line)


def parse_article(html: str, url: str) -> Article:
    """
    Run readability over the page and return the main article.

    Raises:
        ExtractionError: the page could not be parsed or has no readable text
    """
    try:
        doc = Document(html, url=url)
        article_html = doc.summary(html_partial=True)
        title = doc.short_title() or doc.title()
    except Exception as e:
        logger.warning(f"[Readability] Parse failed for {url[:80]}: {e}")
        raise ExtractionError("Failed to extract content", str(e)) from e

    if title == NO_TITLE:
        title = ""

    content = html_to_text(article_html)
    if not content:
        raise ExtractionError(
            "Failed to extract content",
            "No readable article text found on the page",
        )

    return Article(title=title, content=content, html=article_html)
