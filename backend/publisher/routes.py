"""
Publisher API Routes

Endpoints:
- POST /publish - Publish a tool as a static .html file
- GET  /recent  - List recently published tools
"""

import logging

from fastapi import APIRouter, Depends, Request

from .models import PublishRequest, PublishResponse, RecentToolsResponse
from .service import PublisherService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["publisher"])


def get_publisher_service(request: Request) -> PublisherService:
    return request.app.state.publisher_service


@router.post("/publish", response_model=PublishResponse)
async def publish_tool(
    payload: PublishRequest,
    service: PublisherService = Depends(get_publisher_service),
):
    """
    Publish generated HTML to the hosting branch.

    Request Body:
        {"filename": "mortgage-calculator", "html": "<style>...</style>..."}

    Returns:
        {"url": "https://owner.github.io/site/mortgage-calculator.html"}
    """
    url = await service.publish(payload.filename, payload.html)
    logger.info(f"[Publish] Published: {url}")
    return PublishResponse(url=url)


@router.get("/recent", response_model=RecentToolsResponse)
async def recent_tools(service: PublisherService = Depends(get_publisher_service)):
    """
    Recently published tools.

    Returns:
        {"tools": [{"name": "quiz.html", "url": "...", "sha": "..."}]}
    """
    tools = await service.list_recent()
    return RecentToolsResponse(tools=tools)
