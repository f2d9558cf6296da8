"""
Tool Generator API Routes

Endpoints:
- POST /ideas    - Suggest five interactive tool ideas for a post
- POST /generate - Generate an embeddable widget for one idea
- POST /update   - Revise a widget from user feedback
"""

import logging

from fastapi import APIRouter, Depends, Request

from .models import GenerateRequest, IdeasRequest, IdeasResponse, ToolResponse, UpdateRequest
from .service import ToolGeneratorService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["generator"])


def get_generator_service(request: Request) -> ToolGeneratorService:
    return request.app.state.generator_service


@router.post("/ideas", response_model=IdeasResponse)
async def generate_ideas(
    payload: IdeasRequest,
    service: ToolGeneratorService = Depends(get_generator_service),
):
    """
    Suggest interactive tool ideas for a blog post.

    Returns:
        {"ideas": ["Retirement savings calculator", ...]}
    """
    logger.info(f"[Ideas] Request ({len(payload.content)} chars of content)")
    ideas = await service.suggest_ideas(payload.content, payload.style_summary)
    return IdeasResponse(ideas=ideas)


@router.post("/generate", response_model=ToolResponse)
async def generate_tool(
    payload: GenerateRequest,
    service: ToolGeneratorService = Depends(get_generator_service),
):
    """
    Generate a style-matched widget (style block, markup, script block).

    The model output is returned verbatim in "tool".
    """
    logger.info(f"[Generate] Idea: {payload.idea[:80]}")
    tool = await service.generate_tool(
        payload.content,
        payload.idea,
        payload.style_summary,
        payload.user_requirements,
    )
    logger.info(f"[Generate] Done ({len(tool)} chars)")
    return ToolResponse(tool=tool)


@router.post("/update", response_model=ToolResponse)
async def update_tool(
    payload: UpdateRequest,
    service: ToolGeneratorService = Depends(get_generator_service),
):
    """Revise the current tool code according to the feedback"""
    logger.info(f"[Update] Feedback: {payload.feedback[:80]}")
    tool = await service.update_tool(payload.content, payload.current_tool, payload.feedback)
    return ToolResponse(tool=tool)
