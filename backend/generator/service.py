"""
Tool Generator Service

Idea suggestion, tool generation and tool revision. Each call sends one
prompt to the completion client; the model's text is returned without
repair or validation.
"""

import logging
import re
from typing import Any, Dict, List, Optional

from core.errors import ModelError
from .llm_client import CompletionClient
from .prompts import build_generate_prompt, build_ideas_prompt, build_update_prompt

logger = logging.getLogger(__name__)

# "1. ", "2) ", "10.  "
LIST_MARKER_RE = re.compile(r"^\s*\d+[.)]\s*")


def parse_ideas(text: str) -> List[str]:
    """
    Split a numbered-list response into ideas.

    Numeric markers are stripped and blank lines dropped. The count is not
    checked: fewer or more than five ideas are returned as-is.
    """
    ideas = []
    for line in text.splitlines():
        idea = LIST_MARKER_RE.sub("", line).strip()
        if idea:
            ideas.append(idea)
    return ideas


class ToolGeneratorService:
    """
    Model-driven handlers sharing one CompletionClient.

    Stateless: update_tool needs the latest tool code on every call.
    """

    def __init__(self, client: CompletionClient):
        self.client = client

    async def _complete(self, prompt: str, failure_message: str) -> str:
        try:
            return await self.client.complete(prompt)
        except ModelError as e:
            raise ModelError(failure_message, e.details) from e

    async def suggest_ideas(
        self,
        content: str,
        style_summary: Optional[Dict[str, Any]] = None,
    ) -> List[str]:
        # style_summary is unused; ideas depend on the post content only
        text = await self._complete(build_ideas_prompt(content), "Failed to generate tool ideas")
        ideas = parse_ideas(text)
        if len(ideas) != 5:
            logger.warning(f"[Ideas] Model returned {len(ideas)} ideas, expected 5")
        return ideas

    async def generate_tool(
        self,
        content: str,
        idea: str,
        style_summary: Optional[Dict[str, Any]] = None,
        user_requirements: Optional[str] = None,
    ) -> str:
        prompt = build_generate_prompt(content, idea, style_summary, user_requirements)
        return await self._complete(prompt, "Failed to generate tool")

    async def update_tool(self, content: str, current_tool: str, feedback: str) -> str:
        prompt = build_update_prompt(content, current_tool, feedback)
        return await self._complete(prompt, "Failed to update tool")
