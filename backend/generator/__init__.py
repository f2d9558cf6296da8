"""
Tool Generator Module

LLM-driven idea suggestion, widget generation and widget revision.
"""

from .llm_client import (
    CompletionClient,
    OpenAICompletionClient,
    AnthropicCompletionClient,
    create_completion_client,
)
from .service import ToolGeneratorService, parse_ideas
from .routes import router as generator_router

__all__ = [
    "CompletionClient",
    "OpenAICompletionClient",
    "AnthropicCompletionClient",
    "create_completion_client",
    "ToolGeneratorService",
    "parse_ideas",
    "generator_router",
]
