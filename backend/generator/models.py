"""
Generator Request/Response Models

Missing text fields default to "" and are forwarded to the model as-is.
"""

from typing import Any, Dict, List, Optional

from core.models import CamelModel


class IdeasRequest(CamelModel):
    """POST /ideas"""
    content: str = ""
    style_summary: Optional[Dict[str, Any]] = None


class IdeasResponse(CamelModel):
    ideas: List[str]


class GenerateRequest(CamelModel):
    """POST /generate"""
    content: str = ""
    idea: str = ""
    style_summary: Optional[Dict[str, Any]] = None
    user_requirements: Optional[str] = None


class UpdateRequest(CamelModel):
    """POST /update"""
    content: str = ""
    current_tool: str = ""
    feedback: str = ""


class ToolResponse(CamelModel):
    tool: str
