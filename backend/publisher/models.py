"""
Publisher Request/Response Models
"""

from typing import List, Optional

from pydantic import BaseModel


class PublishRequest(BaseModel):
    """POST /publish"""
    filename: Optional[str] = None
    html: Optional[str] = None


class PublishResponse(BaseModel):
    url: str


class PublishedFile(BaseModel):
    """A published tool; sha is the hosting repository's revision marker"""
    name: str
    url: str
    sha: str


class RecentToolsResponse(BaseModel):
    tools: List[PublishedFile]
