"""
Publisher Module

Publishes generated tools to a hosting repository branch and lists them.
"""

from .content_store import ContentStore, GitHubContentStore, StoreEntry, create_github_client
from .service import PublisherService, normalize_filename
from .routes import router as publisher_router

__all__ = [
    "ContentStore",
    "GitHubContentStore",
    "StoreEntry",
    "create_github_client",
    "PublisherService",
    "normalize_filename",
    "publisher_router",
]
