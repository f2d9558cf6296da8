"""
Publisher Service

Writes generated tools into the hosting branch and lists what is there.
Publishing is not transactional: the revision marker is read, then the
write is sent, and a concurrent publish of the same filename can slip in
between. The store rejects the stale write; nothing here retries it.
"""

import logging
from typing import List, Optional
from urllib.parse import quote

from core.errors import UpstreamFetchError, ValidationError
from .content_store import ContentStore
from .models import PublishedFile

logger = logging.getLogger(__name__)

HTML_SUFFIX = ".html"


def normalize_filename(filename: str) -> str:
    """Trim and make sure the name ends with a lowercase .html"""
    name = filename.strip()
    if name.lower().endswith(HTML_SUFFIX):
        name = name[:-len(HTML_SUFFIX)]
    return name + HTML_SUFFIX


class PublisherService:
    def __init__(self, store: ContentStore, public_base_url: str):
        self.store = store
        self.public_base_url = public_base_url

    def public_url(self, name: str) -> str:
        return f"{self.public_base_url}{quote(name)}"

    async def publish(self, filename: Optional[str], html: Optional[str]) -> str:
        """
        Create or update <filename>.html at the branch root.

        Returns:
            Public URL of the published file
        """
        if not filename or not filename.strip() or not html:
            raise ValidationError("Filename and HTML are required")

        name = normalize_filename(filename)

        try:
            sha = await self.store.get(name)
            await self.store.put(name, html.encode("utf-8"), sha)
        except UpstreamFetchError as e:
            raise UpstreamFetchError("Failed to publish tool", e.details) from e

        logger.info(f"[Publish] {'Updated' if sha else 'Created'} {name}")
        return self.public_url(name)

    async def list_recent(self) -> List[PublishedFile]:
        """
        Published .html files, newest first.

        The store has no timestamps; the listing order is reversed as an
        approximation of recency.
        """
        try:
            entries = await self.store.list()
        except UpstreamFetchError as e:
            raise UpstreamFetchError("Failed to list tools", e.details) from e

        tools = [
            PublishedFile(name=entry.name, url=self.public_url(entry.name), sha=entry.sha)
            for entry in entries
            if entry.type == "file" and entry.name.endswith(HTML_SUFFIX)
        ]
        tools.reverse()
        return tools
