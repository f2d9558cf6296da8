"""
Content Store

Remote file storage behind three calls:

    sha = await store.get(path)            # revision marker or None
    await store.put(path, data, sha)       # create (sha=None) or update
    entries = await store.list()           # files at the branch root

GitHubContentStore talks to the GitHub contents API of one branch
(typically gh-pages). Writes are not arbitrated here: two writers holding
the same sha race, and GitHub rejects the stale one (409/422).
"""

import base64
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol
from urllib.parse import quote

import httpx

from core.config import ServiceConfig
from core.errors import UpstreamFetchError

logger = logging.getLogger(__name__)


@dataclass
class StoreEntry:
    """One item of a store listing"""
    name: str
    path: str
    sha: str
    type: str = "file"


class ContentStore(Protocol):
    async def get(self, path: str) -> Optional[str]:
        ...

    async def put(self, path: str, content: bytes, sha: Optional[str] = None) -> None:
        ...

    async def list(self) -> List[StoreEntry]:
        ...


def create_github_client(config: ServiceConfig) -> httpx.AsyncClient:
    """HTTP client for the GitHub REST API"""
    headers = {
        "Accept": "application/vnd.github+json",
        "X-GitHub-Api-Version": "2022-11-28",
        "User-Agent": "blog-tool-forge",
    }
    if config.github_token:
        headers["Authorization"] = f"Bearer {config.github_token}"

    return httpx.AsyncClient(
        base_url=config.github_api_url,
        timeout=30.0,
        headers=headers,
    )


def _error_details(response: httpx.Response) -> str:
    """Status code plus GitHub's error message when the body has one"""
    try:
        message = response.json().get("message", "")
    except (ValueError, AttributeError):
        message = response.text[:200]
    return f"{response.status_code}: {message}" if message else str(response.status_code)


class GitHubContentStore:
    """
    Files in one branch of a GitHub repository.

    Usage:
        store = GitHubContentStore(create_github_client(config), "owner/site", "gh-pages")
        sha = await store.get("widget.html")
        await store.put("widget.html", b"<div>x</div>", sha)
    """

    def __init__(self, http_client: httpx.AsyncClient, repo: str, branch: str = "gh-pages"):
        self.http_client = http_client
        self.repo = repo
        self.branch = branch

    def _contents_url(self, path: str = "") -> str:
        if not self.repo:
            raise UpstreamFetchError("Hosting repository is not configured", "GITHUB_REPO is not set")
        return f"/repos/{self.repo}/contents/{quote(path.lstrip('/'))}"

    async def get(self, path: str) -> Optional[str]:
        """
        Revision marker (sha) of an existing file.

        Best-effort: a missing file or a failed lookup both return None,
        which makes the next put a create.
        """
        url = self._contents_url(path)
        try:
            response = await self.http_client.get(url, params={"ref": self.branch})
        except httpx.HTTPError as e:
            logger.warning(f"[GitHubStore] Lookup failed for {path}: {e}")
            return None

        if response.status_code == 404:
            return None
        if response.status_code != 200:
            logger.warning(f"[GitHubStore] Lookup failed for {path}: {_error_details(response)}")
            return None

        data = response.json()
        if not isinstance(data, dict):
            # path is a directory
            return None
        return data.get("sha")

    async def put(self, path: str, content: bytes, sha: Optional[str] = None) -> None:
        """Create or update a file; sha is required by GitHub for updates"""
        url = self._contents_url(path)
        body: Dict[str, Any] = {
            "message": f"{'Update' if sha else 'Add'} {path}",
            "content": base64.b64encode(content).decode("ascii"),
            "branch": self.branch,
        }
        if sha:
            body["sha"] = sha

        try:
            response = await self.http_client.put(url, json=body)
        except httpx.HTTPError as e:
            logger.error(f"[GitHubStore] Write failed for {path}: {e}")
            raise UpstreamFetchError("Remote write failed", str(e)) from e

        if response.status_code not in (200, 201):
            details = _error_details(response)
            logger.error(f"[GitHubStore] Write rejected for {path}: {details}")
            raise UpstreamFetchError("Remote write failed", details)

        logger.info(f"[GitHubStore] {'Updated' if sha else 'Created'} {self.repo}@{self.branch}:{path}")

    async def list(self) -> List[StoreEntry]:
        """Entries at the branch root, in the order GitHub returns them"""
        url = self._contents_url()
        try:
            response = await self.http_client.get(url, params={"ref": self.branch})
        except httpx.HTTPError as e:
            logger.error(f"[GitHubStore] Listing failed: {e}")
            raise UpstreamFetchError("Remote listing failed", str(e)) from e

        if response.status_code != 200:
            details = _error_details(response)
            logger.error(f"[GitHubStore] Listing rejected: {details}")
            raise UpstreamFetchError("Remote listing failed", details)

        return [
            StoreEntry(
                name=item.get("name", ""),
                path=item.get("path", ""),
                sha=item.get("sha", ""),
                type=item.get("type", "file"),
            )
            for item in response.json()
        ]
