"""
Backend 测试配置文件

pytest fixtures（测试夹具）与替身实现。
No test touches the network: every outbound seam has a fake here.

- FakeCompletionClient: canned model replies, records prompts
- InMemoryContentStore: hosting branch held in a dict, GitHub-like sha checks
- FakeStyleReader: canned computed styles instead of headless Chromium
- make_fetch_client: httpx client backed by httpx.MockTransport
"""

import asyncio
import hashlib
import sys
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import httpx
import pytest
from fastapi.testclient import TestClient

# 添加 backend 目录到 Python 路径
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

from core.config import ServiceConfig
from core.errors import UpstreamFetchError
from main import create_app
from publisher.content_store import StoreEntry


# ============================================
# Sample Pages
# ============================================

ARTICLE_URL = "https://blog.example.com/posts/home-budget"
EMPTY_URL = "https://blog.example.com/posts/empty"
MISSING_URL = "https://blog.example.com/posts/missing"

ARTICLE_HTML = """<!DOCTYPE html>
<html>
<head>
  <title>How to Budget for Your First Home | Money Notes</title>
  <link rel="stylesheet" href="/assets/site.css">
</head>
<body>
  <nav><a href="/">Home</a> <a href="/about">About</a></nav>
  <article class="post-content">
    <h1>How to Budget for Your First Home</h1>
    <p>Buying a first home is the largest purchase most people ever make, and the monthly
    payment is only one part of the cost. Property taxes, insurance, maintenance, and closing
    costs all add up, so a realistic budget starts with the full picture.</p>
    <p>A common rule of thumb is to keep total housing costs below twenty-eight percent of gross
    monthly income. If you earn six thousand dollars a month, that means spending no more than
    about one thousand six hundred and eighty dollars on housing, including taxes and insurance.</p>
    <p>Your down payment changes everything. Putting twenty percent down avoids private mortgage
    insurance, lowers the loan amount, and reduces the interest you pay over thirty years, while
    a smaller down payment gets you into a home sooner but costs more every month.</p>
    <p>Finally, keep an emergency fund of three to six months of expenses after closing. Homes
    need repairs, and a furnace or roof rarely fails at a convenient time.</p>
  </article>
  <footer>Copyright Money Notes</footer>
</body>
</html>"""

EMPTY_HTML = """<html><head><title>Nothing Here</title></head><body></body></html>"""

STYLE_SAMPLES = {
    "container": {
        "background-color": "rgb(255, 255, 255)",
        "padding": "24px 32px",
        "max-width": "720px",
    },
    "paragraph": {
        "font-family": "Georgia, serif",
        "font-size": "18px",
        "line-height": "28px",
        "font-weight": "400",
        "color": "rgb(34, 34, 34)",
        "margin-bottom": "20px",
    },
    "heading": {
        "font-family": "\"Inter\", sans-serif",
        "font-weight": "700",
        "color": "rgb(17, 24, 39)",
    },
    "button": None,
    "input": None,
    "link": {
        "color": "rgb(37, 99, 235)",
        "text-decoration-line": "underline",
    },
}


def page_handler(request: httpx.Request) -> httpx.Response:
    """MockTransport handler serving the sample pages"""
    url = str(request.url)
    if url == ARTICLE_URL:
        return httpx.Response(200, text=ARTICLE_HTML, headers={"content-type": "text/html"})
    if url == EMPTY_URL:
        return httpx.Response(200, text=EMPTY_HTML, headers={"content-type": "text/html"})
    return httpx.Response(404, text="Not Found")


def make_fetch_client(handler=page_handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler), follow_redirects=True)


# ============================================
# Fakes
# ============================================

class FakeCompletionClient:
    """Returns queued replies in order and records every prompt"""

    def __init__(self, replies: Optional[List[str]] = None, error: Optional[Exception] = None):
        self.replies = list(replies or [])
        self.error = error
        self.prompts: List[str] = []

    async def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.replies.pop(0) if self.replies else ""


class InMemoryContentStore:
    """
    Hosting branch held in memory.

    Mirrors GitHub's rule: writing an existing path needs its current sha.
    get() reads the sha, then yields once so concurrent publishes interleave.
    """

    def __init__(self):
        self.files: Dict[str, Tuple[bytes, str]] = {}
        self.puts: List[Tuple[str, Optional[str]]] = []
        self.list_error: Optional[Exception] = None

    def add(self, path: str, content: bytes = b"") -> str:
        sha = hashlib.sha1(path.encode() + content).hexdigest()
        self.files[path] = (content, sha)
        return sha

    async def get(self, path: str) -> Optional[str]:
        entry = self.files.get(path)
        await asyncio.sleep(0)
        return entry[1] if entry else None

    async def put(self, path: str, content: bytes, sha: Optional[str] = None) -> None:
        self.puts.append((path, sha))
        current = self.files.get(path)
        if current is not None and current[1] != sha:
            raise UpstreamFetchError("Remote write failed", f"409: {path} does not match {sha}")
        self.add(path, content)

    async def list(self) -> List[StoreEntry]:
        if self.list_error is not None:
            raise self.list_error
        return [StoreEntry(name=path, path=path, sha=sha) for path, (_, sha) in self.files.items()]


class FakeStyleReader:
    def __init__(self, samples=None, error: Optional[Exception] = None):
        self.samples = samples if samples is not None else STYLE_SAMPLES
        self.error = error
        self.calls: List[str] = []

    async def read(self, html: str, url: str):
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        return self.samples


# ============================================
# Fixtures
# ============================================

@pytest.fixture
def config():
    return ServiceConfig(
        github_repo="octo/tools",
        github_branch="gh-pages",
        cors_allowed_origins=["http://localhost:3000"],
    )


@pytest.fixture
def completion_client():
    return FakeCompletionClient()


@pytest.fixture
def content_store():
    return InMemoryContentStore()


@pytest.fixture
def style_reader():
    return FakeStyleReader()


@pytest.fixture
def client(config, completion_client, content_store, style_reader):
    """
    TestClient wired to fakes.

    使用方式：
    ```python
    def test_ideas(client, completion_client):
        completion_client.replies = ["1. Quiz"]
        response = client.post("/ideas", json={"content": "..."})
    ```
    """
    app = create_app(
        config,
        completion_client=completion_client,
        content_store=content_store,
        fetch_client=make_fetch_client(),
        style_reader=style_reader,
    )
    with TestClient(app) as test_client:
        yield test_client


def assert_error_response(response, status_code: int, error_contains: Optional[str] = None):
    """
    断言错误响应的状态码与 {error, details} 结构。
    """
    assert response.status_code == status_code, response.text
    body = response.json()
    assert "error" in body
    if status_code >= 500:
        assert "details" in body
    if error_contains:
        assert error_contains.lower() in body["error"].lower(), \
            f"Error should contain '{error_contains}', got: {body['error']}"

