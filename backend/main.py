"""
Blog Tool Forge Backend
博客互动工具生成服务

Turns a blog post into embeddable interactive tools:

    POST /extract   - readable article + style summary of the page
    POST /ideas     - five tool ideas for the post
    POST /generate  - style-matched widget for one idea
    POST /update    - widget revised from feedback
    POST /publish   - widget published to the hosting branch
    GET  /recent    - recently published widgets
    GET  /health    - health check

Run:
    cd backend
    python main.py              # or: uvicorn main:build_app --factory --port 5001
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

import httpx
import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core.config import PORT, ServiceConfig
from core.errors import ServiceError
from extractor import (
    ExtractorService,
    PlaywrightStyleReader,
    StyleAnalyzer,
    create_fetch_client,
    extractor_router,
)
from extractor.style_analyzer import StyleReader
from generator import CompletionClient, ToolGeneratorService, create_completion_client, generator_router
from publisher import (
    ContentStore,
    GitHubContentStore,
    PublisherService,
    create_github_client,
    publisher_router,
)

logger = logging.getLogger(__name__)


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
    )


def create_app(
    config: Optional[ServiceConfig] = None,
    *,
    completion_client: Optional[CompletionClient] = None,
    content_store: Optional[ContentStore] = None,
    fetch_client: Optional[httpx.AsyncClient] = None,
    style_reader: Optional[StyleReader] = None,
) -> FastAPI:
    """
    Build the FastAPI app.

    Args:
        config: Service configuration (read from the environment when omitted)
        completion_client: LLM backend; defaults to the one named by config
        content_store: Hosting repository; defaults to the GitHub branch in config
        fetch_client: HTTP client for page fetches
        style_reader: Computed-style reader; defaults to headless Chromium
    """
    config = config or ServiceConfig.from_env()

    # Clients created here are closed on shutdown; injected ones belong to the caller
    owned_clients = []

    if fetch_client is None:
        fetch_client = create_fetch_client(config.fetch_timeout)
        owned_clients.append(fetch_client)

    if content_store is None:
        github_client = create_github_client(config)
        owned_clients.append(github_client)
        content_store = GitHubContentStore(github_client, config.github_repo, config.github_branch)

    extractor_service = ExtractorService(
        fetch_client,
        StyleAnalyzer(style_reader or PlaywrightStyleReader(timeout_ms=int(config.fetch_timeout * 1000))),
    )
    generator_service = ToolGeneratorService(completion_client or create_completion_client(config))
    publisher_service = PublisherService(content_store, config.published_base_url)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Blog Tool Forge backend ready (allowed origins: {', '.join(config.cors_allowed_origins)})")
        yield
        for client in owned_clients:
            await client.aclose()

    app = FastAPI(title="Blog Tool Forge", lifespan=lifespan)
    app.state.config = config
    app.state.extractor_service = extractor_service
    app.state.generator_service = generator_service
    app.state.publisher_service = publisher_service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_allowed_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    # ============================================
    # Error Handlers
    # ============================================

    @app.exception_handler(ServiceError)
    async def handle_service_error(request: Request, exc: ServiceError):
        if exc.status_code >= 500:
            logger.error(f"[{request.url.path}] {exc.message}: {exc.details}")
        else:
            logger.warning(f"[{request.url.path}] {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        logger.warning(f"[{request.url.path}] Invalid request body")
        return JSONResponse(
            status_code=400,
            content={"error": "Invalid request body", "details": str(exc.errors())},
        )

    # ============================================
    # Routes
    # ============================================

    @app.get("/health")
    async def health_check():
        return {
            "success": True,
            "status": "healthy",
            "service": "blog-tool-forge",
            "timestamp": datetime.now().isoformat(),
        }

    app.include_router(extractor_router)
    app.include_router(generator_router)
    app.include_router(publisher_router)

    return app


def build_app() -> FastAPI:
    """Load .env, configure logging and build the app from the environment"""
    load_dotenv()
    config = ServiceConfig.from_env()
    setup_logging(config.log_level)
    return create_app(config)


if __name__ == "__main__":
    app = build_app()
    logger.info(f"Content extraction server running on port {PORT}")
    uvicorn.run(app, host="0.0.0.0", port=PORT)
