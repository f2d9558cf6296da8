"""
Service Configuration
服务配置

ServiceConfig is built once from the environment at process start and
handed to every service. Nothing else in the backend reads os.environ.
"""

import os
from dataclasses import dataclass, field
from typing import List, Mapping, Optional


# Fixed listening port
PORT = 5001

DEFAULT_MODELS = {
    "openai": "gpt-4o",
    "anthropic": "claude-sonnet-4-5-20250929",
}

DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]


def _split_csv(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass
class ServiceConfig:
    """Backend configuration"""
    # LLM
    llm_provider: str = "openai"            # openai | anthropic
    llm_model: str = DEFAULT_MODELS["openai"]
    llm_max_tokens: int = 4096
    openai_api_key: str = ""
    openai_base_url: Optional[str] = None   # OpenAI-compatible proxy
    anthropic_api_key: str = ""

    # Hosting repository (GitHub contents API)
    github_token: str = ""
    github_repo: str = ""                   # owner/name
    github_branch: str = "gh-pages"
    github_api_url: str = "https://api.github.com"
    public_base_url: Optional[str] = None

    # HTTP
    cors_allowed_origins: List[str] = field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))
    fetch_timeout: float = 15.0             # seconds, outbound page fetch only

    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ServiceConfig":
        """Build the config from environment variables"""
        env = os.environ if environ is None else environ

        provider = env.get("LLM_PROVIDER", "openai").strip().lower() or "openai"
        if provider not in DEFAULT_MODELS:
            raise ValueError(f"Unsupported LLM_PROVIDER: {provider}")

        origins = env.get("CORS_ALLOWED_ORIGINS")

        return cls(
            llm_provider=provider,
            llm_model=env.get("LLM_MODEL") or DEFAULT_MODELS[provider],
            llm_max_tokens=int(env.get("LLM_MAX_TOKENS", "4096")),
            openai_api_key=env.get("OPENAI_API_KEY", ""),
            openai_base_url=env.get("OPENAI_BASE_URL") or None,
            anthropic_api_key=env.get("ANTHROPIC_API_KEY", ""),
            github_token=env.get("GITHUB_TOKEN", ""),
            github_repo=env.get("GITHUB_REPO", ""),
            github_branch=env.get("GITHUB_BRANCH", "gh-pages"),
            github_api_url=env.get("GITHUB_API_URL", "https://api.github.com").rstrip("/"),
            public_base_url=env.get("PUBLIC_BASE_URL") or None,
            cors_allowed_origins=_split_csv(origins) if origins else list(DEFAULT_CORS_ORIGINS),
            fetch_timeout=float(env.get("FETCH_TIMEOUT_SECONDS", "15")),
            log_level=env.get("LOG_LEVEL", "INFO").upper(),
        )

    @property
    def published_base_url(self) -> str:
        """
        Public URL prefix of published tools, always ending with "/".

        Defaults to the GitHub Pages address of github_repo.
        """
        if self.public_base_url:
            base = self.public_base_url
        elif "/" in self.github_repo:
            owner, name = self.github_repo.split("/", 1)
            base = f"https://{owner}.github.io/{name}"
        else:
            base = ""
        if base and not base.endswith("/"):
            base += "/"
        return base
