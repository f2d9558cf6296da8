"""
Core Module
核心模块

Shared service plumbing:
- ServiceConfig: configuration built once at process start
- Error taxonomy mapped to HTTP responses
"""

from .config import ServiceConfig, PORT
from .errors import (
    ServiceError,
    ValidationError,
    UpstreamFetchError,
    ExtractionError,
    ModelError,
)

__all__ = [
    "ServiceConfig",
    "PORT",
    "ServiceError",
    "ValidationError",
    "UpstreamFetchError",
    "ExtractionError",
    "ModelError",
]
