"""Server module -- aiohttp application factory and slash-command dispatch."""

from __future__ import annotations

from .app import QuietAccessLogger, build_ssl_context, create_app, serve
from .dispatcher import Dispatcher, encode_response

__all__ = [
    "Dispatcher",
    "QuietAccessLogger",
    "build_ssl_context",
    "create_app",
    "encode_response",
    "serve",
]
