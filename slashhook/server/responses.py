"""Plain-text error replies shared by the server handlers."""

from __future__ import annotations

from aiohttp import web


def text_error(message: str, status: int) -> web.Response:
    """Return a ``text/plain`` error reply carrying *message* verbatim."""
    return web.Response(text=message, status=status)


def forbidden(message: str = "Invalid token") -> web.Response:
    return text_error(message, 403)


def internal_error(message: str) -> web.Response:
    return text_error(message, 500)
