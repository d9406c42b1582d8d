"""aiohttp app factory and serving entry point."""

from __future__ import annotations

import logging
import ssl
from collections.abc import Callable

from aiohttp import web
from aiohttp.abc import AbstractAccessLogger

from .. import __version__
from ..config.settings import Settings
from ..registries.commands import CommandRegistry
from .routes import SlashCommandRoutes

logger = logging.getLogger(__name__)

_QUIET_PATHS = frozenset({"/health"})


class QuietAccessLogger(AbstractAccessLogger):
    """Demotes health checks and rejected tokens to DEBUG."""

    def log(self, request: web.BaseRequest, response: web.StreamResponse, time: float) -> None:
        status = response.status
        if request.path in _QUIET_PATHS or status == 403:
            level = logging.DEBUG
        else:
            level = logging.INFO
        self.logger.log(
            level,
            "%s %s %s %s %.3fs",
            request.remote,
            request.method,
            request.path,
            status,
            time,
        )


def _health_handler(registry: CommandRegistry) -> Callable:
    async def handler(_req: web.Request) -> web.Response:
        return web.json_response(
            {"status": "ok", "version": __version__, "commands": registry.paths}
        )

    return handler


def create_app(
    registry: CommandRegistry,
    *,
    dispatch_logger: logging.Logger | None = None,
) -> web.Application:
    """Build an application serving every command in *registry*.

    The registry is frozen afterwards; later registrations would never be
    routed.
    """
    app = web.Application()
    SlashCommandRoutes(registry, dispatch_logger).register(app.router)
    if "/health" not in registry:
        app.router.add_get("/health", _health_handler(registry))
    registry.freeze()
    logger.info("Serving %d slash command(s): %s", len(registry), ", ".join(registry.paths))
    return app


def build_ssl_context(cert_file: str, key_file: str) -> ssl.SSLContext | None:
    """Return a server TLS context, or ``None`` when neither path is set."""
    if not cert_file and not key_file:
        return None
    if not (cert_file and key_file):
        raise ValueError("TLS needs both a certificate file and a key file")
    context = ssl.create_default_context(ssl.Purpose.CLIENT_AUTH)
    context.load_cert_chain(cert_file, key_file)
    return context


def serve(registry: CommandRegistry, settings: Settings | None = None) -> None:
    """Serve *registry* until interrupted, over TLS when configured."""
    settings = settings or Settings()
    ssl_context = build_ssl_context(settings.tls_cert_file, settings.tls_key_file)
    logger.info(
        "Listening on %s://%s:%d",
        "https" if ssl_context else "http", settings.host, settings.port,
    )
    web.run_app(
        create_app(registry),
        host=settings.host,
        port=settings.port,
        ssl_context=ssl_context,
        access_log_class=QuietAccessLogger,
        print=None,
    )
