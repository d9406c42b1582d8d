"""Slash-command routes -- one dispatcher per registered command."""

from __future__ import annotations

import logging

from aiohttp import web

from ...registries.commands import CommandRegistry
from ..dispatcher import Dispatcher

logger = logging.getLogger(__name__)


class SlashCommandRoutes:
    """Bind every registration in a :class:`CommandRegistry` onto a router."""

    def __init__(
        self,
        registry: CommandRegistry,
        dispatch_logger: logging.Logger | None = None,
    ) -> None:
        self._registry = registry
        self._dispatch_logger = dispatch_logger

    def register(self, router: web.UrlDispatcher) -> None:
        for registration in self._registry:
            router.add_route(
                "*", registration.path,
                Dispatcher(registration, self._dispatch_logger).handle,
            )
            logger.debug("Bound slash command %s", registration.path)
