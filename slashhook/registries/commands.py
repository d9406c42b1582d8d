"""Command registry -- binds slash-command routes to tokens and handlers."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Iterator
from dataclasses import dataclass
from typing import Union

from ..messaging.models import IncomingRequest, OutgoingResponse

logger = logging.getLogger(__name__)

CommandHandler = Callable[
    [IncomingRequest], Union[OutgoingResponse, Awaitable[OutgoingResponse]]
]


@dataclass(frozen=True)
class Registration:
    path: str
    token: str
    handler: CommandHandler


class CommandRegistry:
    """Route path -> :class:`Registration` table.

    Populated at startup and read-only once :meth:`freeze` has been called
    by the app factory. Re-registering a path replaces the earlier binding.
    """

    def __init__(self) -> None:
        self._commands: dict[str, Registration] = {}
        self._frozen = False

    def register(self, path: str, token: str, handler: CommandHandler) -> None:
        if self._frozen:
            raise RuntimeError(
                f"Cannot register {path!r}: registry is frozen (app already built)"
            )
        if not isinstance(path, str) or not path:
            raise ValueError("Command path must be a non-empty string")
        if not path.startswith("/"):
            raise ValueError(f"Command path must start with '/': {path!r}")
        if not callable(handler):
            raise TypeError(f"Handler for {path!r} is not callable: {handler!r}")
        if not token:
            logger.warning("Command %s registered without a token -- requests are unauthenticated", path)
        if path in self._commands:
            logger.debug("Replacing existing registration for %s", path)
        self._commands[path] = Registration(path=path, token=token, handler=handler)

    def command(
        self, path: str, token: str,
    ) -> Callable[[CommandHandler], CommandHandler]:
        """Decorator form of :meth:`register`."""

        def decorator(fn: CommandHandler) -> CommandHandler:
            self.register(path, token, fn)
            return fn

        return decorator

    def get(self, path: str) -> Registration | None:
        return self._commands.get(path)

    @property
    def paths(self) -> list[str]:
        return list(self._commands)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        self._frozen = True

    def __contains__(self, path: object) -> bool:
        return path in self._commands

    def __iter__(self) -> Iterator[Registration]:
        return iter(list(self._commands.values()))

    def __len__(self) -> int:
        return len(self._commands)
