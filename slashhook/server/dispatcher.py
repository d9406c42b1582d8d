"""Per-request slash-command pipeline.

decode form -> check token -> log -> invoke handler -> encode JSON -> reply

Every failure is resolved into an HTTP response for the single request;
nothing escapes into the server.
"""

from __future__ import annotations

import hmac
import inspect
import json
import logging
from collections.abc import Mapping
from typing import Any
from urllib.parse import parse_qsl

from aiohttp import web

from ..messaging.models import IncomingRequest, OutgoingResponse
from ..registries.commands import Registration
from ..util.async_helpers import run_sync
from .responses import forbidden, internal_error


def encode_response(response: Any) -> bytes:
    """Serialise *response* as 2-space-indented UTF-8 JSON.

    Raises ``TypeError`` / ``ValueError`` when the value cannot be encoded.
    """
    if not isinstance(response, OutgoingResponse):
        raise TypeError(
            f"Handler returned {type(response).__name__}, expected OutgoingResponse"
        )
    try:
        payload = response.to_dict()
    except AttributeError as exc:
        raise TypeError(f"Invalid attachment in response: {exc}") from exc
    return json.dumps(payload, indent=2, ensure_ascii=False).encode("utf-8")


def tokens_match(received: str, expected: str) -> bool:
    return hmac.compare_digest(received.encode("utf-8"), expected.encode("utf-8"))


class Dispatcher:
    """aiohttp handler serving one :class:`Registration`."""

    def __init__(
        self, registration: Registration, logger: logging.Logger | None = None,
    ) -> None:
        self._registration = registration
        self._logger = logger or logging.getLogger(__name__)

    @property
    def registration(self) -> Registration:
        return self._registration

    async def handle(self, request: web.Request) -> web.StreamResponse:
        route = self._registration.path
        slash_req = await self.decode(request)

        if not tokens_match(slash_req.token, self._registration.token):
            self._logger.warning("Rejected %s: invalid token", route)
            return forbidden()

        self._logger.info(
            "Handling %s %s (channel=%s, user=%s)",
            route, slash_req.text, slash_req.channel_name, slash_req.user_name,
        )

        try:
            result = await self.invoke(slash_req)
        except Exception as exc:
            self._logger.exception("Handler for %s failed", route)
            return internal_error(str(exc))

        try:
            body = encode_response(result)
        except (TypeError, ValueError) as exc:
            self._logger.error("Could not encode response for %s: %s", route, exc)
            return internal_error(str(exc))

        return await self.reply(request, body)

    async def decode(self, request: web.Request) -> IncomingRequest:
        """Read form fields from the body, falling back to the query string."""
        try:
            body: Mapping[str, Any] = await request.post()
        except (ValueError, LookupError, web.HTTPUnsupportedMediaType) as exc:
            self._logger.debug("Re-reading malformed form body on %s: %s", request.path, exc)
            body = await self._lenient_form(request)
        return IncomingRequest.from_form({**request.query, **body})

    async def _lenient_form(self, request: web.Request) -> dict[str, str]:
        """Parse a urlencoded body as UTF-8, replacing undecodable bytes.

        Other content types read as empty.
        """
        if request.content_type != "application/x-www-form-urlencoded":
            return {}
        raw = await request.read()
        form: dict[str, str] = {}
        for key, value in parse_qsl(
            raw.rstrip().decode("utf-8", errors="replace"),
            keep_blank_values=True,
            errors="replace",
        ):
            form.setdefault(key, value)
        return form

    async def invoke(self, slash_req: IncomingRequest) -> Any:
        handler = self._registration.handler
        if inspect.iscoroutinefunction(handler) or inspect.iscoroutinefunction(
            getattr(handler, "__call__", None)
        ):
            result = await handler(slash_req)
        else:
            # Blocking handlers run off-loop so they only stall their own request.
            result = await run_sync(handler, slash_req)
        if inspect.isawaitable(result):
            result = await result
        return result

    async def reply(self, request: web.Request, body: bytes) -> web.StreamResponse:
        resp = web.Response(body=body, content_type="application/json", charset="utf-8")
        try:
            await resp.prepare(request)
            await resp.write_eof()
        except ConnectionError as exc:
            # aiohttp marks the response prepared before writing headers, so
            # a failing prepare() normally lands in the dropped branch too.
            if resp.prepared:
                self._logger.warning(
                    "Reply for %s dropped after headers were sent: %s",
                    self._registration.path, exc,
                )
                return resp
            return internal_error(str(exc))
        return resp
