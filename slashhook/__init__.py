"""slashhook -- serve chat-platform slash commands over aiohttp."""

from __future__ import annotations

__version__ = "0.1.0"

from .messaging import (
    IN_CHANNEL,
    Attachment,
    IncomingRequest,
    OutgoingResponse,
    ephemeral_response,
    in_channel_response,
)
from .registries import CommandHandler, CommandRegistry, Registration
from .server import Dispatcher, create_app, serve

__all__ = [
    "IN_CHANNEL",
    "Attachment",
    "CommandHandler",
    "CommandRegistry",
    "Dispatcher",
    "IncomingRequest",
    "OutgoingResponse",
    "Registration",
    "__version__",
    "create_app",
    "ephemeral_response",
    "in_channel_response",
    "serve",
]
