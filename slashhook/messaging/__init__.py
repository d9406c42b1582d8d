"""Slash-command message models."""

from __future__ import annotations

from .models import (
    IN_CHANNEL,
    Attachment,
    IncomingRequest,
    OutgoingResponse,
    ephemeral_response,
    in_channel_response,
)

__all__ = [
    "IN_CHANNEL",
    "Attachment",
    "IncomingRequest",
    "OutgoingResponse",
    "ephemeral_response",
    "in_channel_response",
]
