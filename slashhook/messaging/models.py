"""Slash-command request and response models.

The field names mirror the platform's form fields and JSON keys so that
decoding and encoding are plain attribute mapping.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, fields
from typing import Any

IN_CHANNEL = "in_channel"


@dataclass(frozen=True)
class IncomingRequest:
    """A decoded slash-command callback."""

    token: str = ""
    team_id: str = ""
    team_domain: str = ""
    channel_id: str = ""
    channel_name: str = ""
    user_id: str = ""
    user_name: str = ""
    command: str = ""
    text: str = ""
    response_url: str = ""

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    @classmethod
    def from_form(cls, form: Mapping[str, Any]) -> IncomingRequest:
        """Build a request from *form*, defaulting absent fields to ``""``.

        Non-string values (e.g. multipart file parts) are treated as absent.
        """
        values: dict[str, str] = {}
        for name in cls.field_names():
            value = form.get(name, "")
            values[name] = value if isinstance(value, str) else ""
        return cls(**values)


@dataclass
class Attachment:
    """An image attachment with a caption."""

    image_url: str = ""
    text: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"image_url": self.image_url, "text": self.text}


@dataclass
class OutgoingResponse:
    """A reply to a slash command.

    An empty ``response_type`` leaves visibility to the platform default
    (ephemeral). The value is passed through unchecked.
    """

    response_type: str = ""
    text: str = ""
    attachments: list[Attachment] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "response_type": self.response_type,
            "text": self.text,
            "attachments": [a.to_dict() for a in self.attachments or ()],
        }


def in_channel_response(
    text: str, attachments: Iterable[Attachment] | None = None,
) -> OutgoingResponse:
    """Return a response visible to every member of the channel."""
    return OutgoingResponse(
        response_type=IN_CHANNEL, text=text, attachments=list(attachments or ()),
    )


def ephemeral_response(
    text: str, attachments: Iterable[Attachment] | None = None,
) -> OutgoingResponse:
    """Return a response only the invoking user sees."""
    return OutgoingResponse(text=text, attachments=list(attachments or ()))
