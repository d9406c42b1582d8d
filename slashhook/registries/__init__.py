"""Command registries."""

from __future__ import annotations

from .commands import CommandHandler, CommandRegistry, Registration

__all__ = [
    "CommandHandler",
    "CommandRegistry",
    "Registration",
]
