"""Server route handlers."""

from __future__ import annotations

from .command_routes import SlashCommandRoutes

__all__ = ["SlashCommandRoutes"]
