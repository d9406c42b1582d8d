"""Shared utilities."""

from .async_helpers import run_sync
from .env_file import EnvFile

__all__ = [
    "EnvFile",
    "run_sync",
]
