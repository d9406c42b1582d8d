"""Helpers for calling blocking code from the event loop."""

from __future__ import annotations

import asyncio
import functools
from collections.abc import Callable
from typing import Any, TypeVar

T = TypeVar("T")


async def run_sync(fn: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    """Run *fn* in the default executor so it cannot stall the loop."""
    return await asyncio.to_thread(functools.partial(fn, *args, **kwargs))
