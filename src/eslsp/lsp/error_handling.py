"""Error containment for LSP feature handlers.

A failing handler must never take the server down: the exception is
logged with its traceback and the handler answers with a default value.
"""

from __future__ import annotations

import asyncio
import functools
import logging
from collections.abc import Awaitable, Callable
from typing import ParamSpec, TypeVar

P = ParamSpec("P")
R = TypeVar("R")

__all__ = [
    "wrap_async_handler",
]


def wrap_async_handler(
    *,
    logger: logging.Logger,
    feature_name: str,
    default_factory: Callable[[], R],
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """
    Guard a coroutine LSP handler.

    ``asyncio.CancelledError`` is re-raised so request cancellation keeps
    working.

    Args:
        logger: Logger receiving the traceback.
        feature_name: LSP method name, used in the log message.
        default_factory: Produces the value returned after a failure.
    """

    def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            try:
                return await func(*args, **kwargs)
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.exception("Error in %s handler", feature_name)
                return default_factory()

        return wrapper

    return decorator
