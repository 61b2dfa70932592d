"""Async helpers for driving handler coroutines from synchronous entry points."""

import asyncio
import logging
from typing import Any, Coroutine, Dict, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)


def log_loop_exception(loop: asyncio.AbstractEventLoop, context: Dict[str, Any]) -> None:
    """Route unhandled event loop errors through logging instead of stderr."""
    message = context.get("message", "") or "Unhandled event loop error"
    exception = context.get("exception")
    logger.error(f"{message}: {exception}" if exception else message)


def create_event_loop() -> asyncio.AbstractEventLoop:
    """Create an event loop with the logging exception handler attached."""
    loop = asyncio.new_event_loop()
    loop.set_exception_handler(log_loop_exception)
    return loop


def run_coroutine(coro: Coroutine[Any, Any, T]) -> T:
    """
    Run a coroutine on a fresh event loop.

    Used by Flask routes and the CLI, which are synchronous. Pending tasks are
    cancelled and async generators closed before the loop is discarded.
    """
    loop = create_event_loop()
    asyncio.set_event_loop(loop)

    try:
        return loop.run_until_complete(coro)
    finally:
        try:
            pending = asyncio.all_tasks(loop)
            for task in pending:
                task.cancel()

            if pending:
                loop.run_until_complete(
                    asyncio.gather(*pending, return_exceptions=True)
                )

            loop.run_until_complete(loop.shutdown_asyncgens())
        finally:
            asyncio.set_event_loop(None)
            loop.close()
