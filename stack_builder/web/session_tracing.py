"""Per-session trace scope for the web surface.

Each wizard session owns one long-lived ``session.web`` span. Requests run
inside :func:`session_scope`, which activates that span and binds the session
id for logging, so every handler span and log line of a session shares one
trace. A reset ends the span; the next request of the same session opens a
fresh one.
"""

import logging
import time
from contextlib import contextmanager
from typing import Dict, Iterator, Tuple

from opentelemetry import trace
from opentelemetry.trace import Span

from stack_builder.shared.logging import bind_session_id
from stack_builder.shared.tracing import get_tracer

logger = logging.getLogger(__name__)

# session id -> (span, monotonic start)
_SESSION_SPANS: Dict[str, Tuple[Span, float]] = {}


def get_or_create_session_span(session_id: str) -> Span:
    """Return the open span for a session, starting one on first use."""
    if session_id in _SESSION_SPANS:
        return _SESSION_SPANS[session_id][0]

    span = get_tracer(instrumenting_module_name="stack_builder.session").start_span(
        name="session.web",
        attributes={"session.id": session_id, "session.type": "web"},
    )
    _SESSION_SPANS[session_id] = (span, time.monotonic())
    return span


@contextmanager
def session_scope(session_id: str) -> Iterator[Span]:
    """Run the block inside the session's span with its id bound for logging."""
    span = get_or_create_session_span(session_id)
    with trace.use_span(span, end_on_exit=False), bind_session_id(session_id):
        yield span


def end_session_span(session_id: str, reason: str = "reset") -> None:
    """End and forget the session's span; unknown sessions are ignored."""
    entry = _SESSION_SPANS.pop(session_id, None)
    if entry is None:
        return

    span, started = entry
    duration = time.monotonic() - started
    span.set_attribute("session.duration_s", round(duration, 3))
    span.add_event("session.end", {"reason": reason})
    span.end()
    logger.debug(f"Session span ended for {session_id} ({reason}) after {duration:.1f}s")
