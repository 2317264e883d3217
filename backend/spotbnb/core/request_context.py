"""
Per-request log context for SpotBnB.

The ASGI middleware binds a ``RequestLogContext`` for every HTTP request and
the auth dependency records the acting user on it once the session token
resolves. ``RequestLogFilter`` stamps both onto each log record, so a line
such as ``Booking ... created on spot ...`` names the request and the user.

The context object is mutable: sync dependencies and handlers run in worker
threads on a copy of the contextvars, and only a shared object carries the
user id back to code running in a later thread.
"""

from __future__ import annotations

from contextvars import ContextVar, Token
from dataclasses import dataclass
import logging
from typing import Optional

ANONYMOUS = "anonymous"
NO_REQUEST = "no-request"


@dataclass
class RequestLogContext:
    request_id: str
    user_id: Optional[str] = None


_context_var: ContextVar[Optional[RequestLogContext]] = ContextVar("spotbnb_request_context", default=None)


def bind_request_context(request_id: str) -> Token[Optional[RequestLogContext]]:
    return _context_var.set(RequestLogContext(request_id=request_id))


def unbind_request_context(token: Token[Optional[RequestLogContext]]) -> None:
    _context_var.reset(token)


def current_request_id(default: str = NO_REQUEST) -> str:
    context = _context_var.get()
    return context.request_id if context is not None and context.request_id else default


def record_actor(user_id: Optional[str]) -> None:
    """Attach the authenticated user to the current request, if any."""
    context = _context_var.get()
    if context is not None and user_id:
        context.user_id = user_id


class RequestLogFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        context = _context_var.get()
        if not hasattr(record, "request_id"):
            record.request_id = context.request_id if context is not None else NO_REQUEST
        if not hasattr(record, "user_id"):
            record.user_id = (context.user_id if context is not None else None) or ANONYMOUS
        return True


def install_log_filter(logger: Optional[logging.Logger] = None) -> None:
    target = logger or logging.getLogger()
    for handler in target.handlers:
        if not any(isinstance(existing, RequestLogFilter) for existing in handler.filters):
            handler.addFilter(RequestLogFilter())
