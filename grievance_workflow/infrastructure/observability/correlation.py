"""Request context carried through every log line.

Two values follow a request across awaits: the correlation id (echoed in
X-Correlation-ID) and the principal acting on the request (X-Principal-ID).
The HTTP middleware binds them; ``request_context_processor`` stamps them
onto each structlog event.
"""

from contextvars import ContextVar, Token
from typing import Any, NamedTuple
from uuid import uuid4

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")
_principal: ContextVar[str] = ContextVar("principal", default="")


class RequestContextTokens(NamedTuple):
    correlation_id: Token[str]
    principal: Token[str]


def generate_correlation_id() -> str:
    return uuid4().hex


def get_correlation_id() -> str:
    """Empty string outside a request."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str) -> None:
    _correlation_id.set(correlation_id)


def get_request_principal() -> str:
    return _principal.get()


def bind_request_context(correlation_id: str, principal: str | None) -> RequestContextTokens:
    """Bind both values for the current task; pass the result to reset."""
    return RequestContextTokens(
        correlation_id=_correlation_id.set(correlation_id),
        principal=_principal.set(principal or ""),
    )


def reset_request_context(tokens: RequestContextTokens) -> None:
    _principal.reset(tokens.principal)
    _correlation_id.reset(tokens.correlation_id)


def request_context_processor(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Add correlation_id and principal to an event unless already present."""
    for key, var in (("correlation_id", _correlation_id), ("principal", _principal)):
        value = var.get()
        if value:
            event_dict.setdefault(key, value)
    return event_dict
