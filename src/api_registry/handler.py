"""Handler and web service protocols."""

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from api_registry.registry import Registry
    from api_registry.request import Request, Response


@runtime_checkable
class RequestHandler(Protocol):
    """Executes an action for an incoming request, writing to the response."""

    def handle(self, request: "Request", response: "Response") -> Any: ...


@runtime_checkable
class WebService(Protocol):
    """Declares one or more controllers in the given registry."""

    def define(self, registry: "Registry") -> Any: ...


HandlerLike = RequestHandler | Callable[["Request", "Response"], Any]


def invoke(handler: HandlerLike, request: "Request", response: "Response") -> Any:
    """Run a handler given either as a RequestHandler or as a plain callable."""
    if isinstance(handler, RequestHandler):
        return handler.handle(request, response)
    return handler(request, response)
