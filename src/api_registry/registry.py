"""Registry of published web services.

A Registry is created once at startup, populated by running every web service
definition, then closed. After close() it is read-only and lookups can be
shared between request-handling threads.
"""

import inspect
from collections.abc import Callable, Iterator
from typing import Any

import structlog

from api_registry.errors import DuplicateControllerError, RegistryClosedError
from api_registry.handler import WebService
from api_registry.model.controllers import Controller, ControllerDraft

logger = structlog.get_logger(__name__)

Definition = WebService | Callable[["Registry"], Any]


class Registry:
    """Append-only collection of controllers keyed by path."""

    def __init__(self):
        self._controllers: dict[str, Controller] = {}
        self._closed = False

    def create_controller(self, path: str) -> ControllerDraft:
        self._check_writable()
        return ControllerDraft(path, registry=self)

    def register(self, controller: Controller) -> None:
        self._check_writable()
        if controller.path in self._controllers:
            raise DuplicateControllerError(controller.path)
        self._controllers[controller.path] = controller
        logger.debug("web_service_registered", path=controller.path, actions=len(controller.actions))

    def define(self, *services: Definition) -> "Registry":
        """Run web service definitions in order. Classes are instantiated first."""
        for service in services:
            if inspect.isclass(service):
                service = service()
            if isinstance(service, WebService):
                service.define(self)
            else:
                service(self)
        return self

    def close(self) -> None:
        """Stop accepting definitions. There is no way to reopen a registry."""
        self._closed = True
        logger.debug("registry_closed", web_services=len(self._controllers))

    @property
    def closed(self) -> bool:
        return self._closed

    def controller(self, path: str) -> Controller | None:
        return self._controllers.get(path)

    def controllers(self) -> list[Controller]:
        """Snapshot of the registered controllers, sorted by path."""
        return sorted(self._controllers.values(), key=lambda c: c.path)

    def _check_writable(self) -> None:
        if self._closed:
            raise RegistryClosedError("The registry is closed, web services can no longer be defined")

    def __contains__(self, path: object) -> bool:
        return path in self._controllers

    def __iter__(self) -> Iterator[Controller]:
        return iter(self.controllers())

    def __len__(self) -> int:
        return len(self._controllers)
