"""Action definitions: one endpoint of a web service."""

from collections.abc import Iterable
from pathlib import Path
from typing import Any

import structlog
from pydantic import BaseModel, ConfigDict

from api_registry.errors import DuplicateParameterError, MissingHandlerError
from api_registry.handler import invoke
from api_registry.model import conventions
from api_registry.model.draft import Draft
from api_registry.model.examples import ResponseExample
from api_registry.model.params import Parameter, ParameterDraft

logger = structlog.get_logger(__name__)


class Change(BaseModel):
    """One changelog entry of an action."""

    model_config = ConfigDict(frozen=True)

    version: str
    description: str

    def __init__(self, version: str, description: str, **kwargs: Any):
        super().__init__(version=version, description=description, **kwargs)


class Action(BaseModel):
    """Published, immutable description of an endpoint."""

    model_config = ConfigDict(frozen=True)

    key: str
    path: str
    handler: Any
    deprecated_key: str | None = None
    description: str | None = None
    since: str | None = None
    deprecated_since: str | None = None
    post: bool = False
    internal: bool = False
    response_example: ResponseExample | None = None
    changelog: tuple[Change, ...] = ()
    params: tuple[Parameter, ...] = ()

    def param(self, key: str) -> Parameter | None:
        for param in self.params:
            if param.key == key:
                return param
        return None

    def handle(self, request: Any, response: Any) -> Any:
        return invoke(self.handler, request, response)

    def response_example_as_string(self) -> str | None:
        if self.response_example is None:
            return None
        return self.response_example.as_string()

    def response_example_format(self) -> str | None:
        if self.response_example is None:
            return None
        return self.response_example.format

    def __str__(self) -> str:
        return self.path


class ActionDraft(Draft):
    """Chainable builder of an Action, created by ControllerDraft.create_action."""

    def __init__(self, key: str, path: str | None = None):
        self.key = key
        self.path = path or key
        self.deprecated_key: str | None = None
        self.description: str | None = None
        self.since: str | None = None
        self.deprecated_since: str | None = None
        self.post = False
        self.internal = False
        self.handler: Any = None
        self.response_example: ResponseExample | None = None
        self.changelog: list[Change] = []
        self.parameters: dict[str, ParameterDraft] = {}

    def set_deprecated_key(self, key: str | None) -> "ActionDraft":
        self._check_open()
        self.deprecated_key = key
        return self

    def set_description(self, description: str | None, *args: object) -> "ActionDraft":
        self._check_open()
        if description is not None and args:
            description = description % args
        self.description = description
        return self

    def set_since(self, since: str | None) -> "ActionDraft":
        self._check_open()
        self.since = since
        return self

    def set_deprecated_since(self, deprecated_since: str | None) -> "ActionDraft":
        self._check_open()
        self.deprecated_since = deprecated_since
        return self

    def set_post(self, post: bool) -> "ActionDraft":
        """Mark the action as changing state (POST) rather than read-only."""
        self._check_open()
        self.post = post
        return self

    def set_internal(self, internal: bool) -> "ActionDraft":
        self._check_open()
        self.internal = internal
        return self

    def set_handler(self, handler: Any) -> "ActionDraft":
        self._check_open()
        self.handler = handler
        return self

    def set_response_example(self, location: "str | Path | ResponseExample | None") -> "ActionDraft":
        self._check_open()
        self.response_example = None if location is None else ResponseExample.of(location)
        return self

    def set_changelog(self, *changes: Change | None) -> "ActionDraft":
        """Replace the changelog. Entries are expected most recent first."""
        self._check_open()
        self.changelog = [change for change in changes if change is not None]
        return self

    def create_parameter(self, key: str) -> ParameterDraft:
        self._check_open()
        if key in self.parameters:
            raise DuplicateParameterError(key, self.path)
        param = ParameterDraft(key)
        self.parameters[key] = param
        return param

    # Convention helpers

    def add_paging_params(self, default_page_size: int, max_page_size: int | None = None) -> "ActionDraft":
        conventions.add_paging_params(self, default_page_size, max_page_size)
        return self

    def add_page_param(self) -> "ActionDraft":
        conventions.add_page_param(self)
        return self

    def add_page_size(self, default_page_size: int, max_page_size: int) -> "ActionDraft":
        conventions.add_page_size(self, default_page_size, max_page_size)
        return self

    def add_search_query(self, example_value: str, *plural_fields: str) -> "ActionDraft":
        conventions.add_search_query(self, example_value, *plural_fields)
        return self

    def add_fields_param(self, possible_values: Iterable[object]) -> "ActionDraft":
        conventions.create_fields_param(self, possible_values)
        return self

    def create_fields_param(self, possible_values: Iterable[object]) -> ParameterDraft:
        return conventions.create_fields_param(self, possible_values)

    def add_sort_params(
        self, possible_values: Iterable[object], default_value: object, default_ascending: bool
    ) -> "ActionDraft":
        conventions.create_sort_params(self, possible_values, default_value, default_ascending)
        return self

    def create_sort_params(
        self, possible_values: Iterable[object], default_value: object, default_ascending: bool
    ) -> ParameterDraft:
        return conventions.create_sort_params(self, possible_values, default_value, default_ascending)

    def add_selection_mode_param(self) -> "ActionDraft":
        conventions.add_selection_mode_param(self)
        return self

    def _build(self) -> Action:
        self._consume()
        if self.handler is None:
            raise MissingHandlerError(self.path)
        if not (self.description or "").strip():
            logger.warning("action_description_not_set", action=self.path)
        if not (self.since or "").strip():
            logger.warning("action_since_not_set", action=self.path)
        if not self.post and self.response_example is None:
            logger.warning("action_response_example_not_set", action=self.path)

        params = tuple(draft._build(self.path) for draft in self.parameters.values())
        return Action(
            key=self.key,
            path=self.path,
            handler=self.handler,
            deprecated_key=self.deprecated_key,
            description=self.description,
            since=self.since,
            deprecated_since=self.deprecated_since,
            post=self.post,
            internal=self.internal,
            response_example=self.response_example,
            changelog=tuple(self.changelog),
            params=params,
        )

    def __str__(self) -> str:
        return self.path
