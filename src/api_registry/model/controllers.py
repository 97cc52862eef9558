"""Controller definitions: a group of actions sharing a path prefix."""

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from api_registry.errors import DuplicateActionError, InvalidPathError, NoActionsError
from api_registry.model.actions import Action, ActionDraft
from api_registry.model.draft import Draft

if TYPE_CHECKING:
    from api_registry.registry import Registry

PATH_SEPARATOR = "/"


class Controller(BaseModel):
    """Published, immutable web service."""

    model_config = ConfigDict(frozen=True)

    path: str
    description: str | None = None
    since: str | None = None
    actions: tuple[Action, ...]

    def action(self, key: str) -> Action | None:
        for action in self.actions:
            if action.key == key:
                return action
        return None

    @property
    def is_internal(self) -> bool:
        """A web service is internal when all of its actions are internal."""
        return all(action.internal for action in self.actions)

    def __str__(self) -> str:
        return self.path


def validate_path(path: str | None) -> str:
    if path is None or not path.strip():
        raise InvalidPathError("WS controller path must not be empty")
    if path.startswith(PATH_SEPARATOR) or path.endswith(PATH_SEPARATOR):
        raise InvalidPathError(f"WS controller path must not start or end with slash: {path}")
    return path


class ControllerDraft(Draft):
    """Chainable builder of a Controller.

    Usually obtained from Registry.create_controller, in which case done()
    also registers the published controller.
    """

    def __init__(self, path: str, registry: "Registry | None" = None):
        self.path = validate_path(path)
        self.registry = registry
        self.description: str | None = None
        self.since: str | None = None
        self.actions: dict[str, ActionDraft] = {}

    def set_description(self, description: str | None) -> "ControllerDraft":
        self._check_open()
        self.description = description
        return self

    def set_since(self, since: str | None) -> "ControllerDraft":
        self._check_open()
        self.since = since
        return self

    def create_action(self, key: str) -> ActionDraft:
        self._check_open()
        if key in self.actions:
            raise DuplicateActionError(key, self.path)
        action = ActionDraft(key, f"{self.path}{PATH_SEPARATOR}{key}")
        self.actions[key] = action
        return action

    def build(self) -> Controller:
        """Validate and freeze the controller with all its actions and parameters.

        The draft is consumed whether or not validation succeeds.
        """
        self._consume()
        try:
            if not self.actions:
                raise NoActionsError(self.path)
            return Controller(
                path=self.path,
                description=self.description,
                since=self.since,
                actions=tuple(draft._build() for draft in self.actions.values()),
            )
        finally:
            for action in self.actions.values():
                action._discard()
                for param in action.parameters.values():
                    param._discard()

    def done(self) -> Controller:
        controller = self.build()
        if self.registry is not None:
            self.registry.register(controller)
        return controller

    def __str__(self) -> str:
        return self.path
