"""Test helper running one action definition in isolation.

    tester = ActionTester(ShowAction(db))
    response = tester.new_request(key="foo").execute()
    assert response.status == 200
"""

from collections.abc import Callable
from typing import Any

from api_registry.errors import DefinitionError
from api_registry.model.actions import Action
from api_registry.model.controllers import ControllerDraft
from api_registry.model.params import to_param_string
from api_registry.registry import Registry
from api_registry.request import Request, Response

CONTROLLER_KEY = "test"


class ActionTester:
    """Publishes a single action under the 'test' controller.

    The definition is either an object with ``define(controller)`` (typically
    also the action's handler) or a callable taking the controller draft.
    It must declare exactly one action.
    """

    def __init__(self, definition: Any | Callable[[ControllerDraft], Any]):
        self.registry = Registry()
        controller = self.registry.create_controller(CONTROLLER_KEY)
        if hasattr(definition, "define"):
            definition.define(controller)
        else:
            definition(controller)
        controller.done()
        self.registry.close()
        actions = self.registry.controller(CONTROLLER_KEY).actions
        if len(actions) != 1:
            raise DefinitionError(f"ActionTester expects exactly one action, got {len(actions)}")
        self.action: Action = actions[0]

    def get_def(self) -> Action:
        return self.action

    def new_request(self, method: str | None = None, **params: object) -> "TestRequest":
        return TestRequest(self.action, method=method, **params)


class TestRequest(Request):
    """Request bound to the tested action, executed in-process."""

    __test__ = False

    def __init__(self, action: Action, method: str | None = None, **params: object):
        method = method or ("POST" if action.post else "GET")
        super().__init__(action, {key: to_param_string(value) for key, value in params.items()}, method=method)

    def set_param(self, key: str, value: object) -> "TestRequest":
        self._params[key] = to_param_string(value)
        return self

    def execute(self) -> Response:
        response = Response()
        self.action.handle(self, response)
        return response
