"""Exceptions raised while defining, publishing and querying web services.

Definition errors are programming errors in a defining module: they are raised
as soon as they are detected and stop the offending controller from being
registered. Request errors are raised while resolving request parameters.
"""


class RegistryError(Exception):
    """Base class for every error raised by api_registry."""


class DefinitionError(RegistryError):
    """A web service definition is structurally invalid."""


class InvalidPathError(DefinitionError, ValueError):
    """A controller path is blank or starts/ends with a slash."""


class DuplicateControllerError(DefinitionError):
    def __init__(self, path: str):
        super().__init__(f"The web service '{path}' is defined multiple times")
        self.path = path


class DuplicateActionError(DefinitionError):
    def __init__(self, key: str, controller_path: str):
        super().__init__(
            f"The action '{key}' is defined multiple times in the web service '{controller_path}'"
        )
        self.key = key
        self.controller_path = controller_path


class DuplicateParameterError(DefinitionError):
    def __init__(self, key: str, action: str):
        super().__init__(f"The parameter '{key}' is defined multiple times in the action '{action}'")
        self.key = key
        self.action = action


class MissingHandlerError(DefinitionError):
    def __init__(self, action_path: str):
        super().__init__(f"RequestHandler is not set on action {action_path}")
        self.action_path = action_path


class ParameterConflictError(DefinitionError, ValueError):
    """A parameter is both required and carries a default value."""

    def __init__(self, action_path: str, key: str):
        super().__init__(
            f"Default value must not be set on parameter '{action_path}?{key}' "
            "as it's marked as required"
        )
        self.action_path = action_path
        self.key = key


class NoActionsError(DefinitionError):
    def __init__(self, controller_path: str):
        super().__init__(
            f"At least one action must be declared in the web service '{controller_path}'"
        )
        self.controller_path = controller_path


class DraftConsumedError(DefinitionError):
    """A draft was used again after it has been finalized."""


class RegistryClosedError(RegistryError):
    """The registry no longer accepts new web services."""


class ResponseExampleError(RegistryError):
    """A response example locator could not be read."""


class BadRequestError(RegistryError):
    """Request parameters do not match the action definition."""


class MissingParameterError(BadRequestError):
    def __init__(self, key: str):
        super().__init__(f"The '{key}' parameter is missing")
        self.key = key


class InvalidParameterError(BadRequestError):
    def __init__(self, key: str, message: str):
        super().__init__(message)
        self.key = key
