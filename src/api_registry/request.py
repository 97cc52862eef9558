"""Request parameters resolved against an action definition, and the response sink.

Values arrive already parsed from the transport as strings. Request applies
the declared metadata: deprecated keys, default values and possible values.
"""

from collections.abc import Mapping
from enum import Enum
from typing import TypeVar

from api_registry.errors import InvalidParameterError, MissingParameterError
from api_registry.model.actions import Action
from api_registry.model.params import Parameter, to_param_string

E = TypeVar("E", bound=Enum)

TRUE_VALUES = {"true", "yes"}
FALSE_VALUES = {"false", "no"}


class Request:
    """Incoming request for one action."""

    def __init__(
        self,
        action: Action,
        params: Mapping[str, str] | None = None,
        method: str = "GET",
        media_type: str = "application/json",
    ):
        self.action = action
        self.method = method
        self.media_type = media_type
        self._params = dict(params or {})

    def param(self, key: str) -> str | None:
        definition = self._definition(key)
        value = self._raw(definition)
        if value is None:
            value = definition.default_value
        if value is not None:
            self._check_possible_value(definition, value)
        return value

    def has_param(self, key: str) -> bool:
        return self._raw(self._definition(key)) is not None

    def mandatory_param(self, key: str) -> str:
        value = self.param(key)
        if value is None:
            raise MissingParameterError(key)
        return value

    def param_as_bool(self, key: str) -> bool | None:
        value = self.param(key)
        if value is None:
            return None
        lowered = value.lower()
        if lowered in TRUE_VALUES:
            return True
        if lowered in FALSE_VALUES:
            return False
        raise InvalidParameterError(
            key, f"Value of parameter '{key}' must be one of: [true, false, yes, no] (got '{value}')"
        )

    def mandatory_param_as_bool(self, key: str) -> bool:
        self.mandatory_param(key)
        return self.param_as_bool(key)

    def param_as_int(self, key: str) -> int | None:
        value = self.param(key)
        if value is None:
            return None
        try:
            return int(value)
        except ValueError:
            raise InvalidParameterError(key, f"'{value}' is not an int value for parameter '{key}'") from None

    def mandatory_param_as_int(self, key: str) -> int:
        self.mandatory_param(key)
        return self.param_as_int(key)

    def param_as_strings(self, key: str) -> list[str] | None:
        """Split a comma-separated value, checking each item against the possible values."""
        definition = self._definition(key)
        value = self._raw(definition)
        if value is None:
            value = definition.default_value
        if value is None:
            return None
        items = [item.strip() for item in value.split(",") if item.strip()]
        for item in items:
            self._check_possible_value(definition, item)
        return items

    def mandatory_param_as_strings(self, key: str) -> list[str]:
        values = self.param_as_strings(key)
        if values is None:
            raise MissingParameterError(key)
        return values

    def param_as_enum(self, key: str, enum_cls: type[E]) -> E | None:
        """Match the value against the canonical string of each member, then against member names."""
        definition = self._definition(key)
        value = self.param(key)
        if value is None:
            return None
        for member in enum_cls:
            if to_param_string(member) == value:
                return member
        try:
            return enum_cls[value]
        except KeyError:
            if definition.possible_values is not None:
                allowed = definition.possible_values
            else:
                allowed = [to_param_string(m) for m in enum_cls]
            raise InvalidParameterError(
                key, f"Value of parameter '{key}' ({value}) must be one of: [{', '.join(allowed)}]"
            ) from None

    def _definition(self, key: str) -> Parameter:
        definition = self.action.param(key)
        if definition is None:
            raise InvalidParameterError(key, f"BUG - parameter '{key}' is undefined for action '{self.action.key}'")
        return definition

    def _raw(self, definition: Parameter) -> str | None:
        value = self._params.get(definition.key)
        if value is None and definition.deprecated_key is not None:
            value = self._params.get(definition.deprecated_key)
        return value

    def _check_possible_value(self, definition: Parameter, value: str) -> None:
        if definition.possible_values is not None and value not in definition.possible_values:
            raise InvalidParameterError(
                definition.key,
                f"Value of parameter '{definition.key}' ({value}) must be one of: "
                f"[{', '.join(definition.possible_values)}]",
            )


class Response:
    """Buffered response sink written by handlers."""

    def __init__(self):
        self.status = 200
        self.headers: dict[str, str] = {}
        self._chunks: list[str] = []

    def set_header(self, name: str, value: str) -> "Response":
        self.headers[name] = value
        return self

    def set_status(self, status: int) -> "Response":
        self.status = status
        return self

    def write(self, text: str) -> "Response":
        self._chunks.append(text)
        return self

    def no_content(self) -> "Response":
        self.status = 204
        self._chunks.clear()
        return self

    @property
    def body(self) -> str:
        return "".join(self._chunks)
