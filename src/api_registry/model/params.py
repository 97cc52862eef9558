"""Request parameter definitions.

ParameterDraft is the mutable builder handed out by ActionDraft.create_parameter;
Parameter is the immutable value published with the action.
"""

from collections.abc import Iterable
from enum import Enum

from pydantic import BaseModel, ConfigDict

from api_registry.errors import ParameterConflictError
from api_registry.model.draft import Draft

# Keys reserved by the convention helpers
TEXT_QUERY = "q"
PAGE = "page"
PAGE_SIZE = "page_size"
FIELDS = "fields"
SORT = "sort"
ASCENDING = "asc"
FACETS = "facets"
SELECTED = "selected"

BOOLEAN_VALUES = ("true", "false", "yes", "no")


class SelectionMode(str, Enum):
    """Tri-state filter on the selection status of listed items."""

    SELECTED = "selected"
    DESELECTED = "deselected"
    ALL = "all"

    @classmethod
    def from_param(cls, value: str) -> "SelectionMode":
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Unknown selection mode: {value}") from None

    @classmethod
    def possible_values(cls) -> list[str]:
        return [mode.value for mode in cls]


def to_param_string(value: object) -> str | None:
    """Convert a domain value to the string stored in parameter metadata.

    None stays None, booleans become "true"/"false", enum members are
    represented by their value and anything else by str().
    """
    if value is None:
        return None
    if isinstance(value, Enum):
        return to_param_string(value.value)
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class Parameter(BaseModel):
    """Published description of one request parameter."""

    model_config = ConfigDict(frozen=True)

    key: str
    description: str | None = None
    example_value: str | None = None
    default_value: str | None = None
    required: bool = False
    internal: bool = False
    possible_values: tuple[str, ...] | None = None
    since: str | None = None
    deprecated_since: str | None = None
    deprecated_key: str | None = None
    deprecated_key_since: str | None = None

    def __str__(self) -> str:
        return self.key


class ParameterDraft(Draft):
    """Chainable builder of a Parameter."""

    def __init__(self, key: str):
        self.key = key
        self.description: str | None = None
        self.example_value: str | None = None
        self.default_value: str | None = None
        self.required = False
        self.internal = False
        self.possible_values: tuple[str, ...] | None = None
        self.since: str | None = None
        self.deprecated_since: str | None = None
        self.deprecated_key: str | None = None
        self.deprecated_key_since: str | None = None

    def set_description(self, description: str | None, *args: object) -> "ParameterDraft":
        self._check_open()
        if description is not None and args:
            description = description % args
        self.description = description
        return self

    def set_since(self, since: str | None) -> "ParameterDraft":
        self._check_open()
        self.since = since
        return self

    def set_deprecated_since(self, deprecated_since: str | None) -> "ParameterDraft":
        self._check_open()
        self.deprecated_since = deprecated_since
        return self

    def set_deprecated_key(self, key: str | None, since: str | None = None) -> "ParameterDraft":
        """Declare the former name of the parameter and the version it was renamed in."""
        self._check_open()
        self.deprecated_key = key
        self.deprecated_key_since = since
        return self

    def set_required(self, required: bool) -> "ParameterDraft":
        self._check_open()
        self.required = required
        return self

    def set_internal(self, internal: bool) -> "ParameterDraft":
        """Internal parameters are hidden from the public documentation."""
        self._check_open()
        self.internal = internal
        return self

    def set_example_value(self, value: object) -> "ParameterDraft":
        self._check_open()
        self.example_value = to_param_string(value)
        return self

    def set_default_value(self, value: object) -> "ParameterDraft":
        self._check_open()
        self.default_value = to_param_string(value)
        return self

    def set_possible_values(self, *values: object) -> "ParameterDraft":
        """Restrict the parameter to an exhaustive list of values.

        Accepts either the values themselves or a single iterable of values.
        None or an empty collection removes the restriction.
        """
        self._check_open()
        if len(values) == 1 and (values[0] is None or _is_collection(values[0])):
            values = tuple(values[0] or ())
        strings = [to_param_string(v) for v in values if v is not None]
        self.possible_values = tuple(dict.fromkeys(strings)) if strings else None
        return self

    def set_boolean_possible_values(self) -> "ParameterDraft":
        return self.set_possible_values(*BOOLEAN_VALUES)

    def _build(self, action_path: str) -> Parameter:
        self._consume()
        if self.required and self.default_value is not None:
            raise ParameterConflictError(action_path, self.key)
        return Parameter(
            key=self.key,
            description=self.description,
            example_value=self.example_value,
            default_value=self.default_value,
            required=self.required,
            internal=self.internal,
            possible_values=self.possible_values,
            since=self.since,
            deprecated_since=self.deprecated_since,
            deprecated_key=self.deprecated_key,
            deprecated_key_since=self.deprecated_key_since,
        )

    def __str__(self) -> str:
        return self.key


def _is_collection(value: object) -> bool:
    return isinstance(value, Iterable) and not isinstance(value, (str, bytes))
