"""Standard parameter groups shared by many actions.

Every helper declares its parameters through ActionDraft.create_parameter, so
declaring one of the reserved keys twice fails like any other duplicate.
"""

from collections.abc import Iterable
from typing import TYPE_CHECKING

from api_registry.model.params import (
    ASCENDING,
    FIELDS,
    PAGE,
    PAGE_SIZE,
    SELECTED,
    SORT,
    TEXT_QUERY,
    ParameterDraft,
    SelectionMode,
)

if TYPE_CHECKING:
    from api_registry.model.actions import ActionDraft


def add_page_param(action: "ActionDraft") -> ParameterDraft:
    return (
        action.create_parameter(PAGE)
        .set_description("1-based page number")
        .set_example_value("42")
        .set_deprecated_key("pageIndex", "5.2")
        .set_default_value("1")
    )


def add_page_size(action: "ActionDraft", default_page_size: int, max_page_size: int | None = None) -> ParameterDraft:
    description = "Page size. Must be greater than 0."
    if max_page_size is not None:
        description = f"Page size. Must be greater than 0 and less than {max_page_size}"
    return (
        action.create_parameter(PAGE_SIZE)
        .set_description(description)
        .set_example_value("20")
        .set_deprecated_key("pageSize", "5.2")
        .set_default_value(default_page_size)
    )


def add_paging_params(action: "ActionDraft", default_page_size: int, max_page_size: int | None = None) -> None:
    add_page_param(action)
    add_page_size(action, default_page_size, max_page_size)


def add_search_query(action: "ActionDraft", example_value: str, *plural_fields: str) -> ParameterDraft:
    """Add the free-text query parameter, e.g. ``add_search_query(a, "sonar", "keys", "names")``."""
    return (
        action.create_parameter(TEXT_QUERY)
        .set_description(f"Limit search to {' or '.join(plural_fields)} that contain the supplied string.")
        .set_example_value(example_value)
    )


def create_fields_param(action: "ActionDraft", possible_values: Iterable[object]) -> ParameterDraft:
    return (
        action.create_parameter(FIELDS)
        .set_description(
            "Comma-separated list of the fields to be returned in response. "
            "All the fields are returned by default."
        )
        .set_possible_values(possible_values)
    )


def create_sort_params(
    action: "ActionDraft",
    possible_values: Iterable[object],
    default_value: object,
    default_ascending: bool,
) -> ParameterDraft:
    """Add the sort field and direction parameters, returning the sort field."""
    (
        action.create_parameter(ASCENDING)
        .set_description("Ascending sort")
        .set_boolean_possible_values()
        .set_default_value(default_ascending)
    )
    return (
        action.create_parameter(SORT)
        .set_description("Sort field")
        .set_default_value(default_value)
        .set_possible_values(possible_values)
    )


def add_selection_mode_param(action: "ActionDraft") -> ParameterDraft:
    return (
        action.create_parameter(SELECTED)
        .set_description(
            "Depending on the value, show only selected items (selected=selected), "
            "deselected items (selected=deselected), "
            "or all items with their selection status (selected=all)."
        )
        .set_default_value(SelectionMode.SELECTED)
        .set_possible_values(SelectionMode.possible_values())
    )
