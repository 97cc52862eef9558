from unittest.mock import MagicMock

import pytest

from api_registry.errors import DuplicateParameterError
from api_registry.model import conventions
from api_registry.model.actions import ActionDraft
from api_registry.model.params import SelectionMode


def _make_draft(key: str = "search") -> ActionDraft:
    return ActionDraft(key, f"api/rule/{key}").set_post(True).set_handler(MagicMock())


class TestPaging:
    def test_paging_params(self):
        action = _make_draft().add_paging_params(20)._build()
        page = action.param("page")
        page_size = action.param("page_size")
        assert page.default_value == "1"
        assert page.description == "1-based page number"
        assert page.example_value == "42"
        assert page.deprecated_key == "pageIndex"
        assert page.deprecated_key_since == "5.2"
        assert page_size.default_value == "20"
        assert page_size.description == "Page size. Must be greater than 0."
        assert page_size.deprecated_key == "pageSize"

    def test_paging_params_with_max(self):
        action = _make_draft().add_paging_params(100, 500)._build()
        assert action.param("page_size").default_value == "100"
        assert action.param("page_size").description == "Page size. Must be greater than 0 and less than 500"

    def test_page_and_page_size_separately(self):
        action = _make_draft().add_page_param().add_page_size(50, 500)._build()
        assert [p.key for p in action.params] == ["page", "page_size"]
        assert action.param("page_size").default_value == "50"

    def test_reserved_key_cannot_be_redeclared(self):
        draft = _make_draft().add_paging_params(20)
        with pytest.raises(DuplicateParameterError, match="The parameter 'page' is defined multiple times"):
            draft.create_parameter("page")

    def test_helper_after_manual_declaration(self):
        draft = _make_draft()
        draft.create_parameter("page_size")
        with pytest.raises(DuplicateParameterError):
            draft.add_paging_params(20)


class TestOtherHelpers:
    def test_search_query(self):
        action = _make_draft().add_search_query("sonar", "keys", "names")._build()
        query = action.param("q")
        assert query.description == "Limit search to keys or names that contain the supplied string."
        assert query.example_value == "sonar"

    def test_fields(self):
        action = _make_draft().add_fields_param(["name", "severity"])._build()
        assert action.param("fields").possible_values == ("name", "severity")

    def test_fields_without_values(self):
        draft = _make_draft()
        draft.create_fields_param([]).set_example_value("name")
        action = draft._build()
        assert action.param("fields").possible_values is None
        assert action.param("fields").example_value == "name"

    def test_sort(self):
        action = _make_draft().add_sort_params(["name", "updatedAt", "severity"], "updatedAt", False)._build()
        assert action.param("sort").possible_values == ("name", "updatedAt", "severity")
        assert action.param("sort").default_value == "updatedAt"
        assert action.param("asc").default_value == "false"
        assert action.param("asc").possible_values == ("true", "false", "yes", "no")
        assert action.param("sort").deprecated_key is None

    def test_sort_without_default(self):
        draft = _make_draft()
        draft.create_sort_params(["name"], None, True).set_since("6.0")
        action = draft._build()
        assert action.param("sort").default_value is None
        assert action.param("sort").since == "6.0"
        assert action.param("asc").default_value == "true"

    def test_selection_mode(self):
        action = _make_draft().add_selection_mode_param()._build()
        selected = action.param("selected")
        assert selected.default_value == "selected"
        assert selected.possible_values == tuple(SelectionMode.possible_values())

    def test_module_functions_return_parameter_drafts(self):
        draft = _make_draft()
        conventions.add_search_query(draft, "foo", "projects").set_internal(True)
        assert draft._build().param("q").internal is True


class TestIdenticalShapes:
    def test_two_actions_share_parameter_metadata(self):
        first = _make_draft("search").add_paging_params(20).add_sort_params(["name"], "name", True)._build()
        second = _make_draft("list").add_paging_params(20).add_sort_params(["name"], "name", True)._build()
        assert [p.model_dump() for p in first.params] == [p.model_dump() for p in second.params]
