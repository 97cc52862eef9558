from pathlib import Path
from unittest.mock import MagicMock

import pytest
from structlog.testing import capture_logs

from api_registry.errors import DraftConsumedError, DuplicateParameterError, MissingHandlerError
from api_registry.model.actions import ActionDraft, Change
from api_registry.request import Response

FIXTURES = Path(__file__).parent / "fixtures"


def _make_draft(key: str = "list", path: str = "api/rule/list") -> ActionDraft:
    return (
        ActionDraft(key, path)
        .set_description("default description")
        .set_since("5.3")
        .set_response_example(FIXTURES / "response-example.txt")
        .set_handler(MagicMock())
    )


def _warnings(logs: list[dict]) -> list[tuple[str, str]]:
    return [(entry["event"], entry["action"]) for entry in logs if entry["log_level"] == "warning"]


class TestActionDraft:
    def test_build_action(self):
        handler = MagicMock()
        action = (
            ActionDraft("create", "api/metric/create")
            .set_description("Create %s", "metric")
            .set_since("4.1")
            .set_deprecated_since("5.3")
            .set_deprecated_key("new")
            .set_post(True)
            .set_internal(True)
            .set_handler(handler)
            .set_changelog(
                Change("6.4", "Last event"),
                None,
                Change("4.5.6", "Very old event"),
            )
            ._build()
        )
        assert action.key == "create"
        assert action.path == "api/metric/create"
        assert str(action) == "api/metric/create"
        assert action.description == "Create metric"
        assert action.deprecated_key == "new"
        assert action.deprecated_since == "5.3"
        assert action.post is True
        assert action.internal is True
        assert action.handler is handler
        assert [(c.version, c.description) for c in action.changelog] == [
            ("6.4", "Last event"),
            ("4.5.6", "Very old event"),
        ]

    def test_changelog_is_replaced(self):
        action = _make_draft().set_changelog(Change("1.0", "a")).set_changelog()._build()
        assert action.changelog == ()

    def test_parameters_keep_declaration_order(self):
        draft = _make_draft()
        draft.create_parameter("b")
        draft.create_parameter("a")
        action = draft._build()
        assert [p.key for p in action.params] == ["b", "a"]
        assert action.param("a").key == "a"
        assert action.param("unknown") is None

    def test_duplicate_parameter(self):
        draft = _make_draft("create", "api/rule/create")
        draft.create_parameter("key")
        with pytest.raises(DuplicateParameterError) as exc:
            draft.create_parameter("key")
        assert str(exc.value) == "The parameter 'key' is defined multiple times in the action 'api/rule/create'"

    def test_missing_handler(self):
        draft = _make_draft("show", "rule/show").set_handler(None)
        with pytest.raises(MissingHandlerError, match="RequestHandler is not set on action rule/show"):
            draft._build()

    def test_draft_is_consumed(self):
        draft = _make_draft()
        draft._build()
        with pytest.raises(DraftConsumedError):
            draft.create_parameter("late")
        with pytest.raises(DraftConsumedError):
            draft._build()


class TestAdvisoryWarnings:
    def test_complete_action_logs_nothing(self):
        with capture_logs() as logs:
            _make_draft()._build()
        assert _warnings(logs) == []

    def test_get_without_response_example(self):
        with capture_logs() as logs:
            _make_draft().set_response_example(None)._build()
        assert _warnings(logs) == [("action_response_example_not_set", "api/rule/list")]

    def test_post_without_response_example(self):
        with capture_logs() as logs:
            _make_draft().set_post(True).set_response_example(None)._build()
        assert _warnings(logs) == []

    @pytest.mark.parametrize("since", [None, "", "  "])
    def test_since_not_set(self, since):
        with capture_logs() as logs:
            _make_draft().set_since(since)._build()
        assert _warnings(logs) == [("action_since_not_set", "api/rule/list")]

    @pytest.mark.parametrize("description", [None, "", "  "])
    def test_description_not_set(self, description):
        with capture_logs() as logs:
            action = _make_draft().set_description(description)._build()
        assert _warnings(logs) == [("action_description_not_set", "api/rule/list")]
        assert action.key == "list"


class TestAction:
    def test_handle_with_function(self):
        calls = []
        action = _make_draft().set_handler(lambda request, response: calls.append(request))._build()
        action.handle("request", Response())
        assert calls == ["request"]

    def test_handle_with_request_handler(self):
        class Handler:
            def __init__(self):
                self.called = False

            def handle(self, request, response):
                self.called = True
                response.write("done")

        handler = Handler()
        action = _make_draft().set_handler(handler)._build()
        response = Response()
        action.handle(None, response)
        assert handler.called is True
        assert response.body == "done"

    def test_response_example(self):
        action = _make_draft()._build()
        assert action.response_example is not None
        assert action.response_example_format() == "txt"
        assert action.response_example_as_string() == "example of WS response"

    def test_no_response_example(self):
        action = _make_draft().set_post(True).set_response_example(None)._build()
        assert action.response_example_as_string() is None
        assert action.response_example_format() is None
