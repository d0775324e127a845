"""Tests for the result-set model and the shared state container."""

import pytest

from explorer_state import ExplorerState, QueryResultSet, ResultInfo
from helpers import make_results


class TestQueryResultSetParsing:
    def test_full_payload(self):
        payload = {
            "info": {"prev": None, "next": "https://api/object?page=2", "page": 1, "pages": 9, "totalrecords": 90},
            "records": [{"title": "Vase"}],
        }
        results = QueryResultSet.from_payload(payload)

        assert results.info == ResultInfo(next="https://api/object?page=2", page=1, pages=9, totalrecords=90)
        assert results.records == [{"title": "Vase"}]

    def test_blank_cursors_are_absent(self):
        results = QueryResultSet.from_payload({"info": {"prev": "", "next": "  "}, "records": []})
        assert results.info.prev is None
        assert results.info.next is None

    def test_missing_parts_default_to_empty(self):
        assert QueryResultSet.from_payload({}) == QueryResultSet.empty()

    @pytest.mark.parametrize(
        "payload",
        [
            None,
            [],
            {"records": "nope"},
            {"records": ["not a record"]},
            {"info": "nope", "records": []},
        ],
    )
    def test_malformed_payload(self, payload):
        with pytest.raises(ValueError):
            QueryResultSet.from_payload(payload)


class TestExplorerState:
    def test_search_results_must_be_initialized(self, state):
        assert not state.has_search_results()
        with pytest.raises(LookupError):
            state.search_results

    def test_slots_live_in_the_session(self, state, session):
        results = make_results("Vase")
        state.set_search_results(results)
        state.set_is_loading(True)

        assert session["explorer.search_results"] is results
        assert session["explorer.is_loading"] is True
        assert state.search_results is results

    def test_defaults(self, state):
        assert state.is_loading is False
        assert state.featured_result is None

    def test_listeners_see_every_write(self, state, transitions):
        record = {"title": "Bowl"}
        state.set_featured_result(record)
        state.set_is_loading(True)

        assert transitions == [("featured_result", record), ("is_loading", True)]

    def test_unsubscribe(self, state):
        seen = []
        unsubscribe = state.subscribe(lambda slot, value: seen.append(slot))
        unsubscribe()
        state.set_is_loading(True)
        assert seen == []

    def test_snapshot(self, state):
        results = make_results("Vase")
        state.set_search_results(results)
        state.set_featured_result(results.records[0])

        snap = state.snapshot()
        assert snap.search_results is results
        assert snap.featured_result == {"title": "Vase"}
        assert snap.is_loading is False

    def test_state_survives_a_new_container(self, session):
        """Streamlit builds a new ExplorerState on each rerun over the same session."""
        ExplorerState(session).set_featured_result({"title": "Bowl"})
        assert ExplorerState(session).featured_result == {"title": "Bowl"}


class TestSelectionPolicy:
    def test_selection_kept_by_default(self, state):
        record = {"title": "Bowl"}
        state.set_featured_result(record)

        state.set_search_results(make_results("Vase"))

        assert state.featured_result is record

    def test_selection_cleared_when_configured(self, session):
        state = ExplorerState(session, clear_feature_on_new_results=True)
        state.set_featured_result({"title": "Bowl"})
        seen = []
        state.subscribe(lambda slot, value: seen.append((slot, value)))

        results = make_results("Vase")
        state.set_search_results(results)

        assert state.featured_result is None
        assert seen == [("search_results", results), ("featured_result", None)]
