"""Tests for the result list helpers."""

import pytest

import ui_preview
from explorer_state import QueryResultSet, ResultInfo
from helpers import make_results
from ui_preview import MISSING_TITLE, build_preview_entries, page_caption, pagination_controls, select_entry


class TestPaginationControls:
    def test_first_page(self):
        """prev absent -> Previous disabled; next present -> Next enabled."""
        results = QueryResultSet.from_payload(
            {"info": {"prev": None, "next": "page2"}, "records": [{"title": "Vase", "primaryimageurl": "img1"}]}
        )
        controls = pagination_controls(results.info)

        assert controls.prev_disabled is True
        assert controls.next_disabled is False
        assert controls.next_url == "page2"

    def test_last_page(self):
        controls = pagination_controls(ResultInfo(prev="page1"))
        assert controls.prev_disabled is False
        assert controls.next_disabled is True

    def test_no_cursors(self):
        controls = pagination_controls(ResultInfo())
        assert controls.prev_disabled and controls.next_disabled


class TestPreviewEntries:
    def test_one_entry_per_record_in_order(self):
        records = [{"title": "Vase", "primaryimageurl": "img1"}, {"title": "Bowl"}]
        entries = build_preview_entries(records)

        assert [e.title for e in entries] == ["Vase", "Bowl"]
        assert entries[0].image_url == "img1"
        assert entries[1].image_url is None
        assert entries[0].record is records[0]

    def test_missing_title_and_image(self):
        (entry,) = build_preview_entries([{"dated": "1900"}])
        assert entry.title == MISSING_TITLE
        assert entry.image_url is None

    def test_description_is_the_image_alt(self):
        (entry,) = build_preview_entries([{"title": "Vase", "primaryimageurl": "img1", "description": "Blue"}])
        assert entry.image_alt == "Blue"

    def test_empty_records(self):
        assert build_preview_entries([]) == []


class TestPageCaption:
    def test_full_counters(self):
        assert page_caption(ResultInfo(page=2, pages=9, totalrecords=180)) == "Page 2 / 9 · 180 objects"

    def test_no_counters(self):
        assert page_caption(ResultInfo(next="page2")) is None


class TestSelectEntry:
    @pytest.fixture()
    def tracked(self, monkeypatch):
        events = []
        monkeypatch.setattr(ui_preview, "track_event", lambda event, page, props=None: events.append(event))
        return events

    def test_only_the_featured_slot_is_written(self, state, transitions, tracked):
        results = make_results("Vase", "Bowl")
        state.set_search_results(results)
        transitions.clear()

        entry = build_preview_entries(results.records)[1]
        select_entry(entry, state)

        assert transitions == [("featured_result", results.records[1])]
        assert state.search_results is results
        assert state.is_loading is False
        assert tracked == ["record_featured"]
