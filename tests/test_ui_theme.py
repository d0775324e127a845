"""Tests for the loading banner listener."""

from ui_theme import LOADING_MESSAGE, loading_banner


class RecordingPlaceholder:
    def __init__(self):
        self.calls = []

    def info(self, text):
        self.calls.append(("info", text))

    def empty(self):
        self.calls.append(("empty",))


class TestLoadingBanner:
    def test_follows_the_loading_flag(self, state):
        placeholder = RecordingPlaceholder()
        state.subscribe(loading_banner(placeholder))

        state.set_is_loading(True)
        state.set_is_loading(False)

        assert placeholder.calls == [("info", LOADING_MESSAGE), ("empty",)]

    def test_ignores_other_slots(self, state):
        placeholder = RecordingPlaceholder()
        state.subscribe(loading_banner(placeholder))

        state.set_featured_result({"title": "Vase"})

        assert placeholder.calls == []
