"""
ui_preview.py — result list with pagination.

Renders the current page of `state.search_results`:

- "Previous" / "Next" buttons, each disabled when its cursor is absent;
  an enabled button re-runs the query on that page URL.
- One card per record, in order: image (when present) and title (or the
  MISSING INFO placeholder). Clicking the title features that record in the
  detail view without fetching anything.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional

import streamlit as st

from analytics import track_event
from explorer_state import ExplorerState, Record, ResultInfo
from query_runner import ExplorerClient, PageQuery, fire_query

MISSING_TITLE = "MISSING INFO"

PREV_KEY = "preview-previous"
NEXT_KEY = "preview-next"


@dataclass(frozen=True)
class PaginationControls:
    prev_url: Optional[str]
    next_url: Optional[str]

    @property
    def prev_disabled(self) -> bool:
        return not self.prev_url

    @property
    def next_disabled(self) -> bool:
        return not self.next_url


@dataclass(frozen=True)
class PreviewEntry:
    title: str
    image_url: Optional[str]
    image_alt: Optional[str]
    record: Record


def _text(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value
    return None


def pagination_controls(info: ResultInfo) -> PaginationControls:
    return PaginationControls(prev_url=info.prev, next_url=info.next)


def build_preview_entries(records: List[Record]) -> List[PreviewEntry]:
    return [
        PreviewEntry(
            title=_text(rec.get("title")) or MISSING_TITLE,
            image_url=_text(rec.get("primaryimageurl")),
            image_alt=_text(rec.get("description")),
            record=rec,
        )
        for rec in records
    ]


def page_caption(info: ResultInfo) -> Optional[str]:
    """e.g. "Page 2 / 9 · 180 objects"; None when the API gave no counters."""
    parts: List[str] = []
    if info.page is not None and info.pages is not None:
        parts.append(f"Page {info.page} / {info.pages}")
    if info.totalrecords is not None:
        parts.append(f"{info.totalrecords} objects")
    return " · ".join(parts) or None


def select_entry(entry: PreviewEntry, state: ExplorerState) -> None:
    """Feature `entry` in the detail view. Nothing is fetched."""
    state.set_featured_result(entry.record)
    track_event(
        event="record_featured",
        page="Explorer",
        props={"object_id": entry.record.get("objectid"), "title_sample": entry.title[:60]},
    )


# ============================================================
# Rendering
# ============================================================

def _render_pagination(controls: PaginationControls, state: ExplorerState, client: ExplorerClient) -> None:
    col_prev, col_next = st.columns(2)

    with col_prev:
        if st.button("Previous", key=PREV_KEY, disabled=controls.prev_disabled):
            fire_query(PageQuery(controls.prev_url), state, client)

    with col_next:
        if st.button("Next", key=NEXT_KEY, disabled=controls.next_disabled):
            fire_query(PageQuery(controls.next_url), state, client)


def _render_entry(index: int, entry: PreviewEntry, state: ExplorerState) -> None:
    st.markdown('<div class="object-preview">', unsafe_allow_html=True)

    if entry.image_url:
        st.image(entry.image_url)

    if st.button(entry.title, key=f"preview-entry::{index}", type="tertiary", help=entry.image_alt):
        select_entry(entry, state)

    st.markdown("</div>", unsafe_allow_html=True)


def render_preview(state: ExplorerState, client: ExplorerClient) -> None:
    results = state.search_results

    _render_pagination(pagination_controls(results.info), state, client)

    caption = page_caption(results.info)
    if caption:
        st.caption(caption)

    entries = build_preview_entries(results.records)
    if not entries:
        st.info("No objects match this search.")
        return

    for index, entry in enumerate(entries):
        _render_entry(index, entry, state)
