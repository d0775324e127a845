"""
ui_feature.py — detail view for the featured record.

Layout (when a record is featured):

    ### TITLE
    #### DATED
    facts:  LABEL | VALUE      (one row per present field, fixed order)
    photos: every image of the record

Searchable facts (culture, technique, medium, people) render their values
as attribute links; everything else is plain text. A field that is missing,
None, blank or an empty list produces no row at all.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from html import escape
from typing import Any, List, Optional, Tuple

import streamlit as st

from explorer_state import ExplorerState, Record
from query_runner import ExplorerClient
from ui_searchable import AttributeLink, make_link, render_searchable

TEXT = "text"
IMAGE = "image"
LINKS = "links"

# Plain-text facts: (record key, label)
_TEXT_LABELS = {
    "title": "Title",
    "dated": "Dated",
    "description": "Description",
    "style": "Style",
    "dimensions": "Dimensions",
    "department": "Department",
    "division": "Division",
    "contact": "Contact",
    "creditline": "Credit Line",
}

FACT_ORDER: Tuple[str, ...] = (
    "title",
    "dated",
    "primaryimageurl",
    "description",
    "culture",
    "style",
    "technique",
    "medium",
    "dimensions",
    "people",
    "department",
    "division",
    "contact",
    "creditline",
)


@dataclass(frozen=True)
class FactRow:
    key: str
    label: str
    kind: str
    text: Optional[str] = None
    links: List[AttributeLink] = field(default_factory=list)


def _present_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, str):
        return value if value.strip() else None
    return str(value)


def _as_list(value: Any) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def person_name(person: Any) -> Optional[str]:
    """Display name of a people entry, falling back to its name."""
    if not isinstance(person, dict):
        return None
    for key in ("displayname", "name"):
        name = _present_text(person.get(key))
        if name:
            return name
    return None


def image_urls(record: Record) -> List[str]:
    """URLs from `images` (plain strings or objects with baseimageurl)."""
    urls: List[str] = []
    for image in _as_list(record.get("images")):
        url = image.get("baseimageurl") if isinstance(image, dict) else image
        url = _present_text(url)
        if url:
            urls.append(url)
    return urls


def _fact_row(record: Record, key: str) -> Optional[FactRow]:
    if key in _TEXT_LABELS:
        text = _present_text(record.get(key))
        return FactRow(key=key, label=_TEXT_LABELS[key], kind=TEXT, text=text) if text else None

    if key == "primaryimageurl":
        url = _present_text(record.get(key))
        return FactRow(key=key, label="", kind=IMAGE, text=url) if url else None

    if key == "culture":
        values = [v for v in (_present_text(c) for c in _as_list(record.get(key))) if v]
        links = [make_link("culture", v) for v in values]
        return FactRow(key=key, label="Culture", kind=LINKS, links=links) if links else None

    if key in ("technique", "medium"):
        value = _present_text(record.get(key))
        if not value:
            return None
        return FactRow(key=key, label=key.capitalize(), kind=LINKS, links=[make_link(key, value)])

    if key == "people":
        names = [n for n in (person_name(p) for p in _as_list(record.get(key))) if n]
        links = [make_link("people", n) for n in names]
        return FactRow(key=key, label="People", kind=LINKS, links=links) if links else None

    raise KeyError(key)


def build_fact_rows(record: Record) -> List[FactRow]:
    rows = (_fact_row(record, key) for key in FACT_ORDER)
    return [row for row in rows if row is not None]


def feature_header(record: Record) -> Tuple[Optional[str], Optional[str]]:
    return _present_text(record.get("title")), _present_text(record.get("dated"))


# ============================================================
# Rendering
# ============================================================

def _render_fact_row(row: FactRow, state: ExplorerState, client: ExplorerClient) -> None:
    label_col, value_col = st.columns([1, 3])

    with label_col:
        if row.label:
            st.markdown(f'<span class="facts-title">{escape(row.label)}:</span>', unsafe_allow_html=True)

    with value_col:
        if row.kind == TEXT:
            st.markdown(f'<span class="facts-content">{escape(row.text)}</span>', unsafe_allow_html=True)
        elif row.kind == IMAGE:
            st.image(row.text)
        else:
            for index, link in enumerate(row.links):
                render_searchable(link, state, client, key=f"searchable::{row.key}::{index}")


def render_feature(state: ExplorerState, client: ExplorerClient) -> None:
    """Detail view of `state.featured_result`; an empty container when none."""
    container = st.container()
    record = state.featured_result
    if not record:
        return

    with container:
        title, dated = feature_header(record)
        if title:
            st.markdown(f"### {title}")
        if dated:
            st.markdown(f"#### {dated}")

        for row in build_fact_rows(record):
            _render_fact_row(row, state, client)

        photos = image_urls(record)
        if photos:
            st.markdown('<div class="feature-photos-title">Photos</div>', unsafe_allow_html=True)
            cols = st.columns(min(len(photos), 3))
            for index, url in enumerate(photos):
                with cols[index % len(cols)]:
                    st.image(url, caption=title or None)
