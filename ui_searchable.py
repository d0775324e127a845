"""Clickable attribute values that re-run the search on that value."""

from __future__ import annotations

from dataclasses import dataclass

import streamlit as st

from explorer_state import ExplorerState
from query_runner import ExplorerClient, TermQuery, fire_query

# Fields whose query value is lower-cased before searching.
LOWERCASE_QUERY_FIELDS = ("technique",)


@dataclass(frozen=True)
class AttributeLink:
    field: str
    label: str
    query_value: str


def make_link(field: str, value: str) -> AttributeLink:
    """Shown as `value`; searched as `value` (lower-cased for technique)."""
    query_value = value.lower() if field in LOWERCASE_QUERY_FIELDS else value
    return AttributeLink(field=field, label=value, query_value=query_value)


def render_searchable(link: AttributeLink, state: ExplorerState, client: ExplorerClient, key: str) -> None:
    if st.button(link.label, key=key, type="tertiary", help=f"Search {link.field}: {link.query_value}"):
        fire_query(TermQuery(field=link.field, value=link.query_value), state, client)
