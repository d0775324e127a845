"""
query_runner.py — the re-query sequence shared by every search control.

Pagination buttons, attribute links and the search form all run the same
bracket around one collaborator call:

    is_loading = True  ->  await fetch  ->  replace results  ->  is_loading = False

The reset in the `finally` block runs on success and on failure, so any
observer of `is_loading` sees exactly one True -> False pair per click.
Failures are logged here and otherwise absorbed: the previous result set
stays on screen and the page remains usable.

Overlapping queries are not coordinated; whichever finishes last wins.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol, Union

import streamlit as st

from analytics import track_event
from explorer_state import ExplorerState, QueryResultSet
from ui_theme import loading_banner

logger = logging.getLogger(__name__)


# ============================================================
# Query descriptors
# ============================================================

@dataclass(frozen=True)
class TermQuery:
    """Search one field for one value (attribute links)."""

    field: str
    value: str


@dataclass(frozen=True)
class PageQuery:
    """Fetch a page cursor returned by the API (pagination)."""

    page_url: str


@dataclass(frozen=True)
class SearchQuery:
    """The page's search form; every filter is optional."""

    century: Optional[str] = None
    classification: Optional[str] = None
    keyword: Optional[str] = None


QueryDescriptor = Union[TermQuery, PageQuery, SearchQuery]


class ExplorerClient(Protocol):
    """What the views need from a query collaborator."""

    def fetch_by_term_and_value(self, term: str, value: str) -> QueryResultSet: ...

    def fetch_by_url(self, page_url: str) -> QueryResultSet: ...

    def fetch_query_results(
        self,
        century: Optional[str] = None,
        classification: Optional[str] = None,
        keyword: Optional[str] = None,
    ) -> QueryResultSet: ...

    def fetch_all_centuries(self) -> List[str]: ...

    def fetch_all_classifications(self) -> List[str]: ...


# ============================================================
# Orchestration
# ============================================================

async def _fetch(descriptor: QueryDescriptor, client: ExplorerClient) -> QueryResultSet:
    # Collaborators are blocking (requests); keep them off the event loop.
    if isinstance(descriptor, TermQuery):
        return await asyncio.to_thread(client.fetch_by_term_and_value, descriptor.field, descriptor.value)
    if isinstance(descriptor, PageQuery):
        return await asyncio.to_thread(client.fetch_by_url, descriptor.page_url)
    if isinstance(descriptor, SearchQuery):
        return await asyncio.to_thread(
            client.fetch_query_results,
            century=descriptor.century,
            classification=descriptor.classification,
            keyword=descriptor.keyword,
        )
    raise TypeError(f"Unknown query descriptor: {descriptor!r}")


async def run_query(descriptor: QueryDescriptor, state: ExplorerState, client: ExplorerClient) -> None:
    """Run one query and publish its result through `state`."""
    state.set_is_loading(True)
    try:
        results = await _fetch(descriptor, client)
        state.set_search_results(results)
    except Exception:
        logger.exception("Query failed for %r; keeping previous results", descriptor)
    finally:
        state.set_is_loading(False)


def run_with_loading_banner(descriptor: QueryDescriptor, state: ExplorerState, client: ExplorerClient) -> None:
    """Blocking `run_query` with a banner placeholder subscribed to the loading flag."""
    placeholder = st.empty()
    unsubscribe = state.subscribe(loading_banner(placeholder))
    try:
        asyncio.run(run_query(descriptor, state, client))
    finally:
        unsubscribe()


def describe(descriptor: QueryDescriptor) -> Dict[str, Any]:
    """Analytics-friendly summary of a descriptor."""
    if isinstance(descriptor, TermQuery):
        return {"kind": "term", "field": descriptor.field, "value_sample": descriptor.value[:60]}
    if isinstance(descriptor, PageQuery):
        return {"kind": "page"}
    return {
        "kind": "search",
        "century": descriptor.century or "any",
        "classification": descriptor.classification or "any",
        "has_keyword": bool(descriptor.keyword),
    }


def fire_query(
    descriptor: QueryDescriptor,
    state: ExplorerState,
    client: ExplorerClient,
    page: str = "Explorer",
) -> None:
    """
    Streamlit entry point for a search-triggering control.

    Runs the query with the loading banner shown, then reruns the script so
    views that were already drawn in this run pick up the new result set.
    """
    track_event(event="query_run", page=page, props=describe(descriptor))

    run_with_loading_banner(descriptor, state, client)

    st.rerun()
