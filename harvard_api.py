"""
harvard_api.py — Harvard Art Museums API adapter

Provides the query collaborator used by the Explorer views:

- fetch_query_results(century, classification, keyword) -> QueryResultSet
- fetch_by_term_and_value(term, value) -> QueryResultSet
- fetch_by_url(page_url) -> QueryResultSet
- fetch_all_centuries() / fetch_all_classifications() -> list of names

Data source:
- Object search: https://api.harvardartmuseums.org/object
- Lookup lists:  /century, /classification

Notes:
- Every request carries the API key as the `apikey` query parameter.
- The API returns `info.prev` / `info.next` as complete page URLs
  (key included), so pagination simply GETs them.
- Query results are never cached; only the two lookup lists are.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional
from urllib.parse import quote, urlencode

import requests
import streamlit as st

from config import DEFAULT_API_BASE_URL, DEFAULT_REQUEST_TIMEOUT
from explorer_state import FetchFailure, QueryResultSet


# ============================================================
# Constants
# ============================================================

LOOKUP_PAGE_SIZE = 100

# Form values that mean "no filter"
_ANY_VALUES = {"", "any"}


# ============================================================
# Errors
# ============================================================

class HarvardAPIError(FetchFailure):
    """Raised when the Harvard Art Museums API fails or returns unexpected data."""


# ============================================================
# HTTP session
# ============================================================

def _get_session() -> requests.Session:
    """Configured HTTP session."""
    s = requests.Session()
    s.headers.update({"User-Agent": "HarvardArtExplorer/1.0", "Accept": "application/json"})
    return s


def _get_json(session: requests.Session, url: str, timeout: int) -> Any:
    try:
        resp = session.get(url, timeout=timeout)
    except requests.RequestException as exc:
        raise HarvardAPIError(f"Request failed for {url}: {exc}") from exc

    if not resp.ok:
        raise HarvardAPIError(f"API error ({resp.status_code}) for {url}: {resp.text[:200]}")

    try:
        return resp.json()
    except ValueError as exc:
        raise HarvardAPIError(f"API returned non-JSON for {url}: {resp.text[:200]}") from exc


def _to_result_set(payload: Any, url: str) -> QueryResultSet:
    try:
        return QueryResultSet.from_payload(payload)
    except ValueError as exc:
        raise HarvardAPIError(f"Malformed payload from {url}: {exc}") from exc


# ============================================================
# URL builders
# ============================================================

def build_object_search_url(
    api_key: str,
    century: Optional[str] = None,
    classification: Optional[str] = None,
    keyword: Optional[str] = None,
    base_url: str = DEFAULT_API_BASE_URL,
) -> str:
    """Object search URL; blank or "any" filters are left out."""
    params: Dict[str, str] = {"apikey": api_key}
    for name, value in (("classification", classification), ("century", century), ("keyword", keyword)):
        if isinstance(value, str) and value.strip().lower() not in _ANY_VALUES:
            params[name] = value.strip()
    return f"{base_url}/object?{urlencode(params)}"


def build_term_value_url(
    api_key: str,
    term: str,
    value: str,
    base_url: str = DEFAULT_API_BASE_URL,
) -> str:
    """
    Object search on one field, e.g. /object?apikey=...&culture=Greek

    Hyphen-separated values become "|"-joined alternatives, which the API
    reads as OR.
    """
    alternatives = "|".join(value.split("-"))
    return (
        f"{base_url}/object?{urlencode({'apikey': api_key})}"
        f"&{quote(term, safe='')}={quote(alternatives, safe='|')}"
    )


# ============================================================
# Client
# ============================================================

class HarvardClient:
    """Query collaborator backed by the live API."""

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_API_BASE_URL,
        timeout: int = DEFAULT_REQUEST_TIMEOUT,
    ) -> None:
        if not api_key:
            raise HarvardAPIError("A Harvard Art Museums API key is required (HARVARD_API_KEY).")
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = _get_session()

    def fetch_by_url(self, page_url: str) -> QueryResultSet:
        if not isinstance(page_url, str) or not page_url.strip():
            raise HarvardAPIError("A page URL is required.")
        payload = _get_json(self._session, page_url, self.timeout)
        return _to_result_set(payload, page_url)

    def fetch_by_term_and_value(self, term: str, value: str) -> QueryResultSet:
        url = build_term_value_url(self.api_key, term, value, base_url=self.base_url)
        return self.fetch_by_url(url)

    def fetch_query_results(
        self,
        century: Optional[str] = None,
        classification: Optional[str] = None,
        keyword: Optional[str] = None,
    ) -> QueryResultSet:
        url = build_object_search_url(
            self.api_key,
            century=century,
            classification=classification,
            keyword=keyword,
            base_url=self.base_url,
        )
        return self.fetch_by_url(url)

    def fetch_lookup_names(self, resource: str, sort: str) -> List[str]:
        """Names from a lookup resource such as /century or /classification."""
        params = {"apikey": self.api_key, "size": LOOKUP_PAGE_SIZE, "sort": sort}
        url = f"{self.base_url}/{resource}?{urlencode(params)}"
        payload = _get_json(self._session, url, self.timeout)

        records = payload.get("records") if isinstance(payload, dict) else None
        if not isinstance(records, list):
            raise HarvardAPIError(f"Malformed {resource} list from {url}")

        names: List[str] = []
        for rec in records:
            name = rec.get("name") if isinstance(rec, dict) else None
            if isinstance(name, str) and name.strip():
                names.append(name.strip())
        return names

    def fetch_all_centuries(self) -> List[str]:
        return self.fetch_lookup_names("century", sort="temporalorder")

    def fetch_all_classifications(self) -> List[str]:
        return self.fetch_lookup_names("classification", sort="name")


# ============================================================
# Shared client (one requests.Session per configuration)
# ============================================================

@st.cache_resource(show_spinner=False)
def get_harvard_client(
    api_key: str,
    base_url: str = DEFAULT_API_BASE_URL,
    timeout: int = DEFAULT_REQUEST_TIMEOUT,
) -> HarvardClient:
    return HarvardClient(api_key, base_url=base_url, timeout=timeout)


# ============================================================
# Lookup lists for the search form (cached)
# ============================================================

@st.cache_data(show_spinner=False, ttl=24 * 3600)
def fetch_all_centuries(api_key: str, base_url: str = DEFAULT_API_BASE_URL) -> List[str]:
    """Century names in temporal order (cached for 24h)."""
    return get_harvard_client(api_key, base_url).fetch_all_centuries()


@st.cache_data(show_spinner=False, ttl=24 * 3600)
def fetch_all_classifications(api_key: str, base_url: str = DEFAULT_API_BASE_URL) -> List[str]:
    """Classification names sorted by name (cached for 24h)."""
    return get_harvard_client(api_key, base_url).fetch_all_classifications()
