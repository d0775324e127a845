# local_collection.py

"""
Local collection backend for Harvard Art Explorer (offline mode).

Instead of querying the online API, this module loads a small collection of
Harvard-shaped object records from a JSON file and answers the same queries
as harvard_api.HarvardClient: keyword search with century/classification
filters, term/value search, and page URLs.

Page cursors are synthetic URLs of the form

    local://collection?keyword=vase&page=2

so the views paginate exactly as they do against the live API.

Expected file format (data/collection_sample.json):

[
  {
    "objectid": 1,
    "title": "Amphora",
    "dated": "c. 530 BCE",
    "century": "6th century BCE",
    "classification": "Vessels",
    "culture": "Greek",
    "technique": "Black-figure",
    "medium": "Terracotta",
    "people": [{"name": "Exekias", "displayname": "Exekias"}],
    "primaryimageurl": "https://...",     # optional
    ...
  },
  ...
]
"""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional
from urllib.parse import parse_qs, urlencode, urlsplit

from app_paths import SAMPLE_COLLECTION_FILE
from config import DEFAULT_PAGE_SIZE
from explorer_state import FetchFailure, QueryResultSet, Record, ResultInfo

LOCAL_SCHEME = "local"
LOCAL_HOST = "collection"

_ANY_VALUES = {"", "any"}


@lru_cache(maxsize=4)
def load_collection(path_str: str = str(SAMPLE_COLLECTION_FILE)) -> List[Record]:
    """
    Load the local collection from the JSON file.

    Accepts a list of records or a dict (id -> record). A missing file gives
    an empty collection; an unreadable one raises FetchFailure.
    """
    path = Path(path_str)
    if not path.exists():
        return []

    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as exc:
        raise FetchFailure(f"Could not read local collection {path}: {exc}") from exc

    if isinstance(data, list):
        return [item for item in data if isinstance(item, dict)]
    if isinstance(data, dict):
        return [item for item in data.values() if isinstance(item, dict)]
    return []


def _normalize_text(value: Any) -> str:
    if isinstance(value, str):
        return value.lower()
    return ""


def _as_list(value: Any) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def _person_names(art: Record) -> List[str]:
    names: List[str] = []
    for person in _as_list(art.get("people")):
        if not isinstance(person, dict):
            continue
        for key in ("displayname", "name"):
            name = person.get(key)
            if isinstance(name, str) and name.strip():
                names.append(name.strip())
    return names


def _matches_keyword(art: Record, keyword: Optional[str]) -> bool:
    """
    Keyword search over title, description, culture, people, medium and
    technique.
    """
    q = (keyword or "").strip().lower()
    if not q:
        return True

    fields: List[str] = [
        _normalize_text(art.get(key)) for key in ("title", "description", "medium", "technique")
    ]
    fields.extend(_normalize_text(c) for c in _as_list(art.get("culture")))
    fields.extend(_normalize_text(n) for n in _person_names(art))

    return q in " | ".join(fields)


def _matches_filter(art: Record, key: str, wanted: Optional[str]) -> bool:
    if not isinstance(wanted, str) or wanted.strip().lower() in _ANY_VALUES:
        return True
    return _normalize_text(art.get(key)) == wanted.strip().lower()


def _matches_term(art: Record, term: str, value: str) -> bool:
    """Term/value search; hyphen-separated parts also match on their own."""
    whole = value.strip().lower()
    wanted = [whole] + [v.strip().lower() for v in value.split("-") if v.strip() and v.strip().lower() != whole]
    if not whole:
        return False

    if term == "culture":
        have = [_normalize_text(c) for c in _as_list(art.get("culture"))]
        return any(w in have for w in wanted)

    if term == "people":
        have = [n.lower() for n in _person_names(art)]
        return any(w in have for w in wanted)

    text = _normalize_text(art.get(term))
    return any(w in text for w in wanted)


def _page_url(params: Dict[str, str], page: int) -> str:
    query = dict(params)
    query["page"] = str(page)
    return f"{LOCAL_SCHEME}://{LOCAL_HOST}?{urlencode(query)}"


def _paginate(matches: List[Record], params: Dict[str, str], page: int, page_size: int) -> QueryResultSet:
    if page_size <= 0:
        page_size = DEFAULT_PAGE_SIZE

    total = len(matches)
    pages = max(1, (total + page_size - 1) // page_size)
    page = min(max(page, 1), pages)

    start = (page - 1) * page_size
    info = ResultInfo(
        prev=_page_url(params, page - 1) if page > 1 else None,
        next=_page_url(params, page + 1) if page < pages else None,
        page=page,
        pages=pages,
        totalrecords=total,
    )
    return QueryResultSet(info=info, records=matches[start:start + page_size])


def search_collection(
    keyword: Optional[str] = None,
    century: Optional[str] = None,
    classification: Optional[str] = None,
    page: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
    path: Path = SAMPLE_COLLECTION_FILE,
) -> QueryResultSet:
    """Keyword search with optional century/classification filters."""
    matches = [
        art for art in load_collection(str(path))
        if _matches_keyword(art, keyword)
        and _matches_filter(art, "century", century)
        and _matches_filter(art, "classification", classification)
    ]

    params: Dict[str, str] = {}
    for name, value in (("keyword", keyword), ("century", century), ("classification", classification)):
        if isinstance(value, str) and value.strip().lower() not in _ANY_VALUES:
            params[name] = value.strip()

    return _paginate(matches, params, page, page_size)


def search_by_term(
    term: str,
    value: str,
    page: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
    path: Path = SAMPLE_COLLECTION_FILE,
) -> QueryResultSet:
    matches = [art for art in load_collection(str(path)) if _matches_term(art, term, value)]
    return _paginate(matches, {"term": term, "value": value}, page, page_size)


def _distinct(key: str, path: Path) -> List[str]:
    seen: List[str] = []
    for art in load_collection(str(path)):
        value = art.get(key)
        if isinstance(value, str) and value.strip() and value.strip() not in seen:
            seen.append(value.strip())
    return sorted(seen)


class LocalCollectionClient:
    """Query collaborator backed by the bundled JSON collection."""

    def __init__(self, path: Path = SAMPLE_COLLECTION_FILE, page_size: int = DEFAULT_PAGE_SIZE) -> None:
        self.path = Path(path)
        self.page_size = page_size

    def fetch_query_results(
        self,
        century: Optional[str] = None,
        classification: Optional[str] = None,
        keyword: Optional[str] = None,
    ) -> QueryResultSet:
        return search_collection(
            keyword=keyword,
            century=century,
            classification=classification,
            page_size=self.page_size,
            path=self.path,
        )

    def fetch_by_term_and_value(self, term: str, value: str) -> QueryResultSet:
        return search_by_term(term, value, page_size=self.page_size, path=self.path)

    def fetch_by_url(self, page_url: str) -> QueryResultSet:
        parts = urlsplit(page_url or "")
        if parts.scheme != LOCAL_SCHEME or parts.netloc != LOCAL_HOST:
            raise FetchFailure(f"Not a local collection URL: {page_url!r}")

        query = {k: v[0] for k, v in parse_qs(parts.query).items() if v}
        try:
            page = int(query.get("page", "1"))
        except ValueError as exc:
            raise FetchFailure(f"Invalid page in {page_url!r}") from exc

        if "term" in query:
            return search_by_term(
                query["term"], query.get("value", ""), page=page, page_size=self.page_size, path=self.path
            )
        return search_collection(
            keyword=query.get("keyword"),
            century=query.get("century"),
            classification=query.get("classification"),
            page=page,
            page_size=self.page_size,
            path=self.path,
        )

    def fetch_all_centuries(self) -> List[str]:
        return _distinct("century", self.path)

    def fetch_all_classifications(self) -> List[str]:
        return _distinct("classification", self.path)
