"""
explorer_state.py — data model and shared state container.

The Explorer page owns three slots that every view reads:

- search_results   : the current QueryResultSet (one page of records)
- is_loading       : True while a query started by a view is in flight
- featured_result  : the record shown in the detail view (or None)

ExplorerState stores them in a mutable mapping (Streamlit's session_state
in the app, a plain dict in tests) and is the only writer. Views get the
container and call its setters; they never touch the mapping directly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, MutableMapping, Optional

Record = Dict[str, Any]
Listener = Callable[[str, Any], None]


# ============================================================
# Errors
# ============================================================

class FetchFailure(RuntimeError):
    """A query collaborator could not produce a result set."""


# ============================================================
# Query results
# ============================================================

def _optional_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    return None


def _optional_url(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


@dataclass(frozen=True)
class ResultInfo:
    """Pagination cursors (plus counters when the API reports them)."""

    prev: Optional[str] = None
    next: Optional[str] = None
    page: Optional[int] = None
    pages: Optional[int] = None
    totalrecords: Optional[int] = None

    @classmethod
    def from_payload(cls, payload: Any) -> "ResultInfo":
        if payload is None:
            return cls()
        if not isinstance(payload, dict):
            raise ValueError(f"info must be an object, got {type(payload).__name__}")
        return cls(
            prev=_optional_url(payload.get("prev")),
            next=_optional_url(payload.get("next")),
            page=_optional_int(payload.get("page")),
            pages=_optional_int(payload.get("pages")),
            totalrecords=_optional_int(payload.get("totalrecords")),
        )


@dataclass(frozen=True)
class QueryResultSet:
    """One page of matching records plus its pagination cursors."""

    info: ResultInfo = field(default_factory=ResultInfo)
    records: List[Record] = field(default_factory=list)

    @classmethod
    def empty(cls) -> "QueryResultSet":
        return cls()

    @classmethod
    def from_payload(cls, payload: Any) -> "QueryResultSet":
        """
        Parse a raw API payload ({"info": {...}, "records": [...]}).

        Raises ValueError when the payload does not have that shape.
        """
        if not isinstance(payload, dict):
            raise ValueError(f"payload must be an object, got {type(payload).__name__}")

        records = payload.get("records")
        if records is None:
            records = []
        if not isinstance(records, list):
            raise ValueError("records must be a list")
        for rec in records:
            if not isinstance(rec, dict):
                raise ValueError("every record must be an object")

        return cls(info=ResultInfo.from_payload(payload.get("info")), records=list(records))


# ============================================================
# State container
# ============================================================

SEARCH_RESULTS = "search_results"
IS_LOADING = "is_loading"
FEATURED_RESULT = "featured_result"

_KEY_PREFIX = "explorer."


@dataclass(frozen=True)
class ExplorerSnapshot:
    """Read-only view of the three slots at one point in time."""

    search_results: Optional[QueryResultSet]
    is_loading: bool
    featured_result: Optional[Record]


class ExplorerState:
    """
    Single writer for the shared Explorer slots.

    `clear_feature_on_new_results` decides what happens to the featured
    record when a new result set arrives: False keeps it (it may then be
    absent from the list), True clears it.
    """

    def __init__(
        self,
        session: MutableMapping[str, Any],
        clear_feature_on_new_results: bool = False,
    ) -> None:
        self._session = session
        self.clear_feature_on_new_results = clear_feature_on_new_results
        self._listeners: List[Listener] = []

    # --------------------------------------------------------
    # Change notification
    # --------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call `listener(slot, value)` after every write; returns an unsubscribe."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _write(self, slot: str, value: Any) -> None:
        self._session[_KEY_PREFIX + slot] = value
        for listener in list(self._listeners):
            listener(slot, value)

    # --------------------------------------------------------
    # Slots
    # --------------------------------------------------------

    def has_search_results(self) -> bool:
        return self._session.get(_KEY_PREFIX + SEARCH_RESULTS) is not None

    @property
    def search_results(self) -> QueryResultSet:
        results = self._session.get(_KEY_PREFIX + SEARCH_RESULTS)
        if results is None:
            raise LookupError("search results were never initialized by the page")
        return results

    def set_search_results(self, results: QueryResultSet) -> None:
        self._write(SEARCH_RESULTS, results)
        if self.clear_feature_on_new_results and self.featured_result is not None:
            self.set_featured_result(None)

    @property
    def is_loading(self) -> bool:
        return bool(self._session.get(_KEY_PREFIX + IS_LOADING, False))

    def set_is_loading(self, value: bool) -> None:
        self._write(IS_LOADING, bool(value))

    @property
    def featured_result(self) -> Optional[Record]:
        return self._session.get(_KEY_PREFIX + FEATURED_RESULT)

    def set_featured_result(self, record: Optional[Record]) -> None:
        self._write(FEATURED_RESULT, record)

    def snapshot(self) -> ExplorerSnapshot:
        return ExplorerSnapshot(
            search_results=self._session.get(_KEY_PREFIX + SEARCH_RESULTS),
            is_loading=self.is_loading,
            featured_result=self.featured_result,
        )
