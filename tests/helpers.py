import json

import requests

from explorer_state import QueryResultSet, ResultInfo


def make_results(*titles, prev=None, next=None):
    return QueryResultSet(
        info=ResultInfo(prev=prev, next=next),
        records=[{"title": t} for t in titles],
    )


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=None):
        self.status_code = status_code
        self._payload = payload
        self.text = text if text is not None else json.dumps(payload)

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON object could be decoded")
        return self._payload


class FakeSession:
    """Stands in for requests.Session; answers every GET with `responses` in turn."""

    def __init__(self, *responses, error=None):
        self.responses = list(responses)
        self.error = error
        self.urls = []
        self.headers = {}

    def get(self, url, timeout=None):
        self.urls.append(url)
        if self.error is not None:
            raise self.error
        return self.responses.pop(0)


def connection_error():
    return requests.ConnectionError("connection refused")


class FakeClient:
    """
    Query collaborator double.

    Records each call, and the loading flag of `state` as seen from inside
    the call, then returns `result` or raises `error`.
    """

    def __init__(self, result=None, error=None, state=None):
        self.result = result if result is not None else QueryResultSet.empty()
        self.error = error
        self.state = state
        self.calls = []
        self.loading_seen = []

    def _respond(self):
        if self.state is not None:
            self.loading_seen.append(self.state.is_loading)
        if self.error is not None:
            raise self.error
        return self.result

    def fetch_by_term_and_value(self, term, value):
        self.calls.append(("term", term, value))
        return self._respond()

    def fetch_by_url(self, page_url):
        self.calls.append(("url", page_url))
        return self._respond()

    def fetch_query_results(self, century=None, classification=None, keyword=None):
        self.calls.append(("search", century, classification, keyword))
        return self._respond()

    def fetch_all_centuries(self):
        return []

    def fetch_all_classifications(self):
        return []
