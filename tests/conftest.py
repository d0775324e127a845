import os
import tempfile

# Keep analytics writes out of the repo's data/ folder.
os.environ.setdefault("EXPLORER_DATA_DIR", tempfile.mkdtemp(prefix="explorer-tests-"))

import pytest  # noqa: E402

from explorer_state import ExplorerState  # noqa: E402


@pytest.fixture()
def session():
    return {}


@pytest.fixture()
def state(session):
    return ExplorerState(session)


@pytest.fixture()
def transitions(state):
    """Every (slot, value) write on `state`, in order."""
    seen = []
    state.subscribe(lambda slot, value: seen.append((slot, value)))
    return seen
