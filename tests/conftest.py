import pytest

from mica.interpreter import Interpreter
from mica.runtime_context import set_max_depth


@pytest.fixture(autouse=True)
def _reset_depth_limit(monkeypatch):
    # Every test starts from the default limit, whatever a previous test set.
    monkeypatch.delenv("MICA_MAX_DEPTH", raising=False)
    set_max_depth(None)
    yield
    set_max_depth(None)


@pytest.fixture
def echoed():
    """Collects everything passed to echo."""
    return []


@pytest.fixture
def interp(echoed):
    return Interpreter(output=echoed.append)
